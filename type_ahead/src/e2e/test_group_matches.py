import dataclasses

import pytest

from typeahead.group import group_matches, to_entries
from typeahead.models import MatchEntry, OrderSpec, PipelineConfig
from typeahead.pipeline import prepare_matches


def _shape(entries):
    return [("#" + e.value) if e.is_header() else e.value for e in entries]


def test_headers_follow_first_seen_order():
    opts = [{"g": "b", "n": "1"}, {"g": "a", "n": "2"}, {"g": "b", "n": "3"}]
    out = group_matches(opts, "g", "n")
    assert _shape(out) == ["#b", "1", "3", "#a", "2"]
    header = out[0]
    assert header.item == header.value == "b" and header.is_group_header


def test_without_group_field_every_option_is_an_entry():
    opts = [{"n": "x"}, {"n": "y"}]
    out = group_matches(opts, None, "n")
    assert out == to_entries(opts, "n")
    assert [e.is_group_header for e in out] == [False, False]
    assert out[0].item is opts[0]


def test_missing_group_value_falls_into_empty_group():
    out = group_matches([{"n": "x"}, {"g": "a", "n": "y"}], "g", "n")
    assert _shape(out) == ["#", "x", "#a", "y"]


def test_limit_is_applied_before_grouping():
    opts = [{"g": "x", "n": "1"}, {"g": "y", "n": "2"}, {"g": "x", "n": "3"}]
    cfg = PipelineConfig(options_limit=2, group_field="g", option_field="n")
    assert _shape(prepare_matches(opts, cfg)) == ["#x", "1", "#y", "2"]


def test_ordering_runs_on_the_limited_collection_before_grouping():
    opts = [
        {"g": "fruit", "n": "pear"},
        {"g": "veg", "n": "leek"},
        {"g": "fruit", "n": "apple"},
        {"g": "veg", "n": "bean"},  # cut by the limit
    ]
    cfg = PipelineConfig(options_limit=3, group_field="g", option_field="n",
                         order_by=OrderSpec(field="n", direction="asc"))
    assert _shape(prepare_matches(opts, cfg)) == ["#fruit", "apple", "pear", "#veg", "leek"]


def test_entries_are_immutable():
    entry = MatchEntry("a", "a")
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.value = "b"
    assert str(entry) == "a"
    assert isinstance(prepare_matches(["a"], PipelineConfig()), tuple)
