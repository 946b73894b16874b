import asyncio
import json
from pathlib import Path

import pytest

from typeahead.engine import Engine
from typeahead.loader import load_options
from typeahead.models import OrderSpec, PipelineConfig


def _seed(tmp: Path) -> str:
    root = tmp / "Options"; root.mkdir()
    (root / "a_states.txt").write_text("Alabama\nAlaska\n\nArizona\n", encoding="utf-8")
    (root / "b_cities.json").write_text(json.dumps([
        {"name": "Montréal", "country": "CA"},
        {"name": "Austin", "country": "US"},
        {"name": "Albany", "country": "US"},
    ]), encoding="utf-8")
    (root / "c_more.jsonl").write_text('"Alberta"\n\n"Ontario"\n', encoding="utf-8")
    (root / "ignored.csv").write_text("Alabaster\n", encoding="utf-8")
    return str(root)


@pytest.mark.e2e
def test_load_options_reads_all_formats_in_name_order(tmp_path: Path):
    opts = load_options([_seed(tmp_path)])
    assert opts[:3] == ["Alabama", "Alaska", "Arizona"]
    assert opts[3]["name"] == "Montréal"
    assert opts[-2:] == ["Alberta", "Ontario"]
    assert "Alabaster" not in opts


@pytest.mark.e2e
def test_load_options_errors(tmp_path: Path):
    with pytest.raises(ValueError):
        load_options([])
    with pytest.raises(FileNotFoundError):
        load_options([str(tmp_path / "nope")])
    bad = tmp_path / "bad.json"; bad.write_text('{"not": "a list"}', encoding="utf-8")
    with pytest.raises(ValueError):
        load_options([str(bad)])
    broken = tmp_path / "broken.jsonl"; broken.write_text('"ok"\n{oops\n', encoding="utf-8")
    with pytest.raises(ValueError):
        load_options([str(broken)])
    other = tmp_path / "x.csv"; other.write_text("a\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_options([str(other)])


@pytest.mark.e2e
def test_engine_load_and_complete_with_records(tmp_path: Path):
    root = tmp_path / "Cities"; root.mkdir()
    (root / "cities.json").write_text(json.dumps([
        {"name": "Montréal", "country": "CA"},
        {"name": "Austin", "country": "US"},
        {"name": "Albany", "country": "US"},
        {"name": "Toronto", "country": "CA"},
    ]), encoding="utf-8")
    cfg = PipelineConfig(option_field="name", group_field="country",
                         order_by=OrderSpec(field="name", direction="asc"))
    eng = Engine()
    try:
        eng.load([str(root)], config=cfg)
        assert eng.option_count == 4
        rows = eng.complete("montre")
        assert [r.value for r in rows] == ["CA", "Montréal"]
        rows = eng.complete("a")
        assert [(r.value, r.is_group_header) for r in rows] == [
            ("US", True), ("Albany", False), ("Austin", False),
            ("CA", True), ("Montréal", False),
        ]
        assert len(eng.complete("a", top_k=2)) == 2
        assert eng.complete("   ") == ()
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_engine_misuse_raises():
    eng = Engine()
    with pytest.raises(RuntimeError):
        eng.complete("a")
    with pytest.raises(RuntimeError):
        eng.pipeline()
    with pytest.raises(ValueError):
        eng.build()
    with pytest.raises(ValueError):
        eng.load([])

    async def provider(q):
        return [q]

    eng.build(provider=provider)
    with pytest.raises(RuntimeError):
        eng.complete("a")
    eng.shutdown()


@pytest.mark.e2e
def test_engine_pipeline_with_provider_and_shutdown():
    async def provider(q):
        await asyncio.sleep(0)
        return [f"{q} one", f"{q} two"]

    async def scenario():
        eng = Engine()
        eng.build(provider=provider, config=PipelineConfig(wait_ms=5))
        seen = []
        p = eng.pipeline(on_matches=seen.append)
        p.on_keystroke("hey")
        await p.settle()
        eng.shutdown()
        return p, seen

    p, seen = asyncio.run(scenario())
    assert [e.value for e in seen[-1]] == ["hey one", "hey two"]
    assert p.closed
