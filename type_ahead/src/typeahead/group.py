from __future__ import annotations
from typing import Dict, List, Sequence, Tuple

from .fields import display_value, make_accessor
from .models import FieldSpec, MatchEntry, Option


def to_entries(options: Sequence[Option], option_field: FieldSpec = None) -> Tuple[MatchEntry, ...]:
    """One non-header MatchEntry per option, in order."""
    accessor = make_accessor(option_field)
    return tuple(MatchEntry(option, display_value(option, accessor)) for option in options)


def group_matches(options: Sequence[Option],
                  group_field: FieldSpec,
                  option_field: FieldSpec = None) -> Tuple[MatchEntry, ...]:
    """
    Flatten ``options`` into header + members runs, groups in first-seen order.

    ``options`` must already be limited and ordered; members keep their
    relative order inside each group. Options without a group value fall into
    the "" group. Without a ``group_field`` this is just to_entries().
    """
    if group_field is None:
        return to_entries(options, option_field)

    group_of = make_accessor(group_field)
    value_of = make_accessor(option_field)

    # dict keeps insertion order -> first-seen group order
    buckets: Dict[str, List[MatchEntry]] = {}
    for option in options:
        key = group_of(option) or ""
        buckets.setdefault(key, []).append(MatchEntry(option, display_value(option, value_of)))

    out: List[MatchEntry] = []
    for group, members in buckets.items():
        out.append(MatchEntry(group, group, True))
        out.extend(members)
    return tuple(out)
