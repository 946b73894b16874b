# typeahead/models.py
"""
Data models for the typeahead pipeline.

This module defines small, focused containers:

- MatchEntry: one row of a finished result list (suggestion or group header).
- OrderSpec: the optional field/direction used to order candidates.
- PipelineConfig: the bundle of options recognized by the pipeline.
- PipelineState: the states of the ResultPipeline state machine.

These classes carry no matching logic; normalize/match/order/group do the work.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, fields as dc_fields
from typing import Any, Callable, Dict, Mapping, Optional, Union

from . import config as CFG

# An option is either a plain string or an opaque record (dict, object, ...)
Option = Any

# A field is either a dot-path ("address.city", "tags[0]", "label()") or a
# typed accessor returning the field as a string, or None when it is missing.
FieldAccessor = Callable[[Option], Optional[str]]
FieldSpec = Union[str, FieldAccessor, None]


@dataclass(frozen=True, slots=True)
class MatchEntry:
    """
    One entry of the list handed to the renderer.

    Attributes
    ----------
    item : Option
        The source option for a suggestion, or the group name for a header.
    value : str
        The display string extracted from ``item`` via the option field.
    is_group_header : bool
        True for the synthetic, non-selectable label that opens a group.
    """
    item: Option
    value: str
    is_group_header: bool = False

    def is_header(self) -> bool:
        return self.is_group_header

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class OrderSpec:
    """Field and direction for ordering; ``field`` is unused for string options."""
    field: Optional[str] = None
    direction: str = "asc"


class PipelineState(enum.Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    AWAITING_SOURCE = "awaiting_source"
    PRESENTING = "presenting"
    HIDDEN = "hidden"


# camelCase option names accepted by PipelineConfig.from_mapping()
_ALIASES: Dict[str, str] = {
    "minLength": "min_length",
    "waitMs": "wait_ms",
    "optionsLimit": "options_limit",
    "optionField": "option_field",
    "groupField": "group_field",
    "orderBy": "order_by",
    "singleWords": "single_words",
    "wordDelimiters": "word_delimiters",
    "phraseDelimiters": "phrase_delimiters",
    "async": "is_async",
    "cancelOnFocusLost": "cancel_on_focus_lost",
    "cancelRequestOnFocusLost": "cancel_on_focus_lost",
}


@dataclass(frozen=True)
class PipelineConfig:
    """
    Options recognized by the pipeline, with defaults taken from ``config``.

    Attributes
    ----------
    min_length : int
        Input shorter than this (after trimming) is not dispatched. ``0``
        dispatches immediately, including the empty string on focus.
    wait_ms : int
        Debounce window in milliseconds.
    options_limit : int
        Candidates are truncated to this many before ordering and grouping.
    option_field : FieldSpec
        Field used for display and matching; ``None`` means the option itself.
    group_field : FieldSpec
        Field used to group matches; ``None`` disables grouping.
    order_by : OrderSpec | Mapping | None
        Ordering of the limited candidates; ``None`` keeps source order.
        Malformed values are reported when ordering, not here.
    latinize : bool
        Fold diacritics before matching (``súper`` matches ``super``).
    single_words : bool
        Tokenize the query and require every token (AND) instead of one substring.
    word_delimiters, phrase_delimiters : str
        Characters that split tokens, and characters that quote a phrase.
    is_async : bool | None
        Force the source variant; ``None`` picks it from the source's shape.
    cancel_on_focus_lost : bool
        Do not present results that resolve after focus was lost.
    """
    min_length: int = CFG.MIN_LENGTH
    wait_ms: int = CFG.WAIT_MS
    options_limit: int = CFG.OPTIONS_LIMIT
    option_field: FieldSpec = None
    group_field: FieldSpec = None
    order_by: Any = None
    latinize: bool = CFG.LATINIZE
    single_words: bool = CFG.SINGLE_WORDS
    word_delimiters: str = CFG.WORD_DELIMITERS
    phrase_delimiters: str = CFG.PHRASE_DELIMITERS
    is_async: Optional[bool] = None
    cancel_on_focus_lost: bool = CFG.CANCEL_ON_FOCUS_LOST

    def __post_init__(self) -> None:
        if int(self.options_limit) < 1:
            raise ValueError(f"options_limit must be >= 1, got {self.options_limit!r}")
        if int(self.min_length) < 0:
            raise ValueError(f"min_length must be >= 0, got {self.min_length!r}")
        if self.wait_ms < 0:
            raise ValueError(f"wait_ms must be >= 0, got {self.wait_ms!r}")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "PipelineConfig":
        """Build a config from snake_case or camelCase keys; unknown keys are an error."""
        known = {f.name for f in dc_fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in mapping.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown typeahead option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)
