from __future__ import annotations
import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any, List, Optional

from .models import FieldAccessor, FieldSpec, Option

# "tags[0].name" -> "tags.0.name"
_BRACKETS = re.compile(r"\[(\w+)\]")
_MISSING = object()

log = logging.getLogger(__name__)


def _split_path(path: str) -> List[str]:
    flat = _BRACKETS.sub(r".\1", path)
    if flat.startswith("."):
        flat = flat[1:]
    return [p for p in flat.split(".") if p]


def _step(obj: Any, key: str) -> Any:
    """Resolve one path segment on a mapping, a sequence, or an attribute."""
    if isinstance(obj, Mapping):
        return obj.get(key, _MISSING)
    if isinstance(obj, Sequence) and not isinstance(obj, str) and key.isdigit():
        idx = int(key)
        return obj[idx] if idx < len(obj) else _MISSING
    return getattr(obj, key, _MISSING)


def value_from_object(option: Option, path: Optional[str]) -> Optional[str]:
    """
    Read ``path`` from ``option`` and return it as a string, or None on a miss.

    Plain strings (and any option when no path is given) stand for themselves.
    A trailing ``()`` on a segment calls that member with no arguments. Any
    error raised while walking the path (a getter, a call) counts as a miss.
    """
    if option is None:
        return None
    if not path or isinstance(option, str):
        return str(option)

    obj: Any = option
    for segment in _split_path(path):
        call = segment.endswith("()")
        key = segment[:-2] if call else segment
        try:
            obj = _step(obj, key)
            if obj is _MISSING or obj is None:
                return None
            if call:
                if not callable(obj):
                    return None
                obj = obj()
        except Exception:
            log.debug("Field %r unreadable on %s", path, type(option).__name__, exc_info=True)
            return None
        if obj is None:
            return None
    return str(obj)


def make_accessor(field: FieldSpec) -> FieldAccessor:
    """Turn a dot-path or a callable into a typed accessor ``option -> str | None``."""
    if field is None or isinstance(field, str):
        path = field
        return lambda option: value_from_object(option, path)
    if callable(field):
        def _call(option: Option) -> Optional[str]:
            try:
                value = field(option)
            except Exception:
                log.debug("Field accessor failed on %s", type(option).__name__, exc_info=True)
                return None
            return None if value is None else str(value)
        return _call
    raise TypeError(f"field must be a path string or a callable, got {type(field).__name__}")


def display_value(option: Option, accessor: FieldAccessor) -> str:
    """The display string: the field when present, else the option's own text."""
    value = accessor(option)
    return str(option) if value is None else value
