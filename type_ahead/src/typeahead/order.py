from __future__ import annotations
import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Tuple

from .fields import value_from_object
from .models import Option, OrderSpec

log = logging.getLogger(__name__)

_DIRECTIONS = ("asc", "desc")


def _unpack(order_by: Any) -> Optional[Tuple[Any, Any]]:
    """(field, direction) from an OrderSpec or a mapping; None when malformed."""
    if isinstance(order_by, OrderSpec):
        return order_by.field, order_by.direction
    if isinstance(order_by, Mapping):
        if "field" not in order_by and "direction" not in order_by:
            return None
        return order_by.get("field"), order_by.get("direction")
    return None


def order_matches(options: Sequence[Option], order_by: Any) -> Sequence[Option]:
    """
    Return ``options`` sorted per ``order_by`` (stable; equal keys keep input order).

    Configuration problems are logged and the input is returned unchanged:
      * order_by is not an OrderSpec/mapping, or has neither field nor direction
      * direction is not "asc" or "desc"
      * options are records and field is not a non-empty string
    Plain string options are sorted by themselves and ignore ``field``.
    """
    if not options or order_by is None:
        return options

    unpacked = _unpack(order_by)
    if unpacked is None:
        log.error("order_by must set field and direction, got %r", order_by)
        return options

    field, direction = unpacked
    if direction not in _DIRECTIONS:
        log.error("order_by direction has to be 'asc' or 'desc', got %r", direction)
        return options

    descending = direction == "desc"

    if isinstance(options[0], str):
        return sorted(options, key=str, reverse=descending)

    if not field or not isinstance(field, str):
        log.error("order_by field has to be a non-empty string for record options, got %r", field)
        return options

    def _key(option: Option) -> str:
        # a missing field sorts as the empty string
        value = value_from_object(option, field)
        return "" if value is None else value

    ordered: List[Option] = sorted(options, key=_key, reverse=descending)
    return ordered
