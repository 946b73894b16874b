from __future__ import annotations
from typing import Optional

from .normalize import NormalizedQuery


def is_match(option_value: Optional[str], query: NormalizedQuery) -> bool:
    """
    Substring test on already-normalized text.

    Token query: every non-empty token must occur in ``option_value`` (AND, any
    order); an empty token tuple matches everything. String query: one substring.
    A missing option value (None) never matches.
    """
    if option_value is None:
        return False
    if isinstance(query, str):
        return query in option_value
    return all(token in option_value for token in query if token)
