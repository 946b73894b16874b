from __future__ import annotations
import re
import unicodedata
from functools import lru_cache
from typing import Optional, Tuple, Union

from .models import FieldAccessor, Option, PipelineConfig

# A normalized query is one lowercase string, or a tuple of tokens when tokenized
NormalizedQuery = Union[str, Tuple[str, ...]]

# Letters that carry no combining mark in NFD and would survive stripping
_LATIN_EXTRA = str.maketrans({
    "ß": "ss", "ẞ": "SS",
    "æ": "ae", "Æ": "AE",
    "œ": "oe", "Œ": "OE",
    "ø": "o", "Ø": "O",
    "đ": "d", "Đ": "D",
    "ð": "d", "Ð": "D",
    "ł": "l", "Ł": "L",
    "ħ": "h", "Ħ": "H",
    "ŧ": "t", "Ŧ": "T",
    "þ": "th", "Þ": "TH",
    "ı": "i",
})


def latinize(text: str) -> str:
    """Map accented letters to their base ASCII letter (é -> e, ø -> o, ß -> ss)."""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return unicodedata.normalize("NFC", stripped).translate(_LATIN_EXTRA)


def normalize_text(text: object, *, latinize_text: bool = True) -> str:
    """Latinize (optionally), coerce to str and lowercase. No tokenization."""
    s = "" if text is None else str(text)
    if latinize_text:
        s = latinize(s)
    return s.lower()


@lru_cache(maxsize=32)
def _token_pattern(word_delimiters: str, phrase_delimiters: str) -> re.Pattern:
    alts = []
    if phrase_delimiters:
        p = re.escape(phrase_delimiters)
        alts.append(rf"(?P<q>[{p}])(?P<phrase>.+?)(?P=q)")
    if word_delimiters:
        w = re.escape(word_delimiters)
        alts.append(rf"(?P<word>[^{w}]+)")
    else:
        alts.append(r"(?P<word>.+)")
    return re.compile("|".join(alts), re.DOTALL)


def tokenize(text: str,
             word_delimiters: str = " ",
             phrase_delimiters: str = "'\"") -> Tuple[str, ...]:
    """
    Split ``text`` on any word delimiter, keeping quoted phrases whole.

    '"New York" City' -> ('New York', 'City'). A phrase loses its quote
    characters; a bare word keeps inner ones ("don't" stays "don't") and only
    sheds an unmatched quote at its edges. Empty tokens are dropped.
    """
    pattern = _token_pattern(word_delimiters, phrase_delimiters)
    tokens = []
    for m in pattern.finditer(text):
        phrase = m.groupdict().get("phrase")
        if phrase is not None:
            token = "".join(ch for ch in phrase if ch not in phrase_delimiters)
        else:
            token = m.group("word").strip(phrase_delimiters)
        if token:
            tokens.append(token)
    return tuple(tokens)


def normalize_query(text: object, config: PipelineConfig) -> NormalizedQuery:
    """Steps in fixed order: latinize, lowercase, then tokenize when single_words is on."""
    query = normalize_text(text, latinize_text=config.latinize)
    if config.single_words:
        return tokenize(query, config.word_delimiters, config.phrase_delimiters)
    return query


def normalize_option(option: Option, accessor: FieldAccessor, config: PipelineConfig) -> Optional[str]:
    """The option's match field, latinized and lowercased; None when the field is missing."""
    value = accessor(option)
    if value is None:
        return None
    return normalize_text(value, latinize_text=config.latinize)
