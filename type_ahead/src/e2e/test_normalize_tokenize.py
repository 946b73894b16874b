# src/e2e/test_normalize_tokenize.py
import pytest

from typeahead.match import is_match
from typeahead.models import PipelineConfig
from typeahead.normalize import latinize, normalize_query, normalize_text, tokenize


@pytest.mark.parametrize("raw, expected", [
    ("súper", "super"),
    ("Café con leche", "Cafe con leche"),
    ("naïve", "naive"),
    ("Straße", "Strasse"),
    ("Ørsted", "Orsted"),
    ("plain", "plain"),
])
def test_latinize_maps_to_base_letters(raw, expected):
    assert latinize(raw) == expected


def test_spaced_letters_tokenize_and_match_california():
    q = normalize_query("C a l i f o r n i a", PipelineConfig())
    assert q == ("c", "a", "l", "i", "f", "o", "r", "n", "i", "a")
    assert is_match(normalize_text("California"), q)


def test_double_quoted_phrase_is_one_token():
    assert normalize_query('"New York" City', PipelineConfig()) == ("new york", "city")


def test_single_quoted_phrase_is_one_token():
    assert normalize_query("'San José' ca", PipelineConfig()) == ("san jose", "ca")


def test_repeated_delimiters_yield_no_empty_tokens():
    assert tokenize("a   b ", " ", "'\"") == ("a", "b")
    assert tokenize("", " ", "'\"") == ()
    assert tokenize("   ", " ", "'\"") == ()


def test_unclosed_quote_falls_back_to_words():
    assert tokenize('"new york', " ", '"') == ("new", "york")


def test_quote_inside_word_is_kept():
    assert tokenize("don't stop", " ", "'\"") == ("don't", "stop")
    assert tokenize("o'b", " ", "'\"") == ("o'b",)


def test_custom_word_delimiters_without_phrases():
    assert tokenize("a,b;c", ",;", "") == ("a", "b", "c")


def test_no_word_delimiters_keeps_whole_text():
    assert tokenize("new york", "", '"') == ("new york",)


def test_single_words_off_returns_one_lowercase_string():
    cfg = PipelineConfig(single_words=False)
    assert normalize_query("New  YORK", cfg) == "new  york"


def test_latinize_off_keeps_accents():
    cfg = PipelineConfig(latinize=False, single_words=False)
    assert normalize_query("Café", cfg) == "café"


def test_normalize_text_coerces_non_strings():
    assert normalize_text(None) == ""
    assert normalize_text(42) == "42"


@pytest.mark.parametrize("raw", ['"New York" City', "C a l i f", "Crème BRÛLÉE", "x  y"])
def test_normalization_is_idempotent(raw):
    once = normalize_text(raw)
    assert normalize_text(once) == once
    assert tokenize(normalize_text(once)) == tokenize(once)


def test_quotes_are_stripped_from_phrases_and_word_edges_only():
    assert tokenize('"it\'s" here', " ", "'\"") == ("its", "here")
    assert tokenize("rock 'n roll", " ", "'") == ("rock", "n", "roll")
