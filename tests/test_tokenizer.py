"""Tests for the dictionary-literal tokenizer."""

from __future__ import annotations

import pytest

from sysconfigdata.errors import (
    MalformedSourceError,
    SourceError,
    UnexpectedTokenError,
    UnterminatedStringError,
)
from sysconfigdata.parsers.tokens import iter_entries, locate_literal


def _texts(source: str, container: str | None = "X") -> dict[str, str]:
    """Tokenize ``source`` and map keys to decoded text."""
    return {entry.key: entry.text for entry in iter_entries(source, container)}


def test_entries_are_yielded_in_source_order() -> None:
    """Keys and raw values should come back exactly as written."""
    entries = list(iter_entries("CFG = {'A': '$(B)/bin', 'B': '/usr/local'}", "CFG"))

    assert [e.key for e in entries] == ["A", "B"]
    assert entries[0].raw_value == "'$(B)/bin'"
    assert entries[0].text == "$(B)/bin"
    assert entries[1].text == "/usr/local"


def test_escape_sequences_are_decoded() -> None:
    """Supported escapes are decoded, unknown escapes keep the backslash."""
    source = (
        "X = {'a': 'it\\'s', \"b\": \"tab\\there\", 'c': 'back\\\\slash',\n"
        " 'd': 'new\\nline', 'e': \"q\\\"q\", 'f': '\\d'}"
    )

    texts = _texts(source)

    assert texts == {
        "a": "it's",
        "b": "tab\there",
        "c": "back\\slash",
        "d": "new\nline",
        "e": 'q"q',
        "f": "\\d",
    }


def test_numeric_and_control_escapes_match_python_literals() -> None:
    source = (
        "X = {'x': '\\x1b[0m', 'o': 'a\\012b', 'n': '\\0123', 'z': '\\0',\n"
        " 'bell': '\\a\\b\\f\\v', 'u': '\\u00e9\\U0001F600'}"
    )

    texts = _texts(source)

    assert texts == {
        "x": "\x1b[0m",
        "o": "a\nb",
        "n": "\n3",
        "z": "\0",
        "bell": "\a\b\f\v",
        "u": "\u00e9\U0001F600",
    }


@pytest.mark.parametrize("literal", ["'\\x1'", "'\\u12'", "'\\U0011FFFF'"])
def test_invalid_numeric_escapes_are_rejected(literal: str) -> None:
    with pytest.raises(UnexpectedTokenError) as excinfo:
        _texts(f"X = {{'k': {literal}}}")

    assert excinfo.value.line == 1


def test_bare_keys_integers_and_booleans() -> None:
    """Bare identifier keys and non-string literals are accepted."""
    texts = _texts("X = {A: 1, B: -2, C: 0x10, D: True, E: False}")

    assert texts == {"A": "1", "B": "-2", "C": "16", "D": "1", "E": "0"}


def test_adjacent_and_parenthesized_strings_are_joined() -> None:
    """pprint-style wrapped values are concatenated into one string."""
    source = "X = {'A': ('-O2 '\n       '-g'),\n 'B': 'x' \"y\"}"

    entries = list(iter_entries(source, "X"))

    assert entries[0].text == "-O2 -g"
    assert entries[1].text == "xy"
    assert entries[1].raw_value == "'x' \"y\""
    assert entries[1].line == 3


def test_comments_trailing_comma_and_other_statements() -> None:
    """Comments, a trailing comma and unrelated statements are skipped."""
    source = (
        "# generated\n"
        "import os\n"
        "OTHER = 1\n"
        "build_time_vars = {\n"
        "    'A': 'a',  # first\n"
        "    'B': 'b',\n"
        "}\n"
    )

    texts = {entry.key: entry.text for entry in iter_entries(source)}

    assert texts == {"A": "a", "B": "b"}


def test_empty_literal_yields_nothing() -> None:
    assert list(iter_entries("X = {}", "X")) == []


def test_any_container_name_when_none() -> None:
    """container=None accepts a single dictionary assignment of any name."""
    assert _texts("CONFIG = {'A': 'a'}", None) == {"A": "a"}


def test_several_assignments_are_ambiguous() -> None:
    """Two candidate literals must not be silently merged or chosen."""
    source = "X = {'A': 'a'}\nX = {'B': 'b'}\n"

    with pytest.raises(MalformedSourceError) as excinfo:
        locate_literal(source, "X")
    assert excinfo.value.line == 2

    with pytest.raises(MalformedSourceError):
        locate_literal("A = {}\nB = {}\n", None)


def test_missing_literal_is_reported_lazily() -> None:
    """The generator raises on first iteration, not on creation."""
    entries = iter_entries("nothing = 'here'\n")

    with pytest.raises(MalformedSourceError):
        next(entries)


def test_unclosed_literal_is_malformed() -> None:
    with pytest.raises(MalformedSourceError):
        list(iter_entries("X = {'A': 'a',\n", "X"))


def test_unterminated_string_at_end_of_input() -> None:
    with pytest.raises(UnterminatedStringError) as excinfo:
        list(iter_entries("X = {'A': 'abc}", "X"))

    assert excinfo.value.line == 1
    assert excinfo.value.column == 11


def test_unterminated_string_at_end_of_line() -> None:
    """A single-quoted literal cannot span lines."""
    with pytest.raises(UnterminatedStringError):
        list(iter_entries("X = {'A': 'abc\n}", "X"))


def test_missing_colon_is_unexpected_token() -> None:
    """The error should point at the token found instead of ':'."""
    with pytest.raises(UnexpectedTokenError) as excinfo:
        list(iter_entries("X = {'A' 'b'}", "X"))

    assert (excinfo.value.line, excinfo.value.column) == (1, 10)
    assert "':'" in str(excinfo.value)


def test_missing_comma_fails_after_yielding_earlier_entries() -> None:
    """Entries before the error are produced, then the parse aborts."""
    entries = iter_entries("X = {'A': 'a' 'B': 'b'}", "X")

    # 'a' 'B' is an implicit concatenation, then ':' is unexpected.
    first = next(entries)
    assert first.text == "aB"
    with pytest.raises(UnexpectedTokenError):
        next(entries)


@pytest.mark.parametrize(
    "source",
    [
        "X = {'A': 1.5}",
        "X = {'A': None}",
        "X = {'A': [1, 2]}",
        "X = {'A': 007}",
        "X = {: 'a'}",
        "X = {'A': ('a' 'b'}",
    ],
)
def test_unsupported_values_are_rejected(source: str) -> None:
    """Anything outside the flat literal grammar is a structural error."""
    with pytest.raises(UnexpectedTokenError):
        list(iter_entries(source, "X"))


def test_source_errors_are_value_errors() -> None:
    assert issubclass(SourceError, ValueError)
