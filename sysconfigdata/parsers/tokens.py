"""Tokenizer for the ``build_time_vars = {...}`` dictionary literal.

The configuration file is a Python module written by the interpreter's build.
It is read strictly as data: the single top-level dictionary assignment is
located and its entries are lexed one at a time into ``RawEntry`` records.

Supported grammar inside the literal:

* keys: quoted strings or bare identifiers
* values: one or more adjacent quoted strings (optionally parenthesized),
  integer literals, ``True`` / ``False``
* ``#`` comments and arbitrary whitespace between tokens
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Optional, Tuple

from sysconfigdata.errors import (
    MalformedSourceError,
    UnexpectedTokenError,
    UnterminatedStringError,
)
from sysconfigdata.models import RawEntry

logger = logging.getLogger("sysconfigdata.parsers.tokens")

DEFAULT_CONTAINER = "build_time_vars"

ASSIGNMENT_RE = re.compile(
    r"""
    ^(?P<name>[A-Za-z_]\w*)   # target name at column 0
    [ \t]*=(?!=)\s*           # single '=' (not a comparison)
    (?P<brace>\{)
    """,
    re.MULTILINE | re.VERBOSE,
)

IDENTIFIER_RE = re.compile(r"[A-Za-z_]\w*")

INTEGER_RE = re.compile(
    r"[+-]?(?:0[xX][0-9a-fA-F_]+|0[oO][0-7_]+|0[bB][01_]+|\d[\d_]*)(?![\w.])"
)

QUOTES = ("'", '"')

ESCAPES = {
    "\\": "\\",
    "'": "'",
    '"': '"',
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}

# Numeric escapes: octal (1-3 digits), \xHH, \uXXXX, \UXXXXXXXX.
NUMERIC_ESCAPE_RE = re.compile(
    r"\\(?:(?P<oct>[0-7]{1,3})|x(?P<x>[0-9a-fA-F]{2})"
    r"|u(?P<u>[0-9a-fA-F]{4})|U(?P<U>[0-9a-fA-F]{8}))"
)

BOOLEAN_WORDS = {"True": "1", "False": "0"}


def _location(text: str, pos: int) -> Tuple[int, int]:
    """Return the 1-based (line, column) of ``pos`` in ``text``."""
    line = text.count("\n", 0, pos) + 1
    column = pos - text.rfind("\n", 0, pos)
    return line, column


def locate_literal(text: str, container: Optional[str] = DEFAULT_CONTAINER) -> int:
    """Find the opening brace of the top-level dictionary assignment.

    Args:
        text: Full configuration source text.
        container: Assigned variable name to look for, or None to accept
            any single top-level dictionary assignment.

    Returns:
        Offset of the ``{`` that opens the literal.

    Raises:
        MalformedSourceError: When zero or several candidate assignments exist.
    """
    matches = [
        m for m in ASSIGNMENT_RE.finditer(text)
        if container is None or m.group("name") == container
    ]
    target = f"'{container} = {{...}}'" if container else "dictionary"
    if not matches:
        raise MalformedSourceError(f"No top-level {target} assignment found")
    if len(matches) > 1:
        line, column = _location(text, matches[1].start())
        raise MalformedSourceError(
            f"Expected exactly one top-level {target} assignment, found {len(matches)}",
            line,
            column,
        )

    match = matches[0]
    logger.debug(
        "Located dictionary literal '%s' at line %d",
        match.group("name"),
        _location(text, match.start())[0],
    )
    return match.start("brace")


class _Lexer:
    """Cursor over the source text with token readers."""

    def __init__(self, text: str, pos: int) -> None:
        self.text = text
        self.pos = pos
        self.end = len(text)

    def location(self, pos: Optional[int] = None) -> Tuple[int, int]:
        return _location(self.text, self.pos if pos is None else pos)

    def skip_trivia(self) -> None:
        """Skip whitespace and comments."""
        text = self.text
        while self.pos < self.end:
            char = text[self.pos]
            if char.isspace():
                self.pos += 1
            elif char == "#":
                newline = text.find("\n", self.pos)
                self.pos = self.end if newline == -1 else newline
            else:
                break

    def peek(self) -> str:
        """Return the next significant character, or "" at end of input."""
        self.skip_trivia()
        return self.text[self.pos] if self.pos < self.end else ""

    def unexpected(self, expected: str) -> UnexpectedTokenError:
        found = self.text[self.pos] if self.pos < self.end else "end of input"
        return UnexpectedTokenError(
            f"Expected {expected}, found {found!r}", *self.location()
        )

    def read_string(self) -> str:
        """Read one quoted string starting at the current position."""
        text = self.text
        start = self.pos
        quote = text[start]
        self.pos += 1
        parts = []

        while True:
            if self.pos >= self.end or text[self.pos] == "\n":
                raise UnterminatedStringError(
                    "Unterminated string literal", *self.location(start)
                )
            char = text[self.pos]
            if char == quote:
                self.pos += 1
                return "".join(parts)
            if char == "\\":
                if self.pos + 1 >= self.end:
                    raise UnterminatedStringError(
                        "Unterminated string literal", *self.location(start)
                    )
                parts.append(self.read_escape())
                continue
            parts.append(char)
            self.pos += 1

    def read_escape(self) -> str:
        """Decode the backslash escape at the current position.

        Escapes follow Python string literals; unrecognized ones keep the
        backslash.
        """
        text = self.text
        start = self.pos
        escaped = text[start + 1]
        if escaped == "\n":
            # Line continuation inside a literal.
            self.pos += 2
            return ""
        if escaped in ESCAPES:
            self.pos += 2
            return ESCAPES[escaped]

        match = NUMERIC_ESCAPE_RE.match(text, start, self.end)
        if match is None:
            if escaped in "xuU":
                raise UnexpectedTokenError(
                    f"Truncated \\{escaped} escape", *self.location(start)
                )
            self.pos += 2
            return "\\" + escaped

        digits = match.group("oct")
        code = int(digits, 8) if digits else int(match.group(match.lastgroup), 16)
        if code > 0x10FFFF:
            raise UnexpectedTokenError(
                f"Escape {match.group(0)} is out of range", *self.location(start)
            )
        self.pos = match.end()
        return chr(code)

    def read_string_group(self) -> Tuple[str, int]:
        """Read adjacent string literals and concatenate them.

        Returns the joined text and the offset just past the last literal.
        """
        parts = [self.read_string()]
        end = self.pos
        while self.peek() in QUOTES:
            parts.append(self.read_string())
            end = self.pos
        return "".join(parts), end

    def read_key(self) -> str:
        char = self.peek()
        if char in QUOTES:
            return self.read_string()
        match = IDENTIFIER_RE.match(self.text, self.pos)
        if match:
            self.pos = match.end()
            return match.group(0)
        raise self.unexpected("a key")

    def read_value(self) -> Tuple[str, str]:
        """Read a value and return ``(raw_source, decoded_text)``."""
        char = self.peek()
        start = self.pos

        if char in QUOTES:
            decoded, end = self.read_string_group()
        elif char == "(":
            self.pos += 1
            if self.peek() not in QUOTES:
                raise self.unexpected("a string inside parentheses")
            decoded, _ = self.read_string_group()
            if self.peek() != ")":
                raise self.unexpected("')'")
            self.pos += 1
            end = self.pos
        else:
            decoded = self._read_bare_value()
            end = self.pos

        return self.text[start:end], decoded

    def _read_bare_value(self) -> str:
        match = INTEGER_RE.match(self.text, self.pos)
        if match:
            try:
                number = int(match.group(0).replace("_", ""), 0)
            except ValueError:
                raise self.unexpected("an integer literal") from None
            self.pos = match.end()
            return str(number)

        match = IDENTIFIER_RE.match(self.text, self.pos)
        if match and match.group(0) in BOOLEAN_WORDS:
            self.pos = match.end()
            return BOOLEAN_WORDS[match.group(0)]

        raise self.unexpected("a string, integer or boolean value")


def iter_entries(
    text: str, container: Optional[str] = DEFAULT_CONTAINER
) -> Iterator[RawEntry]:
    """Lazily yield the entries of the configuration dictionary literal.

    Lexing stops at the first error; entries already yielded are not
    retracted, but callers treat any error as terminal for the whole parse.

    Args:
        text: Full configuration source text.
        container: Name of the assigned variable (None accepts any name).

    Yields:
        RawEntry for each ``key: value`` pair in source order.

    Raises:
        MalformedSourceError: Literal missing, ambiguous or never closed.
        UnterminatedStringError: A quoted string is not closed.
        UnexpectedTokenError: The entry structure is invalid.
    """
    brace = locate_literal(text, container)
    lexer = _Lexer(text, brace + 1)

    while True:
        char = lexer.peek()
        if not char:
            raise MalformedSourceError(
                "Dictionary literal is never closed", *lexer.location(brace)
            )
        if char == "}":
            return

        key_line = lexer.location()[0]
        key = lexer.read_key()
        if lexer.peek() != ":":
            raise lexer.unexpected(f"':' after key {key!r}")
        lexer.pos += 1

        raw_value, decoded = lexer.read_value()
        yield RawEntry(key=key, raw_value=raw_value, text=decoded, line=key_line)

        char = lexer.peek()
        if char == ",":
            lexer.pos += 1
        elif char and char != "}":
            raise lexer.unexpected("',' or '}'")


__all__ = ["DEFAULT_CONTAINER", "iter_entries", "locate_literal"]
