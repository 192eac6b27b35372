"""Tests for value normalization into scalar and list values."""

from __future__ import annotations

from sysconfigdata.models import ListValue, RawEntry, ScalarValue
from sysconfigdata.parsers.normalizer import (
    DEFAULT_LIST_KEYS,
    build_table,
    is_list_key,
    normalize,
    split_flags,
)


def _entry(key: str, text: str, line: int = 1) -> RawEntry:
    return RawEntry(key=key, raw_value=repr(text), text=text, line=line)


def test_split_flags_on_whitespace_runs() -> None:
    assert split_flags("  -I/a \t -I/b\n-DFOO ") == ["-I/a", "-I/b", "-DFOO"]
    assert split_flags("") == []
    assert split_flags("   ") == []


def test_normalize_list_and_scalar_modes() -> None:
    """List mode tokenizes, scalar mode keeps the text untouched."""
    entry = _entry("CFLAGS", "-O2  -g")

    assert normalize(entry, as_list=True) == ListValue(("-O2", "-g"))
    assert normalize(entry, as_list=False) == ScalarValue("-O2  -g")
    assert normalize(_entry("LIBS", ""), as_list=True) == ListValue(())


def test_default_list_key_patterns() -> None:
    """Flag-bearing keys are lists; paths and versions stay scalars."""
    for key in ("CFLAGS", "LDFLAGS", "PY_CFLAGS_NODIST", "LIBS", "SYSLIBS", "LINKFORSHARED"):
        assert is_list_key(key, DEFAULT_LIST_KEYS), key
    for key in ("VERSION", "prefix", "INCLUDEPY", "cflags", "LIBDIR", "HAVE_LIBM"):
        assert not is_list_key(key, DEFAULT_LIST_KEYS), key


def test_build_table_keeps_order_and_last_duplicate() -> None:
    """Duplicates behave like a dict literal: last value, first position."""
    entries = [
        _entry("A", "first"),
        _entry("CFLAGS", "-a -b"),
        _entry("A", "second", line=3),
    ]

    table = build_table(entries, ["*FLAGS"])

    assert list(table) == ["A", "CFLAGS"]
    assert table["A"] == ScalarValue("second")
    assert table["CFLAGS"] == ListValue(("-a", "-b"))


def test_joined_text_of_values() -> None:
    assert ListValue(("-a", "-b")).joined() == "-a -b"
    assert ListValue().joined() == ""
    assert ScalarValue("x y").joined() == "x y"
