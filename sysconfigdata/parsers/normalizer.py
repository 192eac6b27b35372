"""Convert raw entries into scalar or list configuration values."""

from __future__ import annotations

import logging
from fnmatch import fnmatchcase
from typing import Iterable, List, Sequence

from sysconfigdata.models import (
    ConfigValue,
    ListValue,
    RawEntry,
    ScalarValue,
    UnresolvedTable,
)

logger = logging.getLogger("sysconfigdata.parsers.normalizer")

# Flag-bearing keys of CPython's build configuration. Patterns are matched
# case-sensitively with fnmatch.
DEFAULT_LIST_KEYS = (
    "*FLAGS",
    "*FLAGS_NODIST",
    "LIBS",
    "SYSLIBS",
    "SHLIBS",
    "LOCALMODLIBS",
    "MODLIBS",
    "BASEMODLIBS",
    "LIBC",
    "LIBM",
    "LDSHARED",
    "BLDSHARED",
    "LDCXXSHARED",
    "CCSHARED",
    "LINKFORSHARED",
    "OPT",
)


def split_flags(text: str) -> List[str]:
    """Split a flag string on runs of whitespace.

    An empty or all-blank string yields an empty list.
    """
    return text.split()


def is_list_key(key: str, list_keys: Sequence[str]) -> bool:
    """Return True when ``key`` matches any of the ``list_keys`` patterns."""
    return any(fnmatchcase(key, pattern) for pattern in list_keys)


def normalize(entry: RawEntry, as_list: bool) -> ConfigValue:
    """Normalize one raw entry into a ConfigValue."""
    if as_list:
        return ListValue(tuple(split_flags(entry.text)))
    return ScalarValue(entry.text)


def build_table(
    entries: Iterable[RawEntry], list_keys: Sequence[str] = DEFAULT_LIST_KEYS
) -> UnresolvedTable:
    """Consume a raw entry stream into an unresolved table.

    Duplicate keys behave like a dictionary literal: the last value wins
    and the key keeps its first position.
    """
    table: UnresolvedTable = {}
    for entry in entries:
        if entry.key in table:
            logger.debug(
                "Duplicate key %s at line %d overrides earlier value",
                entry.key,
                entry.line,
            )
        table[entry.key] = normalize(entry, is_list_key(entry.key, list_keys))

    logger.debug("Normalized %d entries", len(table))
    return table


__all__ = ["DEFAULT_LIST_KEYS", "split_flags", "is_list_key", "normalize", "build_table"]
