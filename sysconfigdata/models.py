"""Data model shared by the tokenizer, resolver and store."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Tuple, Union


@dataclass(frozen=True)
class RawEntry:
    """One ``key: value`` pair as it appeared in the dictionary literal.

    Attributes:
        key: Decoded key name.
        raw_value: Source text of the value, quotes and escapes included.
        text: Decoded value (escapes applied, adjacent literals joined).
        line: 1-based line on which the key starts.
    """

    key: str
    raw_value: str
    text: str
    line: int = 0


@dataclass(frozen=True)
class ScalarValue:
    """A single string value."""

    text: str

    def joined(self) -> str:
        return self.text


@dataclass(frozen=True)
class ListValue:
    """An ordered sequence of string tokens, typically compiler flags."""

    items: Tuple[str, ...] = ()

    def joined(self) -> str:
        return " ".join(self.items)


ConfigValue = Union[ScalarValue, ListValue]

# Insertion order is significant: it drives error reporting order.
UnresolvedTable = Dict[str, ConfigValue]


@dataclass(frozen=True)
class ResolvedTable:
    """Read-only table of fully resolved values.

    ``unresolved`` lists keys that still carry placeholder text because the
    resolver was told to keep undefined references.
    """

    values: Mapping[str, ConfigValue]
    unresolved: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        if not isinstance(self.values, MappingProxyType):
            object.__setattr__(self, "values", MappingProxyType(dict(self.values)))


@dataclass(frozen=True)
class BuildTimeVars:
    """Typed view of the commonly used ``build_time_vars`` entries."""

    abiflags: str = ""
    count_allocs: bool = False
    cflags: str = ""
    config_dir: str = ""
    ext_suffix: str = ""
    exec_prefix: str = ""
    include_dir: str = ""
    lib_dir: str = ""
    libs: str = ""
    ldflags: str = ""
    ld_version: str = ""
    prefix: str = ""
    py_debug: bool = False
    py_ref_debug: bool = False
    py_trace_refs: bool = False
    py_enable_shared: bool = False
    soabi: str = ""
    shlib_suffix: str = ""
    size_of_void_p: int = 0
    with_thread: bool = False
    version: str = ""


__all__ = [
    "RawEntry",
    "ScalarValue",
    "ListValue",
    "ConfigValue",
    "UnresolvedTable",
    "ResolvedTable",
    "BuildTimeVars",
]
