"""Read-only accessor API over a resolved configuration table."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields
from typing import Dict, Iterator, List, Union

from sysconfigdata.errors import KeyNotFoundError, TypeMismatchError
from sysconfigdata.models import BuildTimeVars, ConfigValue, ListValue, ResolvedTable

_TRUE_WORDS = {"1", "yes", "true", "on"}
_FALSE_WORDS = {"", "0", "no", "false", "off"}

# BuildTimeVars field -> configuration key.
BUILD_TIME_VAR_KEYS: Dict[str, str] = {
    "abiflags": "ABIFLAGS",
    "count_allocs": "COUNT_ALLOCS",
    "cflags": "CFLAGS",
    "config_dir": "LIBPL",
    "ext_suffix": "EXT_SUFFIX",
    "exec_prefix": "exec_prefix",
    "include_dir": "INCLUDEDIR",
    "lib_dir": "LIBDIR",
    "libs": "LIBS",
    "ldflags": "LDFLAGS",
    "ld_version": "LDVERSION",
    "prefix": "prefix",
    "py_debug": "Py_DEBUG",
    "py_ref_debug": "Py_REF_DEBUG",
    "py_trace_refs": "Py_TRACE_REFS",
    "py_enable_shared": "Py_ENABLE_SHARED",
    "soabi": "SOABI",
    "shlib_suffix": "SHLIB_SUFFIX",
    "size_of_void_p": "SIZEOF_VOID_P",
    "with_thread": "WITH_THREAD",
    "version": "VERSION",
}


def _shape(value: ConfigValue) -> str:
    return "list" if isinstance(value, ListValue) else "scalar"


class ConfigStore(Mapping):
    """Immutable mapping from key to resolved value with typed getters.

    Iteration and ``store[key]`` expose plain Python values: ``str`` for
    scalars and ``tuple`` of ``str`` for lists.
    """

    def __init__(self, resolved: ResolvedTable) -> None:
        self._table = resolved

    @property
    def table(self) -> ResolvedTable:
        return self._table

    @property
    def unresolved(self) -> frozenset:
        """Keys still carrying placeholder text (kept undefined references)."""
        return self._table.unresolved

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> Union[str, tuple]:
        value = self._value(key)
        if isinstance(value, ListValue):
            return value.items
        return value.text

    def __iter__(self) -> Iterator[str]:
        return iter(self._table.values)

    def __len__(self) -> int:
        return len(self._table.values)

    def __repr__(self) -> str:
        return f"ConfigStore({len(self)} keys)"

    def _value(self, key: str) -> ConfigValue:
        try:
            return self._table.values[key]
        except KeyError:
            raise KeyNotFoundError(key) from None

    # ------------------------------------------------------------------
    # Typed getters
    # ------------------------------------------------------------------

    def get_value(self, key: str) -> ConfigValue:
        return self._value(key)

    def get_scalar(self, key: str) -> str:
        """Return a scalar value.

        Raises:
            KeyNotFoundError: ``key`` is absent.
            TypeMismatchError: ``key`` holds a list.
        """
        value = self._value(key)
        if isinstance(value, ListValue):
            raise TypeMismatchError(key, "scalar", _shape(value))
        return value.text

    def get_list(self, key: str) -> List[str]:
        """Return a list value.

        Raises:
            KeyNotFoundError: ``key`` is absent.
            TypeMismatchError: ``key`` holds a scalar.
        """
        value = self._value(key)
        if not isinstance(value, ListValue):
            raise TypeMismatchError(key, "list", _shape(value))
        return list(value.items)

    def get_text(self, key: str) -> str:
        """Return the value as text, joining list items with spaces."""
        return self._value(key).joined()

    def get_tokens(self, key: str) -> List[str]:
        """Return the value as tokens, splitting scalars on whitespace."""
        value = self._value(key)
        if isinstance(value, ListValue):
            return list(value.items)
        return value.text.split()

    def get_int(self, key: str) -> int:
        """Interpret a scalar as a decimal, or 0x/0o/0b prefixed, integer."""
        text = self.get_scalar(key).strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return int(text, 0)
        except ValueError:
            raise TypeMismatchError(key, "integer", f"non-numeric ({text!r})") from None

    def get_bool(self, key: str) -> bool:
        """Interpret a scalar as a boolean.

        Integers are true when non-zero; the words yes/no, true/false and
        on/off are accepted case-insensitively; an empty value is false.
        """
        text = self.get_scalar(key).strip()
        lowered = text.lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
        try:
            return self.get_int(key) != 0
        except TypeMismatchError:
            raise TypeMismatchError(key, "boolean", f"non-boolean ({text!r})") from None

    def is_unresolved(self, key: str) -> bool:
        self._value(key)
        return key in self._table.unresolved

    # ------------------------------------------------------------------
    # Derived build-flag queries
    # ------------------------------------------------------------------

    def include_dirs(self) -> List[str]:
        """Header directories: INCLUDEPY, then CONFINCLUDEPY when distinct."""
        dirs = [self.get_scalar("INCLUDEPY")]
        if "CONFINCLUDEPY" in self:
            extra = self.get_scalar("CONFINCLUDEPY")
            if extra and extra not in dirs:
                dirs.append(extra)
        return dirs

    def include_flags(self) -> List[str]:
        return [f"-I{path}" for path in self.include_dirs()]

    def library_dirs(self) -> List[str]:
        """Library directories: LIBDIR, then LIBPL when distinct."""
        dirs = [self.get_scalar("LIBDIR")]
        if "LIBPL" in self:
            extra = self.get_scalar("LIBPL")
            if extra and extra not in dirs:
                dirs.append(extra)
        return dirs

    def library_name(self) -> str:
        """Name of the runtime library, e.g. ``python3.8`` or ``python3.8d``."""
        return f"python{self.get_scalar('LDVERSION')}"

    def link_flags(self, embed: bool = False) -> List[str]:
        """Linker flags: ``-L`` directories, the runtime library when
        embedding, then the LIBS and SYSLIBS tokens."""
        flags = [f"-L{path}" for path in self.library_dirs()]
        if embed:
            flags.append(f"-l{self.library_name()}")
        flags.extend(self.get_tokens("LIBS"))
        if "SYSLIBS" in self:
            flags.extend(self.get_tokens("SYSLIBS"))
        return flags

    def compile_flags(self) -> List[str]:
        return self.include_flags() + self.get_tokens("CFLAGS")

    def extension_suffix(self) -> str:
        return self.get_scalar("EXT_SUFFIX")

    def build_time_vars(self) -> BuildTimeVars:
        """Build the typed record of well-known keys.

        Absent keys keep the field default. Boolean fields are true only
        when the stored value is the integer 1.
        """
        kwargs = {}
        for spec in fields(BuildTimeVars):
            key = BUILD_TIME_VAR_KEYS[spec.name]
            if key not in self:
                continue
            text = self.get_text(key)
            if spec.type in (bool, "bool"):
                kwargs[spec.name] = text.strip() == "1"
            elif spec.type in (int, "int"):
                kwargs[spec.name] = self.get_int(key)
            else:
                kwargs[spec.name] = text
        return BuildTimeVars(**kwargs)


__all__ = ["BUILD_TIME_VAR_KEYS", "ConfigStore"]
