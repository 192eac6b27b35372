"""Placeholder resolution for build configuration tables.

Resolves ``$(NAME)`` references between entries of an unresolved table.
Each key is resolved at most once (memoized). Resolution walks reference
chains with an explicit stack, so chains of any length resolve, and the
keys on that stack are checked so reference loops are reported instead of
walking forever. Any other ``$`` text is kept as written.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Dict, List, Mapping, Optional, Set, Union

from sysconfigdata.errors import (
    CircularReferenceError,
    KeyNotFoundError,
    UndefinedReferenceError,
)
from sysconfigdata.models import (
    ConfigValue,
    ListValue,
    ResolvedTable,
    ScalarValue,
    UnresolvedTable,
)

logger = logging.getLogger("sysconfigdata.resolver")

PLACEHOLDER_RE = re.compile(r"\$\((?P<name>[A-Za-z_][A-Za-z0-9_]*)\)")


class MissingKeyPolicy(str, Enum):
    """What to do with a placeholder naming a key absent from the table."""

    ERROR = "error"
    ENVIRON = "environ"
    KEEP = "keep"


def iter_references(text: str) -> List[str]:
    """Return the key names referenced by placeholders in ``text``, in order."""
    return [match.group("name") for match in PLACEHOLDER_RE.finditer(text)]


def _texts(value: ConfigValue) -> tuple:
    return value.items if isinstance(value, ListValue) else (value.text,)


class PlaceholderResolver:
    """Resolve every placeholder of an unresolved table.

    Args:
        table: Unresolved key table; it is read, never modified.
        missing: Policy for placeholders naming undefined keys.
        environ: Fallback mapping consulted under ``MissingKeyPolicy.ENVIRON``.
            The resolver never reads the process environment on its own.
    """

    def __init__(
        self,
        table: UnresolvedTable,
        missing: Union[MissingKeyPolicy, str] = MissingKeyPolicy.ERROR,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._table = table
        self._missing = MissingKeyPolicy(missing)
        self._environ: Mapping[str, str] = environ if environ is not None else {}

        self._resolved: Dict[str, ConfigValue] = {}
        self._unresolved: Set[str] = set()

    def resolve(self) -> ResolvedTable:
        """Resolve the whole table.

        Keys are visited in table order, so the first error raised is the
        first one reachable from that order.

        Returns:
            ResolvedTable holding every key of the input table.

        Raises:
            CircularReferenceError: A reference loop was found.
            UndefinedReferenceError: A placeholder names a missing key.
        """
        for key in self._table:
            self._resolve(key)

        values = {key: self._resolved[key] for key in self._table}
        logger.debug(
            "Resolved %d keys (%d with kept references)",
            len(values),
            len(self._unresolved),
        )
        return ResolvedTable(values, frozenset(self._unresolved))

    def resolve_key(self, key: str) -> ConfigValue:
        """Resolve a single key (and whatever it references)."""
        if key not in self._table:
            raise KeyNotFoundError(key)
        return self._resolve(key)

    def _resolve(self, key: str) -> ConfigValue:
        if key in self._resolved:
            return self._resolved[key]

        # Keys whose values are being resolved, outermost first.
        path = [key]
        while path:
            current = path[-1]
            pending = self._next_pending(current)
            if pending is None:
                self._resolved[current] = self._substitute_value(current)
                path.pop()
                continue
            if pending in path:
                raise CircularReferenceError(path[path.index(pending):])
            path.append(pending)

        return self._resolved[key]

    def _next_pending(self, owner: str) -> Optional[str]:
        """First key referenced by ``owner`` that still needs resolving.

        Undefined references met before it are reported right away, so
        errors surface in the order the placeholders appear.
        """
        for text in _texts(self._table[owner]):
            for name in iter_references(text):
                if name not in self._table:
                    self._check_missing(name, owner)
                elif name not in self._resolved:
                    return name
        return None

    def _substitute_value(self, key: str) -> ConfigValue:
        value = self._table[key]
        if isinstance(value, ListValue):
            return ListValue(tuple(self._substitute(item, key) for item in value.items))
        return ScalarValue(self._substitute(value.text, key))

    def _substitute(self, text: str, owner: str) -> str:
        if "$(" not in text:
            return text

        def replace(match: "re.Match[str]") -> str:
            name = match.group("name")
            if name not in self._table:
                return self._missing_reference(name, owner, match.group(0))
            if name in self._unresolved:
                self._unresolved.add(owner)
            return self._resolved[name].joined()

        return PLACEHOLDER_RE.sub(replace, text)

    def _check_missing(self, name: str, owner: str) -> None:
        if self._missing is MissingKeyPolicy.KEEP:
            return
        if self._missing is MissingKeyPolicy.ENVIRON and name in self._environ:
            return
        raise UndefinedReferenceError(name, owner)

    def _missing_reference(self, name: str, owner: str, placeholder: str) -> str:
        self._check_missing(name, owner)
        if self._missing is MissingKeyPolicy.KEEP:
            self._unresolved.add(owner)
            return placeholder
        return self._environ[name]


def resolve_table(
    table: UnresolvedTable,
    missing: Union[MissingKeyPolicy, str] = MissingKeyPolicy.ERROR,
    environ: Optional[Mapping[str, str]] = None,
) -> ResolvedTable:
    """Resolve ``table`` with a fresh resolver."""
    resolver = PlaceholderResolver(table, missing=missing, environ=environ)
    return resolver.resolve()


__all__ = [
    "MissingKeyPolicy",
    "PLACEHOLDER_RE",
    "PlaceholderResolver",
    "iter_references",
    "resolve_table",
]
