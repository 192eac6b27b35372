"""Exception hierarchy for sysconfigdata.

Source errors and resolution errors are terminal for the parse that raised
them. Access errors only concern the single query that triggered them; the
store stays usable afterwards.
"""

from __future__ import annotations

from typing import Optional, Sequence


class SysconfigDataError(Exception):
    """Base class for every error raised by sysconfigdata."""

    pass


# =============================================================================
# Source (tokenizer) errors
# =============================================================================


class SourceError(SysconfigDataError, ValueError):
    """The configuration text could not be tokenized.

    Attributes:
        line: 1-based line of the offending token, when known.
        column: 1-based column of the offending token, when known.
    """

    def __init__(
        self, message: str, line: Optional[int] = None, column: Optional[int] = None
    ) -> None:
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} at line {line}, column {column}"
        super().__init__(message)


class MalformedSourceError(SourceError):
    """No (or more than one) recognizable dictionary literal was found."""

    pass


class UnterminatedStringError(SourceError):
    """A quote was opened but never closed."""

    pass


class UnexpectedTokenError(SourceError):
    """A structurally invalid entry, e.g. a key without a ``:`` separator."""

    pass


# =============================================================================
# Resolution errors
# =============================================================================


class ResolutionError(SysconfigDataError):
    """Placeholder resolution failed."""

    pass


class CircularReferenceError(ResolutionError):
    """A key references itself, directly or transitively."""

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = list(cycle)
        loop = self.cycle + self.cycle[:1]
        super().__init__(f"Circular reference: {' -> '.join(loop)}")


class UndefinedReferenceError(ResolutionError):
    """A placeholder names a key that does not exist."""

    def __init__(self, key: str, referenced_by: str) -> None:
        self.key = key
        self.referenced_by = referenced_by
        super().__init__(
            f"Undefined reference to '{key}' in the value of '{referenced_by}'"
        )


# =============================================================================
# Accessor errors
# =============================================================================


class AccessError(SysconfigDataError):
    """A query against a resolved store failed."""

    pass


class KeyNotFoundError(AccessError, KeyError):
    """The requested key is not present in the store."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Key not found: '{self.key}'"


class TypeMismatchError(AccessError, TypeError):
    """The stored value does not have the requested shape or type."""

    def __init__(self, key: str, expected: str, actual: str) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(f"Key '{key}' holds a {actual} value, expected {expected}")


# =============================================================================
# Discovery errors
# =============================================================================


class SysconfigNotFoundError(SysconfigDataError, FileNotFoundError):
    """No sysconfigdata file could be located."""

    pass


__all__ = [
    "SysconfigDataError",
    "SourceError",
    "MalformedSourceError",
    "UnterminatedStringError",
    "UnexpectedTokenError",
    "ResolutionError",
    "CircularReferenceError",
    "UndefinedReferenceError",
    "AccessError",
    "KeyNotFoundError",
    "TypeMismatchError",
    "SysconfigNotFoundError",
]
