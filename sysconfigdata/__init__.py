"""Read CPython build configuration (``_sysconfigdata_*.py``) as data.

Typical use::

    from sysconfigdata import load

    store = load("/usr/lib/python3.12")
    store.include_flags()   # ['-I/usr/include/python3.12']
    store.get_list("LIBS")  # ['-ldl', '-lm']
"""

from .api import load, parse, parse_table
from .config import ParserConfig, load_parser_config
from .errors import (
    AccessError,
    CircularReferenceError,
    KeyNotFoundError,
    MalformedSourceError,
    ResolutionError,
    SourceError,
    SysconfigDataError,
    SysconfigNotFoundError,
    TypeMismatchError,
    UndefinedReferenceError,
    UnexpectedTokenError,
    UnterminatedStringError,
)
from .models import BuildTimeVars, ListValue, RawEntry, ResolvedTable, ScalarValue
from .resolver import MissingKeyPolicy, PlaceholderResolver, resolve_table
from .store import ConfigStore

__version__ = "0.1.0"

__all__ = [
    "AccessError",
    "BuildTimeVars",
    "CircularReferenceError",
    "ConfigStore",
    "KeyNotFoundError",
    "ListValue",
    "MalformedSourceError",
    "MissingKeyPolicy",
    "ParserConfig",
    "PlaceholderResolver",
    "RawEntry",
    "ResolutionError",
    "ResolvedTable",
    "ScalarValue",
    "SourceError",
    "SysconfigDataError",
    "SysconfigNotFoundError",
    "TypeMismatchError",
    "UndefinedReferenceError",
    "UnexpectedTokenError",
    "UnterminatedStringError",
    "load",
    "load_parser_config",
    "parse",
    "parse_table",
    "resolve_table",
]
