"""Tokenizer and value normalizer for sysconfigdata sources."""

from .normalizer import DEFAULT_LIST_KEYS, build_table, is_list_key, normalize, split_flags
from .tokens import DEFAULT_CONTAINER, iter_entries, locate_literal

__all__ = [
    "DEFAULT_CONTAINER",
    "DEFAULT_LIST_KEYS",
    "build_table",
    "is_list_key",
    "iter_entries",
    "locate_literal",
    "normalize",
    "split_flags",
]
