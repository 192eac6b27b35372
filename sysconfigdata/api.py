"""Library-facing helpers: text or file in, ConfigStore out."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from sysconfigdata.config import ParserConfig
from sysconfigdata.discovery import PathLike, read_source, resolve_location
from sysconfigdata.models import UnresolvedTable
from sysconfigdata.parsers import build_table, iter_entries
from sysconfigdata.resolver import resolve_table
from sysconfigdata.store import ConfigStore

logger = logging.getLogger("sysconfigdata.api")


def parse_table(text: str, config: Optional[ParserConfig] = None) -> UnresolvedTable:
    """Tokenize and normalize ``text`` without resolving placeholders."""
    config = config or ParserConfig.default()
    entries = iter_entries(text, config.container_name)
    return build_table(entries, config.list_keys)


def parse(
    text: str,
    config: Optional[ParserConfig] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ConfigStore:
    """Parse and resolve configuration text.

    Args:
        text: Full source text of the configuration file.
        config: Parser options; defaults to ``ParserConfig.default()``.
        environ: Fallback mapping for undefined references, only used when
            ``config.missing_key_policy`` is ``environ``.

    Returns:
        ConfigStore over the fully resolved table.

    Raises:
        SourceError: The text could not be tokenized.
        ResolutionError: Placeholder resolution failed.
    """
    config = config or ParserConfig.default()
    table = parse_table(text, config)
    resolved = resolve_table(
        table,
        missing=config.missing_key_policy,
        environ=environ,
    )
    return ConfigStore(resolved)


def load(
    location: PathLike,
    config: Optional[ParserConfig] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ConfigStore:
    """Locate, read and parse a sysconfigdata file.

    ``location`` is either the file itself or a directory searched for
    ``_sysconfigdata_*.py``. ``environ`` supplies the discovery overrides
    and the ``environ`` missing-key fallback.
    """
    path = resolve_location(location, environ=environ)
    logger.info("Loading build configuration from %s", path)
    return parse(read_source(path), config=config, environ=environ)


__all__ = ["load", "parse", "parse_table"]
