"""Helpers for loading parser configuration from TOML/JSON sources.

``load_parser_config`` accepts:

* None -> default ParserConfig
* dict -> ParserConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings

TOML documents may either hold the options at the top level or under a
``[sysconfigdata]`` table.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from sysconfigdata.config.schema import ParserConfig

logger = logging.getLogger("sysconfigdata.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]

SECTION = "sysconfigdata"


def _existing_file(source: Union[str, Path]) -> Optional[Path]:
    """Return ``source`` as a Path when it names an existing file."""
    path = Path(source)
    try:
        return path if path.is_file() else None
    except (OSError, ValueError):
        # Inline documents can be too long or contain NUL for a path.
        return None


def _detect_format(text: str) -> str:
    stripped = text.lstrip()
    return "json" if stripped.startswith(("{", "[")) else "toml"


def load_parser_config(source: ConfigSource) -> ParserConfig:
    """Load ParserConfig from various configuration sources.

    Args:
        source: None, an already-parsed mapping, a path to a .toml/.json
            file, or inline TOML/JSON text (auto-detected).

    Returns:
        ParserConfig instance.

    Raises:
        ValueError: The document is not a mapping or cannot be decoded.
        TypeError: Unsupported source type.
    """
    if source is None:
        logger.debug("No config source provided; using default ParserConfig")
        return ParserConfig.default()

    if isinstance(source, dict):
        logger.debug("Loading ParserConfig from provided dict")
        return ParserConfig.from_dict(source.get(SECTION, source))

    if isinstance(source, (str, Path)):
        text: Optional[str] = None
        fmt: Optional[str] = None
        path = _existing_file(source)

        if path is not None:
            text = path.read_text(encoding="utf-8")
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                fmt = _detect_format(text)
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            fmt = _detect_format(text)
            logger.info("Loading configuration from inline %s string", fmt)

        if fmt == "json":
            data = json.loads(text)
        else:
            data = tomllib.loads(text)

        if not isinstance(data, dict):
            raise ValueError("Top-level configuration must be a mapping/dict")

        return ParserConfig.from_dict(data.get(SECTION, data))

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


__all__ = ["ConfigSource", "load_parser_config"]
