"""Shared helpers for CLI commands."""

from __future__ import annotations

import logging
import os
from typing import Mapping, Tuple

from sysconfigdata.config import ParserConfig, load_parser_config
from sysconfigdata.discovery import read_source, resolve_location
from sysconfigdata.errors import SysconfigDataError

logger = logging.getLogger("sysconfigdata.cli")

# Failures reported as a one-line error instead of a traceback.
CLI_ERRORS = (
    SysconfigDataError,
    OSError,
    ValueError,
)


def load_source(args) -> Tuple[str, ParserConfig, Mapping[str, str]]:
    """Read the source named on the command line.

    Returns:
        Tuple of (source text, parser config, environment mapping).
    """
    config = load_parser_config(getattr(args, "config", None))
    environ = dict(os.environ)
    path = resolve_location(args.source, environ=environ)
    logger.info("Reading build configuration from %s", path)
    return read_source(path), config, environ


def report_error(command: str, exc: BaseException) -> int:
    logger.error("%s failed: %s", command, exc)
    return 1


__all__ = ["CLI_ERRORS", "load_source", "report_error"]
