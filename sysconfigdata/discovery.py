"""Locate and read a sysconfigdata file on disk.

This is the only part of the package that touches the filesystem; the
parser and resolver work on in-memory text.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from sysconfigdata.errors import SysconfigNotFoundError

logger = logging.getLogger("sysconfigdata.discovery")

FILE_PATTERN = "_sysconfigdata_*.py"

# Explicit file override, checked before any directory search.
OVERRIDE_ENV = "SYSCONFIGDATA_FILE"

# Module name CPython uses when cross-compiling, e.g.
# "_sysconfigdata__linux_x86_64-linux-gnu".
NAME_ENV = "_PYTHON_SYSCONFIGDATA_NAME"

PathLike = Union[str, Path]


def find_sysconfigdata(
    search_dirs: Iterable[PathLike],
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """Find the sysconfigdata file to read.

    Args:
        search_dirs: Directories searched in order.
        environ: Environment mapping for the override variables. Callers
            pass ``os.environ`` explicitly when overrides should apply.

    Returns:
        Path of the first matching file.

    Raises:
        SysconfigNotFoundError: No file matched.
    """
    environ = environ or {}

    override = environ.get(OVERRIDE_ENV)
    if override:
        path = Path(override).expanduser()
        if not path.is_file():
            raise SysconfigNotFoundError(
                f"{OVERRIDE_ENV} points to a missing file: {path}"
            )
        logger.debug("Using %s override: %s", OVERRIDE_ENV, path)
        return path

    module_name = environ.get(NAME_ENV)
    pattern = f"{module_name}.py" if module_name else FILE_PATTERN

    searched = []
    for directory in search_dirs:
        directory = Path(directory).expanduser()
        searched.append(str(directory))
        if not directory.is_dir():
            logger.debug("Skipping missing search directory: %s", directory)
            continue
        matches = sorted(p for p in directory.glob(pattern) if p.is_file())
        if matches:
            if len(matches) > 1:
                logger.debug(
                    "Several candidates in %s, using %s", directory, matches[0].name
                )
            return matches[0]

    raise SysconfigNotFoundError(
        f"No {pattern} found in: {', '.join(searched) or '(no directories)'}"
    )


def read_source(path: PathLike) -> str:
    """Read the configuration source text (UTF-8)."""
    path = Path(path)
    logger.debug("Reading sysconfigdata source: %s", path)
    return path.read_text(encoding="utf-8")


def resolve_location(
    location: PathLike, environ: Optional[Mapping[str, str]] = None
) -> Path:
    """Return ``location`` itself when it is a file, else search it as a directory."""
    path = Path(location).expanduser()
    if path.is_file():
        return path
    return find_sysconfigdata([path], environ=environ)


__all__ = [
    "FILE_PATTERN",
    "NAME_ENV",
    "OVERRIDE_ENV",
    "find_sysconfigdata",
    "read_source",
    "resolve_location",
]
