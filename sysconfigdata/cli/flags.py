"""``flags`` command implementation."""

from __future__ import annotations

import logging

from sysconfigdata.api import parse
from sysconfigdata.cli.common import CLI_ERRORS, load_source, report_error

logger = logging.getLogger("sysconfigdata.cli.flags")


def flags_command(args) -> int:
    """Print compiler and/or linker flags, one line each.

    Output is plain text so it can be substituted into shell commands.
    """
    show_cflags = getattr(args, "cflags", False)
    show_ldflags = getattr(args, "ldflags", False)
    if not show_cflags and not show_ldflags:
        show_cflags = show_ldflags = True

    try:
        text, config, environ = load_source(args)
        store = parse(text, config=config, environ=environ)
        lines = []
        if show_cflags:
            lines.append(" ".join(store.compile_flags()))
        if show_ldflags:
            lines.append(" ".join(store.link_flags(embed=getattr(args, "embed", False))))
    except CLI_ERRORS as e:
        return report_error("flags", e)

    for line in lines:
        print(line)
    return 0
