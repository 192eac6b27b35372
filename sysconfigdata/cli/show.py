"""``show`` and ``vars`` command implementations."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import Dict, List, Union

from rich.console import Console
from rich.table import Table
from rich.text import Text

from sysconfigdata.api import parse
from sysconfigdata.cli.common import CLI_ERRORS, load_source, report_error
from sysconfigdata.models import ListValue
from sysconfigdata.store import ConfigStore

logger = logging.getLogger("sysconfigdata.cli.show")


def _selected(store: ConfigStore, keys: List[str]) -> Dict[str, Union[str, List[str]]]:
    result: Dict[str, Union[str, List[str]]] = {}
    for key in keys or list(store):
        value = store.get_value(key)
        result[key] = list(value.items) if isinstance(value, ListValue) else value.text
    return result


def show_command(args) -> int:
    """Print resolved keys as a table or JSON.

    Args:
        args: Parsed command-line arguments.

    Returns:
        int: Exit code.
    """
    try:
        text, config, environ = load_source(args)
        store = parse(text, config=config, environ=environ)
        values = _selected(store, getattr(args, "keys", None) or [])
    except CLI_ERRORS as e:
        return report_error("show", e)

    if getattr(args, "json", False):
        print(json.dumps(values, indent=2, ensure_ascii=False))
        return 0

    table = Table(title="build_time_vars")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value")
    for key, value in values.items():
        rendered = " ".join(value) if isinstance(value, list) else value
        if store.is_unresolved(key):
            rendered += " [unresolved]"
        table.add_row(key, Text(rendered))
    Console().print(table)
    return 0


def vars_command(args) -> int:
    """Print the typed BuildTimeVars record."""
    try:
        text, config, environ = load_source(args)
        record = parse(text, config=config, environ=environ).build_time_vars()
    except CLI_ERRORS as e:
        return report_error("vars", e)

    data = asdict(record)
    if getattr(args, "json", False):
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return 0

    table = Table(title="BuildTimeVars")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")
    for name, value in data.items():
        table.add_row(name, Text(str(value)))
    Console().print(table)
    return 0
