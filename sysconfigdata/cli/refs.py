"""``refs`` and ``cycles`` commands over the key reference graph."""

from __future__ import annotations

import logging
from typing import List

from rich.console import Console
from rich.tree import Tree

from sysconfigdata.api import parse_table
from sysconfigdata.cli.common import CLI_ERRORS, load_source, report_error
from sysconfigdata.graph import (
    build_reference_graph,
    dependencies_of,
    dependents_of,
    find_cycles,
    missing_references,
)

logger = logging.getLogger("sysconfigdata.cli.refs")


def refs_command(args) -> int:
    """Show what a key references and what references it, transitively."""
    try:
        text, config, _ = load_source(args)
        graph = build_reference_graph(parse_table(text, config))
        deps = sorted(dependencies_of(graph, args.key))
        users = sorted(dependents_of(graph, args.key))
    except CLI_ERRORS as e:
        return report_error("refs", e)

    missing = set(missing_references(graph))
    tree = Tree(f"[bold]{args.key}[/bold]")
    deps_branch = tree.add(f"references ({len(deps)})")
    for key in deps:
        deps_branch.add(f"{key} [red](undefined)[/red]" if key in missing else key)
    users_branch = tree.add(f"referenced by ({len(users)})")
    for key in users:
        users_branch.add(key)
    Console().print(tree)
    return 0


def cycles_command(args) -> int:
    """List reference cycles; exit non-zero when any exist.

    Args:
        args: Parsed command-line arguments.

    Returns:
        int: 0 when the reference graph is acyclic, 1 otherwise.
    """
    limit = getattr(args, "limit", None)
    try:
        text, config, _ = load_source(args)
        graph = build_reference_graph(parse_table(text, config))
        cycles: List[List[str]] = find_cycles(graph, limit=limit)
    except CLI_ERRORS as e:
        return report_error("cycles", e)

    if not cycles:
        logger.info("No reference cycles found")
        print("No reference cycles found")
        return 0

    logger.warning("Detected %d reference cycle(s)", len(cycles))
    for idx, cycle in enumerate(cycles, start=1):
        # Closed loop for readability: A -> B -> A
        print(f"Cycle {idx}: {' -> '.join(cycle + cycle[:1])}")
    return 1
