"""Reference graph between configuration keys.

Each node is a key of an unresolved table; an edge ``A -> B`` means the
value of ``A`` contains a placeholder for ``B``. The graph is diagnostic:
resolution itself does not use it.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set

import networkx as nx
from networkx.exception import NetworkXUnfeasible

from sysconfigdata.errors import CircularReferenceError, KeyNotFoundError
from sysconfigdata.models import ListValue, UnresolvedTable
from sysconfigdata.resolver import iter_references

logger = logging.getLogger("sysconfigdata.graph")


def build_reference_graph(table: UnresolvedTable) -> nx.DiGraph:
    """Build the key reference graph of ``table``.

    Referenced keys that are not defined become nodes with
    ``missing=True``, and the edge leading to them carries the same flag.
    """
    graph = nx.DiGraph()
    for key in table:
        graph.add_node(key, missing=False)

    for key, value in table.items():
        texts = value.items if isinstance(value, ListValue) else (value.text,)
        for text in texts:
            for name in iter_references(text):
                missing = name not in table
                if missing and name not in graph:
                    graph.add_node(name, missing=True)
                graph.add_edge(key, name, missing=missing)

    logger.debug(
        "Reference graph: %d nodes, %d edges",
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )
    return graph


def _require(graph: nx.DiGraph, key: str) -> None:
    if key not in graph:
        raise KeyNotFoundError(key)


def dependencies_of(graph: nx.DiGraph, key: str) -> Set[str]:
    """Keys that ``key`` references, directly or transitively."""
    _require(graph, key)
    return set(nx.descendants(graph, key))


def dependents_of(graph: nx.DiGraph, key: str) -> Set[str]:
    """Keys whose values reference ``key``, directly or transitively."""
    _require(graph, key)
    return set(nx.ancestors(graph, key))


def missing_references(graph: nx.DiGraph) -> List[str]:
    return sorted(node for node, missing in graph.nodes(data="missing") if missing)


def find_cycles(graph: nx.DiGraph, limit: Optional[int] = None) -> List[List[str]]:
    """Enumerate reference cycles.

    Args:
        graph: Reference graph.
        limit: Maximum number of cycles to return; None or <= 0 for all.

    Returns:
        Cycles as key lists in traversal order (first key not repeated).
    """
    max_cycles = limit if limit is not None and limit > 0 else None
    cycles: List[List[str]] = []
    for cycle in nx.simple_cycles(graph):
        cycles.append([str(node) for node in cycle])
        if max_cycles is not None and len(cycles) >= max_cycles:
            break
    return cycles


def resolution_order(graph: nx.DiGraph) -> List[str]:
    """Return the keys ordered so that referenced keys come first.

    Raises:
        CircularReferenceError: The graph contains a cycle.
    """
    try:
        order = list(nx.topological_sort(graph))
    except NetworkXUnfeasible:
        cycle = [edge[0] for edge in nx.find_cycle(graph)]
        raise CircularReferenceError(cycle) from None
    order.reverse()
    return order


__all__ = [
    "build_reference_graph",
    "dependencies_of",
    "dependents_of",
    "find_cycles",
    "missing_references",
    "resolution_order",
]
