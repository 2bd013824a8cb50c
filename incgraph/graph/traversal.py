"""Directional subgraph extraction.

Each operation walks an existing graph breadth-first from a root handle and
returns a brand-new ``KeyedGraph``. Nodes are marked visited as soon as they
are discovered, so include cycles cannot cause re-traversal.
"""

import logging
from collections import deque
from enum import Enum
from typing import Callable, Iterable, Optional

from incgraph.graph.backend import KeyedGraph, T

logger = logging.getLogger("incgraph.graph.traversal")


class Direction(str, Enum):
    """Which side of a root node to extract."""

    DOWNSTREAM = "downstream"
    UPSTREAM = "upstream"
    BOTH = "both"


def _walk(
    root: int,
    neighbors: Callable[[int], Iterable[int]],
    add_edge: Callable[[int, int], None],
) -> None:
    visited = {root}
    frontier = deque([root])
    while frontier:
        current = frontier.popleft()
        for nxt in neighbors(current):
            if nxt in visited:
                continue
            visited.add(nxt)
            add_edge(current, nxt)
            frontier.append(nxt)


def _collect_downstream(graph: KeyedGraph[T], root: int, result: KeyedGraph[T]) -> None:
    result.add_node(graph.identity(root))
    _walk(
        root,
        graph.successors,
        lambda cur, nxt: result.add_edge(graph.identity(cur), graph.identity(nxt)),
    )


def _collect_upstream(graph: KeyedGraph[T], root: int, result: KeyedGraph[T]) -> None:
    result.add_node(graph.identity(root))
    # Edges keep their original orientation: includer -> included.
    _walk(
        root,
        graph.predecessors,
        lambda cur, prev: result.add_edge(graph.identity(prev), graph.identity(cur)),
    )


def downstream_of(graph: KeyedGraph[T], root: int) -> KeyedGraph[T]:
    """Return everything ``root`` transitively includes.

    Args:
        graph: Source graph.
        root: Handle of the starting node.

    Returns:
        KeyedGraph: New graph containing ``root`` and its descendants.
    """
    result: KeyedGraph[T] = KeyedGraph()
    _collect_downstream(graph, root, result)
    logger.debug(
        "Downstream of %s: %d nodes, %d edges",
        graph.identity(root),
        result.node_count(),
        result.edge_count(),
    )
    return result


def upstream_of(graph: KeyedGraph[T], root: int) -> KeyedGraph[T]:
    """Return everything that transitively includes ``root``."""
    result: KeyedGraph[T] = KeyedGraph()
    _collect_upstream(graph, root, result)
    logger.debug(
        "Upstream of %s: %d nodes, %d edges",
        graph.identity(root),
        result.node_count(),
        result.edge_count(),
    )
    return result


def neighborhood_of(graph: KeyedGraph[T], root: int) -> KeyedGraph[T]:
    """Return the union of the downstream and upstream subgraphs of ``root``.

    The two traversals are independent and write into the same result graph,
    whose idempotent node insertion absorbs the overlap.
    """
    result: KeyedGraph[T] = KeyedGraph()
    _collect_downstream(graph, root, result)
    _collect_upstream(graph, root, result)
    logger.debug(
        "Neighborhood of %s: %d nodes, %d edges",
        graph.identity(root),
        result.node_count(),
        result.edge_count(),
    )
    return result


def subgraph_of(
    graph: KeyedGraph[T], root: int, direction: Optional[Direction] = None
) -> KeyedGraph[T]:
    """Dispatch to the extractor matching ``direction`` (default: both)."""
    direction = Direction(direction) if direction is not None else Direction.BOTH
    if direction is Direction.DOWNSTREAM:
        return downstream_of(graph, root)
    if direction is Direction.UPSTREAM:
        return upstream_of(graph, root)
    return neighborhood_of(graph, root)
