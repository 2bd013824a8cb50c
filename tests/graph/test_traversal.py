"""Tests for directional subgraph extraction."""

from pathlib import Path
from typing import Set, Tuple

from incgraph.graph import (
    Direction,
    FileIdentity,
    KeyedGraph,
    downstream_of,
    neighborhood_of,
    subgraph_of,
    upstream_of,
)


def _f(name: str) -> FileIdentity:
    return FileIdentity(Path("/src") / name)


def _names(graph: KeyedGraph) -> Set[str]:
    return {ident.display_name for _, ident in graph.nodes()}


def _edge_names(graph: KeyedGraph) -> Set[Tuple[str, str]]:
    return {(s.display_name, d.display_name) for s, d in graph.edge_identities()}


def _chain() -> KeyedGraph:
    graph = KeyedGraph()
    graph.add_edge(_f("a"), _f("b"))
    graph.add_edge(_f("b"), _f("c"))
    return graph


def _root(graph: KeyedGraph, name: str) -> int:
    handles = graph.find(lambda ident: ident.display_name == name)
    assert len(handles) == 1
    return handles[0]


def test_downstream_follows_outgoing_edges() -> None:
    graph = _chain()
    sub = downstream_of(graph, _root(graph, "a"))

    assert _names(sub) == {"a", "b", "c"}
    assert _edge_names(sub) == {("a", "b"), ("b", "c")}
    assert sub.edge_count() == 2


def test_upstream_preserves_edge_direction() -> None:
    graph = _chain()
    sub = upstream_of(graph, _root(graph, "c"))

    assert _names(sub) == {"a", "b", "c"}
    assert _edge_names(sub) == {("a", "b"), ("b", "c")}


def test_downstream_of_leaf_is_root_only() -> None:
    graph = _chain()
    sub = downstream_of(graph, _root(graph, "c"))

    assert _names(sub) == {"c"}
    assert sub.edge_count() == 0


def test_cycle_terminates_with_each_node_once() -> None:
    graph = KeyedGraph()
    graph.add_edge(_f("a"), _f("b"))
    graph.add_edge(_f("b"), _f("a"))
    root = _root(graph, "a")

    for extract in (downstream_of, upstream_of, neighborhood_of):
        sub = extract(graph, root)
        assert sub.node_count() == 2
        assert _names(sub) == {"a", "b"}


def test_self_include_terminates() -> None:
    graph = KeyedGraph()
    graph.add_edge(_f("a"), _f("a"))

    sub = neighborhood_of(graph, 0)
    assert sub.node_count() == 1


def test_subgraph_is_independent_of_source() -> None:
    graph = _chain()
    sub = downstream_of(graph, _root(graph, "a"))

    sub.add_edge(_f("c"), _f("d"))

    assert graph.node_count() == 3
    assert not graph.contains_node(_f("d"))


def test_visited_nodes_are_not_retraversed() -> None:
    # Diamond: a -> b -> d, a -> c -> d. d is discovered once, via b.
    graph = KeyedGraph()
    graph.add_edge(_f("a"), _f("b"))
    graph.add_edge(_f("a"), _f("c"))
    graph.add_edge(_f("b"), _f("d"))
    graph.add_edge(_f("c"), _f("d"))

    sub = downstream_of(graph, _root(graph, "a"))

    assert sub.node_count() == 4
    assert sub.edge_count() == 3
    assert _edge_names(sub) == {("a", "b"), ("a", "c"), ("b", "d")}


def _complex_tree() -> KeyedGraph:
    """Shape of a small project: two sources sharing a header."""
    graph = KeyedGraph()
    graph.add_edge(_f("test_1.cpp"), _f("inc_1.h"))
    graph.add_edge(_f("test_1.cpp"), FileIdentity(Path("set"), True))
    graph.add_edge(_f("test_1.cpp"), FileIdentity(Path("map"), True))
    graph.add_edge(_f("inc_1.h"), FileIdentity(Path("vector"), True))
    graph.add_edge(_f("a.cpp"), _f("b.h"))
    graph.add_edge(_f("b.h"), _f("inc_1.h"))
    graph.add_edge(_f("b.cpp"), _f("inc_1.h"))
    graph.add_edge(_f("b.cpp"), FileIdentity(Path("string"), True))
    return graph


def test_neighborhood_is_union_of_both_sides() -> None:
    graph = _complex_tree()
    root = _root(graph, "inc_1.h")

    down = downstream_of(graph, root)
    up = upstream_of(graph, root)
    both = neighborhood_of(graph, root)

    assert _names(down) == {"inc_1.h", "vector"}
    assert _names(up) == {"inc_1.h", "test_1.cpp", "b.h", "a.cpp", "b.cpp"}
    assert _names(both) == _names(down) | _names(up)
    assert _edge_names(both) == _edge_names(down) | _edge_names(up)
    assert "string" not in _names(both)


def test_subgraph_of_dispatches_on_direction() -> None:
    graph = _complex_tree()
    root = _root(graph, "test_1.cpp")

    assert _names(subgraph_of(graph, root, Direction.DOWNSTREAM)) == {
        "test_1.cpp",
        "inc_1.h",
        "set",
        "map",
        "vector",
    }
    assert _names(subgraph_of(graph, root, "upstream")) == {"test_1.cpp"}
    assert _names(subgraph_of(graph, root)) == _names(
        subgraph_of(graph, root, Direction.DOWNSTREAM)
    )
