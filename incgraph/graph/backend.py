"""Keyed graph store.

Wraps a NetworkX ``MultiDiGraph`` whose nodes are integer handles. Identities
live in an arena indexed by handle, and an auxiliary table maps each identity
back to its handle. That table is the only place consulted to decide whether
a node already exists, so one identity never maps to two nodes.
"""

import logging
from typing import Callable, Dict, Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

import networkx as nx

logger = logging.getLogger("incgraph.graph.backend")

T = TypeVar("T", bound=Hashable)


class KeyedGraph(Generic[T]):
    """Directed multigraph keyed by a hashable identity type.

    Handles are assigned in insertion order starting at zero. They are
    stable for the lifetime of the graph but carry no meaning of their own.
    """

    def __init__(self) -> None:
        """Initialize an empty graph."""
        self._graph = nx.MultiDiGraph()
        self._identities: List[T] = []
        self._index: Dict[T, int] = {}

    @property
    def native_graph(self) -> nx.MultiDiGraph:
        """Get native NetworkX graph for advanced operations.

        Returns:
            nx.MultiDiGraph: Native graph over integer handles.
        """
        return self._graph

    def add_node(self, identity: T) -> int:
        """Return the handle of ``identity``, creating the node if needed.

        Args:
            identity: Node identity.

        Returns:
            int: Node handle.
        """
        handle = self._index.get(identity)
        if handle is not None:
            return handle

        handle = len(self._identities)
        self._identities.append(identity)
        self._index[identity] = handle
        self._graph.add_node(handle)
        logger.debug("Added node %d: %s", handle, identity)
        return handle

    def add_edge(self, source: T, target: T) -> int:
        """Add a directed edge ``source -> target``.

        Both endpoints are looked up or created first. Repeated edges between
        the same pair accumulate.

        Args:
            source: Source identity.
            target: Target identity.

        Returns:
            int: Edge key among parallel edges.
        """
        src = self.add_node(source)
        dst = self.add_node(target)
        return self._graph.add_edge(src, dst)

    def update(self, other: "KeyedGraph[T]") -> None:
        """Insert every node and edge of ``other`` into this graph."""
        for _, identity in other.nodes():
            self.add_node(identity)
        for source, target in other.edge_identities():
            self.add_edge(source, target)

    def contains_node(self, identity: T) -> bool:
        return identity in self._index

    def handle(self, identity: T) -> Optional[int]:
        """Return the handle of ``identity`` or None if absent."""
        return self._index.get(identity)

    def identity(self, handle: int) -> T:
        """Return the identity stored at ``handle``.

        Raises:
            IndexError: If the handle does not belong to this graph.
        """
        if handle < 0:
            raise IndexError(f"Invalid node handle: {handle}")
        return self._identities[handle]

    def find(self, predicate: Callable[[T], bool]) -> List[int]:
        """Return handles of every node whose identity satisfies ``predicate``.

        Linear scan; may return zero, one or many handles.
        """
        return [
            handle
            for handle, identity in enumerate(self._identities)
            if predicate(identity)
        ]

    def successors(self, handle: int) -> Iterator[int]:
        return self._graph.successors(handle)

    def predecessors(self, handle: int) -> Iterator[int]:
        return self._graph.predecessors(handle)

    def nodes(self) -> Iterator[Tuple[int, T]]:
        """Iterate over ``(handle, identity)`` pairs in handle order."""
        return iter(enumerate(self._identities))

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Iterate over ``(source_handle, target_handle)`` pairs.

        Parallel edges are yielded once per insertion.
        """
        return iter(self._graph.edges())

    def has_edge(self, source: T, target: T) -> bool:
        src = self._index.get(source)
        dst = self._index.get(target)
        if src is None or dst is None:
            return False
        return self._graph.has_edge(src, dst)

    def edge_identities(self) -> Iterator[Tuple[T, T]]:
        """Iterate over edges as ``(source_identity, target_identity)``."""
        for src, dst in self._graph.edges():
            yield self._identities[src], self._identities[dst]

    def node_count(self) -> int:
        return len(self._identities)

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def __len__(self) -> int:
        return self.node_count()

    def __contains__(self, identity: object) -> bool:
        return identity in self._index

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(nodes={self.node_count()}, "
            f"edges={self.edge_count()})"
        )
