"""Public graph API surface."""

from incgraph.graph.backend import KeyedGraph
from incgraph.graph.identity import MISSING_FILENAME, FileIdentity, IncludeReference
from incgraph.graph.traversal import (
    Direction,
    downstream_of,
    neighborhood_of,
    subgraph_of,
    upstream_of,
)

__all__ = [
    "Direction",
    "FileIdentity",
    "IncludeReference",
    "KeyedGraph",
    "MISSING_FILENAME",
    "downstream_of",
    "neighborhood_of",
    "subgraph_of",
    "upstream_of",
]
