"""Parsers package.

Language-specific include extraction and graph building live here.
"""

from incgraph.parsers.cpp.graph_builder import (
    BuildDiagnostics,
    FileReadError,
    IncludeGraphBuilder,
    IncludePolicy,
    UnresolvedInclude,
    build_include_graph,
)
from incgraph.parsers.cpp.include_extractor import extract_includes, scan_file
from incgraph.parsers.cpp.path_resolver import PathResolver, resolve_include

__all__ = [
    "BuildDiagnostics",
    "FileReadError",
    "IncludeGraphBuilder",
    "IncludePolicy",
    "PathResolver",
    "UnresolvedInclude",
    "build_include_graph",
    "extract_includes",
    "resolve_include",
    "scan_file",
]
