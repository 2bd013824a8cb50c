"""Include graph construction.

Drives extraction and resolution for each candidate file and records one
edge per surviving include directive. Per-file failures never abort the
scan: unreadable files are skipped and unresolved includes become edges to
placeholder nodes, and both are reported through ``BuildDiagnostics``.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Pattern, Sequence, Union

from incgraph.graph.backend import KeyedGraph
from incgraph.graph.identity import FileIdentity, IncludeReference
from incgraph.parsers.cpp.include_extractor import scan_file
from incgraph.parsers.cpp.path_resolver import PathResolver
from incgraph.utils.path_utils import (
    canonicalize,
    name_matches,
    normalize_path_separators,
)

logger = logging.getLogger("incgraph.parsers.cpp.graph_builder")


@dataclass(frozen=True)
class IncludePolicy:
    """Which include classifications are recorded."""

    user: bool = True
    system: bool = True

    def accepts(self, reference: IncludeReference) -> bool:
        return self.system if reference.is_system else self.user


@dataclass(frozen=True)
class FileReadError:
    """A candidate file that could not be read."""

    path: Path
    reason: str


@dataclass(frozen=True)
class UnresolvedInclude:
    """An include that was not found next to its file or on a search path."""

    source: Path
    reference: IncludeReference


@dataclass
class BuildDiagnostics:
    """Per-file problems collected during a build."""

    read_errors: List[FileReadError] = field(default_factory=list)
    unresolved: List[UnresolvedInclude] = field(default_factory=list)
    files_scanned: int = 0
    includes_found: int = 0
    includes_filtered: int = 0

    @property
    def has_problems(self) -> bool:
        return bool(self.read_errors or self.unresolved)


class IncludeGraphBuilder:
    """Builds a ``KeyedGraph[FileIdentity]`` from a set of source files.

    Args:
        search_paths: Extra include directories, in priority order.
        policy: Which include classifications to record.
        exclude: Includes whose raw spelling matches this pattern are dropped.
        canonical_paths: Canonicalize node paths with ``realpath`` so that
            symlinked or ``..``-laden spellings of one file share a node.
    """

    def __init__(
        self,
        search_paths: Sequence[Union[str, Path]] = (),
        policy: Optional[IncludePolicy] = None,
        exclude: Optional[Pattern[str]] = None,
        canonical_paths: bool = False,
    ) -> None:
        self.resolver = PathResolver(search_paths)
        self.policy = policy or IncludePolicy()
        self.exclude = exclude
        self.canonical_paths = canonical_paths
        self.graph: KeyedGraph[FileIdentity] = KeyedGraph()
        self.diagnostics = BuildDiagnostics()

    def _node_path(self, path: Path) -> Path:
        return canonicalize(path) if self.canonical_paths else path

    def add_file(self, file_path: Union[str, Path]) -> bool:
        """Scan one file and record its include edges.

        Args:
            file_path: Candidate source file.

        Returns:
            bool: False if the file could not be read.
        """
        file_path = Path(file_path).absolute()
        try:
            includes = scan_file(file_path)
        except OSError as exc:
            logger.warning("Unable to process file %s: %s", file_path, exc)
            self.diagnostics.read_errors.append(FileReadError(file_path, str(exc)))
            return False

        self.diagnostics.files_scanned += 1
        self.diagnostics.includes_found += len(includes)

        source = FileIdentity(self._node_path(file_path), False)
        self.graph.add_node(source)

        for reference in includes:
            if not self.policy.accepts(reference):
                self.diagnostics.includes_filtered += 1
                continue
            if name_matches(self.exclude, reference.spelled_path):
                logger.debug("Excluded include %s in %s", reference, file_path)
                self.diagnostics.includes_filtered += 1
                continue
            target = self._resolve(reference, file_path)
            self.graph.add_edge(source, target)

        return True

    def _resolve(self, reference: IncludeReference, file_path: Path) -> FileIdentity:
        resolved = self.resolver.resolve(reference.spelled_path, file_path.parent)
        if resolved is not None:
            return FileIdentity(self._node_path(resolved), reference.is_system)

        logger.warning(
            "Unable to locate include %s (line %d) in file %s",
            reference,
            reference.line,
            file_path,
        )
        self.diagnostics.unresolved.append(UnresolvedInclude(file_path, reference))
        # Placeholder keyed by the normalized but unresolved spelling.
        return FileIdentity(
            normalize_path_separators(reference.spelled_path), reference.is_system
        )

    def build(self, candidates: Iterable[Union[str, Path]]) -> KeyedGraph[FileIdentity]:
        """Scan every candidate file and return the accumulated graph.

        Candidates are processed in sorted order so that node handles, and
        therefore serialized output, are reproducible between runs.
        """
        for file_path in sorted({Path(p) for p in candidates}):
            self.add_file(file_path)

        logger.info(
            "Scanned %d files: %d nodes, %d edges, %d unresolved includes",
            self.diagnostics.files_scanned,
            self.graph.node_count(),
            self.graph.edge_count(),
            len(self.diagnostics.unresolved),
        )
        return self.graph


def build_include_graph(
    candidates: Iterable[Union[str, Path]],
    search_paths: Sequence[Union[str, Path]] = (),
    policy: Optional[IncludePolicy] = None,
    exclude: Optional[Pattern[str]] = None,
) -> KeyedGraph[FileIdentity]:
    """Build an include graph in one call, discarding diagnostics."""
    builder = IncludeGraphBuilder(search_paths, policy, exclude)
    return builder.build(candidates)
