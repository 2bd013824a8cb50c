"""Resolution of include spellings to files on disk."""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from incgraph.utils.path_utils import normalize_path_separators

logger = logging.getLogger("incgraph.parsers.cpp.path_resolver")


def resolve_include(
    reference: Union[str, Path],
    source_dir: Path,
    search_paths: Iterable[Path] = (),
) -> Optional[Path]:
    """Convert a relative include path (e.g. ``<Windows.h>``) into a file path.

    The directory of the including file is searched first, then each search
    path in order. Nothing is canonicalized: the returned path is the plain
    join of the winning directory and the normalized reference.

    Args:
        reference: Include spelling, with either slash style.
        source_dir: Directory containing the including file.
        search_paths: Extra include directories, in priority order.

    Returns:
        Optional[Path]: First existing candidate, or None. An empty spelling
        never resolves.
    """
    if not str(reference):
        return None
    relative = normalize_path_separators(reference)

    candidate = source_dir / relative
    if candidate.exists():
        return candidate

    for prefix in search_paths:
        candidate = Path(prefix) / relative
        if candidate.exists():
            return candidate

    return None


class PathResolver:
    """Include resolver bound to a fixed search path list.

    Results are memoized per ``(reference, source_dir)``; since the search
    path list never changes for a resolver, cached answers are identical to
    a fresh search.
    """

    def __init__(self, search_paths: Sequence[Union[str, Path]] = ()) -> None:
        self.search_paths: List[Path] = [Path(p).absolute() for p in search_paths]
        self._cache: Dict[Tuple[str, Path], Optional[Path]] = {}

    def resolve(self, reference: str, source_dir: Path) -> Optional[Path]:
        key = (reference, source_dir)
        if key in self._cache:
            return self._cache[key]
        result = resolve_include(reference, source_dir, self.search_paths)
        self._cache[key] = result
        return result

    def cache_size(self) -> int:
        return len(self._cache)
