"""Source tree walker using scandir and generator pattern."""

import logging
import os
from pathlib import Path
from typing import Generator, Iterable, Optional, Pattern, Set

from incgraph.utils.path_utils import filename_matches

logger = logging.getLogger("incgraph.utils.scanner")

DEFAULT_EXTENSIONS = ("c", "cc", "cpp", "cxx", "h", "hpp", "hxx")

# Version-control metadata never holds sources worth scanning.
_SKIP_DIRS = {".git", ".svn", ".hg"}


def normalize_extensions(extensions: Iterable[str]) -> Set[str]:
    """Lower-case extensions and strip any leading dot."""
    return {ext.strip().lstrip(".").lower() for ext in extensions if ext.strip()}


def scan_sources(
    root_path: Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    exclude: Optional[Pattern[str]] = None,
) -> Generator[Path, None, None]:
    """Walk ``root_path`` and yield candidate source files.

    Args:
        root_path: Root directory to scan.
        extensions: Accepted file extensions, without dots.
        exclude: Files whose name matches this pattern are skipped.

    Yields:
        Path objects for matching files, in sorted order per directory.
    """
    root_path = Path(root_path).absolute()
    wanted = normalize_extensions(extensions)

    stack = [root_path]

    while stack:
        current_dir = stack.pop()

        try:
            # Sort for deterministic order
            entries = sorted(os.scandir(current_dir), key=lambda e: e.name)
        except OSError as exc:
            logger.warning("Error reading directory %s: %s", current_dir, exc)
            continue

        dirs = []
        files = []

        for entry in entries:
            path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as exc:
                logger.warning("Error reading directory entry %s: %s", path, exc)
                continue

            if is_dir:
                if entry.name not in _SKIP_DIRS:
                    dirs.append(path)
            else:
                files.append(path)

        # Add dirs to stack (reversed to maintain order when popping)
        stack.extend(reversed(dirs))

        for file_path in files:
            if file_path.suffix.lstrip(".").lower() not in wanted:
                continue
            if filename_matches(exclude, file_path):
                logger.debug("Excluded by pattern: %s", file_path)
                continue
            yield file_path
