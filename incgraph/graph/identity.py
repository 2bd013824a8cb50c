"""Node identity model for the include graph.

A tracked file is identified by its path together with its system/user
classification. Equality is exact: two spellings of the same file yield two
identities unless resolution normalized them beforehand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

MISSING_FILENAME = "[error getting filename]"


@dataclass(frozen=True)
class FileIdentity:
    """Canonical, hashable key of a graph node.

    Attributes:
        path: Absolute path of a scanned or resolved file, or the unresolved
            spelled path for includes that could not be located.
        is_system: True when reached through an angle-bracket include.
    """

    path: Path
    is_system: bool = False

    @classmethod
    def from_path(cls, path: Union[Path, str], is_system: bool = False) -> FileIdentity:
        return cls(Path(path), is_system)

    @property
    def display_name(self) -> str:
        """Base name of the file, or a fixed placeholder when there is none."""
        if self.path.name in ("", ".."):
            return MISSING_FILENAME
        return self.path.name

    def label(self, relative_to: Optional[Path] = None) -> str:
        """Return the text shown for this node.

        Args:
            relative_to: When given, paths inside this directory are shown
                relative to it instead of by base name.

        Returns:
            str: Display label.
        """
        if relative_to is not None and self.path.is_absolute():
            try:
                rel = self.path.relative_to(relative_to)
            except ValueError:
                return self.display_name
            if rel.parts:
                return rel.as_posix()
        return self.display_name

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class IncludeReference:
    """A single ``#include`` directive before path resolution.

    ``line`` is informational and takes no part in comparisons.
    """

    spelled_path: str
    is_system: bool
    line: int = field(default=0, compare=False)

    def __str__(self) -> str:
        if self.is_system:
            return f"<{self.spelled_path}>"
        return f'"{self.spelled_path}"'
