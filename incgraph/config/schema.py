"""Configuration schema definitions using Pydantic for validation.

``ScanConfig`` is the typed bundle the graph engine consumes. Validation
runs before any file is scanned, so a missing root directory or a broken
exclude pattern aborts the run up front with a clear message.
"""

import re
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Pattern

from pydantic import BaseModel, Field, field_validator, model_validator

from incgraph.graph.traversal import Direction
from incgraph.parsers.cpp.graph_builder import IncludePolicy
from incgraph.utils.path_utils import compile_exclude
from incgraph.utils.scanner import DEFAULT_EXTENSIONS, normalize_extensions


class QuoteTypes(str, Enum):
    """Include classifications to parse, as named on the command line.

    both - parse all includes
    angle - parse only system includes (<>)
    quote - parse only user includes ("")
    """

    BOTH = "both"
    ANGLE = "angle"
    QUOTE = "quote"

    def to_policy(self) -> IncludePolicy:
        return IncludePolicy(
            user=self in (QuoteTypes.BOTH, QuoteTypes.QUOTE),
            system=self in (QuoteTypes.BOTH, QuoteTypes.ANGLE),
        )


class ScanConfig(BaseModel):
    """Top-level configuration for a scan.

    Attributes:
        root: Source tree to scan.
        search_paths: Extra include directories, in priority order.
        include_policy: Which include classifications are recorded.
        exclude: Regular expression of file names and include spellings to
            ignore, e.g. ``test_|noisyFile``.
        extensions: Source file extensions to scan.
        output: Destination of the DOT file.
        relative_labels: Label nodes with root-relative paths.
        canonical_paths: Canonicalize node paths through ``realpath``.
        focus: Restrict output to the subgraph around this file.
        direction: Which side of the focus file to keep.
        render_format: Graphviz format to render to after writing DOT.
        dot_executable: Graphviz layout program used for rendering.
    """

    root: Path
    search_paths: List[Path] = Field(default_factory=list)
    include_policy: IncludePolicy = Field(default_factory=IncludePolicy)
    exclude: Optional[str] = None
    extensions: List[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    output: Path = Path("graph.dot")
    relative_labels: bool = False
    canonical_paths: bool = False
    focus: Optional[str] = None
    direction: Direction = Direction.BOTH
    render_format: Optional[str] = None
    dot_executable: str = "dot"

    model_config = {"extra": "forbid"}

    @model_validator(mode="before")
    @classmethod
    def apply_quote_types(cls, data: Any) -> Any:
        """Translate a ``quote_types`` entry into ``include_policy``."""
        if isinstance(data, dict) and "quote_types" in data:
            data = dict(data)
            data["include_policy"] = QuoteTypes(data.pop("quote_types")).to_policy()
        return data

    @field_validator("root")
    @classmethod
    def validate_root(cls, v: Path) -> Path:
        """Validate that the root is an accessible directory."""
        v = v.expanduser()
        if not v.is_dir():
            raise ValueError(f"Unable to access directory: {v}")
        return v.absolute()

    @field_validator("search_paths")
    @classmethod
    def expand_search_paths(cls, v: List[Path]) -> List[Path]:
        return [p.expanduser().absolute() for p in v]

    @field_validator("exclude")
    @classmethod
    def validate_exclude(cls, v: Optional[str]) -> Optional[str]:
        """Validate that the exclude pattern compiles."""
        try:
            compile_exclude(v)
        except re.error as exc:
            raise ValueError(f"Unable to parse exclude regex {v!r}: {exc}") from exc
        return v or None

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, v: List[str]) -> List[str]:
        normalized = sorted(normalize_extensions(v))
        if not normalized:
            raise ValueError("extensions must contain at least one extension")
        return normalized

    def exclude_pattern(self) -> Optional[Pattern[str]]:
        return compile_exclude(self.exclude)
