"""C/C++ include directive extraction.

Scans raw source text for ``#include`` lines. Matching is purely lexical:
comments, string literals and conditional compilation are not understood, so
a commented-out or ``#ifdef``-disabled include is still reported.
"""

import logging
import re
from pathlib import Path
from typing import List

from incgraph.graph.identity import IncludeReference

logger = logging.getLogger("incgraph.parsers.cpp.include_extractor")

# Line start, optional blanks, '#', optional blanks, 'include', optional
# blanks, then either <path> (system) or "path" (user).
INCLUDE_RE = re.compile(
    r'^[ \t]*#[ \t]*include[ \t]*(?:<(?P<system>[^>\r\n]*)>|"(?P<user>[^"\r\n]*)")',
    flags=re.MULTILINE,
)


def extract_includes(text: str) -> List[IncludeReference]:
    """Return every include directive found in ``text``, in source order.

    Args:
        text: Full contents of a source file.

    Returns:
        List[IncludeReference]: One reference per matched directive.
    """
    includes: List[IncludeReference] = []
    line, pos = 1, 0
    for match in INCLUDE_RE.finditer(text):
        line += text.count("\n", pos, match.start())
        pos = match.start()
        system = match.group("system")
        if system is not None:
            includes.append(IncludeReference(system, True, line))
        else:
            includes.append(IncludeReference(match.group("user"), False, line))
    return includes


def read_source(file_path: Path) -> str:
    """Read a source file as text.

    Undecodable bytes are replaced rather than rejected so that a stray
    Latin-1 comment does not hide the file's includes.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    raw = file_path.read_bytes()
    return raw.decode("utf-8", errors="replace")


def scan_file(file_path: Path) -> List[IncludeReference]:
    """Read ``file_path`` and extract its includes.

    Raises:
        OSError: If the file cannot be read.
    """
    includes = extract_includes(read_source(file_path))
    logger.debug("Parsed %s: %d includes", file_path.name, len(includes))
    return includes
