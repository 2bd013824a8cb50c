"""Rendering of DOT files through the Graphviz ``dot`` executable."""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from incgraph.errors import RenderError

logger = logging.getLogger("incgraph.export.render")

DEFAULT_EXECUTABLE = "dot"


def render(
    dot_path: Path,
    fmt: str = "pdf",
    output_path: Optional[Path] = None,
    executable: str = DEFAULT_EXECUTABLE,
) -> Path:
    """Render a DOT file to an image.

    Args:
        dot_path: Input DOT file.
        fmt: Graphviz output format (pdf, svg, png, ...).
        output_path: Destination; defaults to ``dot_path`` with ``fmt`` suffix.
        executable: Name or path of the Graphviz layout program.

    Returns:
        Path: The rendered file.

    Raises:
        RenderError: If the executable is missing or exits with an error.
    """
    dot_path = Path(dot_path)
    output_path = Path(output_path) if output_path else dot_path.with_suffix(f".{fmt}")

    program = shutil.which(executable)
    if program is None:
        raise RenderError(
            f"Graphviz executable not found: {executable}. "
            f'Run "dot -T{fmt} {dot_path} -o {output_path}" once it is installed.'
        )

    logger.info("Rendering %s -> %s", dot_path, output_path)
    try:
        subprocess.run(
            [program, f"-T{fmt}", str(dot_path), "-o", str(output_path)],
            check=True,
            capture_output=True,
            text=True,
        )
    except subprocess.CalledProcessError as e:
        raise RenderError(
            f"{executable} exited with status {e.returncode}: {e.stderr.strip()}"
        ) from e
    except OSError as e:
        raise RenderError(f"Failed to run {executable}: {e}") from e

    return output_path
