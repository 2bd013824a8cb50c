"""Scan command implementation."""

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.progress import track
from rich.table import Table

from incgraph.config.schema import ScanConfig
from incgraph.errors import ConfigurationError, FocusError, RenderError
from incgraph.export.dot import write_dot
from incgraph.export.render import render
from incgraph.graph.backend import KeyedGraph
from incgraph.graph.identity import FileIdentity
from incgraph.graph.traversal import subgraph_of
from incgraph.parsers.cpp.graph_builder import BuildDiagnostics, IncludeGraphBuilder
from incgraph.runtime.config_loader import load_scan_config
from incgraph.utils.path_utils import path_ends_with
from incgraph.utils.scanner import scan_sources

logger = logging.getLogger("incgraph.cli.scan")


def _split_list(values: Optional[List[str]]) -> Optional[List[str]]:
    """Flatten repeated comma separated option values."""
    if not values:
        return None
    items = []
    for value in values:
        items.extend(part.strip() for part in value.split(",") if part.strip())
    return items


def _cli_overrides(args) -> Dict[str, Any]:
    """Map parsed arguments onto ScanConfig field overrides."""
    quote_types = getattr(args, "quote_types", None)
    extensions = getattr(args, "extensions", None)
    return {
        "root": args.source,
        "output": getattr(args, "output", None),
        "search_paths": _split_list(getattr(args, "include", None)),
        "exclude": getattr(args, "exclude", None),
        "quote_types": quote_types,
        "extensions": _split_list([extensions]) if extensions else None,
        "relative_labels": True if getattr(args, "paths", False) else None,
        "canonical_paths": True if getattr(args, "canonical_paths", False) else None,
        "focus": getattr(args, "focus", None),
        "direction": getattr(args, "direction", None),
        "render_format": getattr(args, "render", None),
        "dot_executable": getattr(args, "dot_executable", None),
    }


def select_focus(
    graph: KeyedGraph[FileIdentity], config: ScanConfig
) -> KeyedGraph[FileIdentity]:
    """Return the subgraph around ``config.focus``.

    The focus matches nodes whose path ends with it component-wise. Several
    nodes may share one path (a header reached through both ``""`` and
    ``<>``); their subgraphs are merged. Matches on different paths are
    ambiguous.

    Raises:
        FocusError: If nothing matches or the match is ambiguous.
    """
    focus = config.focus
    handles = graph.find(lambda identity: path_ends_with(identity.path, focus))
    if not handles:
        raise FocusError(f"No file in the graph matches focus {focus!r}")

    paths = sorted({str(graph.identity(h).path) for h in handles})
    if len(paths) > 1:
        listing = "\n  ".join(paths)
        raise FocusError(
            f"Focus {focus!r} matches {len(paths)} files, use a longer path:\n  {listing}"
        )

    result: KeyedGraph[FileIdentity] = KeyedGraph()
    for handle in handles:
        result.update(subgraph_of(graph, handle, config.direction))
    logger.info(
        "Focus %s (%s): %d nodes, %d edges",
        paths[0],
        config.direction.value,
        result.node_count(),
        result.edge_count(),
    )
    return result


def _print_summary(
    console: Console,
    graph: KeyedGraph[FileIdentity],
    diagnostics: BuildDiagnostics,
    config: ScanConfig,
    elapsed: float,
) -> None:
    table = Table(title="Include graph", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Files scanned", str(diagnostics.files_scanned))
    table.add_row("Unreadable files", str(len(diagnostics.read_errors)))
    table.add_row("Includes found", str(diagnostics.includes_found))
    table.add_row("Unresolved includes", str(len(diagnostics.unresolved)))
    table.add_row("Nodes", str(graph.node_count()))
    table.add_row("Edges", str(graph.edge_count()))
    table.add_row("Output", str(config.output))
    table.add_row("Elapsed", f"{elapsed:.2f}s")
    console.print(table)


def scan_command(args, console: Optional[Console] = None) -> int:
    """Execute scan command.

    Args:
        args: Parsed command-line arguments.
        console: Rich console for progress and summary output.

    Returns:
        int: Exit code.
    """
    if console is None:
        console = Console()
    start_time = time.time()

    try:
        config = load_scan_config(getattr(args, "config", None), **_cli_overrides(args))
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 1

    logger.info("Scanning path: %s", config.root)
    logger.debug("Search paths: %s", [str(p) for p in config.search_paths])
    logger.debug("Include policy: %s", config.include_policy)

    exclude = config.exclude_pattern()
    candidates = sorted(scan_sources(config.root, config.extensions, exclude))
    logger.info("Found %d candidate files", len(candidates))

    builder = IncludeGraphBuilder(
        search_paths=config.search_paths,
        policy=config.include_policy,
        exclude=exclude,
        canonical_paths=config.canonical_paths,
    )
    for file_path in track(
        candidates, description="Scanning", console=console, transient=True
    ):
        builder.add_file(file_path)
    graph = builder.graph

    if config.focus:
        try:
            graph = select_focus(graph, config)
        except FocusError as e:
            logger.error("%s", e)
            return 1

    relative_to = config.root if config.relative_labels else None
    try:
        write_dot(graph, config.output, relative_to=relative_to)
    except OSError as e:
        logger.error("Failed to write graph to %s: %s", config.output, e)
        return 1

    _print_summary(console, graph, builder.diagnostics, config, time.time() - start_time)

    if config.render_format:
        try:
            image = render(
                config.output,
                fmt=config.render_format,
                executable=config.dot_executable,
            )
        except RenderError as e:
            logger.error("Rendering failed: %s", e)
            return 1
        console.print(f"Rendered {image}")
    else:
        output = Path(config.output)
        console.print(
            f'Now run "dot -Tpdf {output} > {output.with_suffix(".pdf")}" to render the graph.'
        )

    return 0
