"""Main CLI entry point for incgraph.

Provides commands: scan
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from incgraph.cli.scan import scan_command
from incgraph.config.schema import QuoteTypes
from incgraph.graph.traversal import Direction

logger = logging.getLogger("incgraph.cli")


def setup_logging(
    verbose: bool = False,
    console: Optional[Console] = None,
    log_file: Optional[str] = None,
) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
        log_file: Also write plain-text log lines to this file (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    # Create RichHandler for coordinated output with progress display
    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )
    handlers: List[logging.Handler] = [handler]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] [%(levelname)s] %(message)s")
        )
        handlers.append(file_handler)

    # Configure root logger
    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="incgraph",
        description="Incgraph - C/C++ Include Graph Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-file",
        help="Output log to file (optional). When specified, logs are written to this file in addition to console.",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Scan command
    scan_parser = subparsers.add_parser(
        "scan",
        help="Scan a source tree and write its include graph as DOT",
    )
    scan_parser.add_argument(
        "source",
        help="Path to the source code",
    )
    scan_parser.add_argument(
        "-o",
        "--output",
        help="Output DOT file (default: graph.dot)",
    )
    scan_parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional scan configuration. Can be a path to a TOML/JSON "
            "file (e.g. incgraph.toml) or an inline TOML/JSON string. "
            "Command-line options take precedence over its values."
        ),
    )
    scan_parser.add_argument(
        "--include",
        action="append",
        metavar="PATHS",
        help="Comma separated list of include search paths (repeatable)",
    )
    scan_parser.add_argument(
        "--exclude",
        help=(
            "Regular expression of filenames to ignore, applied to scanned "
            'files and include names. Example: --exclude "test_|noisyFile"'
        ),
    )
    scan_parser.add_argument(
        "--quote-types",
        choices=[q.value for q in QuoteTypes],
        help=(
            "Select which type of includes to parse: both - the default, "
            'parse all includes; angle - only "system" includes (<>); '
            'quote - only "user" includes ("")'
        ),
    )
    scan_parser.add_argument(
        "--extensions",
        help="Comma separated list of file extensions to scan (default: c,cc,cpp,cxx,h,hpp,hxx)",
    )
    scan_parser.add_argument(
        "--paths",
        action="store_true",
        help="Leave root-relative paths in displayed filenames",
    )
    scan_parser.add_argument(
        "--canonical-paths",
        action="store_true",
        help="Resolve symlinks and '..' segments so one file maps to one node",
    )
    scan_parser.add_argument(
        "--focus",
        help="Only output the subgraph around this file (path or path suffix)",
    )
    scan_parser.add_argument(
        "--direction",
        choices=[d.value for d in Direction],
        help=(
            "With --focus: downstream - files it includes; upstream - files "
            "that include it; both - the default, the union of the two"
        ),
    )
    scan_parser.add_argument(
        "--render",
        metavar="FORMAT",
        help="Render the DOT file with Graphviz to this format (e.g. pdf, svg, png)",
    )
    scan_parser.add_argument(
        "--dot-executable",
        help="Graphviz layout program used by --render (default: dot)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console(stderr=True)
    setup_logging(args.verbose, console=console, log_file=args.log_file)

    if args.command == "scan":
        try:
            return scan_command(args, console=console)
        except KeyboardInterrupt:
            logger.warning("Scan interrupted by user (Ctrl+C)")
            return 130  # Standard exit code for SIGINT
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
