#!/usr/bin/env python3
"""
filescout CLI

Finds the file that contains a pattern by following a project's local
imports outward from an entry file, and maps the import graph it walks.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, Optional, Set

from exporters import to_mermaid, to_ascii, to_json, result_to_ascii, result_to_json
from scanner.builder import scan, build_import_graph
from scanner.discovery import DEFAULT_EXCLUDE_DIRS, SnapshotError, load_file_set
from scanner.models import DEFAULT_MAX_DEPTH, ScanRequest
from scanner.triage import (
    extract_filename_from_error,
    locate_issue,
    match_start_file,
    pattern_for_issue,
)


EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="filescout",
        description="Locate the file containing a pattern by walking local imports from an entry file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  filescout . --start /src/App.jsx --pattern "process."
  filescout project.json --start /App.js --pattern "require(" -f json
  filescout . --error "ReferenceError: process is not defined at App.jsx:12"
  filescout . --start /src/App.jsx --map -f mermaid -o imports.mmd
  filescout . --start /src/App.jsx --map --ignore-missing
        """,
    )

    # Positional arguments
    parser.add_argument(
        "source",
        nargs="?",
        default=".",
        help="Project directory or JSON/YAML/TOML snapshot file (default: current directory)",
    )

    # Search options
    parser.add_argument(
        "-s", "--start",
        type=str,
        default=None,
        help="Entry file to start from, as a key of the file set (e.g. /src/App.jsx)",
    )

    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "-p", "--pattern",
        type=str,
        default=None,
        help="Literal text to search for",
    )
    target.add_argument(
        "-e", "--error",
        type=str,
        default=None,
        help="Runtime error message; start file and pattern are derived from it",
    )

    parser.add_argument(
        "--issue",
        type=str,
        default=None,
        help="Issue description used to pick the pattern with --error",
    )

    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum number of import hops from the start file (default: {DEFAULT_MAX_DEPTH})",
    )

    parser.add_argument(
        "--map",
        action="store_true",
        help="Output the reachable import graph instead of searching",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=["ascii", "mermaid", "json"],
        default="ascii",
        help="Output format (default: ascii)",
    )

    parser.add_argument(
        "--orientation",
        choices=["LR", "TD", "TB", "RL", "BT"],
        default="LR",
        help="Mermaid flowchart orientation (default: LR)",
    )

    parser.add_argument(
        "--group-by-dir",
        action="store_true",
        help="Group nodes by top-level directory in Mermaid output",
    )

    parser.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="ASCII output style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )

    parser.add_argument(
        "--ignore-missing",
        action="store_true",
        help="Hide unresolved imports from graph output",
    )

    # Loading options
    parser.add_argument(
        "--include-ext",
        nargs="+",
        default=None,
        help="File extensions to load from a directory (e.g., .js .jsx)",
    )

    parser.add_argument(
        "--exclude-dir",
        nargs="+",
        default=None,
        help="Directory names to skip when loading a directory",
    )

    # Logging options
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every scanned file and queued import",
    )
    verbosity.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log warnings and errors",
    )

    parsed = parser.parse_args(args)

    if not parsed.map and parsed.pattern is None and parsed.error is None:
        parser.error("one of --pattern, --error or --map is required")
    if parsed.error is None and parsed.start is None:
        parser.error("--start is required unless --error is given")
    if parsed.max_depth < 0:
        parser.error("--max-depth must be >= 0")

    return parsed


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send log records to stderr at the requested verbosity."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _loading_options(parsed) -> Dict[str, Optional[Set[str]]]:
    include_ext: Optional[Set[str]] = None
    if parsed.include_ext:
        include_ext = set()
        for ext in parsed.include_ext:
            if not ext.startswith("."):
                ext = "." + ext
            include_ext.add(ext.lower())

    exclude_dirs: Optional[Set[str]] = None
    if parsed.exclude_dir:
        exclude_dirs = set(parsed.exclude_dir) | DEFAULT_EXCLUDE_DIRS

    return {"include_ext": include_ext, "exclude_dirs": exclude_dirs}


def _resolve_start(parsed, files) -> Optional[str]:
    if parsed.start is not None:
        return match_start_file(files, parsed.start) or parsed.start
    return match_start_file(files, extract_filename_from_error(parsed.error)) or next(iter(files), None)


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    configure_logging(parsed.verbose, parsed.quiet)

    source = Path(parsed.source)
    try:
        files = load_file_set(source, **_loading_options(parsed))
    except SnapshotError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if not files:
        print(f"Error: no source files found in '{parsed.source}'", file=sys.stderr)
        return EXIT_ERROR

    exit_code = EXIT_FOUND
    result = None
    pattern = parsed.pattern
    if pattern is None and parsed.error is not None:
        pattern = pattern_for_issue(parsed.issue if parsed.issue is not None else parsed.error)

    if not parsed.map:
        if parsed.start is None:
            result = locate_issue(
                files,
                parsed.error,
                issue=parsed.issue,
                max_depth=parsed.max_depth,
            )
        else:
            result = scan(ScanRequest(
                files=files,
                start_file=_resolve_start(parsed, files),
                search_pattern=pattern,
                max_depth=parsed.max_depth,
            ))

        if result.error:
            print(f"Error: {result.error}", file=sys.stderr)
            return EXIT_ERROR
        if not result.found:
            exit_code = EXIT_NOT_FOUND

    # Generate output
    if parsed.map or parsed.format == "mermaid":
        start = result.import_path[0] if result and result.import_path else _resolve_start(parsed, files)
        try:
            graph = build_import_graph(files, start, max_depth=parsed.max_depth)
        except KeyError:
            print(f"Error: Start file not found: {start}", file=sys.stderr)
            return EXIT_ERROR
        highlight = result.filename if result else None

        if parsed.format == "mermaid":
            output = to_mermaid(
                graph=graph,
                orientation=parsed.orientation,
                group_by_directory=parsed.group_by_dir,
                include_missing=not parsed.ignore_missing,
                highlight_path=result.import_path if result else None,
            )
        elif parsed.format == "json":
            output = to_json(graph, include_missing=not parsed.ignore_missing)
        else:
            output = to_ascii(
                graph,
                style=parsed.ascii_style,
                include_missing=not parsed.ignore_missing,
                highlight=highlight,
            )
    elif parsed.format == "json":
        output = result_to_json(result)
    else:
        output = result_to_ascii(result, search_pattern=pattern, style=parsed.ascii_style)

    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output + "\n", encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return EXIT_ERROR
    else:
        print(output)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
