"""Main CLI entry point for the xml-path-cursor command-line tool.

Provides commands for dumping the structure of XML files, enumerating every
occurrence of a path and scanning for repeated elements, all in a single
forward pass with bounded memory.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from xml_path_cursor import __version__
from xml_path_cursor.navigation import PathCursor, iter_path, iter_scan, split_path
from xml_path_cursor.shared import (
    ConfigError,
    ConfigValidationError,
    CursorConfig,
    NavigationError,
    get_logger,
)
from xml_path_cursor.tools import dump


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self):
        self.cursor_config = CursorConfig()
        self.output_format = "text"
        self.verbose = False
        self.quiet = False

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        The file may hold an ``output_format`` key and a ``cursor`` object with
        :class:`CursorConfig` fields.
        """
        config = cls()
        if config_path.exists():
            try:
                data = json.loads(config_path.read_text())
                if not isinstance(data, dict):
                    raise ConfigValidationError("Config file must hold a JSON object")
                if "cursor" in data:
                    config.cursor_config = CursorConfig.from_dict(data["cursor"])
                config.output_format = data.get("output_format", config.output_format)
            except (OSError, ValueError, ConfigError) as e:
                print(f"Warning: Could not load config file: {e}", file=sys.stderr)

        return config

    def apply_arguments(self, args: argparse.Namespace) -> None:
        """Apply command-line overrides."""
        overrides: Dict[str, Any] = {}
        if getattr(args, "case_sensitive", False):
            overrides["case_sensitive"] = True
        if getattr(args, "buffer_size", None):
            overrides["buffer_size"] = args.buffer_size
        if overrides:
            self.cursor_config = self.cursor_config.override(**overrides)
        if getattr(args, "format", None):
            self.output_format = args.format
        self.verbose = getattr(args, "verbose", False)
        self.quiet = getattr(args, "quiet", False)


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {value}")
    return number


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xml-path-cursor",
        description="Navigate large XML documents by path without building a tree"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Dump command
    dump_parser = subparsers.add_parser("dump", help="Print the structure of XML files")
    dump_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="XML files to dump"
    )
    dump_parser.add_argument(
        "--margin",
        default=" ",
        help="Indentation unit per depth level (default: one space)"
    )

    # Path command
    path_parser = subparsers.add_parser("path", help="List every occurrence of a path")
    path_parser.add_argument("file", type=Path, help="XML file to search")
    path_parser.add_argument(
        "--path", "-p",
        required=True,
        help="Slash-separated element names from the root, '*' matches any element"
    )
    path_parser.add_argument(
        "--text", "-t",
        action="store_true",
        help="Include the text of each matched element"
    )
    path_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        help="Output format (default: text)"
    )

    # Scan command
    scan_parser = subparsers.add_parser("scan", help="Find every element with a name")
    scan_parser.add_argument("file", type=Path, help="XML file to scan")
    scan_parser.add_argument("name", help="Element name to look for")
    scan_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        help="Output format (default: text)"
    )

    # Global options
    for sub in (dump_parser, path_parser, scan_parser):
        sub.add_argument(
            "--config", "-c",
            type=Path,
            help="Configuration file path"
        )
        sub.add_argument(
            "--case-sensitive",
            action="store_true",
            help="Match element names exactly"
        )
        sub.add_argument(
            "--buffer-size",
            type=_positive_int,
            help="Bytes read per parser feed"
        )
        sub.add_argument(
            "--stats",
            action="store_true",
            help="Print traversal statistics to stderr"
        )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def format_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format match records for output."""
    if format_type == "json":
        return json.dumps(results, indent=2)

    if not results:
        return "No matches."

    lines = []
    for result in results:
        line = f"{result['depth']:>3}  /{result['path']}"
        if "text" in result:
            text = result["text"]
            line += "  (has children)" if text is None else f"  {text!r}"
        lines.append(line)
    lines.append(f"{len(results)} match(es)")
    return "\n".join(lines)


def _print_stats(args: argparse.Namespace, cursor: PathCursor) -> None:
    if not getattr(args, "stats", False):
        return
    stats = cursor.metrics.to_dict()
    stats["memory_rss_bytes"] = cursor.metrics.memory_rss_bytes
    print(json.dumps(stats), file=sys.stderr)


def _load_config(args: argparse.Namespace) -> CLIConfig:
    config = CLIConfig()
    if args.config and args.config.exists():
        config = CLIConfig.from_file(args.config)
    config.apply_arguments(args)
    return config


def cmd_dump(args: argparse.Namespace) -> int:
    """Handle dump command."""
    config = _load_config(args)
    logger = get_logger(__name__, None, "cli_dump")
    exit_code = 0

    for path in args.paths:
        if len(args.paths) > 1:
            print(f"== {path}")
        try:
            with PathCursor.open(path, config.cursor_config) as cursor:
                dump(cursor, sys.stdout, args.margin)
                _print_stats(args, cursor)
        except (OSError, NavigationError) as e:
            logger.debug("Dump failed", extra={"file": str(path)}, exc_info=True)
            print(f"Failed to dump {path}: {e}", file=sys.stderr)
            exit_code = 1

    return exit_code


def cmd_path(args: argparse.Namespace) -> int:
    """Handle path command."""
    config = _load_config(args)
    try:
        names = split_path(args.path)
    except NavigationError as e:
        print(f"Invalid path: {e}", file=sys.stderr)
        return 1

    results: List[Dict[str, Any]] = []
    try:
        with PathCursor.open(args.file, config.cursor_config) as cursor:
            for depth in iter_path(cursor, names):
                record: Dict[str, Any] = {
                    "depth": depth,
                    "path": "/".join(cursor.current_path),
                }
                if args.text:
                    record["text"] = cursor.back()
                results.append(record)
            _print_stats(args, cursor)
    except (OSError, NavigationError) as e:
        print(f"Failed to search {args.file}: {e}", file=sys.stderr)
        return 1

    print(format_results(results, config.output_format))
    return 0 if results else 1


def cmd_scan(args: argparse.Namespace) -> int:
    """Handle scan command."""
    config = _load_config(args)

    results: List[Dict[str, Any]] = []
    try:
        with PathCursor.open(args.file, config.cursor_config) as cursor:
            for depth in iter_scan(cursor, args.name, 0):
                results.append({"depth": depth, "path": "/".join(cursor.current_path)})
            _print_stats(args, cursor)
    except (OSError, NavigationError) as e:
        print(f"Failed to scan {args.file}: {e}", file=sys.stderr)
        return 1

    print(format_results(results, config.output_format))
    return 0 if results else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Set up logging verbosity
    if args.verbose:
        import logging
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        import logging
        logging.basicConfig(level=logging.ERROR)

    # Route to appropriate command handler
    try:
        if args.command == "dump":
            return cmd_dump(args)
        elif args.command == "path":
            return cmd_path(args)
        elif args.command == "scan":
            return cmd_scan(args)
        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
