"""
Command-line argument parsing for i18n-retrofit.

This module parses the ``scan``, ``apply`` and ``init-config`` subcommands
and the global options shared by all of them.
"""

import argparse
import sys
from pathlib import Path
from typing import NamedTuple

from ..core.version import get_version


class PathValidationError(Exception):
    """Raised when a path validation fails."""

    pass


class ParsedArgs(NamedTuple):
    """Container for parsed command-line arguments."""

    command: str
    config_file: Path | None
    log_folder: Path | None
    verbose: bool
    paths: list[Path]
    excluded_dirs: list[str]
    min_confidence: int | None
    output: Path | None
    changes_file: Path | None
    base_path: Path | None
    dry_run: bool


def validate_config_file_path(config_file_str: str) -> Path:
    """
    Validate configuration file path.

    Args:
        config_file_str: String path to configuration file

    Returns:
        Resolved Path object for the configuration file

    Raises:
        PathValidationError: If the configuration file path is invalid
    """
    try:
        config_file = Path(config_file_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid config file path: {e}") from e

    if config_file.exists() and config_file.is_dir():
        raise PathValidationError(
            f"Config file path exists but is not a file: {config_file}"
        )

    if not config_file.parent.exists():
        raise PathValidationError(
            f"Parent directory for config file does not exist: {config_file.parent}"
        )

    return config_file


def validate_folder_path(path_str: str, folder_name: str) -> Path:
    """
    Validate and resolve a folder path.

    Args:
        path_str: String representation of the folder path
        folder_name: Name of the folder (for error messages)

    Returns:
        Resolved absolute path to the folder

    Raises:
        PathValidationError: If the path is invalid
    """
    try:
        path = Path(path_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid {folder_name} path: {e}") from e

    if path.exists() and not path.is_dir():
        raise PathValidationError(
            f"{folder_name.capitalize()} path exists but is not a directory: {path}"
        )

    return path


def confidence_value(value: str) -> int:
    """argparse type for a 0-100 confidence score."""
    try:
        score = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid confidence: {value!r}") from e
    if not 0 <= score <= 100:
        raise argparse.ArgumentTypeError("confidence must be between 0 and 100")
    return score


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for i18n-retrofit.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="i18n-retrofit",
        description="i18n-retrofit - find hardcoded text and replace it with translation calls",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  i18n-retrofit scan
    Scan the configured paths (resources/views and app by default)

  i18n-retrofit scan resources/views --min-confidence 80 --output review.json
    Write high-confidence suggestions for review

  i18n-retrofit apply approved.json --dry-run
    Show how many approved changes would apply without writing files

  i18n-retrofit init-config i18n-retrofit.yml
    Write a documented sample configuration file
""",
    )

    _ = parser.add_argument(
        "--config-file",
        type=str,
        default=None,
        help="Path to a YAML configuration file (default: i18n-retrofit.yml when present)",
        metavar="PATH",
    )
    _ = parser.add_argument(
        "--log-folder",
        type=str,
        default=None,
        help="Also write rotating log files to this folder (created if missing)",
        metavar="PATH",
    )
    _ = parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug output on the console"
    )
    _ = parser.add_argument(
        "--version", action="version", version=f"%(prog)s {get_version()}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    scan_parser = subparsers.add_parser("scan", help="Scan sources and suggest translation keys")
    _ = scan_parser.add_argument(
        "paths", nargs="*", help="Files or directories to scan (default: configured paths)"
    )
    _ = scan_parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Additional directory to exclude (repeatable)",
        metavar="DIR",
    )
    _ = scan_parser.add_argument(
        "--min-confidence",
        type=confidence_value,
        default=None,
        help="Drop suggestions scoring below this confidence (0-100)",
        metavar="N",
    )
    _ = scan_parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the review payload as JSON to this file instead of stdout",
        metavar="FILE",
    )

    apply_parser = subparsers.add_parser("apply", help="Apply approved changes to source files")
    _ = apply_parser.add_argument("changes_file", help="JSON or YAML file with approved changes")
    _ = apply_parser.add_argument(
        "--base-path",
        type=str,
        default=None,
        help="Directory relative change paths are resolved against",
        metavar="DIR",
    )
    _ = apply_parser.add_argument(
        "--dry-run", action="store_true", help="Count applicable changes without writing files"
    )

    init_parser = subparsers.add_parser("init-config", help="Write a sample configuration file")
    _ = init_parser.add_argument(
        "target", nargs="?", default="i18n-retrofit.yml", help="Where to write the sample"
    )

    return parser


def parse_arguments(args: list[str] | None = None) -> ParsedArgs:
    """
    Parse command-line arguments.

    Args:
        args: List of arguments to parse (defaults to sys.argv[1:])

    Returns:
        ParsedArgs containing validated and resolved paths

    Raises:
        SystemExit: If argument parsing fails, a path is invalid, or --help is requested
    """
    parser = create_argument_parser()
    parsed = parser.parse_args(args)

    command: str = getattr(parsed, "command", "")
    config_file_str: str | None = getattr(parsed, "config_file", None)
    log_folder_str: str | None = getattr(parsed, "log_folder", None)
    output_str: str | None = getattr(parsed, "output", None)
    base_path_str: str | None = getattr(parsed, "base_path", None)
    changes_file_str: str | None = getattr(parsed, "changes_file", None)
    target_str: str | None = getattr(parsed, "target", None)
    path_strs: list[str] = getattr(parsed, "paths", None) or []

    try:
        config_file = validate_config_file_path(config_file_str) if config_file_str else None
        log_folder = validate_folder_path(log_folder_str, "log folder") if log_folder_str else None
        base_path = validate_folder_path(base_path_str, "base path") if base_path_str else None
        if command == "init-config" and target_str:
            output = validate_config_file_path(target_str)
        else:
            output = Path(output_str).expanduser() if output_str else None
    except PathValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    return ParsedArgs(
        command=command,
        config_file=config_file,
        log_folder=log_folder,
        verbose=bool(getattr(parsed, "verbose", False)),
        paths=[Path(path) for path in path_strs],
        excluded_dirs=list(getattr(parsed, "exclude", None) or []),
        min_confidence=getattr(parsed, "min_confidence", None),
        output=output,
        changes_file=Path(changes_file_str) if changes_file_str else None,
        base_path=base_path,
        dry_run=bool(getattr(parsed, "dry_run", False)),
    )
