"""
Main entry point for i18n-retrofit.

This module sets up logging, loads configuration, and runs the ``scan``,
``apply`` and ``init-config`` commands with top-level error handling.
"""

import json
import logging
import logging.handlers
import signal
import sys
import threading
from pathlib import Path

from .config.manager import DEFAULT_CONFIG_FILENAME, ConfigManager
from .config.schema import RetrofitConfig
from .keys.analysis import analyze_candidates, risk_summary
from .rewriting.file_rewriter import FileRewriter
from .rewriting.types import load_approved_changes
from .scanning.source_scanner import SourceScanner
from .utils.cli.args import ParsedArgs, parse_arguments
from .utils.core.exceptions import RetrofitError

logger = logging.getLogger(__name__)

LOG_FILE_NAME = "i18n-retrofit.log"


def setup_logging(log_folder: Path | None = None, verbose: bool = False) -> None:
    """
    Configure logging with a console handler and an optional rotating file.

    Console output goes to stderr so scan results on stdout stay machine-readable.

    Args:
        log_folder: Folder for rotating log files; no file logging when None
        verbose: Show debug messages on the console
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    )
    simple_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(simple_formatter)
    root_logger.addHandler(console_handler)

    if log_folder is not None:
        _ = log_folder.mkdir(parents=True, exist_ok=True)

        # File handler with rotation (5MB max, keep 5 backups)
        file_handler = logging.handlers.RotatingFileHandler(
            log_folder / LOG_FILE_NAME,
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

    logger.debug("Logging configured")


def setup_signal_handlers(cancel_event: threading.Event) -> dict[signal.Signals, object]:
    """
    Set ``cancel_event`` on SIGTERM and SIGINT.

    Scans and rewrites check the event between files, so files already
    written stay written and the rest are left untouched.

    Returns:
        The previous handlers, for restoring once the command is done
    """

    def signal_handler(signum: int, _frame: object) -> None:
        signal_name = signal.Signals(signum).name
        logger.info(f"Received {signal_name} signal, stopping after the current file...")
        cancel_event.set()

    previous: dict[signal.Signals, object] = {}
    for signum in (signal.SIGTERM, signal.SIGINT):
        previous[signum] = signal.signal(signum, signal_handler)
    return previous


def restore_signal_handlers(previous: dict[signal.Signals, object]) -> None:
    for signum, handler in previous.items():
        _ = signal.signal(signum, handler)  # pyright: ignore[reportArgumentType]


def write_output(payload: dict[str, object], output: Path | None) -> None:
    content = json.dumps(payload, indent=2, ensure_ascii=False)
    if output is None:
        print(content)
        return
    _ = output.parent.mkdir(parents=True, exist_ok=True)
    _ = output.write_text(content + "\n", encoding="utf-8")
    logger.info(f"Wrote results to {output}")


def run_scan(args: ParsedArgs, config: RetrofitConfig, cancel_event: threading.Event) -> int:
    """Scan sources, analyze candidates and write the review payload."""
    scanner_config = config.scanner
    paths = args.paths or [Path(path) for path in scanner_config.paths]

    scanner = SourceScanner(
        excluded_dirs=[*scanner_config.excluded_dirs, *args.excluded_dirs],
        excluded_files=scanner_config.excluded_files,
        include_patterns=scanner_config.include_patterns,
        cancel_event=cancel_event,
    )
    result = scanner.scan_paths(paths)

    min_confidence = (
        args.min_confidence
        if args.min_confidence is not None
        else config.analysis.min_confidence
    )
    analyzed = analyze_candidates(result.candidates, min_confidence=min_confidence)

    base_path = str(Path.cwd())
    summary = result.summary()
    summary["suggestions"] = len(analyzed)
    summary["risk"] = risk_summary(analyzed)

    logger.info(
        f"Found {len(result.candidates)} candidates in {result.total_files} files, "
        + f"{len(analyzed)} suggestions at confidence >= {min_confidence}"
    )

    write_output(
        {
            "summary": summary,
            "candidates": [item.to_dict(base_path) for item in analyzed],
        },
        args.output,
    )
    return 0


def run_apply(args: ParsedArgs, config: RetrofitConfig, cancel_event: threading.Event) -> int:
    """Apply an approved-change batch; exit code 1 when any file failed."""
    if args.changes_file is None:
        logger.error("No changes file given")
        return 1

    changes = load_approved_changes(args.changes_file)

    base_path = args.base_path or (
        Path(config.rewriter.base_path) if config.rewriter.base_path else None
    )
    dry_run = args.dry_run or config.rewriter.dry_run

    rewriter = FileRewriter(base_path=base_path)
    result = rewriter.apply(changes, dry_run=dry_run, cancel_event=cancel_event)

    verb = "would apply" if dry_run else "applied"
    logger.info(f"{result.total_changes} changes {verb} across {len(result.files)} files")
    for failed in result.failed_files:
        logger.error(f"Failed: {failed} ({result.files[failed].error})")

    write_output(result.to_dict(), args.output)
    return 0 if result.success else 1


def run_init_config(args: ParsedArgs) -> int:
    target = args.output or Path(DEFAULT_CONFIG_FILENAME)
    if target.exists():
        logger.error(f"Refusing to overwrite existing file: {target}")
        return 1
    ConfigManager.create_sample_config(target)
    logger.info(f"Sample configuration written to {target}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Run the command-line interface.

    Args:
        argv: Arguments to parse (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    args = parse_arguments(argv)
    setup_logging(args.log_folder, args.verbose)

    cancel_event = threading.Event()
    previous_handlers = setup_signal_handlers(cancel_event)

    try:
        if args.command == "init-config":
            return run_init_config(args)

        config = ConfigManager.load_or_default(args.config_file)

        if args.command == "scan":
            return run_scan(args, config, cancel_event)
        if args.command == "apply":
            return run_apply(args, config, cancel_event)

        logger.error(f"Unknown command: {args.command}")
        return 1

    except RetrofitError as e:
        logger.error(e.user_message)
        logger.debug(f"{e.category.value} error: {e}")
        return 1
    except OSError as e:
        logger.exception(f"Filesystem error: {e}")
        return 1
    finally:
        restore_signal_handlers(previous_handlers)
