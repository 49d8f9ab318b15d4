"""
Source orchestrator for i18n-retrofit.

Walks files and directories, applies exclusions, dispatches each file to the
first dialect scanner that claims it and accumulates the findings into a
single deduplicated ScanResult.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence
from pathlib import Path

from ..utils.core.exceptions import ScanError
from .scanners import FileScanner, default_scanners, read_source
from .types import Candidate, ScanResult

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDED_DIRS: tuple[str, ...] = ("vendor", "node_modules", "storage", "bootstrap/cache")
DEFAULT_SCAN_PATHS: tuple[str, ...] = ("resources/views", "app")


def deduplicate(candidates: Iterable[Candidate]) -> list[Candidate]:
    """Drop candidates sharing an identifier with an earlier one; order is preserved."""
    seen: set[str] = set()
    unique: list[Candidate] = []
    for candidate in candidates:
        identifier = candidate.identifier
        if identifier in seen:
            continue
        seen.add(identifier)
        unique.append(candidate)
    return unique


class SourceScanner:
    """
    Scan source trees for hardcoded user-facing text.

    Dispatch is first-match-wins over an ordered scanner list, so scanners
    that sniff content come before the ones that only look at the extension.
    """

    def __init__(
        self,
        excluded_dirs: Sequence[str] | None = None,
        excluded_files: Sequence[str] | None = None,
        include_patterns: Sequence[str] | None = None,
        scanners: Sequence[FileScanner] | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """
        Initialize the source scanner.

        Args:
            excluded_dirs: Directory names or sub-paths skipped wherever they
                appear as a path segment
            excluded_files: File names or paths skipped on suffix or exact match
            include_patterns: Optional globs; when given, only matching files are scanned
            scanners: Scanner list in dispatch order (defaults to Volt, Blade, PHP)
            cancel_event: Event checked between files to stop a running scan
        """
        self.excluded_dirs: list[str] = list(
            DEFAULT_EXCLUDED_DIRS if excluded_dirs is None else excluded_dirs
        )
        self.excluded_files: list[str] = list(excluded_files or [])
        self.include_patterns: list[str] = list(include_patterns or [])
        self._scanners: list[FileScanner] = (
            list(scanners) if scanners is not None else default_scanners()
        )
        self.cancel_event: threading.Event | None = cancel_event

    def register_scanner(self, scanner: FileScanner, index: int | None = None) -> None:
        """
        Add a scanner to the dispatch list.

        Args:
            scanner: Scanner to add
            index: Position in the dispatch order; appended (lowest priority) when None
        """
        if index is None:
            self._scanners.append(scanner)
        else:
            self._scanners.insert(index, scanner)
        logger.debug(f"Registered scanner for {scanner.file_type().value} files")

    def registered_scanner_types(self) -> list[str]:
        """File-type tags of the registered scanners, in dispatch order."""
        return [scanner.file_type().value for scanner in self._scanners]

    def is_cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def is_excluded(self, file_path: Path) -> bool:
        """Check a file against the excluded directories, excluded files and include globs."""
        posix = file_path.as_posix()
        anchored = posix if posix.startswith("/") else f"/{posix}"

        for directory in self.excluded_dirs:
            if f"/{directory.strip('/')}/" in anchored:
                return True

        for excluded in self.excluded_files:
            if posix == excluded or posix.endswith(f"/{excluded.lstrip('/')}"):
                return True

        if self.include_patterns:
            return not any(file_path.match(pattern) for pattern in self.include_patterns)

        return False

    def find_scanner(self, file_path: Path, content: str | None = None) -> FileScanner | None:
        for scanner in self._scanners:
            if scanner.can_handle(file_path, content):
                return scanner
        return None

    def scan(self, directory: str | Path) -> ScanResult:
        """
        Recursively scan a directory.

        Args:
            directory: Root directory to walk

        Returns:
            ScanResult with deduplicated candidates; empty if nothing matched
        """
        root = Path(directory)
        result = ScanResult()

        if not root.is_dir():
            logger.warning(f"Directory not found, skipping: {root}")
            return result

        for file_path in sorted(p for p in root.rglob("*") if p.is_file()):
            if self.is_cancelled():
                logger.info(f"Scan of {root} cancelled")
                break
            if self.is_excluded(file_path):
                continue
            self._scan_one(file_path, result)

        result.candidates = deduplicate(result.candidates)
        logger.info(
            f"Scanned {result.total_files} files in {root}, "
            + f"found {len(result.candidates)} candidates"
        )
        return result

    def scan_file(self, file_path: str | Path) -> ScanResult:
        """Scan a single file, honouring the exclusions."""
        path = Path(file_path)
        result = ScanResult()
        if not self.is_excluded(path):
            self._scan_one(path, result)
        return result

    def scan_paths(self, paths: Iterable[str | Path]) -> ScanResult:
        """
        Scan a mix of files and directories.

        Missing entries are logged and skipped. The merged result is
        deduplicated once more so overlapping entries never produce the same
        candidate twice.
        """
        result = ScanResult()

        for entry in paths:
            if self.is_cancelled():
                logger.info("Scan cancelled")
                break

            path = Path(entry)
            if path.is_dir():
                result.merge(self.scan(path))
            elif path.is_file():
                result.merge(self.scan_file(path))
            else:
                logger.warning(f"Path not found, skipping: {path}")

        result.candidates = deduplicate(result.candidates)
        return result

    def has_candidate_scanner(self, file_path: Path) -> bool:
        """Check the file suffix against the registered scanners before reading it."""
        name = file_path.name
        return any(
            name.endswith(extension)
            for scanner in self._scanners
            for extension in scanner.extensions()
        )

    def _scan_one(self, file_path: Path, result: ScanResult) -> None:
        if not self.has_candidate_scanner(file_path):
            return

        try:
            content = read_source(file_path)
        except ScanError as e:
            logger.warning(f"Skipping file: {e}")
            return

        scanner = self.find_scanner(file_path, content)
        if scanner is None:
            return

        outcome = scanner.scan_file(file_path, content)
        result.candidates.extend(outcome.candidates)
        result.skipped.extend(outcome.skipped)
        result.total_files += 1

        file_type = scanner.file_type().value
        result.files_by_type[file_type] = result.files_by_type.get(file_type, 0) + 1


def scan(
    paths: Iterable[str | Path],
    excluded_dirs: Sequence[str] | None = None,
    excluded_files: Sequence[str] | None = None,
) -> ScanResult:
    """Scan files and directories with the default scanners."""
    return SourceScanner(excluded_dirs=excluded_dirs, excluded_files=excluded_files).scan_paths(
        paths
    )
