"""
Scanner capability shared by every dialect.

Dialect scanners are independent classes that satisfy the ``FileScanner``
protocol; the orchestrator dispatches to the first one whose ``can_handle``
returns True.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from ...utils.core.exceptions import ScanError
from ..types import FileScanOutcome, FileType


class FileScanner(Protocol):
    """Protocol defining the interface every dialect scanner provides."""

    def extensions(self) -> tuple[str, ...]:
        """File suffixes this scanner is written for."""
        ...

    def file_type(self) -> FileType:
        """Tag applied to candidates found by this scanner."""
        ...

    def can_handle(self, file_path: Path, content: str | None = None) -> bool:
        """
        Check if this scanner should process the given file.

        Args:
            file_path: Path of the file
            content: File content when the caller already read it; scanners that
                sniff content read the file themselves when this is None

        Returns:
            True if the file belongs to this dialect
        """
        ...

    def scan_file(self, file_path: Path, content: str) -> FileScanOutcome:
        """Scan one file and return its candidates and skipped entries."""
        ...


def read_source(file_path: Path) -> str:
    """
    Read a source file as UTF-8 text.

    Raises:
        ScanError: If the file cannot be read or is not valid UTF-8
    """
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ScanError(
            f"Could not read {file_path}: {e}",
            user_message=f"Skipped unreadable file {file_path.name}",
            context=str(file_path),
        ) from e


def window_before(line: str, offset: int, width: int) -> str:
    """Return up to ``width`` characters of ``line`` immediately before ``offset``."""
    return line[max(0, offset - width) : offset]
