"""
Source scanning for i18n-retrofit.

This package finds hardcoded user-facing text in PHP scripts, Blade templates
and Volt single-file components.
"""

from .scanners import BladeScanner, FileScanner, PhpScanner, VoltScanner
from .source_scanner import SourceScanner, deduplicate, scan
from .types import (
    Candidate,
    FileContext,
    FileScanOutcome,
    FileType,
    ScanResult,
    SkippedEntry,
    SkipReason,
    Verdict,
)

__all__ = [
    "BladeScanner",
    "FileScanner",
    "PhpScanner",
    "VoltScanner",
    "SourceScanner",
    "deduplicate",
    "scan",
    "Candidate",
    "FileContext",
    "FileScanOutcome",
    "FileType",
    "ScanResult",
    "SkippedEntry",
    "SkipReason",
    "Verdict",
]
