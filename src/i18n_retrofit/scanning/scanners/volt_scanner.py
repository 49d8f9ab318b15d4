"""
Scanner for Volt single-file components.

A Volt component is a Blade template whose script part sits in a
``<?php ... ?>`` block at the top of the file. The file is split into
segments, each segment is handed to the matching dialect scanner, and the
results are re-based onto the file's line numbers and tagged as Volt.
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import NamedTuple

from ...utils.core.exceptions import ScanError
from .. import constants as c
from ..types import Candidate, FileScanOutcome, FileType, SkippedEntry
from .base import read_source
from .blade_scanner import BladeScanner
from .php_scanner import PhpScanner

logger = logging.getLogger(__name__)


class Segment(NamedTuple):
    """Consecutive lines of one dialect; ``start`` is the 0-based index of the first line."""

    file_type: FileType
    start: int
    lines: list[str]


def split_segments(content: str) -> list[Segment]:
    """
    Split a Volt component into template and script segments.

    The script segment runs from the first line starting with ``<?php`` up to
    (not including) the first later line starting with ``?>``, or to the end of
    the file when it is never closed. The closing line belongs to neither side.
    """
    lines = content.split("\n")

    opener = next((i for i, line in enumerate(lines) if c.SCRIPT_OPEN.match(line)), None)
    if opener is None:
        return [Segment(FileType.BLADE, 0, lines)]

    closer = next(
        (i for i in range(opener + 1, len(lines)) if c.SCRIPT_CLOSE.match(lines[i])),
        len(lines),
    )

    segments: list[Segment] = []
    if opener > 0:
        segments.append(Segment(FileType.BLADE, 0, lines[:opener]))
    segments.append(Segment(FileType.PHP, opener, lines[opener:closer]))
    if closer + 1 < len(lines):
        segments.append(Segment(FileType.BLADE, closer + 1, lines[closer + 1 :]))
    return segments


def is_volt_component(content: str) -> bool:
    has_script_block = any(c.SCRIPT_OPEN.match(line) for line in content.split("\n"))
    return has_script_block and any(marker.search(content) for marker in c.VOLT_MARKERS)


class VoltScanner:
    """Scanner for Volt components, tried before the plain Blade scanner."""

    def __init__(self) -> None:
        self.php_scanner: PhpScanner = PhpScanner()
        self.blade_scanner: BladeScanner = BladeScanner()

    def extensions(self) -> tuple[str, ...]:
        return (".blade.php",)

    def file_type(self) -> FileType:
        return FileType.VOLT

    def can_handle(self, file_path: Path, content: str | None = None) -> bool:
        """
        Check the extension and sniff the content for Volt markers.

        Ordinary Blade templates share the extension, so the content must show
        both a leading script block and a Volt import or facade call.
        """
        if not file_path.name.endswith(".blade.php"):
            return False

        if content is None:
            try:
                content = read_source(file_path)
            except ScanError as e:
                logger.debug(f"Cannot sniff {file_path}: {e}")
                return False

        return is_volt_component(content)

    def scan_file(self, file_path: Path, content: str) -> FileScanOutcome:
        candidates: list[Candidate] = []
        skipped: list[SkippedEntry] = []

        for segment in split_segments(content):
            scanner = self.php_scanner if segment.file_type is FileType.PHP else self.blade_scanner
            outcome = scanner.scan_file(file_path, "\n".join(segment.lines))

            candidates.extend(
                dataclasses.replace(
                    candidate,
                    line=candidate.line + segment.start,
                    file_type=FileType.VOLT,
                )
                for candidate in outcome.candidates
            )
            skipped.extend(
                dataclasses.replace(entry, line=entry.line + segment.start)
                for entry in outcome.skipped
            )

        logger.debug(
            f"Scanned Volt component {file_path}: {len(candidates)} candidates"
        )
        return FileScanOutcome(candidates, skipped)
