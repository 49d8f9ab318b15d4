"""
Core types, enums, and data classes for the scanning system.

Candidates and skipped entries are created within a single scan pass and are
never mutated afterwards; scanners that need to re-base a candidate build a
new one with ``dataclasses.replace``.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


class FileType(Enum):
    """Dialect of a scanned source file."""

    PHP = "php"  # plain script
    BLADE = "blade"  # template-hybrid
    VOLT = "volt"  # mixed single-file component


class FileContext(Enum):
    """Coarse role of a script file, derived from its path and class hints."""

    COMPONENT = "component"
    CONTROLLER = "controller"
    MODEL = "model"
    SERVICE = "service"
    JOB = "job"
    NOTIFICATION = "notification"
    MAIL = "mail"
    UNKNOWN = "unknown"


class SkipReason(Enum):
    """Why a literal was rejected."""

    PATTERN_MATCH = "pattern_match"
    ALREADY_TRANSLATED = "already_translated"
    NON_TRANSLATABLE_CONTEXT = "non_translatable_context"
    CONTAINS_TEMPLATE_SYNTAX = "contains_template_syntax"
    NOT_USER_FACING = "not_user_facing"


@dataclass(frozen=True)
class Candidate:
    """A located string literal judged possibly user-facing."""

    file: str
    line: int
    offset: int
    text: str
    context: str
    element_type: str
    file_type: FileType
    metadata: dict[str, object] = field(default_factory=dict)

    @property
    def identifier(self) -> str:
        """Stable identity used for deduplication: hash of file, line and text."""
        raw = f"{self.file}:{self.line}:{self.text}"
        return hashlib.md5(raw.encode("utf-8")).hexdigest()

    @property
    def in_attribute(self) -> bool:
        return bool(self.metadata.get("in_attribute", False))

    def relative_path(self, base_path: str) -> str:
        """Return the file path relative to ``base_path`` when it lives under it."""
        prefix = base_path.rstrip("/") + "/"
        if self.file.startswith(prefix):
            return self.file[len(prefix) :]
        return self.file

    def to_dict(self) -> dict[str, object]:
        return {
            "file": self.file,
            "line": self.line,
            "offset": self.offset,
            "text": self.text,
            "context": self.context,
            "element_type": self.element_type,
            "file_type": self.file_type.value,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class SkippedEntry:
    """A literal that was looked at and rejected, with the reason."""

    text: str
    reason: SkipReason
    line: int

    def to_dict(self) -> dict[str, object]:
        return {"text": self.text, "reason": self.reason.value, "line": self.line}


class Verdict(NamedTuple):
    """
    Tagged outcome of a literal-level decision.

    Exactly one of ``element_type`` (keep as candidate) or ``reason``
    (reject and record) is set.
    """

    element_type: str | None = None
    reason: SkipReason | None = None

    @classmethod
    def keep(cls, element_type: str) -> Verdict:
        return cls(element_type=element_type)

    @classmethod
    def reject(cls, reason: SkipReason) -> Verdict:
        return cls(reason=reason)

    @property
    def is_kept(self) -> bool:
        return self.element_type is not None


class FileScanOutcome(NamedTuple):
    """What a single scanner returns for one file."""

    candidates: list[Candidate]
    skipped: list[SkippedEntry]


@dataclass
class ScanResult:
    """Aggregated findings of a scan over one or more files."""

    candidates: list[Candidate] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)
    total_files: int = 0
    files_by_type: dict[str, int] = field(default_factory=dict)

    @property
    def total_strings(self) -> int:
        return len(self.candidates) + len(self.skipped)

    def merge(self, other: ScanResult) -> None:
        """Fold another result into this one (no deduplication)."""
        self.candidates.extend(other.candidates)
        self.skipped.extend(other.skipped)
        self.total_files += other.total_files
        for file_type, count in other.files_by_type.items():
            self.files_by_type[file_type] = self.files_by_type.get(file_type, 0) + count

    def candidates_by_file_type(self) -> dict[str, list[Candidate]]:
        grouped: dict[str, list[Candidate]] = {}
        for candidate in self.candidates:
            grouped.setdefault(candidate.file_type.value, []).append(candidate)
        return grouped

    def candidates_by_confidence(
        self, confidence_calculator: Callable[[Candidate], int]
    ) -> dict[str, list[Candidate]]:
        """
        Group candidates into high / medium / low confidence buckets.

        Args:
            confidence_calculator: Callable returning a 0-100 score for a candidate

        Returns:
            Mapping with the keys ``high`` (>=80), ``medium`` (>=50) and ``low``
        """
        grouped: dict[str, list[Candidate]] = {"high": [], "medium": [], "low": []}
        for candidate in self.candidates:
            confidence = confidence_calculator(candidate)
            if confidence >= 80:
                grouped["high"].append(candidate)
            elif confidence >= 50:
                grouped["medium"].append(candidate)
            else:
                grouped["low"].append(candidate)
        return grouped

    def summary(self) -> dict[str, object]:
        return {
            "total_files": self.total_files,
            "total_strings": self.total_strings,
            "candidates": len(self.candidates),
            "skipped": len(self.skipped),
            "files_by_type": dict(self.files_by_type),
        }
