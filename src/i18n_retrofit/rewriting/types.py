"""
Approved-change input models and rewrite results.

Approved changes come from an external review step; they are validated with
pydantic on the way in and never modified afterwards.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar

import pydantic
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class ChangeLocation(BaseModel):
    """A source line an approved change applies to."""

    file: str = Field(..., description="File path, absolute or relative to the base path", min_length=1)
    line: int = Field(..., description="1-based line number", ge=1)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")


class ApprovedChange(BaseModel):
    """A reviewed suggestion: replace ``value`` at each location with a call for ``key``."""

    id: str | int = Field(..., description="Identifier assigned by the review service")
    key: str = Field(..., description="Translation key", min_length=1)
    value: str = Field(..., description="Exact text to replace", min_length=1)
    params: list[str] = Field(default_factory=list, description="Named placeholders, in order")
    locations: list[ChangeLocation] = Field(..., min_length=1)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Keys end up inside a single-quoted call, so they may not contain quotes."""
        if "'" in v or '"' in v:
            raise ValueError("Translation key must not contain quotes")
        return v.strip()

    @field_validator("params")
    @classmethod
    def normalize_params(cls, v: list[str]) -> list[str]:
        """Accept ``:name`` as well as ``name``."""
        return [param.lstrip(":") for param in v if param.lstrip(":")]


@dataclass(frozen=True)
class FileRewriteOutcome:
    """Result of rewriting a single file."""

    success: bool
    changes: int = 0
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"success": self.success, "changes": self.changes}
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class RewriteResult:
    """Per-file outcomes of an apply run."""

    files: dict[str, FileRewriteOutcome] = field(default_factory=dict)

    @property
    def total_changes(self) -> int:
        return sum(outcome.changes for outcome in self.files.values())

    @property
    def success(self) -> bool:
        """False if at least one file failed outright."""
        return all(outcome.success for outcome in self.files.values())

    @property
    def failed_files(self) -> list[str]:
        return [path for path, outcome in self.files.items() if not outcome.success]

    def to_dict(self) -> dict[str, object]:
        return {
            "files": {path: outcome.to_dict() for path, outcome in self.files.items()},
            "total_changes": self.total_changes,
            "success": self.success,
        }


def parse_approved_changes(data: object) -> list[ApprovedChange]:
    """
    Validate a decoded batch of approved changes.

    Args:
        data: Either ``{"changes": [...]}`` or a bare list of change records

    Returns:
        Validated changes in batch order

    Raises:
        ValidationError: If the batch shape or any change is invalid
    """
    if isinstance(data, dict) and "changes" in data:
        records: object = data["changes"]  # pyright: ignore[reportUnknownVariableType]
    else:
        records = data

    if not isinstance(records, list):
        raise ValidationError(
            f"Approved changes must be a list, got {type(records).__name__}",
            user_message="The changes file must contain a list of changes",
        )

    changes: list[ApprovedChange] = []
    for index, record in enumerate(records):  # pyright: ignore[reportUnknownVariableType, reportUnknownArgumentType]
        try:
            changes.append(ApprovedChange.model_validate(record))
        except pydantic.ValidationError as e:
            raise ValidationError(
                f"Invalid approved change at index {index}: {e}",
                user_message=f"Change #{index + 1} in the batch is invalid",
                context=record,
            ) from e
    return changes


def load_approved_changes(path: Path) -> list[ApprovedChange]:
    """
    Load and validate approved changes from a JSON or YAML file.

    Raises:
        ValidationError: If the file cannot be read or parsed, or a change is invalid
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ValidationError(
            f"Cannot read changes file {path}: {e}",
            user_message=f"Changes file not found or unreadable: {path}",
        ) from e

    try:
        if path.suffix.lower() == ".json":
            data: object = json.loads(raw)  # pyright: ignore[reportAny]
        else:
            data = yaml.safe_load(raw)  # pyright: ignore[reportAny]
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValidationError(
            f"Invalid syntax in changes file {path}: {e}",
            user_message="The changes file is not valid JSON or YAML",
        ) from e

    changes = parse_approved_changes(data)
    logger.info(f"Loaded {len(changes)} approved changes from {path}")
    return changes
