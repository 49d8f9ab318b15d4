"""Configuration schema for i18n-retrofit using nested Pydantic models."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..scanning.source_scanner import DEFAULT_EXCLUDED_DIRS, DEFAULT_SCAN_PATHS


class ScannerConfig(BaseModel):
    """Which files are scanned."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    paths: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SCAN_PATHS),
        description="Files or directories scanned when none are given on the command line",
        min_length=1,
    )
    excluded_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_DIRS),
        description="Directory names or sub-paths skipped wherever they appear in a path",
    )
    excluded_files: list[str] = Field(
        default_factory=list,
        description="File names or paths skipped on suffix or exact match",
    )
    include_patterns: list[str] = Field(
        default_factory=list,
        description="Optional globs; when set, only matching files are scanned",
    )

    @field_validator("excluded_dirs")
    @classmethod
    def normalize_excluded_dirs(cls, v: list[str]) -> list[str]:
        """Strip surrounding slashes and drop empty entries."""
        return [entry.strip().strip("/") for entry in v if entry.strip().strip("/")]

    @field_validator("paths")
    @classmethod
    def validate_paths(cls, v: list[str]) -> list[str]:
        """Reject blank scan paths."""
        if any(not path.strip() for path in v):
            raise ValueError("Scan paths must not be blank")
        return v


class AnalysisConfig(BaseModel):
    """How candidates are keyed and filtered."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    min_confidence: int = Field(
        default=0,
        ge=0,
        le=100,
        description="Suggestions scoring below this confidence are dropped",
    )


class RewriterConfig(BaseModel):
    """How approved changes are applied."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    base_path: str | None = Field(
        default=None,
        description="Directory relative change paths are resolved against (current directory when unset)",
    )
    dry_run: bool = Field(
        default=False,
        description="Count the changes that would apply without writing files",
    )


class RetrofitConfig(BaseModel):
    """
    Main configuration model for i18n-retrofit.

    Every section has defaults, so an empty configuration file is valid.
    """

    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    rewriter: RewriterConfig = Field(default_factory=RewriterConfig)

    model_config: ClassVar[ConfigDict] = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
        frozen=False,
    )
