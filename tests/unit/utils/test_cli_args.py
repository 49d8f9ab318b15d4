"""
Tests for command-line argument parsing.
"""

import argparse
from pathlib import Path

import pytest

from i18n_retrofit.utils.cli.args import (
    PathValidationError,
    confidence_value,
    parse_arguments,
    validate_config_file_path,
    validate_folder_path,
)


class TestPathValidation:
    """Test cases for path validation helpers."""

    def test_config_file_in_existing_folder(self, tmp_path: Path) -> None:
        assert validate_config_file_path(str(tmp_path / "config.yml")) == (
            tmp_path / "config.yml"
        ).resolve()

    def test_config_file_is_a_directory(self, tmp_path: Path) -> None:
        with pytest.raises(PathValidationError, match="not a file"):
            _ = validate_config_file_path(str(tmp_path))

    def test_config_file_parent_missing(self, tmp_path: Path) -> None:
        with pytest.raises(PathValidationError, match="Parent directory"):
            _ = validate_config_file_path(str(tmp_path / "missing" / "config.yml"))

    def test_folder_is_a_file(self, tmp_path: Path) -> None:
        file_path = tmp_path / "file.txt"
        _ = file_path.write_text("x", encoding="utf-8")

        with pytest.raises(PathValidationError, match="not a directory"):
            _ = validate_folder_path(str(file_path), "log folder")

    def test_missing_folder_is_allowed(self, tmp_path: Path) -> None:
        assert validate_folder_path(str(tmp_path / "logs"), "log folder") == (
            tmp_path / "logs"
        ).resolve()


class TestConfidenceValue:
    """Test cases for the confidence argument type."""

    def test_valid(self) -> None:
        assert confidence_value("80") == 80

    @pytest.mark.parametrize("value", ["abc", "-1", "101"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            _ = confidence_value(value)


class TestParseArguments:
    """Test cases for parse_arguments."""

    def test_scan_command(self) -> None:
        args = parse_arguments(
            [
                "scan",
                "resources/views",
                "app/Http",
                "--exclude",
                "tests",
                "--exclude",
                "docs",
                "--min-confidence",
                "80",
                "--output",
                "review.json",
            ]
        )

        assert args.command == "scan"
        assert args.paths == [Path("resources/views"), Path("app/Http")]
        assert args.excluded_dirs == ["tests", "docs"]
        assert args.min_confidence == 80
        assert args.output == Path("review.json")
        assert args.changes_file is None
        assert args.dry_run is False

    def test_scan_defaults(self) -> None:
        args = parse_arguments(["scan"])

        assert args.paths == []
        assert args.excluded_dirs == []
        assert args.min_confidence is None
        assert args.output is None
        assert args.config_file is None
        assert args.verbose is False

    def test_apply_command(self, tmp_path: Path) -> None:
        args = parse_arguments(
            ["-v", "apply", "approved.json", "--base-path", str(tmp_path), "--dry-run"]
        )

        assert args.command == "apply"
        assert args.changes_file == Path("approved.json")
        assert args.base_path == tmp_path.resolve()
        assert args.dry_run is True
        assert args.verbose is True

    def test_global_paths(self, tmp_path: Path) -> None:
        args = parse_arguments(
            [
                "--config-file",
                str(tmp_path / "retrofit.yml"),
                "--log-folder",
                str(tmp_path / "logs"),
                "scan",
            ]
        )

        assert args.config_file == (tmp_path / "retrofit.yml").resolve()
        assert args.log_folder == (tmp_path / "logs").resolve()

    def test_init_config_target(self, tmp_path: Path) -> None:
        args = parse_arguments(["init-config", str(tmp_path / "retrofit.yml")])

        assert args.command == "init-config"
        assert args.output == (tmp_path / "retrofit.yml").resolve()

    def test_init_config_default_target(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)

        args = parse_arguments(["init-config"])

        assert args.output == (tmp_path / "i18n-retrofit.yml").resolve()

    def test_command_is_required(self) -> None:
        with pytest.raises(SystemExit):
            _ = parse_arguments([])

    def test_invalid_confidence_exits(self) -> None:
        with pytest.raises(SystemExit):
            _ = parse_arguments(["scan", "--min-confidence", "150"])

    def test_invalid_base_path_exits(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        file_path = tmp_path / "file.txt"
        _ = file_path.write_text("x", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            _ = parse_arguments(["apply", "approved.json", "--base-path", str(file_path)])

        assert exc_info.value.code == 1
        assert "not a directory" in capsys.readouterr().err

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _ = parse_arguments(["--version"])

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("i18n-retrofit ")
