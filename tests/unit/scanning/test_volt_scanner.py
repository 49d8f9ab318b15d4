"""
Tests for the Volt single-file component scanner.
"""

from pathlib import Path

from i18n_retrofit.scanning.scanners.volt_scanner import (
    VoltScanner,
    is_volt_component,
    split_segments,
)
from i18n_retrofit.scanning.types import FileType, SkipReason
from tests.utils.test_helpers import VOLT_SOURCE, write_source

VOLT_PATH = Path("resources/views/livewire/profile.blade.php")


class TestSplitSegments:
    """Test cases for splitting a component into dialect segments."""

    def test_script_then_template(self) -> None:
        """Test the usual layout: script block first, template after the closer."""
        segments = split_segments("<?php\n$a = 1;\n?>\n<div>Hi</div>")

        assert [(s.file_type, s.start, s.lines) for s in segments] == [
            (FileType.PHP, 0, ["<?php", "$a = 1;"]),
            (FileType.BLADE, 3, ["<div>Hi</div>"]),
        ]

    def test_template_before_script(self) -> None:
        """Test that markup before the opener becomes its own template segment."""
        segments = split_segments("<div>Top</div>\n<?php\n$x = 1;\n?>\n<p>Bottom</p>")

        assert [(s.file_type, s.start) for s in segments] == [
            (FileType.BLADE, 0),
            (FileType.PHP, 1),
            (FileType.BLADE, 4),
        ]

    def test_unclosed_script_runs_to_end(self) -> None:
        """Test that a script block without a closer covers the rest of the file."""
        segments = split_segments("<?php\n$a = 1;")

        assert [(s.file_type, s.start, s.lines) for s in segments] == [
            (FileType.PHP, 0, ["<?php", "$a = 1;"]),
        ]

    def test_no_script_block(self) -> None:
        """Test that a file without an opener is a single template segment."""
        segments = split_segments("<h1>Title</h1>\n<p>Body</p>")

        assert len(segments) == 1
        assert segments[0].file_type is FileType.BLADE
        assert segments[0].start == 0


class TestVoltDetection:
    """Test cases for telling Volt components from plain templates."""

    def test_volt_import_marker(self) -> None:
        assert is_volt_component(VOLT_SOURCE)

    def test_facade_marker(self) -> None:
        assert is_volt_component("<?php\nVolt::route('/profile', 'profile');\n?>\n<div></div>")

    def test_plain_template(self) -> None:
        """Test that a template without a script block is not Volt."""
        assert not is_volt_component("<h1>Welcome Home</h1>")

    def test_script_block_without_marker(self) -> None:
        """Test that a leading script block alone is not enough."""
        assert not is_volt_component("<?php\n$title = 'x';\n?>\n<h1>{{ $title }}</h1>")

    def test_can_handle_reads_file(self, tmp_path: Path, volt_scanner: VoltScanner) -> None:
        """Test that the scanner sniffs content from disk when none is given."""
        volt_path = write_source(tmp_path, "resources/views/livewire/profile.blade.php", VOLT_SOURCE)
        plain_path = write_source(tmp_path, "resources/views/welcome.blade.php", "<h1>Hi</h1>")

        assert volt_scanner.can_handle(volt_path)
        assert not volt_scanner.can_handle(plain_path)
        assert not volt_scanner.can_handle(tmp_path / "missing.blade.php")
        assert not volt_scanner.can_handle(Path("app/Models/User.php"), "<?php\n")


class TestVoltScanner:
    """Test cases for VoltScanner.scan_file."""

    def test_candidates_are_rebased_and_tagged(self, volt_scanner: VoltScanner) -> None:
        """Test that line numbers refer to the whole file and every candidate is Volt."""
        outcome = volt_scanner.scan_file(VOLT_PATH, VOLT_SOURCE)

        assert [(c.text, c.line, c.element_type) for c in outcome.candidates] == [
            ("Profile saved successfully", 8, "method_flash"),
            ("Edit Profile", 14, "heading_h2"),
            ("Save changes", 15, "button"),
        ]
        assert all(c.file_type is FileType.VOLT for c in outcome.candidates)
        assert all(c.file == str(VOLT_PATH) for c in outcome.candidates)

    def test_skipped_entries_are_rebased(self, volt_scanner: VoltScanner) -> None:
        """Test that rejections carry file line numbers too."""
        outcome = volt_scanner.scan_file(VOLT_PATH, VOLT_SOURCE)

        skipped = {(entry.text, entry.line) for entry in outcome.skipped}
        assert ("status", 8) in skipped
        assert ("save", 15) in skipped
        assert all(entry.reason is SkipReason.PATTERN_MATCH for entry in outcome.skipped)

    def test_closing_line_is_not_scanned(self, volt_scanner: VoltScanner) -> None:
        """Test that text on the closing line belongs to neither segment."""
        content = (
            "<?php\n"
            "use function Livewire\\Volt\\{state};\n"
            "?> <p>Closing line text</p>\n"
            "<p>Template text</p>\n"
        )
        outcome = volt_scanner.scan_file(VOLT_PATH, content)

        assert [(c.text, c.line) for c in outcome.candidates] == [("Template text", 4)]
