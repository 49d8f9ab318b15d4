"""
Source rewriter for i18n-retrofit.

Applies approved changes by replacing the exact literal on each target line
with a call to the translation function. Files are processed one at a time,
built fully in memory and replaced atomically; a failure in one file never
stops the others.
"""

from __future__ import annotations

import logging
import re
import tempfile
import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import NamedTuple

from ..scanning.constants import TRANSLATABLE_ATTRIBUTES
from ..utils.core.exceptions import RewriteError
from .types import ApprovedChange, FileRewriteOutcome, RewriteResult

logger = logging.getLogger(__name__)

TRANSLATION_FUNCTION = "__"

_ATTRIBUTE_NAMES = "|".join(re.escape(attribute) for attribute in TRANSLATABLE_ATTRIBUTES)
_DOUBLE_QUOTE_ESCAPES = {"\\": "\\\\", '"': '\\"', "$": "\\$", "\n": "\\n", "\t": "\\t", "\r": "\\r"}


class LineChange(NamedTuple):
    """One approved change resolved to a single line of a single file."""

    line: int
    key: str
    value: str
    params: tuple[str, ...]
    change_id: str | int


def format_translation_call(key: str, params: Iterable[str] = ()) -> str:
    """
    Build the bare translation call.

    Examples:
        format_translation_call("auth.login") -> __('auth.login')
        format_translation_call("greeting", ["name"]) -> __('greeting', ['name' => $name])
    """
    names = [param.lstrip(":") for param in params]
    if not names:
        return f"{TRANSLATION_FUNCTION}('{key}')"
    mapping = ", ".join(f"'{name}' => ${name}" for name in names)
    return f"{TRANSLATION_FUNCTION}('{key}', [{mapping}])"


def escape_literal(value: str, quote: str) -> str:
    """Write ``value`` back as the body of a PHP literal in the given quote style."""
    if quote == '"':
        return "".join(_DOUBLE_QUOTE_ESCAPES.get(char, char) for char in value)
    return value.replace("\\", "\\\\").replace("'", "\\'")


def literal_pattern(value: str) -> str:
    """
    Regex matching ``value`` as a quoted literal.

    Scanned values are unescaped, so the source may hold them either verbatim
    or with the escapes of its quote style.
    """
    single = escape_literal(value, "'")
    double = escape_literal(value, '"')
    forms = (
        f"'{re.escape(value)}'",
        f'"{re.escape(value)}"',
        f"'{re.escape(single)}'",
        f'"{re.escape(double)}"',
    )
    return "|".join(dict.fromkeys(forms))


def format_template_call(key: str, params: Iterable[str] = ()) -> str:
    """Translation call wrapped in template interpolation: ``{{ __('key') }}``."""
    return f"{{{{ {format_translation_call(key, params)} }}}}"


def replace_line(line: str, value: str, key: str, params: Iterable[str] = ()) -> str:
    """
    Replace ``value`` on ``line`` with a translation call.

    Strategies are tried in order and the first one that changes the line
    wins: element text between ``>`` and ``<``, the value of a translatable
    attribute, then a quoted literal that is not an array key.

    Returns:
        The new line, or the line unchanged when nothing matched
    """
    params = tuple(params)
    escaped = re.escape(value)
    call = format_translation_call(key, params)
    template_call = format_template_call(key, params)

    strategies: tuple[tuple[re.Pattern[str], Callable[[re.Match[str]], str]], ...] = (
        (
            re.compile(rf">(\s*){escaped}(\s*)<"),
            lambda m: f">{m.group(1)}{template_call}{m.group(2)}<",
        ),
        (
            re.compile(rf"""(?<![\w:.-])({_ATTRIBUTE_NAMES})(\s*=\s*)(["']){escaped}\3"""),
            lambda m: f'{m.group(1)}{m.group(2)}"{template_call}"',
        ),
        (
            re.compile(rf"""(?:{literal_pattern(value)})(?!\s*=>)"""),
            lambda _match: call,
        ),
    )

    for pattern, replacement in strategies:
        new_line = pattern.sub(replacement, line)
        if new_line != line:
            return new_line
    return line


def group_by_file(changes: Iterable[ApprovedChange]) -> dict[str, list[LineChange]]:
    """Fan changes out to their locations, grouped by file path in first-seen order."""
    by_file: dict[str, list[LineChange]] = {}
    for change in changes:
        for location in change.locations:
            by_file.setdefault(location.file, []).append(
                LineChange(
                    line=location.line,
                    key=change.key,
                    value=change.value,
                    params=tuple(change.params),
                    change_id=change.id,
                )
            )
    return by_file


def write_atomic(path: Path, content: str) -> None:
    """Write ``content`` to a temporary file next to ``path`` and move it into place."""
    temp_file = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            newline="",
        ) as temp_file:
            _ = temp_file.write(content)
            temp_file.flush()
            temp_path = Path(temp_file.name)

        _ = temp_path.replace(path)

    except OSError as e:
        if temp_file and Path(temp_file.name).exists():
            Path(temp_file.name).unlink(missing_ok=True)
        raise RewriteError(
            f"Failed to write {path}: {e}",
            user_message=str(e),
            context=str(path),
        ) from e


class FileRewriter:
    """Apply approved changes to source files."""

    def __init__(self, base_path: str | Path | None = None) -> None:
        """
        Initialize the rewriter.

        Args:
            base_path: Directory relative change paths are resolved against;
                the current working directory when None
        """
        self.base_path: Path = Path(base_path) if base_path is not None else Path.cwd()

    def resolve(self, file_path: str) -> Path:
        path = Path(file_path)
        return path if path.is_absolute() else self.base_path / path

    def apply(
        self,
        changes: Iterable[ApprovedChange],
        dry_run: bool = False,
        cancel_event: threading.Event | None = None,
    ) -> RewriteResult:
        """
        Apply approved changes.

        Args:
            changes: Approved changes, each with one or more locations
            dry_run: Count the changes that would apply without writing anything
            cancel_event: Checked between files; remaining files are left untouched

        Returns:
            RewriteResult with one outcome per processed file
        """
        result = RewriteResult()

        for file_path, line_changes in group_by_file(changes).items():
            if cancel_event is not None and cancel_event.is_set():
                logger.info("Rewrite cancelled, remaining files left untouched")
                break

            outcome = self.rewrite_file(file_path, line_changes, dry_run=dry_run)
            result.files[file_path] = outcome

            if outcome.success:
                verb = "Would apply" if dry_run else "Applied"
                logger.info(f"{verb} {outcome.changes} changes to {file_path}")
            else:
                logger.warning(f"Failed to rewrite {file_path}: {outcome.error}")

        return result

    def rewrite_file(
        self, file_path: str, line_changes: list[LineChange], dry_run: bool = False
    ) -> FileRewriteOutcome:
        """Apply the changes for one file; never raises for filesystem problems."""
        path = self.resolve(file_path)

        if not path.is_file():
            return FileRewriteOutcome(success=False, error="File not found")

        try:
            with path.open("r", encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            return FileRewriteOutcome(success=False, error=str(e))

        lines = content.split("\n")
        applied = 0

        # Bottom-up so earlier edits never shift lines still to be processed.
        for change in sorted(line_changes, key=lambda item: item.line, reverse=True):
            index = change.line - 1
            if index >= len(lines):
                logger.debug(f"Line {change.line} out of range in {file_path}")
                continue

            original = lines[index]
            updated = replace_line(original, change.value, change.key, change.params)
            if updated != original:
                lines[index] = updated
                applied += 1
            else:
                logger.debug(
                    f"No match for change {change.change_id} at {file_path}:{change.line}"
                )

        if applied > 0 and not dry_run:
            try:
                write_atomic(path, "\n".join(lines))
            except RewriteError as e:
                return FileRewriteOutcome(success=False, error=e.user_message)

        return FileRewriteOutcome(success=True, changes=applied)
