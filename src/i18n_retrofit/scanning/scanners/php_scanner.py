"""
Scanner for plain PHP script files.

Walks a file line by line, skipping comments and heredoc bodies, and judges
every quoted literal on the remaining lines through an ordered set of guard
clauses: identifier-like text, validation rules, already translated text,
technical call sites, and finally a classification by the call or array shape
that precedes the literal.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import NamedTuple

from .. import constants as c
from ..types import (
    Candidate,
    FileContext,
    FileScanOutcome,
    FileType,
    SkippedEntry,
    SkipReason,
    Verdict,
)
from .base import window_before

logger = logging.getLogger(__name__)

# ->with('Saved') and ->with('success', 'Saved') both count as a call to "with".
_USER_FACING_METHOD_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (
        method,
        re.compile(
            rf"""\b{re.escape(method)}\s*\(\s*(?:(['"])[^'"]*\1\s*,\s*)?$"""
        ),
    )
    for method in c.USER_FACING_METHODS
)

_NAMESPACE = re.compile(r"namespace\s+([\w\\]+);")
_CLASS_NAME = re.compile(r"class\s+(\w+)")
_ESCAPE = re.compile(r"\\(.)", re.DOTALL)
_DOUBLE_QUOTE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"', "$": "$", "0": "\0"}


class ScriptFileInfo(NamedTuple):
    """Role of a script file plus the names found in it."""

    context: FileContext
    class_name: str | None
    namespace: str | None


def detect_file_context(file_path: str, content: str) -> ScriptFileInfo:
    """
    Derive the coarse role of a script file from its path and class hints.

    Args:
        file_path: Path of the file (any separator style)
        content: Full file content

    Returns:
        ScriptFileInfo with the detected context, class and namespace
    """
    path = file_path.replace("\\", "/")

    if "/Livewire/" in path or "/View/Components/" in path or "extends Component" in content:
        context = FileContext.COMPONENT
    elif "/Controllers/" in path or "extends Controller" in content:
        context = FileContext.CONTROLLER
    elif "/Models/" in path or "extends Model" in content:
        context = FileContext.MODEL
    elif "/Services/" in path:
        context = FileContext.SERVICE
    elif "/Jobs/" in path or "implements ShouldQueue" in content:
        context = FileContext.JOB
    elif "/Notifications/" in path:
        context = FileContext.NOTIFICATION
    elif "/Mail/" in path:
        context = FileContext.MAIL
    else:
        context = FileContext.UNKNOWN

    namespace_match = _NAMESPACE.search(content)
    class_match = _CLASS_NAME.search(content)
    return ScriptFileInfo(
        context=context,
        class_name=class_match.group(1) if class_match else None,
        namespace=namespace_match.group(1) if namespace_match else None,
    )


def unescape_literal(text: str, quote: str) -> str:
    """Resolve the escape sequences PHP honours for the given quote style."""
    if quote == '"':
        return _ESCAPE.sub(
            lambda m: _DOUBLE_QUOTE_ESCAPES.get(m.group(1), m.group(0)), text
        )
    return _ESCAPE.sub(lambda m: m.group(1) if m.group(1) in ("\\", "'") else m.group(0), text)


def find_block_comment(line: str) -> int:
    """Index of the first ``/*`` outside a quoted literal, or -1."""
    literal_spans = [match.span() for match in c.QUOTED_LITERAL.finditer(line)]
    start = line.find("/*")
    while start != -1:
        if not any(begin <= start < end for begin, end in literal_spans):
            return start
        start = line.find("/*", start + 2)
    return -1


def is_skip_pattern(text: str) -> bool:
    """Check if text looks like an identifier, key, url, number or format string."""
    return any(pattern.search(text) for pattern in c.PHP_SKIP_PATTERNS)


def is_validation_rule(text: str) -> bool:
    """
    Check if text looks like a validation rule string such as ``required|max:255``.

    A sentence that merely starts with a keyword ("Email is required") is not a
    rule: the keyword part of a rule never contains spaces.
    """
    if "|" in text:
        for segment in text.split("|"):
            keyword = segment.split(":")[0].strip().lower()
            if keyword in c.VALIDATION_KEYWORDS:
                return True

    first_part = text.split(":")[0]
    first_keyword = first_part.split("|")[0].lower()
    return first_keyword in c.VALIDATION_KEYWORDS and " " not in first_part


def is_already_translated(line: str, offset: int) -> bool:
    before = window_before(line, offset, c.TRANSLATED_WINDOW)
    return any(token in before for token in c.PHP_TRANSLATION_TOKENS)


def is_non_translatable_line(line: str) -> bool:
    return any(token in line for token in c.PHP_NON_TRANSLATABLE_CONTEXTS)


def detect_element_type(line: str, offset: int, context: FileContext) -> str | None:
    """
    Classify a literal by what precedes it on the line.

    Returns:
        The element type tag, or None when the literal is not user-facing
    """
    before = window_before(line, offset, c.CLASSIFY_WINDOW)

    for method, pattern in _USER_FACING_METHOD_PATTERNS:
        if pattern.search(before):
            return f"method_{method}"

    if c.VALIDATION_MESSAGE_KEY.search(before):
        return "validation_message"

    if c.ARRAY_LABEL_KEY.search(before):
        return "array_label"

    if any(pattern.search(before) for pattern in c.EXCEPTION_CALL):
        return "exception_message"

    if context is FileContext.COMPONENT and c.RETURN_LITERAL.search(before):
        return "return_message"

    if context.value in c.USER_FACING_FILE_CONTEXTS:
        return "user_facing_string"

    return None


def detect_method_context(line: str, offset: int) -> str | None:
    """Name of the method whose argument list the literal sits in, if any."""
    match = c.METHOD_CALL_BEFORE.search(window_before(line, offset, c.CLASSIFY_WINDOW))
    return match.group(1) if match else None


class PhpScanner:
    """Scanner for plain PHP files (everything ending in .php except Blade templates)."""

    def extensions(self) -> tuple[str, ...]:
        return (".php",)

    def file_type(self) -> FileType:
        return FileType.PHP

    def can_handle(self, file_path: Path, content: str | None = None) -> bool:  # pyright: ignore[reportUnusedParameter]
        name = file_path.name
        return name.endswith(".php") and not name.endswith(".blade.php")

    def scan_file(self, file_path: Path, content: str) -> FileScanOutcome:
        """
        Scan a PHP file for user-facing string literals.

        Args:
            file_path: Path of the file, used for context detection and reporting
            content: Full file content

        Returns:
            FileScanOutcome with candidates and skipped entries
        """
        candidates: list[Candidate] = []
        skipped: list[SkippedEntry] = []
        file_info = detect_file_context(str(file_path), content)

        in_block_comment = False
        heredoc_end: re.Pattern[str] | None = None

        for index, line in enumerate(content.split("\n")):
            if in_block_comment:
                if "*/" in line:
                    in_block_comment = False
                continue

            stripped = line.lstrip()
            if stripped.startswith("/*"):
                in_block_comment = "*/" not in stripped[2:]
                continue
            if stripped.startswith(("//", "#")):
                continue

            if heredoc_end is not None:
                if heredoc_end.match(line):
                    heredoc_end = None
                continue
            opener = c.HEREDOC_START.search(line)
            if opener:
                heredoc_end = re.compile(rf"^\s*{re.escape(opener.group(2))}\b")
                continue

            comment_start = find_block_comment(line)
            while comment_start != -1:
                comment_end = line.find("*/", comment_start + 2)
                if comment_end == -1:
                    in_block_comment = True
                    line = line[:comment_start]
                    break
                # Blank the comment so offsets stay put
                line = (
                    line[:comment_start]
                    + " " * (comment_end + 2 - comment_start)
                    + line[comment_end + 2 :]
                )
                comment_start = find_block_comment(line)

            self._scan_line(file_path, line, index + 1, file_info, candidates, skipped)

        logger.debug(
            f"Scanned {file_path}: {len(candidates)} candidates, {len(skipped)} skipped"
        )
        return FileScanOutcome(candidates, skipped)

    def _scan_line(
        self,
        file_path: Path,
        line: str,
        line_number: int,
        file_info: ScriptFileInfo,
        candidates: list[Candidate],
        skipped: list[SkippedEntry],
    ) -> None:
        line_blocked = is_non_translatable_line(line)

        for match in c.QUOTED_LITERAL.finditer(line):
            quote = match.group(1)
            offset = match.start()
            text = unescape_literal(match.group(2), quote)

            if len(text.strip()) < c.MIN_TEXT_LENGTH:
                continue

            verdict = self.classify_literal(text, line, offset, file_info, line_blocked)
            if verdict.reason is not None:
                skipped.append(SkippedEntry(text=text, reason=verdict.reason, line=line_number))
                continue

            candidates.append(
                Candidate(
                    file=str(file_path),
                    line=line_number,
                    offset=offset,
                    text=text,
                    context=line.strip(),
                    element_type=verdict.element_type or "user_facing_string",
                    file_type=FileType.PHP,
                    metadata={
                        "file_context": file_info.context.value,
                        "class_name": file_info.class_name,
                        "namespace": file_info.namespace,
                        "quote_type": quote,
                        "in_method": detect_method_context(line, offset),
                        "in_attribute": False,
                    },
                )
            )

    @staticmethod
    def classify_literal(
        text: str,
        line: str,
        offset: int,
        file_info: ScriptFileInfo,
        line_blocked: bool,
    ) -> Verdict:
        """Ordered decision table for one literal; the first matching guard wins."""
        if is_skip_pattern(text) or is_validation_rule(text):
            return Verdict.reject(SkipReason.PATTERN_MATCH)

        if is_already_translated(line, offset):
            return Verdict.reject(SkipReason.ALREADY_TRANSLATED)

        if line_blocked:
            return Verdict.reject(SkipReason.NON_TRANSLATABLE_CONTEXT)

        element_type = detect_element_type(line, offset, file_info.context)
        if element_type is None:
            return Verdict.reject(SkipReason.NOT_USER_FACING)

        return Verdict.keep(element_type)
