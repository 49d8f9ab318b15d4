"""
Scanner for Blade templates.

Each eligible line is examined in three passes: quoted literals embedded in
template expressions, values of translatable attributes, and the plain text
left over once template constructs and HTML tags are stripped.
"""

from __future__ import annotations

import html
import logging
import re
from pathlib import Path

from .. import constants as c
from ..types import (
    Candidate,
    FileScanOutcome,
    FileType,
    SkippedEntry,
    SkipReason,
    Verdict,
)
from .base import window_before

logger = logging.getLogger(__name__)

_ALREADY_TRANSLATED: tuple[re.Pattern[str], ...] = tuple(
    re.compile(rf"{re.escape(token)}\s*\(\s*$") for token in c.BLADE_TRANSLATION_TOKENS
)

# One pattern per whitelisted attribute; ``label`` must not match inside ``aria-label``.
_ATTRIBUTE_VALUES: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (
        attribute,
        re.compile(
            rf"""(?<![\w:.-]){re.escape(attribute)}\s*=\s*(["'])([^"']+)\1""",
            re.IGNORECASE,
        ),
    )
    for attribute in c.TRANSLATABLE_ATTRIBUTES
)

_HEADING = re.compile(r"^h([1-6])$", re.IGNORECASE)
_SCRIPT_OPEN = re.compile(r"<script\b[^>]*>", re.IGNORECASE)
_SCRIPT_CLOSE = re.compile(r"</script>", re.IGNORECASE)
_STYLE_OPEN = re.compile(r"<style\b[^>]*>", re.IGNORECASE)
_STYLE_CLOSE = re.compile(r"</style>", re.IGNORECASE)
_PHP_BLOCK_OPEN = re.compile(r"@php\b")
_PHP_INLINE = re.compile(r"@php\s*\(")
_PHP_BLOCK_CLOSE = re.compile(r"@endphp\b")


def tag_element_type(tag: str) -> str | None:
    """Map an opening tag name to an element type, or None if it carries no meaning."""
    heading = _HEADING.match(tag)
    if heading:
        return f"heading_h{heading.group(1)}"
    return c.TAG_ELEMENT_TYPES.get(tag.lower())


def nearest_tag_element_type(markup: str) -> str:
    """Element type of the nearest opening tag in ``markup`` that carries meaning."""
    for match in reversed(list(c.OPENING_TAG.finditer(markup))):
        element_type = tag_element_type(match.group(1))
        if element_type is not None:
            return element_type
    return "html_text"


def literal_element_type(line: str, offset: int) -> str:
    """Element type of a quoted literal from what directly precedes it."""
    before = window_before(line, offset, c.CLASSIFY_WINDOW)

    tag = re.search(r"<([a-zA-Z][\w-]*)\b[^>]*>\s*$", before)
    if tag:
        element_type = tag_element_type(tag.group(1))
        if element_type is not None:
            return element_type

    for pattern, element_type in c.ATTRIBUTE_ELEMENT_TYPES:
        if pattern.search(before):
            return element_type

    return "string_literal"


def strip_template_constructs(line: str) -> str:
    for pattern in c.TEMPLATE_CONSTRUCTS:
        line = pattern.sub("", line)
    return line


def extract_plain_text(line: str) -> str:
    """Visible text of a template line: constructs and tags removed, entities decoded."""
    text = c.HTML_TAG.sub("", strip_template_constructs(line))
    return html.unescape(text).strip()


def is_skip_pattern(text: str) -> bool:
    if c.NUMERIC.match(text) or c.SPECIAL_CHARS_ONLY.match(text):
        return True
    return any(pattern.search(text) for pattern in c.BLADE_SKIP_PATTERNS)


def is_already_translated(line: str, offset: int) -> bool:
    before = window_before(line, offset, c.TRANSLATED_WINDOW)
    return any(pattern.search(before) for pattern in _ALREADY_TRANSLATED)


def is_non_translatable_context(line: str, offset: int) -> bool:
    before = window_before(line, offset, c.CLASSIFY_WINDOW)
    trimmed = before.rstrip()
    return any(
        token in before or trimmed.endswith(token.rstrip("("))
        for token in c.BLADE_NON_TRANSLATABLE_CONTEXTS
    )


class BladeScanner:
    """Scanner for ``*.blade.php`` templates."""

    def extensions(self) -> tuple[str, ...]:
        return (".blade.php",)

    def file_type(self) -> FileType:
        return FileType.BLADE

    def can_handle(self, file_path: Path, content: str | None = None) -> bool:  # pyright: ignore[reportUnusedParameter]
        return file_path.name.endswith(".blade.php")

    def scan_file(self, file_path: Path, content: str) -> FileScanOutcome:
        """
        Scan a Blade template for user-facing text.

        Script and style blocks are excluded, and so is the body of ``@php``
        blocks, which belongs to the script dialect.

        Args:
            file_path: Path of the template
            content: Full template content

        Returns:
            FileScanOutcome with candidates and skipped entries
        """
        candidates: list[Candidate] = []
        skipped: list[SkippedEntry] = []

        in_script = False
        in_style = False
        in_php_block = False
        in_comment = False

        for index, line in enumerate(content.split("\n")):
            line_number = index + 1

            if _SCRIPT_OPEN.search(line):
                in_script = True
            if _SCRIPT_CLOSE.search(line):
                in_script = False
                continue
            if _STYLE_OPEN.search(line):
                in_style = True
            if _STYLE_CLOSE.search(line):
                in_style = False
                continue
            if in_script or in_style:
                continue

            if _PHP_INLINE.search(line):
                continue
            if _PHP_BLOCK_OPEN.search(line):
                in_php_block = True
            if _PHP_BLOCK_CLOSE.search(line):
                in_php_block = False
                continue
            if in_php_block:
                continue

            if in_comment:
                if "--}}" in line:
                    in_comment = False
                continue
            if "{{--" in line and "--}}" not in line.split("{{--", 1)[1]:
                in_comment = True
                continue

            self._scan_literals(file_path, line, line_number, candidates, skipped)
            self._scan_attributes(file_path, line, line_number, candidates, skipped)
            self._scan_text(file_path, line, line_number, candidates, skipped)

        logger.debug(
            f"Scanned {file_path}: {len(candidates)} candidates, {len(skipped)} skipped"
        )
        return FileScanOutcome(candidates, skipped)

    @staticmethod
    def classify_literal(text: str, line: str, offset: int) -> Verdict:
        """Ordered decision table for a quoted literal; the first matching guard wins."""
        before = window_before(line, offset, 20)
        if is_skip_pattern(text) or c.TECHNICAL_ATTRIBUTE_BEFORE.search(before):
            return Verdict.reject(SkipReason.PATTERN_MATCH)

        if is_non_translatable_context(line, offset):
            return Verdict.reject(SkipReason.NON_TRANSLATABLE_CONTEXT)

        if is_already_translated(line, offset):
            return Verdict.reject(SkipReason.ALREADY_TRANSLATED)

        return Verdict.keep(literal_element_type(line, offset))

    def _scan_literals(
        self,
        file_path: Path,
        line: str,
        line_number: int,
        candidates: list[Candidate],
        skipped: list[SkippedEntry],
    ) -> None:
        for match in c.QUOTED_LITERAL.finditer(line):
            offset = match.start()
            text = match.group(2)

            if len(text.strip()) < c.MIN_TEXT_LENGTH:
                continue
            # Apostrophe inside a word, not an opening quote.
            if offset > 0 and line[offset - 1].isalnum():
                continue
            if c.TRANSLATABLE_ATTRIBUTE_BEFORE.search(line[:offset]):
                continue

            verdict = self.classify_literal(text, line, offset)
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
                    element_type=verdict.element_type or "string_literal",
                    file_type=FileType.BLADE,
                    metadata={
                        "in_attribute": bool(c.IN_ATTRIBUTE_BEFORE.search(line[:offset])),
                        "quote_type": match.group(1),
                    },
                )
            )

    def _scan_attributes(
        self,
        file_path: Path,
        line: str,
        line_number: int,
        candidates: list[Candidate],
        skipped: list[SkippedEntry],
    ) -> None:
        for attribute, pattern in _ATTRIBUTE_VALUES:
            for match in pattern.finditer(line):
                text = match.group(2)
                offset = match.start(2)

                if len(text.strip()) < c.MIN_TEXT_LENGTH:
                    continue

                if c.TEMPLATE_SYNTAX.search(text):
                    reason = SkipReason.CONTAINS_TEMPLATE_SYNTAX
                elif is_skip_pattern(text):
                    reason = SkipReason.PATTERN_MATCH
                else:
                    reason = None

                if reason is not None:
                    skipped.append(SkippedEntry(text=text, reason=reason, line=line_number))
                    continue

                candidates.append(
                    Candidate(
                        file=str(file_path),
                        line=line_number,
                        offset=offset,
                        text=text,
                        context=line.strip(),
                        element_type=f"{attribute}_attr",
                        file_type=FileType.BLADE,
                        metadata={
                            "attribute_name": attribute,
                            "in_attribute": True,
                            "quote_type": match.group(1),
                        },
                    )
                )

    def _scan_text(
        self,
        file_path: Path,
        line: str,
        line_number: int,
        candidates: list[Candidate],
        skipped: list[SkippedEntry],
    ) -> None:
        text = extract_plain_text(line)

        if len(text) < c.MIN_TEXT_LENGTH or c.NUMERIC.match(text):
            return

        if is_skip_pattern(text) or c.ATTRIBUTE_FRAGMENT.search(text):
            skipped.append(
                SkippedEntry(text=text, reason=SkipReason.PATTERN_MATCH, line=line_number)
            )
            return

        offset = line.find(text)
        markup = line[:offset] if offset >= 0 else line
        surrounding = c.OPENING_TAG.search(line)

        candidates.append(
            Candidate(
                file=str(file_path),
                line=line_number,
                offset=max(offset, 0),
                text=text,
                context=line.strip(),
                element_type=nearest_tag_element_type(markup),
                file_type=FileType.BLADE,
                metadata={
                    "is_plain_text": True,
                    "in_attribute": False,
                    "surrounding_tag": surrounding.group(1).lower() if surrounding else None,
                },
            )
        )
