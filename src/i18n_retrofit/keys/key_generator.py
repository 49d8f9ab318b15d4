"""
Translation key generation for i18n-retrofit.

Keys have the shape ``section.bucket.description``: the section comes from
the file location, the bucket from the candidate's element type and the
description from the text itself. Parameter detection and the confidence
score are pure functions over a candidate as well.
"""

from __future__ import annotations

import hashlib
import logging
import re
import unicodedata
from pathlib import PurePosixPath
from typing import Final, final

from ..scanning.types import Candidate, FileType

logger = logging.getLogger(__name__)

COMMON_ACTIONS: Final[tuple[str, ...]] = (
    "save", "cancel", "delete", "edit", "create", "update", "submit", "reset",
    "clear", "close", "open", "search", "filter", "sort", "export", "import",
    "download", "upload", "confirm", "apply", "add", "remove", "copy", "paste",
    "undo", "redo", "send", "share", "print", "refresh", "reload", "back",
    "next", "previous", "continue", "skip", "finish", "done", "start", "stop",
    "pause", "resume", "retry", "accept", "reject", "approve", "deny", "login",
    "logout", "register", "signup", "signin", "signout", "select", "deselect",
    "enable", "disable", "show", "hide", "expand", "collapse", "view",
    "preview", "publish", "unpublish", "archive", "restore",
)  # fmt: skip

COMMON_LABELS: Final[tuple[str, ...]] = (
    "name", "email", "password", "username", "phone", "address", "city",
    "country", "zip", "zipcode", "postal", "state", "region", "province",
    "description", "title", "status", "date", "time", "datetime", "message",
    "comment", "note", "notes", "website", "url", "company", "organization",
    "first_name", "last_name", "full_name", "birthday", "gender", "age",
    "price", "amount", "quantity", "total", "subtotal", "tax", "discount",
    "currency", "language", "timezone", "role", "type", "category", "tags",
    "keywords", "subject", "content", "body", "summary", "excerpt", "image",
    "photo", "avatar", "file", "attachment", "color", "size",
)  # fmt: skip

# Ordered: the first type with a matching keyword wins.
MESSAGE_KEYWORDS: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    ("success", ("success", "successfully", "created", "updated", "deleted", "saved", "completed", "done")),
    ("error", ("error", "failed", "invalid", "incorrect", "wrong", "unable", "cannot", "not found")),
    ("warning", ("warning", "caution", "attention", "notice", "alert")),
    ("info", ("info", "information", "note", "tip", "hint")),
    ("confirm", ("confirm", "sure", "certain", "proceed", "continue")),
)  # fmt: skip

# Ordered path rewrites: pattern -> section template.
SECTION_PATTERNS: Final[tuple[tuple[re.Pattern[str], str], ...]] = (
    (re.compile(r"resources/views/livewire/(.+?)\.blade\.php$"), r"livewire/\1"),
    (re.compile(r"resources/views/(.+?)\.blade\.php$"), r"\1"),
    (re.compile(r"app/Livewire/(.+?)\.php$"), r"livewire/\1"),
    (re.compile(r"app/Http/Controllers/(.+?)Controller\.php$"), r"\1"),
    (re.compile(r"app/(.+?)\.php$"), r"\1"),
)

STRUCTURAL_PREFIXES: Final[frozenset[str]] = frozenset({"app", "http", "controllers", "livewire"})
MAX_SECTION_DEPTH: Final[int] = 2

ELEMENT_TYPE_BUCKETS: Final[dict[str, str]] = {
    "button": "buttons",
    "label": "labels",
    "label_attr": "labels",
    "array_label": "labels",
    "placeholder": "placeholders",
    "placeholder_attr": "placeholders",
    "title_attr": "tooltips",
    "alt_attr": "images",
    "aria-label_attr": "accessibility",
    "aria-description_attr": "accessibility",
    "html_text": "content",
    "paragraph": "content",
    "span": "content",
    "link": "links",
    "list_item": "lists",
    "table_cell": "tables",
    "option": "options",
    "string_literal": "misc",
    "user_facing_string": "misc",
    "validation_message": "validation",
    "method_message": "validation",
    "method_messages": "validation",
    "exception_message": "errors",
    "method_abort": "errors",
    "method_throw": "errors",
    "method_flash": "messages",
    "method_with": "messages",
    "return_message": "messages",
    "method_withSuccess": "messages.success",
    "method_withError": "messages.error",
    "method_withWarning": "messages.warning",
    "method_withInfo": "messages.info",
    "method_success": "messages.success",
    "method_error": "messages.error",
    "method_warning": "messages.warning",
    "method_info": "messages.info",
    "method_dispatch": "events",
    "method_dispatchBrowserEvent": "events",
    "method_emit": "events",
    "method_emitUp": "events",
    "method_emitTo": "events",
    "method_notify": "notifications",
}

# Message types that have their own sub-bucket under ``messages``.
MESSAGE_SUB_BUCKETS: Final[frozenset[str]] = frozenset({"success", "error", "warning", "info"})

HIGH_SIGNAL_ELEMENT_TYPES: Final[frozenset[str]] = frozenset({"button", "label", "placeholder_attr"})
CODE_PUNCTUATION: Final[re.Pattern[str]] = re.compile(r"[{}()\[\];=<>]")

MESSAGE_DESCRIPTION_LIMIT: Final[int] = 30
SLUG_LIMIT: Final[int] = 50
SLUG_MIN_BREAK: Final[int] = 20

# Parameter detection, in detection order.
PLACEHOLDER_TOKEN: Final[re.Pattern[str]] = re.compile(r":[a-z_]+")
GREETING_NAME: Final[re.Pattern[str]] = re.compile(
    r"\b((?i:hello|hi|welcome|dear|hey))\s+([A-Z][a-z]+)\b"
)
STANDALONE_INTEGER: Final[re.Pattern[str]] = re.compile(r"(?<![/\-])\b\d+\b(?![/\-])")
EMAIL: Final[re.Pattern[str]] = re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]+")
DATE: Final[re.Pattern[str]] = re.compile(r"\b\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}\b")
AMOUNT_SYMBOL: Final[re.Pattern[str]] = re.compile(r"[$€£¥]\d+(?:\.\d{2})?")
AMOUNT_CODE: Final[re.Pattern[str]] = re.compile(
    r"\d+(?:\.\d{2})?\s*(?:USD|EUR|GBP|JPY)\b", re.IGNORECASE
)

# Substitution order; dates, emails and amounts go before bare counts so
# their digits are not taken for a count.
SUBSTITUTION_ORDER: Final[tuple[str, ...]] = (":name", ":email", ":date", ":amount", ":count")

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NON_SLUG = re.compile(r"[^a-z0-9]+")


def kebab(value: str) -> str:
    """``UserProfile`` / ``user_profile`` / ``User Profile`` -> ``user-profile``."""
    value = _CAMEL_BOUNDARY.sub("-", value.strip())
    return re.sub(r"[\s_\-]+", "-", value).lower().strip("-")


def slugify(text: str) -> str:
    """ASCII slug with ``-`` separators."""
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return _NON_SLUG.sub("-", normalized.lower()).strip("-")


def derive_section(file_path: str) -> str:
    """
    Derive the key section from a file path.

    Examples:
        resources/views/auth/login.blade.php      -> auth.login
        resources/views/livewire/settings/profile.blade.php -> settings.profile
        app/Http/Controllers/ProfileController.php -> profile
    """
    path = file_path.replace("\\", "/")

    for pattern, template in SECTION_PATTERNS:
        match = pattern.search(path)
        if match:
            segments = [kebab(part) for part in match.expand(template).replace(".", "/").split("/")]
            segments = [segment for segment in segments if segment]
            while len(segments) > 1 and segments[0] in STRUCTURAL_PREFIXES:
                segments = segments[1:]
            return ".".join(segments[-MAX_SECTION_DEPTH:])

    stem = PurePosixPath(path).name.removesuffix(".php").removesuffix(".blade")
    return kebab(stem.split(".")[0]) or "app"


def detect_message_type(text: str) -> str | None:
    """Classify a message as success / error / warning / info / confirm by keywords."""
    lower = text.lower()
    for message_type, keywords in MESSAGE_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return message_type
    return None


def element_type_bucket(element_type: str, text: str) -> str:
    """Collapse an element type into its key bucket, refining plain ``messages``."""
    if element_type.startswith("heading_"):
        return "headings"

    bucket = ELEMENT_TYPE_BUCKETS.get(element_type, "misc")
    if bucket == "messages":
        message_type = detect_message_type(text)
        if message_type in MESSAGE_SUB_BUCKETS:
            return f"messages.{message_type}"
    return bucket


def limit_slug(slug: str) -> str:
    if len(slug) <= SLUG_LIMIT:
        return slug
    slug = slug[:SLUG_LIMIT]
    last_hyphen = slug.rfind("-")
    if last_hyphen > SLUG_MIN_BREAK:
        slug = slug[:last_hyphen]
    return slug


def generate_description(text: str, element_type: str) -> str:
    """
    Derive the description part of a key from the text.

    Tried in order: an action verb (exact or as first word), a form label
    (exact), a message-type prefix for message-like elements, an action verb
    inside a button, and finally a slug capped on a word boundary.
    """
    lower = text.lower().strip()

    for action in COMMON_ACTIONS:
        if lower == action or lower.startswith(f"{action} "):
            return action

    for label in COMMON_LABELS:
        if lower == label or lower == label.replace("_", " "):
            return label

    if "message" in element_type or "method_" in element_type:
        message_type = detect_message_type(text)
        if message_type is not None:
            return f"{message_type}-{slugify(text[:MESSAGE_DESCRIPTION_LIMIT])}"

    if "button" in element_type:
        for action in COMMON_ACTIONS:
            if action in lower:
                return slugify(text) if len(lower.split()) <= 3 else action

    slug = limit_slug(slugify(text))
    if not slug:
        # Nothing survives ASCII folding; fall back to a stable hash.
        slug = "text-" + hashlib.md5(text.encode("utf-8")).hexdigest()[:8]
    return slug


def sanitize_key(key: str) -> str:
    """Collapse repeated separators, trim stray hyphens per segment and drop empty segments."""
    key = re.sub(r"\.+", ".", key)
    key = re.sub(r"-+", "-", key)
    parts = (part.strip("-") for part in key.split("."))
    return ".".join(part for part in parts if part)


def generate_key(candidate: Candidate) -> str:
    """Build the ``section.bucket.description`` key for a candidate."""
    section = derive_section(candidate.file)
    bucket = element_type_bucket(candidate.element_type, candidate.text)
    description = generate_description(candidate.text, candidate.element_type)
    return sanitize_key(f"{section}.{bucket}.{description}")


def strip_valued_spans(text: str) -> str:
    """Drop emails, dates and amounts so only bare integers remain countable."""
    for pattern in (EMAIL, DATE, AMOUNT_SYMBOL, AMOUNT_CODE):
        text = pattern.sub(" ", text)
    return text


def detect_parameters(text: str) -> list[str]:
    """
    Detect placeholder tokens a translated string should carry.

    Returns:
        Ordered, deduplicated tokens such as ``[":name", ":count"]``
    """
    params: list[str] = PLACEHOLDER_TOKEN.findall(text)

    if GREETING_NAME.search(text):
        params.append(":name")
    if STANDALONE_INTEGER.search(strip_valued_spans(text)):
        params.append(":count")
    if EMAIL.search(text):
        params.append(":email")
    if DATE.search(text):
        params.append(":date")
    if AMOUNT_SYMBOL.search(text) or AMOUNT_CODE.search(text):
        params.append(":amount")

    return list(dict.fromkeys(params))


def apply_parameters(text: str, params: list[str]) -> str:
    """Replace detected values in ``text`` with their placeholder tokens."""
    wanted = set(params)
    for param in SUBSTITUTION_ORDER:
        if param not in wanted:
            continue
        if param == ":name":
            text = GREETING_NAME.sub(r"\1 :name", text)
        elif param == ":email":
            text = EMAIL.sub(":email", text)
        elif param == ":date":
            text = DATE.sub(":date", text)
        elif param == ":amount":
            text = AMOUNT_SYMBOL.sub(":amount", text)
            text = AMOUNT_CODE.sub(":amount", text)
        elif param == ":count":
            text = STANDALONE_INTEGER.sub(":count", text)
    return text


def calculate_confidence(candidate: Candidate, key: str | None = None) -> int:  # pyright: ignore[reportUnusedParameter]
    """
    Score how safe it is to treat a candidate as translatable.

    Args:
        candidate: The candidate to score
        key: Generated key; accepted for callers that score after keying

    Returns:
        Score clamped to 0-100
    """
    score = 50
    element_type = candidate.element_type
    text = candidate.text

    if element_type.startswith("heading_") or element_type in HIGH_SIGNAL_ELEMENT_TYPES:
        score += 20

    length = len(text)
    if 5 <= length <= 80:
        score += 15
    if length < 5:
        score -= 15
    if length > 200:
        score -= 20

    if not candidate.in_attribute:
        score += 10

    if candidate.file_type in (FileType.BLADE, FileType.VOLT):
        score += 10

    if CODE_PUNCTUATION.search(text):
        score -= 20

    if element_type == "button":
        lower = text.lower()
        if any(action in lower for action in COMMON_ACTIONS):
            score += 15

    return max(0, min(100, score))


@final
class KeyGenerator:
    """Bundles the key functions for callers that take a generator as a dependency."""

    def generate(self, candidate: Candidate) -> str:
        return generate_key(candidate)

    def detect_parameters(self, text: str) -> list[str]:
        return detect_parameters(text)

    def apply_parameters(self, text: str, params: list[str]) -> str:
        return apply_parameters(text, params)

    def calculate_confidence(self, candidate: Candidate, key: str | None = None) -> int:
        return calculate_confidence(candidate, key)
