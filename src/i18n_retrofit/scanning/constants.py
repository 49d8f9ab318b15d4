"""
Heuristic vocabularies for the dialect scanners.

These tables are process-wide constants. Order matters wherever a tuple is
used for first-match lookups (user-facing methods, skip patterns).
"""

from __future__ import annotations

import re
from typing import Final

# =============================================================================
# Shared
# =============================================================================

MIN_TEXT_LENGTH: Final[int] = 3

# Width of the window inspected before a literal.
TRANSLATED_WINDOW: Final[int] = 30
CLASSIFY_WINDOW: Final[int] = 50

# Quoted literal honouring backslash escapes; group 1 is the quote character.
QUOTED_LITERAL: Final[re.Pattern[str]] = re.compile(r"""(["'])((?:\\.|(?!\1)[^\\])*)\1""")

# Attribute names whose values are translated.
TRANSLATABLE_ATTRIBUTES: Final[tuple[str, ...]] = (
    "placeholder",
    "title",
    "alt",
    "aria-label",
    "aria-description",
    "label",
)

# =============================================================================
# PHP (plain script)
# =============================================================================

PHP_TRANSLATION_TOKENS: Final[tuple[str, ...]] = (
    "__(",
    "trans(",
    "trans_choice(",
    "@lang(",
    "Lang::get(",
    "Lang::choice(",
)

USER_FACING_METHODS: Final[tuple[str, ...]] = (
    # Flash messages
    "flash",
    "with",
    "withSuccess",
    "withError",
    "withWarning",
    "withInfo",
    # Validation
    "message",
    "messages",
    # Component events
    "dispatch",
    "dispatchBrowserEvent",
    "emit",
    "emitUp",
    "emitTo",
    # Exceptions
    "abort",
    "throw",
    # Notifications
    "success",
    "error",
    "warning",
    "info",
    "notify",
    # Labels and titles
    "setTitle",
    "setDescription",
    "setLabel",
    "label",
    "placeholder",
    "hint",
    "helperText",
)

PHP_SKIP_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"^[a-z_.]+$"),  # translation key
    re.compile(r"^[A-Z][a-z]+(?:[A-Z][a-z]+)*$"),  # PascalCase class name
    re.compile(r"^[a-z]+(?:_[a-z]+)*$"),  # snake_case
    re.compile(r"^[a-z]+(?:-[a-z]+)*$"),  # kebab-case css class
    re.compile(r"^\$"),  # variable reference
    re.compile(r"^[0-9]+(?:\.[0-9]+)?$"),  # number
    re.compile(r"^https?://"),  # url
    re.compile(r"^[\\\w]+$"),  # namespaced class name
    re.compile(r"^[a-z_]+\.[a-z_]+(?:\.[a-z_]+)*$", re.IGNORECASE),  # dotted config/route key
    re.compile(r"^\s*$"),
    re.compile(r"^<[^>]+>$"),  # lone html tag
    re.compile(r"^[a-z0-9_-]+::[a-z0-9_.-]+$", re.IGNORECASE),  # package view
    re.compile(r"^[a-z][a-z0-9_-]*(?:\.[a-z][a-z0-9_-]*)+$", re.IGNORECASE),  # dotted view
    re.compile(r"^[YyMmDdHhIiSsAaGg][-/:\s.]+[YyMmDdHhIiSsAaGg]"),  # date format
    re.compile(r"^[dDjlNSwzWFmMntLoYyaABgGhHisuveIOPTZcrU\-/:\s.]+$"),  # date format chars
    re.compile(r"^[\w/.\-]+\.(?:php|js|css|json|html|blade\.php)$"),  # file path
)

VALIDATION_KEYWORDS: Final[frozenset[str]] = frozenset(
    {
        "accepted", "active_url", "after", "after_or_equal", "alpha", "alpha_dash",
        "alpha_num", "array", "bail", "before", "before_or_equal", "between",
        "boolean", "confirmed", "current_password", "date", "date_equals", "date_format",
        "declined", "different", "digits", "digits_between", "dimensions", "distinct",
        "email", "ends_with", "enum", "exclude", "exclude_if", "exclude_unless",
        "exists", "file", "filled", "gt", "gte", "image", "in", "in_array",
        "integer", "ip", "ipv4", "ipv6", "json", "lt", "lte", "mac_address",
        "max", "mimes", "mimetypes", "min", "multiple_of", "not_in", "not_regex",
        "nullable", "numeric", "password", "present", "prohibited", "prohibited_if",
        "prohibited_unless", "prohibits", "regex", "required", "required_if",
        "required_unless", "required_with", "required_with_all", "required_without",
        "required_without_all", "same", "size", "sometimes", "starts_with", "string",
        "timezone", "unique", "url", "uuid",
    }
)  # fmt: skip

PHP_NON_TRANSLATABLE_CONTEXTS: Final[tuple[str, ...]] = (
    "use ",
    "namespace ",
    "extends ",
    "implements ",
    "class ",
    "->where(",
    "->orderBy(",
    "->groupBy(",
    "->select(",
    "->join(",
    "->table(",
    "::class",
    "Route::",
    "config(",
    "env(",
    "Log::",
    "Cache::",
    "Storage::",
    "Session::",
    "Cookie::",
    "DB::",
    "Schema::",
    # Views and layouts
    "->layout(",
    "->view(",
    "view(",
    "->component(",
    "->extends(",
    "->include(",
    "->slot(",
    # Routes
    "->name(",
    "->route(",
    "route(",
    "->middleware(",
    "->prefix(",
    "->domain(",
    # Validation
    "->rules(",
    "->validate(",
    "Validator::",
    "Rule::",
    # Queues, storage and drivers
    "->disk(",
    "->queue(",
    "->connection(",
    "->driver(",
    "dispatch(",
    "->onQueue(",
    "->onConnection(",
)

# Contexts whose generic strings are shown to users.
USER_FACING_FILE_CONTEXTS: Final[frozenset[str]] = frozenset(
    {"component", "controller", "notification", "mail"}
)

VALIDATION_MESSAGE_KEY: Final[re.Pattern[str]] = re.compile(r"""['"]message['"]\s*=>\s*$""")
ARRAY_LABEL_KEY: Final[re.Pattern[str]] = re.compile(
    r"""['"](?:label|title|description|text|content|message|error|success|warning)['"]\s*=>\s*$"""
)
EXCEPTION_CALL: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"throw\s+new\s+\w*Exception\s*\(\s*$"),
    re.compile(r"abort\s*\(\s*\d+\s*,\s*$"),
)
RETURN_LITERAL: Final[re.Pattern[str]] = re.compile(r"return\s+$")

# Method call right before a literal, optionally after a leading literal
# argument such as a flash key: ->with('success', 'Saved')
METHOD_CALL_BEFORE: Final[re.Pattern[str]] = re.compile(
    r"""->(\w+)\s*\(\s*(?:(['"])[^'"]*\2\s*,\s*)?$"""
)
HEREDOC_START: Final[re.Pattern[str]] = re.compile(r"""<<<\s*(['"]?)(\w+)\1""")

# =============================================================================
# Blade (template-hybrid)
# =============================================================================

BLADE_TRANSLATION_TOKENS: Final[tuple[str, ...]] = (
    "@lang",
    "trans",
    "__",
    "@choice",
    "trans_choice",
)

BLADE_SKIP_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"^(?:class|id|name|type|method|action|href|src|rel|target)="),
    re.compile(r"^(?:data-|x-|wire:|@click|@|:class|:id|:)"),
    re.compile(r"^\$"),
    re.compile(r"^[0-9]+(?:\.[0-9]+)?$"),
    re.compile(r"^https?://"),
    re.compile(r"^mailto:"),
    re.compile(r"^tel:"),
    re.compile(r"^#[a-fA-F0-9]{3,8}$"),
    re.compile(r"^[a-z0-9_-]+$"),  # css class or identifier
    re.compile(r"^.*\{.*\}.*$", re.DOTALL),  # json-like
    re.compile(r"^\s*$"),
    re.compile(r"^[a-z0-9_-]+::[a-z0-9_.-]+$", re.IGNORECASE),  # package view
    re.compile(r"^[a-z][a-z0-9_-]*(?:\.[a-z][a-z0-9_-]*)+$", re.IGNORECASE),  # dotted view
    re.compile(r"^[a-z]+-[a-z-]+$", re.IGNORECASE),  # icon name
)

BLADE_NON_TRANSLATABLE_CONTEXTS: Final[tuple[str, ...]] = (
    # View directives
    "@extends(",
    "@include(",
    "@includeIf(",
    "@includeWhen(",
    "@includeFirst(",
    "@component(",
    "@livewire(",
    "@livewireStyles",
    "@livewireScripts",
    # Section and stack names
    "@section(",
    "@yield(",
    "@push(",
    "@pushOnce(",
    "@stack(",
    "@slot(",
    # Routes and assets
    "route(",
    "url(",
    "asset(",
    "mix(",
    "vite(",
    "secure_url(",
    "config(",
    "env(",
    "storage_path(",
    "public_path(",
    "base_path(",
    "resource_path(",
    "app_path(",
    # Component attributes that take names
    ":icon=",
    'icon="',
    "icon='",
    ":name=",
    ":variant=",
    'variant="',
    ":size=",
    'size="',
)

TECHNICAL_ATTRIBUTE_BEFORE: Final[re.Pattern[str]] = re.compile(
    r"""(?:class|id|name|data-\w+|wire:\w*|x-\w*)\s*=\s*$"""
)
# Whitelisted attribute name right before a literal; pass (b) owns those values.
TRANSLATABLE_ATTRIBUTE_BEFORE: Final[re.Pattern[str]] = re.compile(
    r"""(?<![\w:.-])(?:aria-label|aria-description|placeholder|title|alt|label)\s*=\s*$""",
    re.IGNORECASE,
)
IN_ATTRIBUTE_BEFORE: Final[re.Pattern[str]] = re.compile(r"""[\w:.-]+\s*=\s*$""")
# Leftover attribute of a tag that spans several lines.
ATTRIBUTE_FRAGMENT: Final[re.Pattern[str]] = re.compile(r"""[\w:.-]+\s*=\s*["']""")
TEMPLATE_SYNTAX: Final[re.Pattern[str]] = re.compile(r"\{\{|\{!!|@|\$")

# Constructs removed before plain text is extracted, applied in order.
TEMPLATE_CONSTRUCTS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"\{\{--.*?--\}\}"),
    re.compile(r"<!--.*?-->"),
    re.compile(r"\{!!.*?!!\}"),
    re.compile(r"\{\{.*?\}\}"),
    re.compile(r"@\w+(?:\((?:[^()]|\((?:[^()]|\([^()]*\))*\))*\))?"),
    re.compile(r"<\?php.*?\?>"),
    re.compile(r"<\?=.*?\?>"),
)
HTML_TAG: Final[re.Pattern[str]] = re.compile(r"<[^>]*>|<[^>]*$")
OPENING_TAG: Final[re.Pattern[str]] = re.compile(r"<([a-zA-Z][\w-]*)\b[^>]*>")
NUMERIC: Final[re.Pattern[str]] = re.compile(r"^[+-]?\d+(?:\.\d+)?$")
SPECIAL_CHARS_ONLY: Final[re.Pattern[str]] = re.compile(r"^[\s\W]+$")

# Ordered: opening tag name -> element type.
TAG_ELEMENT_TYPES: Final[dict[str, str]] = {
    "button": "button",
    "label": "label",
    "a": "link",
    "p": "paragraph",
    "span": "span",
    "td": "table_cell",
    "th": "table_cell",
    "li": "list_item",
    "option": "option",
}

# Attribute context right before a literal -> element type.
ATTRIBUTE_ELEMENT_TYPES: Final[tuple[tuple[re.Pattern[str], str], ...]] = (
    (re.compile(r"""placeholder\s*=\s*["']?$""", re.IGNORECASE), "placeholder_attr"),
    (re.compile(r"""title\s*=\s*["']?$""", re.IGNORECASE), "title_attr"),
    (re.compile(r"""alt\s*=\s*["']?$""", re.IGNORECASE), "alt_attr"),
)

# =============================================================================
# Volt (mixed single-file)
# =============================================================================

VOLT_MARKERS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"use\s+function\s+Livewire\\Volt\\"),
    re.compile(r"Volt::"),
)
SCRIPT_OPEN: Final[re.Pattern[str]] = re.compile(r"^<\?php")
SCRIPT_CLOSE: Final[re.Pattern[str]] = re.compile(r"^\?>")
