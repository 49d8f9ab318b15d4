"""
Source rewriting for i18n-retrofit.

Approved changes are applied to source files by replacing literals with
translation calls, one file at a time with atomic writes.
"""

from .file_rewriter import (
    FileRewriter,
    format_template_call,
    format_translation_call,
    replace_line,
)
from .types import (
    ApprovedChange,
    ChangeLocation,
    FileRewriteOutcome,
    RewriteResult,
    load_approved_changes,
    parse_approved_changes,
)

__all__ = [
    "FileRewriter",
    "format_template_call",
    "format_translation_call",
    "replace_line",
    "ApprovedChange",
    "ChangeLocation",
    "FileRewriteOutcome",
    "RewriteResult",
    "load_approved_changes",
    "parse_approved_changes",
]
