"""
i18n-retrofit - find hardcoded user-facing text in PHP, Blade and Volt
sources, suggest translation keys, and rewrite approved literals into
translation calls.
"""

from .keys import KeyGenerator, analyze_candidates
from .main import main
from .rewriting import ApprovedChange, FileRewriter, RewriteResult, load_approved_changes
from .scanning import Candidate, ScanResult, SourceScanner, scan

__all__ = [
    "main",
    "KeyGenerator",
    "analyze_candidates",
    "ApprovedChange",
    "FileRewriter",
    "RewriteResult",
    "load_approved_changes",
    "Candidate",
    "ScanResult",
    "SourceScanner",
    "scan",
]
