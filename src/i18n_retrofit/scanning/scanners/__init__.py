"""
Dialect scanners for i18n-retrofit.

Each scanner satisfies the ``FileScanner`` protocol. Order matters when
dispatching: the Volt scanner sniffs content and must be tried before the
Blade scanner, which must be tried before the PHP scanner.
"""

from .base import FileScanner, read_source
from .blade_scanner import BladeScanner
from .php_scanner import PhpScanner
from .volt_scanner import VoltScanner


def default_scanners() -> list[FileScanner]:
    """Return a fresh scanner list in dispatch order."""
    return [VoltScanner(), BladeScanner(), PhpScanner()]


__all__ = [
    "FileScanner",
    "read_source",
    "BladeScanner",
    "PhpScanner",
    "VoltScanner",
    "default_scanners",
]
