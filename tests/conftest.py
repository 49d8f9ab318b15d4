"""
Pytest configuration and shared fixtures for i18n-retrofit tests.

This module provides a small Laravel-style project tree covering every
dialect, scanner instances, and a guard that restores the root logger after
tests that run the command-line entry point.
"""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from i18n_retrofit.config.schema import RetrofitConfig
from i18n_retrofit.scanning.scanners import BladeScanner, PhpScanner, VoltScanner
from tests.utils.test_helpers import (
    CONTROLLER_SOURCE,
    VENDOR_SOURCE,
    VOLT_SOURCE,
    WELCOME_SOURCE,
    write_source,
)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """
    Create a small project tree with one file per dialect.

    Layout:
        app/Http/Controllers/ProfileController.php  (plain script, 1 candidate)
        resources/views/welcome.blade.php           (template, 1 candidate)
        resources/views/livewire/profile.blade.php  (Volt component, 3 candidates)
        resources/js/app.js                         (no scanner)
        vendor/acme/src/VendorController.php        (excluded by default)
    """
    root = tmp_path / "project"
    _ = write_source(root, "app/Http/Controllers/ProfileController.php", CONTROLLER_SOURCE)
    _ = write_source(root, "resources/views/welcome.blade.php", WELCOME_SOURCE)
    _ = write_source(root, "resources/views/livewire/profile.blade.php", VOLT_SOURCE)
    _ = write_source(root, "resources/js/app.js", "console.log('Not scanned here');\n")
    _ = write_source(root, "vendor/acme/src/VendorController.php", VENDOR_SOURCE)
    return root


@pytest.fixture
def php_scanner() -> PhpScanner:
    return PhpScanner()


@pytest.fixture
def blade_scanner() -> BladeScanner:
    return BladeScanner()


@pytest.fixture
def volt_scanner() -> VoltScanner:
    return VoltScanner()


@pytest.fixture
def default_config() -> RetrofitConfig:
    """Configuration with every default in place."""
    return RetrofitConfig()


@pytest.fixture
def isolated_logging() -> Generator[None, None, None]:
    """Restore root logger handlers and level after the entry point reconfigures them."""
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level

    yield

    for handler in root_logger.handlers:
        if handler not in saved_handlers:
            handler.close()
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)
