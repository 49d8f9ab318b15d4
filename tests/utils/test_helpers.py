"""
Common test utilities and helper functions for i18n-retrofit tests.

This module provides reusable utilities for creating temporary files and
source trees, and for building candidates and approved changes without
going through a scan.
"""

from __future__ import annotations

import tempfile
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

import yaml

from i18n_retrofit.rewriting.types import ApprovedChange
from i18n_retrofit.scanning.types import Candidate, FileType

CONTROLLER_SOURCE = """<?php

namespace App\\Http\\Controllers;

use Illuminate\\Http\\Request;

class ProfileController extends Controller
{
    public function update(Request $request)
    {
        $request->validate(['name' => 'required|max:255']);
        return redirect()->back()->with('success', 'Profile updated successfully');
    }
}
"""

VOLT_SOURCE = """<?php

use function Livewire\\Volt\\{state};

state(['name' => '']);

$save = function () {
    session()->flash('status', 'Profile saved successfully');
};

?>

<div>
    <h2>Edit Profile</h2>
    <button wire:click="save">Save changes</button>
</div>
"""

WELCOME_SOURCE = "<h1>Welcome Home</h1>\n"

VENDOR_SOURCE = """<?php

class VendorController extends Controller
{
    public function show()
    {
        return back()->with('status', 'Vendor package message');
    }
}
"""


@contextmanager
def create_temp_config_file(
    config_data: dict[str, object] | None = None,
    suffix: str = ".yml",
) -> Generator[Path, None, None]:
    """
    Context manager for creating temporary configuration files.

    Args:
        config_data: Configuration data to write (empty file when None)
        suffix: File suffix for the temporary file

    Yields:
        Path: Path to the temporary configuration file

    Example:
        >>> with create_temp_config_file({"analysis": {"min_confidence": 80}}) as path:
        ...     config = ConfigManager.load_config(path)
    """
    with tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False) as f:
        if config_data is not None:
            yaml.dump(config_data, f, default_flow_style=False)
        temp_path = Path(f.name)

    try:
        yield temp_path
    finally:
        if temp_path.exists():
            temp_path.unlink()


@contextmanager
def create_temp_directory() -> Generator[Path, None, None]:
    """
    Context manager for creating temporary directories.

    Yields:
        Path: Path to the temporary directory
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


def write_source(root: Path, relative_path: str, content: str) -> Path:
    """
    Write a source file below ``root``, creating parent directories.

    Args:
        root: Project root
        relative_path: Path of the file relative to the root
        content: File content

    Returns:
        Path: Absolute path of the written file
    """
    path = root / relative_path
    _ = path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(content, encoding="utf-8")
    return path


def make_candidate(
    text: str = "Welcome Home",
    element_type: str = "heading_h1",
    file: str = "resources/views/welcome.blade.php",
    file_type: FileType = FileType.BLADE,
    line: int = 1,
    in_attribute: bool = False,
) -> Candidate:
    """Build a candidate directly, with sensible defaults for a Blade heading."""
    return Candidate(
        file=file,
        line=line,
        offset=0,
        text=text,
        context=text,
        element_type=element_type,
        file_type=file_type,
        metadata={"in_attribute": in_attribute},
    )


def make_change(
    key: str,
    value: str,
    file: str,
    line: int,
    params: list[str] | None = None,
    change_id: str | int = 1,
) -> ApprovedChange:
    """Build an approved change with a single location."""
    return ApprovedChange(
        id=change_id,
        key=key,
        value=value,
        params=params or [],
        locations=[{"file": file, "line": line}],  # pyright: ignore[reportArgumentType]
    )


__all__ = [
    "CONTROLLER_SOURCE",
    "VENDOR_SOURCE",
    "VOLT_SOURCE",
    "WELCOME_SOURCE",
    "create_temp_config_file",
    "create_temp_directory",
    "write_source",
    "make_candidate",
    "make_change",
]
