# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Locating the project root and making output directories."""

from pathlib import Path


def resolve_project_root(start: Path | None = None) -> Path:
    """
    Walk upward from ``start`` (default: this file) to the first directory
    holding a pyproject.toml.

    Raises:
        RuntimeError: If no ancestor has a pyproject.toml.
    """
    current = (start or Path(__file__)).resolve()
    if current.is_file():
        current = current.parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    raise RuntimeError(
        "Cannot find project root. No pyproject.toml found in any ancestor directory."
    )


def ensure_directory(path: Path) -> Path:
    """Create ``path`` and its parents if needed; return it for chaining."""
    path.mkdir(parents=True, exist_ok=True)
    return path
