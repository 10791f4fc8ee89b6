# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Atomic file writes.

Run artifacts (history, metadata, config snapshots) are written to a temp
file in the target's own directory and renamed over the target. Rename is
atomic on POSIX within one filesystem, so a reader sees either the old file
or the complete new one.
"""

import tempfile
from pathlib import Path


def _write_then_rename(target_path: Path, payload: str | bytes, encoding: str | None) -> None:
    target_path.parent.mkdir(parents=True, exist_ok=True)
    mode = "wb" if isinstance(payload, bytes) else "w"

    handle = tempfile.NamedTemporaryFile(
        mode=mode,
        encoding=encoding if mode == "w" else None,
        dir=str(target_path.parent),
        prefix=".kustom_tmp_",
        suffix=".tmp",
        delete=False,
    )
    temp_path = Path(handle.name)
    try:
        handle.write(payload)
        handle.flush()
        handle.close()
        temp_path.replace(target_path)
    except BaseException:
        handle.close()
        if temp_path.exists():
            temp_path.unlink()
        raise


def atomic_write(target_path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Write text to ``target_path`` atomically.

    Raises:
        OSError: If the write or rename fails. The target is left untouched.
    """
    _write_then_rename(target_path, content, encoding)


def atomic_write_bytes(target_path: Path, data: bytes) -> None:
    """Binary counterpart of ``atomic_write``."""
    _write_then_rename(target_path, data, None)


def safe_read(file_path: Path, encoding: str = "utf-8") -> str:
    """
    Read a text file, distinguishing "missing" from "is a directory".

    Raises:
        FileNotFoundError: The path does not exist.
        IsADirectoryError: The path is a directory.
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    if not file_path.is_file():
        raise IsADirectoryError(f"Expected a file, got a directory: {file_path}")
    return file_path.read_text(encoding=encoding)
