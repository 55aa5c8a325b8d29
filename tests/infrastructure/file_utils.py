"""
Utilities for creating files and directories in tests.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional


def write(p: Path, text: str) -> Path:
    """
    Write text to a file, creating parent directories as needed.

    Args:
        p: File path
        text: Content to write

    Returns:
        Path to the created file
    """
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8", newline="")
    return p


def write_bytes(p: Path, data: bytes) -> Path:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data)
    return p


def touch(p: Path, mtime: float, atime: Optional[float] = None) -> Path:
    """Set a file's modification time (seconds since the epoch)."""
    os.utime(p, (atime if atime is not None else mtime, mtime))
    return p


__all__ = ["write", "write_bytes", "touch"]
