"""
Path utilities for assetpipe.

Single source of truth for well-known file names and
extension/path normalization.
"""

from __future__ import annotations

import os
from pathlib import Path, PureWindowsPath
from typing import List, Mapping

CONFIG_FILE = "assetpipe.yaml"
MANIFEST_FILE = ".manifest.json"


def config_path(root: Path) -> Path:
    """Path to the project configuration file."""
    return (root / CONFIG_FILE).resolve()


def normalize_extension(ext: str) -> str:
    """'JS' -> '.js', '.CSS' -> '.css'."""
    ext = ext.lower()
    if not ext.startswith("."):
        ext = "." + ext
    return ext


def is_absolute(path: str) -> bool:
    """
    Whether the path is absolute, regardless of whether it exists.
    Accepts POSIX, UNC and drive-letter forms.
    """
    if not path:
        return False
    if path[0] in ("/", "\\"):
        return True
    return PureWindowsPath(path).is_absolute()


def is_relative_marker(path: str) -> bool:
    """True for './x' and '../x' (either separator)."""
    return path.startswith(("./", ".\\", "../", "..\\"))


def to_posix(name: str) -> str:
    """Normalize separators to forward slashes."""
    return name.replace(os.sep, "/").replace("\\", "/")


def extensions_of(basename: str) -> List[str]:
    """
    All trailing extensions, normalized: "app.js.coffee" -> [".js", ".coffee"].
    A leading dot (dotfile) does not start an extension.
    """
    pos = basename.find(".", 1)
    if not basename or pos < 0:
        return []
    return [normalize_extension(e) for e in basename[pos + 1:].split(".") if e]


def format_extension(basename: str, content_types: Mapping[str, str]) -> str:
    """First extension present in the content-type table, or ""."""
    for ext in extensions_of(basename):
        if ext in content_types:
            return ext
    return ""


__all__ = [
    "CONFIG_FILE", "MANIFEST_FILE", "config_path", "normalize_extension",
    "is_absolute", "is_relative_marker", "to_posix", "extensions_of", "format_extension",
]
