"""
Filesystem collaborator.

Every disk access made by the pipeline goes through a FileSystem instance
injected into the manager, so tests and embedding hosts can swap it out.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List


@dataclass(frozen=True)
class DirEntry:
    name: str
    path: Path
    is_dir: bool


class FileSystem:
    """
    Local disk implementation.

    Writes are atomic (tmp file + replace). Errors are not suppressed.
    """

    # ---------- reading ----------
    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        return path.read_text(encoding=encoding)

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def mtime(self, path: Path) -> float:
        return path.stat().st_mtime

    def list_dir(self, path: Path) -> List[DirEntry]:
        """Immediate entries of a directory, sorted by name."""
        entries = [DirEntry(name=p.name, path=p, is_dir=p.is_dir()) for p in path.iterdir()]
        entries.sort(key=lambda e: e.name)
        return entries

    # ---------- writing ----------
    def write_text(self, path: Path, content: str, encoding: str = "utf-8") -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        # newline="" keeps the processed body byte-identical to what was digested
        with tmp.open("w", encoding=encoding, newline="") as f:
            f.write(content)
        tmp.replace(path)

    def copy(self, src: Path, dest: Path) -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dest)

    def remove(self, path: Path) -> bool:
        if not path.exists():
            return False
        path.unlink()
        return True

    def clear_dir(self, path: Path) -> None:
        """Remove everything inside a directory, keeping the directory itself."""
        if not path.is_dir():
            return
        for child in path.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()


__all__ = ["FileSystem", "DirEntry"]
