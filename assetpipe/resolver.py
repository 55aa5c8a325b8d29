"""
Logical path resolution over an ordered stack of search roots.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .fs import FileSystem
from .paths import is_absolute, normalize_extension

logger = logging.getLogger(__name__)


class PathResolver:
    """
    Maps a logical name to one concrete absolute path.

    Roots are searched in order; within a root the literal name is tried
    first, then the name with each recognized extension appended.
    """

    def __init__(self, roots: Iterable[Path], extensions: Iterable[str] = (), fs: Optional[FileSystem] = None):
        self.roots: List[Path] = [Path(r).resolve() for r in roots]
        self.extensions: List[str] = []
        self.fs = fs or FileSystem()
        self.append_extensions(extensions)

    def append_extensions(self, extensions: Iterable[str]) -> None:
        for ext in extensions:
            ext = normalize_extension(ext)
            if ext not in self.extensions:
                self.extensions.append(ext)

    def resolve(self, logical_path: str, preferred: Sequence[str] = (), *, index: bool = True) -> Optional[Path]:
        """
        Resolve a logical path.

        Absolute input is canonicalized and returned without checking existence.
        A directory hit resolves to its index file when one exists (and index
        is True), otherwise to the directory itself (used by require_tree).

        Args:
            logical_path: name relative to a search root, or an absolute path
            preferred: extensions tried before the configured order
            index: apply the index-file rule to directory hits
        """
        if is_absolute(logical_path):
            found = Path(logical_path)
            if index and self.fs.is_dir(found):
                found = self.find_index(found, preferred) or found
            return found.resolve()

        for root in self.roots:
            found = self.resolve_in(root, logical_path, preferred, index=index)
            if found is not None:
                logger.debug(f"Resolved '{logical_path}' -> {found}")
                return found

        logger.debug(f"Could not resolve '{logical_path}' in {len(self.roots)} root(s)")
        return None

    def resolve_in(self, base: Path, name: str, preferred: Sequence[str] = (), *, index: bool = True) -> Optional[Path]:
        """Resolve a name against one directory (a search root or the current file's directory)."""
        found = self._find_in(base, name, preferred)
        if found is None:
            return None
        if index and self.fs.is_dir(found):
            found = self.find_index(found, preferred) or found
        return found.resolve()

    def find_index(self, directory: Path, preferred: Sequence[str] = ()) -> Optional[Path]:
        """index<ext> inside a directory, preferred extensions first."""
        for ext in self._order(preferred):
            candidate = directory / f"index{ext}"
            if self.fs.is_file(candidate):
                return candidate
        return None

    def _order(self, preferred: Sequence[str]) -> List[str]:
        order = [normalize_extension(e) for e in preferred if e]
        return order + [e for e in self.extensions if e not in order]

    def _find_in(self, base: Path, name: str, preferred: Sequence[str]) -> Optional[Path]:
        literal = base / name
        if self.fs.exists(literal):
            return literal
        for ext in self._order(preferred):
            candidate = base / f"{name}{ext}"
            if self.fs.exists(candidate):
                return candidate
        return None


__all__ = ["PathResolver"]
