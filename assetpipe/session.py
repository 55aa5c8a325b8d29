"""
Build session: the dependency resolution and evaluation engine.

One top-level Asset.get_body() call opens one session. Nested sessions are
created for every evaluation and share the required-path marks and the
evaluation stack with their parent by reference; their dependency lists are
merged into the parent once the evaluation finishes.

Required content is hoisted: the final body of an asset is its required
dependencies (in first-required order) followed by its own processed body.
"""

from __future__ import annotations

import base64
import enum
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence
from urllib.parse import quote

from .errors import AssetNotFoundError, CyclicDependencyError
from .paths import extensions_of, is_relative_marker
from .processors.base import ProcessorSpec

if TYPE_CHECKING:
    from .manager import AssetManager

logger = logging.getLogger(__name__)


class Mark(enum.Enum):
    UNVISITED = "unvisited"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class BuildSession:
    def __init__(
        self,
        manager: "AssetManager",
        path: Optional[Path] = None,
        *,
        required_paths: Optional[Dict[Path, Mark]] = None,
        stack: Optional[List[Path]] = None,
    ):
        self.manager = manager
        self.path = path
        # shared with every nested session of the same build
        self.required_paths: Dict[Path, Mark] = required_paths if required_paths is not None else {}
        self._stack: List[Path] = stack if stack is not None else []
        # own accumulators, merged into the parent after evaluation
        self.dependency_paths: List[Path] = []
        self.dependency_assets: List[str] = []

    @classmethod
    def for_asset(cls, manager: "AssetManager", path: Path) -> "BuildSession":
        """Top-level session; the asset itself is in progress for the whole build."""
        session = cls(manager, path)
        session.required_paths[path] = Mark.IN_PROGRESS
        return session

    # ---------- resolution ---------- #

    def resolve(self, path: str, *, index: bool = True) -> Optional[Path]:
        """
        Resolve a path as seen from the current file.

        "./x" and "../x" are looked up next to the current file, anything
        else goes through the search roots. The current file's extension
        is preferred for extension-less names and index files.
        """
        resolver = self.manager.resolver
        preferred = self._preferred_extensions()
        if is_relative_marker(path) and self.path is not None:
            return resolver.resolve_in(self.path.parent, path, preferred, index=index)
        return resolver.resolve(path, preferred, index=index)

    def _preferred_extensions(self) -> List[str]:
        if self.path is None:
            return []
        exts = extensions_of(self.path.name)
        return exts[:1]

    # ---------- evaluation ---------- #

    def evaluate(self, path: Path, data: Optional[str] = None, processors: Sequence[ProcessorSpec] = ()) -> str:
        """
        Run content through processors in order and return the result.

        When data is None the file at path is read.
        """
        path = Path(path)
        fs = self.manager.fs
        if data is None:
            if not fs.is_file(path):
                raise AssetNotFoundError(str(path), self.path)
            data = fs.read_text(path)

        sub = self._nested(path)
        self._stack.append(path)
        try:
            for spec in processors:
                processor = spec.create(lambda current=data: current, source=path)
                data = processor.render(sub)
        finally:
            self._stack.pop()

        self.dependency_paths.extend(sub.dependency_paths)
        self.dependency_assets.extend(sub.dependency_assets)
        return data

    def _nested(self, path: Path) -> "BuildSession":
        return BuildSession(self.manager, path, required_paths=self.required_paths, stack=self._stack)

    def is_evaluating(self, path: Path) -> bool:
        return path in self._stack

    def evaluation_chain(self) -> List[Path]:
        return list(self._stack)

    # ---------- directive targets ---------- #

    def depend_on(self, path: str) -> "BuildSession":
        """
        Add a freshness-only dependency.

        Its modification time counts for the asset, its content is not included.
        """
        resolved = self.resolve(path)
        if resolved is None:
            raise AssetNotFoundError(path, self.path)
        self.dependency_paths.append(resolved)
        return self

    def require_asset(self, path: str) -> "BuildSession":
        """
        Include the processed content of another asset, at most once per build.
        """
        resolved = self.resolve(path)
        if resolved is None:
            raise AssetNotFoundError(path, self.path)

        mark = self.required_paths.get(resolved, Mark.UNVISITED)
        if mark is Mark.DONE:
            return self
        if mark is Mark.IN_PROGRESS:
            raise CyclicDependencyError([*self._stack, resolved])

        self.required_paths[resolved] = Mark.IN_PROGRESS
        self.dependency_paths.append(resolved)
        processors = self.manager.processors_for(self.manager.content_type_of(resolved))
        logger.debug(f"Requiring {resolved} ({len(processors)} processor(s))")
        self.dependency_assets.append(self.evaluate(resolved, processors=processors))
        self.required_paths[resolved] = Mark.DONE
        return self

    def require_tree(self, path: str) -> "BuildSession":
        """
        Require every entry of a directory (one level, sorted by name).

        Dot-entries and the current file are skipped, as are subdirectories
        without an index file.
        """
        resolved = self.resolve(path, index=False)
        fs = self.manager.fs
        if resolved is None or not fs.is_dir(resolved):
            raise AssetNotFoundError(path, self.path)

        # adding or removing entries changes the directory mtime
        self.dependency_paths.append(resolved)
        for entry in fs.list_dir(resolved):
            if entry.name.startswith("."):
                continue
            entry_path = entry.path.resolve()
            if entry_path == self.path:
                continue
            if entry.is_dir and self.manager.resolver.find_index(entry_path, self._preferred_extensions()) is None:
                logger.debug(f"require_tree: skipping directory without index {entry_path}")
                continue
            self.require_asset(str(entry_path))
        return self

    # ---------- helpers for processors ---------- #

    def content_type(self, path: str) -> Optional[str]:
        resolved = self.resolve(path)
        if resolved is None or not self.manager.fs.is_file(resolved):
            raise AssetNotFoundError(path, self.path)
        return self.manager.content_type_of(resolved)

    def data_uri(self, path: str) -> str:
        """
        Inline a file as a data: URI, e.g. for sprites referenced from CSS.
        """
        resolved = self.resolve(path)
        fs = self.manager.fs
        if resolved is None or not fs.is_file(resolved):
            raise AssetNotFoundError(path, self.path)
        self.dependency_paths.append(resolved)
        payload = base64.b64encode(fs.read_bytes(resolved)).decode("ascii")
        ctype = self.manager.content_type_of(resolved) or "application/octet-stream"
        return f"data:{ctype};base64,{quote(payload, safe='')}"


__all__ = ["BuildSession", "Mark"]
