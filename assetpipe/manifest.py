"""
Published-name manifest.

A flat JSON object {original name: published name} stored next to the
published assets. Every mutation rewrites the whole file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from .errors import AssetPipeError, AssetWriteError
from .fs import FileSystem
from .paths import MANIFEST_FILE, to_posix

logger = logging.getLogger(__name__)


class Manifest:
    def __init__(self, fs: Optional[FileSystem] = None):
        self.fs = fs or FileSystem()
        self.path: Optional[Path] = None
        self._entries: Dict[str, str] = {}

    def load(self, scope_dir: Path) -> "Manifest":
        """(Re)load entries from <scope_dir>/.manifest.json; a missing file means empty."""
        self.path = scope_dir / MANIFEST_FILE
        self._entries = {}
        if self.fs.is_file(self.path):
            try:
                data = json.loads(self.fs.read_text(self.path))
            except json.JSONDecodeError as e:
                raise AssetPipeError(f"Corrupt manifest {self.path}: {e}") from e
            if not isinstance(data, dict):
                raise AssetPipeError(f"Manifest must be a JSON object: {self.path}")
            self._entries = {str(k): str(v) for k, v in data.items()}
            logger.debug(f"Loaded {len(self._entries)} manifest entries from {self.path}")
        return self

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._entries.get(name, default)

    def add(self, name: str, fingerprint: str) -> None:
        self._entries[to_posix(name)] = fingerprint
        self.save()

    def save(self) -> None:
        if self.path is None:
            raise RuntimeError("Manifest.save() called before load()")
        try:
            self.fs.write_text(self.path, json.dumps(self._entries, ensure_ascii=False, indent=2, sort_keys=True))
        except OSError as e:
            raise AssetWriteError(self.path, str(e)) from e

    def delete(self) -> bool:
        """Forget every entry and remove the file. True if a file was removed."""
        self._entries = {}
        if self.path is None:
            return False
        return self.fs.remove(self.path)

    def entries(self) -> Dict[str, str]:
        return dict(self._entries)

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["Manifest"]
