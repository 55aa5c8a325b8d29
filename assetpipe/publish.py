"""
Publishing: clean the target directory, copy static files and
optionally compile every top-level stylesheet/script of each search root.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterator, List, Optional, Tuple

import pathspec

from .errors import AssetWriteError
from .manager import AssetManager

logger = logging.getLogger(__name__)

COMPILE_EXTENSIONS = (".css", ".less", ".js")


@dataclass
class PublishReport:
    production: bool
    target: Path
    copied: List[str] = field(default_factory=list)
    compiled: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "production": self.production,
            "target": str(self.target),
            "copied": list(self.copied),
            "compiled": list(self.compiled),
        }


class Publisher:
    def __init__(self, manager: AssetManager):
        self.manager = manager
        self.fs = manager.fs
        patterns = manager.config.static_ignore
        self._ignore: Optional[pathspec.PathSpec] = (
            pathspec.PathSpec.from_lines("gitwildmatch", patterns) if patterns else None
        )

    @property
    def fingerprints(self) -> bool:
        return self.manager.in_production() and self.manager.config.enable_static_file_fingerprint

    def run(self, compile: bool = False) -> PublishReport:
        report = PublishReport(production=self.manager.in_production(), target=self.manager.get_target_path())
        if report.production:
            logger.info("Publishing production assets" + (" with fingerprints" if self.fingerprints else ""))
        else:
            logger.info("Publishing development assets")

        self.clean()
        report.copied = self.copy_static()
        if compile:
            report.compiled = self.compile()
        return report

    def clean(self) -> None:
        logger.info("Clearing manifest and removing old assets")
        self.manager.manifest.delete()
        self.fs.clear_dir(self.manager.get_target_path())

    # ---------- static files ---------- #

    def copy_static(self) -> List[str]:
        target = self.manager.get_target_path()
        copied: List[str] = []
        for destination, sources in self.manager.config.static_files.items():
            for source in sources:
                source_path = self.manager.root / source
                if self.fs.is_file(source_path):
                    files = [(source_path, source_path.name)]
                elif self.fs.is_dir(source_path):
                    files = list(self._walk(source_path))
                else:
                    logger.warning(f"Static source not found: {source_path}")
                    continue
                for path, rel in files:
                    if self._ignore is not None and self._ignore.match_file(rel):
                        continue
                    copied.append(self._copy_file(path, target, destination, rel))
        return copied

    def _walk(self, base: Path, prefix: str = "") -> Iterator[Tuple[Path, str]]:
        """Files under base as (path, posix path relative to base); dot-entries skipped."""
        for entry in self.fs.list_dir(base):
            if entry.name.startswith("."):
                continue
            rel = f"{prefix}{entry.name}"
            if entry.is_dir:
                yield from self._walk(entry.path, rel + "/")
            else:
                yield entry.path, rel

    def _copy_file(self, path: Path, target: Path, destination: str, rel: str) -> str:
        published = rel
        if self.fingerprints:
            published = fingerprinted_name(rel, hashlib.sha1(self.fs.read_bytes(path)).hexdigest())
            self.manager.manifest.add(_url(destination, rel), _url(destination, published))

        dest = target / destination / published if destination else target / published
        try:
            self.fs.copy(path, dest)
        except OSError as e:
            raise AssetWriteError(dest, str(e)) from e
        logger.info(f"   Copying -> {_url(destination, published)}")
        return _url(destination, published)

    # ---------- compiled assets ---------- #

    def compile(self) -> List[str]:
        logger.info("Precompiling assets")
        compiled: List[str] = []
        for root in self.manager.resolver.roots:
            if not self.fs.is_dir(root):
                continue
            for entry in self.fs.list_dir(root):
                if entry.is_dir or entry.name.startswith(".") or PurePosixPath(entry.name).suffix.lower() not in COMPILE_EXTENSIONS:
                    continue
                logger.info(f"   Compiling -> {entry.name}")
                self.manager.render(entry.name)
                compiled.append(entry.name)
        return compiled


def fingerprinted_name(rel: str, digest: str) -> str:
    """'img/logo.PNG' -> 'img/logo-<digest>.png'"""
    p = PurePosixPath(rel)
    suffix = p.suffix.lower()
    stem = p.name[: -len(p.suffix)] if p.suffix else p.name
    name = f"{stem}-{digest}{suffix}"
    return name if str(p.parent) == "." else f"{p.parent}/{name}"


def _url(destination: str, rel: str) -> str:
    return "/" + "/".join(x for x in (destination, rel) if x)


__all__ = ["Publisher", "PublishReport", "fingerprinted_name"]
