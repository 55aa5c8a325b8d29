from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, List, Optional

from .errors import AssetWriteError
from .paths import extensions_of, format_extension, is_absolute, to_posix
from .processors.base import ProcessorSpec
from .session import BuildSession

if TYPE_CHECKING:
    from .manager import AssetManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteResult:
    """Outcome of Asset.write()."""
    path: Path            # file on disk
    url: str              # published URL, e.g. "/assets/app-<digest>.js"
    filename: str         # name relative to the asset directory
    written: bool         # False when an existing file was reused
    from_manifest: bool = False


class Asset:
    """
    One resolvable file.

    The body is computed lazily, once, through a BuildSession; the digest
    is the sha1 of that final body.
    """

    def __init__(self, manager: "AssetManager", path: Path, logical_path: Optional[str] = None):
        self.manager = manager
        self.path = Path(path)
        self.logical_path = logical_path
        # freshness dependencies, known after the body is built
        self.dependencies: List[Path] = []
        self._body: Optional[str] = None
        self._digest: Optional[str] = None

    def __repr__(self) -> str:
        return f"Asset({self.logical_path!r}, {str(self.path)!r})"

    # ---------- naming ---------- #

    def get_basename(self, include_extensions: bool = True) -> str:
        name = self.path.name
        if include_extensions:
            return name
        pos = name.find(".", 1)
        return name if pos < 0 else name[:pos]

    def get_dirname(self) -> Path:
        return self.path.parent

    def get_extensions(self) -> List[str]:
        return extensions_of(self.path.name)

    def get_format_extension(self) -> str:
        """The first extension that has a configured content type."""
        return format_extension(self.path.name, self.manager.content_types)

    def get_content_type(self) -> Optional[str]:
        return self.manager.content_types.get(self.get_format_extension())

    def get_target_extension(self) -> str:
        """Extension of the published file: ".less" sources publish as ".css"."""
        fmt = self.get_format_extension()
        return self.manager.config.target_extensions.get(fmt, fmt)

    def get_output_name(self) -> str:
        """Development file name: the basename, with a compiled source extension swapped."""
        name = self.get_basename()
        fmt, target = self.get_format_extension(), self.get_target_extension()
        if fmt != target and name.lower().endswith(fmt):
            return name[: -len(fmt)] + target
        return name

    def get_target_name(self, include_hash: bool = True) -> str:
        target = self.get_basename(include_extensions=False)
        if include_hash:
            target += f"-{self.get_digest()}"
        return target + self.get_target_extension()

    def get_digest_name(self) -> str:
        """Fingerprinted name, keeping the logical path's directories."""
        target = self.get_target_name(include_hash=True)
        if not self.logical_path or is_absolute(self.logical_path):
            return target
        parent = PurePosixPath(to_posix(self.logical_path)).parent
        return target if str(parent) == "." else f"{parent}/{target}"

    # ---------- content ---------- #

    def get_processors(self) -> List[ProcessorSpec]:
        return self.manager.processors_for(self.get_content_type())

    def get_body(self) -> str:
        if self._body is None:
            session = BuildSession.for_asset(self.manager, self.path)
            data = self.manager.fs.read_text(self.path)
            body = session.evaluate(self.path, data, self.get_processors())
            self.dependencies.extend(session.dependency_paths)
            self._body = "\n".join(session.dependency_assets) + body
            logger.debug(
                f"Built {self.path} ({len(session.dependency_assets)} required, "
                f"{len(session.dependency_paths)} dependencies)"
            )
        return self._body

    def set_body(self, body: str) -> None:
        self._body = body
        self._digest = None

    def get_digest(self) -> str:
        if self._digest is None:
            self._digest = hashlib.sha1(self.get_body().encode("utf-8")).hexdigest()
        return self._digest

    def get_last_modified(self) -> float:
        """Latest mtime of the file and everything it depends on."""
        self.get_body()
        fs = self.manager.fs
        return max([fs.mtime(self.path), *(fs.mtime(p) for p in self.dependencies)])

    def is_fresh(self, target: Path) -> bool:
        """
        The target exists, is not older than this asset or any dependency,
        and already holds the current body.
        """
        fs = self.manager.fs
        if not fs.is_file(target) or fs.mtime(target) < self.get_last_modified():
            return False
        return fs.read_text(target) == self.get_body()

    # ---------- publishing ---------- #

    def in_manifest(self) -> Optional[str]:
        if not self.manager.in_production():
            return None
        return self.manager.manifest.get(self.get_basename())

    def write(self) -> WriteResult:
        """
        Write the processed body into the target directory.

        Production: a manifest hit short-circuits; otherwise the fingerprinted
        file is written and recorded in the manifest.

        Raises:
            AssetWriteError: the file could not be written
        """
        target_dir = self.manager.get_target_path()
        production = self.manager.in_production()

        cached = self.in_manifest()
        if cached:
            return WriteResult(
                path=target_dir / cached,
                url=self.manager.published_url(cached),
                filename=cached,
                written=False,
                from_manifest=True,
            )

        filename = self.get_digest_name() if production else self.get_output_name()
        dest = target_dir / filename
        body = self.get_body()

        written = False
        if production or not self.is_fresh(dest):
            try:
                self.manager.fs.write_text(dest, body)
            except OSError as e:
                raise AssetWriteError(dest, str(e)) from e
            written = True
            logger.debug(f"Wrote {dest}")

        if production:
            self.manager.manifest.add(self.get_basename(), filename)

        return WriteResult(
            path=dest,
            url=self.manager.published_url(filename),
            filename=filename,
            written=written,
        )

    def __str__(self) -> str:
        return self.get_body()


__all__ = ["Asset", "WriteResult"]
