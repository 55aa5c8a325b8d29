"""
Asset manager.

Wires configuration, filesystem, resolver, processor registries, directive
handlers and the manifest together, and exposes the host-facing calls:
find/get an asset, render a reference tag, map a path to its published URL.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Callable, List, Optional

from .asset import Asset
from .config import PipelineConfig, load_config
from .errors import AssetNotFoundError
from .fs import FileSystem
from .manifest import Manifest
from .paths import format_extension, normalize_extension
from .processors.base import ProcessorSpec
from .processors.directive import DirectiveProcessor, default_directives
from .processors.imports import ImportProcessor
from .processors.less import LessProcessor
from .processors.registry import ProcessorRegistry
from .processors.safety import SafetyColonsProcessor
from .resolver import PathResolver
from .tags import CSS, JS, render_tag

logger = logging.getLogger(__name__)

ENV_VAR = "ASSETPIPE_ENV"
DEFAULT_ENV = "local"


class AssetManager:
    def __init__(
        self,
        root: Path,
        config: Optional[PipelineConfig] = None,
        *,
        environment: Optional[str] = None,
        fs: Optional[FileSystem] = None,
        manifest: Optional[Manifest] = None,
        tag_renderer: Callable[[Optional[str], str, str], str] = render_tag,
    ):
        self.root = Path(root).resolve()
        self.config = config if config is not None else load_config(self.root)
        self.fs = fs or FileSystem()
        self.content_types = dict(self.config.content_types)
        self.tag_renderer = tag_renderer

        # extension-less logical paths resolve through the content-type table
        self.resolver = PathResolver(
            [self.root / p for p in self.config.paths],
            self.content_types.keys(),
            fs=self.fs,
        )

        self.pre_processors = ProcessorRegistry("pre-processor")
        self.post_processors = ProcessorRegistry("post-processor")
        self.bundle_processors = ProcessorRegistry("bundle processor")
        self.directives = default_directives()
        self._register_processors()

        self.manifest = manifest or Manifest(self.fs)
        self.environment = DEFAULT_ENV
        self.set_environment(environment or os.environ.get(ENV_VAR) or DEFAULT_ENV)

    def _register_processors(self) -> None:
        self.pre_processors.register(CSS, ImportProcessor)
        self.pre_processors.register(CSS, DirectiveProcessor)
        self.pre_processors.register(JS, DirectiveProcessor)
        self.post_processors.register(CSS, LessProcessor)
        self.post_processors.register(JS, SafetyColonsProcessor)

        for content_type, entries in self.config.postprocessors.items():
            for entry in entries:
                self.post_processors.register(content_type, entry)
        for content_type, entries in self.config.compressors.items():
            for entry in entries:
                self.bundle_processors.register(content_type, entry)

    # ---------- environment ---------- #

    def set_environment(self, environment: str) -> None:
        """Switch environment and reload the manifest for its asset directory."""
        self.environment = environment
        self.manifest.load(self.get_target_path())
        logger.debug(f"Environment '{environment}' (production={self.in_production()})")

    def set_production(self) -> None:
        prod = self.config.production[0] if self.config.production else "production"
        self.set_environment(prod)

    def in_production(self) -> bool:
        return self.environment in self.config.production

    def in_development(self) -> bool:
        return not self.in_production() and self.environment != "staging"

    def get_asset_dir(self) -> str:
        d = self.config.asset_dir
        return d.production if self.in_production() else d.local

    def get_target_path(self) -> Path:
        return self.root / self.config.public_dir / self.get_asset_dir()

    def published_url(self, filename: str) -> str:
        return "/" + "/".join(p for p in (self.get_asset_dir(), filename.lstrip("/")) if p)

    # ---------- content types and processors ---------- #

    def content_type(self, extension: str) -> Optional[str]:
        return self.content_types.get(normalize_extension(extension))

    def content_type_of(self, path: Path) -> Optional[str]:
        return self.content_types.get(format_extension(path.name, self.content_types))

    def processors_for(self, content_type: Optional[str]) -> List[ProcessorSpec]:
        """Pre- then post-processors; bundle processors only in production."""
        processors = self.pre_processors.all(content_type) + self.post_processors.all(content_type)
        if self.in_production():
            processors += self.bundle_processors.all(content_type)
        return processors

    # ---------- lookup ---------- #

    def find(self, logical_path: str) -> Optional[Asset]:
        resolved = self.resolver.resolve(logical_path)
        if resolved is None or not self.fs.is_file(resolved):
            return None
        return Asset(self, resolved, logical_path)

    def get(self, logical_path: str) -> Asset:
        asset = self.find(logical_path)
        if asset is None:
            raise AssetNotFoundError(logical_path)
        return asset

    def __getitem__(self, logical_path: str) -> Asset:
        return self.get(logical_path)

    # ---------- host integration ---------- #

    def render(self, logical_path: str) -> str:
        """Publish the asset and return its HTML reference tag."""
        asset = self.get(logical_path)
        result = asset.write()
        return self.tag_renderer(asset.get_content_type(), result.url, logical_path)

    def asset_url(self, path: str) -> str:
        """
        Published URL for a path under the asset directory.

        Outside development the manifest supplies fingerprinted names.
        """
        path = re.sub(r"\?.*", "", path)
        if not path.startswith("/"):
            path = "/" + path
        # package assets are published as-is
        if path.startswith("/packages"):
            return path
        if not self.in_development() and self.config.enable_static_file_fingerprint:
            path = self.manifest.get(path) or path
        return f"/{self.get_asset_dir()}{path}"

    def asset_source(self, path: str, asset_dir: Optional[str] = None) -> Optional[Path]:
        """Map a published static path back to the source file it was copied from."""
        asset_dir = (asset_dir if asset_dir is not None else self.get_asset_dir()).strip("/")
        rel = path.lstrip("/")
        if asset_dir and (rel == asset_dir or rel.startswith(asset_dir + "/")):
            rel = rel[len(asset_dir):].lstrip("/")

        for destination, sources in self.config.static_files.items():
            if destination and not (rel == destination or rel.startswith(destination + "/")):
                continue
            sub = rel[len(destination):].lstrip("/") if destination else rel
            for source in sources:
                candidate = self.root / source / sub
                if self.fs.is_file(candidate):
                    return candidate
        return None


__all__ = ["AssetManager", "ENV_VAR"]
