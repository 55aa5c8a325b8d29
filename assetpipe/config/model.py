"""
Pipeline configuration model.
Mirrors assetpipe.yaml; every field has a usable default.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..errors import ConfigError
from ..paths import normalize_extension

DEFAULT_CONTENT_TYPES: Dict[str, str] = {
    ".css": "text/css",
    ".less": "text/css",
    ".js": "application/javascript",
    ".jpeg": "image/jpeg",
    ".jpg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
}

# compiled source extension -> published extension
DEFAULT_TARGET_EXTENSIONS: Dict[str, str] = {
    ".less": ".css",
}

DEFAULT_COMPRESSORS: Dict[str, List[Any]] = {
    "text/css": ["assetpipe.processors.compressors:CssCompressor"],
    "application/javascript": ["assetpipe.processors.compressors:JsCompressor"],
}


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    return [value]


def _processor_table(data: Any, key: str) -> Dict[str, List[Any]]:
    """content-type -> ordered list of processor entries (single entry allowed)."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"'{key}' must be a mapping of content type to processors")
    return {str(ctype): _as_list(entries) for ctype, entries in data.items()}


@dataclass
class AssetDir:
    """Published directory (relative to public_dir) per environment kind."""
    local: str = "assets"
    production: str = "assets"

    @classmethod
    def from_value(cls, value: Any) -> "AssetDir":
        if value is None:
            return cls()
        if isinstance(value, str):
            d = value.strip("/")
            return cls(local=d, production=d)
        if isinstance(value, dict):
            local = str(value.get("local", "assets")).strip("/")
            return cls(local=local, production=str(value.get("production", local)).strip("/"))
        raise ConfigError("'asset_dir' must be a string or a {local, production} mapping")


@dataclass
class PipelineConfig:
    paths: List[str] = field(default_factory=list)
    content_types: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_CONTENT_TYPES))
    postprocessors: Dict[str, List[Any]] = field(default_factory=dict)
    compressors: Dict[str, List[Any]] = field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_COMPRESSORS.items()}
    )
    target_extensions: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_TARGET_EXTENSIONS))
    public_dir: str = "public"
    asset_dir: AssetDir = field(default_factory=AssetDir)
    production: List[str] = field(default_factory=lambda: ["production", "prod"])
    enable_static_file_fingerprint: bool = True
    static_files: Dict[str, List[str]] = field(default_factory=dict)
    static_ignore: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelineConfig":
        """Create an instance from a dictionary (from YAML)."""
        cfg = cls()
        if "paths" in data:
            cfg.paths = [str(p) for p in _as_list(data["paths"])]
        if "content_types" in data:
            raw = data["content_types"] or {}
            if not isinstance(raw, dict):
                raise ConfigError("'content_types' must be a mapping of extension to type")
            cfg.content_types = {normalize_extension(str(k)): str(v) for k, v in raw.items()}
        if "target_extensions" in data:
            raw = data["target_extensions"] or {}
            if not isinstance(raw, dict):
                raise ConfigError("'target_extensions' must be a mapping of extension to extension")
            cfg.target_extensions = {normalize_extension(str(k)): normalize_extension(str(v)) for k, v in raw.items()}
        if "postprocessors" in data:
            cfg.postprocessors = _processor_table(data["postprocessors"], "postprocessors")
        if "compressors" in data:
            cfg.compressors = _processor_table(data["compressors"], "compressors")
        if "public_dir" in data:
            cfg.public_dir = str(data["public_dir"])
        if "asset_dir" in data:
            cfg.asset_dir = AssetDir.from_value(data["asset_dir"])
        if "production" in data:
            cfg.production = [str(e) for e in _as_list(data["production"])]
        if "enable_static_file_fingerprint" in data:
            cfg.enable_static_file_fingerprint = bool(data["enable_static_file_fingerprint"])
        if "static_files" in data:
            raw = data["static_files"] or {}
            if not isinstance(raw, dict):
                raise ConfigError("'static_files' must be a mapping of destination to sources")
            cfg.static_files = {str(dest).strip("/"): [str(s) for s in _as_list(src)] for dest, src in raw.items()}
        if "static_ignore" in data:
            cfg.static_ignore = [str(p) for p in _as_list(data["static_ignore"])]
        return cfg


__all__ = [
    "PipelineConfig", "AssetDir", "DEFAULT_CONTENT_TYPES", "DEFAULT_COMPRESSORS", "DEFAULT_TARGET_EXTENSIONS",
]
