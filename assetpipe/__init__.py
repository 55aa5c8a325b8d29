"""
assetpipe: dependency-driven asset bundler.

Resolves logical paths across search roots, expands header directives
(require / depend_on / require_tree) and stylesheet @imports, runs typed
processor chains and publishes content-addressed files recorded in a manifest.
"""

from .asset import Asset, WriteResult
from .errors import (
    AssetPipeError, AssetCompileError, AssetNotFoundError, AssetWriteError, ConfigError, CyclicDependencyError,
    InvalidProcessorSpecError, MalformedArgumentsError, UndefinedDirectiveError,
)
from .manager import AssetManager
from .manifest import Manifest
from .resolver import PathResolver
from .session import BuildSession

__all__ = [
    "Asset", "WriteResult", "AssetManager", "Manifest", "PathResolver", "BuildSession",
    "AssetPipeError", "AssetCompileError", "AssetNotFoundError", "AssetWriteError", "ConfigError",
    "CyclicDependencyError", "InvalidProcessorSpecError", "MalformedArgumentsError",
    "UndefinedDirectiveError",
]
