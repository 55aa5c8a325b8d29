"""
User-facing errors.

The CLI prints an AssetPipeError as a one-line message and exits with 2.
Anything else is a bug and keeps its traceback.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


class AssetPipeError(Exception):
    """Something the user can fix in their assets or assetpipe.yaml."""
    pass


class ConfigError(AssetPipeError):
    """Invalid assetpipe.yaml contents."""
    pass


class AssetNotFoundError(AssetPipeError):
    """Raised when a logical path cannot be resolved to a readable file."""

    def __init__(self, path: str, source: Optional[Path] = None):
        self.path = path
        self.source = source
        where = f" (required from {source})" if source else ""
        super().__init__(f"Asset '{path}' not found{where}")


class UndefinedDirectiveError(AssetPipeError):
    """Header contains a directive with no registered handler."""

    def __init__(self, name: str, source: Optional[Path]):
        self.name = name
        self.source = source
        super().__init__(f"Undefined directive '{name}' in {source}")


class MalformedArgumentsError(AssetPipeError):
    """Directive arguments cannot be tokenized or do not fit the directive."""

    def __init__(
        self,
        line: str,
        source: Optional[Path] = None,
        reason: str = "Unmatched quote",
        line_index: Optional[int] = None,
    ):
        self.line = line
        self.source = source
        self.reason = reason
        # 0-based header line; the message shows it 1-based
        self.line_index = line_index
        where = f" in {source}" if source else ""
        if line_index is not None:
            where += f" at line {line_index + 1}"
        super().__init__(f"{reason} in directive arguments{where}: '{line}'")


class InvalidProcessorSpecError(AssetPipeError):
    """A configured processor is neither a Processor class nor a function."""
    pass


@dataclass
class CyclicDependencyError(AssetPipeError):
    """Circular require chain."""
    chain: List[Path] = field(default_factory=list)

    def __str__(self) -> str:
        return f"Circular asset dependency: {' -> '.join(str(p) for p in self.chain)}"


class AssetCompileError(AssetPipeError):
    """A source could not be compiled (e.g. invalid LESS)."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Failed to compile {path}: {reason}")


class AssetWriteError(AssetPipeError):
    """Publishing an asset to the target directory failed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Failed to write asset {path}: {reason}")


__all__ = [
    "AssetPipeError",
    "ConfigError",
    "AssetNotFoundError",
    "UndefinedDirectiveError",
    "MalformedArgumentsError",
    "InvalidProcessorSpecError",
    "CyclicDependencyError",
    "AssetWriteError",
    "AssetCompileError",
]
