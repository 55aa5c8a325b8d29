"""
Processor contract and registration specs.

A processor receives the current content once, at construction, either by
reading its source file or from a supplier callback. Options come from the
registration spec. render() returns the transformed content.
"""

from __future__ import annotations

import importlib
import inspect
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional, Type

from ..errors import AssetNotFoundError, InvalidProcessorSpecError
from ..fs import FileSystem

if TYPE_CHECKING:
    from ..session import BuildSession

Supplier = Callable[[], str]


class Processor:
    """Base transform. The default render() returns the data unchanged."""

    name: str = "identity"

    def __init__(self, data: str, *, source: Optional[Path] = None, options: Optional[Mapping[str, Any]] = None):
        self.source = source
        self._data = data
        self.options: Dict[str, Any] = dict(options or {})

    @classmethod
    def from_file(
        cls,
        path: Path,
        options: Optional[Mapping[str, Any]] = None,
        *,
        fs: Optional[FileSystem] = None,
    ) -> "Processor":
        fs = fs or FileSystem()
        if not fs.is_file(path):
            raise AssetNotFoundError(str(path))
        return cls(fs.read_text(path), source=path, options=options)

    @classmethod
    def from_supplier(
        cls,
        supplier: Supplier,
        *,
        source: Optional[Path] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> "Processor":
        return cls(supplier(), source=source, options=options)

    def get_data(self) -> str:
        """Raw, unprocessed input."""
        return self._data

    def option(self, key: str, default: Any = None) -> Any:
        return self.options.get(key, default)

    def render(self, context: Optional["BuildSession"] = None, variables: Optional[Mapping[str, Any]] = None) -> str:
        return self._data


class FunctionProcessor(Processor):
    """Adapts a plain `fn(data, context) -> str` to the processor contract."""

    name = "function"

    def render(self, context=None, variables=None) -> str:
        fn = self.option("function")
        return fn(self.get_data(), context)


@dataclass(frozen=True)
class ProcessorSpec:
    """
    One registration in a ProcessorRegistry.

    Built once at registration time from a Processor subclass, an import
    path ("pkg.module:Class" or "pkg.module.Class"), an inline mapping
    ({"class": ..., "options": {...}}) or a plain function.
    """
    processor_cls: Type[Processor]
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        fn = self.options.get("function")
        if self.processor_cls is FunctionProcessor and fn is not None:
            return getattr(fn, "__name__", FunctionProcessor.name)
        return self.processor_cls.__name__

    def create(self, supplier: Supplier, source: Optional[Path] = None) -> Processor:
        return self.processor_cls.from_supplier(supplier, source=source, options=self.options)

    @classmethod
    def from_function(cls, fn: Callable[[str, Any], str]) -> "ProcessorSpec":
        return cls(FunctionProcessor, {"function": fn})

    @classmethod
    def coerce(cls, entry: Any, options: Optional[Mapping[str, Any]] = None) -> "ProcessorSpec":
        """Normalize any supported registration form into a spec."""
        if isinstance(entry, ProcessorSpec):
            return entry
        opts = dict(options or {})
        if isinstance(entry, Mapping):
            target = entry.get("class")
            if target is None:
                raise InvalidProcessorSpecError(f"Processor mapping without 'class': {dict(entry)!r}")
            inline = entry.get("options") or {}
            if not isinstance(inline, Mapping):
                raise InvalidProcessorSpecError(f"Processor options must be a mapping: {inline!r}")
            return cls.coerce(target, {**inline, **opts})
        if isinstance(entry, str):
            return cls.coerce(_import_object(entry), opts)
        if inspect.isclass(entry):
            if issubclass(entry, Processor):
                return cls(entry, opts)
            raise InvalidProcessorSpecError(f"{entry.__module__}.{entry.__qualname__} is not a Processor subclass")
        if callable(entry):
            return cls(FunctionProcessor, {**opts, "function": entry})
        raise InvalidProcessorSpecError(f"Cannot build a processor from {entry!r}")


def _import_object(ref: str) -> Any:
    if ":" in ref:
        module_name, _, attr = ref.partition(":")
    else:
        module_name, _, attr = ref.rpartition(".")
    if not module_name or not attr:
        raise InvalidProcessorSpecError(f"Invalid processor reference '{ref}'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise InvalidProcessorSpecError(f"Cannot import processor module '{module_name}': {e}") from e
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise InvalidProcessorSpecError(f"Module '{module_name}' has no attribute '{attr}'") from e


__all__ = ["Processor", "FunctionProcessor", "ProcessorSpec", "Supplier"]
