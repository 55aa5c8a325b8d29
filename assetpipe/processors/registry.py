from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from .base import ProcessorSpec

logger = logging.getLogger(__name__)


class ProcessorRegistry:
    """
    Ordered processor registrations keyed by content type.

    Pre-, post- and bundle processors live in separate instances.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._specs: Dict[str, List[ProcessorSpec]] = {}

    def register(self, content_type: str, entry: Any, options: Optional[Mapping[str, Any]] = None) -> ProcessorSpec:
        """
        Append a processor for the content type.

        Raises:
            InvalidProcessorSpecError: if the entry cannot be turned into a processor
        """
        spec = ProcessorSpec.coerce(entry, options)
        self._specs.setdefault(content_type, []).append(spec)
        logger.debug(f"Registered {self.name or 'processor'} {spec.name} for {content_type}")
        return spec

    def all(self, content_type: Optional[str]) -> List[ProcessorSpec]:
        if not content_type:
            return []
        return list(self._specs.get(content_type, []))

    def content_types(self) -> List[str]:
        return list(self._specs)


__all__ = ["ProcessorRegistry"]
