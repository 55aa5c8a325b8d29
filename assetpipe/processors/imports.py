"""
Stylesheet @import expansion.

Both forms are recognized anywhere in the body:

    @import "path";
    @import url(path);

Imports that do not resolve to a file are left untouched.
"""

from __future__ import annotations

import logging
import re

from .base import Processor, ProcessorSpec
from ..errors import CyclicDependencyError

logger = logging.getLogger(__name__)

_IMPORT_RE = re.compile(
    r'''@import\s*(?:"([^"]+)"|url\(\s*['"]?([^'")]+?)['"]?\s*\))\s*;''',
    re.MULTILINE,
)


class ImportProcessor(Processor):
    name = "imports"

    def render(self, context=None, variables=None) -> str:
        if context is None:
            return self.get_data()

        def _expand(m: re.Match) -> str:
            path = (m.group(1) or m.group(2) or "").strip()
            resolved = context.resolve(path)
            if resolved is None or not context.manager.fs.is_file(resolved):
                logger.debug(f"{self.source}: leaving unresolved import '{path}'")
                return m.group(0)

            if context.is_evaluating(resolved):
                raise CyclicDependencyError([*context.evaluation_chain(), resolved])

            context.depend_on(str(resolved))
            # raw content; only nested imports are expanded
            return context.evaluate(resolved, processors=[ProcessorSpec(ImportProcessor)]) + "\n"

        return _IMPORT_RE.sub(_expand, self.get_data())


__all__ = ["ImportProcessor"]
