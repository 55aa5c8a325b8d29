"""
LESS compilation.

Registered as a stylesheet post-processor; only sources with a .less
extension are compiled, plain CSS passes through untouched.
"""

from __future__ import annotations

import io
import logging

import lesscpy

from .base import Processor
from ..errors import AssetCompileError
from ..paths import extensions_of

logger = logging.getLogger(__name__)

LESS_EXTENSION = ".less"


class LessProcessor(Processor):
    """Compile LESS to CSS (lesscpy). Option minify passes through to the compiler."""

    name = "less"

    def render(self, context=None, variables=None) -> str:
        data = self.get_data()
        if self.source is None or LESS_EXTENSION not in extensions_of(self.source.name):
            return data
        logger.debug(f"Compiling LESS {self.source}")
        try:
            return lesscpy.compile(io.StringIO(data), minify=bool(self.option("minify", False)))
        except Exception as e:
            raise AssetCompileError(self.source, str(e)) from e


__all__ = ["LessProcessor", "LESS_EXTENSION"]
