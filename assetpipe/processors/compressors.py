"""
Bundle-time compressors.

Registered for production builds only; they ignore the build session.
"""

from __future__ import annotations

import rcssmin
import rjsmin

from .base import Processor


class CssCompressor(Processor):
    """Minify CSS (rcssmin). Option keep_bang_comments keeps /*! ... */."""

    name = "css_compressor"

    def render(self, context=None, variables=None) -> str:
        return rcssmin.cssmin(self.get_data(), keep_bang_comments=bool(self.option("keep_bang_comments", False)))


class JsCompressor(Processor):
    """Minify JavaScript (rjsmin). Option keep_bang_comments keeps /*! ... */."""

    name = "js_compressor"

    def render(self, context=None, variables=None) -> str:
        return rjsmin.jsmin(self.get_data(), keep_bang_comments=bool(self.option("keep_bang_comments", False)))


__all__ = ["CssCompressor", "JsCompressor"]
