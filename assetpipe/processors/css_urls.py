from __future__ import annotations

import re

from .base import Processor

_URL_RE = re.compile(r'''url\(\s*(['"]?)([^'")]+?)\1\s*\)''')
_SKIP_PREFIXES = ("data:", "http:", "https:", "//", "#")


class CssUrlProcessor(Processor):
    """
    Rewrites url(...) references through the manager's asset_url(),
    so stylesheets point at published (possibly fingerprinted) files.
    """

    name = "css_urls"

    def render(self, context=None, variables=None) -> str:
        if context is None:
            return self.get_data()

        def _rewrite(m: re.Match) -> str:
            quote, ref = m.group(1), m.group(2).strip()
            if ref.startswith(_SKIP_PREFIXES):
                return m.group(0)
            return f"url({quote}{context.manager.asset_url(ref)}{quote})"

        return _URL_RE.sub(_rewrite, self.get_data())


__all__ = ["CssUrlProcessor"]
