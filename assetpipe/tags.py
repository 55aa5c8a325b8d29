"""HTML reference tags for published assets."""

from __future__ import annotations

from html import escape
from typing import Optional

CSS = "text/css"
JS = "application/javascript"


def render_tag(content_type: Optional[str], url: str, logical_path: str = "") -> str:
    if content_type == CSS:
        return f'<link rel="stylesheet" type="text/css" href="{escape(url)}">'
    if content_type == JS:
        return f'<script type="text/javascript" src="{escape(url)}"></script>'
    return f"<!-- assetpipe: content type for '{escape(logical_path)}' not found -->\n"


__all__ = ["render_tag", "CSS", "JS"]
