"""
Builders for test projects.

The default layout mirrors a typical web application:

    assetpipe.yaml
    app/assets/javascripts/
    app/assets/stylesheets/
    app/assets/images/
    vendor/assets/
    public/                 (published output)
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Optional

from assetpipe.manager import AssetManager

from .file_utils import write

JS_ROOT = "app/assets/javascripts"
CSS_ROOT = "app/assets/stylesheets"
VENDOR_ROOT = "vendor/assets"
IMAGES_DIR = "app/assets/images"

DEFAULT_CONFIG = textwrap.dedent(f"""
    paths:
      - {JS_ROOT}
      - {CSS_ROOT}
      - {VENDOR_ROOT}
    public_dir: public
    asset_dir: assets
    static_files:
      images:
        - {IMAGES_DIR}
    static_ignore:
      - "*.psd"
""").lstrip()


def create_project(root: Path, config: Optional[str] = None) -> Path:
    """Write assetpipe.yaml and the (empty) search roots."""
    write(root / "assetpipe.yaml", config if config is not None else DEFAULT_CONFIG)
    for d in (JS_ROOT, CSS_ROOT, VENDOR_ROOT, IMAGES_DIR):
        (root / d).mkdir(parents=True, exist_ok=True)
    return root


def js(root: Path, name: str, text: str) -> Path:
    """Write a script under the javascripts root."""
    return write(root / JS_ROOT / name, text)


def css(root: Path, name: str, text: str) -> Path:
    """Write a stylesheet under the stylesheets root."""
    return write(root / CSS_ROOT / name, text)


def make_manager(root: Path, environment: str = "local") -> AssetManager:
    return AssetManager(root, environment=environment)


__all__ = [
    "JS_ROOT", "CSS_ROOT", "VENDOR_ROOT", "IMAGES_DIR", "DEFAULT_CONFIG",
    "create_project", "js", "css", "make_manager",
]
