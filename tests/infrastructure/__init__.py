"""
Shared test infrastructure for assetpipe.

Modules:
- file_utils: creating files and directories
- project_builders: a ready-made project layout with assetpipe.yaml
"""

from .file_utils import write, write_bytes, touch
from .project_builders import (
    JS_ROOT, CSS_ROOT, VENDOR_ROOT, IMAGES_DIR,
    create_project, js, css, make_manager,
)

__all__ = [
    "write", "write_bytes", "touch",
    "JS_ROOT", "CSS_ROOT", "VENDOR_ROOT", "IMAGES_DIR",
    "create_project", "js", "css", "make_manager",
]
