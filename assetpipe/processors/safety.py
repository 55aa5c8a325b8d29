from __future__ import annotations

import re

from .base import Processor

_ENDS_WITH_SEMICOLON = re.compile(r';\s*\Z')


class SafetyColonsProcessor(Processor):
    """
    Terminates a script body with a semicolon.

    Keeps concatenated scripts from merging into one statement
    when a file lacks its trailing ';'.
    """

    name = "safety_colons"

    def render(self, context=None, variables=None) -> str:
        data = self.get_data()
        if not data.strip() or _ENDS_WITH_SEMICOLON.search(data):
            return data
        return f"{data};\n"


__all__ = ["SafetyColonsProcessor"]
