"""
Header scanner.

The header is the leading run of comments (and blank lines between them)
at the top of a source file. Three comment forms are recognized:

    /* ... */          block comment, may span lines
    ### ... ###        block comment, may span lines
    // ...  or  # ...  line comments

Scanning stops at the first line that is not part of such a run.
Blank lines after the last comment belong to the body.
"""

from __future__ import annotations

from typing import List, Optional, Tuple


def _block_end(lines: List[str], start: int, opener: str, closer: str) -> Optional[int]:
    """Index of the line that closes a block comment opened on lines[start]."""
    first = lines[start].lstrip()
    if closer in first[len(opener):]:
        return start
    for j in range(start + 1, len(lines)):
        if closer in lines[j]:
            return j
    return None


def split_header(text: str) -> Tuple[str, str]:
    """
    Split source text into (header, body).

    header + body == text always holds.
    """
    lines = text.splitlines(keepends=True)
    i = 0
    end = 0  # line index just past the last comment line

    while i < len(lines):
        stripped = lines[i].strip()

        if not stripped:
            i += 1
            continue

        if stripped.startswith("/*"):
            close = _block_end(lines, i, "/*", "*/")
        elif stripped.startswith("###"):
            close = _block_end(lines, i, "###", "###")
        elif stripped.startswith(("//", "#")):
            close = i
        else:
            break

        if close is None:
            # unterminated block comment is not a header
            break
        i = end = close + 1

    header = "".join(lines[:end])
    return header, text[len(header):]


__all__ = ["split_header"]
