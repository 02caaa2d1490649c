"""Doc string clean-up helpers."""

from __future__ import annotations

import re
from typing import Optional

_LEADING_SPACES = re.compile(r"^ *")


def remove_leading_whitespace(doc: Optional[str]) -> Optional[str]:
    """Strip the indentation shared by every non-blank line after the first.

    Authors usually indent continuation lines of a doc string to the column of
    the opening quote. The smallest leading run of spaces among those lines is
    removed from the start of every line, so deeper indentation survives.
    """
    if doc is None:
        return None

    lines = doc.split("\n")
    prefix_lengths = [
        len(_LEADING_SPACES.match(line).group(0))  # type: ignore[union-attr]
        for line in lines[1:]
        if line.strip()
    ]
    if not prefix_lengths:
        return doc

    min_prefix = min(prefix_lengths)
    pattern = re.compile("^" + " " * min_prefix)
    return "\n".join(pattern.sub("", line, count=1) for line in lines)


__all__ = ["remove_leading_whitespace"]
