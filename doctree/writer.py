"""Serialize the documentation tree to disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from .logging import get_logger

logger = get_logger("writer")


def render_tree(tree: List[Dict[str, Any]]) -> str:
    """Stable, human-readable JSON text for ``tree``."""
    return json.dumps(tree, indent=2, ensure_ascii=False) + "\n"


def write_tree(tree: List[Dict[str, Any]], path: Path | str) -> Path:
    """Write ``tree`` to ``path`` as UTF-8; I/O errors propagate to the caller."""
    target = Path(path).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(render_tree(tree), encoding="utf-8")
    logger.debug("Wrote %d namespaces to %s", len(tree), target)
    return target


__all__ = ["render_tree", "write_tree"]
