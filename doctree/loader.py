"""Import the modules of a project so they can be introspected."""

from __future__ import annotations

import importlib
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Sequence

from .hierarchy import matches_roots
from .logging import get_logger

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
    ".doctree",
}

logger = get_logger("loader")


@dataclass
class LoadReport:
    """Outcome of a load pass."""

    loaded: List[str] = field(default_factory=list)
    excluded: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)


def module_name_for(path: Path, source_dir: Path) -> str | None:
    """Dotted module name of ``path`` relative to ``source_dir``."""
    relative = path.relative_to(source_dir).with_suffix("")
    parts = list(relative.parts)
    if parts and parts[-1] == "__init__":
        parts.pop()
    if not parts or not all(part.isidentifier() for part in parts):
        return None
    return ".".join(parts)


def _iter_sources(source_dir: Path) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(source_dir):
        dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)
        for filename in sorted(filenames):
            if filename.endswith(".py"):
                yield Path(dirpath) / filename


def discover_modules(source_dir: Path) -> List[str]:
    names = {
        name
        for name in (module_name_for(path, source_dir) for path in _iter_sources(source_dir))
        if name
    }
    return sorted(names)


def load_namespaces(
    root: Path | str,
    source_path: Sequence[str] = (),
    exclude: Sequence[str] = (),
) -> LoadReport:
    """Import every module under the source path directories of ``root``.

    Modules are imported in name order so packages load before their children.
    Names in ``exclude`` (and anything nested below them) are never imported.
    An import failure is logged and recorded without stopping the pass.
    """
    root_path = Path(root).expanduser().resolve()
    if not root_path.is_dir():
        raise NotADirectoryError(f"Load root is not a directory: {root}")

    report = LoadReport()
    directories = [root_path / entry for entry in source_path] or [root_path]
    for source_dir in directories:
        if not source_dir.is_dir():
            logger.warning("Source path %s does not exist; skipping", source_dir)
            continue
        source_str = str(source_dir)
        if source_str not in sys.path:
            sys.path.insert(0, source_str)

        for name in discover_modules(source_dir):
            if matches_roots(name, exclude):
                report.excluded.append(name)
                continue
            try:
                importlib.import_module(name)
            except Exception as exc:
                logger.warning("Failed to load %s: %s", name, exc)
                report.failed[name] = f"{type(exc).__name__}: {exc}"
                continue
            logger.debug("Loaded %s", name)
            report.loaded.append(name)

    logger.info(
        "Loaded %d modules (%d excluded, %d failed)",
        len(report.loaded),
        len(report.excluded),
        len(report.failed),
    )
    return report


__all__ = ["LoadReport", "discover_modules", "load_namespaces", "module_name_for"]
