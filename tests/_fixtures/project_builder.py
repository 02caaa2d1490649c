"""Helper utilities for writing throwaway Python projects in tests."""

from __future__ import annotations

import sys
import textwrap
from pathlib import Path
from typing import List, Mapping


class ProjectBuilder:
    """Writes modules under a temporary source root and forgets them afterwards."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()
        self._packages: List[str] = []

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries relative to the project root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")
            top = Path(relative).parts
            if len(top) > 1:
                self._packages.append(top[1] if top[0] == "src" and len(top) > 2 else top[0])
            else:
                self._packages.append(Path(relative).stem)

    def path(self) -> Path:
        """Return the project root path."""
        return self.root

    def cleanup(self) -> None:
        """Drop every module this project put into ``sys.modules`` and ``sys.path``."""
        prefixes = set(self._packages)
        for name in list(sys.modules):
            if name.split(".")[0] in prefixes:
                del sys.modules[name]
        for entry in list(sys.path):
            if entry.startswith(str(self.root)):
                sys.path.remove(entry)


__all__ = ["ProjectBuilder"]
