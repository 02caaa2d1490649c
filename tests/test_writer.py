"""Tests for the tree writer."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from doctree.writer import render_tree, write_tree


def test_write_tree_round_trips_unicode(tmp_path: Path) -> None:
    tree = [{"full_name": "géo", "doc": "Formes et «points».", "subspaces": []}]

    path = write_tree(tree, tmp_path / "out" / "tree.json")

    text = path.read_text(encoding="utf-8")
    assert "Formes et «points»." in text
    assert json.loads(text) == tree
    assert text.endswith("\n")


def test_rendering_is_stable() -> None:
    tree = [{"b": 1, "a": [1, 2]}]

    assert render_tree(tree) == render_tree(tree)


def test_write_errors_propagate(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")

    with pytest.raises(OSError):
        write_tree([], blocker / "tree.json")
