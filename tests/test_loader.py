"""Tests for the module loader."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from doctree.loader import discover_modules, load_namespaces, module_name_for
from tests._fixtures.project_builder import ProjectBuilder
from tests._fixtures.sample_project import SHAPES_PROJECT


def test_module_names_follow_package_layout(tmp_path: Path) -> None:
    source = tmp_path / "src"

    assert module_name_for(source / "pkg" / "__init__.py", source) == "pkg"
    assert module_name_for(source / "pkg" / "mod.py", source) == "pkg.mod"
    assert module_name_for(source / "not-a-module.py", source) is None


def test_discover_modules_sorts_packages_before_children(project_builder: ProjectBuilder) -> None:
    project_builder.write(SHAPES_PROJECT)

    names = discover_modules(project_builder.path() / "src")

    assert names == [
        "shapes",
        "shapes.broken",
        "shapes.core",
        "shapes.excluded",
        "shapes.legacy",
    ]


def test_load_tolerates_failures_and_honours_exclusions(project_builder: ProjectBuilder) -> None:
    project_builder.write(SHAPES_PROJECT)

    report = load_namespaces(project_builder.path(), ["src"], ["shapes.excluded"])

    assert report.loaded == ["shapes", "shapes.core", "shapes.legacy"]
    assert report.excluded == ["shapes.excluded"]
    assert list(report.failed) == ["shapes.broken"]
    assert "boom" in report.failed["shapes.broken"]
    assert "shapes.core" in sys.modules
    assert "shapes.excluded" not in sys.modules


def test_missing_source_path_is_skipped(project_builder: ProjectBuilder) -> None:
    project_builder.write({"src/shapes/__init__.py": '"""Shapes."""\n'})

    report = load_namespaces(project_builder.path(), ["lib", "src"])

    assert report.loaded == ["shapes"]


def test_load_root_must_be_a_directory(tmp_path: Path) -> None:
    with pytest.raises(NotADirectoryError):
        load_namespaces(tmp_path / "missing")
