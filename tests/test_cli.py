"""CLI parser and entrypoint tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from doctree.cli import _apply_overrides, _build_parser, main
from doctree.config import DoctreeConfig
from tests._fixtures.project_builder import ProjectBuilder
from tests._fixtures.sample_project import SHAPES_PROJECT


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "collect"])
    assert args.verbose is True
    assert args.command == "collect"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["collect", "--verbose"])
    assert args.verbose is True
    assert args.path == "."


def test_cli_overrides_config_values(tmp_path: Path) -> None:
    parser = _build_parser()
    args = parser.parse_args(
        [
            "collect",
            str(tmp_path),
            "--namespaces",
            "a:b",
            "--trim-prefix",
            "a.",
            "-o",
            "tree.json",
            "--source-path",
            "src",
            "--source-path",
            "lib",
            "--exclude",
            "a.slow",
            "--log-file",
            "run.log",
        ]
    )

    config = _apply_overrides(DoctreeConfig(root=tmp_path), args)

    assert config.namespaces == ["a", "b"]
    assert config.trim_prefix == "a."
    assert config.log_file == Path("run.log")
    assert config.output == Path("tree.json")
    assert config.load is not None
    assert config.load.root == tmp_path
    assert config.load.source_path == ["src", "lib"]
    assert config.load.exclude == ["a.slow"]


def test_collect_without_namespaces_exits_with_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["collect", str(tmp_path), "-o", str(tmp_path / "tree.json")])

    assert excinfo.value.code == 1


def test_collect_writes_tree(
    project_builder: ProjectBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    project_builder.write(SHAPES_PROJECT)
    root = project_builder.path()
    output = tmp_path / "out" / "tree.json"
    debug_output = tmp_path / "out" / "debug.json"

    main(
        [
            "collect",
            str(root),
            "--namespaces",
            "shapes",
            "-o",
            str(output),
            "--debug-output",
            str(debug_output),
            "--source-path",
            "src",
            "--exclude",
            "shapes.excluded",
        ]
    )

    tree = json.loads(output.read_text(encoding="utf-8"))
    assert [entry["full_name"] for entry in tree] == ["shapes"]
    assert debug_output.read_text(encoding="utf-8") == output.read_text(encoding="utf-8")
    assert "Documented 1 namespaces" in capsys.readouterr().out


def test_collect_keeps_diagnostic_log(project_builder: ProjectBuilder, tmp_path: Path) -> None:
    project_builder.write(SHAPES_PROJECT)
    log_file = tmp_path / "logs" / "collect.log"

    main(
        [
            "collect",
            str(project_builder.path()),
            "--namespaces",
            "shapes",
            "-o",
            str(tmp_path / "tree.json"),
            "--debug-output",
            str(tmp_path / "debug.json"),
            "--source-path",
            "src",
            "--log-file",
            str(log_file),
        ]
    )

    text = log_file.read_text(encoding="utf-8")
    assert "DEBUG doctree.loader: Loaded shapes.core" in text
    assert "WARNING doctree.loader: Failed to load shapes.broken" in text
