"""Configuration loading for doctree (.doctree.yml)."""

from __future__ import annotations

import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".doctree.yml"
DEBUG_FILENAME = "doctree-debug.json"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LoaderConfig:
    """Where the loader finds the modules to import before collection."""

    root: Path
    source_path: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)


@dataclass
class DoctreeConfig:
    """Represents the settings defined in .doctree.yml."""

    root: Path
    namespaces: List[str] = field(default_factory=list)
    trim_prefix: Optional[str] = None
    output: Optional[Path] = None
    debug_output: Path = field(default_factory=lambda: Path(tempfile.gettempdir()) / DEBUG_FILENAME)
    load: Optional[LoaderConfig] = None
    log_file: Optional[Path] = None

    @property
    def namespaces_to_document(self) -> str:
        return ":".join(self.namespaces)

    def loader(self) -> LoaderConfig:
        return self.load or LoaderConfig(root=self.root)


def load_config(config_path: Path) -> DoctreeConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DoctreeConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = DoctreeConfig(
        root=root,
        namespaces=_as_namespace_list(data.get("namespaces")),
        trim_prefix=_as_str(data.get("trim_prefix")),
    )

    output = _as_str(data.get("output"))
    if output:
        config.output = root / output
    debug_output = _as_str(data.get("debug_output"))
    if debug_output:
        config.debug_output = root / debug_output
    log_file = _as_str(data.get("log_file"))
    if log_file:
        config.log_file = root / log_file

    load_data = _as_dict(data.get("load"))
    if load_data:
        load_root = _as_str(load_data.get("root"))
        config.load = LoaderConfig(
            root=(root / load_root).resolve() if load_root else root,
            source_path=_as_str_list(load_data.get("source_path")),
            exclude=_as_namespace_list(load_data.get("exclude")),
        )

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


def _as_namespace_list(value: Any) -> List[str]:
    """Accept either a colon-separated string or a YAML list of names."""
    names: List[str] = []
    for item in _as_str_list(value):
        names.extend(part.strip() for part in item.split(":") if part.strip())
    return names


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DoctreeConfig",
    "LoaderConfig",
    "load_config",
]
