"""Pipeline orchestration for a collection run."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .assembler import project_info
from .config import ConfigError, DoctreeConfig
from .introspect import snapshot
from .loader import LoadReport, load_namespaces
from .logging import get_logger
from .runtime import NamespaceRegistry
from .symbols import DEFAULT_CONVENTION, TypeConvention
from .writer import write_tree


@dataclass
class CollectOutcome:
    """Result of a collection run."""

    output: Path
    debug_output: Path
    namespaces: int
    load_report: LoadReport


class Collector:
    """Loads a project, snapshots its namespaces, and writes the tree."""

    def __init__(
        self,
        loader: Callable[..., LoadReport] = load_namespaces,
        snapshotter: Callable[[TypeConvention], NamespaceRegistry] = snapshot,
        convention: TypeConvention = DEFAULT_CONVENTION,
    ) -> None:
        self.loader = loader
        self.snapshotter = snapshotter
        self.convention = convention
        self.logger = get_logger("collector")

    def build_tree(self, config: DoctreeConfig) -> List[Dict[str, Any]]:
        registry = self.snapshotter(self.convention)
        return project_info(
            registry,
            config.namespaces,
            config.trim_prefix,
            convention=self.convention,
            logger=self.logger,
        )

    def run(self, config: DoctreeConfig, output: Optional[Path] = None) -> CollectOutcome:
        """Load, collect, and write the tree to the debug and output paths."""
        target = output or config.output
        if target is None:
            raise ConfigError("No output path configured")
        if not config.namespaces:
            raise ConfigError("No namespaces to document were configured")

        load = config.loader()
        self.logger.info("Loading modules from %s", load.root)
        report = self.loader(load.root, load.source_path, load.exclude)

        self.logger.info("Collecting %s", config.namespaces_to_document)
        tree = self.build_tree(config)
        debug_path = write_tree(tree, config.debug_output)
        output_path = write_tree(tree, target)
        self.logger.info("Wrote %d namespaces to %s", len(tree), output_path)
        return CollectOutcome(
            output=output_path,
            debug_output=debug_path,
            namespaces=len(tree),
            load_report=report,
        )


def collect_info_to_file(config: DoctreeConfig, output: Optional[Path] = None) -> CollectOutcome:
    return Collector().run(config, output)


__all__ = ["CollectOutcome", "Collector", "collect_info_to_file"]
