from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from doctree.logging import reset_logging
from tests._fixtures.project_builder import ProjectBuilder
from tests._fixtures.registry_builder import RegistryBuilder


@pytest.fixture
def registry_builder() -> RegistryBuilder:
    """Provide an empty registry builder."""
    return RegistryBuilder()


@pytest.fixture
def project_builder(tmp_path: Path) -> Iterator[ProjectBuilder]:
    """Provide a project builder whose imported modules are unloaded after the test."""
    builder = ProjectBuilder(tmp_path)
    yield builder
    builder.cleanup()


@pytest.fixture(autouse=True)
def _reset_doctree_logging() -> Iterator[None]:
    """Undo handlers installed by ``configure_logging`` (the CLI installs them too)."""
    yield
    reset_logging()
