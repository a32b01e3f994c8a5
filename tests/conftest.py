"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from fullstack.adapters.memory import InMemoryBuildGraph
from fullstack.core.models.unit import PublishCapability, Unit


@pytest.fixture
def graph() -> InMemoryBuildGraph:
    """A fresh, empty in-memory build graph."""
    return InMemoryBuildGraph()


@pytest.fixture
def make_unit(tmp_path: Path) -> Callable[..., Unit]:
    """Factory for units rooted under ``tmp_path``."""

    def _make(
        identity: str,
        *children: Unit,
        profile: str | None = None,
        publishable: bool = False,
        **kwargs,
    ) -> Unit:
        root = tmp_path / identity
        root.mkdir(parents=True, exist_ok=True)
        return Unit(
            identity=identity,
            root_path=root,
            children=list(children),
            profile=profile,
            publish=PublishCapability() if publishable else None,
            **kwargs,
        )

    return _make


@pytest.fixture
def write_unit() -> Callable[[Path, str], Path]:
    """Write a fullstack.yml into a directory, creating it."""

    def _write(directory: Path, content: str) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "fullstack.yml"
        path.write_text(textwrap.dedent(content))
        return path

    return _write
