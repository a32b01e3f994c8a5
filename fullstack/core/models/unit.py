"""
Unit model — one node of the build hierarchy.

A unit is a Domain, a Platform-level Implementation, or a sub-project.
Its identity doubles as display name and path segment; group and
version are the only fields that change after discovery, and only the
metadata propagator changes them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Literal

from pydantic import BaseModel, Field

from fullstack.core.models.operation import PATH_SEPARATOR

# Sentinel for "inherit from parent"
UNSPECIFIED_VERSION = "unspecified"

# Output directory convention, relative to root_path
DEFAULT_OUTPUT_DIR = "build"

# Folder-name suffix of an aggregate repository
REPOSITORY_SUFFIX = ".repository"


class PublicationRepository(BaseModel):
    """A named destination the publisher writes artifacts to."""

    name: str
    url: Path


class PublishCapability(BaseModel):
    """Marks a unit as producing a publishable artifact.

    The artifact is expected at
    ``<output_path>/<source>/<identity>-<version>.<artifact>``.
    """

    artifact: str = "jar"
    source: str = "libs"
    repositories: list[PublicationRepository] = Field(default_factory=list)

    def get_repository(self, name: str) -> PublicationRepository | None:
        """Look up a registered repository by name."""
        for repo in self.repositories:
            if repo.name == name:
                return repo
        return None


class Unit(BaseModel):
    """A node in the hierarchy.

    ``children`` is fixed once discovery has finished. ``profile``
    selects which aggregation facade configures the unit, if any.
    """

    identity: str
    root_path: Path
    group: str | None = None
    version: str = UNSPECIFIED_VERSION
    profile: Literal["domain", "implementation"] | None = None

    children: list[Unit] = Field(default_factory=list)
    capabilities: dict[str, str] = Field(default_factory=dict)
    publish: PublishCapability | None = None

    @property
    def output_path(self) -> Path:
        return self.root_path / DEFAULT_OUTPUT_DIR

    @property
    def repository_path(self) -> Path:
        """The unit's aggregate repository, under its output path."""
        return self.output_path / f"{self.identity}{REPOSITORY_SUFFIX}"

    @property
    def has_explicit_version(self) -> bool:
        return self.version != UNSPECIFIED_VERSION

    @property
    def is_publishable(self) -> bool:
        return self.publish is not None

    def get_child(self, identity: str) -> Unit | None:
        """Look up a direct child by identity."""
        for child in self.children:
            if child.identity == identity:
                return child
        return None

    def walk(self) -> Iterator[Unit]:
        """Yield this unit and all descendants, parents before children."""
        yield self
        for child in self.children:
            yield from child.walk()

    def descendants(self) -> list[Unit]:
        return list(self.walk())[1:]

    def sub_project_paths(self) -> Iterator[tuple[str, Unit]]:
        """Yield ``(relative path, unit)`` for every descendant, pre-order.

        Nested segments are joined with ``PATH_SEPARATOR``, e.g.
        ``model:nested``.
        """
        for child in self.children:
            yield child.identity, child
            for path, unit in child.sub_project_paths():
                yield f"{child.identity}{PATH_SEPARATOR}{path}", unit
