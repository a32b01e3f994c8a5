"""
Publishing adapter — Maven-layout artifact publication.

Stands in for the publishing capability of a unit: it knows which
repositories the unit publishes to, and lays each artifact out as
``<repository>/<group path>/<identity>/<version>/<identity>-<version>.<ext>``
with a minimal POM descriptor beside it.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from fullstack.core.models.unit import PublicationRepository, Unit

logger = logging.getLogger(__name__)

_POM_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <groupId>{group}</groupId>
  <artifactId>{artifact_id}</artifactId>
  <version>{version}</version>
  <packaging>{packaging}</packaging>
</project>
"""


class PublishingError(Exception):
    """Raised when a unit cannot be published."""


def add_publication_repository(unit: Unit, name: str, url: Path) -> PublicationRepository:
    """Register a named repository on a publishable unit.

    Registering the same name twice keeps the first registration.

    Raises:
        PublishingError: If the unit has no publish capability.
    """
    if unit.publish is None:
        raise PublishingError(f"Unit '{unit.identity}' is not publishable")

    existing = unit.publish.get_repository(name)
    if existing is not None:
        return existing

    repository = PublicationRepository(name=name, url=url)
    unit.publish.repositories.append(repository)
    logger.debug("%s publishes to '%s' at %s", unit.identity, name, url)
    return repository


def artifact_name(unit: Unit) -> str:
    """File name of the unit's artifact, e.g. ``model-1.2.3.jar``."""
    assert unit.publish is not None
    return f"{unit.identity}-{unit.version}.{unit.publish.artifact}"


def artifact_path(unit: Unit) -> Path:
    """Where the unit's build is expected to leave its artifact."""
    assert unit.publish is not None
    return unit.output_path / unit.publish.source / artifact_name(unit)


def coordinates_path(unit: Unit) -> Path:
    """Relative ``<group path>/<identity>/<version>`` directory."""
    group_segments = (unit.group or "").split(".")
    return Path(*[s for s in group_segments if s], unit.identity, unit.version)


def publish_artifact(unit: Unit) -> list[Path]:
    """Publish the unit's artifact to every registered repository.

    Returns:
        The published artifact paths, one per repository.

    Raises:
        PublishingError: If the unit is not publishable or the artifact
            was not built.
    """
    if unit.publish is None:
        raise PublishingError(f"Unit '{unit.identity}' is not publishable")

    source = artifact_path(unit)
    if not source.is_file():
        raise PublishingError(f"Artifact not found: {source}")

    published = []
    for repository in unit.publish.repositories:
        directory = repository.url / coordinates_path(unit)
        directory.mkdir(parents=True, exist_ok=True)

        target = directory / source.name
        shutil.copy2(source, target)

        pom = directory / f"{unit.identity}-{unit.version}.pom"
        pom.write_text(
            _POM_TEMPLATE.format(
                group=unit.group or "",
                artifact_id=unit.identity,
                version=unit.version,
                packaging=unit.publish.artifact,
            ),
            encoding="utf-8",
        )

        published.append(target)
        logger.info("Published %s to '%s'", source.name, repository.name)

    if not published:
        logger.warning("%s has no publication repositories", unit.identity)

    return published
