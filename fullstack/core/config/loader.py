"""
Configuration loader — reads a tree of fullstack.yml files into units.

Every unit directory holds one fullstack.yml. A unit lists its
children as directories relative to its own; each child directory
carries its own file. The result is the fully discovered hierarchy,
fixed for the rest of the invocation.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fullstack.core.errors import FullstackError
from fullstack.core.models.operation import PATH_SEPARATOR
from fullstack.core.models.unit import UNSPECIFIED_VERSION, PublishCapability, Unit

logger = logging.getLogger(__name__)

# Default config filename
UNIT_CONFIG_FILE = "fullstack.yml"


class ConfigError(FullstackError):
    """Raised when unit configuration is invalid or missing."""


class PublishConfig(BaseModel):
    """The ``publish:`` section of a unit file."""

    model_config = ConfigDict(extra="forbid")

    artifact: str = "jar"
    source: str = "libs"


class UnitConfig(BaseModel):
    """Schema of one fullstack.yml."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    profile: Literal["domain", "implementation"] | None = None
    group: str | None = None
    version: str = UNSPECIFIED_VERSION
    children: list[str] = Field(default_factory=list)
    capabilities: dict[str, str] = Field(default_factory=dict)
    publish: PublishConfig | None = None

    @field_validator("version", "group", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        # YAML reads 1.2 as a float
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("publish", mode="before")
    @classmethod
    def _publish_flag(cls, value: Any) -> Any:
        if value is True:
            return {}
        if value is False:
            return None
        return value


def find_unit_file(start_dir: Path | None = None) -> Path | None:
    """Return the fullstack.yml of ``start_dir`` (default: cwd), if any.

    Unlike a project file, the search does not walk upward: the
    directory an invocation starts in selects the unit it targets.
    """
    candidate = (start_dir or Path.cwd()).resolve() / UNIT_CONFIG_FILE
    return candidate if candidate.is_file() else None


def read_unit_config(path: Path) -> UnitConfig:
    """Parse and validate one unit file.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        return UnitConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid unit configuration in {path}: {e}") from e


def load_hierarchy(path: Path | None = None) -> Unit:
    """Load the unit at ``path`` and, recursively, all of its children.

    Args:
        path: A fullstack.yml file or a directory containing one.
            If None, uses the current directory.

    Returns:
        The root Unit, children attached.

    Raises:
        ConfigError: On any missing or invalid file, duplicate child
            identities, or a directory that includes itself.
    """
    if path is None:
        path = find_unit_file()
        if path is None:
            raise ConfigError(f"No {UNIT_CONFIG_FILE} found in {Path.cwd()}")
    elif path.is_dir():
        path = path / UNIT_CONFIG_FILE

    root = _load_unit(path.resolve(), ancestors=())
    logger.info("Loaded hierarchy '%s' with %d units", root.identity, sum(1 for _ in root.walk()))
    return root


def _load_unit(path: Path, ancestors: tuple[Path, ...]) -> Unit:
    directory = path.parent
    if directory in ancestors:
        raise ConfigError(f"Unit directory includes itself: {directory}")

    logger.debug("Loading unit config from %s", path)
    config = read_unit_config(path)

    identity = config.name or directory.name
    if not identity or PATH_SEPARATOR in identity:
        raise ConfigError(f"Invalid unit name '{identity}' in {path}")

    children: list[Unit] = []
    for relative in config.children:
        child_dir = (directory / relative).resolve()
        if not child_dir.is_dir():
            raise ConfigError(f"Child directory of '{identity}' not found: {child_dir}")
        child = _load_unit(child_dir / UNIT_CONFIG_FILE, ancestors + (directory,))
        if any(c.identity == child.identity for c in children):
            raise ConfigError(f"Duplicate child '{child.identity}' in '{identity}'")
        children.append(child)

    return Unit(
        identity=identity,
        root_path=directory,
        group=config.group,
        version=config.version,
        profile=config.profile,
        children=children,
        capabilities=config.capabilities,
        publish=(
            PublishCapability(artifact=config.publish.artifact, source=config.publish.source)
            if config.publish is not None
            else None
        ),
    )
