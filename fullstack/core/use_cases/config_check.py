"""
Config check use case — validate a fullstack.yml hierarchy and report
issues without running anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from fullstack.core.config.loader import (
    UNIT_CONFIG_FILE,
    ConfigError,
    find_unit_file,
    load_hierarchy,
)
from fullstack.core.models.operation import PUBLISH
from fullstack.core.models.unit import Unit


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    root: Unit | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "root": self.root.identity if self.root else None,
            "unit_count": sum(1 for _ in self.root.walk()) if self.root else 0,
        }


def _has_publish(unit: Unit) -> bool:
    return unit.profile is not None or unit.is_publishable or PUBLISH in unit.capabilities


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate the hierarchy rooted at ``config_path``.

    Args:
        config_path: Optional explicit path to fullstack.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_unit_file()
    if config_path is None:
        result.errors.append(f"No {UNIT_CONFIG_FILE} found.")
        return result
    result.config_path = config_path

    try:
        root = load_hierarchy(config_path)
        result.root = root
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    # Publishable units only get a repository from an enclosing Implementation
    covered: set[int] = set()
    for unit in root.walk():
        if unit.profile == "implementation":
            covered.update(id(member) for member in unit.walk())

    for unit in root.walk():
        if unit.is_publishable and id(unit) not in covered:
            result.warnings.append(
                f"Unit '{unit.identity}' is publishable but not inside an "
                "implementation; it has no repository to publish to."
            )

        # An Implementation aggregates its whole subtree, a Domain its builds
        if unit.profile == "implementation":
            members = unit.descendants()
        elif unit.profile == "domain":
            members = unit.children
        else:
            members = []
        for member in members:
            if not _has_publish(member):
                result.warnings.append(
                    f"Child '{member.identity}' of '{unit.identity}' has no "
                    f"'{PUBLISH}' operation; publishing '{unit.identity}' will fail."
                )

        if unit.profile is None and unit.children and id(unit) not in covered:
            result.warnings.append(
                f"Unit '{unit.identity}' has children but no profile and is not "
                "inside an implementation; its operations will not aggregate them."
            )

    result.valid = len(result.errors) == 0
    return result
