"""
Base lifecycle — the operations every unit owns before any
aggregation facade touches it.

    clean    deletes the output path (plain units)
    build    no-op unless a command is declared (plain units)
    wrapper  pins the orchestrator version (build roots)
    publish  publishes the unit's artifact (publishable units)

Declared capability commands are appended to the same-named
operation, creating it when needed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fullstack import __version__
from fullstack.adapters.base import BuildGraph
from fullstack.adapters.command import run_command
from fullstack.adapters.filesystem import delete_path
from fullstack.adapters.publishing import publish_artifact
from fullstack.core.engine.registry import define_or_get_operation
from fullstack.core.models.operation import BUILD, CLEAN, PUBLISH, WRAPPER, Operation, PostAction
from fullstack.core.models.unit import Unit

logger = logging.getLogger(__name__)

WRAPPER_DIR = ".fullstack"
WRAPPER_FILE = "wrapper.properties"


def wrapper_path(unit: Unit) -> Path:
    return unit.root_path / WRAPPER_DIR / WRAPPER_FILE


def write_wrapper(unit: Unit) -> Path:
    """Write the wrapper properties of a build root."""
    path = wrapper_path(unit)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        f"unit={unit.identity}\ndistributionVersion={__version__}\n",
        encoding="utf-8",
    )
    logger.info("Wrote %s", path)
    return path


def _command_action(unit: Unit, command: str) -> PostAction:
    def action(operation: Operation) -> None:
        output = run_command(unit, command)
        if output:
            logger.info("%s: %s", operation.path, output)

    return action


def apply_lifecycle(graph: BuildGraph, unit: Unit, build_root: bool = False) -> None:
    """Register the base operations of ``unit``.

    Args:
        graph: Graph to register into.
        unit: The unit being configured.
        build_root: Whether ``unit`` is the root of its own build tree.
    """
    if unit.profile is None:
        define_or_get_operation(
            graph, unit, CLEAN, post_action=lambda op: delete_path(unit.output_path)
        )
        define_or_get_operation(graph, unit, BUILD)

    if build_root:
        define_or_get_operation(graph, unit, WRAPPER, post_action=lambda op: write_wrapper(unit))

    if unit.is_publishable:
        define_or_get_operation(graph, unit, PUBLISH, post_action=lambda op: publish_artifact(unit))

    for name, command in unit.capabilities.items():
        define_or_get_operation(graph, unit, name, post_action=_command_action(unit, command))
