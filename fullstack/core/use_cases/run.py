"""
Run use case — load a hierarchy, configure it, and execute operations.

The full vertical slice from an invocation at any level of the
hierarchy to the aggregated outcome of every unit beneath it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from fullstack.adapters.memory import InMemoryBuildGraph
from fullstack.core.config.loader import ConfigError, load_hierarchy
from fullstack.core.engine.executor import ExecutionReport, execute_operations
from fullstack.core.errors import UnitStateError
from fullstack.core.models.unit import Unit
from fullstack.core.profiles.hierarchy import configure_hierarchy

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Result of one invocation."""

    report: ExecutionReport | None = None
    root: Unit | None = None
    graph: InMemoryBuildGraph | None = None
    operations: list[str] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        result["root"] = self.root.identity if self.root else ""
        result["root_path"] = str(self.root.root_path) if self.root else ""
        result["operations"] = self.operations
        if self.report:
            result["report"] = self.report.to_dict()
        return result


@dataclass
class EvaluationResult:
    """A configured hierarchy, ready to execute or inspect."""

    root: Unit | None = None
    graph: InMemoryBuildGraph | None = None
    error: str | None = None


def evaluate_hierarchy(config_path: Path | None = None) -> EvaluationResult:
    """Load and configure the hierarchy at ``config_path``."""
    result = EvaluationResult()
    try:
        root = load_hierarchy(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    graph = InMemoryBuildGraph()
    try:
        configure_hierarchy(graph, root)
    except UnitStateError as e:
        result.error = str(e)
        return result

    result.root = root
    result.graph = graph
    return result


def run_operations(
    operations: list[str] | None = None,
    config_path: Path | None = None,
) -> RunResult:
    """Execute operations at the unit selected by ``config_path``.

    Args:
        operations: Operation names; None or empty runs the defaults.
        config_path: fullstack.yml (or its directory). Default: cwd.

    Returns:
        RunResult with the execution report.
    """
    result = RunResult()

    evaluation = evaluate_hierarchy(config_path)
    if evaluation.error:
        result.error = evaluation.error
        return result

    root = evaluation.root
    graph = evaluation.graph
    assert root is not None and graph is not None

    result.root = root
    result.graph = graph
    result.operations = list(operations) if operations else graph.default_operations(root)

    result.report = execute_operations(graph, root, operations)
    logger.info("%s: %s → %s", root.identity, " ".join(result.operations), result.report.status)
    return result
