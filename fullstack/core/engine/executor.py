"""
Engine executor — runs operations on an evaluated hierarchy and
reports the outcome.

Flow:
    invocation → graph.execute → receipts → log → report
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from fullstack.core.models.receipt import Receipt
from fullstack.core.models.unit import Unit

if TYPE_CHECKING:
    from fullstack.adapters.memory import InMemoryBuildGraph

logger = logging.getLogger(__name__)


@dataclass
class ExecutionReport:
    """Result of one invocation against one unit."""

    unit: str = ""
    requested: list[str] = field(default_factory=list)
    receipts: list[Receipt] = field(default_factory=list)
    error: str | None = None

    @property
    def total(self) -> int:
        return len(self.receipts)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.receipts if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.receipts if r.failed)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.receipts if r.status == "skipped")

    @property
    def all_ok(self) -> bool:
        return self.error is None and self.failed == 0

    @property
    def status(self) -> str:
        if self.all_ok:
            return "ok"
        if self.succeeded > 0:
            return "partial"
        return "failed"

    def executed(self, path: str) -> bool:
        """Whether the operation ``<unit>:<name>`` ran successfully."""
        return any(r.ok and r.path == path for r in self.receipts)

    def to_dict(self) -> dict:
        return {
            "unit": self.unit,
            "requested": self.requested,
            "status": self.status,
            "error": self.error,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "skipped": self.skipped,
            "receipts": [r.model_dump(mode="json") for r in self.receipts],
        }


def execute_operations(
    graph: InMemoryBuildGraph,
    unit: Unit,
    names: Iterable[str] | None = None,
) -> ExecutionReport:
    """Execute operations of an evaluated unit and log each outcome.

    Args:
        graph: The evaluated build graph.
        unit: The unit the invocation targets.
        names: Operation names. None or empty runs the unit's defaults.

    Returns:
        ExecutionReport with one receipt per operation reached.
    """
    report = graph.execute(unit, list(names) if names else None)

    for receipt in report.receipts:
        status_marker = "✓" if receipt.ok else "✗" if receipt.failed else "⊘"
        logger.info("%s %s → %s", status_marker, receipt.path, receipt.status)

    if report.error:
        logger.error("%s failed: %s", unit.identity, report.error)

    return report
