"""
Build graph base — the contract between the aggregation core and the
executor that actually runs operations.

The aggregation facades only ever talk to a ``BuildGraph``. They never
resolve addresses, order operations, or run actions themselves, so
they can be exercised against the in-memory graph in tests and bound
to any other executor in production.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Iterable

from fullstack.core.models.operation import (
    Operation,
    OperationAddress,
    PostAction,
    UnitState,
)
from fullstack.core.models.unit import Unit

# Deferred configuration callback, receives the evaluated unit
EvaluationCallback = Callable[[Unit], None]


class BuildGraph(ABC):
    """Abstract operation graph with deferred-evaluation hooks.

    To bind a new executor:
        1. Subclass BuildGraph
        2. Implement the lookup, wiring and hook methods
        3. Pass it to the facades in place of the in-memory graph
    """

    @abstractmethod
    def define_or_get_task(self, unit: Unit, name: str) -> Operation:
        """Return the operation ``name`` of ``unit``, creating it if absent.

        Must return the same object for the same ``(unit, name)`` pair.
        """

    @abstractmethod
    def has_task(self, unit: Unit, name: str) -> bool:
        """Whether ``unit`` already owns an operation named ``name``."""

    @abstractmethod
    def add_dependency(self, operation: Operation, address: OperationAddress) -> None:
        """Make ``operation`` depend on the operation at ``address``."""

    @abstractmethod
    def add_post_action(self, operation: Operation, action: PostAction) -> None:
        """Append an action, run after all dependencies succeeded."""

    @abstractmethod
    def set_default_operations(self, unit: Unit, names: Iterable[str]) -> None:
        """Declare the operations run when ``unit`` is invoked bare."""

    @abstractmethod
    def add_default_operation(self, unit: Unit, name: str) -> None:
        """Append one operation to the bare-invocation set, if missing."""

    @abstractmethod
    def after_evaluate(self, unit: Unit, callback: EvaluationCallback) -> None:
        """Run ``callback`` once ``unit`` has finished configuring."""

    @abstractmethod
    def state_of(self, unit: Unit) -> UnitState:
        """Current lifecycle state of ``unit``."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
