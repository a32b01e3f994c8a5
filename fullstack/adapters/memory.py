"""
In-memory build graph — a complete, single-process executor.

Configuration runs top-down: each unit is configured, then its
deferred callbacks fire, before any of its children start. Execution
walks dependencies depth-first, runs each operation at most once per
invocation, and stops at the first failure.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterable

from fullstack.adapters.base import BuildGraph, EvaluationCallback
from fullstack.core.engine.executor import ExecutionReport
from fullstack.core.errors import (
    ExecutionError,
    OperationFailedError,
    OperationNotFoundError,
    UnitStateError,
)
from fullstack.core.models.operation import (
    PATH_SEPARATOR,
    CrossBuildAddress,
    IntraTreeAddress,
    Operation,
    OperationAddress,
    PostAction,
    UnitState,
)
from fullstack.core.models.receipt import Receipt
from fullstack.core.models.unit import Unit

logger = logging.getLogger(__name__)

# States in which deferred callbacks may still be registered
_HOOKABLE_STATES = (
    UnitState.UNCONFIGURED,
    UnitState.CONFIGURING,
    UnitState.CONFIGURED,
)


class InMemoryBuildGraph(BuildGraph):
    """Operation graph held entirely in process memory.

    Units are tracked by object identity; two units with the same
    identity string in different trees stay distinct.
    """

    def __init__(self) -> None:
        self._states: dict[int, UnitState] = {}
        self._operations: dict[int, dict[str, Operation]] = {}
        self._defaults: dict[int, list[str]] = {}
        self._hooks: dict[int, list[EvaluationCallback]] = {}

    # ── BuildGraph ──────────────────────────────────────────────

    def define_or_get_task(self, unit: Unit, name: str) -> Operation:
        operations = self._operations.setdefault(id(unit), {})
        operation = operations.get(name)
        if operation is None:
            operation = Operation(name=name, unit_identity=unit.identity)
            operations[name] = operation
            logger.debug("Created operation %s", operation.path)
        return operation

    def has_task(self, unit: Unit, name: str) -> bool:
        return name in self._operations.get(id(unit), {})

    def add_dependency(self, operation: Operation, address: OperationAddress) -> None:
        operation.dependencies.add(address)

    def add_post_action(self, operation: Operation, action: PostAction) -> None:
        operation.actions.append(action)

    def set_default_operations(self, unit: Unit, names: Iterable[str]) -> None:
        self._defaults[id(unit)] = list(dict.fromkeys(names))

    def add_default_operation(self, unit: Unit, name: str) -> None:
        defaults = self._defaults.setdefault(id(unit), [])
        if name not in defaults:
            defaults.append(name)

    def after_evaluate(self, unit: Unit, callback: EvaluationCallback) -> None:
        state = self.state_of(unit)
        if state not in _HOOKABLE_STATES:
            raise UnitStateError(
                f"Cannot register an after-evaluate callback on '{unit.identity}' "
                f"in state '{state.value}'"
            )
        self._hooks.setdefault(id(unit), []).append(callback)

    def state_of(self, unit: Unit) -> UnitState:
        return self._states.get(id(unit), UnitState.UNCONFIGURED)

    # ── Queries ─────────────────────────────────────────────────

    def get_operation(self, unit: Unit, name: str) -> Operation | None:
        """Look up a registered operation without creating it."""
        return self._operations.get(id(unit), {}).get(name)

    def operation_names(self, unit: Unit) -> list[str]:
        return list(self._operations.get(id(unit), {}))

    def default_operations(self, unit: Unit) -> list[str]:
        return list(self._defaults.get(id(unit), []))

    # ── Configuration ───────────────────────────────────────────

    def evaluate(self, root: Unit, configure: Callable[[Unit], None]) -> None:
        """Configure ``root`` and every descendant, parents first.

        Args:
            root: Top of the hierarchy for this invocation.
            configure: Applied to each unit while it is ``CONFIGURING``.

        Raises:
            UnitStateError: If a unit was already evaluated.
        """
        for unit in root.walk():
            if self.state_of(unit) is not UnitState.UNCONFIGURED:
                raise UnitStateError(f"Unit '{unit.identity}' was already evaluated")

            self._states[id(unit)] = UnitState.CONFIGURING
            configure(unit)
            self._states[id(unit)] = UnitState.CONFIGURED

            # Callbacks may register further callbacks on the same unit
            hooks = self._hooks.setdefault(id(unit), [])
            index = 0
            while index < len(hooks):
                hooks[index](unit)
                index += 1
            del self._hooks[id(unit)]

            self._states[id(unit)] = UnitState.OPERATIONS_REGISTERED
            logger.debug(
                "Evaluated %s (group=%s, version=%s)",
                unit.identity,
                unit.group,
                unit.version,
            )

    # ── Execution ───────────────────────────────────────────────

    def execute(self, unit: Unit, names: list[str] | None = None) -> ExecutionReport:
        """Run operations of ``unit``; defaults when ``names`` is empty.

        Never raises for operation failures: they end up in the report.

        Raises:
            UnitStateError: If ``unit`` has not been evaluated.
        """
        if self.state_of(unit) in _HOOKABLE_STATES:
            raise UnitStateError(f"Unit '{unit.identity}' has not been evaluated")

        requested = list(names) if names else self.default_operations(unit)
        report = ExecutionReport(unit=unit.identity, requested=requested)
        done: set[int] = set()

        for name in requested:
            if report.error is not None:
                report.receipts.append(
                    Receipt.skip(unit.identity, name, reason="previous operation failed")
                )
                continue
            try:
                operation = self.get_operation(unit, name)
                if operation is None:
                    raise OperationNotFoundError(
                        f"Task '{name}' not found in '{unit.identity}'"
                    )
                self._run(unit, operation, report, done)
            except ExecutionError as e:
                report.error = str(e)

        return report

    def _run(
        self,
        unit: Unit,
        operation: Operation,
        report: ExecutionReport,
        done: set[int],
    ) -> None:
        if id(operation) in done:
            return

        for address in sorted(operation.dependencies, key=str):
            try:
                dep_unit, dep_operation = self._resolve(unit, address)
            except OperationNotFoundError as e:
                report.receipts.append(
                    Receipt.failure(unit.identity, operation.name, error=str(e))
                )
                raise
            self._run(dep_unit, dep_operation, report, done)

        self._states[id(unit)] = UnitState.OPERATION_EXECUTING
        start = time.monotonic()
        try:
            for action in operation.actions:
                action(operation)
        except Exception as e:
            elapsed_ms = int((time.monotonic() - start) * 1000)
            self._states[id(unit)] = UnitState.OPERATION_FAILED
            report.receipts.append(
                Receipt.failure(
                    unit.identity,
                    operation.name,
                    error=str(e),
                    duration_ms=elapsed_ms,
                    metadata={"exception": type(e).__name__},
                )
            )
            raise OperationFailedError(operation.path, e) from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        report.receipts.append(
            Receipt.success(unit.identity, operation.name, duration_ms=elapsed_ms)
        )
        self._states[id(unit)] = UnitState.OPERATION_COMPLETE
        done.add(id(operation))

    def _resolve(self, owner: Unit, address: OperationAddress) -> tuple[Unit, Operation]:
        """Resolve an address relative to the unit that declared it."""
        if isinstance(address, IntraTreeAddress):
            target: Unit | None = owner
            for segment in address.path.split(PATH_SEPARATOR):
                target = target.get_child(segment) if target else None
            if target is None:
                raise OperationNotFoundError(
                    f"Project '{address.path}' not found in '{owner.identity}'"
                )
        elif isinstance(address, CrossBuildAddress):
            target = owner.get_child(address.build)
            if target is None:
                raise OperationNotFoundError(
                    f"Included build '{address.build}' not found in '{owner.identity}'"
                )
        else:
            raise OperationNotFoundError(f"Unsupported address: {address!r}")

        operation = self.get_operation(target, address.operation)
        if operation is None:
            raise OperationNotFoundError(f"Task '{address}' not found in '{owner.identity}'")
        return target, operation
