"""
Operation model — named, aggregatable units of build work.

Operations are registered during configuration and executed later by
the build graph. Dependencies are kept as addresses, never as resolved
operations: resolution belongs to the graph.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Union

from pydantic import BaseModel, ConfigDict

# ── Operation vocabulary ────────────────────────────────────────

CLEAN = "clean"
BUILD = "build"
PUBLISH = "publish"
WRAPPER = "wrapper"

# Executed on a bare invocation, in this order
DEFAULT_OPERATIONS = (CLEAN, BUILD)

# Fixed identity of the aggregate publication target
MAVEN_ROOT_REPOSITORY_NAME = "mavenRoot"

PATH_SEPARATOR = ":"


class UnitState(str, Enum):
    """Per-unit lifecycle across one invocation."""

    UNCONFIGURED = "unconfigured"
    CONFIGURING = "configuring"
    CONFIGURED = "configured"
    OPERATIONS_REGISTERED = "operations_registered"
    OPERATION_EXECUTING = "operation_executing"
    OPERATION_COMPLETE = "operation_complete"
    OPERATION_FAILED = "operation_failed"


class IntraTreeAddress(BaseModel):
    """An operation on a sub-project of the same build tree.

    ``path`` is relative to the unit that owns the dependency, with
    nested segments joined by ``PATH_SEPARATOR``.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    operation: str

    def __str__(self) -> str:
        return f"{PATH_SEPARATOR}{self.path}{PATH_SEPARATOR}{self.operation}"


class CrossBuildAddress(BaseModel):
    """The root operation of an included, separately buildable tree."""

    model_config = ConfigDict(frozen=True)

    build: str
    operation: str

    def __str__(self) -> str:
        return f"{self.build}{PATH_SEPARATOR}{PATH_SEPARATOR}{self.operation}"


OperationAddress = Union[IntraTreeAddress, CrossBuildAddress]

# A post-action receives the operation it is attached to
PostAction = Callable[["Operation"], None]


@dataclass(eq=False)
class Operation:
    """A named operation attached to one unit.

    ``dependencies`` has set semantics; ``actions`` run in the order
    they were attached, after every dependency has succeeded.
    """

    name: str
    unit_identity: str
    dependencies: set[OperationAddress] = field(default_factory=set)
    actions: list[PostAction] = field(default_factory=list)

    @property
    def path(self) -> str:
        return f"{self.unit_identity}{PATH_SEPARATOR}{self.name}"

    def __repr__(self) -> str:
        return f"<Operation {self.path} deps={len(self.dependencies)} actions={len(self.actions)}>"
