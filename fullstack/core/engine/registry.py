"""
Operation registry — idempotent define-or-get for named operations.

Configuration is layered: a facade, the unit's own lifecycle, and any
later pass may all touch the same operation. Every call adds to what
is already there and never replaces it.
"""

from __future__ import annotations

import logging
from typing import Iterable

from fullstack.adapters.base import BuildGraph
from fullstack.core.models.operation import (
    DEFAULT_OPERATIONS,
    OperationAddress,
    PostAction,
)
from fullstack.core.models.unit import Unit

logger = logging.getLogger(__name__)


def define_or_get_operation(
    graph: BuildGraph,
    unit: Unit,
    name: str,
    post_action: PostAction | None = None,
    dependency_addresses: Iterable[OperationAddress] = (),
) -> str:
    """Find or create operation ``name`` on ``unit`` and extend it.

    Args:
        graph: The build graph holding the unit's operations.
        unit: Owner of the operation.
        name: Operation name.
        post_action: Appended after any previously attached actions.
        dependency_addresses: Added to the dependency set. Addresses are
            resolved later by the graph, so unknown ones are not an
            error here.

    Returns:
        The operation name, for composing default-operation lists.
    """
    first_seen = not graph.has_task(unit, name)
    operation = graph.define_or_get_task(unit, name)

    for address in dependency_addresses:
        graph.add_dependency(operation, address)

    if post_action is not None:
        graph.add_post_action(operation, post_action)

    if first_seen and name in DEFAULT_OPERATIONS:
        graph.add_default_operation(unit, name)

    logger.debug(
        "Defined %s (deps=%d, actions=%d)",
        operation.path,
        len(operation.dependencies),
        len(operation.actions),
    )
    return operation.name
