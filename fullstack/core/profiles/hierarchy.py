"""
Hierarchy configuration — evaluates a discovered unit tree and applies
the lifecycle and aggregation profile of every unit.
"""

from __future__ import annotations

import logging

from fullstack.adapters.memory import InMemoryBuildGraph
from fullstack.core.models.unit import Unit
from fullstack.core.profiles.domain import apply_domain
from fullstack.core.profiles.implementation import apply_implementation
from fullstack.core.profiles.lifecycle import apply_lifecycle

logger = logging.getLogger(__name__)


def build_roots(root: Unit) -> set[int]:
    """Object ids of units that root their own build tree.

    The invocation root and every included build of a Domain.
    """
    roots = {id(root)}
    for unit in root.walk():
        if unit.profile == "domain":
            roots.update(id(child) for child in unit.children)
    return roots


def configure_hierarchy(graph: InMemoryBuildGraph, root: Unit) -> None:
    """Evaluate ``root`` and its descendants into ``graph``."""
    roots = build_roots(root)

    def configure(unit: Unit) -> None:
        apply_lifecycle(graph, unit, build_root=id(unit) in roots)
        if unit.profile == "domain":
            apply_domain(graph, unit)
        elif unit.profile == "implementation":
            apply_implementation(graph, unit)

    graph.evaluate(root, configure)
    logger.info("Configured %d units under %s", sum(1 for _ in root.walk()), root.identity)
