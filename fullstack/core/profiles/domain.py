"""
Domain profile — aggregation for the root of a project structure.

The children of a Domain are included builds: independent trees that
can be built on their own. Every aggregate operation depends on the
same-named root operation of each included build, addressed across
builds.

    clean    + deletes the Domain's output path
    build
    publish  + merges the included builds' repositories
    wrapper

``clean`` and ``build`` run on a bare invocation.
"""

from __future__ import annotations

import logging

from fullstack.adapters.base import BuildGraph
from fullstack.adapters.filesystem import delete_path
from fullstack.core.engine.propagation import inherit_metadata
from fullstack.core.engine.registry import define_or_get_operation
from fullstack.core.engine.repository import merge_repositories
from fullstack.core.models.operation import (
    BUILD,
    CLEAN,
    PUBLISH,
    WRAPPER,
    CrossBuildAddress,
    PostAction,
)
from fullstack.core.models.unit import Unit

logger = logging.getLogger(__name__)


def define_included_build_operation(
    graph: BuildGraph,
    unit: Unit,
    name: str,
    post_action: PostAction | None = None,
) -> str:
    """Define ``name`` on ``unit`` depending on every included build's ``name``."""
    return define_or_get_operation(
        graph,
        unit,
        name,
        post_action=post_action,
        dependency_addresses=[
            CrossBuildAddress(build=child.identity, operation=name)
            for child in unit.children
        ],
    )


def apply_domain(graph: BuildGraph, unit: Unit) -> None:
    """Configure ``unit`` as a Domain."""
    # Included builds own their group unless the Domain declares one
    for child in unit.children:
        graph.after_evaluate(
            child,
            lambda evaluated: inherit_metadata(
                unit, evaluated, inherit_group=unit.group is not None
            ),
        )

    graph.set_default_operations(
        unit,
        [
            define_included_build_operation(
                graph, unit, CLEAN, post_action=lambda op: delete_path(unit.output_path)
            ),
            define_included_build_operation(graph, unit, BUILD),
        ],
    )
    define_included_build_operation(
        graph, unit, PUBLISH, post_action=lambda op: merge_repositories(unit)
    )
    define_included_build_operation(graph, unit, WRAPPER)

    logger.debug("Applied domain profile to %s (%d builds)", unit.identity, len(unit.children))
