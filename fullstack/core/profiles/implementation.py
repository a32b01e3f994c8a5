"""
Implementation profile — aggregation for a platform-specific project
and its sub-projects.

Besides the aggregate operations, an Implementation:

- takes its own identity as group when none is declared;
- hands group and version down to each sub-project once that
  sub-project has configured (explicit sub-project versions win);
- registers the ``mavenRoot`` publication repository, pointing at its
  own aggregate repository, on every publishable unit of its subtree.

Operations are defined after the Implementation itself has configured,
and address sub-projects inside the same tree. "Sub-project" means
every descendant, at any depth: ``impl → model → nested`` addresses
the nested unit as ``:model:nested:<name>``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fullstack.adapters.base import BuildGraph
from fullstack.adapters.filesystem import delete_path
from fullstack.adapters.publishing import add_publication_repository
from fullstack.core.engine.propagation import propagate
from fullstack.core.engine.registry import define_or_get_operation
from fullstack.core.engine.repository import merge_repositories
from fullstack.core.models.operation import (
    BUILD,
    CLEAN,
    MAVEN_ROOT_REPOSITORY_NAME,
    PUBLISH,
    IntraTreeAddress,
    PostAction,
)
from fullstack.core.models.unit import Unit

logger = logging.getLogger(__name__)


def define_sub_project_operation(
    graph: BuildGraph,
    unit: Unit,
    name: str,
    post_action: PostAction | None = None,
) -> str:
    """Define ``name`` on ``unit`` depending on every sub-project's ``name``."""
    return define_or_get_operation(
        graph,
        unit,
        name,
        post_action=post_action,
        dependency_addresses=[
            IntraTreeAddress(path=path, operation=name)
            for path, _ in unit.sub_project_paths()
        ],
    )


def _register_root_repository(unit: Unit, url: Path) -> None:
    if unit.is_publishable:
        add_publication_repository(unit, MAVEN_ROOT_REPOSITORY_NAME, url)


def _define_operations(graph: BuildGraph, unit: Unit) -> None:
    graph.set_default_operations(
        unit,
        [
            define_sub_project_operation(
                graph, unit, CLEAN, post_action=lambda op: delete_path(unit.output_path)
            ),
            define_sub_project_operation(graph, unit, BUILD),
        ],
    )
    define_sub_project_operation(
        graph, unit, PUBLISH, post_action=lambda op: merge_repositories(unit, unit.descendants())
    )


def apply_implementation(graph: BuildGraph, unit: Unit) -> None:
    """Configure ``unit`` as an Implementation."""
    if unit.group is None:
        unit.group = unit.identity

    propagate(graph, unit, subtree=True)

    repository_url = unit.repository_path
    for member in unit.walk():
        graph.after_evaluate(
            member,
            lambda evaluated: _register_root_repository(evaluated, repository_url),
        )

    graph.after_evaluate(unit, lambda evaluated: _define_operations(graph, evaluated))

    logger.debug(
        "Applied implementation profile to %s (%d sub-projects)",
        unit.identity,
        len(unit.descendants()),
    )
