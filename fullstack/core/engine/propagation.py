"""
Metadata propagator — copies group and version from a parent unit to
its children once each child has finished configuring.

Deferred on purpose: a child's own ``version`` assignment happens
during its configuration and must be visible before deciding whether
the child inherits. Evaluation is top-down, so the parent's metadata
is final by the time any child callback fires.
"""

from __future__ import annotations

import logging

from fullstack.adapters.base import BuildGraph
from fullstack.core.models.unit import Unit

logger = logging.getLogger(__name__)


def inherit_metadata(parent: Unit, child: Unit, inherit_group: bool = True) -> None:
    """Apply the inheritance rules to one configured child.

    Group is copied unconditionally. Version is copied only while the
    child still carries the unspecified sentinel; an explicit child
    version always wins.
    """
    if inherit_group:
        child.group = parent.group

    if not child.has_explicit_version:
        child.version = parent.version
        logger.debug("%s inherits version %s from %s", child.identity, child.version, parent.identity)
    else:
        logger.debug("%s keeps explicit version %s", child.identity, child.version)


def propagate(
    graph: BuildGraph,
    parent: Unit,
    inherit_group: bool = True,
    subtree: bool = False,
) -> None:
    """Schedule metadata inheritance for the units beneath ``parent``.

    Args:
        graph: Graph providing the after-evaluate hook.
        parent: Unit whose group/version flow down.
        inherit_group: False leaves each child's group alone and only
            applies the version rule.
        subtree: Apply to every descendant, all inheriting straight
            from ``parent``, instead of the direct children only.
    """
    members = parent.descendants() if subtree else parent.children
    for member in members:
        graph.after_evaluate(
            member,
            lambda evaluated: inherit_metadata(parent, evaluated, inherit_group),
        )
