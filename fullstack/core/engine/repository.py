"""
Repository merge engine — folds the repositories of a unit's children
into the unit's own aggregate repository.

A child that published nothing has no repository folder; it is
filtered out, not reported. The target is never cleared first, so
artifacts of removed children linger until the next clean.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from fullstack.adapters.filesystem import copy_tree
from fullstack.core.models.unit import Unit

logger = logging.getLogger(__name__)


def repository_sources(unit: Unit, members: Iterable[Unit] | None = None) -> list[Path]:
    """Existing repositories of ``members`` (default: the children), in order."""
    sources = []
    for member in unit.children if members is None else members:
        source = member.repository_path
        if source.is_dir():
            sources.append(source)
        else:
            logger.debug("%s has no repository at %s, skipping", member.identity, source)
    return sources


def merge_repositories(unit: Unit, members: Iterable[Unit] | None = None) -> Path:
    """Copy every existing member repository into ``unit.repository_path``.

    Relative paths are preserved. Collisions between members are not
    resolved; the last one in order wins. Copy failures propagate.

    Args:
        unit: Owner of the aggregate repository.
        members: Units whose repositories are merged. Defaults to the
            direct children; an Implementation passes its whole subtree.

    Returns:
        The aggregate repository path (may not exist if no member
        published anything).
    """
    members = list(unit.children if members is None else members)
    target = unit.repository_path
    sources = repository_sources(unit, members)

    for source in sources:
        copy_tree(source, target)

    logger.info(
        "Merged %d of %d repositories into %s",
        len(sources),
        len(members),
        target,
    )
    return target
