"""
Dependency rewriter — forces the selected jOOQ edition and version on
every jOOQ dependency of the build.

A dependency is a jOOQ dependency when its group is one of the edition
group ids and its name starts with ``jooq``. Matching on the name
prefix rather than the current group keeps the rewrite idempotent.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from jooqbuild.core.build.project import BuildProject
from jooqbuild.core.errors import VersionResolutionError
from jooqbuild.core.models.coordinates import Coordinate
from jooqbuild.core.models.edition import JooqEdition
from jooqbuild.core.plugin.version_policy import VersionPolicy

logger = logging.getLogger(__name__)

JOOQ_GROUP_IDS = JooqEdition.group_ids()
JOOQ_NAME_PREFIX = "jooq"


def is_jooq_artifact(coordinate: Coordinate) -> bool:
    return coordinate.group in JOOQ_GROUP_IDS and coordinate.name.startswith(JOOQ_NAME_PREFIX)


class DependencyRewriter:
    """Resolution rule: jOOQ coordinates in, selected coordinates out.

    Returns unrelated coordinates unchanged and never raises for them.
    """

    def __init__(self, policy: VersionPolicy):
        self._policy = policy

    def __call__(self, requested: Coordinate) -> Coordinate:
        if not is_jooq_artifact(requested):
            return requested
        return self._policy.selection().coordinate(requested.name)

    def install(self, project: BuildProject) -> None:
        """Register the rule with the project's resolution strategy, once."""
        if self in project.resolution.rules:
            return
        project.resolution.add_rule(self)
        logger.debug("jOOQ version enforcement installed on %s", project)


def verify_family_consistency(resolved: Iterable[Coordinate]) -> None:
    """Check that all resolved jOOQ artifacts share one group and version.

    Raises:
        VersionResolutionError: If two jOOQ artifacts disagree.
    """
    seen: dict[tuple[str, str | None], list[str]] = {}
    for coordinate in resolved:
        if is_jooq_artifact(coordinate):
            seen.setdefault((coordinate.group, coordinate.version), []).append(coordinate.name)
    if len(seen) > 1:
        found = "; ".join(f"{g}:{v} ({', '.join(names)})" for (g, v), names in sorted(seen.items(), key=str))
        raise VersionResolutionError(f"Conflicting jOOQ versions on the classpath: {found}")
