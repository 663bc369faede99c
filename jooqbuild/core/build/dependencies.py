"""
Dependency sets and the resolution extension point.

A dependency set is a named bag of declared coordinates. Resolution
runs every registered rule over every declared coordinate; rules are
how plugins steer versions without the host knowing about them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from jooqbuild.core.models.coordinates import Coordinate

logger = logging.getLogger(__name__)

ResolutionRule = Callable[[Coordinate], Coordinate]


class DependencyResolutionError(Exception):
    """Raised when a dependency set cannot be resolved.

    The underlying problem, if any, is chained as ``__cause__``.
    """


class DependencySet:
    """A named, user-extensible set of declared dependencies."""

    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.description = description
        self._dependencies: list[Coordinate] = []

    @property
    def dependencies(self) -> list[Coordinate]:
        return list(self._dependencies)

    def add(self, dependency: str | Coordinate) -> Coordinate:
        """Declare a dependency from a coordinate or ``group:name[:version]``."""
        if isinstance(dependency, str):
            dependency = Coordinate.parse(dependency)
        self._dependencies.append(dependency)
        return dependency

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self._dependencies)

    def __len__(self) -> int:
        return len(self._dependencies)

    def __repr__(self) -> str:
        return f"<DependencySet name={self.name!r} size={len(self)}>"


class DependencySetContainer:
    """All dependency sets of a project, by name."""

    def __init__(self) -> None:
        self._sets: dict[str, DependencySet] = {}

    def create(self, name: str, description: str = "") -> DependencySet:
        if name in self._sets:
            raise ValueError(f"Dependency set '{name}' already exists")
        dependency_set = DependencySet(name, description)
        self._sets[name] = dependency_set
        return dependency_set

    def get(self, name: str) -> DependencySet | None:
        return self._sets.get(name)

    def get_or_create(self, name: str) -> DependencySet:
        if name in self._sets:
            return self._sets[name]
        return self.create(name)

    def names(self) -> list[str]:
        return list(self._sets)

    def __contains__(self, name: object) -> bool:
        return name in self._sets

    def __iter__(self) -> Iterator[DependencySet]:
        return iter(self._sets.values())


class ResolutionStrategy:
    """Build-wide rules applied to every dependency being resolved."""

    def __init__(self) -> None:
        self._rules: list[ResolutionRule] = []

    @property
    def rules(self) -> list[ResolutionRule]:
        return list(self._rules)

    def add_rule(self, rule: ResolutionRule) -> None:
        self._rules.append(rule)

    def resolve_one(self, requested: Coordinate) -> Coordinate:
        """Run all rules over a single coordinate, in registration order."""
        target = requested
        for rule in self._rules:
            try:
                target = rule(target)
            except Exception as e:
                raise DependencyResolutionError(f"Could not resolve {requested}: {e}") from e
        if target.version is None:
            raise DependencyResolutionError(f"Could not resolve {requested}: no version declared")
        if target != requested:
            logger.debug("Resolved %s -> %s", requested, target)
        return target

    def resolve(self, dependency_set: DependencySet) -> list[Coordinate]:
        """Resolve every declared dependency of a set.

        Returns:
            Resolved coordinates, declaration order, duplicates removed.

        Raises:
            DependencyResolutionError: If any dependency fails to resolve.
        """
        resolved: list[Coordinate] = []
        for requested in dependency_set:
            try:
                target = self.resolve_one(requested)
            except DependencyResolutionError as e:
                raise DependencyResolutionError(
                    f"Could not resolve all dependencies for '{dependency_set.name}': {e}"
                ) from (e.__cause__ or e)
            if target not in resolved:
                resolved.append(target)
        return resolved
