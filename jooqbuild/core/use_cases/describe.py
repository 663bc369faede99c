"""
Describe use cases — what the configured build looks like.
"""

from __future__ import annotations

from jooqbuild.core.plugin.dependency_rewriter import verify_family_consistency
from jooqbuild.core.plugin.runtime_classpath import RUNTIME_SET_NAME
from jooqbuild.core.use_cases.configure import ConfiguredBuild


def describe_tasks(build: ConfiguredBuild) -> list[dict]:
    """One entry per generation task."""
    rows = []
    for task in build.jooq.tasks():
        rows.append({
            "task": task.name,
            "group": task.group,
            "description": task.description,
            "configuration": task.profile.name,
            "source_set": task.profile.source_set,
            "output_directory": str(task.output_directory),
        })
    return rows


def resolve_dependency_set(build: ConfiguredBuild, name: str = RUNTIME_SET_NAME) -> list[str]:
    """Resolved coordinates of a dependency set, jOOQ versions enforced.

    Raises:
        KeyError: If the dependency set does not exist.
        DependencyResolutionError, VersionResolutionError: On failure.
    """
    dependency_set = build.project.dependency_sets.get(name)
    if dependency_set is None:
        raise KeyError(name)
    resolved = build.project.resolution.resolve(dependency_set)
    verify_family_consistency(resolved)
    return [c.notation for c in resolved]


def describe_sources(build: ConfiguredBuild) -> dict[str, dict]:
    """Source directories and build dependencies per source set."""
    result = {}
    for source_set in build.project.source_sets:
        result[source_set.name] = {
            "directories": [str(d) for d in source_set.java.directories()],
            "build_dependencies": [t.name for t in source_set.java.build_dependencies()],
        }
    return result

