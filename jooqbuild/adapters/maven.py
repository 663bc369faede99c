"""
Local Maven repository — maps resolved coordinates to jar files.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from jooqbuild.core.models.coordinates import Coordinate

# Overrides the repository root (default: ~/.m2/repository)
MAVEN_REPO_ENV = "JOOQBUILD_MAVEN_REPO"


def default_repository_root() -> Path:
    override = os.environ.get(MAVEN_REPO_ENV)
    if override:
        return Path(override)
    return Path.home() / ".m2" / "repository"


class LocalMavenRepository:
    """Read-only view of a local Maven repository layout."""

    def __init__(self, root: Path | None = None):
        self.root = root or default_repository_root()

    def artifact_path(self, coordinate: Coordinate) -> Path:
        """Where the jar for a versioned coordinate lives.

        Raises:
            ValueError: If the coordinate has no version.
        """
        if coordinate.version is None:
            raise ValueError(f"Cannot locate unversioned artifact {coordinate}")
        return (
            self.root.joinpath(*coordinate.group.split("."))
            / coordinate.name
            / coordinate.version
            / f"{coordinate.name}-{coordinate.version}.jar"
        )

    def locate_all(self, coordinates: Iterable[Coordinate]) -> tuple[list[Path], list[Coordinate]]:
        """Split coordinates into (jar paths found, coordinates missing)."""
        found: list[Path] = []
        missing: list[Coordinate] = []
        for coordinate in coordinates:
            path = self.artifact_path(coordinate)
            if path.is_file():
                found.append(path)
            else:
                missing.append(coordinate)
        return found, missing
