"""
Version selection — the one jOOQ edition and version of a build.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from jooqbuild.core.models.coordinates import Coordinate
from jooqbuild.core.models.edition import JooqEdition


class VersionSelection(BaseModel):
    """Edition + version every jOOQ artifact of the build resolves to."""

    model_config = ConfigDict(frozen=True)

    edition: JooqEdition
    version: str

    @property
    def group_id(self) -> str:
        return self.edition.group_id

    @property
    def schema_version(self) -> str:
        """``major.minor.0``, the version of the codegen XSD (3.18.7 → 3.18.0)."""
        major, minor = self.version.split(".")[:2]
        return f"{major}.{minor}.0"

    def coordinate(self, name: str) -> Coordinate:
        """The coordinate of a jOOQ artifact under this selection."""
        return Coordinate(group=self.group_id, name=name, version=self.version)

    def __str__(self) -> str:
        return f"{self.edition.value} {self.version}"
