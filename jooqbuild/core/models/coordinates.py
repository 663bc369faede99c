"""
Dependency coordinates — ``group:name[:version]``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Coordinate(BaseModel):
    """A Maven-style artifact coordinate.

    ``version`` is None for dependencies whose version is supplied
    later by a resolution rule (e.g. the jOOQ codegen artifact).
    """

    model_config = ConfigDict(frozen=True)

    group: str
    name: str
    version: str | None = None

    @classmethod
    def parse(cls, notation: str) -> Coordinate:
        """Parse ``group:name`` or ``group:name:version``.

        Raises:
            ValueError: If the notation does not have 2 or 3 non-empty parts.
        """
        parts = notation.strip().split(":")
        if len(parts) not in (2, 3) or not all(parts):
            raise ValueError(f"Invalid dependency notation: {notation!r}")
        return cls(group=parts[0], name=parts[1], version=parts[2] if len(parts) == 3 else None)

    @property
    def module(self) -> str:
        """``group:name`` without the version."""
        return f"{self.group}:{self.name}"

    @property
    def notation(self) -> str:
        if self.version is None:
            return self.module
        return f"{self.module}:{self.version}"

    def __str__(self) -> str:
        return self.notation
