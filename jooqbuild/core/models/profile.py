"""
Generation profile — one named jOOQ configuration.

A profile is what the user declares: the generator configuration
(passed through to the generator untouched), the source set that
compiles the generated code, and optionally where to put it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def task_name_for(profile_name: str) -> str:
    """Name of the generation task for a profile: ``generate<Name>Sources``."""
    return f"generate{profile_name[:1].upper()}{profile_name[1:]}Sources"


class GenerationProfile(BaseModel):
    """A user-declared jOOQ generation profile.

    The generation task holds a reference to the profile and reads it
    when it runs, so edits made before execution are honored.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str
    source_set: str = "main"
    configuration: dict[str, Any] = Field(default_factory=dict)
    output_directory: Path | None = None  # None until defaulted or overridden

    @property
    def task_name(self) -> str:
        return task_name_for(self.name)
