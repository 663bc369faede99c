"""
Domain models — Pydantic types for jooq-build.

    from jooqbuild.core.models import BuildSettings, GenerationProfile, Coordinate
"""

from jooqbuild.core.models.coordinates import Coordinate
from jooqbuild.core.models.edition import JooqEdition
from jooqbuild.core.models.profile import GenerationProfile, task_name_for
from jooqbuild.core.models.receipt import TaskReceipt
from jooqbuild.core.models.selection import VersionSelection
from jooqbuild.core.models.settings import BuildSettings
from jooqbuild.core.models.state import BuildState, TaskState

__all__ = [
    "BuildSettings",
    "BuildState",
    "Coordinate",
    "GenerationProfile",
    "JooqEdition",
    "TaskReceipt",
    "TaskState",
    "VersionSelection",
    "task_name_for",
]
