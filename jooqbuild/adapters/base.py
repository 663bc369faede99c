"""
Launcher base — the contract between generation tasks and the generator.

A generation task never starts the generator itself: it builds a
LaunchContext and hands it to a launcher, which runs the generator
out-of-process and reports back with a TaskReceipt.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel, Field

from jooqbuild.core.models.coordinates import Coordinate
from jooqbuild.core.models.receipt import TaskReceipt

GENERATION_TOOL_MAIN_CLASS = "org.jooq.codegen.GenerationTool"


class LaunchContext(BaseModel):
    """Everything a launcher needs to run the generator once."""

    task_name: str
    config_file: Path
    output_directory: Path
    working_dir: Path
    classpath: list[Coordinate] = Field(default_factory=list)
    jvm_args: list[str] = Field(default_factory=list)
    main_class: str = GENERATION_TOOL_MAIN_CLASS


class GeneratorLauncher(ABC):
    """Abstract base class for generator launchers.

    Launchers NEVER raise — every failure, including failure to start
    the process, comes back as a receipt with status='failed'.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The launcher identifier (e.g., 'java', 'mock')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the launcher can start a process at all."""

    @abstractmethod
    def launch(self, context: LaunchContext) -> TaskReceipt:
        """Run the generator and return a receipt."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
