"""Adapters — ways of running the jOOQ generator.

Public re-exports for convenient access.
"""

from jooqbuild.adapters.base import GeneratorLauncher, LaunchContext
from jooqbuild.adapters.java import JavaGeneratorLauncher, detect_java_version
from jooqbuild.adapters.maven import LocalMavenRepository
from jooqbuild.adapters.mock import MockGeneratorLauncher

__all__ = [
    "GeneratorLauncher",
    "JavaGeneratorLauncher",
    "LaunchContext",
    "LocalMavenRepository",
    "MockGeneratorLauncher",
    "detect_java_version",
]
