"""
Runtime classpath — the dependency set the generator runs with.

Seeded with the jOOQ code generator and with the XML-binding and
activation libraries that newer JDKs no longer ship. Users add their
JDBC drivers and generator extensions to the same set.
"""

from __future__ import annotations

import logging

from jooqbuild.core.build.dependencies import DependencySet
from jooqbuild.core.build.project import BuildProject

logger = logging.getLogger(__name__)

RUNTIME_SET_NAME = "jooqRuntime"
RUNTIME_SET_DESCRIPTION = (
    "The classpath used to invoke the jOOQ generator. "
    "Add your JDBC drivers or generator extensions here."
)

# Unversioned: the dependency rewriter supplies the selected version
CODEGEN_ARTIFACT = "org.jooq:jooq-codegen"

# Removed from the JDK in Java 9+
JAXB_SHIMS = (
    "javax.xml.bind:jaxb-api:2.3.1",
    "com.sun.xml.bind:jaxb-core:2.3.0.1",
    "com.sun.xml.bind:jaxb-impl:2.3.0.1",
)
# Removed from the JDK in Java 11+
ACTIVATION_SHIMS = ("javax.activation:activation:1.1.1",)


def compatibility_shims(toolchain_version: int | None) -> list[str]:
    """Shim libraries the toolchain lacks; all of them when it is unknown."""
    shims: list[str] = []
    if toolchain_version is None or toolchain_version >= 9:
        shims.extend(JAXB_SHIMS)
    if toolchain_version is None or toolchain_version >= 11:
        shims.extend(ACTIVATION_SHIMS)
    return shims


def provision_runtime_classpath(project: BuildProject, toolchain_version: int | None = None) -> DependencySet:
    """Create and seed the shared jooqRuntime dependency set."""
    runtime = project.dependency_sets.create(RUNTIME_SET_NAME, RUNTIME_SET_DESCRIPTION)
    runtime.add(CODEGEN_ARTIFACT)
    for shim in compatibility_shims(toolchain_version):
        runtime.add(shim)
    logger.debug("Provisioned %s with %d dependencies", RUNTIME_SET_NAME, len(runtime))
    return runtime
