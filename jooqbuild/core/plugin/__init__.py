"""
The jOOQ plugin — registers one generation task per profile and keeps
every jOOQ dependency of the build on a single version.

    from jooqbuild.core.plugin import JooqPlugin
"""

from jooqbuild.core.plugin.jooq_plugin import JooqBuild, JooqPlugin

__all__ = ["JooqBuild", "JooqPlugin"]
