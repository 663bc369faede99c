"""
jOOQ editions — the selectable artifact families.

Every edition publishes the same artifact names (``jooq``,
``jooq-meta``, ``jooq-codegen`` ...) under its own Maven group id.
"""

from __future__ import annotations

from enum import Enum


class JooqEdition(str, Enum):
    """A jOOQ distribution, identified by its Maven group id."""

    OSS = "OSS"
    PRO = "PRO"
    PRO_JAVA_11 = "PRO_JAVA_11"
    PRO_JAVA_8 = "PRO_JAVA_8"
    PRO_JAVA_6 = "PRO_JAVA_6"
    TRIAL = "TRIAL"
    TRIAL_JAVA_11 = "TRIAL_JAVA_11"
    TRIAL_JAVA_8 = "TRIAL_JAVA_8"
    TRIAL_JAVA_6 = "TRIAL_JAVA_6"

    @property
    def group_id(self) -> str:
        return _GROUP_IDS[self]

    @classmethod
    def group_ids(cls) -> frozenset[str]:
        """All group ids any edition publishes under."""
        return frozenset(_GROUP_IDS.values())


_GROUP_IDS: dict[JooqEdition, str] = {
    JooqEdition.OSS: "org.jooq",
    JooqEdition.PRO: "org.jooq.pro",
    JooqEdition.PRO_JAVA_11: "org.jooq.pro-java-11",
    JooqEdition.PRO_JAVA_8: "org.jooq.pro-java-8",
    JooqEdition.PRO_JAVA_6: "org.jooq.pro-java-6",
    JooqEdition.TRIAL: "org.jooq.trial",
    JooqEdition.TRIAL_JAVA_11: "org.jooq.trial-java-11",
    JooqEdition.TRIAL_JAVA_8: "org.jooq.trial-java-8",
    JooqEdition.TRIAL_JAVA_6: "org.jooq.trial-java-6",
}
