"""
Version policy — which jOOQ edition and version this build uses.

Explicit settings win; otherwise the built-in defaults apply. The
selection is computed on first use and then never changes.
"""

from __future__ import annotations

import logging
import re

from jooqbuild.core.errors import VersionResolutionError
from jooqbuild.core.models.edition import JooqEdition
from jooqbuild.core.models.selection import VersionSelection
from jooqbuild.core.models.settings import BuildSettings

logger = logging.getLogger(__name__)

DEFAULT_EDITION = JooqEdition.OSS
DEFAULT_VERSION = "3.18.7"

# 3.18, 3.18.7, 3.19.0-SNAPSHOT ...
_VERSION_RE = re.compile(r"^\d+\.\d+(?:\.\d+)?(?:[-.][0-9A-Za-z]+)*$")


class VersionPolicy:
    """Resolves the build's VersionSelection from the build settings."""

    def __init__(self, settings: BuildSettings):
        self._settings = settings
        self._selection: VersionSelection | None = None

    def selection(self) -> VersionSelection:
        """The effective (edition, version) pair.

        Raises:
            VersionResolutionError: If the configured version is not a
                usable version string.
        """
        if self._selection is None:
            edition = self._settings.edition or DEFAULT_EDITION
            version = DEFAULT_VERSION if self._settings.version is None else self._settings.version.strip()
            if not _VERSION_RE.match(version):
                raise VersionResolutionError(f"Invalid jOOQ version: {self._settings.version!r}")
            self._selection = VersionSelection(edition=edition, version=version)
            logger.debug("jOOQ version selected: %s", self._selection)
        return self._selection
