"""
Output defaulting — where generated sources go unless the user says otherwise.

    <build_dir>/generated-src/<domain>/<profile name>
"""

from __future__ import annotations

import logging
from pathlib import Path

from jooqbuild.core.errors import ConfigurationError
from jooqbuild.core.models.profile import GenerationProfile
from jooqbuild.core.models.settings import BuildSettings

logger = logging.getLogger(__name__)


def default_output_directory(settings: BuildSettings, profile_name: str) -> Path:
    return settings.generated_sources_root / profile_name


def apply_default_output(profile: GenerationProfile, settings: BuildSettings) -> Path:
    """Set the default output directory if none was given.

    A user-supplied directory is kept as is; it is only checked.

    Raises:
        ConfigurationError: If the override points at the project
            directory itself or at an existing file.
    """
    if profile.output_directory is None:
        profile.output_directory = default_output_directory(settings, profile.name)
        logger.debug("Output directory of '%s' defaulted to %s", profile.name, profile.output_directory)
        return profile.output_directory

    override = profile.output_directory
    resolved = override if override.is_absolute() else settings.project_dir / override
    if resolved.resolve() == settings.project_dir.resolve():
        raise ConfigurationError("output directory must not be the project directory", profile=profile.name)
    if resolved.is_file():
        raise ConfigurationError(f"output directory is an existing file: {override}", profile=profile.name)
    return override
