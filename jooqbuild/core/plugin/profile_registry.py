"""
Profile registry — the named collection of generation profiles.

``register_if_absent`` is the primitive: it looks a profile up or
creates it and tells the caller which happened. ``register`` builds on
it and fires the registration callbacks for new profiles only, before
returning.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator

from pydantic import ValidationError

from jooqbuild.core.errors import ConfigurationError
from jooqbuild.core.models.profile import GenerationProfile, task_name_for

logger = logging.getLogger(__name__)

RegistrationCallback = Callable[[GenerationProfile], None]
ProfileConfigurer = Callable[[GenerationProfile], None]

# Profile names end up in task names and directory names
_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


def validate_profile_name(name: str) -> None:
    """Raise ConfigurationError unless ``name`` is a usable profile name."""
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError("profile name must not be empty", profile=str(name))
    if not _NAME_RE.match(name):
        raise ConfigurationError(
            "profile name must start with a letter and contain only letters, digits, '_' or '-'",
            profile=name,
        )


class ProfileRegistry:
    """Generation profiles of one build, unique by name."""

    def __init__(self) -> None:
        self._profiles: dict[str, GenerationProfile] = {}
        self._callbacks: list[RegistrationCallback] = []

    def register_if_absent(
        self,
        name: str,
        configure: ProfileConfigurer | None = None,
    ) -> tuple[GenerationProfile, bool]:
        """Look up or create a profile.

        ``configure`` is applied to the profile either way.

        Returns:
            (profile, was_created)

        Raises:
            ConfigurationError: If the name is invalid, its task name is
                taken by another profile, or ``configure`` assigns an
                invalid value.
        """
        validate_profile_name(name)
        profile = self._profiles.get(name)
        created = profile is None
        if created:
            self._check_task_name_free(name)
            profile = GenerationProfile(name=name)

        if configure is not None:
            try:
                configure(profile)
            except ValidationError as e:
                raise ConfigurationError(f"invalid setting: {e}", profile=name) from e

        # only a fully configured profile is stored
        if created:
            self._profiles[name] = profile
        return profile, created

    def _check_task_name_free(self, name: str) -> None:
        task_name = task_name_for(name)
        for other in self._profiles.values():
            if other.task_name == task_name:
                raise ConfigurationError(
                    f"task name '{task_name}' is already used by jOOQ configuration '{other.name}'",
                    profile=name,
                )

    def register(self, name: str, configure: ProfileConfigurer | None = None) -> GenerationProfile:
        """Look up or create a profile, firing callbacks on creation.

        If a callback raises, the new profile is dropped again so a later
        ``register`` of the same name starts from scratch.
        """
        profile, created = self.register_if_absent(name, configure)
        if created:
            logger.debug("Registered jOOQ configuration '%s'", name)
            try:
                for callback in self._callbacks:
                    callback(profile)
            except Exception:
                del self._profiles[name]
                raise
        return profile

    def on_each_registration(self, callback: RegistrationCallback) -> None:
        """Run ``callback`` for every profile, existing ones included."""
        self._callbacks.append(callback)
        for profile in list(self._profiles.values()):
            callback(profile)

    def get(self, name: str) -> GenerationProfile | None:
        return self._profiles.get(name)

    def names(self) -> list[str]:
        return list(self._profiles)

    def __contains__(self, name: object) -> bool:
        return name in self._profiles

    def __iter__(self) -> Iterator[GenerationProfile]:
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)
