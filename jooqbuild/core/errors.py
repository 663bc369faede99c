"""
Error taxonomy — every failure the plugin surfaces.

All errors are fatal. Nothing in this package retries; the operator
fixes the cause and re-invokes the build.
"""

from __future__ import annotations


class JooqBuildError(Exception):
    """Base class for all jooq-build errors."""


class HostIncompatibility(JooqBuildError):
    """Raised when the host build engine is older than the minimum supported."""


class ConfigurationError(JooqBuildError):
    """Raised for invalid build configuration.

    When the problem belongs to a single generation profile, its name
    is kept on ``profile`` and prefixed to the message.
    """

    def __init__(self, message: str, profile: str | None = None):
        self.profile = profile
        if profile is not None:
            message = f"jOOQ configuration '{profile}': {message}"
        super().__init__(message)


class VersionResolutionError(JooqBuildError):
    """Raised when the jOOQ version cannot be determined or enforced."""


class GenerationFailure(JooqBuildError):
    """Raised when the generator process fails or cannot be launched."""

    def __init__(self, task: str, message: str, exit_code: int | None = None):
        self.task = task
        self.exit_code = exit_code
        super().__init__(f"Task '{task}' failed: {message}")
