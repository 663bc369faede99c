"""
Config check use case — validate build.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from jooqbuild.core.errors import JooqBuildError
from jooqbuild.core.use_cases.configure import ConfiguredBuild, configure_build


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    build: ConfiguredBuild | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        selection = None
        if self.build is not None:
            selection = self.build.jooq.policy.selection()
        return {
            "valid": self.valid,
            "config_path": str(self.build.config_path) if self.build else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "edition": selection.edition.value if selection else None,
            "version": selection.version if selection else None,
            "configurations": self.build.jooq.profiles.names() if self.build else [],
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Configure the build without running anything and report issues."""
    result = ConfigCheckResult()

    try:
        build = configure_build(config_path)
        build.jooq.policy.selection()
    except JooqBuildError as e:
        result.errors.append(str(e))
        return result

    result.build = build
    declared = build.build_file.jooq

    if not declared.configurations:
        result.warnings.append("No jOOQ configurations defined. Nothing will be generated.")

    if not declared.generate_schema_source_on_compilation:
        result.warnings.append(
            "generate_schema_source_on_compilation is off: compiling will not run generation first."
        )

    for profile in build.jooq.profiles:
        if not profile.configuration.get("jdbc") and not profile.configuration.get("generator"):
            result.warnings.append(f"jOOQ configuration '{profile.name}' has no jdbc or generator settings.")

    result.valid = not result.errors
    return result
