"""
Build settings — the build-wide values the plugin reads.

Constructed once per build invocation and handed by reference to every
component that needs it. Frozen: nothing can change it once the build
starts configuring.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from jooqbuild.core.models.edition import JooqEdition

# Directory under <build_dir>/generated-src/ that holds generated sources
DEFAULT_DOMAIN = "jooq"


class BuildSettings(BaseModel):
    """Immutable build-wide settings."""

    model_config = ConfigDict(frozen=True)

    project_dir: Path
    build_dir: Path

    # ── Version selection (None = built-in default) ──────────────
    edition: JooqEdition | None = None
    version: str | None = None

    # ── Source wiring: True = eager (task), False = lazy (path) ──
    generate_schema_source_on_compilation: bool = True

    # ── Generator process ────────────────────────────────────────
    toolchain_version: int | None = None  # Java feature release, None = unknown
    jvm_args: tuple[str, ...] = Field(default_factory=tuple)

    domain: str = DEFAULT_DOMAIN

    @classmethod
    def for_project(cls, project_dir: Path, build_dir: str | Path = "build", **kwargs) -> BuildSettings:
        """Settings with ``build_dir`` resolved against ``project_dir``."""
        return cls(project_dir=project_dir, build_dir=project_dir / build_dir, **kwargs)

    @property
    def generated_sources_root(self) -> Path:
        return self.build_dir / "generated-src" / self.domain
