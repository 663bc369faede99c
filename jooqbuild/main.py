"""
jooq-build — CLI entrypoint.

Usage:
    jooqbuild --help
    jooqbuild tasks
    jooqbuild generate
    jooqbuild config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from jooqbuild import __version__
from jooqbuild.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    console_level,
    setup_logging,
)

if TYPE_CHECKING:
    from jooqbuild.core.use_cases.configure import ConfiguredBuild
    from jooqbuild.core.use_cases.generate import GenerateResult


@click.group()
@click.version_option(version=__version__, prog_name="jooqbuild")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to build.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """jooq-build — jOOQ source generation for your build."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=console_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )


def _configure(ctx: click.Context) -> ConfiguredBuild:
    """Configure the build or exit 1 with the error."""
    from jooqbuild.core.errors import JooqBuildError
    from jooqbuild.core.use_cases.configure import configure_build

    try:
        return configure_build(
            config_path=ctx.obj.get("config_path"),
            launcher=ctx.obj.get("launcher"),
            detect_toolchain=True,
        )
    except JooqBuildError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


def _print_report(ctx: click.Context, result: GenerateResult, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    report = result.report
    assert report is not None

    for receipt in report.receipts:
        timing = f" ({receipt.duration_ms}ms)" if receipt.duration_ms else ""
        if receipt.ok:
            click.secho(f"   ✓ {receipt.task}", fg="green", nl=False)
            click.echo(timing)
            if ctx.obj.get("verbose") and receipt.output:
                for line in receipt.output.split("\n")[:10]:
                    click.echo(f"     │ {line}")
        elif receipt.failed:
            click.secho(f"   ✗ {receipt.task}", fg="red", nl=False)
            click.echo(timing)
            if receipt.error:
                for line in receipt.error.split("\n")[:5]:
                    click.echo(f"     │ {line}")
        else:
            click.secho(f"   ⊘ {receipt.task} ", fg="yellow", nl=False)
            click.echo(receipt.output)

    click.echo()
    status_color = {"ok": "green", "partial": "yellow", "failed": "red"}.get(report.status, "white")
    click.secho(
        f"   Result: {report.executed} executed, {report.up_to_date} up-to-date, {report.failed} failed",
        fg=status_color,
        bold=True,
    )
    click.echo()
    if report.failed > 0:
        sys.exit(1)


@cli.group()
def config() -> None:
    """Build configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate build.yml."""
    from jooqbuild.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.build is not None
        selection = result.build.jooq.policy.selection()
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   jOOQ: {selection.edition.value} {selection.version}")
        click.echo(f"   Configurations: {len(result.build.jooq.profiles)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    click.echo()
    if not result.valid:
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def tasks(ctx: click.Context, as_json: bool) -> None:
    """List the jOOQ generation tasks."""
    from jooqbuild.core.use_cases.describe import describe_tasks

    build = _configure(ctx)
    rows = describe_tasks(build)

    if as_json:
        click.echo(json.dumps({"tasks": rows}, indent=2))
        return

    click.secho("\njOOQ tasks", fg="cyan", bold=True)
    if not rows:
        click.echo("   (none)")
    for row in rows:
        click.secho(f"   {row['task']}", fg="white", bold=True, nl=False)
        click.echo(f" - {row['description']}")
        click.echo(f"     source set: {row['source_set']}  → {row['output_directory']}")
    click.echo()


@cli.command()
@click.argument("name", required=False, default="jooqRuntime")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def dependencies(ctx: click.Context, name: str, as_json: bool) -> None:
    """Show the resolved dependencies of a dependency set."""
    from jooqbuild.core.build.dependencies import DependencyResolutionError
    from jooqbuild.core.errors import JooqBuildError
    from jooqbuild.core.use_cases.describe import resolve_dependency_set

    build = _configure(ctx)
    try:
        resolved = resolve_dependency_set(build, name)
    except KeyError:
        click.secho(f"❌ Unknown dependency set: {name}", fg="red", err=True)
        sys.exit(1)
    except (DependencyResolutionError, JooqBuildError) as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"name": name, "dependencies": resolved}, indent=2))
        return

    click.secho(f"\n{name}", fg="cyan", bold=True)
    for notation in resolved:
        click.echo(f"   {notation}")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def sources(ctx: click.Context, as_json: bool) -> None:
    """Show source directories per source set."""
    from jooqbuild.core.use_cases.describe import describe_sources

    build = _configure(ctx)
    described = describe_sources(build)

    if as_json:
        click.echo(json.dumps(described, indent=2))
        return

    for name, info in described.items():
        click.secho(f"\n{name}", fg="cyan", bold=True)
        for directory in info["directories"]:
            click.echo(f"   {directory}")
        if info["build_dependencies"]:
            click.echo(f"   built by: {', '.join(info['build_dependencies'])}")
    click.echo()


@cli.command()
@click.argument("profiles", nargs=-1)
@click.option("--rerun", is_flag=True, help="Ignore up-to-date checks.")
@click.option("--fail-fast", is_flag=True, help="Stop at the first failed task.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    profiles: tuple[str, ...],
    rerun: bool,
    fail_fast: bool,
    as_json: bool,
) -> None:
    """Generate jOOQ sources.

    Examples:

        jooqbuild generate

        jooqbuild generate main --rerun
    """
    from jooqbuild.core.use_cases.generate import run_generation

    build = _configure(ctx)
    result = run_generation(build, list(profiles) or None, rerun=rerun, fail_fast=fail_fast)

    if not as_json and not ctx.obj.get("quiet"):
        click.secho(f"\n⚡ generate — {build.build_file.name or build.project.project_dir.name}", fg="cyan", bold=True)
    _print_report(ctx, result, as_json)


@cli.command()
@click.option("--source-set", "source_set", default="main", help="Source set to prepare.")
@click.option("--rerun", is_flag=True, help="Ignore up-to-date checks.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def build(ctx: click.Context, source_set: str, rerun: bool, as_json: bool) -> None:
    """Run the tasks a source set needs before compilation."""
    from jooqbuild.core.use_cases.generate import run_source_set_prerequisites

    configured = _configure(ctx)
    result = run_source_set_prerequisites(configured, source_set, rerun=rerun)

    if not as_json and not ctx.obj.get("quiet"):
        click.secho(f"\n⚡ build — source set '{source_set}'", fg="cyan", bold=True)
    _print_report(ctx, result, as_json)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
