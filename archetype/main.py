"""
archetype — CLI entrypoint.

Usage:
    archetype --help
    archetype generate
    archetype scan --json
    archetype config check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from archetype import __version__
from archetype.core.models.diagnostic import Diagnostic, Severity
from archetype.core.observability.logging_config import level_from_flags, setup_from_env


@click.group()
@click.version_option(version=__version__, prog_name="archetype")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to archetype.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """archetype — generate companion files from decorated classes."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_from_env(level_from_flags(debug=debug, verbose=verbose, quiet=quiet))


def _echo_diagnostic(diagnostic: Diagnostic) -> None:
    color = "red" if diagnostic.severity is Severity.ERROR else "cyan"
    click.secho(f"   {diagnostic.format()}", fg=color)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(ctx: click.Context, as_json: bool) -> None:
    """Run one generation round."""
    from archetype.core.use_cases.generate import run_generate

    result = run_generate(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    for diagnostic in result.diagnostics:
        _echo_diagnostic(diagnostic)

    if result.error:
        click.secho(f"❌ {result.error_type}: {result.error}", fg="red")
        sys.exit(1)

    report = result.report
    assert report is not None  # guaranteed when there is no error

    quiet = ctx.obj.get("quiet", False)
    if not quiet:
        for receipt in report.generated:
            click.secho(f"   ✓ {receipt.target}", fg="green")
        click.echo(
            f"   {len(report.generated)} generated, "
            f"{len(report.skipped)} skipped, {len(report.invalid)} invalid"
        )

    if report.has_errors:
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def scan(ctx: click.Context, as_json: bool) -> None:
    """List decorated declarations without generating anything."""
    from archetype.core.use_cases.generate import run_scan

    result = run_scan(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.error is None else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if not result.declarations:
        click.echo("   No decorated declarations found.")
        return

    for decl in result.declarations:
        marker = "" if decl.kind.is_class_like else click.style(f" [{decl.kind.value}]", fg="yellow")
        click.echo(f"   • {decl.qualified_name}{marker}  ({decl.template})")
        click.echo(f"       → {decl.target().relative_path}")


@cli.group()
def config() -> None:
    """Generator configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate archetype.yml."""
    from archetype.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Source roots: {', '.join(result.config.source_roots)}")
        click.echo(f"   Templates:    {', '.join(result.config.template_paths)}")
        click.echo(f"   Output:       {result.config.output_dir}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        sys.exit(1)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
