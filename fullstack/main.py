"""
Fullstack aggregator — CLI entrypoint.

Usage:
    fullstack --help
    fullstack run
    fullstack run publish
    fullstack tree
    fullstack config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from fullstack import __version__
from fullstack.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="fullstack")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to fullstack.yml or its directory (default: current directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Fullstack — build, clean and publish whole unit hierarchies."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )


@cli.command()
@click.argument("operations", nargs=-1)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def run(ctx: click.Context, operations: tuple[str, ...], as_json: bool) -> None:
    """Run operations on the unit and everything beneath it.

    Without OPERATIONS, runs the unit's default operations.

    Examples:

        fullstack run

        fullstack run build publish

        fullstack -c path/to/domain run clean
    """
    from fullstack.core.use_cases.run import run_operations

    result = run_operations(
        operations=list(operations) if operations else None,
        config_path=ctx.obj.get("config_path"),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error or (result.report and not result.report.all_ok):
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    report = result.report
    assert report is not None
    assert result.root is not None
    quiet = ctx.obj.get("quiet", False)

    if not quiet:
        click.secho(
            f"\n⚡ {' '.join(result.operations)} — {result.root.identity}",
            fg="cyan",
            bold=True,
        )
        click.echo()
        for receipt in report.receipts:
            timing = f" ({receipt.duration_ms}ms)" if receipt.duration_ms else ""
            if receipt.ok:
                click.secho(f"   ✓ {receipt.path}", fg="green", nl=False)
                click.echo(timing)
            elif receipt.failed:
                click.secho(f"   ✗ {receipt.path}", fg="red", nl=False)
                click.echo(timing)
            else:
                click.secho(f"   ⊘ {receipt.path}", fg="yellow")

    if not report.all_ok:
        click.echo()
        click.secho("❌ FAILED", fg="red", bold=True)
        if report.error:
            for line in report.error.split("\n")[:5]:
                click.echo(f"   │ {line}")
        click.echo()
        sys.exit(1)

    if not quiet:
        click.echo()
        click.secho(f"   Result: {report.succeeded}/{report.total} succeeded", fg="green", bold=True)
        click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def tree(ctx: click.Context, as_json: bool) -> None:
    """Show the configured hierarchy with its final group and version."""
    from fullstack.core.use_cases.run import evaluate_hierarchy

    evaluation = evaluate_hierarchy(ctx.obj.get("config_path"))

    if evaluation.error:
        if as_json:
            click.echo(json.dumps({"error": evaluation.error}, indent=2))
        else:
            click.secho(f"❌ {evaluation.error}", fg="red")
        sys.exit(1)

    root = evaluation.root
    graph = evaluation.graph
    assert root is not None and graph is not None

    def describe(unit) -> dict:
        return {
            "identity": unit.identity,
            "profile": unit.profile,
            "group": unit.group,
            "version": unit.version,
            "path": str(unit.root_path),
            "operations": graph.operation_names(unit),
            "defaults": graph.default_operations(unit),
            "children": [describe(child) for child in unit.children],
        }

    if as_json:
        click.echo(json.dumps(describe(root), indent=2))
        return

    def show(unit, depth: int) -> None:
        indent = "   " + "  " * depth
        profile = f" [{unit.profile}]" if unit.profile else ""
        click.secho(f"{indent}• {unit.identity}", fg="cyan" if depth == 0 else "white", nl=False)
        click.echo(f"{profile}  {unit.group or '-'}:{unit.version}")
        for child in unit.children:
            show(child, depth + 1)

    click.echo()
    show(root, 0)
    click.echo()


@cli.group()
def config() -> None:
    """Unit configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate the fullstack.yml hierarchy."""
    from fullstack.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.root is not None
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Root: {result.root.identity}")
        click.echo(f"   Units: {sum(1 for _ in result.root.walk())}")
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
        click.echo()
        sys.exit(1)

    click.echo()


if __name__ == "__main__":
    cli()
