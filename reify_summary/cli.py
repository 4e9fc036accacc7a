"""Typer-based CLI for printing reify summaries."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__, config
from .config_manager import build_render_config, save_output_config
from .loader import BundleError, load_bundle
from .output import ConsoleSink, reify_output

console = Console()

app = typer.Typer(
    help="📦 reify-summary — print what an install changed.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"reify-summary v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show diagnostic logging."),
):
    """reify-summary: summarize package tree changes after install or audit."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _render_config(**overrides):
    try:
        return build_render_config(**overrides)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command("render")
def render(
    bundle_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Path to a result bundle JSON file."),
    json_output: Optional[bool] = typer.Option(None, "--json/--no-json", help="Print a JSON summary."),
    fund: Optional[bool] = typer.Option(None, "--fund/--no-fund", help="Mention packages looking for funding."),
    loglevel: Optional[str] = typer.Option(None, "--loglevel", "-l", help="Log level; 'silent' prints nothing."),
    command: Optional[str] = typer.Option(None, "--command", "-c", help="Override the bundle's command name."),
):
    """Print the summary for a finished install/audit bundle."""
    render_config = _render_config(json=json_output, fund=fund, loglevel=loglevel)
    try:
        bundle = load_bundle(bundle_path)
    except BundleError as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(code=1)
    if command:
        bundle.command = command
    reify_output(bundle, render_config, ConsoleSink(console))


@app.command("show-config")
def show_config():
    """Show the effective output configuration."""
    render_config = _render_config()
    table = Table(title="Output configuration", show_header=True, header_style="bold cyan")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("json", str(render_config.json).lower())
    table.add_row("fund", str(render_config.fund).lower())
    table.add_row("loglevel", str(render_config.loglevel))
    table.add_row("tool_name", render_config.tool_name)
    table.add_row("config file", str(config.CONFIG_FILE))
    console.print(table)


@app.command("set-output")
def set_output(
    json_output: Optional[bool] = typer.Option(None, "--json/--no-json", help="Default to JSON output."),
    fund: Optional[bool] = typer.Option(None, "--fund/--no-fund", help="Default funding nudge."),
    loglevel: Optional[str] = typer.Option(None, "--loglevel", "-l", help="Default log level."),
):
    """Persist output defaults to the config file."""
    if json_output is None and fund is None and loglevel is None:
        raise typer.BadParameter("Nothing to set. Pass --json/--no-json, --fund/--no-fund or --loglevel.")
    try:
        saved = save_output_config(json=json_output, fund=fund, loglevel=loglevel)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if not saved:
        typer.echo(f"❌ Could not write {config.CONFIG_FILE}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"✅ Saved output defaults to {config.CONFIG_FILE}")
