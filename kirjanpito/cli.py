"""CLI entry point for kirjanpito."""

import sys
import tomllib
from pathlib import Path

import typer
from rich.console import Console

from kirjanpito import __version__
from kirjanpito.commands.admin import init_command
from kirjanpito.commands.report import report_command
from kirjanpito.config import build_report_config, load_config
from kirjanpito.log import configure_logging

app = typer.Typer(
    name="kirjanpito",
    help="Bookkeeping ledger from dated receipt PDF filenames",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"kirjanpito {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", help="Show version and exit", callback=version_callback, is_eager=True
    ),
) -> None:
    """Bookkeeping ledger from dated receipt PDF filenames."""
    pass


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Create a default configuration file."""
    init_command(force)


@app.command()
def report(
    path: Path = typer.Option(..., "--path", help="Directory to scan for PDFs"),
    output: Path = typer.Option(None, "--output", "-o", help="HTML output file (default: <path>/index.html)"),
    output_format: str = typer.Option(None, "--format", help="Output format: 'html', 'dump' or 'summary'"),
    variant: str = typer.Option(None, "--variant", help="Report layout: 'basic' or 'vat'"),
    title: str = typer.Option(None, "--title", help="HTML document title"),
    strict: bool = typer.Option(False, "--strict", help="Exit non-zero if any record fails to parse"),
    config_file: Path = typer.Option(None, "--config", help="Config file (default: ~/.config/kirjanpito/config.toml)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Scan a directory of receipt PDFs and render the ledger."""
    configure_logging(verbose)

    try:
        settings = load_config(config_file)
        config = build_report_config(
            path,
            settings,
            output=output,
            output_format=output_format,
            variant=variant,
            title=title,
            strict=strict,
        )
    except (OSError, tomllib.TOMLDecodeError, ValueError) as e:
        console.print(f"[red]Configuration error: {e}[/red]", style="bold")
        sys.exit(1)

    report_command(config)


if __name__ == "__main__":
    app()
