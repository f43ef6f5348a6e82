"""Command-line interface for pagemeta."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Dict, Optional

import click
import structlog
from rich.console import Console
from rich.table import Table

from pagemeta import __version__
from pagemeta.client import PageMeta, PageResult
from pagemeta.config import Config, load_config
from pagemeta.errors import PageMetaError
from pagemeta.observability import configure_logging

console = Console()
logger = structlog.get_logger(__name__)


def _load(ctx: click.Context) -> Config:
    config = load_config(ctx.obj.get("config_path"))
    config.monitoring.log_level = ctx.obj["log_level"]
    configure_logging(config.monitoring)
    return config


def _print_status(result: PageResult) -> None:
    console.print(f"[bold]Parsed URL:[/bold] {result.url}")
    if result.status_code:
        console.print(f"[bold]Status:[/bold] {result.status_code}")
    if result.fetcher_name:
        console.print(f"[bold]Fetcher:[/bold] {result.fetcher_name}")
    console.print(f"[bold]MIME type:[/bold] {result.mime_type or 'unknown'}")


def _print_headers(headers: Dict[str, str]) -> None:
    table = Table(title="Headers")
    table.add_column("Name", style="cyan")
    table.add_column("Value")
    for name, value in sorted(headers.items()):
        table.add_row(name, value)
    console.print(table)


def _print_result(result: PageResult, show_headers: bool, show_metadata: bool, show_html: bool) -> None:
    _print_status(result)
    if show_headers:
        _print_headers(result.headers)
    if show_metadata:
        console.print_json(json.dumps(result.metadata.to_dict(include_html=False), default=str))
    if show_html:
        # Raw output so the HTML can be piped
        click.echo(result.metadata.html)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file path")
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: str) -> None:
    """pagemeta - extract titles, authors, images and more from web pages."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else None
    ctx.obj["log_level"] = log_level


@cli.command()
@click.argument("url")
@click.option("--headers", "show_headers", is_flag=True, help="Print response headers")
@click.option("--metadata/--no-metadata", "show_metadata", default=True, help="Print extracted metadata")
@click.option("--html", "show_html", is_flag=True, help="Print the fetched HTML")
@click.pass_context
def fetch(ctx: click.Context, url: str, show_headers: bool, show_metadata: bool, show_html: bool) -> None:
    """Fetch URL and extract its metadata."""
    config = _load(ctx)
    try:
        result = PageMeta(config=config).fetch_and_parse(url)
    except PageMetaError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    _print_result(result, show_headers, show_metadata, show_html)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--url", required=True, help="URL the HTML was fetched from")
@click.option("--html", "show_html", is_flag=True, help="Print the parsed HTML")
@click.pass_context
def parse(ctx: click.Context, file: Path, url: str, show_html: bool) -> None:
    """Extract metadata from a saved HTML FILE."""
    config = _load(ctx)
    try:
        result = PageMeta(config=config).read_and_parse(file.read_bytes(), url)
    except PageMetaError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    _print_result(result, False, True, show_html)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
