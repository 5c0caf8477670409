"""CLI interface for Docview.

Command-line tool for serving and rendering documentation.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import TextIO

import click

from docview.config import Config
from docview.core.markdown import render_markdown
from docview.errors import UnknownDocumentError

_config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Path to configuration file (default: auto-discover docview.toml)",
)
_source_dir_option = click.option(
    "--source-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Documentation source directory (overrides config)",
)
_base_url_option = click.option(
    "--base-url",
    default=None,
    help="Fetch documents relative to this URL instead of a directory (overrides config)",
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_config(config_path: Path | None) -> Config:
    try:
        return Config.load(config_path)
    except ValueError as e:
        click.echo(click.style(f"Error: invalid configuration: {e}", fg="red"), err=True)
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """Docview - a small documentation viewer."""
    _configure_logging(verbose)


@cli.command()
@_config_option
@_source_dir_option
@_base_url_option
@click.option(
    "--cache-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Cache directory (overrides config)",
)
@click.option("--host", default=None, help="Host to bind to (overrides config)")
@click.option("--port", "-p", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--live-reload/--no-live-reload",
    default=None,
    help="Enable/disable live reload (overrides config, default: enabled)",
)
@click.option(
    "--cache/--no-cache",
    default=None,
    help="Enable/disable caching (overrides config, default: enabled)",
)
def serve(
    config_path: Path | None,
    source_dir: Path | None,
    base_url: str | None,
    cache_dir: Path | None,
    host: str | None,
    port: int | None,
    live_reload: bool | None,
    cache: bool | None,
) -> None:
    """Start the documentation server."""
    from docview.server import run_server

    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        source_dir=source_dir,
        base_url=base_url,
        cache_dir=cache_dir,
        cache_enabled=cache,
        live_reload_enabled=live_reload,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    if config.docs.base_url:
        click.echo(f"Document base URL: {config.docs.base_url}")
    else:
        click.echo(f"Source directory: {config.docs.source_dir}")
    click.echo(f"Documents: {', '.join(config.documents.keys())}")
    if config.docs.cache_enabled:
        click.echo(f"Cache directory: {config.docs.cache_dir}")
    else:
        click.echo("Cache: disabled")
    if config.live_reload.enabled and not config.docs.base_url:
        click.echo("Live reload: enabled")
    else:
        click.echo("Live reload: disabled")

    run_server(config)


@cli.command()
@click.argument("markdown_file", type=click.File("r", encoding="utf-8"))
def render(markdown_file: TextIO) -> None:
    """Render a markdown file (or - for stdin) to HTML."""
    click.echo(render_markdown(markdown_file.read()))


@cli.command()
@click.argument("key", required=False)
@_config_option
@_source_dir_option
@_base_url_option
def show(
    key: str | None,
    config_path: Path | None,
    source_dir: Path | None,
    base_url: str | None,
) -> None:
    """Load a catalog document and print its rendered HTML.

    KEY defaults to the first document of the catalog.
    """
    from docview.core.cache import NullCache
    from docview.core.renderer import DocumentRenderer
    from docview.core.viewer import ViewStatus, Viewer
    from docview.server import create_source

    config = _load_config(config_path).with_overrides(source_dir=source_dir, base_url=base_url)
    viewer = Viewer(config.documents, create_source(config), DocumentRenderer(NullCache()))

    try:
        state = asyncio.run(viewer.navigate(key) if key else viewer.start())
    except UnknownDocumentError as e:
        choices = ", ".join(config.documents.keys())
        click.echo(click.style(f"Error: {e} (choose from: {choices})", fg="red"), err=True)
        sys.exit(1)

    if state.status is ViewStatus.ERROR:
        click.echo(click.style(state.html, fg="red"), err=True)
        sys.exit(1)

    click.echo(state.html)
