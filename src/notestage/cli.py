"""CLI interface for Notestage.

Serve notes over HTTP, inspect key resolution and render single notes.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

import click
import httpx

from notestage.config import Config
from notestage.core.keys import build_keys
from notestage.core.metadata import generate_metadata
from notestage.core.notes import Note


@click.group()
def cli() -> None:
    """Notestage - domain-aware notes, rendered."""


config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover notestage.toml)",
)


@cli.command()
@config_option
@click.option(
    "--content-dir",
    "-d",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Local content directory (overrides config, selects local storage)",
)
@click.option("--mirror-url", default=None, help="HTTP mirror base URL (overrides config)")
@click.option("--fallback-domain", default=None, help="Domain for local and preview hosts (overrides config)")
@click.option("--host", default=None, help="Host to bind to (overrides config)")
@click.option("--port", "-p", type=int, default=None, help="Port to bind to (overrides config)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def serve(
    config_path: Path | None,
    content_dir: Path | None,
    mirror_url: str | None,
    fallback_domain: str | None,
    host: str | None,
    port: int | None,
    verbose: bool,
) -> None:
    """Start the notes server."""
    from notestage.server import run_server

    _configure_logging(verbose)
    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        content_dir=content_dir,
        mirror_url=mirror_url,
        fallback_domain=fallback_domain,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    if config.storage.backend == "local":
        click.echo(f"Content directory: {config.storage.root}")
    else:
        click.echo(f"Content store: {config.storage.base_url}")
    if config.mirror.base_url:
        click.echo(f"Mirror: {config.mirror.base_url}")
    else:
        click.echo("Mirror: disabled")
    click.echo(f"Fallback domain: {config.site.fallback_domain}")

    run_server(config)


@cli.command()
@click.argument("slug")
@click.option("--host", "request_host", default="localhost", help="Request host to resolve the domain from")
@config_option
def keys(slug: str, request_host: str, config_path: Path | None) -> None:
    """Print the storage keys probed for SLUG, in priority order."""
    from notestage.core.domains import resolve_domain

    config = _load_config(config_path)
    domain = resolve_domain(request_host, config.site.fallback_domain, config.site.preview_suffixes)
    try:
        candidates = build_keys(slug, domain)
    except ValueError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(f"Domain: {domain}")
    for key in candidates:
        click.echo(key)


@cli.command()
@click.argument("slug")
@click.option("--host", "request_host", default="localhost", help="Request host to resolve the domain from")
@click.option("--meta", is_flag=True, help="Print page metadata as JSON instead of HTML")
@config_option
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def render(
    slug: str,
    request_host: str,
    meta: bool,
    config_path: Path | None,
    verbose: bool,
) -> None:
    """Resolve SLUG and print its rendered HTML."""
    _configure_logging(verbose, quiet_level=logging.WARNING)
    config = _load_config(config_path)

    try:
        note = asyncio.run(_load_note(config, slug, request_host))
    except ValueError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    if note is None:
        click.echo(click.style(f"Note not found: {slug}", fg="red"), err=True)
        sys.exit(1)

    if meta:
        metadata = generate_metadata(note.front_matter, slug, config.site.name)
        click.echo(json.dumps(metadata.to_dict(), indent=2, ensure_ascii=False))
    else:
        click.echo(note.html)


async def _load_note(config: Config, slug: str, request_host: str) -> Note | None:
    from notestage.server import create_loader

    async with httpx.AsyncClient(timeout=config.mirror.timeout, follow_redirects=True) as client:
        loader = create_loader(config, client)
        return await loader.load_note(slug, loader.resolve_domain(request_host))


def _load_config(config_path: Path | None) -> Config:
    try:
        return Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)


def _configure_logging(verbose: bool, quiet_level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else quiet_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    cli()
