"""aiohttp server for Notestage.

Application factory, store wiring and route registration.
"""

import logging

import httpx
from aiohttp import web

from notestage.api.notes import create_notes_routes
from notestage.app_keys import http_client_key, loader_key, site_name_key
from notestage.config import Config, StorageConfig
from notestage.core.notes import NoteLoader
from notestage.core.renderer import MarkdownRenderer
from notestage.core.storage import ContentStore, HttpStore, LocalStore

logger = logging.getLogger(__name__)


def create_store(storage: StorageConfig, client: httpx.AsyncClient) -> ContentStore:
    """Create the primary content store selected by configuration.

    Args:
        storage: Storage configuration
        client: Shared HTTP client for the http backend

    Returns:
        LocalStore or HttpStore
    """
    if storage.backend == "http":
        if not storage.base_url:
            raise ValueError("storage.base_url is required for the http backend")
        return HttpStore(client, storage.base_url)
    return LocalStore(storage.root)


def create_loader(config: Config, client: httpx.AsyncClient) -> NoteLoader:
    """Create a NoteLoader for the configured site."""
    mirror = HttpStore(client, config.mirror.base_url) if config.mirror.base_url else None
    return NoteLoader(
        MarkdownRenderer(),
        fallback_domain=config.site.fallback_domain,
        store=create_store(config.storage, client),
        mirror=mirror,
        preview_suffixes=config.site.preview_suffixes,
    )


def create_app(config: Config, *, client: httpx.AsyncClient | None = None) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        client: HTTP client for remote stores. When omitted, one is created
                and closed together with the application.

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=config.mirror.timeout, follow_redirects=True)

    app[http_client_key] = client
    app[loader_key] = create_loader(config, client)
    app[site_name_key] = config.site.name

    if owns_client:
        app.on_cleanup.append(_close_http_client)

    app.router.add_routes(create_notes_routes())

    return app


async def _close_http_client(app: web.Application) -> None:
    """Close the shared HTTP client on application cleanup."""
    await app[http_client_key].aclose()


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    logger.info(f"Serving notes for {config.site.fallback_domain} on {config.server.host}:{config.server.port}")
    web.run_app(app, host=config.server.host, port=config.server.port)
