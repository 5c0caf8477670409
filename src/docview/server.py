"""aiohttp server for Docview.

Application factory and route registration.
"""

import logging
from pathlib import Path

from aiohttp import web

from docview.api.config import create_config_routes
from docview.api.documents import create_documents_routes
from docview.api.navigation import create_navigation_routes
from docview.app_keys import catalog_key, live_reload_enabled_key, renderer_key, source_key
from docview.assets import get_static_dir
from docview.config import Config
from docview.core.cache import FileCache, NullCache, RenderCache
from docview.core.documents import DocumentSource, FileDocumentSource, HttpDocumentSource
from docview.core.renderer import DocumentRenderer
from docview.live import LiveReloadManager
from docview.live.reload import create_live_reload_routes

logger = logging.getLogger(__name__)

live_reload_manager_key = web.AppKey("live_reload_manager", LiveReloadManager)
static_dir_key = web.AppKey("static_dir", Path)


def create_source(config: Config) -> DocumentSource:
    """Create the document source described by the configuration.

    A configured base_url takes precedence over the source directory.
    """
    if config.docs.base_url:
        return HttpDocumentSource(config.docs.base_url, timeout=config.docs.timeout)
    return FileDocumentSource(config.docs.source_dir)


def create_cache(config: Config) -> RenderCache:
    if not config.docs.cache_enabled:
        return NullCache()
    return FileCache(config.docs.cache_dir)


async def spa_fallback(request: web.Request) -> web.FileResponse:
    """Serve index.html for every non-API route."""
    index_path = request.app[static_dir_key] / "index.html"
    return web.FileResponse(index_path)


def create_app(
    config: Config,
    *,
    source: DocumentSource | None = None,
) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        source: Document source to use instead of the configured one

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    if source is None:
        source = create_source(config)
    renderer = DocumentRenderer(create_cache(config))

    app[catalog_key] = config.documents
    app[source_key] = source
    app[renderer_key] = renderer

    # API routes (must be registered first to take precedence over SPA fallback)
    app.router.add_routes(create_navigation_routes())
    app.router.add_routes(create_documents_routes())
    app.router.add_routes(create_config_routes())

    # Live reload only makes sense when documents come from local files
    live_reload_enabled = config.live_reload.enabled and isinstance(source, FileDocumentSource)
    app[live_reload_enabled_key] = live_reload_enabled
    if live_reload_enabled:
        manager = LiveReloadManager(
            source.source_dir,
            config.documents,
            renderer=renderer,
        )
        app[live_reload_manager_key] = manager
        app.router.add_routes(create_live_reload_routes(manager))
        app.on_startup.append(_start_live_reload)
        app.on_cleanup.append(_stop_live_reload)

    static_dir = get_static_dir()
    app[static_dir_key] = static_dir
    app.router.add_static("/static", static_dir)

    # SPA fallback - must be last to catch all non-API routes
    app.router.add_get("/{path:.*}", spa_fallback)

    return app


async def _start_live_reload(app: web.Application) -> None:
    await app[live_reload_manager_key].start()


async def _stop_live_reload(app: web.Application) -> None:
    await app[live_reload_manager_key].stop()


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    logger.info(f"Serving {len(config.documents)} documents on {config.server.host}:{config.server.port}")
    web.run_app(app, host=config.server.host, port=config.server.port)
