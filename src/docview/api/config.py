"""Config API endpoint.

Tells the viewer page whether to open the live reload socket and where
documents are read from.
"""

from aiohttp import web

from docview.app_keys import live_reload_enabled_key, source_key
from docview.core.documents import HttpDocumentSource


def create_config_routes() -> list[web.RouteDef]:
    return [web.get("/api/config", get_config)]


async def get_config(request: web.Request) -> web.Response:
    source = request.app[source_key]
    return web.json_response(
        {
            "liveReloadEnabled": request.app[live_reload_enabled_key],
            "documentSource": "url" if isinstance(source, HttpDocumentSource) else "directory",
        }
    )
