"""Navigation API endpoint.

Lists the catalog entries offered as navigation options.
"""

from aiohttp import web

from docview.app_keys import catalog_key


def create_navigation_routes() -> list[web.RouteDef]:
    return [web.get("/api/navigation", get_navigation)]


async def get_navigation(request: web.Request) -> web.Response:
    catalog = request.app[catalog_key]
    return web.json_response(
        {
            "items": [entry.to_dict() for entry in catalog],
            "initial": catalog.initial,
        }
    )
