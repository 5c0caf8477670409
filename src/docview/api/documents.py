"""Documents API endpoint.

Fetches a catalog document, renders it and returns JSON with metadata and
HTML content. A document that cannot be fetched is reported with the fixed
error message, never with partial content.
"""

import logging
from hashlib import md5

from aiohttp import web

from docview.app_keys import catalog_key, renderer_key, source_key
from docview.core.viewer import ERROR_HTML, ERROR_MESSAGE, fetch_and_render
from docview.errors import DocumentUnavailableError, UnknownDocumentError

logger = logging.getLogger(__name__)


def create_documents_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/documents/{key}", get_document),
    ]


async def get_document(request: web.Request) -> web.Response:
    key = request.match_info["key"]
    catalog = request.app[catalog_key]

    try:
        result = await fetch_and_render(
            key,
            catalog=catalog,
            source=request.app[source_key],
            renderer=request.app[renderer_key],
        )
    except UnknownDocumentError:
        return web.json_response(
            {"error": "Document not found", "key": key},
            status=404,
        )
    except DocumentUnavailableError as e:
        logger.warning(f"Failed to load document: {e}")
        return web.json_response(
            {"error": ERROR_MESSAGE, "key": key, "content": ERROR_HTML},
            status=502,
        )

    etag = _compute_etag(result.html)

    if_none_match = request.headers.get("If-None-Match")
    if if_none_match == etag:
        return web.Response(status=304)

    entry = catalog.get(key)
    response_data = {
        "meta": {
            "key": key,
            "title": result.title or entry.title,
            "path": entry.filename,
        },
        "content": result.html,
    }

    return web.json_response(
        response_data,
        headers={
            "ETag": etag,
            "Cache-Control": "private, max-age=60",
        },
    )


def _compute_etag(content: str) -> str:
    # First 16 hex chars (64 bits) are enough for cache validation
    content_hash = md5(content.encode("utf-8"), usedforsecurity=False).hexdigest()[:16]
    return f'"{content_hash}"'
