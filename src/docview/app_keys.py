"""Application keys for type-safe app configuration access."""

from aiohttp import web

from docview.core.documents import DocumentCatalog, DocumentSource
from docview.core.renderer import DocumentRenderer

catalog_key = web.AppKey("catalog", DocumentCatalog)
source_key = web.AppKey("source", DocumentSource)
renderer_key = web.AppKey("renderer", DocumentRenderer)
live_reload_enabled_key = web.AppKey("live_reload_enabled", bool)
