"""WebSocket-based live reload for development mode.

Monitors catalog document files for changes and notifies connected clients
via WebSocket so the viewer reloads the affected document.
"""

from __future__ import annotations

import asyncio
import json
import logging
import weakref
from pathlib import Path

from aiohttp import WSMsgType, web
from watchfiles import Change, awatch

from docview.core.documents import DocumentCatalog
from docview.core.renderer import DocumentRenderer

logger = logging.getLogger(__name__)


class LiveReloadManager:
    """Manages WebSocket connections and file watching for live reload.

    Coordinates between file system watcher and connected WebSocket clients
    to refresh the viewer when a catalog document changes on disk.
    """

    def __init__(
        self,
        source_dir: Path,
        catalog: DocumentCatalog,
        *,
        renderer: DocumentRenderer | None = None,
    ) -> None:
        """Initialize the live reload manager.

        Args:
            source_dir: Directory to watch for changes
            catalog: Catalog whose files trigger reloads
            renderer: Renderer whose cache entries are invalidated on change
        """
        self._source_dir = source_dir
        self._catalog = catalog
        self._renderer = renderer
        self._connections: weakref.WeakSet[web.WebSocketResponse] = weakref.WeakSet()
        self._watch_task: asyncio.Task[None] | None = None

    @property
    def connection_count(self) -> int:
        """Number of connected WebSocket clients."""
        return len(self._connections)

    async def start(self) -> None:
        """Start the file watcher."""
        if self._watch_task is not None:
            return
        if not self._source_dir.is_dir():
            logger.warning(f"Live reload disabled: {self._source_dir} is not a directory")
            return
        self._watch_task = asyncio.create_task(self._watch_files())

    async def stop(self) -> None:
        """Stop the file watcher and close all connections."""
        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None

        for ws in list(self._connections):
            await ws.close()

    async def handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Handle WebSocket connection for live reload."""
        ws = web.WebSocketResponse()
        await ws.prepare(request)

        self._connections.add(ws)

        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    break
        finally:
            self._connections.discard(ws)

        return ws

    async def _watch_files(self) -> None:
        """Watch for file changes and broadcast reload events."""
        async for changes in awatch(self._source_dir):
            for change_type, path_str in changes:
                if change_type == Change.deleted:
                    continue

                key = self.key_for_path(Path(path_str))
                if key is None:
                    continue

                logger.info(f"Document '{key}' changed, reloading clients")
                if self._renderer is not None:
                    self._renderer.invalidate(key)
                await self.broadcast_reload(key)

    def key_for_path(self, path: Path) -> str | None:
        """Map a changed file to its catalog key.

        Args:
            path: Absolute path of the changed file

        Returns:
            Catalog key, or None if the file is not a catalog document
        """
        try:
            relative = path.resolve().relative_to(self._source_dir.resolve())
        except ValueError:
            return None

        entry = self._catalog.find_by_filename(relative.as_posix())
        return entry.key if entry is not None else None

    async def broadcast_reload(self, key: str) -> None:
        """Broadcast reload event to all connected clients.

        Args:
            key: Catalog key of the document that changed
        """
        if not self._connections:
            return

        message = json.dumps({"type": "reload", "key": key})

        for ws in list(self._connections):
            if ws.closed:
                continue
            try:
                await ws.send_str(message)
            except ConnectionResetError:
                # Client disconnected mid-send, will be cleaned up by WeakSet
                pass


def create_live_reload_routes(manager: LiveReloadManager) -> list[web.RouteDef]:
    """Create routes for live reload WebSocket."""
    return [web.get("/ws/live-reload", manager.handle_websocket)]
