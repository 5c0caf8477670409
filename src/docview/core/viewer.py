"""Viewer state and the fetch, render, commit pipeline.

Display state is an explicit immutable value. Every navigation produces a
new state: first a loading state for the selected key, then either the
rendered document or the fixed error message. A failed fetch never yields
partially rendered content.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import StrEnum

from docview.core.documents import DocumentCatalog, DocumentSource
from docview.core.renderer import DocumentRenderer, RenderResult
from docview.errors import DocumentUnavailableError

logger = logging.getLogger(__name__)

LOADING_HTML = '<div class="loading">Loading...</div>'
ERROR_MESSAGE = "Error loading document."
ERROR_HTML = f'<div class="loading">{ERROR_MESSAGE}</div>'


class ViewStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class ViewState:
    """What the display surface currently shows."""

    active: str | None
    html: str
    status: ViewStatus
    title: str | None = None

    @classmethod
    def initial(cls) -> ViewState:
        return cls(active=None, html="", status=ViewStatus.IDLE)


def select(state: ViewState, key: str) -> ViewState:
    """Mark a key active and show the loading indicator."""
    return replace(state, active=key, html=LOADING_HTML, status=ViewStatus.LOADING, title=None)


async def fetch_and_render(
    key: str,
    *,
    catalog: DocumentCatalog,
    source: DocumentSource,
    renderer: DocumentRenderer,
) -> RenderResult:
    """Fetch a document and render it.

    Args:
        key: Document catalog key
        catalog: Catalog to resolve the key against
        source: Source to fetch raw text from
        renderer: Renderer producing HTML

    Returns:
        RenderResult for the document

    Raises:
        UnknownDocumentError: If key is not in the catalog
        DocumentUnavailableError: If the document could not be fetched
    """
    entry = catalog.get(key)
    text = await source.fetch(entry)
    return renderer.render(key, text)


async def load_document(
    state: ViewState,
    *,
    catalog: DocumentCatalog,
    source: DocumentSource,
    renderer: DocumentRenderer,
) -> ViewState:
    """Run the fetch, render, commit pipeline for the selected document.

    The returned state is committed only as a whole: either the rendered
    document or the fixed error message.

    Args:
        state: State produced by select(), naming the document to load
        catalog: Catalog to resolve the key against
        source: Source to fetch raw text from
        renderer: Renderer producing HTML

    Returns:
        The ready or error state for the selected document

    Raises:
        ValueError: If no document is selected
        UnknownDocumentError: If the selected key is not in the catalog
    """
    key = state.active
    if key is None:
        raise ValueError("No document selected")
    catalog.get(key)
    try:
        result = await fetch_and_render(
            key,
            catalog=catalog,
            source=source,
            renderer=renderer,
        )
    except DocumentUnavailableError as e:
        logger.warning(f"Failed to load document: {e}")
        return replace(state, html=ERROR_HTML, status=ViewStatus.ERROR)

    return replace(state, html=result.html, status=ViewStatus.READY, title=result.title)


class Viewer:
    """Holds the committed view state for one viewing session.

    Overlapping navigations are not cancelled; whichever load completes
    last determines the final state.
    """

    def __init__(
        self,
        catalog: DocumentCatalog,
        source: DocumentSource,
        renderer: DocumentRenderer,
    ) -> None:
        self._catalog = catalog
        self._source = source
        self._renderer = renderer
        self._state = ViewState.initial()

    @property
    def state(self) -> ViewState:
        return self._state

    async def navigate(self, key: str) -> ViewState:
        """Select a document, load it and commit the result.

        Args:
            key: Document catalog key

        Returns:
            The committed state

        Raises:
            UnknownDocumentError: If key is not in the catalog
        """
        self._catalog.get(key)
        self._state = select(self._state, key)
        self._state = await load_document(
            self._state,
            catalog=self._catalog,
            source=self._source,
            renderer=self._renderer,
        )
        return self._state

    async def start(self) -> ViewState:
        """Load the catalog's initial document."""
        return await self.navigate(self._catalog.initial)
