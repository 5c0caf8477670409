"""Document rendering with caching.

Wraps the markdown converter with a render cache keyed by catalog key and
validated by source content digest.
"""

import logging
from dataclasses import dataclass

from docview.core.cache import RenderCache, compute_digest
from docview.core.markdown import extract_title, render_markdown

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """Result of rendering a document."""

    key: str
    html: str
    title: str | None
    digest: str
    from_cache: bool


class DocumentRenderer:
    """Renders document text with caching.

    Rendering itself is pure; the cache only avoids repeating it for
    unchanged source text.
    """

    def __init__(self, cache: RenderCache) -> None:
        """Initialize renderer.

        Args:
            cache: Cache instance for rendered content
        """
        self._cache = cache

    @property
    def cache(self) -> RenderCache:
        return self._cache

    def render(self, key: str, text: str) -> RenderResult:
        """Render a document.

        Args:
            key: Document catalog key, used as cache key
            text: Raw document text

        Returns:
            RenderResult with HTML and title
        """
        digest = compute_digest(text)

        cached = self._cache.get(key, digest)
        if cached is not None:
            return RenderResult(
                key=key,
                html=cached.html,
                title=cached.meta["title"],
                digest=digest,
                from_cache=True,
            )

        logger.debug(f"Rendering '{key}' ({len(text)} characters)")
        html = render_markdown(text)
        title = extract_title(text)
        self._cache.set(key, html, title, digest)

        return RenderResult(
            key=key,
            html=html,
            title=title,
            digest=digest,
            from_cache=False,
        )

    def invalidate(self, key: str) -> None:
        """Invalidate cached content for a document.

        Args:
            key: Document catalog key to invalidate
        """
        self._cache.invalidate(key)
