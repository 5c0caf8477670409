"""File-based cache with content digest invalidation.

Cache structure:
    .cache/
    ├── pages/
    │   └── technical.html       # Rendered HTML
    └── meta/
        └── technical.json       # Title and source digest
"""

import hashlib
import json
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, TypedDict

logger = logging.getLogger(__name__)


class CachedMetadata(TypedDict):
    """Cached document metadata structure."""

    title: str | None
    digest: str


@dataclass
class CacheEntry:
    """Result of cache lookup."""

    html: str
    meta: CachedMetadata


def compute_digest(text: str) -> str:
    """Compute a content digest of document source text.

    Args:
        text: Raw document text

    Returns:
        SHA-256 hex digest
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class RenderCache(Protocol):
    """Storage for rendered documents keyed by catalog key."""

    def get(self, key: str, digest: str) -> CacheEntry | None: ...

    def set(self, key: str, html: str, title: str | None, digest: str) -> None: ...

    def invalidate(self, key: str) -> None: ...


class FileCache:
    """File-based cache for rendered HTML and metadata.

    Entries are valid when the cached digest matches the digest of the
    current source text, so the cache works the same for local files and
    documents fetched over HTTP.
    """

    _GITIGNORE_CONTENT = "# Ignore everything in this directory\n*\n"

    def __init__(self, cache_dir: Path) -> None:
        """Initialize cache with directory path.

        Args:
            cache_dir: Root directory for cache files (e.g., .cache/)
        """
        self._cache_dir = cache_dir
        self._pages_dir = cache_dir / "pages"
        self._meta_dir = cache_dir / "meta"

    @property
    def cache_dir(self) -> Path:
        """Root cache directory."""
        return self._cache_dir

    def _ensure_cache_dir(self) -> None:
        """Create cache directory with .gitignore if it doesn't exist."""
        if not self._cache_dir.exists():
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            gitignore_path = self._cache_dir / ".gitignore"
            gitignore_path.write_text(self._GITIGNORE_CONTENT, encoding="utf-8")

    def get(self, key: str, digest: str) -> CacheEntry | None:
        """Retrieve cached entry if valid.

        Args:
            key: Document catalog key
            digest: Digest of the current source text

        Returns:
            CacheEntry if cache hit and valid, None otherwise
        """
        html_path = self._pages_dir / f"{key}.html"
        meta_path = self._meta_dir / f"{key}.json"

        if not html_path.exists() or not meta_path.exists():
            return None

        meta = self._read_meta(meta_path)
        if meta is None:
            return None

        if meta["digest"] != digest:
            return None

        try:
            html = html_path.read_text(encoding="utf-8")
        except OSError:
            return None

        logger.debug(f"Cache hit for '{key}'")
        return CacheEntry(html=html, meta=meta)

    def set(self, key: str, html: str, title: str | None, digest: str) -> None:
        """Store entry in cache.

        Args:
            key: Document catalog key
            html: Rendered HTML content
            title: Extracted title (or None)
            digest: Source text digest for invalidation
        """
        self._ensure_cache_dir()

        html_path = self._pages_dir / f"{key}.html"
        meta_path = self._meta_dir / f"{key}.json"

        html_path.parent.mkdir(parents=True, exist_ok=True)
        meta_path.parent.mkdir(parents=True, exist_ok=True)

        html_path.write_text(html, encoding="utf-8")

        meta: CachedMetadata = {"title": title, "digest": digest}
        meta_path.write_text(json.dumps(meta), encoding="utf-8")

    def invalidate(self, key: str) -> None:
        """Remove entry from cache.

        Args:
            key: Document catalog key to invalidate
        """
        html_path = self._pages_dir / f"{key}.html"
        meta_path = self._meta_dir / f"{key}.json"

        if html_path.exists():
            html_path.unlink()
        if meta_path.exists():
            meta_path.unlink()

    def clear(self) -> None:
        """Remove all cached entries."""
        if self._pages_dir.exists():
            shutil.rmtree(self._pages_dir)
        if self._meta_dir.exists():
            shutil.rmtree(self._meta_dir)

    def _read_meta(self, meta_path: Path) -> CachedMetadata | None:
        """Read and validate metadata file.

        Args:
            meta_path: Path to metadata JSON file

        Returns:
            CachedMetadata if valid, None otherwise
        """
        try:
            data = json.loads(meta_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return None

        if not isinstance(data, dict):
            return None
        if not isinstance(data.get("digest"), str):
            return None

        return CachedMetadata(title=data.get("title"), digest=data["digest"])


class NullCache:
    """Cache that never stores anything. Used when caching is disabled."""

    def get(self, key: str, digest: str) -> CacheEntry | None:
        return None

    def set(self, key: str, html: str, title: str | None, digest: str) -> None:
        pass

    def invalidate(self, key: str) -> None:
        pass
