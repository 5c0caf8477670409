"""Tests for file-based cache."""

import json
from pathlib import Path

from docview.core.cache import FileCache, NullCache, compute_digest


class TestFileCacheGet:
    """Tests for FileCache.get()."""

    def test_returns_none_for_missing_entry(self, tmp_path: Path) -> None:
        """Return None when cache entry doesn't exist."""
        cache = FileCache(tmp_path / ".cache")

        assert cache.get("technical", "abc") is None

    def test_returns_none_when_html_missing(self, tmp_path: Path) -> None:
        """Return None when HTML file is missing but meta exists."""
        cache = FileCache(tmp_path / ".cache")
        meta_dir = tmp_path / ".cache" / "meta"
        meta_dir.mkdir(parents=True)
        (meta_dir / "technical.json").write_text(
            json.dumps({"title": "Technical", "digest": "abc"}),
        )

        assert cache.get("technical", "abc") is None

    def test_returns_none_when_digest_differs(self, tmp_path: Path) -> None:
        """Return None when source digest doesn't match cached digest."""
        cache = FileCache(tmp_path / ".cache")
        cache.set("technical", "<p>Test</p>", "Technical", "abc")

        assert cache.get("technical", "def") is None

    def test_returns_entry_when_valid(self, tmp_path: Path) -> None:
        """Return CacheEntry when cache is valid."""
        cache = FileCache(tmp_path / ".cache")
        cache.set("technical", "<p>Test</p>", "Technical", "abc")

        result = cache.get("technical", "abc")

        assert result is not None
        assert result.html == "<p>Test</p>"
        assert result.meta["title"] == "Technical"
        assert result.meta["digest"] == "abc"

    def test_returns_none_for_corrupt_meta(self, tmp_path: Path) -> None:
        """Return None when metadata is not valid JSON."""
        cache = FileCache(tmp_path / ".cache")
        cache.set("technical", "<p>Test</p>", None, "abc")
        (tmp_path / ".cache" / "meta" / "technical.json").write_text("{not json")

        assert cache.get("technical", "abc") is None

    def test_returns_none_for_meta_without_digest(self, tmp_path: Path) -> None:
        """Return None when metadata lacks the digest field."""
        cache = FileCache(tmp_path / ".cache")
        cache.set("technical", "<p>Test</p>", None, "abc")
        (tmp_path / ".cache" / "meta" / "technical.json").write_text('{"title": null}')

        assert cache.get("technical", "abc") is None


class TestFileCacheSet:
    """Tests for FileCache.set()."""

    def test_creates_cache_dir_with_gitignore(self, tmp_path: Path) -> None:
        """Create cache directory and .gitignore on first write."""
        cache_dir = tmp_path / ".cache"
        cache = FileCache(cache_dir)

        cache.set("ppt", "<p>x</p>", None, "abc")

        assert (cache_dir / ".gitignore").read_text() == "# Ignore everything in this directory\n*\n"
        assert (cache_dir / "pages" / "ppt.html").read_text() == "<p>x</p>"
        meta = json.loads((cache_dir / "meta" / "ppt.json").read_text())
        assert meta == {"title": None, "digest": "abc"}


class TestFileCacheInvalidate:
    """Tests for FileCache.invalidate() and clear()."""

    def test_invalidate_removes_entry(self, tmp_path: Path) -> None:
        cache = FileCache(tmp_path / ".cache")
        cache.set("ppt", "<p>x</p>", None, "abc")

        cache.invalidate("ppt")

        assert cache.get("ppt", "abc") is None

    def test_invalidate_missing_entry_is_noop(self, tmp_path: Path) -> None:
        cache = FileCache(tmp_path / ".cache")

        cache.invalidate("ppt")

    def test_clear_removes_all_entries(self, tmp_path: Path) -> None:
        cache = FileCache(tmp_path / ".cache")
        cache.set("ppt", "<p>x</p>", None, "abc")
        cache.set("technical", "<p>y</p>", None, "def")

        cache.clear()

        assert cache.get("ppt", "abc") is None
        assert cache.get("technical", "def") is None


class TestNullCache:
    """Tests for NullCache."""

    def test_never_returns_entries(self) -> None:
        cache = NullCache()
        cache.set("ppt", "<p>x</p>", None, "abc")

        assert cache.get("ppt", "abc") is None


class TestComputeDigest:
    """Tests for compute_digest()."""

    def test_same_text_same_digest(self) -> None:
        assert compute_digest("# Doc") == compute_digest("# Doc")

    def test_different_text_different_digest(self) -> None:
        assert compute_digest("# Doc") != compute_digest("# Doc!")

    def test_returns_sha256_hex(self) -> None:
        assert len(compute_digest("")) == 64
