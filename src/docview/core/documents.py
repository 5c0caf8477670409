"""Document catalog and sources.

The catalog maps navigation keys to document files. Sources retrieve the
raw text of a catalog entry, either from a local directory or over HTTP.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import httpx

from docview.errors import DocumentUnavailableError, UnknownDocumentError

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENTS: dict[str, tuple[str, str]] = {
    "architecture": ("Architecture", "architecture_diagrams.txt"),
    "ppt": ("PPT Script", "ppt_script.md"),
    "technical": ("Technical Details", "technical_details.md"),
}


@dataclass(frozen=True)
class DocumentEntry:
    """One navigation option."""

    key: str
    title: str
    filename: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"key": self.key, "title": self.title, "path": self.filename}


class DocumentCatalog:
    """Ordered, immutable mapping of navigation keys to documents.

    The first entry is the initial selection.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: list[DocumentEntry]) -> None:
        """Initialize catalog.

        Args:
            entries: Catalog entries in navigation order

        Raises:
            ValueError: If entries is empty or contains duplicate keys
        """
        if not entries:
            raise ValueError("Document catalog must not be empty")
        index = {entry.key: entry for entry in entries}
        if len(index) != len(entries):
            raise ValueError("Document catalog keys must be unique")
        self._entries = index

    @classmethod
    def default(cls) -> DocumentCatalog:
        """Create the built-in catalog of three documents."""
        return cls(
            [
                DocumentEntry(key=key, title=title, filename=filename)
                for key, (title, filename) in DEFAULT_DOCUMENTS.items()
            ]
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> DocumentCatalog:
        """Create a catalog from a key to filename mapping.

        Titles come from the built-in catalog when the key is known there,
        otherwise from the key itself.

        Args:
            mapping: Navigation key to filename, in navigation order

        Returns:
            DocumentCatalog instance
        """
        entries = []
        for key, filename in mapping.items():
            title = DEFAULT_DOCUMENTS[key][0] if key in DEFAULT_DOCUMENTS else _title_from_key(key)
            entries.append(DocumentEntry(key=key, title=title, filename=filename))
        return cls(entries)

    @property
    def initial(self) -> str:
        """Key selected when the viewer first loads."""
        return next(iter(self._entries))

    def get(self, key: str) -> DocumentEntry:
        """Get entry by key.

        Raises:
            UnknownDocumentError: If key is not in the catalog
        """
        entry = self._entries.get(key)
        if entry is None:
            raise UnknownDocumentError(key)
        return entry

    def find_by_filename(self, filename: str) -> DocumentEntry | None:
        """Get entry whose file has the given name, if any."""
        for entry in self._entries.values():
            if entry.filename == filename:
                return entry
        return None

    def keys(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[DocumentEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


def _title_from_key(key: str) -> str:
    return key.replace("_", " ").replace("-", " ").title()


class DocumentSource(Protocol):
    """Retrieves raw text for a catalog entry."""

    async def fetch(self, entry: DocumentEntry) -> str: ...


class FileDocumentSource:
    """Reads documents from a local directory."""

    def __init__(self, source_dir: Path) -> None:
        self._source_dir = source_dir

    @property
    def source_dir(self) -> Path:
        """Directory containing document files."""
        return self._source_dir

    def resolve(self, entry: DocumentEntry) -> Path:
        """Return filesystem path of an entry's file."""
        return self._source_dir / entry.filename

    async def fetch(self, entry: DocumentEntry) -> str:
        """Read document text.

        Raises:
            DocumentUnavailableError: If the file is missing or unreadable
        """
        path = self.resolve(entry)
        logger.info(f"Reading document '{entry.key}' from {path}")
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentUnavailableError(entry.key, str(e)) from e


class HttpDocumentSource:
    """Fetches documents relative to a base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize HTTP source.

        Args:
            base_url: URL that document filenames are resolved against
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def resolve(self, entry: DocumentEntry) -> str:
        """Return URL of an entry's file."""
        return f"{self.base_url}/{entry.filename}"

    async def fetch(self, entry: DocumentEntry) -> str:
        """Fetch document text.

        Raises:
            DocumentUnavailableError: On transport errors or non-success status
        """
        url = self.resolve(entry)
        logger.info(f"Fetching document '{entry.key}' from {url}")

        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            try:
                response = await client.get(url)
            except httpx.HTTPError as e:
                raise DocumentUnavailableError(entry.key, str(e)) from e

        if not response.is_success:
            raise DocumentUnavailableError(entry.key, f"HTTP {response.status_code}")

        return response.text
