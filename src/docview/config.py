"""Configuration management for Docview.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from docview.core.documents import DocumentCatalog

CONFIG_FILENAME = "docview.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class DocsConfig:
    """Documentation source configuration.

    When base_url is set, documents are fetched over HTTP relative to it
    and source_dir is not read.
    """

    source_dir: Path = field(default_factory=lambda: Path("docs"))
    base_url: str | None = None
    cache_dir: Path = field(default_factory=lambda: Path(".cache"))
    cache_enabled: bool = True
    timeout: float = 10.0


@dataclass
class LiveReloadConfig:
    """Live reload configuration."""

    enabled: bool = True


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    docs: DocsConfig
    documents: DocumentCatalog
    live_reload: LiveReloadConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for docview.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> Config:
        """Create config with all defaults."""
        return cls(
            server=ServerConfig(),
            docs=DocsConfig(),
            documents=DocumentCatalog.default(),
            live_reload=LiveReloadConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            docs=cls._parse_docs(data.get("docs"), config_dir),
            documents=cls._parse_documents(data.get("documents")),
            live_reload=cls._parse_live_reload(data.get("live_reload")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section."""
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_docs(cls, data: object, config_dir: Path) -> DocsConfig:
        """Parse docs configuration section.

        Args:
            data: Raw docs section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            DocsConfig instance
        """
        if data is None:
            return DocsConfig(
                source_dir=config_dir / "docs",
                cache_dir=config_dir / ".cache",
            )

        if not isinstance(data, dict):
            raise ValueError("docs section must be a dictionary")

        source_dir = data.get("source_dir", "docs")
        if not isinstance(source_dir, str):
            raise ValueError("docs.source_dir must be a string")

        base_url = data.get("base_url")
        if base_url is not None and not isinstance(base_url, str):
            raise ValueError("docs.base_url must be a string")

        cache_dir = data.get("cache_dir", ".cache")
        if not isinstance(cache_dir, str):
            raise ValueError("docs.cache_dir must be a string")

        cache_enabled = data.get("cache_enabled", True)
        if not isinstance(cache_enabled, bool):
            raise ValueError("docs.cache_enabled must be a boolean")

        timeout = data.get("timeout", 10.0)
        if not isinstance(timeout, int | float) or isinstance(timeout, bool) or timeout <= 0:
            raise ValueError("docs.timeout must be a positive number")

        return DocsConfig(
            source_dir=config_dir / source_dir,
            base_url=base_url,
            cache_dir=config_dir / cache_dir,
            cache_enabled=cache_enabled,
            timeout=float(timeout),
        )

    @classmethod
    def _parse_documents(cls, data: object) -> DocumentCatalog:
        """Parse documents section into a catalog.

        The section maps navigation keys to filenames, in navigation order.
        A missing section keeps the built-in catalog.
        """
        if data is None:
            return DocumentCatalog.default()

        if not isinstance(data, dict):
            raise ValueError("documents section must be a dictionary")
        if not data:
            raise ValueError("documents section must not be empty")

        for key, filename in data.items():
            if not isinstance(filename, str):
                raise ValueError(f"documents.{key} must be a string")

        return DocumentCatalog.from_mapping(data)

    @classmethod
    def _parse_live_reload(cls, data: object) -> LiveReloadConfig:
        """Parse live_reload configuration section."""
        if data is None:
            return LiveReloadConfig()

        if not isinstance(data, dict):
            raise ValueError("live_reload section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("live_reload.enabled must be a boolean")

        return LiveReloadConfig(enabled=enabled)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        source_dir: Path | None = None,
        base_url: str | None = None,
        cache_dir: Path | None = None,
        cache_enabled: bool | None = None,
        live_reload_enabled: bool | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. A source_dir
        given without a base_url switches to reading local files. The original
        Config is not modified.

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        docs = self.docs
        if source_dir is not None:
            docs = replace(docs, source_dir=source_dir, base_url=None)
        if base_url is not None:
            docs = replace(docs, base_url=base_url)
        if cache_dir is not None:
            docs = replace(docs, cache_dir=cache_dir)
        if cache_enabled is not None:
            docs = replace(docs, cache_enabled=cache_enabled)

        live_reload = self.live_reload
        if live_reload_enabled is not None:
            live_reload = replace(self.live_reload, enabled=live_reload_enabled)

        return replace(self, server=server, docs=docs, live_reload=live_reload)
