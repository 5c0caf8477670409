"""Tests for configuration loading."""

from pathlib import Path
from unittest.mock import patch

import pytest
from docview.config import Config, DocsConfig, LiveReloadConfig, ServerConfig
from docview.core.documents import DocumentCatalog


class TestConfigLoad:
    """Tests for Config.load()."""

    def test__explicit_path__loads_config(self, tmp_path: Path) -> None:
        """Load config from explicit path."""
        config_file = tmp_path / "docview.toml"
        config_file.write_text("""
[server]
host = "0.0.0.0"
port = 3000

[docs]
source_dir = "documentation"
base_url = "https://docs.example.com"
cache_dir = ".docview-cache"
cache_enabled = false
timeout = 2.5

[documents]
guide = "guide.md"
technical = "tech.md"

[live_reload]
enabled = false
""")

        config = Config.load(config_file)

        assert config.server.host == "0.0.0.0"
        assert config.server.port == 3000
        assert config.docs.source_dir == tmp_path / "documentation"
        assert config.docs.base_url == "https://docs.example.com"
        assert config.docs.cache_dir == tmp_path / ".docview-cache"
        assert config.docs.cache_enabled is False
        assert config.docs.timeout == 2.5
        assert config.documents.keys() == ["guide", "technical"]
        assert config.documents.get("guide").filename == "guide.md"
        assert config.live_reload.enabled is False
        assert config.config_path == config_file

    def test__minimal_config__uses_defaults(self, tmp_path: Path) -> None:
        """Load minimal config with defaults relative to config file."""
        config_file = tmp_path / "docview.toml"
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.server.host == "127.0.0.1"
        assert config.server.port == 8080
        assert config.docs.source_dir == tmp_path / "docs"
        assert config.docs.cache_dir == tmp_path / ".cache"
        assert config.docs.base_url is None
        assert config.docs.cache_enabled is True
        assert config.documents.keys() == ["architecture", "ppt", "technical"]
        assert config.live_reload.enabled is True

    def test__missing_explicit_path__raises_error(self, tmp_path: Path) -> None:
        """Raise FileNotFoundError for missing explicit config file."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            Config.load(tmp_path / "nonexistent.toml")

    def test__no_path_no_discovery__returns_defaults(self) -> None:
        """Return defaults when no config file found."""
        with patch.object(Config, "_discover_config", return_value=None):
            config = Config.load()

        assert config.server.port == 8080
        assert config.docs.source_dir == Path("docs")
        assert config.docs.cache_dir == Path(".cache")
        assert config.config_path is None

    def test__discovery__finds_config_in_parent(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Discover docview.toml in a parent directory."""
        (tmp_path / "docview.toml").write_text("[server]\nport = 9000\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        config = Config.load()

        assert config.server.port == 9000
        assert config.config_path == tmp_path / "docview.toml"

    def test__invalid_toml__raises_value_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "docview.toml"
        config_file.write_text("[server\n")

        with pytest.raises(ValueError, match="Invalid TOML"):
            Config.load(config_file)


class TestConfigValidation:
    """Tests for invalid configuration values."""

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ('server = "x"', "server section must be a dictionary"),
            ("[server]\nhost = 1", "server.host must be a string"),
            ('[server]\nport = "80"', "server.port must be an integer"),
            ("[server]\nport = true", "server.port must be an integer"),
            ('docs = "x"', "docs section must be a dictionary"),
            ("[docs]\nsource_dir = 1", "docs.source_dir must be a string"),
            ("[docs]\nbase_url = 1", "docs.base_url must be a string"),
            ("[docs]\ncache_dir = 1", "docs.cache_dir must be a string"),
            ('[docs]\ncache_enabled = "yes"', "docs.cache_enabled must be a boolean"),
            ("[docs]\ntimeout = 0", "docs.timeout must be a positive number"),
            ('documents = "x"', "documents section must be a dictionary"),
            ("[documents]", "documents section must not be empty"),
            ("[documents]\nguide = 1", "documents.guide must be a string"),
            ('live_reload = "x"', "live_reload section must be a dictionary"),
            ('[live_reload]\nenabled = "yes"', "live_reload.enabled must be a boolean"),
        ],
    )
    def test__invalid_value__raises_value_error(
        self,
        tmp_path: Path,
        content: str,
        message: str,
    ) -> None:
        config_file = tmp_path / "docview.toml"
        config_file.write_text(content)

        with pytest.raises(ValueError, match=message):
            Config.load(config_file)


class TestConfigWithOverrides:
    """Tests for Config.with_overrides()."""

    def _config(self) -> Config:
        return Config(
            server=ServerConfig(),
            docs=DocsConfig(),
            documents=DocumentCatalog.default(),
            live_reload=LiveReloadConfig(),
        )

    def test__no_overrides__returns_equal_config(self) -> None:
        config = self._config()

        assert config.with_overrides() == config

    def test__overrides__applied_without_mutating_original(self) -> None:
        config = self._config()

        updated = config.with_overrides(
            host="0.0.0.0",
            port=9000,
            source_dir=Path("/srv/docs"),
            base_url="https://docs.example.com",
            cache_dir=Path("/tmp/cache"),
            cache_enabled=False,
            live_reload_enabled=False,
        )

        assert updated.server == ServerConfig(host="0.0.0.0", port=9000)
        assert updated.docs.source_dir == Path("/srv/docs")
        assert updated.docs.base_url == "https://docs.example.com"
        assert updated.docs.cache_dir == Path("/tmp/cache")
        assert updated.docs.cache_enabled is False
        assert updated.live_reload.enabled is False
        assert config.server.port == 8080
        assert config.docs.base_url is None

    def test__port_only__keeps_host(self) -> None:
        updated = self._config().with_overrides(port=1234)

        assert updated.server.host == "127.0.0.1"
        assert updated.server.port == 1234

    def test__source_dir_only__clears_configured_base_url(self) -> None:
        config = self._config().with_overrides(base_url="https://docs.example.com")

        updated = config.with_overrides(source_dir=Path("/srv/docs"))

        assert updated.docs.source_dir == Path("/srv/docs")
        assert updated.docs.base_url is None
        assert config.docs.base_url == "https://docs.example.com"
