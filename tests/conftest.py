"""Shared test fixtures."""

from pathlib import Path

import pytest
from docview.config import Config, DocsConfig, LiveReloadConfig, ServerConfig
from docview.core.documents import DocumentCatalog

SAMPLE_DOCUMENTS = {
    "architecture_diagrams.txt": "# Architecture\n\n```\n[client] -> [server]\n```\n",
    "ppt_script.md": "# PPT Script\n\n1. Intro\n2. Demo\n",
    "technical_details.md": "# Technical Details\n\n- **fast**\n- *small*\n\nUses `regex` stages.\n",
}


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """Create docs directory with the three catalog documents."""
    docs = tmp_path / "docs"
    docs.mkdir(exist_ok=True)
    for filename, text in SAMPLE_DOCUMENTS.items():
        (docs / filename).write_text(text, encoding="utf-8")
    return docs


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Create a test configuration with tmp_path directories.

    Creates source_dir (without documents) and returns a Config instance
    suitable for testing. Use together with docs_dir to populate it.
    """
    source_dir = tmp_path / "docs"
    source_dir.mkdir(exist_ok=True)
    cache_dir = tmp_path / ".cache"

    return Config(
        server=ServerConfig(),
        docs=DocsConfig(source_dir=source_dir, cache_dir=cache_dir),
        documents=DocumentCatalog.default(),
        live_reload=LiveReloadConfig(enabled=False),
    )
