"""Shared test fixtures for studio package."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from studio.content.store import ContentStore


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """Keep the real ~/.config/studio and STUDIO_DOCUMENTS_DIR out of tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("STUDIO_DOCUMENTS_DIR", raising=False)

    from studio.core import config
    config.get_documents_dir.cache_clear()


@pytest.fixture
def pages_root(tmp_path):
    """Create an empty <studio>/src/pages directory."""
    root = tmp_path / "documents" / "studio" / "src" / "pages"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def store(pages_root):
    """A ContentStore over the temporary pages root."""
    return ContentStore(pages_root)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def mock_documents_dir(tmp_path, pages_root, monkeypatch):
    """Point the CLI's documents directory at the temporary workspace."""
    documents = tmp_path / "documents"

    from studio.core import config
    monkeypatch.setattr(config, "get_documents_dir", lambda: documents)

    return documents


@pytest.fixture
def create_post_file(pages_root):
    """Factory fixture for writing raw post files into a project folder."""
    def _create(folder: str, slug: str, content: str) -> Path:
        project_dir = pages_root / folder
        project_dir.mkdir(parents=True, exist_ok=True)
        path = project_dir / f"{slug}.md"
        path.write_text(content, encoding="utf-8")
        return path

    return _create
