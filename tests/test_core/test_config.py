"""Tests for studio.core.config module."""

from pathlib import Path

import pytest

from studio.core import config
from studio.core.config import (
    StudioPaths,
    find_documents_dir,
    get_global_config_path,
    get_paths,
    get_starter_template_dir,
    load_global_config,
)


@pytest.fixture
def config_file(tmp_path):
    """Path of the global config file under the isolated XDG_CONFIG_HOME."""
    path = tmp_path / "xdg" / "studio" / "config.yaml"
    path.parent.mkdir(parents=True)
    return path


class TestGlobalConfigPath:
    """Tests for get_global_config_path()."""

    def test_respects_xdg_config_home(self, tmp_path):
        assert get_global_config_path() == tmp_path / "xdg" / "studio" / "config.yaml"

    def test_defaults_to_dot_config(self, tmp_path, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME")
        monkeypatch.setattr(Path, "home", lambda: tmp_path / "home")
        assert get_global_config_path() == tmp_path / "home" / ".config" / "studio" / "config.yaml"


class TestLoadGlobalConfig:
    """Tests for load_global_config()."""

    def test_missing_file(self):
        assert load_global_config() == {}

    def test_valid_file(self, config_file):
        config_file.write_text("documents_dir: /srv/docs\nstarter_template: ~/starter\n")
        assert load_global_config() == {
            "documents_dir": "/srv/docs",
            "starter_template": "~/starter",
        }

    def test_invalid_yaml(self, config_file):
        config_file.write_text("documents_dir: [unclosed\n")
        assert load_global_config() == {}

    def test_non_mapping(self, config_file):
        config_file.write_text("- just\n- a list\n")
        assert load_global_config() == {}

    def test_empty_file(self, config_file):
        config_file.write_text("")
        assert load_global_config() == {}


class TestFindDocumentsDir:
    """Tests for the 3-tier documents directory resolution."""

    def test_env_var_wins(self, tmp_path, monkeypatch, config_file):
        config_file.write_text(f"documents_dir: {tmp_path / 'from-config'}\n")
        monkeypatch.setenv("STUDIO_DOCUMENTS_DIR", str(tmp_path / "from-env"))
        assert find_documents_dir() == (tmp_path / "from-env").resolve()

    def test_config_file(self, tmp_path, config_file):
        config_file.write_text(f"documents_dir: {tmp_path / 'from-config'}\n")
        assert find_documents_dir() == (tmp_path / "from-config").resolve()

    def test_default(self, tmp_path, monkeypatch):
        monkeypatch.setattr(Path, "home", lambda: tmp_path / "home")
        assert find_documents_dir() == tmp_path / "home" / "Documents"

    def test_empty_env_var_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("STUDIO_DOCUMENTS_DIR", "")
        monkeypatch.setattr(Path, "home", lambda: tmp_path / "home")
        assert find_documents_dir() == tmp_path / "home" / "Documents"

    def test_get_documents_dir_is_cached(self, tmp_path, monkeypatch):
        monkeypatch.setenv("STUDIO_DOCUMENTS_DIR", str(tmp_path / "first"))
        first = config.get_documents_dir()
        monkeypatch.setenv("STUDIO_DOCUMENTS_DIR", str(tmp_path / "second"))
        assert config.get_documents_dir() == first
        config.get_documents_dir.cache_clear()


class TestGetPaths:
    """Tests for get_paths()."""

    def test_layout(self, tmp_path):
        paths = get_paths(tmp_path)

        assert isinstance(paths, StudioPaths)
        assert paths.documents == tmp_path
        assert paths.studio == tmp_path / "studio"
        assert paths.src == tmp_path / "studio" / "src"
        assert paths.pages == tmp_path / "studio" / "src" / "pages"
        assert paths.layouts == tmp_path / "studio" / "src" / "layouts"
        assert paths.config_file == get_global_config_path()

    def test_uses_resolved_documents_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("STUDIO_DOCUMENTS_DIR", str(tmp_path / "docs"))
        assert get_paths().pages == (tmp_path / "docs").resolve() / "studio" / "src" / "pages"

    def test_frozen(self, tmp_path):
        paths = get_paths(tmp_path)
        with pytest.raises(AttributeError):
            paths.pages = tmp_path


class TestStarterTemplateDir:
    """Tests for get_starter_template_dir()."""

    def test_unset(self):
        assert get_starter_template_dir() is None

    def test_configured(self, tmp_path, config_file):
        config_file.write_text(f"starter_template: {tmp_path / 'starter'}\n")
        assert get_starter_template_dir() == tmp_path / "starter"
