"""Tests for the top-level studio CLI."""

from __future__ import annotations

from studio import __version__
from studio.cli import main


def _flat(output: str) -> str:
    """Collapse rich line wrapping so messages can be matched whole."""
    return " ".join(output.split())


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_groups(runner):
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    for name in ("init", "projects", "posts"):
        assert name in result.output


class TestInit:
    """Tests for ``studio init``."""

    def test_first_run(self, runner, tmp_path):
        documents = tmp_path / "docs"

        result = runner.invoke(main, ["--documents-dir", str(documents), "init"])

        assert result.exit_code == 0
        assert "Done!" in result.output
        assert "Created" in result.output
        assert (documents / "studio" / "package.json").is_file()
        assert (documents / "studio" / "src" / "pages").is_dir()

    def test_existing_workspace(self, runner, tmp_path):
        documents = tmp_path / "docs"
        runner.invoke(main, ["--documents-dir", str(documents), "init"])

        result = runner.invoke(main, ["--documents-dir", str(documents), "init"])

        assert result.exit_code == 0
        assert "Existing setup preserved" in _flat(result.output)
        assert "Use --force to copy missing starter files." in _flat(result.output)

    def test_force(self, runner, tmp_path):
        documents = tmp_path / "docs"
        runner.invoke(main, ["--documents-dir", str(documents), "init"])
        (documents / "studio" / "package.json").unlink()

        result = runner.invoke(main, ["--documents-dir", str(documents), "init", "--force"])

        assert result.exit_code == 0
        assert "package.json" in result.output
        assert (documents / "studio" / "package.json").is_file()

    def test_env_var_documents_dir(self, runner, tmp_path, monkeypatch):
        monkeypatch.setenv("STUDIO_DOCUMENTS_DIR", str(tmp_path / "from-env"))

        result = runner.invoke(main, ["init"])

        assert result.exit_code == 0
        assert (tmp_path / "from-env" / "studio" / "package.json").is_file()

    def test_missing_starter_template(self, runner, tmp_path):
        config_file = tmp_path / "xdg" / "studio" / "config.yaml"
        config_file.parent.mkdir(parents=True)
        config_file.write_text(f"starter_template: {tmp_path / 'nowhere'}\n")

        result = runner.invoke(main, ["--documents-dir", str(tmp_path / "docs"), "init"])

        assert result.exit_code == 1
        assert "Starter template not found" in _flat(result.output)

    def test_verbose_flag(self, runner, tmp_path):
        result = runner.invoke(main, ["-v", "--documents-dir", str(tmp_path / "docs"), "init"])
        assert result.exit_code == 0
