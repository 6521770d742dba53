"""Tests for studio.core.atomic module."""

import os

import pytest

from studio.core import atomic
from studio.core.atomic import atomic_replace, atomic_write_text, temp_path_for


class TestTempPath:
    """Tests for temp_path_for()."""

    def test_dot_prefixed_sibling(self, tmp_path):
        target = tmp_path / "hello-world.md"
        assert temp_path_for(target) == tmp_path / ".hello-world.md.tmp"

    def test_not_a_markdown_file(self, tmp_path):
        assert temp_path_for(tmp_path / "post.md").suffix == ".tmp"


class TestAtomicReplace:
    """Tests for atomic_replace()."""

    def test_writes_new_file(self, tmp_path):
        target = tmp_path / "new.md"
        atomic_replace(target, b"hello")
        assert target.read_bytes() == b"hello"

    def test_replaces_existing_content(self, tmp_path):
        target = tmp_path / "post.md"
        target.write_bytes(b"old content that is longer than the new one")
        atomic_replace(target, b"new")
        assert target.read_bytes() == b"new"

    def test_no_temp_file_left(self, tmp_path):
        target = tmp_path / "post.md"
        target.write_text("old")
        atomic_replace(target, b"new")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["post.md"]

    def test_stale_temp_file_is_overwritten(self, tmp_path):
        target = tmp_path / "post.md"
        target.write_text("old")
        temp_path_for(target).write_text("garbage from an earlier crash")
        atomic_replace(target, b"new")
        assert target.read_bytes() == b"new"
        assert not temp_path_for(target).exists()

    def test_planted_temp_symlink_not_followed(self, tmp_path):
        target = tmp_path / "post.md"
        target.write_text("old")
        victim = tmp_path / "victim.txt"
        victim.write_text("keep me")
        temp_path_for(target).symlink_to(victim)

        atomic_replace(target, b"new")

        assert target.read_bytes() == b"new"
        assert victim.read_text() == "keep me"
        assert not temp_path_for(target).is_symlink()

    def test_rename_failure_leaves_target_untouched(self, tmp_path, monkeypatch):
        target = tmp_path / "post.md"
        original = b"---\ntitle: \"Original\"\n---\n\nbody\n"
        target.write_bytes(original)

        def boom(src, dst):
            raise OSError("simulated crash before rename")

        monkeypatch.setattr(atomic.os, "replace", boom)

        with pytest.raises(OSError, match="simulated crash"):
            atomic_replace(target, b"replacement")

        assert target.read_bytes() == original
        assert not temp_path_for(target).exists()

    def test_fsync_failure_leaves_target_untouched(self, tmp_path, monkeypatch):
        target = tmp_path / "post.md"
        target.write_bytes(b"original")

        def boom(fd):
            raise OSError("disk full")

        monkeypatch.setattr(atomic.os, "fsync", boom)

        with pytest.raises(OSError, match="disk full"):
            atomic_replace(target, b"replacement")

        assert target.read_bytes() == b"original"

    def test_fsync_called_before_replace(self, tmp_path, monkeypatch):
        calls = []
        real_fsync = os.fsync
        real_replace = os.replace

        def tracking_fsync(fd):
            calls.append("fsync")
            real_fsync(fd)

        def tracking_replace(src, dst):
            calls.append("replace")
            real_replace(src, dst)

        monkeypatch.setattr(atomic.os, "fsync", tracking_fsync)
        monkeypatch.setattr(atomic.os, "replace", tracking_replace)

        atomic_replace(tmp_path / "post.md", b"data")
        assert calls == ["fsync", "replace"]

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(OSError):
            atomic_replace(tmp_path / "missing" / "post.md", b"data")


class TestAtomicWriteText:
    """Tests for atomic_write_text()."""

    def test_utf8_by_default(self, tmp_path):
        target = tmp_path / "post.md"
        atomic_write_text(target, "Café ☕")
        assert target.read_bytes() == "Café ☕".encode("utf-8")
