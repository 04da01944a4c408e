"""
Unit tests for the low-level disk primitives.
"""
import os

import pytest
from filelock import FileLock, Timeout

import persist


@pytest.mark.unit
class TestWriteText:
    """Tests for atomic whole-file writes."""

    def test_write_then_read(self, tmp_path):
        path = str(tmp_path / "a.json")

        persist.write_text(path, "[1, 2]")

        assert persist.read_text(path) == "[1, 2]"

    def test_write_overwrites_and_leaves_no_temp_file(self, tmp_path):
        path = str(tmp_path / "a.json")
        persist.write_text(path, "old")

        persist.write_text(path, "new")

        assert persist.read_text(path) == "new"
        assert not os.path.exists(path + persist.TMP_SUFFIX)

    def test_failed_replace_cleans_up_temp_file(self, tmp_path):
        """Replacing a directory with a file fails; the directory and no temp file remain."""
        target = tmp_path / "folder"
        target.mkdir()

        with pytest.raises(OSError):
            persist.write_text(str(target), "[]")

        assert target.is_dir()
        assert not os.path.exists(str(target) + persist.TMP_SUFFIX)

    def test_unicode_round_trip(self, tmp_path):
        path = str(tmp_path / "u.json")

        persist.write_text(path, "日本語 🎨")

        assert persist.read_text(path) == "日本語 🎨"


@pytest.mark.unit
class TestLocked:
    """Tests for the per-path lock."""

    def test_lock_uses_sidecar_file(self, tmp_path):
        path = str(tmp_path / "a.json")

        with persist.locked(path):
            assert os.path.exists(persist.lock_path(path))

    def test_missing_parent_is_refused(self, tmp_path):
        path = str(tmp_path / "missing" / "a.json")

        with pytest.raises(FileNotFoundError):
            with persist.locked(path):
                pass

        assert not (tmp_path / "missing").exists()

    def test_held_lock_times_out(self, tmp_path, short_lock_timeout):
        path = str(tmp_path / "a.json")
        holder = FileLock(persist.lock_path(path))

        with holder:
            with pytest.raises(Timeout):
                with persist.locked(path):
                    pass


@pytest.mark.unit
class TestDirectories:
    """Tests for directory creation and recursive removal."""

    def test_make_dirs_is_recursive_and_idempotent(self, tmp_path):
        path = str(tmp_path / "a" / "b" / "c")

        persist.make_dirs(path)
        persist.make_dirs(path)

        assert os.path.isdir(path)

    def test_remove_tree_removes_directory(self, tmp_path):
        root = tmp_path / "a"
        (root / "b").mkdir(parents=True)
        (root / "b" / "x.json").write_text("[]")

        persist.remove_tree(str(root))

        assert not root.exists()

    def test_remove_tree_removes_file(self, tmp_path):
        path = tmp_path / "x.json"
        path.write_text("[]")

        persist.remove_tree(str(path))

        assert not path.exists()

    def test_remove_tree_missing_path_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            persist.remove_tree(str(tmp_path / "nope"))
