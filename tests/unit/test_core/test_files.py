"""Tests for initial file loading."""

import pytest

from bash_toolkit.files import load_files
from bash_toolkit.types import UploadDirectory


class TestLoadFiles:
    """Tests for load_files."""

    def test_nothing_to_load(self):
        """No inputs produce no files."""
        assert load_files() == {}

    def test_inline_files_keep_their_order(self):
        """Inline files are returned as given."""
        files = {"b.txt": "b", "a/c.json": "{}"}
        assert list(load_files(files)) == ["b.txt", "a/c.json"]

    def test_reads_directory_recursively(self, tmp_path):
        """Directory files are read with POSIX relative paths, sorted."""
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "main.py").write_text("print(1)\n")
        (tmp_path / "README.md").write_text("# hi\n")

        loaded = load_files(upload_directory=UploadDirectory(source=str(tmp_path)))

        assert loaded == {"README.md": "# hi\n", "src/main.py": "print(1)\n"}

    def test_include_pattern(self, tmp_path):
        """Only files matching the include glob are loaded."""
        (tmp_path / "a.json").write_text("{}")
        (tmp_path / "b.txt").write_text("b")

        upload = UploadDirectory(source=str(tmp_path), include="*.json")
        loaded = load_files(upload_directory=upload)

        assert loaded == {"a.json": "{}"}

    def test_skips_binary_files(self, tmp_path):
        """Binary files are not uploaded."""
        (tmp_path / "image.bin").write_bytes(b"\x89PNG\x00\x00")
        (tmp_path / "notes.txt").write_text("text")

        loaded = load_files(upload_directory=UploadDirectory(source=str(tmp_path)))

        assert loaded == {"notes.txt": "text"}

    def test_inline_files_override_directory(self, tmp_path):
        """Inline content wins over a directory file with the same path."""
        (tmp_path / "a.txt").write_text("from disk")

        loaded = load_files(
            {"a.txt": "inline", "b.txt": "b"},
            UploadDirectory(source=str(tmp_path)),
        )

        assert loaded == {"a.txt": "inline", "b.txt": "b"}
        assert list(loaded) == ["a.txt", "b.txt"]

    def test_absolute_inline_paths_are_made_relative(self):
        """Leading slashes are dropped so files nest under the destination."""
        assert load_files({"/etc/evil": "x", "./src//a.py": "y"}) == {
            "etc/evil": "x",
            "src/a.py": "y",
        }

    @pytest.mark.parametrize("path", ["../outside", "a/../../outside", "/..", "", "/"])
    def test_rejects_paths_outside_destination(self, path):
        """Paths that leave the destination or name no file are rejected."""
        with pytest.raises(ValueError, match="inside the destination"):
            load_files({path: "x"})

    def test_inner_parent_segments_are_normalized(self):
        """'..' that stays inside the destination is collapsed."""
        assert list(load_files({"a/b/../c.txt": "c"})) == ["a/c.txt"]

    def test_missing_directory_raises(self, tmp_path):
        """A missing upload directory is an error."""
        with pytest.raises(FileNotFoundError, match="does not exist"):
            load_files(upload_directory=UploadDirectory(source=str(tmp_path / "nope")))
