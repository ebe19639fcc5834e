"""Tests for source_metrics.identity."""

import hashlib
from pathlib import Path

from source_metrics.identity import (
    declaration_id,
    file_id,
    normalize_path,
    package_id,
    stable_id,
)


class TestStableId:
    def test_no_parts_is_hash_of_empty_string(self):
        assert stable_id() == hashlib.sha1(b"").hexdigest()[:16]
        assert stable_id() == "da39a3ee5e6b4b0d"

    def test_parts_concatenate(self):
        """Parts are joined without a delimiter."""
        assert stable_id("a", "b") == stable_id("ab")

    def test_shape(self):
        value = stable_id("src/main.py")
        assert len(value) == 16
        assert value == value.lower()
        int(value, 16)

    def test_deterministic(self):
        assert stable_id("x", "y") == stable_id("x", "y")
        assert stable_id("x") != stable_id("y")

    def test_non_ascii(self):
        assert stable_id("café") == hashlib.sha1("café".encode("utf-8")).hexdigest()[:16]


class TestNormalizePath:
    def test_relative_to_root(self, tmp_path):
        path = tmp_path / "pkg" / "mod.py"
        assert normalize_path(path, tmp_path) == "pkg/mod.py"

    def test_outside_root_is_absolute(self, tmp_path):
        other = tmp_path.parent / "elsewhere" / "mod.py"
        result = normalize_path(other, tmp_path / "root")
        assert result.endswith("elsewhere/mod.py")
        assert Path(result).is_absolute()

    def test_no_root(self):
        assert normalize_path("/a/b/c.py") == "/a/b/c.py"

    def test_dot_segments_collapse(self, tmp_path):
        assert normalize_path(tmp_path / "a" / ".." / "b.py", tmp_path) == "b.py"


class TestDerivedIds:
    def test_file_id_uses_relative_path(self, tmp_path):
        assert file_id(tmp_path / "m.py", tmp_path) == stable_id("m.py")

    def test_file_id_project_scope(self, tmp_path):
        path = tmp_path / "m.py"
        assert file_id(path, tmp_path, "p1") == stable_id("p1:m.py")
        assert file_id(path, tmp_path, "p1") != file_id(path, tmp_path, "p2")

    def test_package_id(self):
        assert package_id("app.core") == stable_id("app.core")
        assert package_id("app.core", "p") == stable_id("p:app.core")

    def test_declaration_id(self):
        assert declaration_id("f", "run(Int)", 3) == stable_id("f:run(Int):3")
        assert declaration_id("f", "run(Int)", 3) != declaration_id("f", "run(Int)", 4)
