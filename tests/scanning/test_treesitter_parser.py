"""Tests for the tree-sitter wrapper and frontend registry."""

import pytest

from source_metrics.exceptions import UnsupportedLanguageError
from source_metrics.scanning import (
    TREE_SITTER_AVAILABLE,
    PythonSourceParser,
    TreeSitterParser,
    get_parser,
    get_supported_languages,
)

PYTHON_GRAMMAR = TREE_SITTER_AVAILABLE and "python" in get_supported_languages()


class TestRegistry:
    def test_unknown_language(self):
        with pytest.raises(UnsupportedLanguageError) as info:
            get_parser("cobol")
        assert info.value.supported_languages == ["python"]

    def test_missing_grammar(self):
        if PYTHON_GRAMMAR:
            pytest.skip("python grammar is installed")
        with pytest.raises(UnsupportedLanguageError):
            get_parser("python")


class TestWithoutTreeSitter:
    def test_no_languages(self):
        if TREE_SITTER_AVAILABLE:
            pytest.skip("tree-sitter is installed")
        assert get_supported_languages() == []
        assert not TreeSitterParser().is_language_supported("python")
        assert TreeSitterParser().parse(b"x = 1", "python") is None


@pytest.mark.skipif(not PYTHON_GRAMMAR, reason="tree-sitter-python not installed")
class TestTreeSitterParser:
    def test_python_supported(self):
        assert "python" in get_supported_languages()
        assert TreeSitterParser().is_language_supported("python")

    def test_parse_returns_tree(self):
        tree = TreeSitterParser().parse(b"def f():\n    return 1\n", "python")
        assert tree.root_node.type == "module"
        assert not tree.root_node.has_error

    def test_unsupported_language_returns_none(self):
        assert TreeSitterParser().parse(b"x", "cobol") is None

    def test_registry_builds_python_frontend(self):
        assert isinstance(get_parser("python"), PythonSourceParser)
