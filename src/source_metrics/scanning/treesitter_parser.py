"""Tree-sitter parser wrapper.

tree-sitter is an optional dependency (``pip install source-metrics[parsing]``).
Check TREE_SITTER_AVAILABLE before constructing a parser.

Usage:
    if TREE_SITTER_AVAILABLE:
        parser = TreeSitterParser()
        tree = parser.parse(code_bytes, "python")
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

TREE_SITTER_AVAILABLE = False
_tree_sitter_module: Any = None
_language_modules: dict[str, Any] = {}

try:
    import tree_sitter as _tree_sitter_module  # type: ignore[no-redef]

    TREE_SITTER_AVAILABLE = True

    try:
        import tree_sitter_python

        _language_modules["python"] = tree_sitter_python
    except ImportError:
        pass

except ImportError:
    TREE_SITTER_AVAILABLE = False


def get_supported_languages() -> list[str]:
    """Get list of languages with installed grammars."""
    if not TREE_SITTER_AVAILABLE:
        return []
    return list(_language_modules.keys())


class TreeSitterParser:
    """Holds one tree-sitter parser per installed grammar."""

    def __init__(self) -> None:
        self._parsers: dict[str, Any] = {}

        if not TREE_SITTER_AVAILABLE:
            return

        for lang_name, lang_module in _language_modules.items():
            lang_fn = getattr(lang_module, f"language_{lang_name}", None)
            if lang_fn is None:
                lang_fn = getattr(lang_module, "language", None)
            if lang_fn is None:
                logger.debug(f"Grammar module for {lang_name} exposes no language()")
                continue

            # tree-sitter >= 0.23 returns PyCapsule; wrap in Language()
            lang_obj = _tree_sitter_module.Language(lang_fn())
            self._parsers[lang_name] = _tree_sitter_module.Parser(lang_obj)

    def is_language_supported(self, language: str) -> bool:
        return language in self._parsers

    def parse(self, code: bytes, language: str) -> Any:
        """Parse code and return the syntax tree, or None if unsupported."""
        parser = self._parsers.get(language)
        if parser is None:
            return None
        return parser.parse(code)
