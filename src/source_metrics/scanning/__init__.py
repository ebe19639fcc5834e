"""Parser frontends that produce source_metrics syntax shapes."""

from ..exceptions import UnsupportedLanguageError
from ..syntax.base import SourceParser
from .normalizer import PythonSourceParser, package_name
from .treesitter_parser import TREE_SITTER_AVAILABLE, TreeSitterParser, get_supported_languages

_FRONTENDS = {"python": PythonSourceParser}


def get_parser(language: str = "python") -> SourceParser:
    """Instantiate the frontend for ``language``.

    Raises:
        UnsupportedLanguageError: No frontend, or its grammar is not installed.
    """
    frontend = _FRONTENDS.get(language)
    if frontend is None:
        raise UnsupportedLanguageError(language, sorted(_FRONTENDS))
    return frontend()


__all__ = [
    "TREE_SITTER_AVAILABLE",
    "PythonSourceParser",
    "TreeSitterParser",
    "get_parser",
    "get_supported_languages",
    "package_name",
]
