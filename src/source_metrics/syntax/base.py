"""Parser frontend contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from .declarations import Declaration


@dataclass(frozen=True)
class ParsedFile:
    """A source file after parsing and declaration discovery."""

    path: Path
    package: str
    language: str
    loc: int
    size_bytes: int
    declarations: Tuple[Declaration, ...]


class SourceParser(ABC):
    """Turns source text into a ParsedFile.

    Implementations normalize their grammar into ``source_metrics.syntax``
    node shapes. The metrics core never sees dialect-specific syntax.
    """

    language: str = "unknown"

    @abstractmethod
    def parse(self, source: str, path: Path, root: Path) -> ParsedFile:
        """Parse ``source`` read from ``path`` under project ``root``.

        Raises:
            ParsingError: If the source cannot be parsed.
        """


def count_loc(source: str) -> int:
    """Non-blank line count."""
    return sum(1 for line in source.splitlines() if line.strip())
