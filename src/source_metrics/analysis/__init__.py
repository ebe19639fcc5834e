"""Project-level analysis pipeline."""

from .engine import ProjectAnalyzer

__all__ = ["ProjectAnalyzer"]
