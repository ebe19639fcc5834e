"""Base formatter interface for source-metrics output rendering."""

from abc import ABC, abstractmethod

from ..rollup.models import ProjectStats


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, stats: ProjectStats) -> None:
        """Render results to the terminal."""

    @abstractmethod
    def format(self, stats: ProjectStats) -> str:
        """Return formatted string representation of results."""
