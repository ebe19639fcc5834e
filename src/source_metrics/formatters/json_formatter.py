"""JSON formatter for source-metrics."""

from ..rollup.models import ProjectStats
from .base import BaseFormatter
from .serialization import to_json, to_ordered_dict


class JsonFormatter(BaseFormatter):
    """Render the full project tree as JSON."""

    def render(self, stats: ProjectStats) -> None:
        print(self.format(stats))

    def format(self, stats: ProjectStats) -> str:
        data = to_ordered_dict(stats)
        data["skipped_count"] = stats.skipped_count
        return to_json(data)
