"""CSV formatter for source-metrics.

One row per declaration, file or package, with nested records flattened
into dotted column names.
"""

from typing import Any, Iterator

from ..rollup.models import ProjectStats
from .base import BaseFormatter
from .serialization import flatten, to_csv, to_ordered_dict

LEVELS = ("declaration", "file", "package")


class CsvFormatter(BaseFormatter):
    """Render one level of the project tree as CSV."""

    def __init__(self, level: str = "file") -> None:
        if level not in LEVELS:
            raise ValueError(f"Unknown CSV level: {level!r}. Choose from: {', '.join(LEVELS)}")
        self.level = level

    def render(self, stats: ProjectStats) -> None:
        print(self.format(stats), end="")

    def format(self, stats: ProjectStats) -> str:
        rows = list(self._rows(stats))
        if not rows:
            return to_csv(self._key_columns(), [])
        header = list(rows[0])
        return to_csv(header, ([row.get(col) for col in header] for row in rows))

    def _key_columns(self) -> list[str]:
        if self.level == "declaration":
            return ["file", "package"]
        if self.level == "file":
            return ["file", "package", "file_id"]
        return ["package", "package_id"]

    def _rows(self, stats: ProjectStats) -> Iterator[dict[str, Any]]:
        for pkg in stats.packages:
            if self.level == "package":
                row = {"package": pkg.metadata.name, "package_id": pkg.metadata.id}
                row.update(flatten(to_ordered_dict(pkg.rollup)))
                yield row
                continue

            for fs in pkg.files:
                if self.level == "file":
                    row = {
                        "file": fs.metadata.path,
                        "package": fs.metadata.package,
                        "file_id": fs.metadata.id,
                    }
                    row.update(flatten(to_ordered_dict(fs.rollup)))
                    yield row
                    continue

                for decl in fs.declarations:
                    row = {"file": fs.metadata.path, "package": fs.metadata.package}
                    row.update(flatten(to_ordered_dict(decl)))
                    yield row
