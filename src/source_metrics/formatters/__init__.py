"""Output formatters for source-metrics."""

from .base import BaseFormatter
from .csv_formatter import CsvFormatter
from .json_formatter import JsonFormatter
from .rich_formatter import RichFormatter
from .serialization import csv_cell, flatten, from_csv, to_csv, to_json, to_ordered_dict, unflatten


def get_formatter(name: str, level: str = "file") -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "rich", "json", "csv"
        level: Row level for CSV output ("declaration", "file", "package")

    Raises:
        ValueError: If name is not recognized
    """
    if name == "rich":
        return RichFormatter()
    if name == "json":
        return JsonFormatter()
    if name == "csv":
        return CsvFormatter(level)
    raise ValueError(f"Unknown formatter: {name!r}. Choose from: csv, json, rich")


__all__ = [
    "BaseFormatter",
    "CsvFormatter",
    "JsonFormatter",
    "RichFormatter",
    "csv_cell",
    "flatten",
    "from_csv",
    "get_formatter",
    "to_csv",
    "to_json",
    "to_ordered_dict",
    "unflatten",
]
