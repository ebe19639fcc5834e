"""Ordered key/value views of result records and their text encodings.

Every export goes through ``to_ordered_dict`` so field order always follows
the dataclass definitions. ``flatten`` produces dotted keys for tabular
output; ``unflatten`` reverses it. Keys must not contain dots or brackets.
"""

import csv
import io
import json
import math
import re
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Iterable, Sequence

SEPARATOR = "."
_INDEX = re.compile(r"\[(\d+)\]")


def to_ordered_dict(value: Any) -> Any:
    """Recursively convert dataclasses to dicts in field order.

    Enums become their values and tuples become lists; other scalars and
    None pass through.
    """
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_ordered_dict(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(k): to_ordered_dict(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_ordered_dict(v) for v in value]
    return value


def flatten(value: Any, prefix: str = "") -> dict[str, Any]:
    """Flatten nested dicts/lists into ``{"a.b[0].c": leaf}``.

    Dict keys are joined with dots and list positions are written as
    ``[i]``, so a dict keyed ``"0"`` stays a dict on the way back.
    Empty dicts and lists are kept as leaves so the shape survives.
    """
    flat: dict[str, Any] = {}
    if isinstance(value, dict) and value:
        items: Iterable = ((f"{prefix}{SEPARATOR}{k}" if prefix else str(k), v) for k, v in value.items())
    elif isinstance(value, list) and value:
        items = ((f"{prefix}[{i}]", v) for i, v in enumerate(value))
    else:
        flat[prefix] = value
        return flat

    for path, item in items:
        flat.update(flatten(item, path))
    return flat


def unflatten(flat: dict[str, Any]) -> Any:
    """Inverse of ``flatten``."""
    if list(flat) == [""]:
        return flat[""]

    root: dict = {}
    for path, leaf in flat.items():
        steps = _steps(path)
        node = root
        for step in steps[:-1]:
            node = node.setdefault(step, {})
        node[steps[-1]] = leaf
    return _listify(root)


def _steps(path: str) -> list:
    """``"a.b[0][1].c"`` -> ``["a", "b", 0, 1, "c"]``."""
    steps: list = []
    for part in path.split(SEPARATOR):
        name, bracket, rest = part.partition("[")
        if name or not bracket:
            steps.append(name)
        steps.extend(int(i) for i in _INDEX.findall(bracket + rest))
    return steps


def _listify(node: Any) -> Any:
    # list positions are the only int keys; dict keys are always strings
    if not isinstance(node, dict) or not node:
        return node
    converted = {k: _listify(v) for k, v in node.items()}
    if all(isinstance(k, int) for k in converted):
        return [converted[i] for i in sorted(converted)]
    return converted


def _json_safe(value: Any) -> Any:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return value
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    return value


def to_json(value: Any, indent: int = 2) -> str:
    """JSON text; non-ASCII kept as-is, NaN/Infinity written as strings."""
    return json.dumps(_json_safe(to_ordered_dict(value)), indent=indent, ensure_ascii=False)


def csv_cell(value: Any) -> str:
    """Cell text before quoting: floats to six places, None empty."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return f"{value:.6f}"
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def to_csv(header: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """RFC 4180 CSV: cells holding a comma, quote, CR or LF are quoted."""
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
    writer.writerow(header)
    for row in rows:
        writer.writerow([csv_cell(v) for v in row])
    return output.getvalue()


def from_csv(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text, newline="")))
