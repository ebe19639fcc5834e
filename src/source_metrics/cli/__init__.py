"""CLI entry point. Registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="source-metrics",
    help="source-metrics - complexity, nesting, branch density and rollups for a codebase",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"source-metrics {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """Measure a source tree and roll the metrics up by package and project."""


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
