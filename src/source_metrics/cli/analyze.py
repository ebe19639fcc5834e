"""Analyze CLI command -- measure a source tree."""

from pathlib import Path
from typing import Optional

import typer

from ..analysis import ProjectAnalyzer
from ..exceptions import AnalysisError, ConfigurationError
from ..formatters import get_formatter
from ..formatters.csv_formatter import LEVELS
from ..logging_config import setup_logging
from ..scanning import get_parser
from . import app
from ._common import console, resolve_config


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Project root to analyze",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich, json or csv",
    ),
    level: str = typer.Option(
        "file",
        "--level",
        "-l",
        help="CSV row level: declaration, file or package",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a source-metrics.toml file",
        exists=True,
        dir_okay=False,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Parallel workers (default: CPU count, max 8)",
        min=1,
    ),
    name: Optional[str] = typer.Option(None, "--name", help="Project name for the report"),
    project_id: Optional[str] = typer.Option(None, "--project-id", help="Id mixed into file ids"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write json/csv output to this file instead of stdout",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable DEBUG logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
):
    """
    Measure every source file under PATH.

    Computes complexity, nesting depth, branch density, pattern matching,
    parameter shape and return-type explicitness per declaration, then rolls
    them up per file, package and project. Files that fail to parse are
    reported as skipped.

    [bold cyan]Examples:[/bold cyan]

      source-metrics analyze src

      source-metrics analyze . --format json -o metrics.json

      source-metrics analyze . --format csv --level declaration
    """
    setup_logging(verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None)

    if output_format not in ("rich", "json", "csv"):
        console.print(f"[red]Unknown format:[/red] {output_format}")
        raise typer.Exit(2)
    if level not in LEVELS:
        console.print(f"[red]Unknown level:[/red] {level}")
        raise typer.Exit(2)

    try:
        cfg = resolve_config(config, workers, name, project_id)
        parser = get_parser("python")
    except (ConfigurationError, AnalysisError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    stats = ProjectAnalyzer(cfg, parser).analyze(path)
    formatter = get_formatter(output_format, level)

    if output_format == "rich":
        formatter.render(stats)
        return

    text = formatter.format(stats)
    if output is not None:
        output.write_text(text, encoding="utf-8")
        console.print(f"Wrote {output_format} report to [bold]{output}[/bold]")
    else:
        typer.echo(text, nl=output_format == "json")
