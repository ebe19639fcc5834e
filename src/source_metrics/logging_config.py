"""
Logging for source-metrics runs.

Reports (json, csv, rich tables) own stdout. Diagnostics such as skipped
files, parse failures and per-file timings go to stderr through rich, and
optionally to a plain-text log file as well, so piping a report into a file
or another tool never mixes in log lines.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "source_metrics"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level(verbose: bool, quiet: bool) -> int:
    # quiet wins so `-q -v` in a script still keeps stderr clean
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route source-metrics diagnostics to stderr and, if asked, a log file.

    The default level is WARNING, which shows one line per skipped file and
    the skipped total. Verbose adds per-file DEBUG timings and source paths.

    Args:
        verbose: Log per-file DEBUG detail
        quiet: Log errors only; overrides verbose
        log_file: Also append plain-text records to this path

    Returns:
        The ``source_metrics`` package logger
    """
    level = _level(verbose, quiet)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            # file paths in messages may contain [brackets]
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    # force: repeated CLI invocations in one process replace earlier handlers
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger
