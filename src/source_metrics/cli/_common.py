"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    project_name: Optional[str] = None,
    project_id: Optional[str] = None,
) -> AnalysisConfig:
    """Build configuration from CLI options; unset options keep file/env values."""
    return load_config(
        config_file=config,
        workers=workers,
        project_name=project_name,
        project_id=project_id,
    )
