"""Configuration loading and management for source-metrics.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.source-metrics.toml)
    3. Project config (./source-metrics.toml)
    4. Explicit config file
    5. Environment variables (SOURCE_METRICS_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(workers=4)
    >>> config.workers
    4
    >>> config.thresholds.high_complexity
    10.0
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

ENV_PREFIX = "SOURCE_METRICS_"
CONFIG_FILENAME = "source-metrics.toml"


@dataclass(frozen=True)
class ThresholdConfig:
    """Quality-flag thresholds applied when a file rollup is built.

    A file is flagged when the average over its own declarations is strictly
    above the threshold (strictly below for documentation coverage).

    Attributes:
        high_complexity: Average McCabe complexity of the file's functions
        high_nesting: Average nesting depth of the file's declarations
        high_branch_density: Average branch count per declaration
        high_pattern_matching: Average pattern matches per declaration
        high_parameter_count: Average parameter count per function
        low_documentation: Public documentation coverage, in percent
    """

    high_complexity: float = 10.0
    high_nesting: float = 3.0
    high_branch_density: float = 5.0
    high_pattern_matching: float = 5.0
    high_parameter_count: float = 5.0
    low_documentation: float = 50.0

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        for field_name in (
            "high_complexity",
            "high_nesting",
            "high_branch_density",
            "high_pattern_matching",
            "high_parameter_count",
        ):
            if getattr(self, field_name) < 0:
                raise ValueError(f"{field_name} must be non-negative")

        if not 0.0 <= self.low_documentation <= 100.0:
            raise ValueError("low_documentation must be between 0.0 and 100.0")


DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for a project analysis run.

    Attributes:
        Project identity:
            project_name: Display name used in reports
            project_id: Optional id mixed into every file id

        Performance tuning:
            workers: Number of parallel workers (None = auto-detect)
            parallel_min_files: Below this many files, analyze sequentially

        File filtering:
            include_patterns: Glob patterns a file name must match
            exclude_patterns: Glob patterns (relative paths) to skip
            max_file_size_mb: Maximum file size to analyze (MB)
            follow_symlinks: Follow symbolic links during discovery
    """

    project_name: str = "project"
    project_id: Optional[str] = None

    workers: Optional[int] = None  # None = CPU count, capped at 8
    parallel_min_files: int = 10

    include_patterns: list[str] = field(default_factory=lambda: ["*.py"])
    exclude_patterns: list[str] = field(
        default_factory=lambda: [
            ".git/*",
            "venv/*",
            ".venv/*",
            "__pycache__/*",
            ".tox/*",
            ".mypy_cache/*",
            ".pytest_cache/*",
            "build/*",
            "dist/*",
            "*.egg-info/*",
            ".eggs/*",
            "node_modules/*",
        ]
    )
    max_file_size_mb: float = 10.0
    follow_symlinks: bool = False

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.project_name:
            raise ValueError("project_name must not be empty")
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.parallel_min_files < 1:
            raise ValueError("parallel_min_files must be at least 1")
        if not self.include_patterns:
            raise ValueError("include_patterns must not be empty")
        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)

    @property
    def effective_workers(self) -> int:
        """Worker count to use when none is configured."""
        if self.workers is not None:
            return self.workers
        return min(os.cpu_count() or 1, 8)


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep lower-priority values.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is missing or invalid
    """
    merged: dict = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / CONFIG_FILENAME
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    merged.update({k: v for k, v in overrides.items() if v is not None})

    thresholds = merged.pop("thresholds", None)
    if thresholds is not None:
        if isinstance(thresholds, dict):
            try:
                merged["thresholds"] = ThresholdConfig(**thresholds)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid [thresholds] config: {e}")
        elif isinstance(thresholds, ThresholdConfig):
            merged["thresholds"] = thresholds
        else:
            raise ConfigurationError("[thresholds] must be a table")

    try:
        return AnalysisConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from SOURCE_METRICS_* environment variables.

    Scalar fields only; list fields (include/exclude patterns) are ignored.

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the annotated type.

    Returns:
        Parsed value, or None if the type is not env-configurable

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    origin = getattr(type_hint, "__origin__", None)
    if origin is list or type_hint is list:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file and return the parsed dict."""
    try:
        import tomllib
    except ModuleNotFoundError:
        # Python < 3.11
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        return tomllib.load(f)
