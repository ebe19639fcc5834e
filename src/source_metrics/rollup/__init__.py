"""Rollup records, the combine algebra and bottom-up builders."""

from .algebra import combine, fold
from .builder import build_file_stats, build_package_stats, build_project_stats, file_rollup
from .models import (
    EMPTY_ROLLUP,
    BranchDensityStats,
    CoreStats,
    FileMetadata,
    FileStats,
    ModifierStats,
    PackageMetadata,
    PackageStats,
    ParameterStats,
    PatternMatchingStats,
    ProjectMetadata,
    ProjectStats,
    Rollup,
    SkippedFile,
)

__all__ = [
    "EMPTY_ROLLUP",
    "BranchDensityStats",
    "CoreStats",
    "FileMetadata",
    "FileStats",
    "ModifierStats",
    "PackageMetadata",
    "PackageStats",
    "ParameterStats",
    "PatternMatchingStats",
    "ProjectMetadata",
    "ProjectStats",
    "Rollup",
    "SkippedFile",
    "build_file_stats",
    "build_package_stats",
    "build_project_stats",
    "combine",
    "file_rollup",
    "fold",
]
