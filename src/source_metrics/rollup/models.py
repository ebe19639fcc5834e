"""Aggregate statistics records for files, packages and projects.

Every record is immutable. ``rollup.algebra`` defines how two records of the
same type combine; nothing here knows how to merge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..metrics.models import DeclarationMetrics


@dataclass(frozen=True)
class CoreStats:
    """Additive counts. Visibility counts cover non-nested symbols only."""

    files: int = 0
    loc: int = 0
    file_size_bytes: int = 0
    functions: int = 0
    public_functions: int = 0
    protected_functions: int = 0
    private_functions: int = 0
    symbols: int = 0
    public_symbols: int = 0
    protected_symbols: int = 0
    private_symbols: int = 0
    nested_symbols: int = 0
    documented_public_symbols: int = 0
    deprecated_symbols: int = 0
    defs_vals_vars: int = 0
    public_defs_vals_vars: int = 0


@dataclass(frozen=True)
class ModifierStats:
    explicit_defs_vals_vars: int = 0
    explicit_public_defs_vals_vars: int = 0
    inline_methods: int = 0
    inline_vals: int = 0
    inline_vars: int = 0
    evidence_vals: int = 0
    evidence_vars: int = 0
    evidence_conversions: int = 0
    given_instances: int = 0
    given_conversions: int = 0


@dataclass(frozen=True)
class ParameterStats:
    total: int = 0
    lists: int = 0
    evidence_lists: int = 0
    evidence_params: int = 0
    defaulted: int = 0
    by_name: int = 0
    vararg: int = 0
    inline_params: int = 0


@dataclass(frozen=True)
class PatternMatchingStats:
    matches: int = 0
    cases: int = 0
    guards: int = 0
    wildcards: int = 0
    max_nesting: int = 0
    nested_matches: int = 0
    avg_cases_per_match: float = 0.0


@dataclass(frozen=True)
class BranchDensityStats:
    branches: int = 0
    conditionals: int = 0
    cases: int = 0
    loops: int = 0
    catch_cases: int = 0
    bool_ops: int = 0
    density_per_100: float = 0.0
    bool_ops_per_100: float = 0.0


@dataclass(frozen=True)
class Rollup:
    """Statistics for any group of declarations.

    Averages are weighted by ``core.symbols`` (complexity, nesting) or
    ``core.files`` (file size). Percentages are always derived from the
    totals in this record. ``items_with_*`` count children over a threshold.
    """

    core: CoreStats = field(default_factory=CoreStats)
    modifiers: ModifierStats = field(default_factory=ModifierStats)
    parameters: ParameterStats = field(default_factory=ParameterStats)
    pattern_matching: PatternMatchingStats = field(default_factory=PatternMatchingStats)
    branch_density: BranchDensityStats = field(default_factory=BranchDensityStats)
    avg_file_size_bytes: float = 0.0
    avg_complexity: float = 0.0
    max_complexity: int = 0
    avg_nesting_depth: float = 0.0
    max_nesting_depth: int = 0
    doc_coverage_pct: float = 0.0
    deprecated_density_pct: float = 0.0
    return_type_explicitness_pct: float = 0.0
    public_return_type_explicitness_pct: float = 0.0
    items_with_high_complexity: int = 0
    items_with_high_nesting: int = 0
    items_with_high_branch_density: int = 0
    items_with_high_pattern_matching: int = 0
    items_with_high_parameter_count: int = 0
    items_with_low_documentation: int = 0


EMPTY_ROLLUP = Rollup()


@dataclass(frozen=True)
class FileMetadata:
    id: str
    path: str
    name: str
    package: str
    language: str
    loc: int
    size_bytes: int


@dataclass(frozen=True)
class FileStats:
    metadata: FileMetadata
    rollup: Rollup
    declarations: Tuple[DeclarationMetrics, ...] = ()


@dataclass(frozen=True)
class PackageMetadata:
    id: str
    name: str


@dataclass(frozen=True)
class PackageStats:
    metadata: PackageMetadata
    rollup: Rollup
    files: Tuple[FileStats, ...] = ()


@dataclass(frozen=True)
class SkippedFile:
    path: str
    reason: str


@dataclass(frozen=True)
class ProjectMetadata:
    name: str
    id: Optional[str] = None
    root: str = ""


@dataclass(frozen=True)
class ProjectStats:
    metadata: ProjectMetadata
    rollup: Rollup
    packages: Tuple[PackageStats, ...] = ()
    skipped_files: Tuple[SkippedFile, ...] = ()

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_files)

    @property
    def files(self) -> Tuple[FileStats, ...]:
        return tuple(f for pkg in self.packages for f in pkg.files)
