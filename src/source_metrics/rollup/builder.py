"""Build file, package and project statistics bottom-up.

declaration metrics -> file rollup -> package rollup -> project rollup.
Nothing at a lower level reads from a higher one.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from functools import reduce
from pathlib import Path
from typing import Iterable, Optional, Sequence

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..identity import file_id, normalize_path, package_id
from ..math.statistics import Statistics
from ..metrics.declaration import analyze_declaration
from ..metrics.models import DeclarationMetrics
from ..syntax.base import ParsedFile
from .algebra import (
    combine_pattern_matching,
    derived_percentages,
    fold,
    is_low_documentation,
    with_branch_rates,
)
from .models import (
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

logger = logging.getLogger(__name__)

DEFS_VALS_VARS = ("def", "val", "var")


def _count(decls: Iterable[DeclarationMetrics], predicate) -> int:
    return sum(1 for d in decls if predicate(d))


def _visible(d: DeclarationMetrics, access: str) -> bool:
    return not d.is_nested and d.access == access


def core_stats(decls: Sequence[DeclarationMetrics], loc: int, size_bytes: int) -> CoreStats:
    functions = [d for d in decls if d.kind == "def"]
    dvv = [d for d in decls if d.kind in DEFS_VALS_VARS]
    return CoreStats(
        files=1,
        loc=loc,
        file_size_bytes=size_bytes,
        functions=len(functions),
        public_functions=_count(functions, lambda d: _visible(d, "public")),
        protected_functions=_count(functions, lambda d: _visible(d, "protected")),
        private_functions=_count(functions, lambda d: _visible(d, "private")),
        symbols=len(decls),
        public_symbols=_count(decls, lambda d: _visible(d, "public")),
        protected_symbols=_count(decls, lambda d: _visible(d, "protected")),
        private_symbols=_count(decls, lambda d: _visible(d, "private")),
        nested_symbols=_count(decls, lambda d: d.is_nested),
        documented_public_symbols=_count(decls, lambda d: _visible(d, "public") and d.has_doc),
        deprecated_symbols=_count(decls, lambda d: d.is_deprecated),
        defs_vals_vars=len(dvv),
        public_defs_vals_vars=_count(dvv, lambda d: _visible(d, "public")),
    )


def modifier_stats(decls: Sequence[DeclarationMetrics]) -> ModifierStats:
    dvv = [d for d in decls if d.kind in DEFS_VALS_VARS]
    return ModifierStats(
        explicit_defs_vals_vars=_count(dvv, lambda d: d.return_type.explicit),
        explicit_public_defs_vals_vars=_count(
            dvv, lambda d: d.return_type.explicit and _visible(d, "public")
        ),
        inline_methods=_count(decls, lambda d: d.modifiers.inline and d.kind == "def"),
        inline_vals=_count(decls, lambda d: d.modifiers.inline and d.kind == "val"),
        inline_vars=_count(decls, lambda d: d.modifiers.inline and d.kind == "var"),
        evidence_vals=_count(decls, lambda d: d.modifiers.evidence and d.kind == "val"),
        evidence_vars=_count(decls, lambda d: d.modifiers.evidence and d.kind == "var"),
        evidence_conversions=_count(decls, lambda d: d.modifiers.evidence_conversion),
        given_instances=_count(decls, lambda d: d.modifiers.given_instance),
        given_conversions=_count(decls, lambda d: d.modifiers.given_conversion),
    )


def parameter_stats(decls: Sequence[DeclarationMetrics]) -> ParameterStats:
    return ParameterStats(
        total=sum(d.parameters.total for d in decls),
        lists=sum(d.parameters.lists for d in decls),
        evidence_lists=sum(d.parameters.evidence_lists for d in decls),
        evidence_params=sum(d.parameters.evidence_params for d in decls),
        defaulted=sum(d.parameters.defaulted for d in decls),
        by_name=sum(d.parameters.by_name for d in decls),
        vararg=sum(d.parameters.vararg for d in decls),
        inline_params=sum(d.parameters.inline_params for d in decls),
    )


def pattern_matching_stats(decls: Sequence[DeclarationMetrics]) -> PatternMatchingStats:
    per_decl = (
        PatternMatchingStats(
            matches=d.pattern_matching.matches,
            cases=d.pattern_matching.cases,
            guards=d.pattern_matching.guards,
            wildcards=d.pattern_matching.wildcards,
            max_nesting=d.pattern_matching.max_nesting,
            nested_matches=d.pattern_matching.nested_matches,
        )
        for d in decls
    )
    return reduce(combine_pattern_matching, per_decl, PatternMatchingStats())


def branch_density_stats(decls: Sequence[DeclarationMetrics], loc: int) -> BranchDensityStats:
    summed = BranchDensityStats(
        branches=sum(d.branch_density.branches for d in decls),
        conditionals=sum(d.branch_density.conditionals for d in decls),
        cases=sum(d.branch_density.cases for d in decls),
        loops=sum(d.branch_density.loops for d in decls),
        catch_cases=sum(d.branch_density.catch_cases for d in decls),
        bool_ops=sum(d.branch_density.bool_ops for d in decls),
    )
    return with_branch_rates(summed, loc)


def _above(values: Sequence[float], threshold: float) -> int:
    """1 when the mean of ``values`` is strictly above ``threshold``."""
    return int(bool(values) and Statistics.mean(values) > threshold)


def file_rollup(
    decls: Sequence[DeclarationMetrics],
    loc: int,
    size_bytes: int,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> Rollup:
    """Rollup for a single file from its declarations' metrics."""
    core = core_stats(decls, loc, size_bytes)
    modifiers = modifier_stats(decls)
    functions = [d for d in decls if d.kind == "def"]
    complexities = [d.complexity for d in decls]
    nestings = [d.nesting_depth for d in decls]

    return Rollup(
        core=core,
        modifiers=modifiers,
        parameters=parameter_stats(decls),
        pattern_matching=pattern_matching_stats(decls),
        branch_density=branch_density_stats(decls, loc),
        avg_file_size_bytes=float(size_bytes),
        avg_complexity=Statistics.mean(complexities),
        max_complexity=max(complexities, default=0),
        avg_nesting_depth=Statistics.mean(nestings),
        max_nesting_depth=max(nestings, default=0),
        items_with_high_complexity=_above(
            [d.complexity for d in functions], thresholds.high_complexity
        ),
        items_with_high_nesting=_above(nestings, thresholds.high_nesting),
        items_with_high_branch_density=_above(
            [d.branch_density.branches for d in decls], thresholds.high_branch_density
        ),
        items_with_high_pattern_matching=_above(
            [d.pattern_matching.matches for d in decls], thresholds.high_pattern_matching
        ),
        items_with_high_parameter_count=_above(
            [d.parameters.total for d in functions], thresholds.high_parameter_count
        ),
        items_with_low_documentation=int(is_low_documentation(core, thresholds.low_documentation)),
        **derived_percentages(core, modifiers),
    )


def build_file_stats(
    parsed: ParsedFile,
    root: Optional[Path] = None,
    project_id: Optional[str] = None,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> FileStats:
    fid = file_id(parsed.path, root, project_id)
    decls = tuple(analyze_declaration(d, fid) for d in parsed.declarations)
    metadata = FileMetadata(
        id=fid,
        path=normalize_path(parsed.path, root),
        name=Path(parsed.path).name,
        package=parsed.package,
        language=parsed.language,
        loc=parsed.loc,
        size_bytes=parsed.size_bytes,
    )
    return FileStats(
        metadata=metadata,
        rollup=file_rollup(decls, parsed.loc, parsed.size_bytes, thresholds),
        declarations=decls,
    )


def build_package_stats(
    files: Sequence[FileStats],
    project_id: Optional[str] = None,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> list[PackageStats]:
    """Group files by package name; packages and their files sorted by name/path."""
    grouped: dict[str, list[FileStats]] = defaultdict(list)
    for fs in files:
        grouped[fs.metadata.package].append(fs)

    packages = []
    for name in sorted(grouped):
        members = sorted(grouped[name], key=lambda f: f.metadata.path)
        packages.append(
            PackageStats(
                metadata=PackageMetadata(id=package_id(name, project_id), name=name),
                rollup=fold((f.rollup for f in members), thresholds),
                files=tuple(members),
            )
        )
    return packages


def build_project_stats(
    files: Sequence[FileStats],
    name: str = "project",
    project_id: Optional[str] = None,
    root: Optional[Path] = None,
    skipped: Sequence[SkippedFile] = (),
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> ProjectStats:
    packages = build_package_stats(files, project_id, thresholds)
    rollup = fold((p.rollup for p in packages), thresholds)
    logger.debug(
        f"Built project rollup: {len(packages)} packages, "
        f"{rollup.core.files} files, {len(skipped)} skipped"
    )
    return ProjectStats(
        metadata=ProjectMetadata(
            name=name, id=project_id, root=normalize_path(root) if root is not None else ""
        ),
        rollup=rollup,
        packages=tuple(packages),
        skipped_files=tuple(sorted(skipped, key=lambda s: s.path)),
    )
