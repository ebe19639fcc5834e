"""Combining rollups.

``combine`` is associative and commutative (up to float rounding) with
``EMPTY_ROLLUP`` as identity. Counts add, extremes take the max, averages
are weighted by the group sizes behind them, and every percentage or rate
is recomputed from the combined totals instead of being interpolated from
the two inputs. The low-documentation flag is likewise re-derived from the
combined totals; the other threshold flags count children and add.
"""

from dataclasses import fields
from functools import reduce
from typing import Iterable, TypeVar

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..math.statistics import Statistics
from .models import (
    EMPTY_ROLLUP,
    BranchDensityStats,
    CoreStats,
    ModifierStats,
    ParameterStats,
    PatternMatchingStats,
    Rollup,
)

T = TypeVar("T", CoreStats, ModifierStats, ParameterStats)


def add_counts(a: T, b: T) -> T:
    """Field-wise sum of two all-integer records."""
    return type(a)(**{f.name: getattr(a, f.name) + getattr(b, f.name) for f in fields(a)})


def combine_pattern_matching(a: PatternMatchingStats, b: PatternMatchingStats) -> PatternMatchingStats:
    matches = a.matches + b.matches
    cases = a.cases + b.cases
    return PatternMatchingStats(
        matches=matches,
        cases=cases,
        guards=a.guards + b.guards,
        wildcards=a.wildcards + b.wildcards,
        max_nesting=max(a.max_nesting, b.max_nesting),
        nested_matches=a.nested_matches + b.nested_matches,
        avg_cases_per_match=cases / matches if matches else 0.0,
    )


def with_branch_rates(stats: BranchDensityStats, loc: int) -> BranchDensityStats:
    """Recompute per-100-LOC rates against ``loc``."""
    return BranchDensityStats(
        branches=stats.branches,
        conditionals=stats.conditionals,
        cases=stats.cases,
        loops=stats.loops,
        catch_cases=stats.catch_cases,
        bool_ops=stats.bool_ops,
        density_per_100=Statistics.per_hundred(stats.branches, loc),
        bool_ops_per_100=Statistics.per_hundred(stats.bool_ops, loc),
    )


def combine_branch_density(
    a: BranchDensityStats, b: BranchDensityStats, loc: int
) -> BranchDensityStats:
    summed = BranchDensityStats(
        branches=a.branches + b.branches,
        conditionals=a.conditionals + b.conditionals,
        cases=a.cases + b.cases,
        loops=a.loops + b.loops,
        catch_cases=a.catch_cases + b.catch_cases,
        bool_ops=a.bool_ops + b.bool_ops,
    )
    return with_branch_rates(summed, loc)


def is_low_documentation(core: CoreStats, threshold: float) -> bool:
    if core.public_symbols == 0:
        return False
    return Statistics.percentage(core.documented_public_symbols, core.public_symbols) < threshold


def derived_percentages(core: CoreStats, modifiers: ModifierStats) -> dict:
    """Percentages that are pure functions of the totals."""
    return {
        "doc_coverage_pct": Statistics.percentage(
            core.documented_public_symbols, core.public_symbols
        ),
        "deprecated_density_pct": Statistics.percentage(core.deprecated_symbols, core.symbols),
        "return_type_explicitness_pct": Statistics.percentage(
            modifiers.explicit_defs_vals_vars, core.defs_vals_vars
        ),
        "public_return_type_explicitness_pct": Statistics.percentage(
            modifiers.explicit_public_defs_vals_vars, core.public_defs_vals_vars
        ),
    }


def combine(a: Rollup, b: Rollup, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> Rollup:
    core = add_counts(a.core, b.core)
    modifiers = add_counts(a.modifiers, b.modifiers)
    weighted = Statistics.weighted_mean

    return Rollup(
        core=core,
        modifiers=modifiers,
        parameters=add_counts(a.parameters, b.parameters),
        pattern_matching=combine_pattern_matching(a.pattern_matching, b.pattern_matching),
        branch_density=combine_branch_density(a.branch_density, b.branch_density, core.loc),
        avg_file_size_bytes=weighted(
            a.avg_file_size_bytes, a.core.files, b.avg_file_size_bytes, b.core.files
        ),
        avg_complexity=weighted(a.avg_complexity, a.core.symbols, b.avg_complexity, b.core.symbols),
        max_complexity=max(a.max_complexity, b.max_complexity),
        avg_nesting_depth=weighted(
            a.avg_nesting_depth, a.core.symbols, b.avg_nesting_depth, b.core.symbols
        ),
        max_nesting_depth=max(a.max_nesting_depth, b.max_nesting_depth),
        items_with_high_complexity=a.items_with_high_complexity + b.items_with_high_complexity,
        items_with_high_nesting=a.items_with_high_nesting + b.items_with_high_nesting,
        items_with_high_branch_density=(
            a.items_with_high_branch_density + b.items_with_high_branch_density
        ),
        items_with_high_pattern_matching=(
            a.items_with_high_pattern_matching + b.items_with_high_pattern_matching
        ),
        items_with_high_parameter_count=(
            a.items_with_high_parameter_count + b.items_with_high_parameter_count
        ),
        items_with_low_documentation=int(
            is_low_documentation(core, thresholds.low_documentation)
        ),
        **derived_percentages(core, modifiers),
    )


def fold(rollups: Iterable[Rollup], thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> Rollup:
    """Left fold with the empty rollup as seed."""
    return reduce(lambda acc, r: combine(acc, r, thresholds), rollups, EMPTY_ROLLUP)
