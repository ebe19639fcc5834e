"""Per-declaration metric records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BranchDensity:
    """Branch occurrences in one expression.

    The per-100-LOC rates stay 0.0 here; rollups compute them once the
    combined LOC denominator is known.
    """

    loc: int = 0
    branches: int = 0
    conditionals: int = 0
    cases: int = 0
    loops: int = 0
    catch_cases: int = 0
    bool_ops: int = 0
    density_per_100: float = 0.0
    bool_ops_per_100: float = 0.0


@dataclass(frozen=True)
class PatternMatchCounts:
    matches: int = 0
    cases: int = 0
    guards: int = 0
    wildcards: int = 0
    max_nesting: int = 0
    nested_matches: int = 0
    avg_cases_per_match: float = 0.0


@dataclass(frozen=True)
class ParameterCounts:
    total: int = 0
    lists: int = 0
    evidence_lists: int = 0
    evidence_params: int = 0
    defaulted: int = 0
    by_name: int = 0
    vararg: int = 0
    inline_params: int = 0


@dataclass(frozen=True)
class ModifierFlags:
    inline: bool = False
    evidence: bool = False
    abstract: bool = False
    given_instance: bool = False
    given_conversion: bool = False
    evidence_conversion: bool = False


@dataclass(frozen=True)
class ReturnTypeInfo:
    """Whether the result type is written out, and what we could infer if not."""

    explicit: bool
    inferred: Optional[str] = None


@dataclass(frozen=True)
class DeclarationMetrics:
    """All metrics for a single declaration."""

    id: str
    name: str
    qualified_name: str
    kind: str
    access: str
    is_nested: bool
    has_doc: bool
    is_deprecated: bool
    start_line: int
    end_line: int
    complexity: int
    nesting_depth: int
    branch_density: BranchDensity
    pattern_matching: PatternMatchCounts
    parameters: ParameterCounts
    modifiers: ModifierFlags
    return_type: ReturnTypeInfo

    @property
    def loc(self) -> int:
        return max(0, self.end_line - self.start_line + 1)
