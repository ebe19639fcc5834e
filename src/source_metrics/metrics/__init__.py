"""Per-declaration analyzers.

All functions here are pure: they read node trees and declarations and
return immutable records.
"""

from .branch_density import branch_density
from .complexity import cyclomatic_complexity
from .declaration import analyze_declaration
from .models import (
    BranchDensity,
    DeclarationMetrics,
    ModifierFlags,
    ParameterCounts,
    PatternMatchCounts,
    ReturnTypeInfo,
)
from .modifiers import is_evidence_conversion, modifier_flags
from .nesting import nesting_depth
from .parameters import parameter_counts
from .pattern_matching import pattern_matching
from .return_type import ReturnTypeSummary, return_type_info, summarize_return_types
from .type_inference import infer_type

__all__ = [
    "BranchDensity",
    "DeclarationMetrics",
    "ModifierFlags",
    "ParameterCounts",
    "PatternMatchCounts",
    "ReturnTypeInfo",
    "ReturnTypeSummary",
    "analyze_declaration",
    "branch_density",
    "cyclomatic_complexity",
    "infer_type",
    "is_evidence_conversion",
    "modifier_flags",
    "nesting_depth",
    "parameter_counts",
    "pattern_matching",
    "return_type_info",
    "summarize_return_types",
]
