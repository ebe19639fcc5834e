"""Return-type explicitness."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from ..math.statistics import Statistics
from ..syntax.declarations import Access, Declaration
from .models import ReturnTypeInfo
from .type_inference import infer_type


def return_type_info(decl: Declaration) -> ReturnTypeInfo:
    """Explicit when the type is written or there is no body to infer from."""
    if decl.has_explicit_type or decl.is_abstract:
        return ReturnTypeInfo(explicit=True, inferred=None)
    return ReturnTypeInfo(explicit=False, inferred=infer_type(decl.body))


@dataclass(frozen=True)
class ReturnTypeSummary:
    total: int = 0
    explicit: int = 0
    public_total: int = 0
    public_explicit: int = 0
    inferred: int = 0

    @property
    def pct_explicit(self) -> float:
        return Statistics.percentage(self.explicit, self.total, empty=100.0)

    @property
    def pct_explicit_public(self) -> float:
        return Statistics.percentage(self.public_explicit, self.public_total, empty=100.0)


def summarize_return_types(
    records: Iterable[Tuple[Declaration, ReturnTypeInfo]],
) -> ReturnTypeSummary:
    """Counts over defs, vals and vars only; type-like declarations are skipped."""
    total = explicit = public_total = public_explicit = inferred = 0
    for decl, info in records:
        if not decl.kind.is_def_val_var:
            continue
        total += 1
        explicit += info.explicit
        inferred += info.inferred is not None
        if decl.access is Access.PUBLIC:
            public_total += 1
            public_explicit += info.explicit
    return ReturnTypeSummary(total, explicit, public_total, public_explicit, inferred)
