"""Parameter-shape counts for a declaration."""

from typing import Sequence

from ..syntax.declarations import ParamList
from .models import ParameterCounts


def parameter_counts(param_lists: Sequence[ParamList]) -> ParameterCounts:
    params = [p for plist in param_lists for p in plist.params]
    evidence_lists = [plist for plist in param_lists if plist.is_evidence]
    return ParameterCounts(
        total=len(params),
        lists=len(param_lists),
        evidence_lists=len(evidence_lists),
        evidence_params=sum(len(plist.params) for plist in evidence_lists),
        defaulted=sum(1 for p in params if p.has_default),
        by_name=sum(1 for p in params if p.by_name),
        vararg=sum(1 for p in params if p.vararg),
        inline_params=sum(1 for p in params if p.inline),
    )
