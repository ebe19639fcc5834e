"""Pattern-match richness.

Only ``Match`` nodes count; catch lists and partial functions do not. A
match's scrutinee is visited at the enclosing match depth, its patterns,
guards and case bodies one level deeper.
"""

from dataclasses import dataclass, replace
from typing import Optional

from ..syntax.nodes import Match, Node, Wildcard, children
from .models import PatternMatchCounts


@dataclass(frozen=True)
class _Tally:
    matches: int = 0
    cases: int = 0
    guards: int = 0
    wildcards: int = 0
    max_nesting: int = 0
    nested_matches: int = 0


def pattern_matching(node: Optional[Node]) -> PatternMatchCounts:
    tally = _visit(node, 0, _Tally()) if node is not None else _Tally()
    avg = tally.cases / tally.matches if tally.matches else 0.0
    return PatternMatchCounts(
        matches=tally.matches,
        cases=tally.cases,
        guards=tally.guards,
        wildcards=tally.wildcards,
        max_nesting=tally.max_nesting,
        nested_matches=tally.nested_matches,
        avg_cases_per_match=avg,
    )


def _visit(node: Node, depth: int, tally: _Tally) -> _Tally:
    if not isinstance(node, Match):
        for child in children(node):
            tally = _visit(child, depth, tally)
        return tally

    tally = _visit(node.scrutinee, depth, tally)

    inner = depth + 1
    tally = replace(
        tally,
        matches=tally.matches + 1,
        cases=tally.cases + len(node.cases),
        max_nesting=max(tally.max_nesting, inner),
        nested_matches=tally.nested_matches + (1 if depth >= 1 else 0),
    )
    for case in node.cases:
        tally = _visit(case.pattern, inner, tally)
        if case.guard is not None:
            tally = _visit(case.guard, inner, replace(tally, guards=tally.guards + 1))
        if isinstance(case.pattern, Wildcard):
            tally = replace(tally, wildcards=tally.wildcards + 1)
        tally = _visit(case.body, inner, tally)
    return tally
