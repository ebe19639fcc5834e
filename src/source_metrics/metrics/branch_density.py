"""Branch-density counts.

Counts the same constructs as complexity but as plain occurrences: guards
and loop filters never add here, and partial-function cases are not
branches.
"""

from typing import Optional

from ..syntax.nodes import BooleanOp, Conditional, Loop, Match, Node, Try, children
from .models import BranchDensity


def branch_density(node: Optional[Node]) -> BranchDensity:
    if node is None:
        return BranchDensity()
    counts = _count(node, (0, 0, 0, 0, 0))
    conditionals, cases, loops, catch_cases, bool_ops = counts
    return BranchDensity(
        loc=node.span.loc,
        branches=sum(counts),
        conditionals=conditionals,
        cases=cases,
        loops=loops,
        catch_cases=catch_cases,
        bool_ops=bool_ops,
    )


def _count(node: Node, acc: tuple) -> tuple:
    conditionals, cases, loops, catch_cases, bool_ops = acc
    if isinstance(node, Conditional):
        conditionals += 1
    elif isinstance(node, Match):
        cases += len(node.cases)
    elif isinstance(node, Loop):
        loops += 1
    elif isinstance(node, Try):
        catch_cases += len(node.catches)
    elif isinstance(node, BooleanOp):
        bool_ops += 1

    acc = (conditionals, cases, loops, catch_cases, bool_ops)
    for child in children(node):
        acc = _count(child, acc)
    return acc
