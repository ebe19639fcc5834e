"""McCabe cyclomatic complexity.

Base 1, plus one per decision point:

    conditional          +1 (else-if chains add one per nested conditional)
    match                +1 per case
    case guard           +1 (match, catch and partial-function cases)
    loop                 +1 of any kind, +1 per filter clause
    try                  +1 per catch case, finally adds nothing
    && / ||              +1 per occurrence

Nested lambdas and local definitions fold into the enclosing score.
"""

from typing import Optional

from ..syntax.nodes import BooleanOp, Case, Conditional, Loop, Match, Node, Try, children


def cyclomatic_complexity(node: Optional[Node]) -> int:
    """Complexity of an expression tree; 1 for an absent body."""
    if node is None:
        return 1
    return 1 + decision_points(node)


def decision_points(node: Node) -> int:
    if isinstance(node, Conditional):
        own = 1
    elif isinstance(node, Match):
        own = len(node.cases)
    elif isinstance(node, Loop):
        own = 1 + len(node.filters)
    elif isinstance(node, Try):
        own = len(node.catches)
    elif isinstance(node, BooleanOp):
        own = 1
    elif isinstance(node, Case):
        own = 0 if node.guard is None else 1
    else:
        own = 0
    return own + sum(decision_points(child) for child in children(node))
