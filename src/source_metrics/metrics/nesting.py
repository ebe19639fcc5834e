"""Nesting depth: the longest chain of depth-increasing constructs.

Blocks, conditional branches, case bodies, loop bodies, try/catch/finally
bodies and lambda bodies each open one level. The direct body of a control
construct is opened by the construct itself, so a single-statement block
there adds nothing further while a multi-statement block adds one more.
While and do-while bodies never count their own block. An else branch that
is itself a conditional continues the chain at the same level.
"""

from typing import Iterable, Optional

from ..syntax.nodes import (
    Block,
    Case,
    Conditional,
    Lambda,
    Loop,
    LoopKind,
    Match,
    Node,
    PartialFunction,
    Try,
    children,
)


def nesting_depth(node: Optional[Node]) -> int:
    if node is None:
        return 0
    return _depth(node)


def _deepest(nodes: Iterable[Optional[Node]]) -> int:
    return max((_depth(n) for n in nodes if n is not None), default=0)


def _control_body(node: Node) -> int:
    if isinstance(node, Block) and len(node.stats) <= 1:
        return _deepest(node.stats)
    return _depth(node)


def _case(case: Case) -> int:
    return max(_deepest((case.pattern, case.guard)), 1 + _control_body(case.body))


def _else(node: Optional[Node]) -> int:
    if node is None:
        return 0
    if isinstance(node, Conditional):
        return _depth(node)
    return 1 + _control_body(node)


def _depth(node: Node) -> int:
    if isinstance(node, Block):
        return 1 + _deepest(node.stats)

    if isinstance(node, Conditional):
        return max(_depth(node.cond), 1 + _control_body(node.then), _else(node.else_))

    if isinstance(node, Match):
        return max([_depth(node.scrutinee)] + [_case(c) for c in node.cases])

    if isinstance(node, Case):
        return _case(node)

    if isinstance(node, Loop):
        header = _deepest(node.generators + node.filters)
        if node.kind in (LoopKind.WHILE, LoopKind.DO_WHILE):
            body = node.body
            inner = _deepest(body.stats) if isinstance(body, Block) else _depth(body)
            return max(header, 1 + inner)
        return max(header, 1 + _control_body(node.body))

    if isinstance(node, Try):
        parts = [1 + _control_body(node.body)]
        parts.extend(_case(c) for c in node.catches)
        if node.finally_ is not None:
            parts.append(1 + _control_body(node.finally_))
        return max(parts)

    if isinstance(node, Lambda):
        return 1 + _control_body(node.body)

    if isinstance(node, PartialFunction):
        return max((_case(c) for c in node.cases), default=0)

    return _deepest(children(node))
