"""Expression and statement shapes consumed by the metrics analyzers.

Parser frontends normalize their own grammar into these node classes before
anything in ``source_metrics.metrics`` sees a tree. The set is closed:
``children()`` raises ``TypeError`` for any class it does not know, so a new
shape has to be taught to the traversal explicitly. Source constructs with no
dedicated shape become ``Unrecognized`` and still expose their children.

Every node carries a ``Span`` (1-indexed, inclusive line range).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Union


@dataclass(frozen=True)
class Span:
    """Inclusive source line range of a node."""

    start_line: int
    end_line: int

    @property
    def loc(self) -> int:
        return max(0, self.end_line - self.start_line + 1)


NO_SPAN = Span(0, -1)


class LoopKind(Enum):
    WHILE = "while"
    DO_WHILE = "do_while"
    FOR = "for"
    FOR_YIELD = "for_yield"


class LiteralKind(Enum):
    BYTE = "byte"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    CHAR = "char"
    STRING = "string"
    INTERPOLATED_STRING = "interpolated_string"
    RAW_STRING = "raw_string"
    UNIT = "unit"
    NULL = "null"


@dataclass(frozen=True)
class Block:
    stats: Tuple[Node, ...] = ()
    span: Span = NO_SPAN


@dataclass(frozen=True)
class Conditional:
    """if / else-if / else. An else-if chain nests a Conditional in ``else_``."""

    cond: Node
    then: Node
    else_: Optional[Node] = None
    span: Span = NO_SPAN


@dataclass(frozen=True)
class Case:
    """One clause of a match, a catch list or a partial function."""

    pattern: Node
    guard: Optional[Node]
    body: Node
    span: Span = NO_SPAN


@dataclass(frozen=True)
class Match:
    scrutinee: Node
    cases: Tuple[Case, ...]
    span: Span = NO_SPAN


@dataclass(frozen=True)
class Loop:
    """while / do-while / for / for-yield.

    ``generators`` holds the loop condition for while loops and the
    enumerators for for loops; ``filters`` holds the guard clauses of a
    for (``if`` inside a comprehension).
    """

    kind: LoopKind
    generators: Tuple[Node, ...]
    body: Node
    filters: Tuple[Node, ...] = ()
    span: Span = NO_SPAN


@dataclass(frozen=True)
class Try:
    body: Node
    catches: Tuple[Case, ...] = ()
    finally_: Optional[Node] = None
    span: Span = NO_SPAN


@dataclass(frozen=True)
class BooleanOp:
    """Short-circuit ``&&`` / ``||``."""

    op: str
    left: Node
    right: Node
    span: Span = NO_SPAN


@dataclass(frozen=True)
class BinaryOp:
    """Any other infix operator (arithmetic, comparison, bitwise)."""

    op: str
    left: Node
    right: Node
    span: Span = NO_SPAN


@dataclass(frozen=True)
class Lambda:
    params: Tuple[str, ...]
    body: Node
    span: Span = NO_SPAN


@dataclass(frozen=True)
class PartialFunction:
    cases: Tuple[Case, ...]
    span: Span = NO_SPAN


@dataclass(frozen=True)
class Literal:
    kind: LiteralKind
    value: Any = None
    span: Span = NO_SPAN


@dataclass(frozen=True)
class CollectionCall:
    """Collection constructor such as ``List(1, 2)`` or ``Map(k -> v)``."""

    collection: str
    elements: Tuple[Node, ...] = ()
    span: Span = NO_SPAN


@dataclass(frozen=True)
class KeyValue:
    key: Node
    value: Node
    span: Span = NO_SPAN


@dataclass(frozen=True)
class Name:
    """Qualified name reference, e.g. ``("java", "time", "Instant", "now")``."""

    path: Tuple[str, ...]
    span: Span = NO_SPAN

    @property
    def last(self) -> str:
        return self.path[-1] if self.path else ""


@dataclass(frozen=True)
class Select:
    """Member selection on an arbitrary expression: ``qualifier.name``."""

    qualifier: Node
    name: str
    span: Span = NO_SPAN


@dataclass(frozen=True)
class New:
    """Construction of a (possibly qualified) type with optional type args."""

    type_path: Tuple[str, ...]
    type_args: Tuple[str, ...] = ()
    args: Tuple[Node, ...] = ()
    anonymous: bool = False
    span: Span = NO_SPAN


@dataclass(frozen=True)
class Ascription:
    expr: Node
    type_name: str
    span: Span = NO_SPAN


@dataclass(frozen=True)
class TypeApply:
    fn: Node
    type_args: Tuple[str, ...]
    span: Span = NO_SPAN


@dataclass(frozen=True)
class Call:
    fn: Node
    args: Tuple[Node, ...] = ()
    span: Span = NO_SPAN


@dataclass(frozen=True)
class LocalDef:
    """A declaration textually nested inside another declaration's body."""

    name: str
    body: Optional[Node] = None
    span: Span = NO_SPAN


@dataclass(frozen=True)
class Wildcard:
    span: Span = NO_SPAN


@dataclass(frozen=True)
class Unrecognized:
    """Any construct without a dedicated shape. Only its children matter."""

    label: str = ""
    children: Tuple[Node, ...] = ()
    span: Span = NO_SPAN


Node = Union[
    Block,
    Conditional,
    Case,
    Match,
    Loop,
    Try,
    BooleanOp,
    BinaryOp,
    Lambda,
    PartialFunction,
    Literal,
    CollectionCall,
    KeyValue,
    Name,
    Select,
    New,
    Ascription,
    TypeApply,
    Call,
    LocalDef,
    Wildcard,
    Unrecognized,
]


def _present(*nodes: Optional[Node]) -> Tuple[Node, ...]:
    return tuple(n for n in nodes if n is not None)


def children(node: Node) -> Tuple[Node, ...]:
    """Direct sub-nodes of ``node`` in source order.

    Raises:
        TypeError: If ``node`` is not one of the known node classes.
    """
    if isinstance(node, Block):
        return node.stats
    if isinstance(node, Conditional):
        return _present(node.cond, node.then, node.else_)
    if isinstance(node, Case):
        return _present(node.pattern, node.guard, node.body)
    if isinstance(node, Match):
        return (node.scrutinee,) + node.cases
    if isinstance(node, Loop):
        return node.generators + node.filters + (node.body,)
    if isinstance(node, Try):
        return (node.body,) + node.catches + _present(node.finally_)
    if isinstance(node, (BooleanOp, BinaryOp)):
        return (node.left, node.right)
    if isinstance(node, Lambda):
        return (node.body,)
    if isinstance(node, PartialFunction):
        return node.cases
    if isinstance(node, CollectionCall):
        return node.elements
    if isinstance(node, KeyValue):
        return (node.key, node.value)
    if isinstance(node, Select):
        return (node.qualifier,)
    if isinstance(node, New):
        return node.args
    if isinstance(node, Ascription):
        return (node.expr,)
    if isinstance(node, TypeApply):
        return (node.fn,)
    if isinstance(node, Call):
        return (node.fn,) + node.args
    if isinstance(node, LocalDef):
        return _present(node.body)
    if isinstance(node, Unrecognized):
        return node.children
    if isinstance(node, (Literal, Name, Wildcard)):
        return ()
    raise TypeError(f"Unknown node type: {type(node).__name__}")


def span_of(nodes: Tuple[Node, ...]) -> Span:
    """Smallest span covering all nodes that carry a real span."""
    real = [n.span for n in nodes if n.span.loc > 0]
    if not real:
        return NO_SPAN
    return Span(min(s.start_line for s in real), max(s.end_line for s in real))
