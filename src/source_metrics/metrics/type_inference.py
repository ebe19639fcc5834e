"""Best-effort result-type inference.

Used only when a declaration does not spell out its type. The answer is a
heuristic signal, not a checked type: ``None`` means "could not tell" and is
an ordinary outcome. ``infer_type`` never raises.

Rules, first match wins:

1. literals map to their primitive name; interpolated and raw strings are
   ``String``
2. collection constructors infer ``Outer[Elem]`` when every element infers
   the same type, else ``Outer[_]``; maps use ``Map[K, V]`` / ``Map[_, _]``;
   ``Nil`` is ``List[Nothing]``
3. construction of a known ``java.util`` collection or ``java.time`` type
   infers its simple name with type arguments
4. ascriptions and type applications infer the written type
5. a conditional infers the type both branches agree on
6. a match infers the type every case body agrees on
7. a block infers the type of its final expression
8. arithmetic infers the type both operands agree on; ``+``/``-`` with a bare
   name on one side and a numeric type on the other infers the numeric
   type; comparisons and boolean operators infer ``Boolean``
9. any other call infers the last selector of its callee (low confidence)
"""

from typing import Optional, Sequence

from ..syntax.nodes import (
    Ascription,
    BinaryOp,
    Block,
    BooleanOp,
    Call,
    CollectionCall,
    Conditional,
    KeyValue,
    Literal,
    LiteralKind,
    Match,
    Name,
    New,
    Node,
    Select,
    TypeApply,
)

LITERAL_TYPES = {
    LiteralKind.BYTE: "Byte",
    LiteralKind.SHORT: "Short",
    LiteralKind.INT: "Int",
    LiteralKind.LONG: "Long",
    LiteralKind.FLOAT: "Float",
    LiteralKind.DOUBLE: "Double",
    LiteralKind.BOOLEAN: "Boolean",
    LiteralKind.CHAR: "Char",
    LiteralKind.STRING: "String",
    LiteralKind.INTERPOLATED_STRING: "String",
    LiteralKind.RAW_STRING: "String",
    LiteralKind.UNIT: "Unit",
    LiteralKind.NULL: "Null",
}

SEQUENCE_COLLECTIONS = frozenset({"List", "Vector", "Seq", "Set", "Array", "Tuple"})

TIME_TYPES = frozenset(
    {
        "Instant",
        "LocalDate",
        "LocalDateTime",
        "ZonedDateTime",
        "OffsetDateTime",
        "OffsetTime",
        "Duration",
        "Period",
        "ZoneId",
        "ZoneOffset",
        "Year",
        "YearMonth",
        "MonthDay",
    }
)

UTIL_COLLECTION_ARITY = {
    "ArrayList": 1,
    "LinkedList": 1,
    "Vector": 1,
    "Stack": 1,
    "HashSet": 1,
    "LinkedHashSet": 1,
    "TreeSet": 1,
    "EnumSet": 1,
    "HashMap": 2,
    "LinkedHashMap": 2,
    "TreeMap": 2,
    "Hashtable": 2,
    "ConcurrentHashMap": 2,
    "WeakHashMap": 2,
    "IdentityHashMap": 2,
}

ARITHMETIC_OPS = frozenset({"+", "-", "*", "/", "%"})
ADDITIVE_OPS = frozenset({"+", "-"})
NUMERIC_TYPES = frozenset({"Byte", "Short", "Int", "Long", "Float", "Double"})
COMPARISON_OPS = frozenset({"<", ">", "<=", ">=", "==", "!=", "is", "is not", "in", "not in"})


def infer_type(node: Optional[Node]) -> Optional[str]:
    if node is None:
        return None

    if isinstance(node, Literal):
        return LITERAL_TYPES.get(node.kind)

    if isinstance(node, CollectionCall):
        return _infer_collection(node)

    if isinstance(node, Name):
        if node.path == ("Nil",):
            return "List[Nothing]"
        return _time_static_select(node.path[:-1])

    if isinstance(node, New):
        return _infer_new(node)

    if isinstance(node, Ascription):
        return node.type_name

    if isinstance(node, TypeApply):
        return _render_type_apply(node.fn, node.type_args)

    if isinstance(node, Conditional):
        if node.else_ is None:
            return None
        return _agreed([infer_type(node.then), infer_type(node.else_)])

    if isinstance(node, Match):
        if not node.cases:
            return None
        return _agreed([infer_type(c.body) for c in node.cases])

    if isinstance(node, Block):
        if not node.stats:
            return None
        return infer_type(node.stats[-1])

    if isinstance(node, BooleanOp):
        return "Boolean"

    if isinstance(node, BinaryOp):
        if node.op in COMPARISON_OPS:
            return "Boolean"
        if node.op in ARITHMETIC_OPS:
            return _infer_arithmetic(node)
        return None

    if isinstance(node, Call):
        if isinstance(node.fn, TypeApply):
            return _render_type_apply(node.fn.fn, node.fn.type_args)
        if isinstance(node.fn, Name):
            timed = _time_static_select(node.fn.path[:-1])
            if timed is not None:
                return timed
        segments = _segments(node.fn)
        return segments[-1] if segments else None

    return None


def _agreed(types: Sequence[Optional[str]]) -> Optional[str]:
    """The single type every entry infers to, or None."""
    if not types or any(t is None for t in types):
        return None
    first = types[0]
    return first if all(t == first for t in types) else None


def _infer_arithmetic(node: BinaryOp) -> Optional[str]:
    left, right = infer_type(node.left), infer_type(node.right)
    if left is not None and left == right:
        return left
    # `x + 1` takes the numeric side when the other operand is a bare name
    if node.op in ADDITIVE_OPS:
        if left is None and right in NUMERIC_TYPES and _is_bare_name(node.left):
            return right
        if right is None and left in NUMERIC_TYPES and _is_bare_name(node.right):
            return left
    return None


def _is_bare_name(node: Node) -> bool:
    return isinstance(node, Name) and len(node.path) == 1


def _infer_collection(node: CollectionCall) -> Optional[str]:
    if node.collection == "Map":
        pairs = [e for e in node.elements if isinstance(e, KeyValue)]
        if not pairs or len(pairs) != len(node.elements):
            return "Map[_, _]"
        key = _agreed([infer_type(p.key) for p in pairs])
        value = _agreed([infer_type(p.value) for p in pairs])
        if key is None or value is None:
            return "Map[_, _]"
        return f"Map[{key}, {value}]"

    if node.collection in SEQUENCE_COLLECTIONS:
        elem = _agreed([infer_type(e) for e in node.elements])
        return f"{node.collection}[{elem or '_'}]"

    return None


def _infer_new(node: New) -> Optional[str]:
    if not node.type_path:
        return None
    if _is_java_util(node.type_path):
        return _render_util(node.type_path[-1], node.type_args)
    return _with_args(node.type_path[-1], node.type_args)


def _render_type_apply(fn: Node, type_args: Sequence[str]) -> Optional[str]:
    segments = _segments(fn)
    if not segments:
        return None
    base = segments[-1]
    if _is_java_util(segments) or base in UTIL_COLLECTION_ARITY:
        return _render_util(base, type_args)
    return _with_args(base, type_args)


def _render_util(base: str, type_args: Sequence[str]) -> str:
    arity = UTIL_COLLECTION_ARITY.get(base, len(type_args))
    if arity == 0:
        return base
    args = list(type_args[:arity]) + ["_"] * (arity - len(type_args))
    return f"{base}[{', '.join(args)}]"


def _with_args(base: str, type_args: Sequence[str]) -> str:
    if not type_args:
        return base
    return f"{base}[{', '.join(type_args)}]"


def _is_java_util(path: Sequence[str]) -> bool:
    return len(path) > 2 and path[0] == "java" and path[1] == "util"


def _time_static_select(qualifier: Sequence[str]) -> Optional[str]:
    """``Instant.now`` or ``java.time.Instant.now`` infer ``Instant``."""
    qualifier = tuple(qualifier)
    if len(qualifier) == 1 and qualifier[0] in TIME_TYPES:
        return qualifier[0]
    if len(qualifier) == 3 and qualifier[:2] == ("java", "time") and qualifier[2] in TIME_TYPES:
        return qualifier[2]
    return None


def _segments(node: Node) -> list:
    """Dotted-name segments of a callee, innermost selector last."""
    if isinstance(node, Name):
        return list(node.path)
    if isinstance(node, Select):
        return _segments(node.qualifier) + [node.name]
    if isinstance(node, Call):
        return _segments(node.fn)
    if isinstance(node, TypeApply):
        return _segments(node.fn)
    return []

