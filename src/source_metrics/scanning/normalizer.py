"""Python frontend: tree-sitter parse trees to source_metrics shapes.

Maps Python syntax onto the language-neutral node classes in
``source_metrics.syntax.nodes`` and discovers declarations:

    def / async def        DEF (methods drop their self/cls parameter)
    class                  CLASS
    NAME = ... (module or class level)
                           VAL when UPPER_CASE or annotated Final, else VAR

Access follows naming convention: ``__name`` private, ``_name`` protected.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Optional

from ..exceptions import ParsingError, UnsupportedLanguageError
from ..syntax.base import ParsedFile, SourceParser, count_loc
from ..syntax.declarations import Access, Declaration, DeclKind, Modifier, Param, ParamList
from ..syntax.nodes import (
    Ascription,
    BinaryOp,
    Block,
    BooleanOp,
    Call,
    Case,
    CollectionCall,
    Conditional,
    KeyValue,
    Lambda,
    Literal,
    LiteralKind,
    LocalDef,
    Loop,
    LoopKind,
    Match,
    Name,
    Node,
    Select,
    Span,
    Try,
    Unrecognized,
    Wildcard,
)
from .treesitter_parser import TREE_SITTER_AVAILABLE, TreeSitterParser, get_supported_languages

logger = logging.getLogger(__name__)

ROOT_PACKAGE = "<root>"

_COLLECTIONS = {"list": "List", "set": "Set", "tuple": "Tuple"}
_SPLATS = {"list_splat_pattern", "dictionary_splat_pattern"}
# statements whose blocks may hold further declarations
_COMPOUND = {
    "if_statement",
    "elif_clause",
    "else_clause",
    "for_statement",
    "while_statement",
    "try_statement",
    "except_clause",
    "except_group_clause",
    "finally_clause",
    "with_statement",
    "match_statement",
    "case_clause",
    "block",
}


def _text(ts: Any) -> str:
    return ts.text.decode("utf-8") if ts.text is not None else ""


def _span(ts: Any) -> Span:
    return Span(ts.start_point[0] + 1, ts.end_point[0] + 1)


def _named(ts: Any) -> list:
    return [c for c in ts.named_children if c.type != "comment"]


def _opt(ts: Any) -> Optional[Node]:
    return to_node(ts) if ts is not None else None


def _nodes(items: list) -> tuple:
    return tuple(to_node(c) for c in items)


def _unrecognized(ts: Any) -> Node:
    return Unrecognized(ts.type, _nodes(_named(ts)), _span(ts))


# ── statements ─────────────────────────────────────────────────────


def _block(ts: Any) -> Node:
    return Block(_nodes(_named(ts)), _span(ts))


def _expression_statement(ts: Any) -> Node:
    kids = _named(ts)
    if len(kids) == 1:
        return to_node(kids[0])
    return _unrecognized(ts)


def _else_chain(alternatives: list) -> Optional[Node]:
    if not alternatives:
        return None
    head, rest = alternatives[0], alternatives[1:]
    if head.type == "elif_clause":
        return Conditional(
            to_node(head.child_by_field_name("condition")),
            to_node(head.child_by_field_name("consequence")),
            _else_chain(rest),
            _span(head),
        )
    return to_node(head.child_by_field_name("body"))


def _if(ts: Any) -> Node:
    return Conditional(
        to_node(ts.child_by_field_name("condition")),
        to_node(ts.child_by_field_name("consequence")),
        _else_chain(ts.children_by_field_name("alternative")),
        _span(ts),
    )


def _with_else(loop: Node, ts: Any) -> Node:
    """Attach a loop's or try's ``else`` block next to it."""
    alternative = ts.child_by_field_name("alternative")
    if alternative is None:
        alternative = next((c for c in ts.named_children if c.type == "else_clause"), None)
    if alternative is None:
        return loop
    return Unrecognized(f"{ts.type}_else", (loop, to_node(alternative.child_by_field_name("body"))), _span(ts))


def _for(ts: Any) -> Node:
    loop = Loop(
        LoopKind.FOR,
        (to_node(ts.child_by_field_name("right")),),
        to_node(ts.child_by_field_name("body")),
        span=_span(ts),
    )
    return _with_else(loop, ts)


def _while(ts: Any) -> Node:
    loop = Loop(
        LoopKind.WHILE,
        (to_node(ts.child_by_field_name("condition")),),
        to_node(ts.child_by_field_name("body")),
        span=_span(ts),
    )
    return _with_else(loop, ts)


def _clause_block(ts: Any) -> Optional[Any]:
    return next((c for c in reversed(ts.named_children) if c.type == "block"), None)


def _except(ts: Any) -> Case:
    body = _clause_block(ts)
    patterns = [c for c in _named(ts) if c is not body and c.type != "block"]
    pattern: Node = Wildcard(_span(ts)) if not patterns else to_node(patterns[0])
    return Case(pattern, None, _opt(body) or Block(), _span(ts))


def _try(ts: Any) -> Node:
    catches = tuple(
        _except(c) for c in ts.named_children if c.type in ("except_clause", "except_group_clause")
    )
    finally_clause = next((c for c in ts.named_children if c.type == "finally_clause"), None)
    node = Try(
        to_node(ts.child_by_field_name("body")),
        catches,
        _opt(_clause_block(finally_clause)) if finally_clause is not None else None,
        _span(ts),
    )
    return _with_else(node, ts)


def _case(ts: Any) -> Case:
    patterns = [c for c in ts.named_children if c.type == "case_pattern"]
    if len(patterns) == 1 and _text(patterns[0]).strip() == "_":
        pattern: Node = Wildcard(_span(patterns[0]))
    else:
        pattern = Unrecognized("case_pattern", span=_span(patterns[0]) if patterns else _span(ts))
    guard = ts.child_by_field_name("guard")
    guard_expr = _named(guard)[0] if guard is not None and _named(guard) else None
    return Case(
        pattern,
        _opt(guard_expr),
        to_node(ts.child_by_field_name("consequence")),
        _span(ts),
    )


def _match(ts: Any) -> Node:
    subjects = ts.children_by_field_name("subject")
    if len(subjects) == 1:
        scrutinee = to_node(subjects[0])
    else:
        scrutinee = CollectionCall("Tuple", _nodes(subjects), _span(ts))
    body = ts.child_by_field_name("body")
    clauses = [c for c in body.named_children if c.type == "case_clause"] if body is not None else []
    return Match(scrutinee, tuple(_case(c) for c in clauses), _span(ts))


def _return(ts: Any) -> Node:
    kids = _named(ts)
    if not kids:
        return Literal(LiteralKind.UNIT, span=_span(ts))
    return to_node(kids[0])


def _local_def(ts: Any) -> Node:
    target = ts.child_by_field_name("definition") if ts.type == "decorated_definition" else ts
    name = target.child_by_field_name("name")
    return LocalDef(_text(name), _opt(target.child_by_field_name("body")), _span(ts))


# ── expressions ────────────────────────────────────────────────────


def _boolean(ts: Any) -> Node:
    operator = ts.child_by_field_name("operator")
    op = "&&" if operator is not None and operator.type == "and" else "||"
    return BooleanOp(
        op,
        to_node(ts.child_by_field_name("left")),
        to_node(ts.child_by_field_name("right")),
        _span(ts),
    )


def _binary(ts: Any) -> Node:
    return BinaryOp(
        _text(ts.child_by_field_name("operator")),
        to_node(ts.child_by_field_name("left")),
        to_node(ts.child_by_field_name("right")),
        _span(ts),
    )


def _comparison(ts: Any) -> Node:
    operands = _named(ts)
    if len(operands) < 2:
        return _unrecognized(ts)
    first, second = operands[0], operands[1]
    op = " ".join(
        _text(c) for c in ts.children if first.end_byte <= c.start_byte and c.end_byte <= second.start_byte
    )
    right = to_node(second) if len(operands) == 2 else Unrecognized("comparison", _nodes(operands[1:]))
    return BinaryOp(op, to_node(first), right, _span(ts))


def _conditional_expression(ts: Any) -> Node:
    then, cond, otherwise = _named(ts)[:3]
    return Conditional(to_node(cond), to_node(then), to_node(otherwise), _span(ts))


def _lambda(ts: Any) -> Node:
    params = ts.child_by_field_name("parameters")
    names = tuple(p.name for p in _params(params, is_method=False)) if params is not None else ()
    return Lambda(names, to_node(ts.child_by_field_name("body")), _span(ts))


def _call(ts: Any) -> Node:
    fn = ts.child_by_field_name("function")
    arguments = ts.child_by_field_name("arguments")
    if arguments is None:
        args: tuple = ()
    elif arguments.type == "generator_expression":
        args = (to_node(arguments),)
    else:
        args = tuple(
            to_node(a.child_by_field_name("value")) if a.type == "keyword_argument" else to_node(a)
            for a in _named(arguments)
        )

    # typing.cast(T, value) is the closest thing to a type ascription
    if _dotted(fn) in (("cast",), ("typing", "cast")) and len(args) == 2:
        type_arg = _named(arguments)[0]
        type_name = _text(type_arg).strip("\"'")
        return Ascription(args[1], type_name, _span(ts))

    return Call(to_node(fn), args, _span(ts))


def _dotted(ts: Any) -> Optional[tuple]:
    if ts.type == "identifier":
        return (_text(ts),)
    if ts.type == "attribute":
        head = _dotted(ts.child_by_field_name("object"))
        if head is not None:
            return head + (_text(ts.child_by_field_name("attribute")),)
    return None


def _attribute(ts: Any) -> Node:
    path = _dotted(ts)
    if path is not None:
        return Name(path, _span(ts))
    return Select(
        to_node(ts.child_by_field_name("object")),
        _text(ts.child_by_field_name("attribute")),
        _span(ts),
    )


def _identifier(ts: Any) -> Node:
    return Name((_text(ts),), _span(ts))


def _string(ts: Any) -> Node:
    start = next((c for c in ts.children if c.type == "string_start"), None)
    prefix = _text(start).lower() if start is not None else _text(ts)[:2].lower()
    if "f" in prefix or any(c.type == "interpolation" for c in ts.children):
        kind = LiteralKind.INTERPOLATED_STRING
    elif "r" in prefix:
        kind = LiteralKind.RAW_STRING
    else:
        kind = LiteralKind.STRING
    return Literal(kind, _text(ts), _span(ts))


def _literal(kind: LiteralKind) -> Callable[[Any], Node]:
    def convert(ts: Any) -> Node:
        return Literal(kind, _text(ts), _span(ts))

    return convert


def _collection(ts: Any) -> Node:
    return CollectionCall(_COLLECTIONS[ts.type], _nodes(_named(ts)), _span(ts))


def _pair(ts: Any) -> Node:
    return KeyValue(
        to_node(ts.child_by_field_name("key")),
        to_node(ts.child_by_field_name("value")),
        _span(ts),
    )


def _dictionary(ts: Any) -> Node:
    return CollectionCall("Map", _nodes(_named(ts)), _span(ts))


def _comprehension(ts: Any) -> Node:
    generators = []
    filters = []
    for clause in _named(ts):
        if clause.type == "for_in_clause":
            generators.extend(to_node(r) for r in clause.children_by_field_name("right"))
        elif clause.type == "if_clause":
            filters.extend(_nodes(_named(clause)))
    return Loop(
        LoopKind.FOR_YIELD,
        tuple(generators),
        to_node(ts.child_by_field_name("body")),
        tuple(filters),
        _span(ts),
    )


def _unwrap(ts: Any) -> Node:
    kids = _named(ts)
    return to_node(kids[0]) if len(kids) == 1 else _unrecognized(ts)


_CONVERTERS: dict[str, Callable[[Any], Node]] = {
    "block": _block,
    "module": _block,
    "expression_statement": _expression_statement,
    "if_statement": _if,
    "for_statement": _for,
    "while_statement": _while,
    "try_statement": _try,
    "match_statement": _match,
    "return_statement": _return,
    "function_definition": _local_def,
    "class_definition": _local_def,
    "decorated_definition": _local_def,
    "boolean_operator": _boolean,
    "binary_operator": _binary,
    "comparison_operator": _comparison,
    "conditional_expression": _conditional_expression,
    "lambda": _lambda,
    "call": _call,
    "attribute": _attribute,
    "identifier": _identifier,
    "string": _string,
    "concatenated_string": _literal(LiteralKind.STRING),
    "integer": _literal(LiteralKind.INT),
    "float": _literal(LiteralKind.DOUBLE),
    "true": _literal(LiteralKind.BOOLEAN),
    "false": _literal(LiteralKind.BOOLEAN),
    "none": _literal(LiteralKind.NULL),
    "list": _collection,
    "set": _collection,
    "tuple": _collection,
    "dictionary": _dictionary,
    "pair": _pair,
    "list_comprehension": _comprehension,
    "set_comprehension": _comprehension,
    "dictionary_comprehension": _comprehension,
    "generator_expression": _comprehension,
    "parenthesized_expression": _unwrap,
    "unary_operator": _unwrap,
}


def to_node(ts: Any) -> Node:
    """Convert one tree-sitter node (and its subtree)."""
    converter = _CONVERTERS.get(ts.type)
    if converter is None:
        return _unrecognized(ts)
    return converter(ts)


# ── declarations ───────────────────────────────────────────────────


def _access(name: str) -> Access:
    if name.startswith("__") and not name.endswith("__"):
        return Access.PRIVATE
    if name.startswith("_") and not name.startswith("__"):
        return Access.PROTECTED
    return Access.PUBLIC


def _param_name(ts: Any) -> str:
    if ts.type == "identifier":
        return _text(ts)
    name = ts.child_by_field_name("name")
    if name is not None:
        return _text(name)
    ident = next((c for c in ts.named_children if c.type == "identifier"), None)
    return _text(ident) if ident is not None else _text(ts).lstrip("*")


def _params(ts: Any, is_method: bool) -> list[Param]:
    params = []
    for c in _named(ts):
        type_node = c.child_by_field_name("type")
        type_name = _text(type_node) if type_node is not None else None
        if c.type == "identifier":
            params.append(Param(_text(c)))
        elif c.type in _SPLATS:
            params.append(Param(_param_name(c), vararg=True))
        elif c.type == "typed_parameter":
            inner = _named(c)[0] if _named(c) else c
            params.append(
                Param(_param_name(inner), type_name=type_name, vararg=inner.type in _SPLATS)
            )
        elif c.type in ("default_parameter", "typed_default_parameter"):
            params.append(Param(_param_name(c), type_name=type_name, has_default=True))
        # "*" and "/" separators carry no parameter

    if is_method and params and params[0].name in ("self", "cls"):
        params = params[1:]
    return params


def _decorator_names(decorators: list) -> list[str]:
    names = []
    for d in decorators:
        expr = _named(d)[0] if _named(d) else d
        if expr.type == "call":
            expr = expr.child_by_field_name("function")
        path = _dotted(expr)
        if path:
            names.append(path[-1])
    return names


def _is_string_statement(stmt: Any) -> bool:
    if stmt is None or stmt.type != "expression_statement":
        return False
    kids = _named(stmt)
    return len(kids) == 1 and kids[0].type in ("string", "concatenated_string")


def _docstring(body: Any) -> bool:
    stmts = _named(body) if body is not None else []
    return bool(stmts) and _is_string_statement(stmts[0])


class _DeclarationCollector:
    """Walks statements and records every declaration, nested ones included."""

    def __init__(self) -> None:
        self.declarations: list[Declaration] = []

    def visit(self, ts: Any, owner: str, in_function: bool, in_class: bool) -> None:
        for stmt in _named(ts):
            if stmt.type == "decorated_definition":
                definition = stmt.child_by_field_name("definition")
                decorators = [c for c in stmt.named_children if c.type == "decorator"]
                self._definition(definition, decorators, stmt, owner, in_function, in_class)
            elif stmt.type in ("function_definition", "class_definition"):
                self._definition(stmt, [], stmt, owner, in_function, in_class)
            elif stmt.type == "expression_statement" and not in_function:
                for child in _named(stmt):
                    if child.type == "assignment":
                        self._assignment(child, stmt, owner, in_class)
            elif stmt.type in _COMPOUND:
                self.visit(stmt, owner, in_function, in_class)

    def _definition(
        self, ts: Any, decorators: list, outer: Any, owner: str, in_function: bool, in_class: bool
    ) -> None:
        name = _text(ts.child_by_field_name("name"))
        qualified = f"{owner}.{name}" if owner else name
        body = ts.child_by_field_name("body")
        decorator_names = _decorator_names(decorators)
        modifiers = set()
        if "abstractmethod" in decorator_names or "abstractproperty" in decorator_names:
            modifiers.add(Modifier.ABSTRACT)

        if ts.type == "function_definition":
            parameters = ts.child_by_field_name("parameters")
            is_method = in_class and "staticmethod" not in decorator_names
            params = _params(parameters, is_method) if parameters is not None else []
            return_type = ts.child_by_field_name("return_type")
            abstract = Modifier.ABSTRACT in modifiers
            self.declarations.append(
                Declaration(
                    name=name,
                    kind=DeclKind.DEF,
                    access=_access(name),
                    modifiers=frozenset(modifiers),
                    has_doc=_docstring(body),
                    is_deprecated="deprecated" in decorator_names,
                    declared_type=_text(return_type) if return_type is not None else None,
                    param_lists=(ParamList(tuple(params)),),
                    body=None if abstract or body is None else to_node(body),
                    is_nested=in_function,
                    owner=owner,
                    span=_span(outer),
                )
            )
            if body is not None:
                self.visit(body, qualified, True, False)
            return

        superclasses = ts.child_by_field_name("superclasses")
        bases = _text(superclasses) if superclasses is not None else ""
        if "ABC" in bases or "Protocol" in bases:
            modifiers.add(Modifier.ABSTRACT)
        self.declarations.append(
            Declaration(
                name=name,
                kind=DeclKind.CLASS,
                access=_access(name),
                modifiers=frozenset(modifiers),
                has_doc=_docstring(body),
                is_deprecated="deprecated" in decorator_names,
                is_nested=in_function,
                owner=owner,
                span=_span(outer),
            )
        )
        if body is not None:
            self.visit(body, qualified, in_function, True)

    def _assignment(self, ts: Any, stmt: Any, owner: str, in_class: bool) -> None:
        left = ts.child_by_field_name("left")
        if left is None or left.type != "identifier":
            return
        name = _text(left)
        type_node = ts.child_by_field_name("type")
        declared = _text(type_node) if type_node is not None else None
        is_final = declared is not None and declared.split("[")[0].split(".")[-1] == "Final"
        kind = DeclKind.VAL if name.isupper() or is_final else DeclKind.VAR
        right = ts.child_by_field_name("right")
        self.declarations.append(
            Declaration(
                name=name,
                kind=kind,
                access=_access(name),
                has_doc=_is_string_statement(stmt.next_named_sibling),
                declared_type=None if is_final and "[" not in declared else declared,
                body=_opt(right) if right is not None else Literal(LiteralKind.UNIT),
                owner=owner,
                span=_span(stmt),
            )
        )


def package_name(path: Path, root: Path) -> str:
    """Dotted directory of ``path`` relative to ``root``."""
    parent = Path(os.path.abspath(path)).parent
    try:
        parts = parent.relative_to(os.path.abspath(root)).parts
    except ValueError:
        return ROOT_PACKAGE
    return ".".join(parts) if parts else ROOT_PACKAGE


class PythonSourceParser(SourceParser):
    """SourceParser for Python backed by tree-sitter-python."""

    language = "python"

    def __init__(self) -> None:
        self._parser = TreeSitterParser() if TREE_SITTER_AVAILABLE else None
        if self._parser is None or not self._parser.is_language_supported(self.language):
            raise UnsupportedLanguageError(self.language, get_supported_languages())

    def parse(self, source: str, path: Path, root: Path) -> ParsedFile:
        code_bytes = source.encode("utf-8")
        tree = self._parser.parse(code_bytes, self.language)  # type: ignore[union-attr]
        if tree is None:
            raise ParsingError(path, self.language, "parser returned no tree")
        if tree.root_node.has_error:
            raise ParsingError(path, self.language, "syntax error")

        collector = _DeclarationCollector()
        collector.visit(tree.root_node, "", False, False)
        logger.debug(f"{path}: {len(collector.declarations)} declarations")

        return ParsedFile(
            path=Path(path),
            package=package_name(path, root),
            language=self.language,
            loc=count_loc(source),
            size_bytes=len(code_bytes),
            declarations=tuple(collector.declarations),
        )
