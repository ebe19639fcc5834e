"""Syntax shapes and declaration model shared by frontends and analyzers."""

from .base import ParsedFile, SourceParser, count_loc
from .declarations import Access, Declaration, DeclKind, Modifier, Param, ParamList
from .nodes import (
    NO_SPAN,
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
    New,
    Node,
    PartialFunction,
    Select,
    Span,
    Try,
    TypeApply,
    Unrecognized,
    Wildcard,
    children,
)

__all__ = [
    "ParsedFile",
    "SourceParser",
    "count_loc",
    "Access",
    "Declaration",
    "DeclKind",
    "Modifier",
    "Param",
    "ParamList",
    "NO_SPAN",
    "Ascription",
    "BinaryOp",
    "Block",
    "BooleanOp",
    "Call",
    "Case",
    "CollectionCall",
    "Conditional",
    "KeyValue",
    "Lambda",
    "Literal",
    "LiteralKind",
    "LocalDef",
    "Loop",
    "LoopKind",
    "Match",
    "Name",
    "New",
    "Node",
    "PartialFunction",
    "Select",
    "Span",
    "Try",
    "TypeApply",
    "Unrecognized",
    "Wildcard",
    "children",
]
