"""Declaration model produced by parser frontends.

A Declaration is one named member of a source file: a function, a value,
a variable or a type-like definition. Frontends decide kind, access level
and modifiers; the metrics core only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from .nodes import NO_SPAN, Node, Span


class DeclKind(Enum):
    DEF = "def"
    VAL = "val"
    VAR = "var"
    CLASS = "class"
    TRAIT = "trait"
    OBJECT = "object"
    TYPE = "type"

    @property
    def is_def_val_var(self) -> bool:
        return self in (DeclKind.DEF, DeclKind.VAL, DeclKind.VAR)


class Access(Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


class Modifier(Enum):
    EVIDENCE = "evidence"  # supplied implicitly from context
    INLINE = "inline"
    GIVEN_INSTANCE = "given_instance"
    GIVEN_CONVERSION = "given_conversion"
    ABSTRACT = "abstract"


@dataclass(frozen=True)
class Param:
    """A single parameter.

    Attributes:
        name: Parameter name
        type_name: Written type, if any
        has_default: Declares a default value
        by_name: Evaluated lazily at each use
        vararg: Collects a variable number of arguments
        evidence: Supplied implicitly by the compiler
        inline: Carries the inline modifier
    """

    name: str
    type_name: Optional[str] = None
    has_default: bool = False
    by_name: bool = False
    vararg: bool = False
    evidence: bool = False
    inline: bool = False


@dataclass(frozen=True)
class ParamList:
    params: Tuple[Param, ...] = ()

    @property
    def is_evidence(self) -> bool:
        # the first parameter decides the kind of the whole list
        return bool(self.params) and self.params[0].evidence


@dataclass(frozen=True)
class Declaration:
    """A named member discovered in a source file.

    ``body`` is None for abstract declarations. ``declared_type`` is the
    written result type (return type for functions), None when omitted.
    """

    name: str
    kind: DeclKind
    access: Access = Access.PUBLIC
    modifiers: FrozenSet[Modifier] = field(default_factory=frozenset)
    has_doc: bool = False
    is_deprecated: bool = False
    declared_type: Optional[str] = None
    param_lists: Tuple[ParamList, ...] = ()
    body: Optional[Node] = None
    is_nested: bool = False
    owner: str = ""
    span: Span = NO_SPAN

    @property
    def is_abstract(self) -> bool:
        if Modifier.ABSTRACT in self.modifiers:
            return True
        return self.kind.is_def_val_var and self.body is None

    @property
    def has_explicit_type(self) -> bool:
        return self.declared_type is not None

    @property
    def qualified_name(self) -> str:
        return f"{self.owner}.{self.name}" if self.owner else self.name

    @property
    def signature(self) -> str:
        """Name plus parameter types, used to tell overloads apart."""
        lists = "".join(
            "(" + ",".join(p.type_name or "_" for p in plist.params) + ")"
            for plist in self.param_lists
        )
        return f"{self.qualified_name}{lists}"
