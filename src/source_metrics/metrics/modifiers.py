"""Modifier flags, including the evidence-conversion heuristic."""

from ..syntax.declarations import Declaration, DeclKind, Modifier
from .models import ModifierFlags


def modifier_flags(decl: Declaration) -> ModifierFlags:
    mods = decl.modifiers
    return ModifierFlags(
        inline=Modifier.INLINE in mods,
        evidence=Modifier.EVIDENCE in mods,
        abstract=decl.is_abstract,
        given_instance=Modifier.GIVEN_INSTANCE in mods,
        given_conversion=Modifier.GIVEN_CONVERSION in mods,
        evidence_conversion=is_evidence_conversion(decl),
    )


def is_evidence_conversion(decl: Declaration) -> bool:
    """An evidence function taking exactly one explicit argument.

    Heuristic: a def marked evidence whose first parameter list holds exactly
    one parameter, itself not evidence, and whose declared result is not ``Unit``.
    An omitted result type counts as non-``Unit``. Known to misclassify
    evidence helpers that merely take one argument.
    """
    if decl.kind is not DeclKind.DEF or Modifier.EVIDENCE not in decl.modifiers:
        return False
    if not decl.param_lists:
        return False
    first = decl.param_lists[0]
    if len(first.params) != 1 or first.params[0].evidence:
        return False
    return decl.declared_type != "Unit"
