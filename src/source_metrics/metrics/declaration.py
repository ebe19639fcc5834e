"""Assemble every per-declaration metric into one record."""

from ..identity import declaration_id
from ..syntax.declarations import Declaration, DeclKind
from .branch_density import branch_density
from .complexity import cyclomatic_complexity
from .models import DeclarationMetrics, ParameterCounts
from .modifiers import modifier_flags
from .nesting import nesting_depth
from .parameters import parameter_counts
from .pattern_matching import pattern_matching
from .return_type import return_type_info


def analyze_declaration(decl: Declaration, file_id: str = "") -> DeclarationMetrics:
    """Run all analyzers over one declaration.

    Pure and reentrant; safe to call concurrently on different declarations.
    """
    body = decl.body
    params = parameter_counts(decl.param_lists) if decl.kind is DeclKind.DEF else ParameterCounts()
    return DeclarationMetrics(
        id=declaration_id(file_id, decl.signature, decl.span.start_line),
        name=decl.name,
        qualified_name=decl.qualified_name,
        kind=decl.kind.value,
        access=decl.access.value,
        is_nested=decl.is_nested,
        has_doc=decl.has_doc,
        is_deprecated=decl.is_deprecated,
        start_line=decl.span.start_line,
        end_line=decl.span.end_line,
        complexity=cyclomatic_complexity(body),
        nesting_depth=nesting_depth(body),
        branch_density=branch_density(body),
        pattern_matching=pattern_matching(body),
        parameters=params,
        modifiers=modifier_flags(decl),
        return_type=return_type_info(decl),
    )
