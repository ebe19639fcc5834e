"""Cross-analyzer properties over whole expression trees."""

import pytest

from source_metrics.metrics import branch_density, cyclomatic_complexity, nesting_depth
from source_metrics.metrics import pattern_matching
from source_metrics.syntax import (
    BinaryOp,
    Block,
    BooleanOp,
    Call,
    Case,
    Conditional,
    Lambda,
    Literal,
    LiteralKind,
    Loop,
    LoopKind,
    Match,
    Name,
    Try,
    Wildcard,
)

ONE = Literal(LiteralKind.INT, 1)
X = Name(("x",))


def _loop_in_match():
    """A conditional holding a conditional, inside a loop, inside a 3-case 1-guard match."""
    inner = Conditional(X, Block((ONE,)))
    outer = Conditional(X, Block((inner,)))
    loop = Loop(LoopKind.FOR, (Name(("items",)),), Block((outer,)))
    return Match(
        X,
        (
            Case(ONE, None, loop),
            Case(Name(("n",)), BinaryOp(">", Name(("n",)), ONE), ONE),
            Case(Wildcard(), None, ONE),
        ),
    )


TREES = [
    ONE,
    Block((ONE, Call(Name(("f",)), (X,)))),
    _loop_in_match(),
    Try(
        Block((BooleanOp("&&", X, BooleanOp("||", X, X)),)),
        (Case(Name(("E",)), X, ONE), Case(Wildcard(), None, ONE)),
    ),
    Lambda(("a",), Match(X, (Case(ONE, X, Match(X, (Case(Wildcard(), X, ONE),))),))),
    Loop(LoopKind.WHILE, (BooleanOp("&&", X, X),), Conditional(X, ONE, Conditional(X, ONE))),
]


def _guards(node):
    counts = pattern_matching(node)
    return counts.guards


class TestScenario:
    def test_complexity(self):
        assert cyclomatic_complexity(_loop_in_match()) == 8

    def test_nesting(self):
        """match -> loop -> if -> branch block."""
        assert nesting_depth(_loop_in_match()) == 4


class TestProperties:
    def test_no_decisions_means_one(self):
        for tree in (ONE, Block((ONE, X)), Lambda(("a",), Call(X, (ONE,)))):
            assert cyclomatic_complexity(tree) == 1

    @pytest.mark.parametrize("tree", [t for t in TREES if not isinstance(t, Try)])
    def test_complexity_is_branches_plus_guards_plus_one(self, tree):
        assert cyclomatic_complexity(tree) == branch_density(tree).branches + 1 + _guards(tree)

    def test_catch_guards_add_to_complexity(self):
        tree = TREES[3]
        # one guarded catch case on top of branches
        assert cyclomatic_complexity(tree) == branch_density(tree).branches + 2

    @pytest.mark.parametrize("tree", TREES)
    def test_pattern_bounds(self, tree):
        counts = pattern_matching(tree)
        if counts.matches:
            assert counts.cases >= counts.matches
        assert counts.wildcards <= counts.cases

    @pytest.mark.parametrize("tree", TREES)
    def test_analyzers_are_repeatable(self, tree):
        assert cyclomatic_complexity(tree) == cyclomatic_complexity(tree)
        assert branch_density(tree) == branch_density(tree)
        assert nesting_depth(tree) == nesting_depth(tree)
