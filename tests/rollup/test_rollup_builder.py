"""Tests for source_metrics.rollup.builder."""

from pathlib import Path

import pytest

from source_metrics.config import ThresholdConfig
from source_metrics.identity import file_id, package_id
from source_metrics.metrics import analyze_declaration
from source_metrics.rollup import (
    SkippedFile,
    build_file_stats,
    build_package_stats,
    build_project_stats,
    combine,
    file_rollup,
)
from source_metrics.syntax import (
    Access,
    Block,
    BooleanOp,
    Conditional,
    Declaration,
    DeclKind,
    Literal,
    LiteralKind,
    Modifier,
    Name,
    Param,
    ParamList,
    ParsedFile,
    Span,
)

ONE = Literal(LiteralKind.INT, 1)
X = Name(("x",))


def _branchy(n):
    """Block of ``n`` conditionals: complexity n + 1."""
    return Block(tuple(Conditional(X, ONE) for _ in range(n)), Span(2, 2 + n))


def _declarations():
    return (
        Declaration(
            "run",
            DeclKind.DEF,
            has_doc=True,
            declared_type="Int",
            param_lists=(ParamList((Param("a"), Param("b", has_default=True))),),
            body=_branchy(3),
            span=Span(1, 5),
        ),
        Declaration(
            "_helper",
            DeclKind.DEF,
            access=Access.PROTECTED,
            modifiers=frozenset({Modifier.INLINE}),
            body=Block((BooleanOp("||", X, X),), Span(7, 8)),
            span=Span(6, 8),
        ),
        Declaration("inner", DeclKind.DEF, body=ONE, is_nested=True, owner="run", span=Span(3, 3)),
        Declaration("LIMIT", DeclKind.VAL, body=ONE, is_deprecated=True, span=Span(10, 10)),
        Declaration("Widget", DeclKind.CLASS, span=Span(12, 20)),
    )


def _parsed(path, package, declarations=None, loc=20):
    return ParsedFile(
        path=Path(path),
        package=package,
        language="python",
        loc=loc,
        size_bytes=400,
        declarations=_declarations() if declarations is None else declarations,
    )


class TestFileRollup:
    def test_core_counts(self):
        stats = build_file_stats(_parsed("/proj/app/main.py", "app"), root=Path("/proj"))
        core = stats.rollup.core
        assert core.files == 1
        assert core.loc == 20
        assert core.file_size_bytes == 400
        assert core.functions == 3
        assert core.public_functions == 1
        assert core.protected_functions == 1
        assert core.symbols == 5
        assert core.public_symbols == 3
        assert core.nested_symbols == 1
        assert core.documented_public_symbols == 1
        assert core.deprecated_symbols == 1
        assert core.defs_vals_vars == 4
        assert core.public_defs_vals_vars == 2

    def test_derived_values(self):
        rollup = build_file_stats(_parsed("/proj/app/main.py", "app"), root=Path("/proj")).rollup
        assert rollup.max_complexity == 4
        assert rollup.avg_complexity == pytest.approx((4 + 2 + 1 + 1 + 1) / 5)
        assert rollup.doc_coverage_pct == pytest.approx(100.0 / 3)
        assert rollup.deprecated_density_pct == pytest.approx(20.0)
        assert rollup.return_type_explicitness_pct == pytest.approx(25.0)
        assert rollup.modifiers.inline_methods == 1
        assert rollup.parameters.total == 2
        assert rollup.parameters.defaulted == 1
        assert rollup.branch_density.branches == 4
        assert rollup.branch_density.density_per_100 == pytest.approx(20.0)
        assert rollup.items_with_low_documentation == 1

    def test_metadata(self):
        stats = build_file_stats(
            _parsed("/proj/app/main.py", "app"), root=Path("/proj"), project_id="p1"
        )
        assert stats.metadata.path == "app/main.py"
        assert stats.metadata.name == "main.py"
        assert stats.metadata.id == file_id("/proj/app/main.py", "/proj", "p1")
        assert all(len(d.id) == 16 for d in stats.declarations)

    def test_empty_file(self):
        stats = build_file_stats(_parsed("/proj/empty.py", "<root>", declarations=(), loc=0))
        rollup = stats.rollup
        assert rollup.core.files == 1
        assert rollup.core.symbols == 0
        assert rollup.avg_complexity == 0.0
        assert rollup.branch_density.density_per_100 == 0.0
        assert rollup.items_with_low_documentation == 0


class TestThresholdFlags:
    def _functions(self, complexities, params=0):
        decls = [
            Declaration(
                f"f{i}",
                DeclKind.DEF,
                param_lists=(ParamList(tuple(Param(f"p{k}") for k in range(params))),),
                body=_branchy(c - 1),
                span=Span(1, 2),
            )
            for i, c in enumerate(complexities)
        ]
        return [analyze_declaration(d) for d in decls]

    def test_high_complexity_uses_file_mean(self):
        assert file_rollup(self._functions([12, 12]), 50, 10).items_with_high_complexity == 1
        assert file_rollup(self._functions([18, 2]), 50, 10).items_with_high_complexity == 0

    def test_threshold_is_exclusive(self):
        assert file_rollup(self._functions([11, 11]), 50, 10).items_with_high_complexity == 1
        thresholds = ThresholdConfig(high_complexity=11.0)
        rollup = file_rollup(self._functions([11, 11]), 50, 10, thresholds)
        assert rollup.items_with_high_complexity == 0

    def test_parameter_count(self):
        assert file_rollup(self._functions([1], params=6), 5, 10).items_with_high_parameter_count == 1
        assert file_rollup(self._functions([1], params=5), 5, 10).items_with_high_parameter_count == 0

    def test_branch_density(self):
        rollup = file_rollup(self._functions([7]), 10, 10)
        assert rollup.items_with_high_branch_density == 1

    def test_flags_add_across_files(self):
        hot = file_rollup(self._functions([12]), 10, 10)
        assert combine(hot, hot).items_with_high_complexity == 2


class TestPackagesAndProject:
    def _files(self):
        return [
            build_file_stats(_parsed("/proj/b/two.py", "b"), root=Path("/proj")),
            build_file_stats(_parsed("/proj/a/z.py", "a"), root=Path("/proj")),
            build_file_stats(_parsed("/proj/a/y.py", "a"), root=Path("/proj")),
        ]

    def test_grouping_and_order(self):
        packages = build_package_stats(self._files(), project_id="p")
        assert [p.metadata.name for p in packages] == ["a", "b"]
        assert [f.metadata.path for f in packages[0].files] == ["a/y.py", "a/z.py"]
        assert packages[0].metadata.id == package_id("a", "p")
        assert packages[0].rollup.core.files == 2

    def test_project_rollup(self):
        skipped = [SkippedFile("z.py", "syntax error"), SkippedFile("c.py", "too large")]
        project = build_project_stats(
            self._files(), name="demo", root=Path("/proj"), skipped=skipped
        )
        assert project.metadata.name == "demo"
        assert project.metadata.root == "/proj"
        assert project.rollup.core.files == 3
        assert project.rollup.core.symbols == 15
        assert project.skipped_count == 2
        assert [s.path for s in project.skipped_files] == ["c.py", "z.py"]
        assert len(project.files) == 3

    def test_input_order_does_not_matter(self):
        files = self._files()
        forward = build_project_stats(files, root=Path("/proj"))
        backward = build_project_stats(list(reversed(files)), root=Path("/proj"))
        assert forward == backward

    def test_no_files(self):
        project = build_project_stats([], skipped=[SkippedFile("x.py", "bad")])
        assert project.rollup.core.files == 0
        assert project.packages == ()
        assert project.skipped_count == 1
