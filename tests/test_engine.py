"""Tests for source_metrics.analysis.engine."""

import logging
from pathlib import Path

import pytest

from source_metrics.analysis import ProjectAnalyzer
from source_metrics.config import AnalysisConfig
from source_metrics.exceptions import InvalidPathError, ParsingError
from source_metrics.syntax import (
    BinaryOp,
    Conditional,
    Declaration,
    DeclKind,
    Literal,
    LiteralKind,
    Name,
    ParsedFile,
    SourceParser,
    Span,
    count_loc,
)


def _long_chain(terms):
    """Left-associative `s0 + s1 + ...` built without recursion."""
    node = Name(("s0",))
    for i in range(1, terms):
        node = BinaryOp("+", node, Name((f"s{i}",)))
    return node


class LineParser(SourceParser):
    """One function per ``def NAME`` line; ``if`` lines become conditionals."""

    language = "fake"

    def parse(self, source, path, root):
        if "SYNTAX ERROR" in source:
            raise ParsingError(path, self.language, "syntax error")
        decls = []
        if "CHAIN" in source:
            decls.append(Declaration("generated", DeclKind.VAL, body=_long_chain(5000)))
        for number, line in enumerate(source.splitlines(), start=1):
            words = line.split()
            if len(words) >= 2 and words[0] == "def":
                body = Literal(LiteralKind.INT, 1)
                if "if" in words:
                    body = Conditional(Name(("x",)), body, body, Span(number, number))
                decls.append(
                    Declaration(words[1], DeclKind.DEF, body=body, span=Span(number, number))
                )
        rel = Path(path).parent.relative_to(root)
        return ParsedFile(
            path=Path(path),
            package=".".join(rel.parts) or "<root>",
            language=self.language,
            loc=count_loc(source),
            size_bytes=len(source.encode("utf-8")),
            declarations=tuple(decls),
        )


def _write(root, rel, text):
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path):
    _write(tmp_path, "app/main.py", "def run\ndef check if\n")
    _write(tmp_path, "app/util.py", "def helper\n")
    _write(tmp_path, "lib/core.py", "def core if\n\n\n")
    _write(tmp_path, "lib/broken.py", "def oops\nSYNTAX ERROR\n")
    _write(tmp_path, "README.md", "def not_python\n")
    _write(tmp_path, "venv/site.py", "def vendored\n")
    _write(tmp_path, "app/venv/deep.py", "def vendored\n")
    return tmp_path


def _analyzer(**kwargs):
    return ProjectAnalyzer(AnalysisConfig(**kwargs), LineParser())


class TestDiscovery:
    def test_include_and_exclude(self, project):
        found = [p.relative_to(project).as_posix() for p in _analyzer().discover(project)]
        assert found == ["app/main.py", "app/util.py", "lib/broken.py", "lib/core.py"]

    def test_custom_patterns(self, project):
        analyzer = _analyzer(include_patterns=["*.md"], exclude_patterns=[])
        assert [p.name for p in analyzer.discover(project)] == ["README.md"]

    def test_missing_root(self, tmp_path):
        with pytest.raises(InvalidPathError):
            _analyzer().discover(tmp_path / "nope")

    def test_root_must_be_directory(self, tmp_path):
        target = _write(tmp_path, "a.py", "")
        with pytest.raises(InvalidPathError):
            _analyzer().discover(target)

    def test_symlinks_skipped_by_default(self, project):
        link = project / "app" / "alias.py"
        try:
            link.symlink_to(project / "app" / "util.py")
        except OSError:
            pytest.skip("symlinks not supported")
        assert link not in _analyzer().discover(project)
        assert link in _analyzer(follow_symlinks=True).discover(project)


class TestAnalyze:
    def test_project_totals(self, project):
        analyzer = _analyzer()
        stats = analyzer.analyze(project)
        assert stats.rollup.core.files == 3
        assert stats.rollup.core.functions == 4
        assert stats.rollup.max_complexity == 2
        assert [p.metadata.name for p in stats.packages] == ["app", "lib"]
        assert analyzer.analyzed_count == 3
        assert analyzer.skipped_count == 1

    def test_parse_failure_is_skipped(self, project, caplog):
        with caplog.at_level(logging.WARNING, logger="source_metrics"):
            stats = _analyzer().analyze(project)
        assert stats.skipped_count == 1
        assert stats.skipped_files[0].path == "lib/broken.py"
        assert "syntax error" in stats.skipped_files[0].reason
        assert any("lib/broken.py" in r.getMessage() for r in caplog.records)

    @pytest.mark.parametrize("workers", [1, 4])
    def test_too_deep_expression_is_skipped(self, project, workers, caplog):
        """A generated concatenation chain loses only its own file."""
        _write(project, "lib/generated.py", "CHAIN\n")
        analyzer = _analyzer(workers=workers, parallel_min_files=2)
        with caplog.at_level(logging.WARNING, logger="source_metrics"):
            stats = analyzer.analyze(project)
        assert "lib/generated.py" in [s.path for s in stats.skipped_files]
        assert stats.rollup.core.files == 3
        assert analyzer.skipped_count == 2
        assert any("too deep" in r.getMessage() for r in caplog.records)

    def test_oversized_file_is_skipped(self, project):
        _write(project, "lib/huge.py", "def big\n" * 2000)
        stats = _analyzer(max_file_size_mb=0.001).analyze(project)
        assert "lib/huge.py" in [s.path for s in stats.skipped_files]

    def test_undecodable_file_is_skipped(self, project):
        (project / "lib" / "latin.py").write_bytes(b"def caf\xe9\n")
        stats = _analyzer().analyze(project)
        assert "lib/latin.py" in [s.path for s in stats.skipped_files]

    def test_project_identity(self, project):
        stats = _analyzer(project_name="demo", project_id="p1").analyze(project)
        assert stats.metadata.name == "demo"
        assert stats.metadata.id == "p1"
        assert stats.metadata.root == project.as_posix()

    def test_parallel_matches_sequential(self, tmp_path):
        for i in range(12):
            _write(tmp_path, f"pkg{i % 3}/m{i}.py", "def a\ndef b if\n" * (i + 1))
        sequential = _analyzer(workers=1).analyze(tmp_path)
        parallel = _analyzer(workers=4, parallel_min_files=2).analyze(tmp_path)
        assert parallel == sequential

    def test_empty_project(self, tmp_path):
        stats = _analyzer().analyze(tmp_path)
        assert stats.rollup.core.files == 0
        assert stats.packages == ()
