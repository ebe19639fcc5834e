"""Shared test fixtures for source-metrics tests."""

import pytest

from source_metrics.syntax import (
    Access,
    Block,
    Conditional,
    Declaration,
    DeclKind,
    Literal,
    LiteralKind,
    Name,
    Param,
    ParamList,
    Span,
)


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def int_literal():
    """The literal 1."""
    return Literal(LiteralKind.INT, 1)


@pytest.fixture
def simple_conditional():
    """if (x) 1 else 2"""
    return Conditional(
        Name(("x",)),
        Literal(LiteralKind.INT, 1),
        Literal(LiteralKind.INT, 2),
    )


@pytest.fixture
def documented_function():
    """Public documented function with one typed parameter and a body."""
    return Declaration(
        name="area",
        kind=DeclKind.DEF,
        access=Access.PUBLIC,
        has_doc=True,
        declared_type="Double",
        param_lists=(ParamList((Param("r", "Double"),)),),
        body=Block((Literal(LiteralKind.DOUBLE, 3.14),), Span(2, 4)),
        owner="geometry",
        span=Span(1, 4),
    )
