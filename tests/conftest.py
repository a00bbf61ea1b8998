"""Shared test fixtures for Code Complexity Analyzer tests."""

import textwrap

import pytest

from codecomplexity.scanning.normalizer import TreeSitterNormalizer
from codecomplexity.scanning.syntax import NodeKind, SyntaxNode


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


def _build_node(kind=NodeKind.OTHER, *children, labels=0):
    return SyntaxNode(kind=kind, children=tuple(children), labels=labels)


def _wrap_in_class(*methods, name="Sample"):
    body = "\n\n".join(textwrap.indent(textwrap.dedent(m).strip(), "    ") for m in methods)
    return f"public class {name} {{\n{body}\n}}\n"


@pytest.fixture
def node():
    """Builder for hand-made SyntaxNode trees: node(kind, *children, labels=0)."""
    return _build_node


@pytest.fixture
def java_class():
    """Wraps method sources in a Java class declaration: java_class(*methods, name=...)."""
    return _wrap_in_class


@pytest.fixture(scope="session")
def java_parser():
    """Tree-sitter normalizer for Java (shared, parsers are per thread)."""
    return TreeSitterNormalizer("java")


@pytest.fixture(scope="session")
def python_parser():
    """Tree-sitter normalizer for Python."""
    return TreeSitterNormalizer("python")


@pytest.fixture
def trivial_method():
    """A method without any decision point."""
    return """
    int answer() {
        return 42;
    }
    """


@pytest.fixture
def branchy_method():
    """A method with one if, one loop and one catch: CC = 4."""
    return """
    int parse(String[] values) {
        int total = 0;
        for (String v : values) {
            try {
                total += Integer.parseInt(v);
            } catch (NumberFormatException e) {
                if (v.isEmpty()) {
                    continue;
                }
            }
        }
        return total;
    }
    """
