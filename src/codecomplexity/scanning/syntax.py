"""Syntax models for parsed source files.

The parser adapter reduces a grammar-specific tree to a small closed set of
node kinds. Everything the metrics need to know about a node is its kind
(and, for case arms, how many labels it carries); every other node is
OTHER and only matters for its children.

    ParsedSource
      └── MethodUnit (one per method declaration)
            ├── tree: SyntaxNode
            └── source: raw text of the declaration
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NodeKind(Enum):
    """Tags for syntax nodes relevant to decision-point counting."""

    BRANCH = "branch"  # if / elif
    LOOP = "loop"  # for, for-each, while, do-while
    CASE_ARM = "case_arm"  # one arm of a multi-way branch, carries label count
    CATCH = "catch"  # exception handler clause
    LOGICAL_AND = "logical_and"  # short-circuit &&
    LOGICAL_OR = "logical_or"  # short-circuit ||
    TERNARY = "ternary"  # conditional expression
    OTHER = "other"


@dataclass(frozen=True)
class SyntaxNode:
    """A tagged node of a method's statement/expression tree.

    Attributes:
        kind: Node tag
        children: Child nodes in source order
        labels: Number of case labels (CASE_ARM only; 0 for a default arm)
        node_type: Grammar node type this node was built from (diagnostics only)
    """

    kind: NodeKind
    children: tuple[SyntaxNode, ...] = ()
    labels: int = 0
    node_type: str = ""

    def walk(self):
        """Yield this node and all descendants (pre-order, iterative)."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass(frozen=True)
class MethodUnit:
    """One method declaration extracted from a file.

    Attributes:
        file_path: Path of the containing file (relative, forward slashes)
        name: Method name as written
        tree: Tagged statement/expression tree of the whole declaration
        source: Raw declaration text, whitespace as written
        start_line: First line of the declaration (1-indexed)
        end_line: Last line of the declaration (1-indexed)
    """

    file_path: str
    name: str
    tree: SyntaxNode
    source: str
    start_line: int = 0
    end_line: int = 0


@dataclass
class ParsedSource:
    """Result of parsing one file.

    Attributes:
        path: File path (relative to the analysis root)
        language: Grammar used
        methods: Method declarations found anywhere in the file
    """

    path: str
    language: str
    methods: list[MethodUnit] = field(default_factory=list)

    @property
    def method_count(self) -> int:
        """Number of methods in this file."""
        return len(self.methods)
