"""Cyclomatic complexity by decision-point counting.

CC = 1 + Σ decision points, where a decision point is:
    - a branch (if / elif)
    - a loop (for, for-each, while, do-while)
    - each label of a case arm (a `case 1, 2, 3` arm adds 3, `default` adds 0)
    - a catch clause
    - a short-circuit && or ||, including every link of a chain
    - a ternary expression
"""

from __future__ import annotations

from ..scanning.syntax import NodeKind, SyntaxNode

_UNIT_KINDS = frozenset(
    {
        NodeKind.BRANCH,
        NodeKind.LOOP,
        NodeKind.CATCH,
        NodeKind.LOGICAL_AND,
        NodeKind.LOGICAL_OR,
        NodeKind.TERNARY,
    }
)


def decision_weight(node: SyntaxNode) -> int:
    """How many decision points this single node contributes."""
    if node.kind in _UNIT_KINDS:
        return 1
    if node.kind is NodeKind.CASE_ARM:
        return node.labels
    return 0


def count_decision_points(tree: SyntaxNode) -> int:
    """Cyclomatic complexity of one method's tree; always >= 1."""
    return 1 + sum(decision_weight(node) for node in tree.walk())
