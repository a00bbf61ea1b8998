"""Normalizer: converts tree-sitter parse trees to ParsedSource.

This module takes tree-sitter parse trees and produces language-agnostic
MethodUnit objects whose trees use the closed NodeKind tag set. All
language-specific knowledge comes from the LanguageConfig table.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Protocol

from ..exceptions import ParsingError, UnsupportedLanguageError
from .languages import LanguageConfig, get_language_config
from .syntax import MethodUnit, NodeKind, ParsedSource, SyntaxNode
from .treesitter_parser import TreeSitterParser, get_supported_languages

logger = logging.getLogger(__name__)


class SourceParser(Protocol):
    """Parsing collaborator consumed by the analysis engine."""

    language: str

    def parse(self, text: str, path: str) -> ParsedSource:
        """Parse *text* or raise ParsingError."""
        ...


def _iter_nodes(root: Any) -> Iterator[Any]:
    """Depth-first pre-order walk over a tree-sitter tree without recursion."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


class TreeSitterNormalizer:
    """Parses one language with tree-sitter and extracts method units.

    Usage:
        normalizer = TreeSitterNormalizer("java")
        parsed = normalizer.parse(content, "src/Foo.java")
        for method in parsed.methods:
            ...
    """

    def __init__(self, language: str = "java", parser: TreeSitterParser | None = None) -> None:
        self.config: LanguageConfig = get_language_config(language)
        self.language = self.config.name
        self._parser = parser or TreeSitterParser()
        if not self._parser.is_language_supported(self.language):
            raise UnsupportedLanguageError(self.language, get_supported_languages())

    def parse(self, text: str, path: str) -> ParsedSource:
        """Parse file content and return its methods.

        Raises:
            ParsingError: If the text cannot be encoded or contains syntax errors
        """
        try:
            code = text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ParsingError(path, self.language, f"encoding error: {e.reason}")

        tree = self._parser.parse(code, self.language)
        if tree is None:
            raise ParsingError(path, self.language, "no grammar available")

        root = tree.root_node
        if root.has_error:
            raise ParsingError(path, self.language, self._describe_error(root))

        methods = [
            self._to_method(node, code, path)
            for node in _iter_nodes(root)
            if node.type in self.config.method_types
        ]
        logger.debug(f"Parsed {path}: {len(methods)} methods")
        return ParsedSource(path=path, language=self.language, methods=methods)

    def _describe_error(self, root: Any) -> str:
        for node in _iter_nodes(root):
            if node.type == "ERROR" or node.is_missing:
                line, column = node.start_point
                what = f"missing {node.type}" if node.is_missing else "syntax error"
                return f"{what} at line {line + 1}, column {column + 1}"
        return "syntax error"

    def _to_method(self, node: Any, code: bytes, path: str) -> MethodUnit:
        name_node = node.child_by_field_name("name")
        name = _slice(code, name_node) if name_node is not None else "<anonymous>"
        return MethodUnit(
            file_path=path,
            name=name,
            tree=self._convert(node, code),
            source=_slice(code, node),
            start_line=node.start_point[0] + 1,
            end_line=node.end_point[0] + 1,
        )

    def _children(self, node: Any) -> Iterator[Any]:
        comments = self.config.comment_types
        return (child for child in node.named_children if child.type not in comments)

    def _convert(self, root: Any, code: bytes) -> SyntaxNode:
        """Build the tagged tree bottom-up with an explicit stack."""
        stack: list[tuple[Any, Iterator[Any], list[SyntaxNode]]] = [
            (root, self._children(root), [])
        ]
        while True:
            node, pending, built = stack[-1]
            child = next(pending, None)
            if child is not None:
                stack.append((child, self._children(child), []))
                continue
            stack.pop()
            converted = self._tag(node, tuple(built), code)
            if not stack:
                return converted
            stack[-1][2].append(converted)

    def _tag(self, node: Any, children: tuple[SyntaxNode, ...], code: bytes) -> SyntaxNode:
        cfg = self.config
        node_type = node.type
        kind = NodeKind.OTHER
        labels = 0

        if node_type in cfg.branch_types and not self._is_case_guard(node):
            kind = NodeKind.BRANCH
        elif node_type in cfg.loop_types:
            kind = NodeKind.LOOP
        elif node_type in cfg.catch_types:
            kind = NodeKind.CATCH
        elif node_type in cfg.ternary_types:
            kind = NodeKind.TERNARY
        elif node_type in cfg.logical_types:
            operator = node.child_by_field_name("operator")
            op = operator.type if operator is not None else ""
            if op in cfg.and_operators:
                kind = NodeKind.LOGICAL_AND
            elif op in cfg.or_operators:
                kind = NodeKind.LOGICAL_OR
        elif node_type in cfg.case_arm_types:
            kind = NodeKind.CASE_ARM
            labels = self._count_labels(node, code)

        return SyntaxNode(kind=kind, children=children, labels=labels, node_type=node_type)

    def _is_case_guard(self, node: Any) -> bool:
        if node.type not in self.config.guard_types:
            return False
        parent = node.parent
        return parent is not None and parent.type in self.config.case_arm_types

    def _count_labels(self, arm: Any, code: bytes) -> int:
        cfg = self.config
        count = 0
        for child in arm.named_children:
            if child.type in cfg.case_label_types:
                values = [v for v in child.named_children if v.type not in cfg.non_value_types]
            elif child.type in cfg.case_value_types:
                values = [child]
            else:
                continue
            count += sum(1 for v in values if _slice(code, v).strip() not in cfg.default_labels)
        return count


def _slice(code: bytes, node: Any) -> str:
    return code[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
