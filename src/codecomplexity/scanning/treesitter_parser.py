"""Tree-sitter parser wrapper.

Provides a unified interface for tree-sitter parsing across languages.

Usage:
    parser = TreeSitterParser()
    tree = parser.parse(code_bytes, "java")
"""

from __future__ import annotations

import threading
from typing import Any

import tree_sitter
import tree_sitter_java
import tree_sitter_python

_language_modules: dict[str, Any] = {
    "java": tree_sitter_java,
    "python": tree_sitter_python,
}


def get_supported_languages() -> list[str]:
    """Get list of languages with installed grammars."""
    return sorted(_language_modules)


class TreeSitterParser:
    """Wrapper around tree-sitter for multi-language parsing.

    tree-sitter parsers are not safe to share between threads, so each
    thread lazily builds its own parser per language. Language objects are
    immutable and shared.
    """

    def __init__(self) -> None:
        self._languages: dict[str, tree_sitter.Language] = {}
        for lang_name, lang_module in _language_modules.items():
            # tree-sitter >= 0.23 grammars return a PyCapsule; wrap in Language()
            self._languages[lang_name] = tree_sitter.Language(lang_module.language())
        self._local = threading.local()

    def _parser_for(self, language: str) -> tree_sitter.Parser | None:
        lang = self._languages.get(language)
        if lang is None:
            return None
        parsers: dict[str, tree_sitter.Parser] | None = getattr(self._local, "parsers", None)
        if parsers is None:
            parsers = {}
            self._local.parsers = parsers
        parser = parsers.get(language)
        if parser is None:
            parser = tree_sitter.Parser(lang)
            parsers[language] = parser
        return parser

    def parse(self, code: bytes, language: str) -> tree_sitter.Tree | None:
        """Parse code and return syntax tree.

        Args:
            code: Source code as bytes
            language: Language name (e.g., "java")

        Returns:
            Tree object, or None if the language is not supported
        """
        parser = self._parser_for(language)
        if parser is None:
            return None
        return parser.parse(code)

    def is_language_supported(self, language: str) -> bool:
        """Check if a language is supported."""
        return language in self._languages
