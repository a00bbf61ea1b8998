"""Tests for language configurations and the tree-sitter wrapper."""

import pytest

from codecomplexity.exceptions import UnsupportedLanguageError
from codecomplexity.scanning.languages import LANGUAGES, get_language_config
from codecomplexity.scanning.treesitter_parser import TreeSitterParser, get_supported_languages


class TestLanguageConfig:
    """Language table lookups."""

    def test_java_is_default_grammar(self):
        java = get_language_config("java")
        assert java.matches("src/Main.java")
        assert java.matches("src/Main.JAVA")
        assert not java.matches("src/Main.kt")

    def test_unknown_language(self):
        with pytest.raises(UnsupportedLanguageError) as exc_info:
            get_language_config("fortran")
        assert exc_info.value.supported_languages == sorted(LANGUAGES)

    def test_every_language_has_a_grammar(self):
        assert set(LANGUAGES) <= set(get_supported_languages())


class TestTreeSitterParser:
    """Grammar loading and parsing."""

    def test_parses_java(self):
        tree = TreeSitterParser().parse(b"class A { void f() {} }", "java")
        assert tree is not None
        assert tree.root_node.type == "program"
        assert not tree.root_node.has_error

    def test_unknown_language_returns_none(self):
        parser = TreeSitterParser()
        assert parser.parse(b"x", "cobol") is None
        assert not parser.is_language_supported("cobol")
