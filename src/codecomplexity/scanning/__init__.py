"""Source intake and tree-sitter parsing.

Submodules:
    syntax: tagged syntax tree and method models
    languages: grammar node types per language
    treesitter_parser / normalizer: tree-sitter to MethodUnit conversion
    intake: directory, archive and upload discovery
"""

from .languages import LANGUAGES, LanguageConfig, get_language_config
from .syntax import MethodUnit, NodeKind, ParsedSource, SyntaxNode

__all__ = [
    "LANGUAGES",
    "LanguageConfig",
    "get_language_config",
    "MethodUnit",
    "NodeKind",
    "ParsedSource",
    "SyntaxNode",
]
