"""Language configurations: the single source of truth for grammar node types.

Adding a new language:
  1. Add a LanguageConfig entry to LANGUAGES below.
  2. Register its grammar module in treesitter_parser.py.
The normalizer maps grammar node types onto NodeKind using only this table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath

from ..exceptions import UnsupportedLanguageError


@dataclass(frozen=True)
class LanguageConfig:
    """Everything the parser adapter needs to know about a language."""

    name: str
    extensions: tuple[str, ...]

    # Node types that declare a method/function; their "name" field is the name.
    method_types: frozenset[str] = frozenset()

    # Node types mapped onto NodeKind tags.
    branch_types: frozenset[str] = frozenset()
    loop_types: frozenset[str] = frozenset()
    catch_types: frozenset[str] = frozenset()
    ternary_types: frozenset[str] = frozenset()

    # Logical connectives: node types carrying an "operator" field, and the
    # operator tokens that count as short-circuit AND / OR.
    logical_types: frozenset[str] = frozenset()
    and_operators: frozenset[str] = frozenset()
    or_operators: frozenset[str] = frozenset()

    # Multi-way branch arms and the label nodes attached to them. Each label
    # contributes the number of its value children (a default label has none).
    case_arm_types: frozenset[str] = frozenset()
    case_label_types: frozenset[str] = frozenset()
    # Arms whose value children sit directly on the arm node (no label wrapper).
    case_value_types: frozenset[str] = frozenset()
    # Children of a label that are not case values (guards, comments).
    non_value_types: frozenset[str] = frozenset()
    # Label texts that stand for the default arm (`case null, default`, `case _`).
    default_labels: frozenset[str] = frozenset()
    # Guards attached to a case arm; part of the arm, not a branch of their own.
    guard_types: frozenset[str] = frozenset()

    comment_types: frozenset[str] = frozenset()

    skip_dirs: tuple[str, ...] = field(
        default=(
            "vendor",
            "node_modules",
            "venv",
            ".venv",
            "__pycache__",
            ".git",
            "dist",
            "build",
            "target",
            "out",
            ".gradle",
            ".idea",
        )
    )

    def matches(self, path: str) -> bool:
        """True if *path* has one of this language's extensions."""
        return PurePosixPath(path).suffix.lower() in self.extensions


_JAVA_COMMENTS = frozenset({"line_comment", "block_comment", "comment"})

LANGUAGES: dict[str, LanguageConfig] = {
    "java": LanguageConfig(
        name="java",
        extensions=(".java",),
        method_types=frozenset({"method_declaration"}),
        branch_types=frozenset({"if_statement"}),
        loop_types=frozenset(
            {"for_statement", "enhanced_for_statement", "while_statement", "do_statement"}
        ),
        catch_types=frozenset({"catch_clause"}),
        ternary_types=frozenset({"ternary_expression"}),
        logical_types=frozenset({"binary_expression"}),
        and_operators=frozenset({"&&"}),
        or_operators=frozenset({"||"}),
        case_arm_types=frozenset({"switch_block_statement_group", "switch_rule"}),
        case_label_types=frozenset({"switch_label"}),
        non_value_types=frozenset({"guard"}) | _JAVA_COMMENTS,
        default_labels=frozenset({"default"}),
        comment_types=_JAVA_COMMENTS,
    ),
    "python": LanguageConfig(
        name="python",
        extensions=(".py",),
        method_types=frozenset({"function_definition"}),
        branch_types=frozenset({"if_statement", "elif_clause", "if_clause"}),
        loop_types=frozenset({"for_statement", "while_statement", "for_in_clause"}),
        catch_types=frozenset({"except_clause", "except_group_clause"}),
        ternary_types=frozenset({"conditional_expression"}),
        logical_types=frozenset({"boolean_operator"}),
        and_operators=frozenset({"and"}),
        or_operators=frozenset({"or"}),
        case_arm_types=frozenset({"case_clause"}),
        case_value_types=frozenset({"case_pattern"}),
        default_labels=frozenset({"_"}),
        guard_types=frozenset({"if_clause"}),
        comment_types=frozenset({"comment"}),
    ),
}


def get_language_config(name: str) -> LanguageConfig:
    """Look up a language by name.

    Raises:
        UnsupportedLanguageError: If no configuration exists for *name*
    """
    config = LANGUAGES.get(name.lower())
    if config is None:
        raise UnsupportedLanguageError(name, sorted(LANGUAGES))
    return config
