"""Per-method and per-file metrics: complexity, volume, maintainability, duplication."""

from .complexity import count_decision_points
from .duplication import DuplicateHashEntry, DuplicateIndex, Occurrence, normalize_body
from .halstead import lexical_volume
from .maintainability import maintainability_index

__all__ = [
    "count_decision_points",
    "lexical_volume",
    "maintainability_index",
    "DuplicateIndex",
    "DuplicateHashEntry",
    "Occurrence",
    "normalize_body",
]
