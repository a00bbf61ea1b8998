"""
Code Complexity Analyzer - per-file complexity, volume and duplication metrics

Parses every source file of a project with tree-sitter and reports
cyclomatic complexity, an approximate Halstead volume, a 0-100
maintainability index, and which files share duplicated method bodies.
"""

__version__ = "0.1.0"

from .analysis import AnalysisEngine
from .api import analyze
from .models import AnalysisResult, FileMetrics, SourceFile

__all__ = [
    "analyze",  # Main entry point
    "AnalysisEngine",  # Direct engine access with a custom parser
    "AnalysisResult",
    "FileMetrics",
    "SourceFile",
]
