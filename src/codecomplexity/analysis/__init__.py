"""Analysis pipeline: file aggregation and project summary."""

from .engine import AnalysisEngine, count_lines, summarize

__all__ = ["AnalysisEngine", "count_lines", "summarize"]
