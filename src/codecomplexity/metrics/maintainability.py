"""Maintainability index rescaled to [0, 100].

MI = 171 − 5.2·ln(V) − 0.23·CC − 16.2·ln(LOC), then MI/171·100 floored at 0.
"""

from __future__ import annotations

import math

_MI_MAX = 171.0


def safe_ln(x: float) -> float:
    """Natural log, 0.0 for non-positive input."""
    if x <= 0:
        return 0.0
    return math.log(x)


def maintainability_index(volume: float, complexity: int, lines: int) -> float:
    """Score a file from its total volume, complexity and line count.

    Args:
        volume: Summed Halstead volume (>= 0)
        complexity: Summed cyclomatic complexity (>= 1)
        lines: Line count (>= 0)

    Returns:
        Score in [0, 100] rounded to 2 decimals
    """
    raw = _MI_MAX - 5.2 * safe_ln(volume) - 0.23 * complexity - 16.2 * safe_ln(max(lines, 1))
    scaled = max(0.0, raw / _MI_MAX * 100.0)
    return round(scaled, 2)
