"""Approximate Halstead volume from raw tokens.

V = N × log₂(n), where N is the total token count and n the vocabulary
(distinct tokens). Tokens are maximal runs of letters, digits and
underscores; operators and punctuation are dropped, so this is a coarse
proxy that needs no lexer.
"""

from __future__ import annotations

import math
import re

_NON_WORD = re.compile(r"[^A-Za-z0-9_]")


def tokenize(text: str) -> list[str]:
    """Split *text* into word tokens."""
    return _NON_WORD.sub(" ", text).split()


def lexical_volume(text: str) -> float:
    """Approximate Halstead volume of a method's source text.

    Returns:
        Non-negative volume; 0.0 for text without tokens
    """
    tokens = tokenize(text)
    length = len(tokens)
    vocabulary = max(len(set(tokens)), 1)
    volume = length * math.log2(vocabulary)
    if not math.isfinite(volume):
        return 0.0
    return volume
