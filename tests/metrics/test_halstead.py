"""Tests for the approximate Halstead volume."""

import math

import pytest

from codecomplexity.metrics.halstead import lexical_volume, tokenize


class TestTokenize:
    """Word-run tokenization."""

    def test_punctuation_separates_tokens(self):
        assert tokenize("return a+b;") == ["return", "a", "b"]

    def test_underscores_and_digits_stay_in_words(self):
        assert tokenize("int max_value2 = x1;") == ["int", "max_value2", "x1"]

    def test_only_punctuation(self):
        assert tokenize("{ } ( ) ; ->") == []

    def test_non_ascii_letters_split_words(self):
        assert tokenize("naïve") == ["na", "ve"]


class TestLexicalVolume:
    """V = N * log2(n)."""

    def test_repeated_token(self):
        """["a","b","a"]: N=3, n=2, V=3."""
        assert lexical_volume("a b a") == pytest.approx(3.0)

    def test_empty_text(self):
        assert lexical_volume("") == 0.0

    def test_single_distinct_token(self):
        assert lexical_volume("x x x") == 0.0

    def test_tokens_are_case_sensitive(self):
        assert lexical_volume("Foo foo") == pytest.approx(2.0)

    def test_matches_formula(self):
        text = "int add(int a, int b) { return a + b; }"
        tokens = tokenize(text)
        expected = len(tokens) * math.log2(len(set(tokens)))
        assert lexical_volume(text) == pytest.approx(expected)

    def test_never_negative(self):
        for text in ["", ";", "a", "a a", "a b c d e"]:
            assert lexical_volume(text) >= 0.0
