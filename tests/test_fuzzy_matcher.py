"""Tests for typo-tolerant string scoring."""

import pytest

from require_resolver.fuzzy_matcher import (
    FuzzyMatchOptions,
    MatchTier,
    edit_similarity,
    frequency_similarity,
    fuzzy_match,
    fuzzy_options_for,
    keyboard_aware_distance,
    subsequence_match,
    subsequence_similarity,
)
from require_resolver.keyboard_layout import are_keys_adjacent


def test_exact_match_ignores_case() -> None:
    """Verify exact matches score 1.0."""
    result = fuzzy_match("Janitor", "janitor")
    assert result.score == 1.0
    assert result.tier is MatchTier.EXACT
    assert result.is_match


def test_prefix_and_substring_ranges() -> None:
    """Verify the score bands of prefix and substring matches."""
    prefix = fuzzy_match("jan", "Janitor")
    assert prefix.tier is MatchTier.PREFIX
    assert prefix.score == pytest.approx(0.9 + 0.1 * 3 / 7)

    substring = fuzzy_match("nit", "Janitor")
    assert substring.tier is MatchTier.SUBSTRING
    assert 0.7 < substring.score < 0.9


def test_empty_query() -> None:
    """Verify the fixed low score for an empty query."""
    result = fuzzy_match("", "Janitor")
    assert result.score == pytest.approx(0.1)
    assert result.is_match


def test_keyboard_adjacency() -> None:
    """Verify that neighbouring-key typos cost less."""
    assert are_keys_adjacent("o", "p")
    assert not are_keys_adjacent("o", "x")
    assert not are_keys_adjacent("o", "")
    assert keyboard_aware_distance("janitpr", "janitor") == 0.5
    assert keyboard_aware_distance("janitxr", "janitor") == 1.0
    near = fuzzy_match("janitpr", "janitor")
    far = fuzzy_match("janitxr", "janitor")
    assert near.score > far.score


def test_transposition() -> None:
    """Verify that swapped neighbours cost half an edit."""
    assert keyboard_aware_distance("jnaitor", "janitor") == 0.5
    assert keyboard_aware_distance("", "abc") == 3.0
    assert edit_similarity("", "") == 1.0


def test_subsequence_signal() -> None:
    """Verify in-order coverage and the gap penalty."""
    assert subsequence_match("jtr", "janitor") == (3, 4)
    assert subsequence_similarity("jtr", "janitor") == pytest.approx(0.92)
    assert subsequence_similarity("", "janitor") == 1.0


def test_frequency_signal() -> None:
    """Verify order-insensitive character overlap."""
    assert frequency_similarity("abc", "cab") == 1.0
    assert frequency_similarity("aab", "abb") == pytest.approx(2 / 3)


def test_subsequence_tier() -> None:
    """Verify that a fully covered query is classified as a subsequence match."""
    result = fuzzy_match("jntr", "Janitor")
    assert result.tier is MatchTier.SUBSEQUENCE
    assert result.is_match


def test_transposed_typo_is_fuzzy_match() -> None:
    """Verify a swapped leading pair still matches."""
    result = fuzzy_match("rpomptclass", "PromptClass")
    assert result.tier is MatchTier.FUZZY
    assert result.is_match
    assert result.score == pytest.approx(0.681, abs=0.01)


def test_very_fuzzy_salvage() -> None:
    """Verify that anagram-like queries are salvaged only when allowed."""
    salvaged = fuzzy_match("rotinaj", "janitor", FuzzyMatchOptions(min_score=0.95))
    assert salvaged.tier is MatchTier.FUZZY
    assert salvaged.is_match
    assert salvaged.score >= 0.5

    strict = FuzzyMatchOptions(min_score=0.95, allow_very_fuzzy=False)
    rejected = fuzzy_match("rotinaj", "janitor", strict)
    assert rejected.tier is MatchTier.NONE
    assert not rejected.is_match


def test_unrelated_strings() -> None:
    """Verify that unrelated strings do not match."""
    result = fuzzy_match("qqqqqq", "Janitor")
    assert result.tier is MatchTier.NONE
    assert not result.is_match


def test_presets() -> None:
    """Verify preset lookup and overrides."""
    assert fuzzy_options_for("strict").min_score == 0.5
    assert not fuzzy_options_for("balanced").allow_very_fuzzy
    assert fuzzy_options_for("aggressive") == FuzzyMatchOptions()
    assert fuzzy_options_for("strict", min_score=0.2).min_score == 0.2
    assert fuzzy_options_for("strict", allow_very_fuzzy=True).allow_very_fuzzy
    with pytest.raises(ValueError, match="Unknown fuzzy strength"):
        fuzzy_options_for("wild")
