"""Typo-tolerant string scoring.

Exact, prefix and substring matches are scored directly. Anything else gets a
weighted blend of three signals:
- keyboard-aware Damerau-Levenshtein similarity
- in-order (subsequence) coverage with a gap penalty
- character-frequency overlap, which ignores order entirely
"""

from collections import Counter
from dataclasses import dataclass, replace
from enum import Enum

from require_resolver.keyboard_layout import are_keys_adjacent

EMPTY_QUERY_SCORE = 0.1
ADJACENT_KEY_COST = 0.5
TRANSPOSITION_COST = 0.5
GAP_PENALTY_RATE = 0.02
MAX_GAP_PENALTY = 0.3
SUBSEQUENCE_TIER_THRESHOLD = 0.8
VERY_FUZZY_FREQUENCY = 0.7
VERY_FUZZY_FACTOR = 0.5


class MatchTier(str, Enum):
    """Quality classification of a match, best first."""

    EXACT = "exact"
    PREFIX = "prefix"
    SUBSTRING = "substring"
    SUBSEQUENCE = "subsequence"
    FUZZY = "fuzzy"
    NONE = "none"


@dataclass(frozen=True)
class MatchResult:
    """Score in [0, 1], whether it counts as a match, and its tier."""

    score: float
    is_match: bool
    tier: MatchTier


@dataclass(frozen=True)
class FuzzyMatchOptions:
    """Weights and thresholds for fuzzy scoring."""

    min_score: float = 0.3
    edit_distance_weight: float = 0.4
    subsequence_weight: float = 0.35
    frequency_weight: float = 0.25
    first_char_bonus: float = 0.15
    allow_very_fuzzy: bool = True


FUZZY_PRESETS: dict[str, FuzzyMatchOptions] = {
    "strict": FuzzyMatchOptions(min_score=0.5, allow_very_fuzzy=False),
    "balanced": FuzzyMatchOptions(min_score=0.35, allow_very_fuzzy=False),
    "aggressive": FuzzyMatchOptions(),
}


def fuzzy_options_for(
    strength: str,
    min_score: float | None = None,
    allow_very_fuzzy: bool | None = None,
) -> FuzzyMatchOptions:
    """Return the preset for `strength` with optional overrides applied."""
    try:
        opts = FUZZY_PRESETS[strength]
    except KeyError:
        msg = f"Unknown fuzzy strength: {strength!r}"
        raise ValueError(msg) from None
    if min_score is not None:
        opts = replace(opts, min_score=min_score)
    if allow_very_fuzzy is not None:
        opts = replace(opts, allow_very_fuzzy=allow_very_fuzzy)
    return opts


def keyboard_aware_distance(a: str, b: str) -> float:
    """Damerau-Levenshtein distance with discounted adjacent-key substitutions.

    Substituting a neighbouring key and swapping two adjacent characters each
    cost 0.5 instead of 1. Comparison is case-insensitive.
    """
    a = a.lower()
    b = b.lower()
    m, n = len(a), len(b)
    if m == 0:
        return float(n)
    if n == 0:
        return float(m)

    dp = [[0.0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        dp[i][0] = float(i)
    for j in range(n + 1):
        dp[0][j] = float(j)

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            c1, c2 = a[i - 1], b[j - 1]
            if c1 == c2:
                cost = 0.0
            elif are_keys_adjacent(c1, c2):
                cost = ADJACENT_KEY_COST
            else:
                cost = 1.0
            dp[i][j] = min(
                dp[i - 1][j] + 1,
                dp[i][j - 1] + 1,
                dp[i - 1][j - 1] + cost,
            )
            if i > 1 and j > 1 and c1 == b[j - 2] and a[i - 2] == c2:
                dp[i][j] = min(dp[i][j], dp[i - 2][j - 2] + TRANSPOSITION_COST)
    return dp[m][n]


def edit_similarity(a: str, b: str) -> float:
    """Convert the keyboard-aware distance into a similarity in [0, 1]."""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return max(0.0, 1 - keyboard_aware_distance(a, b) / max_len)


def subsequence_match(query: str, target: str) -> tuple[int, int]:
    """Greedily match query characters in order.

    Returns (matched character count, total gap length between matches).
    """
    query = query.lower()
    target = target.lower()
    matched = 0
    gaps = 0
    last = -1
    for i, ch in enumerate(target):
        if matched >= len(query):
            break
        if ch == query[matched]:
            if last != -1 and i > last + 1:
                gaps += i - last - 1
            last = i
            matched += 1
    return matched, gaps


def subsequence_similarity(query: str, target: str) -> float:
    """Matched fraction of the query, minus a capped gap penalty."""
    if not query:
        return 1.0
    matched, gaps = subsequence_match(query, target)
    penalty = min(MAX_GAP_PENALTY, gaps * GAP_PENALTY_RATE)
    return matched / len(query) - penalty


def frequency_similarity(a: str, b: str) -> float:
    """Multiset character overlap normalized by the longer string."""
    a = a.lower()
    b = b.lower()
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    common = sum((Counter(a) & Counter(b)).values())
    return common / longest


def fuzzy_match(
    query: str, target: str, options: FuzzyMatchOptions | None = None
) -> MatchResult:
    """Score `query` against `target`, case-insensitively."""
    opts = options or FuzzyMatchOptions()
    q = query.lower()
    t = target.lower()

    if not q:
        return MatchResult(EMPTY_QUERY_SCORE, True, MatchTier.FUZZY)
    if q == t:
        return MatchResult(1.0, True, MatchTier.EXACT)
    if t.startswith(q):
        return MatchResult(0.9 + 0.1 * len(q) / len(t), True, MatchTier.PREFIX)
    if q in t:
        return MatchResult(0.7 + 0.2 * len(q) / len(t), True, MatchTier.SUBSTRING)

    matched, gaps = subsequence_match(q, t)
    coverage = matched / len(q)
    subsequence = coverage - min(MAX_GAP_PENALTY, gaps * GAP_PENALTY_RATE)
    frequency = frequency_similarity(q, t)
    score = (
        edit_similarity(q, t) * opts.edit_distance_weight
        + subsequence * opts.subsequence_weight
        + frequency * opts.frequency_weight
    )
    if t and q[0] == t[0]:
        score += opts.first_char_bonus

    shorter, longer = sorted((len(q), len(t)))
    score *= 0.7 + 0.3 * (shorter / longer)
    score = min(1.0, max(0.0, score))

    if coverage >= SUBSEQUENCE_TIER_THRESHOLD:
        tier = MatchTier.SUBSEQUENCE
    elif score >= opts.min_score:
        tier = MatchTier.FUZZY
    else:
        tier = MatchTier.NONE

    salvaged = False
    if (
        opts.allow_very_fuzzy
        and frequency >= VERY_FUZZY_FREQUENCY
        and score < opts.min_score
    ):
        score = max(score, frequency * VERY_FUZZY_FACTOR)
        tier = MatchTier.FUZZY
        salvaged = True

    return MatchResult(score, salvaged or score >= opts.min_score, tier)
