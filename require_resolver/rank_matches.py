"""Logic for ranking candidates against a fuzzy query."""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from require_resolver.fuzzy_matcher import (
    FuzzyMatchOptions,
    MatchResult,
    MatchTier,
    fuzzy_match,
)

T = TypeVar("T")


@dataclass(frozen=True)
class RankedCandidate(Generic[T]):
    """A candidate with the best score found across its searchable fields."""

    item: T
    score: float
    tier: MatchTier
    is_match: bool


def rank_matches(
    query: str,
    candidates: Iterable[T],
    field_selector: Callable[[T], str | Sequence[str]],
    options: FuzzyMatchOptions | None = None,
) -> list[RankedCandidate[T]]:
    """Score every candidate and return those that matched, best first.

    Each candidate keeps the best result over the fields returned by
    `field_selector`; only a strictly higher score replaces an earlier field.
    Candidates whose best tier is `none` are dropped. Equal scores keep their
    input order.
    """
    ranked: list[RankedCandidate[T]] = []
    for item in candidates:
        fields = field_selector(item)
        if isinstance(fields, str):
            fields = [fields]

        best: MatchResult | None = None
        for text in fields:
            result = fuzzy_match(query, text, options)
            if best is None or result.score > best.score:
                best = result

        if best is None or best.tier is MatchTier.NONE:
            continue
        ranked.append(RankedCandidate(item, best.score, best.tier, best.is_match))

    ranked.sort(key=lambda r: r.score, reverse=True)
    return ranked
