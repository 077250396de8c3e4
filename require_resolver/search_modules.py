"""Logic for finding the modules that best match a typed query."""

from require_resolver.candidate_record import CandidateRecord
from require_resolver.fuzzy_matcher import FuzzyMatchOptions, MatchTier, fuzzy_match
from require_resolver.rank_matches import RankedCandidate, rank_matches


def search_modules(
    query: str,
    records: list[CandidateRecord],
    max_suggestions: int = 20,
    options: FuzzyMatchOptions | None = None,
) -> list[RankedCandidate[CandidateRecord]]:
    """Return up to `max_suggestions` matches for `query`, best first.

    Exact, prefix and substring hits on the module name short-circuit fuzzy
    ranking; shorter names come first within prefix and substring hits.
    """
    if not query or not query.strip():
        return [
            RankedCandidate(r, 0.0, MatchTier.FUZZY, True)
            for r in records[:max_suggestions]
        ]

    q = query.lower()
    exact, prefix, substring = [], [], []
    for record in records:
        name = record.display_name.lower()
        if name == q:
            exact.append(record)
        elif name.startswith(q):
            prefix.append(record)
        elif q in name:
            substring.append(record)

    for hits in (exact, prefix, substring):
        if hits:
            hits.sort(key=lambda r: len(r.display_name))
            return _scored(query, hits[:max_suggestions], options)

    ranked = rank_matches(
        query,
        records,
        lambda r: [r.display_name, r.relative_display_path],
        options,
    )
    return [r for r in ranked if r.is_match][:max_suggestions]


def _scored(
    query: str, records: list[CandidateRecord], options: FuzzyMatchOptions | None
) -> list[RankedCandidate[CandidateRecord]]:
    results = []
    for record in records:
        result = fuzzy_match(query, record.display_name, options)
        results.append(
            RankedCandidate(record, result.score, result.tier, result.is_match)
        )
    return results
