"""Ranking of ambiguous FDC search results."""

from collections.abc import Sequence

from nutrition_resolver.domain.nutrition import DataTier, SearchCandidate


def tier_score(data_type: str | None) -> int:
    """Return the quality score for an FDC data type label."""
    return int(DataTier.from_label(data_type))


def similarity(query: str, description: str) -> float:
    """Return the fraction of query words found in the description.

    A query word matches when any description word contains it or is
    contained by it. Both strings are compared lower-cased.
    """
    query = query.lower()
    description = description.lower()
    query_words = query.split()
    if not query_words:
        return 0.0
    if query == description:
        return 1.0
    description_words = description.split()
    matches = sum(
        1
        for word in query_words
        if any(word in other or other in word for other in description_words)
    )
    return matches / len(query_words)


def rank(candidates: Sequence[SearchCandidate], query: str) -> list[SearchCandidate]:
    """Order candidates by data tier, then by similarity to the query.

    The sort is stable, so equal candidates keep their input order.
    """
    return sorted(
        candidates,
        key=lambda candidate: (
            -tier_score(candidate.data_type),
            -similarity(query, candidate.description),
        ),
    )


def select_best(
    candidates: Sequence[SearchCandidate], query: str
) -> SearchCandidate | None:
    """Return the best candidate for the query, or None if there are none."""
    if not candidates:
        return None
    return rank(candidates, query)[0]
