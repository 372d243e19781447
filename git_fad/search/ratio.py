"""Similarity-ratio scoring backed by thefuzz."""

from typing import Optional

from thefuzz import fuzz

from .fuzzy import FuzzyMatch, fold, is_subsequence


def _greedy_positions(query: list[str], text: list[str]) -> tuple[int, ...]:
    """Leftmost offsets at which query appears as a subsequence of text."""
    positions = []
    start = 0
    for ch in query:
        start = text.index(ch, start)
        positions.append(start)
        start += 1
    return tuple(positions)


class RatioScorer:
    """Scores paths by thefuzz partial ratio (0-100).

    Candidates that do not contain the query as a subsequence are rejected,
    so both scorers agree on which paths match at all.
    """

    name = "ratio"

    def score(self, query: str, text: str) -> Optional[FuzzyMatch]:
        if not query:
            return FuzzyMatch(0, ())

        q = [fold(ch) for ch in query]
        t = [fold(ch) for ch in text]
        if not is_subsequence(q, t):
            return None

        ratio = fuzz.partial_ratio("".join(q), "".join(t))
        return FuzzyMatch(int(ratio), _greedy_positions(q, t))
