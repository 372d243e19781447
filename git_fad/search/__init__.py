"""Fuzzy matching and ranking for git-fad.

This package contains:
- fuzzy.py: Subsequence alignment scorer (default)
- ratio.py: thefuzz partial-ratio scorer
- ranking.py: Best-candidate selection
"""

from .fuzzy import FuzzyMatch, Scorer, SubsequenceScorer, fuzzy_match
from .ranking import Best, MatchResult, NoMatch, ScoredCandidate, rank, rank_tokens
from .ratio import RatioScorer

SCORERS = {
    SubsequenceScorer.name: SubsequenceScorer,
    RatioScorer.name: RatioScorer,
}


def get_scorer(name: str) -> Scorer:
    """Instantiate a scorer by name.

    Raises:
        ValueError: unknown scorer name
    """
    try:
        return SCORERS[name]()
    except KeyError:
        choices = ", ".join(sorted(SCORERS))
        raise ValueError(f"unknown scorer '{name}' (choose from: {choices})") from None


__all__ = [
    "Best",
    "FuzzyMatch",
    "MatchResult",
    "NoMatch",
    "RatioScorer",
    "SCORERS",
    "ScoredCandidate",
    "Scorer",
    "SubsequenceScorer",
    "fuzzy_match",
    "get_scorer",
    "rank",
    "rank_tokens",
]
