"""Pick the single best candidate for a query."""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Optional, Union

from ..repo import Candidate
from ..utils import log_debug
from .fuzzy import Scorer, SubsequenceScorer


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate with its match score and matched path offsets."""

    candidate: Candidate
    score: int
    positions: tuple[int, ...] = ()

    @property
    def path(self) -> str:
        return self.candidate.path


@dataclass(frozen=True)
class Best:
    scored: ScoredCandidate

    @property
    def path(self) -> str:
        return self.scored.path

    @property
    def score(self) -> int:
        return self.scored.score


@dataclass(frozen=True)
class NoMatch:
    query: str


MatchResult = Union[Best, NoMatch]


def score_candidates(
    query: str,
    candidates: Iterable[Candidate],
    scorer: Optional[Scorer] = None,
) -> Iterator[ScoredCandidate]:
    """Yield candidates that match `query`, in input order.

    Candidates the scorer rejects are left out entirely rather than given a
    zero score.
    """
    scorer = scorer or SubsequenceScorer()
    for candidate in candidates:
        match = scorer.score(query, candidate.path)
        if match is None:
            continue
        log_debug(f"{match.score:>5}  {candidate.path}")
        yield ScoredCandidate(candidate, match.score, match.positions)


def select_best(scored: Iterable[ScoredCandidate]) -> Optional[ScoredCandidate]:
    """Highest score wins; on a tie the earliest one seen is kept."""
    best = None
    for sc in scored:
        if best is None or sc.score > best.score:
            best = sc
    return best


def rank(
    query: str,
    candidates: Sequence[Candidate],
    scorer: Optional[Scorer] = None,
) -> MatchResult:
    """Return the best match for `query` among `candidates`.

    An empty query matches every candidate with score 0, so the first
    candidate wins.
    """
    best = select_best(score_candidates(query, candidates, scorer))
    if best is None:
        return NoMatch(query)
    return Best(best)


def rank_tokens(
    tokens: Sequence[str],
    candidates: Sequence[Candidate],
    scorer: Optional[Scorer] = None,
) -> MatchResult:
    """Rank candidates against several query tokens at once.

    Every token must match a candidate on its own. The candidate's score is
    the sum of its token scores and its positions the union of theirs.
    """
    query = " ".join(tokens)
    if len(tokens) == 1:
        return rank(tokens[0], candidates, scorer)
    if not tokens:
        return NoMatch(query)

    scorer = scorer or SubsequenceScorer()
    scored = []
    for candidate in candidates:
        total, positions = 0, set()
        for token in tokens:
            match = scorer.score(token, candidate.path)
            if match is None:
                break
            total += match.score
            positions.update(match.positions)
        else:
            log_debug(f"{total:>5}  {candidate.path}")
            scored.append(ScoredCandidate(candidate, total, tuple(sorted(positions))))

    best = select_best(scored)
    if best is None:
        return NoMatch(query)
    return Best(best)
