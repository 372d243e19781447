"""Fuzzy subsequence scoring for file paths.

Scores come from a Smith-Waterman style local alignment of the query
against the path. Every query character must be matched, in order and
ignoring case. The alignment is rewarded for:

- contiguous runs of matched characters
- matches that start a word (after ``/``, ``_``, ``.``, ``-``, whitespace,
  or at the start of the path)
- camelCase and letter-to-digit transitions
- runs that cover a whole multi-character word, e.g. ``main`` in ``src/main.rs``

and penalised for gaps between matched characters and for unmatched
characters before the first match.
"""

import unicodedata
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Protocol

SCORE_MATCH = 20
BONUS_BOUNDARY = 8
BONUS_BOUNDARY_WHITE = BONUS_BOUNDARY + 2
BONUS_NON_WORD = BONUS_BOUNDARY
BONUS_CAMEL = BONUS_BOUNDARY - 1
BONUS_CONSECUTIVE = 4
BONUS_FIRST_CHAR_MULTIPLIER = 2
BONUS_WHOLE_WORD = 2 * SCORE_MATCH
PENALTY_GAP_START = 3
PENALTY_GAP_EXTENSION = 1
PENALTY_LEADING = 1
MAX_LEADING_PENALTY = SCORE_MATCH

DELIMITERS = "/"


class CharClass(IntEnum):
    WHITE = 0
    NON_WORD = 1
    DELIMITER = 2
    LOWER = 3
    UPPER = 4
    LETTER = 5
    NUMBER = 6


# The start of a path behaves as if preceded by a delimiter.
INITIAL_CLASS = CharClass.DELIMITER


@dataclass(frozen=True)
class FuzzyMatch:
    """Score of a successful match and the matched character offsets."""

    score: int
    positions: tuple[int, ...] = ()


class Scorer(Protocol):
    """Anything that can score a query against a path.

    ``score`` returns None when the query is not a case-insensitive
    subsequence of the text.
    """

    name: str

    def score(self, query: str, text: str) -> Optional[FuzzyMatch]:
        ...


def fold(ch: str) -> str:
    """Case- and accent-insensitive form of a single character."""
    base = unicodedata.normalize("NFD", ch)[0]
    lowered = base.lower()
    return lowered if len(lowered) == 1 else base


def char_class(ch: str) -> CharClass:
    if ch.islower():
        return CharClass.LOWER
    if ch.isupper():
        return CharClass.UPPER
    if ch.isdigit():
        return CharClass.NUMBER
    if ch.isalpha():
        return CharClass.LETTER
    if ch.isspace():
        return CharClass.WHITE
    if ch in DELIMITERS:
        return CharClass.DELIMITER
    return CharClass.NON_WORD


def _is_word(cls: CharClass) -> bool:
    return cls >= CharClass.LOWER


def _is_transition(prev: CharClass, cur: CharClass) -> bool:
    """camelCase hump or letter-to-digit step inside a word."""
    return (prev == CharClass.LOWER and cur == CharClass.UPPER) or (
        prev != CharClass.NUMBER and cur == CharClass.NUMBER
    )


def bonus_for(prev: CharClass, cur: CharClass) -> int:
    """Positional bonus for matching a `cur` character that follows `prev`."""
    if _is_word(cur):
        if prev == CharClass.WHITE:
            return BONUS_BOUNDARY_WHITE
        if prev in (CharClass.DELIMITER, CharClass.NON_WORD):
            return BONUS_BOUNDARY
    if _is_transition(prev, cur):
        return BONUS_CAMEL
    if cur in (CharClass.NON_WORD, CharClass.DELIMITER):
        return BONUS_NON_WORD
    if cur == CharClass.WHITE:
        return BONUS_BOUNDARY_WHITE
    return 0


def is_subsequence(query: Sequence[str], text: Sequence[str]) -> bool:
    """Check if query is a subsequence of text (chars in order, not necessarily adjacent)."""
    it = iter(text)
    return all(char in it for char in query)


def _gap_penalty(length: int) -> int:
    return PENALTY_GAP_START + (length - 1) * PENALTY_GAP_EXTENSION


class _Layout:
    """Per-character classes, bonuses and word extents of a text."""

    def __init__(self, text: str):
        classes = [char_class(ch) for ch in text]
        self.bonus = []
        self.word_start = []
        self.word_end = []

        prev = INITIAL_CLASS
        start = 0
        for j, cls in enumerate(classes):
            self.bonus.append(bonus_for(prev, cls))
            if _is_word(cls) and (not _is_word(prev) or _is_transition(prev, cls)):
                start = j
            self.word_start.append(start if _is_word(cls) else -1)
            prev = cls

        for j, cls in enumerate(classes):
            nxt = classes[j + 1] if j + 1 < len(classes) else None
            self.word_end.append(
                _is_word(cls)
                and (nxt is None or not _is_word(nxt) or _is_transition(cls, nxt))
            )

    def whole_word_bonus(self, j: int, run_start: int) -> int:
        """Bonus when j closes a multi-character word that began inside the run."""
        if self.word_end[j] and run_start <= self.word_start[j] < j:
            return BONUS_WHOLE_WORD
        return 0


class SubsequenceScorer:
    """Optimal-alignment fuzzy scorer tuned for file paths."""

    name = "subsequence"

    def score(self, query: str, text: str) -> Optional[FuzzyMatch]:
        if not query:
            return FuzzyMatch(0, ())

        q = [fold(ch) for ch in query]
        t = [fold(ch) for ch in text]
        if len(q) > len(t) or not is_subsequence(q, t):
            return None

        return self._align(q, t, _Layout(text))

    def _align(self, q: list[str], t: list[str], layout: _Layout) -> FuzzyMatch:
        n, m = len(q), len(t)
        # score[i][j]: best total with q[i] matched at t[j]; None if impossible
        score = [[None] * m for _ in range(n)]
        run_start = [[0] * m for _ in range(n)]
        run_bonus = [[0] * m for _ in range(n)]
        back = [[-1] * m for _ in range(n)]

        for j in range(m - n + 1):
            if t[j] != q[0]:
                continue
            b = layout.bonus[j]
            score[0][j] = (
                SCORE_MATCH
                + b * BONUS_FIRST_CHAR_MULTIPLIER
                - min(j, MAX_LEADING_PENALTY) * PENALTY_LEADING
            )
            run_start[0][j] = j
            run_bonus[0][j] = b

        for i in range(1, n):
            prev_row = score[i - 1]
            # Best predecessor reachable through a gap of at least one char.
            gap_score, gap_from = None, -1
            for j in range(i, m - (n - 1 - i)):
                if gap_score is not None:
                    gap_score -= PENALTY_GAP_EXTENSION
                k = j - 2
                if k >= 0 and prev_row[k] is not None:
                    opened = prev_row[k] - _gap_penalty(1)
                    if gap_score is None or opened > gap_score:
                        gap_score, gap_from = opened, k

                if t[j] != q[i]:
                    continue
                b = layout.bonus[j]

                best = None
                if prev_row[j - 1] is not None:
                    first = run_bonus[i - 1][j - 1]
                    if b >= BONUS_BOUNDARY and b > first:
                        first = b
                    start = run_start[i - 1][j - 1]
                    best = (
                        prev_row[j - 1]
                        + SCORE_MATCH
                        + max(b, first, BONUS_CONSECUTIVE)
                        + layout.whole_word_bonus(j, start)
                    )
                    run_start[i][j], run_bonus[i][j], back[i][j] = start, first, j - 1

                if gap_score is not None:
                    gapped = gap_score + SCORE_MATCH + b
                    if best is None or gapped > best:
                        best = gapped
                        run_start[i][j], run_bonus[i][j], back[i][j] = j, b, gap_from

                score[i][j] = best

        last = score[n - 1]
        end = max(
            (j for j in range(m) if last[j] is not None),
            key=lambda j: (last[j], -j),
        )

        positions = []
        j = end
        for i in range(n - 1, -1, -1):
            positions.append(j)
            j = back[i][j]
        positions.reverse()
        return FuzzyMatch(last[end], tuple(positions))


_default_scorer = SubsequenceScorer()


def fuzzy_match(query: str, text: str) -> Optional[FuzzyMatch]:
    """Score `query` against `text` with the default scorer."""
    return _default_scorer.score(query, text)
