"""Typo tolerant exercise name filtering for autocomplete inputs.

Names are matched case-insensitively against the whole query, its individual
words in any order, close spellings and, as a last resort, shared letter
pairs. Stronger kinds of match always rank ahead of weaker ones.
"""
from __future__ import annotations
import difflib
import logging
from typing import Callable, Iterable, List, Sequence

from settings_schema import AnalyticsSettings

logger = logging.getLogger(__name__)

EXACT_SCORE = 100.0
PREFIX_SCORE = 92.0
SUBSTRING_SCORE = 90.0
ALL_TOKENS_SCORE = 80.0
FUZZY_WEIGHT = 75.0
BIGRAM_WEIGHT = 50.0


def _normalize(text: str) -> str:
    return " ".join(text.lower().split())


def _bigrams(words: Iterable[str]) -> set[str]:
    grams: set[str] = set()
    for w in words:
        if len(w) < 2:
            grams.add(w)
            continue
        for i in range(len(w) - 1):
            grams.add(w[i : i + 2])
    return grams


def _ratio(a: str, b: str) -> float:
    return difflib.SequenceMatcher(None, a, b).ratio()


class ExerciseSearch:
    """Index over an exercise vocabulary supporting approximate lookups."""

    def __init__(
        self, vocabulary: Sequence[str], settings: AnalyticsSettings | None = None
    ) -> None:
        self.settings = settings or AnalyticsSettings()
        self.vocabulary = list(vocabulary)
        self._entries = []
        for name in self.vocabulary:
            norm = _normalize(name)
            words = norm.split()
            self._entries.append((name, norm, words, _bigrams(words)))

    def score(self, query: str, index: int) -> float:
        """Return the match score of vocabulary item ``index``, 0 for no match."""
        q = _normalize(query)
        if not q:
            return 0.0
        tokens = q.split()
        return self._score(q, tokens, _bigrams(tokens), self._entries[index])

    def _score(self, q: str, tokens: List[str], query_grams: set[str], entry) -> float:
        _name, norm, words, grams = entry
        if q == norm:
            return EXACT_SCORE
        if norm.startswith(q):
            return PREFIX_SCORE
        if q in norm:
            return SUBSTRING_SCORE
        if all(t in norm for t in tokens):
            return ALL_TOKENS_SCORE

        best = 0.0
        if words:
            per_token = [max(_ratio(t, w) for w in words) for t in tokens]
            similarity = max(sum(per_token) / len(per_token), _ratio(q, norm))
            if similarity >= self.settings.fuzzy_cutoff:
                best = FUZZY_WEIGHT * similarity

        coverage = len(query_grams & grams) / len(query_grams)
        if coverage >= self.settings.bigram_cutoff:
            best = max(best, BIGRAM_WEIGHT * coverage)
        return best

    def search(self, query: str) -> List[str]:
        """Return matching names, best first, vocabulary order on ties."""
        q = _normalize(query)
        if not q:
            return []
        tokens = q.split()
        query_grams = _bigrams(tokens)
        scored = []
        for idx, entry in enumerate(self._entries):
            sc = self._score(q, tokens, query_grams, entry)
            if sc > 0:
                scored.append((-sc, idx))
        scored.sort()
        result = [self._entries[idx][0] for _sc, idx in scored]
        logger.debug("search %r matched %d of %d", query, len(result), len(self._entries))
        return result


def create_filter_options(
    all_exercises: Sequence[str], settings: AnalyticsSettings | None = None
) -> Callable[..., List[str]]:
    """Build an autocomplete filter over ``all_exercises``.

    The returned callable takes the options currently offered and the text
    typed so far, and returns the matching options. A blank input returns the
    options untouched, capped at ``filter_limit``.
    """
    search = ExerciseSearch(all_exercises, settings)
    limit = search.settings.filter_limit

    def filter_options(options: Sequence[str], input_value: str = "") -> List[str]:
        if not input_value or not input_value.strip():
            return list(options)[:limit]
        allowed = set(options)
        return [name for name in search.search(input_value) if name in allowed]

    return filter_options


def combined_exercise_names(*sources: Iterable[str]) -> List[str]:
    """Merge exercise name lists, keeping the first occurrence of each name."""
    merged: dict[str, None] = {}
    for source in sources:
        for name in source:
            merged.setdefault(name, None)
    return list(merged)
