"""Approximate text matching used by comment search.

The search engine only depends on the TextMatcher interface, so the
similarity algorithm can be swapped without touching thread handling.
"""

from abc import ABC, abstractmethod

from rapidfuzz import fuzz, process

from threadlens.util.text import tokenize


class TextMatcher(ABC):
    """Scores how well a query approximately occurs in a corpus."""

    threshold: float = 80.0

    @abstractmethod
    def score(self, query: str, corpus: str) -> float:
        """Return a similarity in [0, 100] between query and corpus.

        Both arguments are expected to be normalized already (lower-cased,
        diacritics stripped).
        """
        pass

    def matches(self, query: str, corpus: str) -> bool:
        return self.score(query, corpus) >= self.threshold


class TokenWindowMatcher(TextMatcher):
    """Compare the query against every run of as many corpus words.

    Similarity is rapidfuzz's normalized indel ratio, so a 10 character
    word still scores 80 with two substituted characters, while short
    unrelated words fall well below the threshold. Queries shorter than
    min_query_length never match approximately.
    """

    def __init__(self, threshold: float = 80.0, min_query_length: int = 4) -> None:
        """Initialize matcher.

        Args:
            threshold: Minimum similarity (0-100) that counts as a match
            min_query_length: Shortest query eligible for approximate matching
        """
        self.threshold = threshold
        self.min_query_length = min_query_length

    def score(self, query: str, corpus: str) -> float:
        query_tokens = tokenize(query)
        if not query_tokens or len(query.strip()) < self.min_query_length:
            return 0.0
        corpus_tokens = tokenize(corpus)
        if not corpus_tokens:
            return 0.0

        width = len(query_tokens)
        needle = " ".join(query_tokens)
        if len(corpus_tokens) <= width:
            windows = [" ".join(corpus_tokens)]
        else:
            windows = [
                " ".join(corpus_tokens[i : i + width])
                for i in range(len(corpus_tokens) - width + 1)
            ]
        best = process.extractOne(needle, windows, scorer=fuzz.ratio)
        return float(best[1]) if best else 0.0
