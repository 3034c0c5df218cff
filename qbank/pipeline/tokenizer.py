from __future__ import annotations

import re
from typing import Iterable

_word_re = re.compile(r"[^\W_]+")


class Tokenizer:
    """Lowercase word tokenizer with spaCy stop word removal.

    The same configuration must be used for indexing and querying.
    """

    def __init__(
        self,
        remove_stopwords: bool = True,
        min_token_length: int = 1,
        extra_stopwords: Iterable[str] = (),
    ):
        """Initialize tokenizer.

        Args:
            remove_stopwords: Drop English stop words
            min_token_length: Shortest token kept
            extra_stopwords: Additional words to drop (lowercased)
        """
        self.remove_stopwords = remove_stopwords
        self.min_token_length = max(1, int(min_token_length))
        self.extra_stopwords = frozenset(word.lower() for word in extra_stopwords)
        self._stopwords: frozenset[str] | None = None

    @property
    def stopwords(self) -> frozenset[str]:
        """Active stop word set: spaCy English stop words plus extras."""
        if not self.remove_stopwords:
            return self.extra_stopwords
        if self._stopwords is None:
            from spacy.lang.en.stop_words import STOP_WORDS

            self._stopwords = frozenset(STOP_WORDS) | self.extra_stopwords
        return self._stopwords

    def settings(self) -> dict:
        """Settings that affect tokenization output."""
        return {
            "remove_stopwords": self.remove_stopwords,
            "min_token_length": self.min_token_length,
            "extra_stopwords": sorted(self.extra_stopwords),
        }

    def tokenize(self, text: str) -> list[str]:
        """Split text into lowercase tokens.

        Args:
            text: Input text

        Returns:
            Tokens in order, duplicates kept
        """
        stopwords = self.stopwords
        return [
            token for token in _word_re.findall(text.lower())
            if len(token) >= self.min_token_length and token not in stopwords
        ]

    def terms(self, text: str) -> set[str]:
        return set(self.tokenize(text))
