"""Keyword search with AND/OR matching and match-count or BM25 ranking."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from qbank.domain.record import Record
from qbank.errors import InvalidQueryError, RecordNotFoundError
from qbank.pipeline.index import InvertedIndex
from qbank.pipeline.tokenizer import Tokenizer

logger = logging.getLogger(__name__)

MATCH_MODES = ("and", "or")
RANKINGS = ("matches", "bm25")


@dataclass(frozen=True)
class SearchHit:
    """One ranked result."""

    record: Record
    score: float
    matched_terms: tuple[str, ...] = field(default_factory=tuple)


class SearchEngine:
    """Free-text search over an InvertedIndex."""

    def __init__(self, index: InvertedIndex, tokenizer: Tokenizer):
        """Initialize search engine.

        Args:
            index: Index to search
            tokenizer: Tokenizer configured like the one that built the index
        """
        self.index = index
        self.tokenizer = tokenizer
        self._bm25 = None
        self._bm25_positions: dict[str, int] = {}

    def parse_query(self, query: str) -> list[str]:
        """Tokenize a query, dropping duplicate terms.

        Raises:
            InvalidQueryError: query is empty or contains only stop words
        """
        if not query or not query.strip():
            raise InvalidQueryError("Query is empty")
        terms = list(dict.fromkeys(self.tokenizer.tokenize(query)))
        if not terms:
            raise InvalidQueryError(f"Query has no searchable terms: {query!r}")
        return terms

    def _candidates(self, terms: list[str], mode: str) -> set[str]:
        postings = [self.index.postings_for(term) for term in terms]
        if mode == "and":
            return set(frozenset.intersection(*postings))
        return set().union(*postings)

    def _load_bm25(self):
        """Build BM25 scorer over every record (lazy, cached)."""
        if self._bm25 is None:
            from rank_bm25 import BM25Okapi

            records = list(self.index.records.values())
            corpus = [self.tokenizer.tokenize(record.text) for record in records]
            self._bm25 = BM25Okapi(corpus)
            self._bm25_positions = {record.id: i for i, record in enumerate(records)}
        return self._bm25

    def search(
        self,
        query: str,
        mode: str = "and",
        ranking: str = "matches",
        limit: int | None = None,
        kinds: Iterable[str] | None = None,
    ) -> list[SearchHit]:
        """Search the index.

        A section record indexes its whole body, QA items included, so a term
        found in a QA item also matches the owning section, which ranks first
        on a tie. Pass ``kinds=["qa"]`` to get only the QA item.

        Args:
            query: Free-text query
            mode: "and" (every term must match) or "or" (any term)
            ranking: "matches" (distinct matched terms) or "bm25"
            limit: Maximum number of hits, None for all
            kinds: Restrict to these record kinds ("section", "qa")

        Returns:
            Hits ordered by score descending, ties by document order
        """
        if mode not in MATCH_MODES:
            raise ValueError(f"mode must be one of {MATCH_MODES}, got {mode!r}")
        if ranking not in RANKINGS:
            raise ValueError(f"ranking must be one of {RANKINGS}, got {ranking!r}")

        terms = self.parse_query(query)
        candidates = self._candidates(terms, mode)
        if kinds is not None:
            allowed = set(kinds)
            candidates = {rid for rid in candidates if self.index.records[rid].kind in allowed}

        if not candidates:
            logger.debug("No matches for %r (%s)", query, mode)
            return []

        matched = {
            rid: tuple(term for term in terms if rid in self.index.postings_for(term))
            for rid in candidates
        }
        if ranking == "bm25":
            scores = self._load_bm25().get_scores(terms)
            score_of = {rid: float(scores[self._bm25_positions[rid]]) for rid in candidates}
        else:
            score_of = {rid: float(len(matched[rid])) for rid in candidates}

        ordered = sorted(
            candidates,
            key=lambda rid: (-score_of[rid], self.index.records[rid].position),
        )
        if limit is not None:
            ordered = ordered[:limit]

        logger.debug("Query %r matched %d records", query, len(candidates))
        return [
            SearchHit(record=self.index.records[rid], score=score_of[rid], matched_terms=matched[rid])
            for rid in ordered
        ]

    def get_record(self, record_id: str) -> Record:
        record = self.index.get(record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        return record
