"""Query interface over the inverted index."""

from qbank.search.query import SearchEngine, SearchHit

__all__ = ["SearchEngine", "SearchHit"]
