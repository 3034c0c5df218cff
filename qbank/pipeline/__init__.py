"""Loader, tokenizer and indexer."""

from qbank.pipeline.index import InvertedIndex, build_index, iter_records
from qbank.pipeline.loader import load_corpus, load_document, parse_markdown
from qbank.pipeline.qa import extract_qa_items
from qbank.pipeline.tokenizer import Tokenizer

__all__ = [
    "InvertedIndex",
    "Tokenizer",
    "build_index",
    "extract_qa_items",
    "iter_records",
    "load_corpus",
    "load_document",
    "parse_markdown",
]
