"""Keyword index and search over Markdown study notes."""

__version__ = "0.1.0"

# Domain entities
from qbank.domain.document import Document, Section
from qbank.domain.qa_item import QAItem
from qbank.domain.record import Record

# Errors
from qbank.errors import (
    ConfigError,
    FileAccessError,
    IndexFormatError,
    InvalidQueryError,
    QBankError,
    RecordNotFoundError,
)

# Pipeline components
from qbank.config import AppConfig, load_config
from qbank.pipeline.index import InvertedIndex, build_index
from qbank.pipeline.loader import load_corpus, load_document, parse_markdown
from qbank.pipeline.pipeline import load_or_build
from qbank.pipeline.tokenizer import Tokenizer

# Search
from qbank.search.query import SearchEngine, SearchHit

# CLI
from qbank.cli import main

__all__ = [
    # Domain
    "Document",
    "Section",
    "QAItem",
    "Record",
    # Errors
    "QBankError",
    "FileAccessError",
    "InvalidQueryError",
    "ConfigError",
    "IndexFormatError",
    "RecordNotFoundError",
    # Pipeline
    "AppConfig",
    "load_config",
    "InvertedIndex",
    "Tokenizer",
    "build_index",
    "load_corpus",
    "load_document",
    "parse_markdown",
    "load_or_build",
    # Search
    "SearchEngine",
    "SearchHit",
    # CLI
    "main",
]
