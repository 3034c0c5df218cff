"""Loader -> Indexer pipeline with an optional persisted index."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from qbank.config import AppConfig
from qbank.domain.document import Document
from qbank.errors import IndexFormatError
from qbank.pipeline.index import InvertedIndex, build_index
from qbank.pipeline.index_signature import compute_signature
from qbank.pipeline.loader import load_corpus
from qbank.pipeline.tokenizer import Tokenizer
from qbank.storage.index_store import load_index, save_index

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Corpus:
    """Loaded documents together with the index built from them."""

    documents: list[Document]
    index: InvertedIndex
    tokenizer: Tokenizer
    reused: bool = False

    def stats(self) -> dict:
        return {
            "documents": len(self.documents),
            "sections": sum(len(doc.sections) for doc in self.documents),
            "qa_items": sum(len(doc.qa_items) for doc in self.documents),
            "records": len(self.index),
            "terms": len(self.index.postings),
        }


def create_tokenizer(config: AppConfig) -> Tokenizer:
    return Tokenizer(
        remove_stopwords=config.tokenizer.remove_stopwords,
        min_token_length=config.tokenizer.min_token_length,
        extra_stopwords=config.tokenizer.extra_stopwords,
    )


def load_or_build(
    config: AppConfig,
    corpus_path: str | Path | None = None,
    index_path: str | Path | None = None,
) -> Corpus:
    """Load the corpus and return an index for it.

    A persisted index at index_path is reused only when its signature matches
    the current corpus and tokenizer settings. Otherwise the index is rebuilt
    from scratch and, when index_path is given, saved there.

    Args:
        config: Application configuration
        corpus_path: Corpus directory or file (defaults to config.corpus.path)
        index_path: Index cache file (defaults to config.index.path)

    Raises:
        FileAccessError: a corpus file cannot be read
    """
    corpus_path = Path(corpus_path or config.corpus.path)
    index_path = index_path or config.index.path

    tokenizer = create_tokenizer(config)
    documents = load_corpus(
        corpus_path,
        file_extensions=config.corpus.file_extensions,
        recursive=config.corpus.recursive,
    )
    signature = compute_signature(documents, tokenizer)

    if index_path is not None and Path(index_path).exists():
        try:
            cached = load_index(index_path)
        except IndexFormatError as e:
            logger.warning("Ignoring unusable index cache: %s", e)
        else:
            if cached.signature == signature:
                logger.info("Reusing index from %s", index_path)
                return Corpus(documents=documents, index=cached, tokenizer=tokenizer, reused=True)
            logger.info("Index at %s is stale, rebuilding", index_path)

    index = build_index(documents, tokenizer)
    if index_path is not None:
        save_index(index, index_path)
    return Corpus(documents=documents, index=index, tokenizer=tokenizer)


def source_text(documents: list[Document], record_id: str) -> str | None:
    """Original Markdown for a section or QA item id, or None."""
    for document in documents:
        for section in document.sections:
            if section.id == record_id:
                return section.text
            for item in section.qa_items:
                if item.id == record_id:
                    return item.text
    return None
