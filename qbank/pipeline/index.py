"""Inverted index over section and QA records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from qbank.domain.document import Document
from qbank.domain.record import Record
from qbank.pipeline.index_signature import compute_signature
from qbank.pipeline.tokenizer import Tokenizer

logger = logging.getLogger(__name__)


def iter_records(documents: Iterable[Document]) -> Iterator[Record]:
    """Yield records in global document order.

    Documents are taken in id order; each section is followed by its QA
    items. A section record indexes its heading and full body; a QA record
    indexes the span of the body it covers.
    """
    position = 0
    for document in sorted(documents, key=lambda doc: doc.id):
        for section in document.sections:
            heading_path = document.heading_path(section)
            yield Record(
                id=section.id,
                kind="section",
                doc_id=document.id,
                title=section.heading,
                text=f"{section.heading}\n{section.body}",
                position=position,
                heading_path=heading_path,
            )
            position += 1
            for item in section.qa_items:
                yield Record(
                    id=item.id,
                    kind="qa",
                    doc_id=document.id,
                    title=item.question,
                    text=item.text,
                    position=position,
                    heading_path=heading_path,
                )
                position += 1


@dataclass(frozen=True)
class InvertedIndex:
    """Immutable term -> record id mapping.

    Attributes:
        records: Record id -> Record, in position order
        postings: Token -> record ids containing it
        signature: Corpus/tokenizer signature the index was built from
    """

    records: Mapping[str, Record]
    postings: Mapping[str, frozenset[str]]
    signature: str

    @classmethod
    def from_parts(
        cls,
        records: Iterable[Record],
        postings: Mapping[str, Iterable[str]],
        signature: str,
    ) -> "InvertedIndex":
        ordered = sorted(records, key=lambda record: record.position)
        return cls(
            records=MappingProxyType({record.id: record for record in ordered}),
            postings=MappingProxyType(
                {token: frozenset(ids) for token, ids in postings.items()}
            ),
            signature=signature,
        )

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self.records

    @property
    def vocabulary(self) -> frozenset[str]:
        return frozenset(self.postings)

    def postings_for(self, token: str) -> frozenset[str]:
        return self.postings.get(token, frozenset())

    def get(self, record_id: str) -> Record | None:
        return self.records.get(record_id)


def build_index(documents: Iterable[Document], tokenizer: Tokenizer) -> InvertedIndex:
    """Build an inverted index from parsed documents.

    Args:
        documents: Parsed documents
        tokenizer: Tokenizer shared with the query side

    Returns:
        InvertedIndex snapshot of the documents
    """
    documents = list(documents)
    records = list(iter_records(documents))

    postings: dict[str, set[str]] = {}
    for record in records:
        for token in tokenizer.terms(record.text):
            postings.setdefault(token, set()).add(record.id)

    index = InvertedIndex.from_parts(
        records, postings, compute_signature(documents, tokenizer)
    )
    logger.info("Indexed %d records, %d distinct terms", len(index), len(postings))
    return index
