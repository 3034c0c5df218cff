"""Domain entities for the study-notes index.

This module contains immutable data structures produced by a single parse
pass over the Markdown corpus.
"""

from qbank.domain.document import Document, Section
from qbank.domain.qa_item import QAItem
from qbank.domain.record import Record, RecordKind

__all__ = ["Document", "Section", "QAItem", "Record", "RecordKind"]
