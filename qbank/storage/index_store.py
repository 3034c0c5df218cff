"""JSON snapshot storage for the inverted index."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from qbank.domain.record import Record
from qbank.errors import IndexFormatError
from qbank.pipeline.index import InvertedIndex
from qbank.pipeline.index_signature import INDEX_FORMAT_VERSION
from qbank.schemas import IndexFileModel, RecordModel

logger = logging.getLogger(__name__)


def save_index(index: InvertedIndex, path: str | Path) -> Path:
    """Persist an index as JSON.

    Records keep position order and postings are sorted, so saving the same
    index twice produces identical files.

    Args:
        index: Index to persist
        path: Output file path (parent directories are created)

    Returns:
        Path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    model = IndexFileModel(
        format_version=INDEX_FORMAT_VERSION,
        signature=index.signature,
        records=[RecordModel(**record.to_dict()) for record in index.records.values()],
        postings={token: sorted(ids) for token, ids in sorted(index.postings.items())},
    )
    path.write_text(model.model_dump_json(indent=1), encoding="utf-8")
    logger.info("Saved index with %d records to %s", len(index), path)
    return path


def load_index(path: str | Path) -> InvertedIndex:
    """Load an index saved by save_index().

    Raises:
        IndexFormatError: File is unreadable, malformed, or has another format version
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IndexFormatError(f"Cannot read index {path}: {e}") from e

    try:
        model = IndexFileModel.model_validate_json(raw)
    except ValidationError as e:
        raise IndexFormatError(f"Malformed index {path}: {e.error_count()} errors") from e

    if model.format_version != INDEX_FORMAT_VERSION:
        raise IndexFormatError(
            f"Index {path} has format version {model.format_version}, "
            f"expected {INDEX_FORMAT_VERSION}"
        )

    records = [Record.from_dict(item.model_dump()) for item in model.records]
    known = {record.id for record in records}
    for token, ids in model.postings.items():
        unknown = set(ids) - known
        if unknown:
            raise IndexFormatError(
                f"Index {path} posting '{token}' references unknown records: {sorted(unknown)[:3]}"
            )

    return InvertedIndex.from_parts(records, model.postings, model.signature)
