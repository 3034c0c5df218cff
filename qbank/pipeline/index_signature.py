"""Index signature utilities for rebuild detection."""

import hashlib
import json
from typing import Iterable

from qbank.domain.document import Document
from qbank.pipeline.tokenizer import Tokenizer

INDEX_FORMAT_VERSION = 1


def compute_signature(documents: Iterable[Document], tokenizer: Tokenizer) -> str:
    """Compute a stable signature for index compatibility.

    Any change to a document's content, the set of documents, or the
    tokenizer settings yields a different signature.
    """
    payload = {
        "format_version": INDEX_FORMAT_VERSION,
        "tokenizer": tokenizer.settings(),
        "documents": sorted([doc.id, doc.checksum] for doc in documents),
    }
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()
