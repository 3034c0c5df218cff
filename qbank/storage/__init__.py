"""Index persistence."""

from qbank.storage.index_store import load_index, save_index

__all__ = ["load_index", "save_index"]
