"""Exception hierarchy for qbank."""

from __future__ import annotations

from pathlib import Path


class QBankError(Exception):
    """Base class for all qbank errors."""


class FileAccessError(QBankError):
    """A source file is missing, unreadable or not valid UTF-8."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read {self.path}: {reason}")


class InvalidQueryError(QBankError, ValueError):
    """The query has no searchable terms."""


class ConfigError(QBankError, ValueError):
    """Configuration contains unknown keys or invalid values."""


class IndexFormatError(QBankError):
    """A persisted index file cannot be loaded."""


class RecordNotFoundError(QBankError, KeyError):
    """No record with the requested id exists in the index."""

    def __str__(self) -> str:
        return f"Unknown record id: {self.args[0]}"
