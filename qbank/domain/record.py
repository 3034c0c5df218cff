"""Record entity shared by the indexer and the query interface."""

from dataclasses import dataclass, asdict, field
from typing import Literal

RecordKind = Literal["section", "qa"]


@dataclass(frozen=True, slots=True)
class Record:
    """Immutable searchable unit: one per section and one per QA item.

    Attributes:
        id: Section or QA item identifier
        kind: "section" or "qa"
        doc_id: Owning document identifier
        title: Section heading or question text
        text: Text indexed for this record
        position: Global order across the corpus (document order)
        heading_path: Headings from the document root to the owning section
    """

    id: str
    kind: RecordKind
    doc_id: str
    title: str
    text: str
    position: int
    heading_path: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        """Convert record to dictionary for serialization."""
        data = asdict(self)
        data["heading_path"] = list(self.heading_path)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Record":
        """Create record from dictionary (persisted index format)."""
        return cls(
            id=data["id"],
            kind=data["kind"],
            doc_id=data["doc_id"],
            title=data["title"],
            text=data["text"],
            position=int(data["position"]),
            heading_path=tuple(data.get("heading_path", ())),
        )
