"""QAItem entity."""

from dataclasses import dataclass, asdict


@dataclass(frozen=True, slots=True)
class QAItem:
    """Immutable question/answer pair detected inside a section.

    Attributes:
        id: Stable identifier (e.g., "oop.md#question-1/q1")
        section_id: Owning section identifier
        question: Question text without blockquote markers and quotes
        answer: Answer text following the "Detailed Answer" marker
        text: Raw span of the section body covered by this item
        ordinal: 0-based position within the owning section
    """

    id: str
    section_id: str
    question: str
    answer: str
    text: str
    ordinal: int = 0

    def to_dict(self) -> dict:
        """Convert item to dictionary for serialization."""
        return asdict(self)
