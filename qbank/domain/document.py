"""Document and Section entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from qbank.domain.qa_item import QAItem


@dataclass(frozen=True, slots=True)
class Section:
    """Immutable heading-delimited block of a document.

    Attributes:
        id: Stable identifier "<doc_id>#<slug>"
        doc_id: Owning document identifier
        heading: Heading text without the leading "#" markers
        level: Number of leading "#" characters
        heading_line: Raw heading line including its line ending
        body: Raw text up to the next heading of any level
        ordinal: 0-based position within the document
        parent_id: Nearest preceding section with a smaller level, or None
        qa_items: Question/answer pairs detected in the body
    """

    id: str
    doc_id: str
    heading: str
    level: int
    heading_line: str
    body: str
    ordinal: int
    parent_id: str | None = None
    qa_items: tuple[QAItem, ...] = field(default_factory=tuple)

    @property
    def text(self) -> str:
        """Heading line plus body, exactly as in the source file."""
        return self.heading_line + self.body


@dataclass(frozen=True, slots=True)
class Document:
    """Immutable parsed Markdown file.

    Attributes:
        id: Path relative to the corpus root, POSIX separators (e.g., "oop/solid.md")
        path: Filesystem path the document was read from
        title: First level-1 heading, else first heading, else the file stem
        checksum: SHA-256 of the decoded text
        preamble: Text before the first heading
        sections: Sections in source order
    """

    id: str
    path: Path
    title: str
    checksum: str
    preamble: str = ""
    sections: tuple[Section, ...] = field(default_factory=tuple)

    def render(self) -> str:
        """Reassemble the original text from the preamble and sections."""
        return self.preamble + "".join(section.text for section in self.sections)

    @property
    def qa_items(self) -> list[QAItem]:
        return [item for section in self.sections for item in section.qa_items]

    def get_section(self, section_id: str) -> Section:
        for section in self.sections:
            if section.id == section_id:
                return section
        raise KeyError(section_id)

    def children(self, section: Section) -> list[Section]:
        return [s for s in self.sections if s.parent_id == section.id]

    def subtree(self, section: Section) -> list[Section]:
        """Return the section and every following section it contains.

        Containment ends at the next heading of equal-or-shallower level.
        """
        result = [section]
        for candidate in self.sections[section.ordinal + 1:]:
            if candidate.level <= section.level:
                break
            result.append(candidate)
        return result

    def subtree_text(self, section: Section) -> str:
        return "".join(s.text for s in self.subtree(section))

    def heading_path(self, section: Section) -> tuple[str, ...]:
        """Headings from the outermost ancestor down to the section."""
        by_id = {s.id: s for s in self.sections}
        path = [section.heading]
        parent_id = section.parent_id
        while parent_id is not None:
            parent = by_id[parent_id]
            path.append(parent.heading)
            parent_id = parent.parent_id
        return tuple(reversed(path))
