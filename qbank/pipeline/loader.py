"""Markdown loader: files -> Document/Section/QAItem records."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from qbank.domain.document import Document, Section
from qbank.errors import FileAccessError
from qbank.pipeline.markdown import fence_flags, parse_heading, split_lines
from qbank.pipeline.qa import extract_qa_items
from qbank.utils import sha256_text, slugify

logger = logging.getLogger(__name__)


def _unique_slug(heading: str, used: set[str]) -> str:
    base = slugify(heading)
    slug, count = base, 0
    # a literal "Example 1" heading may already own "example-1"
    while slug in used:
        count += 1
        slug = f"{base}-{count}"
    used.add(slug)
    return slug


def _resolve_title(sections: list[Section], fallback: str) -> str:
    for section in sections:
        if section.level == 1 and section.heading:
            return section.heading
    for section in sections:
        if section.heading:
            return section.heading
    return fallback


def parse_markdown(text: str, doc_id: str, path: str | Path | None = None) -> Document:
    """Parse Markdown text into a Document.

    A line starting with one or more "#" followed by whitespace (or nothing)
    opens a new section at that level. Headings inside fenced code blocks are
    ignored. Skipped levels are tolerated.

    Args:
        text: Decoded Markdown text
        doc_id: Document identifier
        path: Source path (defaults to doc_id)

    Returns:
        Parsed Document whose render() equals text
    """
    lines = split_lines(text)
    fenced = fence_flags(lines)

    preamble_lines: list[str] = []
    # (level, heading, heading_line, body_lines)
    raw_sections: list[tuple[int, str, str, list[str]]] = []
    for line, in_fence in zip(lines, fenced):
        heading = None if in_fence else parse_heading(line)
        if heading is not None:
            level, heading_text = heading
            raw_sections.append((level, heading_text, line, []))
        elif raw_sections:
            raw_sections[-1][3].append(line)
        else:
            preamble_lines.append(line)

    used_slugs: set[str] = set()
    sections: list[Section] = []
    stack: list[Section] = []
    for ordinal, (level, heading_text, heading_line, body_lines) in enumerate(raw_sections):
        section_id = f"{doc_id}#{_unique_slug(heading_text, used_slugs)}"
        body = "".join(body_lines)

        while stack and stack[-1].level >= level:
            stack.pop()
        parent_id = stack[-1].id if stack else None

        qa_items = extract_qa_items(section_id, body)
        section = Section(
            id=section_id,
            doc_id=doc_id,
            heading=heading_text,
            level=level,
            heading_line=heading_line,
            body=body,
            ordinal=ordinal,
            parent_id=parent_id,
            qa_items=qa_items,
        )
        sections.append(section)
        stack.append(section)

    source = Path(path) if path is not None else Path(doc_id)
    return Document(
        id=doc_id,
        path=source,
        title=_resolve_title(sections, source.stem),
        checksum=sha256_text(text),
        preamble="".join(preamble_lines),
        sections=tuple(sections),
    )


def read_text(path: Path) -> str:
    """Read a UTF-8 file, raising FileAccessError on any failure."""
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise FileAccessError(path, e.strerror or str(e)) from e
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise FileAccessError(path, f"not valid UTF-8 ({e.reason} at byte {e.start})") from e


def load_document(path: str | Path, root: str | Path | None = None) -> Document:
    """Load one Markdown file.

    Args:
        path: File to read
        root: Corpus root used to derive the document id (defaults to the file's directory)
    """
    path = Path(path)
    root = Path(root) if root is not None else path.parent
    try:
        doc_id = path.relative_to(root).as_posix()
    except ValueError:
        doc_id = path.name
    text = read_text(path)
    return parse_markdown(text, doc_id, path)


def _collect_files(root: Path, file_extensions: Iterable[str], recursive: bool) -> list[Path]:
    extensions = {ext.lower() for ext in file_extensions}
    candidates = root.rglob("*") if recursive else root.glob("*")
    # dangling links are kept so that reading them fails loudly
    files = [
        p for p in candidates
        if (p.is_file() or (p.is_symlink() and not p.exists())) and p.suffix.lower() in extensions
    ]
    return sorted(files, key=lambda p: p.relative_to(root).as_posix())


def load_corpus(
    path: str | Path,
    file_extensions: Iterable[str] = (".md",),
    recursive: bool = True,
) -> list[Document]:
    """Load every Markdown file under a directory (or a single file).

    Documents come back sorted by id. The first unreadable file aborts the
    load with FileAccessError; no file is skipped.
    """
    path = Path(path)
    if not path.exists():
        raise FileAccessError(path, "no such file or directory")

    if path.is_file():
        documents = [load_document(path, root=path.parent)]
    else:
        files = _collect_files(path, file_extensions, recursive)
        logger.debug("Found %d markdown files under %s", len(files), path)
        documents = [load_document(file_path, root=path) for file_path in files]

    logger.info(
        "Loaded %d documents (%d sections, %d QA items) from %s",
        len(documents),
        sum(len(doc.sections) for doc in documents),
        sum(len(doc.qa_items) for doc in documents),
        path,
    )
    return documents
