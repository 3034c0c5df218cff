"""Question/answer extraction from section bodies.

Study notes mark an interview question as a quoted blockquote and its answer
with a bolded marker::

    > "How does dependency injection improve testability?"

    **Detailed Answer:**
    Constructor injection lets tests pass fakes...

Extraction is a best-effort pattern match. Sections without this shape simply
produce no items. Text before the first accepted question, and candidates
that never reach an answer marker, belong to no item.
"""

from __future__ import annotations

import re

from qbank.domain.qa_item import QAItem
from qbank.pipeline.markdown import fence_flags, split_lines

_question_re = re.compile(r"^>\s*[\"“]")
_marker_re = re.compile(r"\*\*\s*detailed answer\b[^*]*\*\*\s*:?", re.IGNORECASE)
_QUOTES = "\"“”"


def _question_text(lines: list[str]) -> str:
    parts = []
    for line in lines:
        stripped = line.strip()
        if not stripped.startswith(">"):
            break
        parts.append(stripped.lstrip(">").strip())
    text = " ".join(part for part in parts if part)
    return text.strip().strip(_QUOTES).strip()


def _answer_text(marker_line: str, rest: list[str]) -> str:
    match = _marker_re.search(marker_line)
    head = marker_line[match.end():] if match else ""
    return (head + "".join(rest)).strip()


def extract_qa_items(section_id: str, body: str) -> tuple[QAItem, ...]:
    """Extract QA items from a section body.

    Args:
        section_id: Owning section identifier, used to derive item ids
        body: Raw section body

    Returns:
        Items in body order (empty when the body has no QA shape)
    """
    lines = split_lines(body)
    fenced = fence_flags(lines)

    candidates = [
        i for i, line in enumerate(lines)
        if not fenced[i] and _question_re.match(line)
    ]
    markers = [
        i for i, line in enumerate(lines)
        if not fenced[i] and _marker_re.search(line)
    ]

    # an item's span stops at the next candidate, accepted or not
    accepted: list[tuple[int, int, int]] = []
    for k, start in enumerate(candidates):
        limit = candidates[k + 1] if k + 1 < len(candidates) else len(lines)
        marker = next((m for m in markers if start < m < limit), None)
        if marker is not None:
            accepted.append((start, marker, limit))

    if not accepted:
        return ()

    items = []
    for n, (start, marker, end) in enumerate(accepted):
        items.append(
            QAItem(
                id=f"{section_id}/q{n + 1}",
                section_id=section_id,
                question=_question_text(lines[start:marker]),
                answer=_answer_text(lines[marker], lines[marker + 1:end]),
                text="".join(lines[start:end]),
                ordinal=n,
            )
        )

    return tuple(items)
