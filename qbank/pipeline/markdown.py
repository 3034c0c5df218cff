"""Line-level Markdown helpers shared by the loader and QA extraction."""

from __future__ import annotations

import re

_line_re = re.compile(r"[^\n]*\n|[^\n]+")
_fence_re = re.compile(r"^ {0,3}(`{3,}|~{3,})")
_heading_re = re.compile(r"^(#+)(?:[ \t]+(.*?))?[ \t]*$")
_closing_hashes_re = re.compile(r"(?:^|[ \t]+)#+$")


def split_lines(text: str) -> list[str]:
    """Split text into lines, keeping line endings so "".join() is lossless."""
    return _line_re.findall(text)


def fence_flags(lines: list[str]) -> list[bool]:
    """Return, per line, whether it belongs to a fenced code block.

    Opening and closing fence lines count as fenced.
    """
    flags = []
    fence: str | None = None
    for line in lines:
        stripped = line.rstrip("\r\n")
        match = _fence_re.match(stripped)
        if fence is None:
            if match:
                fence = match.group(1)
                flags.append(True)
            else:
                flags.append(False)
            continue

        flags.append(True)
        if (
            match
            and match.group(1)[0] == fence[0]
            and len(match.group(1)) >= len(fence)
            and not stripped.strip()[len(match.group(1)):].strip()
        ):
            fence = None
    return flags


def parse_heading(line: str) -> tuple[int, str] | None:
    """Parse an ATX heading line into (level, text), or None."""
    match = _heading_re.match(line.rstrip("\r\n"))
    if not match:
        return None
    level = len(match.group(1))
    text = match.group(2) or ""
    text = _closing_hashes_re.sub("", text).strip()
    return level, text
