"""Convert the CMS Markdown dialect back into storable HTML.

Deliberately minimal: a fixed sequence of substitutions followed by one pass
that groups list lines.  Nested lists, nested emphasis and tables are not
supported.
"""

import re
from enum import Enum
from typing import Optional

_HEADING = re.compile(r"^(#{1,6}) (.+)$", re.MULTILINE)
_IMAGE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"\*(.+?)\*")
_UL_ITEM = re.compile(r"^- (.+)")
_OL_ITEM = re.compile(r"^\d+\. (.+)")


class ListState(str, Enum):
    """Which list, if any, is currently open while grouping lines."""

    NONE = "none"
    UL = "ul"
    OL = "ol"


def _heading(match: re.Match) -> str:
    level = len(match.group(1))
    return f"<h{level}>{match.group(2)}</h{level}>"


def convert_inline(markdown: str) -> str:
    """Apply heading, image, link and emphasis substitutions.

    Bold runs before italic so ``**`` is never read as two italics.
    """
    html = _HEADING.sub(_heading, markdown)
    html = _IMAGE.sub(r'<img src="\2" alt="\1" />', html)
    html = _LINK.sub(r'<a href="\2">\1</a>', html)
    html = _BOLD.sub(r"<strong>\1</strong>", html)
    html = _ITALIC.sub(r"<em>\1</em>", html)
    return html


def classify_line(line: str) -> tuple[ListState, Optional[str]]:
    """Return the list kind of *line* and its item text, if it is a list item."""
    match = _UL_ITEM.match(line)
    if match:
        return ListState.UL, match.group(1)
    match = _OL_ITEM.match(line)
    if match:
        return ListState.OL, match.group(1)
    return ListState.NONE, None


def markdown_to_html(markdown: Optional[str]) -> str:
    """Convert Markdown into a single HTML string (no newlines between blocks)."""
    if not markdown:
        return ""

    parts: list[str] = []
    state = ListState.NONE

    for line in convert_inline(markdown).split("\n"):
        kind, item = classify_line(line)

        if kind != state and state != ListState.NONE:
            parts.append(f"</{state.value}>")
            state = ListState.NONE

        if kind != ListState.NONE:
            if state == ListState.NONE:
                parts.append(f"<{kind.value}>")
                state = kind
            parts.append(f"<li>{item}</li>")
            continue

        text = line.strip()
        if not text:
            continue
        if text.startswith("<"):
            parts.append(text)
        else:
            parts.append(f"<p>{text}</p>")

    if state != ListState.NONE:
        parts.append(f"</{state.value}>")

    return "".join(parts)
