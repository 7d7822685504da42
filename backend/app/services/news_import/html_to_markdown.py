"""Render an article body into the restricted Markdown dialect used by the CMS.

Every renderer is a pure function returning the Markdown for one node; the
pieces are concatenated and normalised once at the end.  Images are dropped
from the text because they travel separately as ``imageUrl``/``imageUrls``.
"""

import re
from typing import Iterable

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

from app.services.news_import.constants import SOURCE_ORIGIN
from app.services.news_import.urls import to_absolute

_HEADING_TAG = re.compile(r"^h([1-6])$")
_MARKDOWN_IMAGE = re.compile(r"!\[.*?\]\(.*?\)\s*", re.DOTALL)
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def html_to_markdown(containers: Iterable[Tag], origin: str = SOURCE_ORIGIN) -> str:
    """Convert the body containers of an article into Markdown."""
    markdown = "".join(render_blocks(container, origin) for container in containers)
    return normalize_markdown(markdown)


def normalize_markdown(markdown: str) -> str:
    """Strip image syntax, squeeze blank lines and trim."""
    markdown = _MARKDOWN_IMAGE.sub("", markdown)
    markdown = _EXCESS_NEWLINES.sub("\n\n", markdown)
    return markdown.strip()


def render_blocks(container: Tag, origin: str = SOURCE_ORIGIN) -> str:
    """Render the element children of *container* as block-level Markdown."""
    return "".join(
        render_block(child, origin)
        for child in container.children
        if isinstance(child, Tag)
    )


def render_block(element: Tag, origin: str = SOURCE_ORIGIN) -> str:
    tag = element.name.lower()

    if tag == "p":
        return _paragraph(render_inline(element, origin))

    heading = _HEADING_TAG.match(tag)
    if heading:
        text = element.get_text().strip()
        if not text:
            return ""
        return "#" * int(heading.group(1)) + " " + text + "\n\n"

    if tag in ("ul", "ol"):
        lines = []
        for index, item in enumerate(element.find_all("li"), start=1):
            prefix = f"{index}. " if tag == "ol" else "- "
            lines.append(prefix + item.get_text().strip() + "\n")
        return "".join(lines) + "\n"

    if tag == "blockquote":
        text = element.get_text().strip()
        if not text:
            return ""
        return "> " + text.replace("\n", "\n> ") + "\n\n"

    if tag == "img":
        return ""

    if tag in ("div", "section"):
        return render_blocks(element, origin)

    if tag == "br":
        return "\n"

    return _paragraph(render_inline(element, origin))


def render_inline(element: Tag, origin: str = SOURCE_ORIGIN) -> str:
    """Render the child nodes of *element* as inline Markdown."""
    parts: list[str] = []

    for node in element.children:
        if isinstance(node, Tag):
            parts.append(_inline_tag(node, origin))
        elif isinstance(node, NavigableString) and not isinstance(
            node, PreformattedString
        ):
            parts.append(str(node))

    return "".join(parts)


def _inline_tag(node: Tag, origin: str) -> str:
    tag = node.name.lower()

    if tag == "a":
        href = to_absolute(node.get("href"), origin)
        return f"[{node.get_text().strip()}]({href})"
    if tag in ("strong", "b"):
        return f"**{node.get_text().strip()}**"
    if tag in ("em", "i"):
        return f"*{node.get_text().strip()}*"
    if tag == "img":
        src = to_absolute(node.get("src"), origin)
        return f"![{node.get('alt') or ''}]({src})"
    if tag == "br":
        return "\n"
    return node.get_text()


def _paragraph(text: str) -> str:
    text = text.strip()
    return f"{text}\n\n" if text else ""
