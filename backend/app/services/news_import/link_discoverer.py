"""Discover article links on the news listing page.

Two tiers: the site's own news-title anchors first, and only when those are
absent a noisier set of generic article selectors with extra filtering.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

from app.models.news_import import ScrapedLink
from app.services.news_import.constants import (
    FALLBACK_LINK_SELECTOR,
    MAX_SCRAPED_LINKS,
    MIN_FALLBACK_TITLE_LENGTH,
    PREVIEW_BLOCK_SELECTOR,
    PRIMARY_LINK_SELECTOR,
    SOURCE_ORIGIN,
)
from app.services.news_import.urls import belongs_to_origin, to_absolute

logger = logging.getLogger(__name__)


def discover_links(
    html: str,
    origin: str = SOURCE_ORIGIN,
    limit: int = MAX_SCRAPED_LINKS,
) -> list[ScrapedLink]:
    """Extract up to *limit* article links from the listing page HTML."""
    soup = BeautifulSoup(html, "html.parser")

    links = _primary_links(soup, origin, limit)
    if not links:
        logger.info("Primary news selector matched nothing, using fallback selectors")
        links = _fallback_links(soup, origin, limit)

    return links


def _primary_links(soup: BeautifulSoup, origin: str, limit: int) -> list[ScrapedLink]:
    links: list[ScrapedLink] = []

    for anchor in soup.select(PRIMARY_LINK_SELECTOR):
        if len(links) >= limit:
            break
        href = anchor.get("href") or ""
        if not href:
            continue

        links.append(
            ScrapedLink(
                url=to_absolute(href, origin),
                preview_title=anchor.get_text().strip(),
                preview_image=_preview_image(anchor, origin),
            )
        )

    return links


def _fallback_links(soup: BeautifulSoup, origin: str, limit: int) -> list[ScrapedLink]:
    links: list[ScrapedLink] = []
    seen: set[str] = set()

    for anchor in soup.select(FALLBACK_LINK_SELECTOR):
        if len(links) >= limit:
            break
        href = anchor.get("href") or ""
        if not href or href == "#":
            continue

        url = to_absolute(href, origin)
        if not belongs_to_origin(url, origin):
            continue

        title = anchor.get_text().strip()
        if len(title) < MIN_FALLBACK_TITLE_LENGTH:
            continue
        if url in seen:
            continue

        seen.add(url)
        links.append(ScrapedLink(url=url, preview_title=title))

    return links


def _preview_image(anchor: Tag, origin: str) -> Optional[str]:
    """First image of the nearest enclosing news block, if any."""
    block = anchor.css.closest(PREVIEW_BLOCK_SELECTOR)
    if block is None:
        return None
    img = block.find("img")
    if img is None:
        return None
    return to_absolute(img.get("src"), origin) or None
