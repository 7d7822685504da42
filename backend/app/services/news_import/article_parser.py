"""Turn one article page into an ``ExternalArticle``."""

from typing import Optional

from bs4 import BeautifulSoup, Tag

from app.models.news_import import ExternalArticle
from app.services.news_import.constants import (
    BODY_CONTAINER_SELECTOR,
    DATE_SELECTOR,
    SOURCE_ORIGIN,
    TITLE_SELECTORS,
)
from app.services.news_import.html_to_markdown import html_to_markdown
from app.services.news_import.image_extractor import (
    extract_gallery_images,
    first_image_url,
)


def find_body_containers(soup: BeautifulSoup) -> list[Tag]:
    """Body containers in document order, skipping ones nested in another match."""
    matches = soup.select(BODY_CONTAINER_SELECTOR)
    match_ids = {id(el) for el in matches}
    return [
        el for el in matches if not any(id(parent) in match_ids for parent in el.parents)
    ]


def extract_title(soup: BeautifulSoup) -> str:
    for selector in TITLE_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        title = element.get_text().strip()
        if title:
            return title
    return ""


def extract_published_date(soup: BeautifulSoup) -> Optional[str]:
    """Raw publish date, preferring a machine-readable ``datetime`` attribute."""
    element = soup.select_one(DATE_SELECTOR)
    if element is None:
        return None
    value = element.get("datetime") or element.get_text().strip()
    return value or None


def parse_article(
    html: str,
    url: str,
    preview_image: Optional[str] = None,
    origin: str = SOURCE_ORIGIN,
) -> Optional[ExternalArticle]:
    """Parse an article page.

    Returns ``None`` when the page has no title, since such an article
    cannot be imported.
    """
    soup = BeautifulSoup(html, "html.parser")

    title = extract_title(soup)
    if not title:
        return None

    containers = find_body_containers(soup)
    main_image = preview_image or first_image_url(containers, origin)

    return ExternalArticle(
        title=title,
        content=html_to_markdown(containers, origin),
        image_url=main_image,
        source_url=url,
        published_date=extract_published_date(soup),
        image_urls=extract_gallery_images(containers, main_image, origin),
    )
