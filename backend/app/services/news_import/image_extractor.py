"""Collect gallery images from an article body."""

import re
from typing import Iterable, Optional

from bs4 import Tag

from app.services.news_import.constants import (
    DEFAULT_IMAGE_DIMENSION,
    MIN_IMAGE_DIMENSION,
    SOURCE_ORIGIN,
)
from app.services.news_import.urls import to_absolute

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _dimension(value: Optional[str]) -> Optional[int]:
    """Parse a width/height attribute the lenient way browsers do ("640px" -> 640)."""
    if value is None or value == "":
        return DEFAULT_IMAGE_DIMENSION
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def is_too_small(img: Tag) -> bool:
    """True for icons and spacers declared smaller than the minimum size.

    Images without dimension attributes (or with unparseable ones) pass.
    """
    for attr in ("width", "height"):
        size = _dimension(img.get(attr))
        if size is not None and size < MIN_IMAGE_DIMENSION:
            return True
    return False


def first_image_url(containers: Iterable[Tag], origin: str = SOURCE_ORIGIN) -> Optional[str]:
    """Absolute URL of the first image inside the body containers."""
    for container in containers:
        img = container.find("img")
        if img is not None:
            return to_absolute(img.get("src"), origin) or None
    return None


def extract_gallery_images(
    containers: Iterable[Tag],
    main_image: Optional[str],
    origin: str = SOURCE_ORIGIN,
) -> list[str]:
    """Gallery image URLs in document order, deduplicated, main image excluded."""
    urls: list[str] = []

    for container in containers:
        for img in container.find_all("img"):
            src = to_absolute(img.get("src"), origin)
            if not src:
                continue
            if is_too_small(img):
                continue
            if src == main_image:
                continue
            if src not in urls:
                urls.append(src)

    return urls
