"""URL helpers shared by the scraping components."""

from typing import Optional
from urllib.parse import urljoin, urlparse


def to_absolute(href: Optional[str], origin: str) -> str:
    """Resolve *href* against the source origin.

    Empty input stays empty; anything already starting with ``http`` is
    returned untouched.
    """
    if not href:
        return ""
    if href.startswith("http"):
        return href
    return urljoin(origin.rstrip("/") + "/", href)


def belongs_to_origin(url: str, origin: str) -> bool:
    """True when *url* points at the origin host or one of its subdomains."""
    host = urlparse(url).hostname or ""
    origin_host = urlparse(origin).hostname or ""
    return host == origin_host or host.endswith(f".{origin_host}")
