"""Exceptions raised by the news import pipeline."""

from typing import Optional


class NewsImportError(Exception):
    """Base class for news import failures."""


class UpstreamFetchError(NewsImportError):
    """A page on the scraped site could not be fetched."""

    def __init__(self, url: str, status_code: Optional[int] = None) -> None:
        self.url = url
        self.status_code = status_code
        reason = f"HTTP {status_code}" if status_code is not None else "network error"
        super().__init__(f"Failed to fetch {url}: {reason}")


class ImportValidationError(NewsImportError):
    """The submitted import batch is empty or malformed."""
