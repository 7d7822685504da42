"""News import package: scrape pon.org.ua and import selected articles.

Re-exports the public API so consumers can use::

    from app.services.news_import import NewsImportService, get_news_import_service
"""

from app.services.news_import.exceptions import (
    ImportValidationError,
    NewsImportError,
    UpstreamFetchError,
)
from app.services.news_import.service import (
    NewsImportService,
    get_news_import_service,
    get_news_word,
    reset_news_import_service,
)

__all__ = [
    "ImportValidationError",
    "NewsImportError",
    "NewsImportService",
    "UpstreamFetchError",
    "get_news_import_service",
    "get_news_word",
    "reset_news_import_service",
]
