from app.services.news_import import (
    NewsImportService,
    get_news_import_service,
    reset_news_import_service,
)

__all__ = [
    # News import
    "NewsImportService",
    "get_news_import_service",
    "reset_news_import_service",
]
