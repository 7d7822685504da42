from app.models.news_import import (
    Category,
    ExternalArticle,
    ImportResult,
    NewsItemCreate,
    ScrapedLink,
)

__all__ = [
    # News import models
    "Category",
    "ExternalArticle",
    "ImportResult",
    "NewsItemCreate",
    "ScrapedLink",
]
