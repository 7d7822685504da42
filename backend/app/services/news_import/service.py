"""News import orchestrator.

Scrape: listing page → link discovery → skip already imported → fetch each
article sequentially.  Import: validate batch → default category → per item
duplicate check, convert, persist → summary message.  Per-item problems are
collected into the message; only batch-level failures raise.
"""

import asyncio
import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from app.config import get_settings
from app.models.news_import import (
    ExternalArticle,
    ImportResult,
    NewsItemCreate,
    ScrapedLink,
)
from app.services.news_import.article_parser import parse_article
from app.services.news_import.constants import (
    DEFAULT_CATEGORY_NAME,
    MAX_SCRAPED_LINKS,
    SOURCE_ORIGIN,
    SOURCE_URL,
    SUMMARY_MAX_LENGTH,
)
from app.services.news_import.dates import parse_published_date
from app.services.news_import.exceptions import ImportValidationError
from app.services.news_import.fetcher import PageFetcher
from app.services.news_import.link_discoverer import discover_links
from app.services.news_import.markdown_to_html import markdown_to_html
from app.services.news_import.repository import NewsRepository

logger = logging.getLogger(__name__)

EMPTY_BATCH_MESSAGE = "Не обрано жодної новини"

_MARKDOWN_PUNCTUATION = re.compile(r"[#*\[\]()!>-]")
_WHITESPACE = re.compile(r"\s+")

_articles_adapter = TypeAdapter(list[ExternalArticle])

# Singleton state
_service: Optional["NewsImportService"] = None
_lock = asyncio.Lock()


def get_news_word(count: int) -> str:
    """Ukrainian accusative form of "новина" for *count* items."""
    if count == 1:
        return "новину"
    if 2 <= count <= 4:
        return "новини"
    return "новин"


def build_summary(markdown: str, max_length: int = SUMMARY_MAX_LENGTH) -> str:
    """Plain-text teaser derived from the Markdown source."""
    plain = _MARKDOWN_PUNCTUATION.sub("", markdown or "")
    plain = _WHITESPACE.sub(" ", plain).strip()
    if len(plain) > max_length:
        return plain[: max_length - 3] + "..."
    return plain


def compose_message(imported_count: int, errors: list[str]) -> str:
    if imported_count > 0:
        message = f"Успішно імпортовано {imported_count} {get_news_word(imported_count)}"
        if errors:
            message += f". Пропущено: {len(errors)}"
        return message
    return f"Не вдалося імпортувати жодної новини. {'; '.join(errors)}"


class NewsImportService:
    """Scrapes the external news site and imports selected articles."""

    def __init__(
        self,
        repository: NewsRepository,
        *,
        fetcher: Optional[PageFetcher] = None,
        source_url: str = SOURCE_URL,
        origin: str = SOURCE_ORIGIN,
        max_links: int = MAX_SCRAPED_LINKS,
        default_category: str = DEFAULT_CATEGORY_NAME,
    ) -> None:
        self.repository = repository
        self.fetcher = fetcher or PageFetcher()
        self.source_url = source_url
        self.origin = origin
        self.max_links = max_links
        self.default_category = default_category

    # ------------------------------------------------------------------
    # Scrape
    # ------------------------------------------------------------------

    async def scrape(self) -> list[ExternalArticle]:
        """Return not-yet-imported articles from the listing page.

        Raises:
            UpstreamFetchError: the listing page itself could not be fetched.
        """
        logger.info(f"Scraping {self.source_url}")
        listing_html = await self.fetcher.fetch(self.source_url)

        links = discover_links(listing_html, self.origin, self.max_links)
        logger.info(f"Discovered {len(links)} article links")

        existing = await self.repository.find_existing_source_urls(
            link.url for link in links
        )
        if existing:
            logger.info(f"Skipping {len(existing)} already imported articles")

        articles: list[ExternalArticle] = []
        for link in links:
            if link.url in existing:
                continue
            article = await self.fetch_article(link)
            if article is not None:
                articles.append(article)

        return articles

    async def fetch_article(self, link: ScrapedLink) -> Optional[ExternalArticle]:
        """Fetch and parse one article, falling back to the preview on failure."""
        try:
            html = await self.fetcher.fetch(link.url)
            return parse_article(html, link.url, link.preview_image, self.origin)
        except Exception as e:
            logger.warning(f"Failed to fetch article {link.url}: {e}")
            if not link.preview_title:
                return None
            return ExternalArticle(
                title=link.preview_title,
                content="",
                image_url=link.preview_image,
                source_url=link.url,
            )

    # ------------------------------------------------------------------
    # Import
    # ------------------------------------------------------------------

    async def import_selected(self, payload: Any) -> ImportResult:
        """Import the administrator-selected articles.

        Raises:
            ImportValidationError: the batch is empty or not a list of articles.
        """
        articles = self._validate_batch(payload)

        category = await self.repository.find_or_create_category(self.default_category)

        imported_count = 0
        errors: list[str] = []

        for article in articles:
            error = await self._import_one(article, category.id)
            if error:
                errors.append(error)
            else:
                imported_count += 1

        logger.info(
            f"News import finished: {imported_count} imported, {len(errors)} skipped"
        )
        return ImportResult(
            success=imported_count > 0,
            imported_count=imported_count,
            message=compose_message(imported_count, errors),
        )

    def _validate_batch(self, payload: Any) -> list[ExternalArticle]:
        if not isinstance(payload, list) or not payload:
            raise ImportValidationError(EMPTY_BATCH_MESSAGE)
        try:
            return _articles_adapter.validate_python(payload)
        except ValidationError as e:
            logger.warning(f"Rejected malformed import batch: {e}")
            raise ImportValidationError(EMPTY_BATCH_MESSAGE) from e

    async def _import_one(self, article: ExternalArticle, category_id: str) -> Optional[str]:
        """Import a single article; return a skip reason or ``None`` on success."""
        if not article.title.strip():
            return "Помилка: новина без заголовка"

        try:
            if article.source_url:
                if await self.repository.find_by_source_url(article.source_url):
                    return f"Дублікат: {article.title}"

            if await self.repository.find_by_title(article.title):
                return f"Дублікат (за назвою): {article.title}"

            published_date = parse_published_date(article.published_date)
            if published_date is None:
                published_date = datetime.now(timezone.utc)

            item = NewsItemCreate(
                title=article.title,
                summary=build_summary(article.content),
                content=markdown_to_html(article.content),
                category_id=category_id,
                published=True,
                published_date=published_date,
                main_image_url=article.image_url or None,
                source_url=article.source_url or None,
            )
            await self.repository.create_news_item(item, article.image_urls)
        except Exception as e:
            logger.warning(f"Failed to import {article.title!r}: {e}")
            return f"Помилка: {article.title}"

        return None


# =====================================================================
# Singleton factory (thread-safe via asyncio.Lock)
# =====================================================================


async def get_news_import_service() -> NewsImportService:
    """Get or create the singleton ``NewsImportService``."""
    global _service
    if _service is not None:
        return _service

    async with _lock:
        # Double-checked locking
        if _service is not None:
            return _service

        settings = get_settings()

        from app.db.supabase import get_async_supabase_client_async

        supabase = await get_async_supabase_client_async()

        _service = NewsImportService(
            repository=NewsRepository(supabase),
            fetcher=PageFetcher(settings.scraper_user_agent),
            source_url=settings.news_source_url,
            origin=settings.news_source_origin,
            max_links=settings.news_import_max_links,
            default_category=settings.news_default_category,
        )

    return _service


def reset_news_import_service() -> None:
    """Reset service for testing."""
    global _service
    _service = None
