"""Supabase persistence for imported news.

Tables: ``news``, ``categories`` and ``news_images`` (gallery rows ordered
by ``position``).
"""

import logging
from typing import Iterable, Optional

from supabase import AsyncClient

from app.models.news_import import Category, NewsItemCreate

logger = logging.getLogger(__name__)

NEWS_TABLE = "news"
CATEGORIES_TABLE = "categories"
NEWS_IMAGES_TABLE = "news_images"


class NewsRepository:
    """The slice of news storage the import pipeline needs."""

    def __init__(self, supabase: AsyncClient) -> None:
        self.supabase = supabase

    async def find_existing_source_urls(self, urls: Iterable[str]) -> set[str]:
        """Return the subset of *urls* already stored as a news ``source_url``."""
        candidates = sorted(set(urls))
        if not candidates:
            return set()

        result = await (
            self.supabase.table(NEWS_TABLE)
            .select("source_url")
            .in_("source_url", candidates)
            .execute()
        )
        return {row["source_url"] for row in result.data if row.get("source_url")}

    async def find_by_source_url(self, source_url: str) -> Optional[dict]:
        return await self._find_one_news("source_url", source_url)

    async def find_by_title(self, title: str) -> Optional[dict]:
        return await self._find_one_news("title", title)

    async def _find_one_news(self, column: str, value: str) -> Optional[dict]:
        result = await (
            self.supabase.table(NEWS_TABLE)
            .select("id")
            .eq(column, value)
            .limit(1)
            .execute()
        )
        return result.data[0] if result.data else None

    async def find_or_create_category(self, name: str) -> Category:
        """Fetch the category called *name*, creating it on first use."""
        result = await (
            self.supabase.table(CATEGORIES_TABLE)
            .select("id, name, description")
            .eq("name", name)
            .limit(1)
            .execute()
        )
        if result.data:
            row = result.data[0]
        else:
            logger.info(f"Creating category {name!r}")
            created = await (
                self.supabase.table(CATEGORIES_TABLE)
                .insert({"name": name, "description": name})
                .execute()
            )
            row = created.data[0]

        return Category(
            id=str(row["id"]),
            name=row["name"],
            description=row.get("description"),
        )

    async def create_news_item(
        self, item: NewsItemCreate, gallery_image_urls: list[str]
    ) -> dict:
        """Insert a news row together with its ordered gallery images.

        If the gallery rows cannot be written the news row is removed again
        and the error re-raised.
        """
        created = await (
            self.supabase.table(NEWS_TABLE)
            .insert(item.model_dump(mode="json"))
            .execute()
        )
        news = created.data[0]

        if gallery_image_urls:
            rows = [
                {"news_id": news["id"], "image_url": url, "position": position}
                for position, url in enumerate(gallery_image_urls)
            ]
            try:
                await self.supabase.table(NEWS_IMAGES_TABLE).insert(rows).execute()
            except Exception:
                logger.warning(
                    f"Gallery insert failed for news {news['id']}, rolling back"
                )
                await (
                    self.supabase.table(NEWS_TABLE)
                    .delete()
                    .eq("id", news["id"])
                    .execute()
                )
                raise

        return news
