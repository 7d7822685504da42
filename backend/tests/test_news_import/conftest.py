"""Shared fixtures for the news import tests."""

from typing import Iterable, Optional

import httpx
import pytest

from app.models.news_import import Category, NewsItemCreate
from app.services.news_import.fetcher import PageFetcher


class FakeNewsRepository:
    """In-memory stand-in for ``NewsRepository``."""

    def __init__(self, source_urls: Iterable[str] = ()) -> None:
        self.news: list[dict] = [
            {"id": f"existing-{i}", "title": f"Existing {i}", "source_url": url}
            for i, url in enumerate(source_urls)
        ]
        self.galleries: dict[str, list[str]] = {}
        self.categories: dict[str, Category] = {}
        self.category_calls = 0
        self.fail_titles: set[str] = set()

    async def find_existing_source_urls(self, urls: Iterable[str]) -> set[str]:
        stored = {n["source_url"] for n in self.news if n.get("source_url")}
        return set(urls) & stored

    async def find_by_source_url(self, source_url: str) -> Optional[dict]:
        return next((n for n in self.news if n.get("source_url") == source_url), None)

    async def find_by_title(self, title: str) -> Optional[dict]:
        return next((n for n in self.news if n["title"] == title), None)

    async def find_or_create_category(self, name: str) -> Category:
        self.category_calls += 1
        if name not in self.categories:
            self.categories[name] = Category(
                id=f"cat-{len(self.categories) + 1}", name=name, description=name
            )
        return self.categories[name]

    async def create_news_item(
        self, item: NewsItemCreate, gallery_image_urls: list[str]
    ) -> dict:
        if item.title in self.fail_titles:
            raise RuntimeError("insert failed")
        row = {"id": f"news-{len(self.news) + 1}", **item.model_dump()}
        self.news.append(row)
        self.galleries[row["id"]] = list(gallery_image_urls)
        return row


@pytest.fixture
def repository() -> FakeNewsRepository:
    return FakeNewsRepository()


def make_fetcher(pages: dict[str, tuple[int, str]], requested: list) -> PageFetcher:
    """PageFetcher backed by ``httpx.MockTransport`` serving *pages*."""

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request)
        status, body = pages.get(str(request.url), (404, "not found"))
        return httpx.Response(status, text=body)

    return PageFetcher(transport=httpx.MockTransport(handler))


@pytest.fixture
def fetcher_factory():
    return make_fetcher
