"""Tests for the import half of app.services.news_import.service."""

from datetime import datetime, timezone

import pytest

from app.services.news_import.exceptions import ImportValidationError
from app.services.news_import.service import (
    NewsImportService,
    build_summary,
    compose_message,
    get_news_word,
)


def _article(title: str = "Збори профспілки", **overrides) -> dict:
    data = {
        "title": title,
        "content": "## Підсумки\n\nПрофспілка провела **збори**.\n\n- пункт",
        "imageUrl": "https://pon.org.ua/uploads/main.jpg",
        "sourceUrl": f"https://pon.org.ua/novyny/{abs(hash(title))}.html",
        "publishedDate": "15.03.2024",
        "imageUrls": [
            "https://pon.org.ua/uploads/1.jpg",
            "https://pon.org.ua/uploads/2.jpg",
        ],
    }
    data.update(overrides)
    return data


class TestGetNewsWord:
    @pytest.mark.parametrize(
        "count,word",
        [(1, "новину"), (2, "новини"), (3, "новини"), (4, "новини"), (0, "новин"), (5, "новин"), (11, "новин")],
    )
    def test_forms(self, count, word):
        assert get_news_word(count) == word


class TestBuildSummary:
    def test_strips_markdown_and_collapses_whitespace(self):
        md = "# Title\n\nSome **bold** [link](url) > quote - dash"
        assert build_summary(md) == "Title Some bold linkurl quote dash"

    def test_short_text_untouched(self):
        assert build_summary("short") == "short"

    def test_truncated_with_ellipsis(self):
        summary = build_summary("а" * 250)
        assert len(summary) == 200
        assert summary.endswith("...")
        assert summary[:197] == "а" * 197

    def test_exactly_limit_not_truncated(self):
        assert build_summary("б" * 200) == "б" * 200

    def test_empty(self):
        assert build_summary("") == ""


class TestComposeMessage:
    def test_success_without_skips(self):
        assert compose_message(3, []) == "Успішно імпортовано 3 новини"

    def test_success_with_skips(self):
        assert compose_message(5, ["Дублікат: x"]) == (
            "Успішно імпортовано 5 новин. Пропущено: 1"
        )

    def test_failure_lists_errors(self):
        assert compose_message(0, ["Дублікат: a", "Помилка: b"]) == (
            "Не вдалося імпортувати жодної новини. Дублікат: a; Помилка: b"
        )


@pytest.mark.asyncio
class TestImportSelected:
    @pytest.mark.parametrize("payload", [None, [], {}, "text", {"title": "x"}, [1, 2]])
    async def test_invalid_batch_rejected(self, repository, payload):
        service = NewsImportService(repository)
        with pytest.raises(ImportValidationError) as exc_info:
            await service.import_selected(payload)
        assert str(exc_info.value) == "Не обрано жодної новини"
        assert repository.category_calls == 0

    async def test_single_import(self, repository):
        service = NewsImportService(repository)
        result = await service.import_selected([_article()])

        assert result.success is True
        assert result.imported_count == 1
        assert result.message == "Успішно імпортовано 1 новину"

        stored = repository.news[-1]
        assert stored["title"] == "Збори профспілки"
        assert stored["content"] == (
            "<h2>Підсумки</h2><p>Профспілка провела <strong>збори</strong>.</p>"
            "<ul><li>пункт</li></ul>"
        )
        assert stored["summary"] == "Підсумки Профспілка провела збори. пункт"
        assert stored["category_id"] == "cat-1"
        assert stored["published"] is True
        assert stored["published_date"] == datetime(2024, 3, 15)
        assert stored["main_image_url"] == "https://pon.org.ua/uploads/main.jpg"
        assert repository.galleries[stored["id"]] == [
            "https://pon.org.ua/uploads/1.jpg",
            "https://pon.org.ua/uploads/2.jpg",
        ]

    async def test_same_article_twice_imports_once(self, repository):
        service = NewsImportService(repository)
        article = _article()

        first = await service.import_selected([article])
        second = await service.import_selected([article])

        assert first.imported_count + second.imported_count == 1
        assert second.success is False
        assert second.message == (
            "Не вдалося імпортувати жодної новини. Дублікат: Збори профспілки"
        )

    async def test_duplicate_within_batch(self, repository):
        service = NewsImportService(repository)
        article = _article()

        result = await service.import_selected([article, article])

        assert result.imported_count == 1
        assert result.message == "Успішно імпортовано 1 новину. Пропущено: 1"

    async def test_duplicate_by_title(self, repository):
        service = NewsImportService(repository)
        await service.import_selected([_article(sourceUrl="https://pon.org.ua/a.html")])

        result = await service.import_selected(
            [_article(sourceUrl="https://pon.org.ua/b.html")]
        )
        assert result.imported_count == 0
        assert "Дублікат (за назвою): Збори профспілки" in result.message

    async def test_title_checked_when_source_url_missing(self, repository):
        service = NewsImportService(repository)
        await service.import_selected([_article(sourceUrl=None)])
        result = await service.import_selected([_article(sourceUrl="")])
        assert "Дублікат (за назвою)" in result.message
        assert repository.news[0]["source_url"] is None

    async def test_persistence_failure_does_not_abort_batch(self, repository):
        repository.fail_titles.add("Broken")
        service = NewsImportService(repository)

        result = await service.import_selected(
            [_article("Broken"), _article("Перша"), _article("Друга")]
        )

        assert result.success is True
        assert result.imported_count == 2
        assert result.message == "Успішно імпортовано 2 новини. Пропущено: 1"

    async def test_all_failed(self, repository):
        repository.fail_titles.add("Broken")
        service = NewsImportService(repository)

        result = await service.import_selected([_article("Broken")])

        assert result.success is False
        assert result.message == "Не вдалося імпортувати жодної новини. Помилка: Broken"

    async def test_blank_title_skipped(self, repository):
        service = NewsImportService(repository)

        result = await service.import_selected([_article("   "), _article("Нормальна")])

        assert result.imported_count == 1
        assert [n["title"] for n in repository.news] == ["Нормальна"]

    async def test_unparseable_date_defaults_to_now(self, repository):
        service = NewsImportService(repository)
        before = datetime.now(timezone.utc)

        await service.import_selected([_article(publishedDate="колись")])
        await service.import_selected([_article("Без дати", publishedDate=None)])

        for stored in repository.news:
            assert stored["published_date"] >= before

    async def test_minimal_article(self, repository):
        service = NewsImportService(repository)

        result = await service.import_selected([{"title": "Лише заголовок"}])

        assert result.imported_count == 1
        stored = repository.news[0]
        assert stored["content"] == ""
        assert stored["summary"] == ""
        assert stored["main_image_url"] is None
        assert repository.galleries[stored["id"]] == []

    async def test_default_category_reused(self, repository):
        service = NewsImportService(repository, default_category="Новини")

        await service.import_selected([_article("A")])
        await service.import_selected([_article("B")])

        assert repository.category_calls == 2
        assert list(repository.categories) == ["Новини"]
        assert {n["category_id"] for n in repository.news} == {"cat-1"}
