"""News import data models.

Wire format is camelCase (the admin UI consumes it directly); Python code
uses snake_case attribute names.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


@dataclass
class ScrapedLink:
    """Article link discovered on the listing page (never persisted)."""

    url: str
    preview_title: str
    preview_image: Optional[str] = None


class ExternalArticle(_CamelModel):
    """Article scraped from the external site, round-tripped through the admin UI."""

    title: str = Field(..., description="Article title")
    content: str = Field("", description="Article body as Markdown")
    image_url: Optional[str] = Field(None, description="Main image URL (absolute)")
    source_url: Optional[str] = Field(None, description="Origin article URL")
    published_date: Optional[str] = Field(
        None, description="Publish date exactly as found on the page"
    )
    image_urls: list[str] = Field(
        default_factory=list,
        description="Gallery image URLs, deduplicated, main image excluded",
    )


class ImportResult(_CamelModel):
    """Outcome of importing a batch of selected articles."""

    success: bool
    imported_count: int = Field(0, ge=0)
    message: str


class NewsItemCreate(BaseModel):
    """Fields of a news row created by the import pipeline."""

    title: str
    summary: str
    content: str = Field(..., description="Article body as HTML")
    category_id: str
    published: bool = True
    published_date: Optional[datetime] = None
    main_image_url: Optional[str] = None
    source_url: Optional[str] = None


class Category(BaseModel):
    """News category row."""

    id: str
    name: str
    description: Optional[str] = None
