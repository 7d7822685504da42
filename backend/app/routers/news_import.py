"""News import router: scrape the external site and import selected articles."""

import logging
from urllib.parse import urlparse

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from app.auth.dependencies import require_admin
from app.models.news_import import ExternalArticle, ImportResult
from app.services.news_import import (
    ImportValidationError,
    NewsImportService,
    UpstreamFetchError,
    get_news_import_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/news-import", tags=["news-import"])


@router.get("/scrape", response_model=list[ExternalArticle])
async def scrape_news(
    current_user: dict = Depends(require_admin),
    service: NewsImportService = Depends(get_news_import_service),
) -> list[ExternalArticle]:
    """
    Scrape the latest articles from the external news site.

    Articles whose source URL has already been imported are left out.
    Returns 502 when the listing page cannot be fetched.
    """
    try:
        return await service.scrape()
    except UpstreamFetchError as e:
        logger.error(f"Listing page fetch failed: {e}")
        host = urlparse(e.url).hostname or e.url
        status = e.status_code if e.status_code is not None else "network error"
        raise HTTPException(status_code=502, detail=f"Failed to fetch {host}: {status}")
    except Exception as e:
        logger.error(f"Scrape error: {e}")
        raise HTTPException(status_code=500, detail="Failed to scrape news")


@router.post("/import-selected", response_model=ImportResult)
async def import_selected_news(
    request: Request,
    current_user: dict = Depends(require_admin),
    service: NewsImportService = Depends(get_news_import_service),
):
    """
    Import the articles the administrator selected from a scrape.

    Duplicates and failed items are skipped and reported in the message;
    an empty, malformed or non-JSON batch is rejected with 400.
    """
    try:
        payload = await request.json()
    except ValueError:
        logger.warning("Import request body is not valid JSON")
        payload = None

    try:
        return await service.import_selected(payload)
    except ImportValidationError as e:
        result = ImportResult(success=False, imported_count=0, message=str(e))
        return JSONResponse(status_code=400, content=result.model_dump(by_alias=True))
