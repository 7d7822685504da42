"""Union News Backend - FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.db.supabase import get_async_supabase_client_async
from app.routers import news_import

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown."""
    logger.info("Starting Union News Backend...")

    try:
        await get_async_supabase_client_async()
        logger.info("Supabase client initialized")
    except Exception as e:
        logger.warning(f"Supabase initialization failed (service may be unavailable): {e}")

    logger.info("Union News Backend started successfully")

    yield

    logger.info("Union News Backend shutdown complete")


app = FastAPI(
    title="Union News Backend",
    description="News site CMS API - import of articles from pon.org.ua",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(news_import.router)


@app.get("/health")
async def health_check() -> dict:
    """
    Health check endpoint for monitoring.

    Returns overall health status and status of each service:
    - supabase: News database
    """
    health = {"status": "healthy", "services": {}}

    try:
        supabase = await get_async_supabase_client_async()
        await supabase.table("categories").select("id").limit(1).execute()
        health["services"]["supabase"] = {"status": "healthy"}
    except Exception as e:
        health["services"]["supabase"] = {"status": "unavailable", "error": str(e)}

    for service_name, service_health in health["services"].items():
        if service_health.get("status") != "healthy":
            health["status"] = "degraded"
            break

    return health
