"""
FinalTake — FastAPI Application
Movie discovery by genre, mood, age rating and year.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from finaltake.config import get_settings
from finaltake.database import init_db, get_db
from finaltake.models import UserProfile, ProfileMovie  # noqa: F401
from finaltake.routers import discover, movies, profiles
from finaltake.schemas import HealthCheck

settings = get_settings()

# ─── Logging ──────────────────────────────────────────────

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ─── Lifespan ─────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: create tables. Shutdown: cleanup."""
    logger.info("🎬 FinalTake — Starting up...")
    await init_db()
    logger.info("✅ Database initialized")
    if not settings.TMDB_API_KEY:
        logger.warning("TMDB_API_KEY is not set; discover will return empty pages")
    yield
    logger.info("👋 Shutting down...")


# ─── App ──────────────────────────────────────────────────

app = FastAPI(
    title="FinalTake API",
    description="Movie discovery with mood scoring and shareable filters.",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.ENVIRONMENT == "development" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT == "development" else None,
    openapi_url="/openapi.json" if settings.ENVIRONMENT == "development" else None,
)


# ─── Global Error Handler ─────────────────────────────────
# Never leak tracebacks or file paths to clients.

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# CORS — allow frontend origins
origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ─── Routers ──────────────────────────────────────────────

app.include_router(discover.router, prefix="/api/discover", tags=["discover"])
app.include_router(movies.router, prefix="/api/movies", tags=["movies"])
app.include_router(profiles.router, prefix="/api/profiles", tags=["profiles"])


# ─── Health Check ─────────────────────────────────────────

@app.get("/health", response_model=HealthCheck)
async def health_check(
    check_services: bool = False,
    db: AsyncSession = Depends(get_db),
):
    if not check_services:
        return HealthCheck(status="ok")

    health_status = {"status": "ok", "database": "unknown", "tmdb": "unknown"}

    try:
        await db.execute(select(1))
        health_status["database"] = "connected"
    except Exception as e:
        logger.error(f"Health DB fail: {e}")
        health_status["database"] = "disconnected"
        health_status["status"] = "degraded"

    from finaltake.services.tmdb import tmdb_service
    if not settings.TMDB_API_KEY:
        health_status["tmdb"] = "not_configured"
    elif await tmdb_service.get_genres():
        health_status["tmdb"] = "connected"
    else:
        health_status["tmdb"] = "disconnected"
        health_status["status"] = "degraded"

    return HealthCheck(**health_status)
