"""
Playoff forecast web service.

Serves the forecast routes under /api; run with
`uvicorn playoff_forecast.main:app`.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.routes import forecasts_router
from .core.config import CORS_ORIGINS
from .db import create_tables


logger = logging.getLogger(__name__)

API_NAME = "Fantasy Playoff Forecast"


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await create_tables()
    except Exception as e:
        # /simulate and /matchup never touch the cache, so keep serving them
        logger.error(f"Forecast cache unavailable, continuing without it: {e}")
    yield


app = FastAPI(
    title=API_NAME,
    description="Monte Carlo odds of making the playoffs, the semifinals and the final, and of winning the title.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)

app.include_router(forecasts_router, prefix="/api")


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "version": __version__}


@app.get("/")
async def root():
    """Service name and where to find the docs."""
    return {
        "name": f"{API_NAME} API",
        "version": __version__,
        "docs": "/api/docs",
        "health": "/api/health",
        "forecasts": "/api/forecasts"
    }
