"""
FastAPI application entry point.
Challenge: Mount routes, middleware (Prometheus), Elasticsearch handle lifecycle.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from app.config import get_settings
from app.api.v1.router import api_router
from app.search.elasticsearch_client import create_elasticsearch

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: open the Elasticsearch handle. Shutdown: close it."""
    settings = get_settings()
    app.state.elasticsearch = create_elasticsearch(settings)
    logger.info("Elasticsearch client created for %s", settings.elasticsearch_url.split("@")[-1])
    try:
        yield
    finally:
        await app.state.elasticsearch.close()


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app = FastAPI(
        title=settings.app_name,
        description="Elasticsearch document operations, flight lookup by nose number, and search-after id export.",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics at /metrics
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
