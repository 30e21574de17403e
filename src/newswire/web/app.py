"""FastAPI application factory for the Newswire web API."""

from __future__ import annotations

from fastapi import FastAPI

from newswire.web.config import WebConfig
from newswire.web.routes import health_router, router


def create_app(config: WebConfig, lifespan=None) -> FastAPI:
    """Build and return a configured FastAPI application."""
    app = FastAPI(title="Newswire", docs_url="/api/docs", lifespan=lifespan)
    app.state.database_path = config.database_path
    app.state.articles_per_page = config.articles_per_page
    app.include_router(health_router)
    app.include_router(router, prefix="/api/v1")
    return app
