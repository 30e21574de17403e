"""API route handlers for the Newswire web API."""

from __future__ import annotations

import logging
import math
import sqlite3

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from newswire.storage.articles import count_articles
from newswire.web.deps import get_readonly_connection
from newswire.web.models import (
    Article,
    ArticleListResponse,
    AuthorListResponse,
    IngestionRunListResponse,
    SourceListResponse,
)
from newswire.web.queries import (
    get_article_by_id,
    list_articles,
    list_distinct,
    list_ingestion_runs,
)

logger = logging.getLogger(__name__)

router = APIRouter()
health_router = APIRouter()


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


@health_router.get("/health")
def health(request: Request) -> JSONResponse:
    """Report whether the articles database is reachable and how many articles it holds."""
    database_path = request.app.state.database_path
    try:
        with get_readonly_connection(database_path) as conn:
            articles_stored = count_articles(conn)
        return JSONResponse(
            {"status": "healthy", "database": "ok", "articles": articles_stored}
        )
    except (sqlite3.Error, OSError) as exc:
        logger.warning("Health check failed: %s", exc)
        return JSONResponse(
            {"status": "unhealthy", "database": "error", "detail": str(exc)},
            status_code=503,
        )


@router.get("/articles", response_model=ArticleListResponse)
def articles(
    request: Request,
    sources: str | None = None,
    authors: str | None = None,
    api_source: str | None = None,
    date: str | None = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    page: int = Query(1, ge=1),
    per_page: int | None = Query(None, ge=1, le=100),
) -> ArticleListResponse:
    database_path = request.app.state.database_path
    per_page = per_page or request.app.state.articles_per_page

    filters: dict[str, object] = {
        "sources": _split_csv(sources),
        "authors": _split_csv(authors),
    }
    if api_source is not None:
        filters["api_source"] = api_source
    if date is not None:
        filters["date"] = date

    rows, total = list_articles(database_path, filters=filters, page=page, per_page=per_page)
    pages = math.ceil(total / per_page) if total else 0
    return ArticleListResponse(
        articles=[Article(**r) for r in rows],
        total=total,
        page=page,
        per_page=per_page,
        pages=pages,
    )


@router.get("/articles/{article_id}", response_model=Article)
def article_by_id(request: Request, article_id: int) -> Article:
    database_path = request.app.state.database_path
    data = get_article_by_id(database_path, article_id)
    if data is None:
        raise HTTPException(status_code=404, detail="Article not found")
    return Article(**data)


@router.get("/sources", response_model=SourceListResponse)
def sources(request: Request) -> SourceListResponse:
    return SourceListResponse(sources=list_distinct(request.app.state.database_path, "source"))


@router.get("/authors", response_model=AuthorListResponse)
def authors(request: Request) -> AuthorListResponse:
    return AuthorListResponse(authors=list_distinct(request.app.state.database_path, "author"))


@router.get("/runs", response_model=IngestionRunListResponse)
def runs(
    request: Request,
    source: str | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100),
) -> IngestionRunListResponse:
    database_path = request.app.state.database_path
    rows, total = list_ingestion_runs(
        database_path, source=source, page=page, per_page=per_page,
    )
    pages = math.ceil(total / per_page) if total else 0
    return IngestionRunListResponse(
        runs=rows,
        total=total,
        page=page,
        per_page=per_page,
        pages=pages,
    )
