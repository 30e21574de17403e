"""Pydantic v2 response models for the Newswire web API."""

from __future__ import annotations

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Articles
# ---------------------------------------------------------------------------
class Article(BaseModel):
    id: int
    title: str
    description: str | None
    content: str | None
    source: str
    author: str | None
    image_url: str | None
    article_url: str
    published_at: str
    api_source: str
    created_at: str
    updated_at: str


class ArticleListResponse(BaseModel):
    articles: list[Article]
    total: int
    page: int
    per_page: int
    pages: int


class SourceListResponse(BaseModel):
    sources: list[str]


class AuthorListResponse(BaseModel):
    authors: list[str]


# ---------------------------------------------------------------------------
# Ingestion runs
# ---------------------------------------------------------------------------
class IngestionRun(BaseModel):
    id: str
    source: str
    page: int
    from_date: str
    started_at: str
    finished_at: str
    status: str
    result: dict
    error: str | None


class IngestionRunListResponse(BaseModel):
    runs: list[IngestionRun]
    total: int
    page: int
    per_page: int
    pages: int
