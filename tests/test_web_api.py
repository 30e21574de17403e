"""Integration tests for the Newswire web API endpoints."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from newswire.ingestion.article import ArticleRecord
from newswire.storage.articles import upsert_article
from newswire.storage.connection import get_connection
from newswire.storage.schema import init_db
from newswire.web.app import create_app
from newswire.web.config import WebConfig


# --- Seed helpers ---


def _seed_article(conn, slug, **overrides):
    """Insert a test article through the article store."""
    defaults = {
        "title": f"Title {slug}",
        "description": f"Description {slug}",
        "content": f"Content {slug}",
        "source": "Reuters",
        "author": "Jane Doe",
        "image_url": "",
        "article_url": f"https://example.com/{slug}",
        "published_at": "2024-03-16 08:00:00",
        "api_source": "newsapi",
    }
    defaults.update(overrides)
    upsert_article(conn, ArticleRecord(**defaults))


def _seed_run(conn, run_id, source, status, started_at, **result):
    conn.execute(
        "INSERT INTO ingestion_runs "
        "(id, source, page, from_date, started_at, finished_at, status, result, error) "
        "VALUES (?, ?, 1, '2024-03-15', ?, ?, ?, ?, NULL)",
        (run_id, source, started_at, started_at, status, json.dumps(result)),
    )


# --- Fixtures ---


@pytest.fixture()
def db_path(tmp_path):
    return str(tmp_path / "test.db")


@pytest.fixture()
def seeded_db(db_path):
    """Database with 4 articles from 3 publishers and 2 ingestion runs."""
    init_db(db_path)
    with get_connection(db_path) as conn:
        _seed_article(conn, "a1", published_at="2024-03-16 08:00:00")
        _seed_article(
            conn, "a2", source="The Guardian", author="John Smith",
            api_source="guardian", published_at="2024-03-16 12:00:00",
        )
        _seed_article(
            conn, "a3", source="The New York Times", author="",
            api_source="nytimes", published_at="2024-03-15 23:59:59",
        )
        _seed_article(
            conn, "a4", author="John Smith", published_at="2024-03-14 10:00:00",
        )

        _seed_run(conn, "run-1", "newsapi", "continuing", "2024-03-16T00:00:00+00:00",
                  stored=3, rejected=0, next_page=2)
        _seed_run(conn, "run-2", "nytimes", "completed", "2024-03-16T00:01:00+00:00",
                  stored=1, rejected=1, next_page=None)
    return db_path


@pytest.fixture()
def client(seeded_db):
    config = WebConfig(database_path=seeded_db)
    app = create_app(config)
    return TestClient(app)


# --- Tests: Articles ---


class TestArticles:
    def test_list_articles_returns_paginated(self, client):
        resp = client.get("/api/v1/articles")
        assert resp.status_code == 200
        data = resp.json()
        for key in ("articles", "total", "page", "per_page", "pages"):
            assert key in data
        assert data["total"] == 4
        assert data["page"] == 1
        assert data["per_page"] == 10
        assert data["pages"] == 1

    def test_list_articles_newest_first(self, client):
        data = client.get("/api/v1/articles").json()
        dates = [a["published_at"] for a in data["articles"]]
        assert dates == sorted(dates, reverse=True)

    def test_filter_by_sources(self, client):
        data = client.get("/api/v1/articles?sources=The Guardian,The New York Times").json()
        assert data["total"] == 2
        assert {a["source"] for a in data["articles"]} == {"The Guardian", "The New York Times"}

    def test_filter_by_authors(self, client):
        data = client.get("/api/v1/articles?authors=John Smith").json()
        assert data["total"] == 2
        assert all(a["author"] == "John Smith" for a in data["articles"])

    def test_filter_by_api_source(self, client):
        data = client.get("/api/v1/articles?api_source=newsapi").json()
        assert data["total"] == 2

    def test_filter_by_date(self, client):
        data = client.get("/api/v1/articles?date=2024-03-16").json()
        assert data["total"] == 2
        assert all(a["published_at"].startswith("2024-03-16") for a in data["articles"])

    def test_invalid_date_rejected(self, client):
        resp = client.get("/api/v1/articles?date=16/03/2024")
        assert resp.status_code == 422

    def test_pagination(self, client):
        data = client.get("/api/v1/articles?per_page=3&page=2").json()
        assert data["pages"] == 2
        assert len(data["articles"]) == 1

    def test_get_article_by_id_found(self, client):
        first = client.get("/api/v1/articles").json()["articles"][0]
        resp = client.get(f"/api/v1/articles/{first['id']}")
        assert resp.status_code == 200
        assert resp.json()["article_url"] == first["article_url"]

    def test_get_article_by_id_not_found(self, client):
        resp = client.get("/api/v1/articles/9999")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Article not found"


# --- Tests: Publishers and authors ---


class TestDistinctValues:
    def test_sources(self, client):
        data = client.get("/api/v1/sources").json()
        assert data["sources"] == ["Reuters", "The Guardian", "The New York Times"]

    def test_authors_skip_empty(self, client):
        data = client.get("/api/v1/authors").json()
        assert data["authors"] == ["Jane Doe", "John Smith"]


# --- Tests: Ingestion runs ---


class TestRuns:
    def test_list_runs_newest_first(self, client):
        data = client.get("/api/v1/runs").json()
        assert data["total"] == 2
        assert [r["id"] for r in data["runs"]] == ["run-2", "run-1"]
        assert data["runs"][1]["result"] == {"stored": 3, "rejected": 0, "next_page": 2}

    def test_filter_runs_by_source(self, client):
        data = client.get("/api/v1/runs?source=newsapi").json()
        assert data["total"] == 1
        assert data["runs"][0]["status"] == "continuing"


# --- Tests: Edge cases ---


class TestEdgeCases:
    def test_per_page_capped_at_100(self, client):
        resp = client.get("/api/v1/articles?per_page=500")
        assert resp.status_code == 422

    def test_page_beyond_range_returns_empty(self, client):
        data = client.get("/api/v1/articles?page=999").json()
        assert data["articles"] == []
        assert data["total"] == 4

    def test_empty_database(self, db_path):
        init_db(db_path)
        client = TestClient(create_app(WebConfig(database_path=db_path)))
        data = client.get("/api/v1/articles").json()
        assert data["total"] == 0
        assert data["pages"] == 0

    def test_default_page_size_from_config(self, seeded_db):
        client = TestClient(
            create_app(WebConfig(database_path=seeded_db, articles_per_page=3))
        )
        data = client.get("/api/v1/articles").json()
        assert data["per_page"] == 3
        assert data["pages"] == 2
        assert len(data["articles"]) == 3
