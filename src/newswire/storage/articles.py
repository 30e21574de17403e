"""Article store: upsert-by-URL persistence for canonical articles."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from newswire.ingestion.article import ArticleRecord

_ARTICLE_COLUMNS = (
    "title",
    "description",
    "content",
    "source",
    "author",
    "image_url",
    "article_url",
    "published_at",
    "api_source",
)


def article_exists(conn: sqlite3.Connection, article_url: str) -> bool:
    """Return True if an article with this URL is already stored."""
    row = conn.execute(
        "SELECT 1 FROM articles WHERE article_url = ?", (article_url,)
    ).fetchone()
    return row is not None


def upsert_article(conn: sqlite3.Connection, record: ArticleRecord) -> str:
    """Insert the article, or overwrite the stored row with the same URL.

    The row id and created_at survive an update. Returns "inserted" or
    "updated".
    """
    existed = article_exists(conn, record.article_url)
    now = datetime.now(timezone.utc).isoformat()
    values = [getattr(record, col) for col in _ARTICLE_COLUMNS]
    updates = ", ".join(
        f"{col} = excluded.{col}" for col in _ARTICLE_COLUMNS if col != "article_url"
    )
    conn.execute(
        f"INSERT INTO articles ({', '.join(_ARTICLE_COLUMNS)}, created_at, updated_at) "  # noqa: S608
        f"VALUES ({', '.join('?' for _ in _ARTICLE_COLUMNS)}, ?, ?) "
        f"ON CONFLICT(article_url) DO UPDATE SET {updates}, "
        "updated_at = excluded.updated_at",
        (*values, now, now),
    )
    return "updated" if existed else "inserted"


def count_articles(conn: sqlite3.Connection) -> int:
    """Return the number of stored articles."""
    return conn.execute("SELECT COUNT(*) FROM articles").fetchone()[0]
