"""Database schema definition and initialization."""

from __future__ import annotations

import logging

from newswire.storage.connection import get_connection

logger = logging.getLogger(__name__)

_SCHEMA_SQL = """\
-- Canonical articles, one row per article URL across all sources
CREATE TABLE IF NOT EXISTS articles (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    title           TEXT NOT NULL,
    description     TEXT,
    content         TEXT,
    source          TEXT NOT NULL,
    author          TEXT,
    image_url       TEXT,
    article_url     TEXT NOT NULL UNIQUE,
    published_at    TEXT NOT NULL,
    api_source      TEXT NOT NULL,
    created_at      TEXT NOT NULL,
    updated_at      TEXT NOT NULL
);

-- One row per ingestion runner invocation (one page of one source)
CREATE TABLE IF NOT EXISTS ingestion_runs (
    id          TEXT PRIMARY KEY,
    source      TEXT NOT NULL,
    page        INTEGER NOT NULL,
    from_date   TEXT NOT NULL,
    started_at  TEXT NOT NULL,
    finished_at TEXT NOT NULL,
    status      TEXT NOT NULL CHECK (status IN (
                    'completed', 'continuing', 'failed', 'skipped'
                )),
    result      TEXT NOT NULL,   -- JSON
    error       TEXT
);

-- Indexes: articles
CREATE INDEX IF NOT EXISTS idx_articles_published_at ON articles(published_at);
CREATE INDEX IF NOT EXISTS idx_articles_source ON articles(source);
CREATE INDEX IF NOT EXISTS idx_articles_author ON articles(author);
CREATE INDEX IF NOT EXISTS idx_articles_api_source ON articles(api_source);

-- Indexes: ingestion_runs
CREATE INDEX IF NOT EXISTS idx_ingestion_runs_started_at ON ingestion_runs(started_at);
CREATE INDEX IF NOT EXISTS idx_ingestion_runs_source ON ingestion_runs(source);
"""


def init_db(database_path: str) -> None:
    """Create all tables and indexes if they do not already exist."""
    with get_connection(database_path) as conn:
        conn.executescript(_SCHEMA_SQL)
    logger.info("Database initialized at %s", database_path)
