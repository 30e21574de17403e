"""Read-only query functions for the web API."""

from __future__ import annotations

import json

from newswire.web.deps import get_readonly_connection

_ARTICLE_FIELDS = (
    "id, title, description, content, source, author, image_url, "
    "article_url, published_at, api_source, created_at, updated_at"
)


# ---------------------------------------------------------------------------
# list_articles
# ---------------------------------------------------------------------------
def list_articles(
    database_path: str,
    *,
    filters: dict | None = None,
    page: int = 1,
    per_page: int = 10,
) -> tuple[list[dict], int]:
    """Return a paginated, filtered list of articles, newest published first."""
    filters = filters or {}
    offset = (page - 1) * per_page

    conditions: list[str] = []
    params: list[object] = []

    if filters.get("sources"):
        conditions.append(f"source IN ({', '.join('?' for _ in filters['sources'])})")
        params.extend(filters["sources"])

    if filters.get("authors"):
        conditions.append(f"author IN ({', '.join('?' for _ in filters['authors'])})")
        params.extend(filters["authors"])

    if "api_source" in filters:
        conditions.append("api_source = ?")
        params.append(filters["api_source"])

    if "date" in filters:
        conditions.append("substr(published_at, 1, 10) = ?")
        params.append(filters["date"])

    where_clause = ""
    if conditions:
        where_clause = "WHERE " + " AND ".join(conditions)

    with get_readonly_connection(database_path) as conn:
        total = conn.execute(
            f"SELECT COUNT(*) FROM articles {where_clause}", params  # noqa: S608
        ).fetchone()[0]

        rows = conn.execute(
            f"SELECT {_ARTICLE_FIELDS} FROM articles {where_clause} "  # noqa: S608
            "ORDER BY published_at DESC, id DESC LIMIT ? OFFSET ?",
            [*params, per_page, offset],
        ).fetchall()

    return [dict(r) for r in rows], total


# ---------------------------------------------------------------------------
# get_article_by_id
# ---------------------------------------------------------------------------
def get_article_by_id(database_path: str, article_id: int) -> dict | None:
    """Return a single article by its row id, or None."""
    with get_readonly_connection(database_path) as conn:
        row = conn.execute(
            f"SELECT {_ARTICLE_FIELDS} FROM articles WHERE id = ?",  # noqa: S608
            (article_id,),
        ).fetchone()
    return dict(row) if row is not None else None


# ---------------------------------------------------------------------------
# distinct publishers / authors
# ---------------------------------------------------------------------------
def list_distinct(database_path: str, column: str) -> list[str]:
    """Return the distinct non-empty values of ``source`` or ``author``."""
    if column not in ("source", "author"):
        raise ValueError(f"Unsupported column: {column}")
    with get_readonly_connection(database_path) as conn:
        rows = conn.execute(
            f"SELECT DISTINCT {column} FROM articles "  # noqa: S608
            f"WHERE {column} IS NOT NULL AND {column} != '' ORDER BY {column}"
        ).fetchall()
    return [r[0] for r in rows]


# ---------------------------------------------------------------------------
# list_ingestion_runs
# ---------------------------------------------------------------------------
def list_ingestion_runs(
    database_path: str,
    *,
    source: str | None = None,
    page: int = 1,
    per_page: int = 50,
) -> tuple[list[dict], int]:
    """Return a paginated list of ingestion runs, newest first."""
    offset = (page - 1) * per_page
    where_clause = "WHERE source = ?" if source else ""
    params: list[object] = [source] if source else []

    with get_readonly_connection(database_path) as conn:
        total = conn.execute(
            f"SELECT COUNT(*) FROM ingestion_runs {where_clause}", params  # noqa: S608
        ).fetchone()[0]
        rows = conn.execute(
            "SELECT id, source, page, from_date, started_at, finished_at, status, result, error "
            f"FROM ingestion_runs {where_clause} "  # noqa: S608
            "ORDER BY started_at DESC LIMIT ? OFFSET ?",
            [*params, per_page, offset],
        ).fetchall()

    runs = []
    for r in rows:
        run = dict(r)
        run["result"] = json.loads(r["result"])
        runs.append(run)
    return runs, total
