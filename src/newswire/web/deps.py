"""Read-only SQLite access for the articles API."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator


def readonly_uri(database_path: str) -> str:
    """Build a ``file:`` URI that opens ``database_path`` read-only.

    Going through Path.as_uri() percent-encodes characters such as ``?`` and
    ``#`` that would otherwise be read as URI syntax.
    """
    return Path(database_path).resolve().as_uri() + "?mode=ro"


@contextmanager
def get_readonly_connection(database_path: str) -> Generator[sqlite3.Connection, None, None]:
    """Open a read-only connection to the articles database.

    The ingestion runner may be writing at the same time, so reads wait on
    its locks instead of failing immediately. Closes on exit.
    """
    conn = sqlite3.connect(readonly_uri(database_path), uri=True, timeout=5.0)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA query_only=ON")
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()
