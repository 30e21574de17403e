"""Storage layer: SQLite database access and schema management."""

from newswire.storage.articles import upsert_article
from newswire.storage.connection import get_connection
from newswire.storage.schema import init_db

__all__ = ["get_connection", "init_db", "upsert_article"]
