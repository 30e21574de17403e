"""Ingestion runner: one page of one source per invocation.

An invocation fetches a page, validates and upserts its articles, and either
finishes the walk or hands a ContinuationRequest for the next page to the
deferred work queue. Continuations re-enter ``IngestionRunner.run`` as
independent invocations; nothing here loops or recurses across pages.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from newswire.config import Config
from newswire.errors import ConfigurationError, UpstreamError
from newswire.ingestion.article import PageResult
from newswire.ingestion.registry import AdapterFactory
from newswire.ingestion.validate import validate_article
from newswire.storage.articles import upsert_article
from newswire.storage.connection import get_connection
from newswire.workqueue import ContinuationRequest, DeferredWorkQueue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunOutcome:
    """Result of one runner invocation."""

    status: str  # "completed", "continuing", "failed" or "skipped"
    source: str
    page: int
    from_date: str
    stored: int = 0
    rejected: int = 0
    continuation: ContinuationRequest | None = None
    error: str | None = None

    @property
    def exit_code(self) -> int:
        return 1 if self.status == "failed" else 0


def default_from_date(now: datetime | None = None) -> str:
    """Yesterday's date (UTC) as YYYY-MM-DD."""
    now = now or datetime.now(timezone.utc)
    return (now - timedelta(days=1)).date().isoformat()


class IngestionRunner:
    """Drives the per-page ingestion state machine for every configured source."""

    def __init__(
        self,
        config: Config,
        factory: AdapterFactory,
        work_queue: DeferredWorkQueue,
        log: Any = None,
    ) -> None:
        self._config = config
        self._factory = factory
        self._work_queue = work_queue
        self._log = log
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def run(
        self,
        source: str | None,
        page: int = 1,
        from_date: str | None = None,
        delay_seconds: int | None = None,
    ) -> RunOutcome:
        """Ingest one page of ``source`` and schedule the next page if there is one."""
        source = (source or "").strip()
        from_date = from_date or default_from_date()
        delay = self._config.page_delay_seconds if delay_seconds is None else delay_seconds

        try:
            self._check_inputs(source, page, delay)
        except ConfigurationError as exc:
            self._logger.error("%s", exc)
            return RunOutcome("failed", source, page, from_date, error=str(exc))

        started_at = datetime.now(timezone.utc).isoformat()
        lock = self._lock_for(source)
        if not lock.acquire(blocking=False):
            self._logger.warning(
                "Ingestion for %s is already running; skipping page %d", source, page
            )
            outcome = RunOutcome("skipped", source, page, from_date)
            self._record_run(outcome, started_at)
            return outcome

        try:
            outcome = self._run_page(source, page, from_date, delay)
        finally:
            lock.release()
        self._record_run(outcome, started_at)
        return outcome

    def _check_inputs(self, source: str, page: int, delay: int) -> None:
        if not source:
            raise ConfigurationError("The --source option is required.")
        allowed = self._config.configured_sources
        if source not in allowed:
            raise ConfigurationError(
                "Invalid source: The --source can only contain one of these values: "
                + ", ".join(allowed)
            )
        if page < 1:
            raise ConfigurationError(f"Invalid page {page}: pages start at 1")
        if delay < 0:
            raise ConfigurationError(f"Invalid delay {delay}: must not be negative")

    @property
    def _logger(self) -> Any:
        return self._log if self._log is not None else logger

    def _lock_for(self, source: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(source, threading.Lock())

    def _run_page(self, source: str, page: int, from_date: str, delay: int) -> RunOutcome:
        self._logger.info("Fetching articles from %s...", source)
        try:
            adapter = self._factory.create(source)
            result = adapter.fetch_page(page, from_date)
        except (ConfigurationError, UpstreamError) as exc:
            self._logger.error("Error fetching articles: %s", exc)
            return RunOutcome("failed", source, page, from_date, error=str(exc))

        if not result.records:
            self._logger.info("No articles found on page %d. Fetching completed.", page)
            return RunOutcome("completed", source, page, from_date)

        self._logger.info("Processing articles...")
        try:
            stored, rejected = self._store_records(result)
        except sqlite3.Error as exc:
            self._logger.error("Error saving articles: %s", exc)
            return RunOutcome("failed", source, page, from_date, error=str(exc))
        self._logger.info(
            "Page %d has been processed. Articles have been saved successfully.", page
        )

        if result.is_last_page:
            self._logger.info("All done for today! Fetching completed for %s.", source)
            return RunOutcome("completed", source, page, from_date, stored, rejected)

        request = ContinuationRequest(
            source=source, next_page=page + 1, from_date=from_date, delay_seconds=delay
        )
        self._logger.info("Fetching next page...")
        self._work_queue.enqueue(request)
        self._logger.info(
            "Next page:%d is dispatched and will be executed in %d seconds.",
            request.next_page,
            request.delay_seconds,
        )
        return RunOutcome(
            "continuing", source, page, from_date, stored, rejected, continuation=request
        )

    def _store_records(self, result: PageResult) -> tuple[int, int]:
        """Validate and upsert each record in upstream order. Returns (stored, rejected)."""
        stored = 0
        rejected = 0
        inserted_urls: set[str] = set()
        with get_connection(self._config.database_path) as conn:
            for record in result.records:
                errors = validate_article(record, inserted_urls)
                if errors:
                    rejected += 1
                    self._logger.error(
                        "Skipping invalid article (%s): %s",
                        "; ".join(errors),
                        json.dumps(record.to_dict(), ensure_ascii=False),
                    )
                    continue
                if upsert_article(conn, record) == "inserted":
                    inserted_urls.add(record.article_url)
                stored += 1
        return stored, rejected

    def _record_run(self, outcome: RunOutcome, started_at: str) -> None:
        """Insert an ingestion run record into the ingestion_runs table."""
        finished_at = datetime.now(timezone.utc).isoformat()
        result = {
            "stored": outcome.stored,
            "rejected": outcome.rejected,
            "next_page": outcome.continuation.next_page if outcome.continuation else None,
        }
        with get_connection(self._config.database_path) as conn:
            conn.execute(
                "INSERT INTO ingestion_runs "
                "(id, source, page, from_date, started_at, finished_at, status, result, error) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    str(uuid.uuid4()),
                    outcome.source,
                    outcome.page,
                    outcome.from_date,
                    started_at,
                    finished_at,
                    outcome.status,
                    json.dumps(result),
                    outcome.error,
                ),
            )
