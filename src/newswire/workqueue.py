"""Deferred work queue: delayed continuations of a pagination walk."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.date import DateTrigger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContinuationRequest:
    """Describes "resume ingestion of ``source`` at ``next_page``" as plain data."""

    source: str
    next_page: int
    from_date: str
    delay_seconds: int

    @property
    def job_id(self) -> str:
        """One outstanding continuation per (source, from_date) walk."""
        return f"fetch:{self.source}:{self.from_date}"

    def to_message(self) -> dict[str, Any]:
        """The payload delivered back to the runner when the delay elapses."""
        return {"source": self.source, "page": self.next_page, "from_date": self.from_date}


class DeferredWorkQueue(ABC):
    """Runs a continuation no earlier than its delay after enqueue."""

    @abstractmethod
    def enqueue(self, request: ContinuationRequest) -> None:
        """Schedule the request. Must not block until it runs."""


class SchedulerWorkQueue(DeferredWorkQueue):
    """DeferredWorkQueue backed by an APScheduler scheduler and date triggers.

    The handler receives the continuation message as keyword arguments
    (``source``, ``page``, ``from_date``). It is bound after construction
    because the runner that handles continuations also enqueues them.
    """

    def __init__(
        self,
        scheduler: BaseScheduler,
        handler: Callable[..., Any] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._handler = handler

    def bind(self, handler: Callable[..., Any]) -> None:
        self._handler = handler

    def enqueue(self, request: ContinuationRequest) -> None:
        if self._handler is None:
            raise RuntimeError("SchedulerWorkQueue has no handler bound")
        run_date = datetime.now(timezone.utc) + timedelta(seconds=request.delay_seconds)
        self._scheduler.add_job(
            self._handler,
            trigger=DateTrigger(run_date=run_date),
            kwargs=request.to_message(),
            id=request.job_id,
            name=f"Fetch {request.source} page {request.next_page}",
            replace_existing=True,
            misfire_grace_time=None,
        )
        logger.debug(
            "Scheduled %s page %d at %s", request.source, request.next_page, run_date.isoformat()
        )
