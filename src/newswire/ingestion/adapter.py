"""Source adapter interface."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from newswire.errors import UpstreamError
from newswire.ingestion.article import ArticleRecord, PageResult

logger = logging.getLogger(__name__)

_MAX_ERROR_BODY = 500  # characters of upstream body kept in error messages


class SourceAdapter(ABC):
    """Abstract base class for news API adapters.

    Every adapter knows how to fetch one page from a specific upstream API
    and how to map that API's article shape onto ArticleRecord. The rest of
    the system is source-agnostic.
    """

    def __init__(self, api_key: str, timeout: float = 30) -> None:
        self._api_key = api_key
        self._timeout = timeout

    @property
    @abstractmethod
    def name(self) -> str:
        """Source name; also stamped on every record as api_source."""

    @abstractmethod
    def fetch_page(self, page: int, from_date: str = "") -> PageResult:
        """Fetch and normalize one page of articles.

        ``page`` is 1-based regardless of the upstream convention. Raises
        UpstreamError when the HTTP call does not succeed.
        """

    @abstractmethod
    def normalize(self, raw: dict) -> ArticleRecord:
        """Map one upstream article onto ArticleRecord. Never raises."""

    def _get_json(self, url: str, params: dict[str, Any]) -> dict:
        """GET url and return the decoded JSON body, or raise UpstreamError."""
        try:
            resp = httpx.get(url, params=params, timeout=self._timeout)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            body = exc.response.text[:_MAX_ERROR_BODY]
            raise UpstreamError(
                self.name, f"HTTP {status}: {body}", status_code=status, body=body
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(self.name, f"{type(exc).__name__}: {exc}") from exc

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamError(
                self.name,
                f"invalid JSON body: {resp.text[:_MAX_ERROR_BODY]}",
                status_code=resp.status_code,
            ) from exc
        if not isinstance(data, dict):
            raise UpstreamError(
                self.name, "unexpected response shape", status_code=resp.status_code
            )
        logger.debug("%s responded %d for page %s", self.name, resp.status_code, params.get("page"))
        return data


def dig(data: Any, *path: str | int) -> Any:
    """Follow a path of keys/indexes through nested JSON, returning None on any miss."""
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or len(current) <= key:
                return None
        elif not isinstance(current, dict):
            return None
        current = current[key] if isinstance(key, int) else current.get(key)
        if current is None:
            return None
    return current


def dig_str(data: Any, *path: str | int) -> str:
    """Like dig, but coerce the result to a string, with "" for missing values."""
    value = dig(data, *path)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
