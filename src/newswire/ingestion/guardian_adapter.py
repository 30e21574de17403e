"""Guardian source adapter: server-reported pages over a from/to date window."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from newswire.ingestion.adapter import SourceAdapter, dig, dig_str
from newswire.ingestion.article import ArticleRecord, PageResult
from newswire.ingestion.dates import is_iso8601, to_canonical

logger = logging.getLogger(__name__)

_GUARDIAN_URL = "https://content.guardianapis.com/search"
_PAGE_SIZE = 50
_SHOW_FIELDS = "standfirst,body,publication,byline,thumbnail"
_DEFAULT_WINDOW = timedelta(hours=1)


class GuardianAdapter(SourceAdapter):
    """Adapter for the Guardian Open Platform content search."""

    @property
    def name(self) -> str:
        return "guardian"

    def fetch_page(self, page: int, from_date: str = "", to_date: str = "") -> PageResult:
        data = self._get_json(_GUARDIAN_URL, self._build_params(page, from_date, to_date))

        results = dig(data, "response", "results") or []
        if not results:
            return PageResult.empty()

        records = [self.normalize(article) for article in results if isinstance(article, dict)]
        return PageResult(
            current_page=dig(data, "response", "currentPage"),
            total_pages=dig(data, "response", "pages"),
            records=records,
        )

    def _build_params(self, page: int, from_date: str, to_date: str) -> dict:
        now = datetime.now(timezone.utc)
        params = {
            "api-key": self._api_key,
            "from-date": (now - _DEFAULT_WINDOW).isoformat(timespec="seconds"),
            "to-date": now.isoformat(timespec="seconds"),
            "page": page,
            "page-size": _PAGE_SIZE,
            "show-fields": _SHOW_FIELDS,
        }
        # The window is only overridden as a pair of exact ISO 8601 timestamps
        if is_iso8601(from_date) and is_iso8601(to_date):
            params["from-date"] = from_date
            params["to-date"] = to_date
        elif from_date or to_date:
            logger.info(
                "Ignoring %s date window %r..%r; using the last %s",
                self.name, from_date, to_date, _DEFAULT_WINDOW,
            )
        return params

    def normalize(self, raw: dict) -> ArticleRecord:
        return ArticleRecord(
            title=dig_str(raw, "webTitle"),
            description=dig_str(raw, "fields", "standfirst"),
            content=dig_str(raw, "fields", "body"),
            source=dig_str(raw, "fields", "publication"),
            author=dig_str(raw, "fields", "byline"),
            image_url=dig_str(raw, "fields", "thumbnail"),
            article_url=dig_str(raw, "webUrl"),
            published_at=to_canonical(dig_str(raw, "webPublicationDate")),
            api_source=self.name,
        )
