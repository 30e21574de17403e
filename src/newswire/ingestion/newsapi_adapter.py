"""NewsAPI source adapter: 1-based page numbers, total computed from a result count."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone

from newswire.ingestion.adapter import SourceAdapter, dig_str
from newswire.ingestion.article import ArticleRecord, PageResult
from newswire.ingestion.dates import to_canonical

logger = logging.getLogger(__name__)

_NEWSAPI_URL = "https://newsapi.org/v2/everything"
_PAGE_SIZE = 50
_QUERY = "news"
# NewsAPI keeps taken-down articles in results with this placeholder title
_REMOVED_TITLE = "[Removed]"


class NewsApiAdapter(SourceAdapter):
    """Adapter for the NewsAPI ``/v2/everything`` endpoint."""

    @property
    def name(self) -> str:
        return "newsapi"

    def fetch_page(self, page: int, from_date: str = "") -> PageResult:
        data = self._get_json(_NEWSAPI_URL, self._build_params(page, from_date))

        articles = data.get("articles") or []
        if not articles:
            return PageResult.empty()

        records = [
            self.normalize(article)
            for article in articles
            if isinstance(article, dict) and article.get("title") != _REMOVED_TITLE
        ]
        removed = len(articles) - len(records)
        if removed:
            logger.info("Dropped %d removed article(s) from %s page %d", removed, self.name, page)

        total_results = data.get("totalResults")
        if not isinstance(total_results, int):
            total_results = 0
        return PageResult(
            current_page=page,
            total_pages=math.ceil(total_results / _PAGE_SIZE),
            records=records,
        )

    def _build_params(self, page: int, from_date: str) -> dict:
        params = {
            "apiKey": self._api_key,
            "q": _QUERY,
            "pageSize": _PAGE_SIZE,
            "page": page,
        }
        if from_date:
            params["from"] = from_date
        else:
            now = datetime.now(timezone.utc)
            params["from"] = (now - timedelta(hours=1)).isoformat(timespec="seconds")
            params["to"] = now.isoformat(timespec="seconds")
        return params

    def normalize(self, raw: dict) -> ArticleRecord:
        return ArticleRecord(
            title=dig_str(raw, "title"),
            description=dig_str(raw, "description"),
            content=dig_str(raw, "content"),
            source=dig_str(raw, "source", "name"),
            author=dig_str(raw, "author"),
            image_url=dig_str(raw, "urlToImage"),
            article_url=dig_str(raw, "url"),
            published_at=to_canonical(dig_str(raw, "publishedAt")),
            api_source=self.name,
        )
