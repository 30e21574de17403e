"""New York Times source adapter: 0-based pages of 10, offset/hits metadata."""

from __future__ import annotations

import math

from newswire.ingestion.adapter import SourceAdapter, dig, dig_str
from newswire.ingestion.article import ArticleRecord, PageResult
from newswire.ingestion.dates import to_canonical

_NYTIMES_URL = "https://api.nytimes.com/svc/search/v2/articlesearch.json"
_PAGE_SIZE = 10  # fixed by the Article Search API
_FIELDS = "headline,lead_paragraph,abstract,pub_date,source,byline,multimedia,web_url,print_page"


class NYTimesAdapter(SourceAdapter):
    """Adapter for the NYT Article Search API."""

    @property
    def name(self) -> str:
        return "nytimes"

    def fetch_page(self, page: int, from_date: str = "") -> PageResult:
        # Upstream pages start at 0
        data = self._get_json(_NYTIMES_URL, self._build_params(page - 1, from_date))

        docs = dig(data, "response", "docs") or []
        if not docs:
            return PageResult.empty()

        records = [self.normalize(doc) for doc in docs if isinstance(doc, dict)]
        offset = dig(data, "response", "meta", "offset") or 0
        hits = dig(data, "response", "meta", "hits") or 0
        return PageResult(
            current_page=math.ceil(offset / _PAGE_SIZE) + 1,
            total_pages=math.ceil(hits / _PAGE_SIZE),
            records=records,
        )

    def _build_params(self, upstream_page: int, from_date: str) -> dict:
        params = {
            "api-key": self._api_key,
            "fl": _FIELDS,
            "page": upstream_page,
        }
        if from_date:
            params["begin_date"] = from_date.replace("-", "")
        return params

    def normalize(self, raw: dict) -> ArticleRecord:
        return ArticleRecord(
            title=dig_str(raw, "headline", "main"),
            description=dig_str(raw, "lead_paragraph"),
            content=dig_str(raw, "abstract"),
            source=dig_str(raw, "source"),
            author=dig_str(raw, "byline", "original"),
            image_url=dig_str(raw, "multimedia", 0, "url"),
            article_url=dig_str(raw, "web_url"),
            published_at=to_canonical(dig_str(raw, "pub_date")),
            api_source=self.name,
        )
