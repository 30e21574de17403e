"""Canonical article record and the page envelope adapters return."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class ArticleRecord:
    """Flat, source-agnostic article as produced by an adapter.

    Optional upstream fields are empty strings, never None. ``source`` is
    the publisher reported upstream; ``api_source`` is the adapter that
    produced the record.
    """

    title: str
    description: str
    content: str
    source: str
    author: str
    image_url: str
    article_url: str
    published_at: str
    api_source: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class PageResult:
    """One fetched page, in 1-based canonical page numbers.

    Both page fields are None when upstream returned no results, which the
    runner treats as the end of the walk.
    """

    current_page: int | None
    total_pages: int | None
    records: list[ArticleRecord] = field(default_factory=list)

    @classmethod
    def empty(cls) -> PageResult:
        return cls(current_page=None, total_pages=None, records=[])

    @property
    def is_last_page(self) -> bool:
        if self.current_page is None or self.total_pages is None:
            return True
        return self.current_page >= self.total_pages
