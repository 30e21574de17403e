"""Storage constraints checked on every normalized article before upsert."""

from __future__ import annotations

from urllib.parse import urlsplit

from newswire.errors import ValidationError
from newswire.ingestion.article import ArticleRecord
from newswire.ingestion.dates import parse_timestamp

MAX_STRING_LENGTH = 255

_LENGTH_LIMITED_FIELDS = ("title", "source", "author", "api_source", "article_url")


def is_absolute_url(value: str) -> bool:
    """Return True for an absolute http(s) URL with a host and no whitespace."""
    if not value or any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def validate_article(
    record: ArticleRecord, inserted_urls: set[str] | frozenset[str] = frozenset()
) -> list[str]:
    """Validate a record against the article store constraints. Returns a list of errors.

    ``inserted_urls`` holds the URLs newly inserted earlier in the same
    batch; a URL that was already stored before the batch is an update and
    is not reported.
    """
    errors: list[str] = []
    if not record.title or not record.title.strip():
        errors.append("title is required and must be non-empty")
    for name in _LENGTH_LIMITED_FIELDS:
        value = getattr(record, name)
        if len(value) > MAX_STRING_LENGTH:
            errors.append(f"{name} must not exceed {MAX_STRING_LENGTH} characters")
    if not record.article_url:
        errors.append("article_url is required")
    elif not is_absolute_url(record.article_url):
        errors.append(f"article_url '{record.article_url}' is not a valid URL")
    elif record.article_url in inserted_urls:
        errors.append(f"article_url '{record.article_url}' appears twice in this batch")
    if not record.published_at:
        errors.append("published_at is required")
    elif parse_timestamp(record.published_at) is None:
        errors.append(f"published_at '{record.published_at}' is not a valid date")
    return errors


def check_article(
    record: ArticleRecord, inserted_urls: set[str] | frozenset[str] = frozenset()
) -> None:
    """Raise ValidationError if the record breaks any article store constraint."""
    errors = validate_article(record, inserted_urls)
    if errors:
        raise ValidationError(errors)
