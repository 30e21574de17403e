"""Exception hierarchy for the ingestion pipeline.

Adapters raise, the ingestion runner catches: it is the one place where
failures are logged and turned into an exit status.
"""

from __future__ import annotations


class NewswireError(Exception):
    """Base exception for all newswire errors."""


class ConfigurationError(NewswireError):
    """Missing or invalid trigger input (e.g. an unconfigured source).

    Raised before any network call is attempted.
    """


class UnknownSourceError(ConfigurationError):
    """No adapter is registered under the requested source name."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"No adapter registered for source type '{source}'")


class UpstreamError(NewswireError):
    """An upstream news API call failed (non-2xx response or transport error)."""

    def __init__(
        self,
        source: str,
        detail: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        self.source = source
        self.status_code = status_code
        self.body = body
        super().__init__(f"Failed to fetch articles from {source}: {detail}")


class ValidationError(NewswireError):
    """A normalized article failed the storage constraints.

    Recovered locally: the article is logged and skipped.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Invalid article: {'; '.join(errors)}")
