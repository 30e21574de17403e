"""Adapter registry: maps source names to adapter classes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from newswire.errors import UnknownSourceError

if TYPE_CHECKING:
    from newswire.config import Config
    from newswire.ingestion.adapter import SourceAdapter

_REGISTRY: dict[str, type[SourceAdapter]] = {}


def register_adapter(type_name: str, cls: type[SourceAdapter]) -> None:
    """Register an adapter class for a given source name."""
    _REGISTRY[type_name] = cls


def get_adapter_class(type_name: str) -> type[SourceAdapter] | None:
    """Look up an adapter class by source name. Returns None if not found."""
    return _REGISTRY.get(type_name)


def registered_types() -> list[str]:
    """Return a sorted list of all registered source names."""
    return sorted(_REGISTRY)


class AdapterFactory:
    """Builds configured adapter instances by source name."""

    def __init__(self, config: Config) -> None:
        self._config = config

    def create(self, source: str) -> SourceAdapter:
        """Return an adapter for ``source``. Raises UnknownSourceError if none is registered."""
        adapter_cls = get_adapter_class(source)
        if adapter_cls is None:
            raise UnknownSourceError(source)
        return adapter_cls(
            api_key=self._config.api_keys.get(source, ""),
            timeout=self._config.request_timeout_seconds,
        )
