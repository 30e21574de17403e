"""Ingestion pipeline: upstream fetching, normalization, and validation."""

from newswire.ingestion.guardian_adapter import GuardianAdapter
from newswire.ingestion.newsapi_adapter import NewsApiAdapter
from newswire.ingestion.nytimes_adapter import NYTimesAdapter
from newswire.ingestion.registry import register_adapter

register_adapter("newsapi", NewsApiAdapter)
register_adapter("guardian", GuardianAdapter)
register_adapter("nytimes", NYTimesAdapter)
