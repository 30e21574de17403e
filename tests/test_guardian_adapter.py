"""Tests for newswire.ingestion.guardian_adapter: Guardian adapter."""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest

from newswire.errors import UpstreamError
from newswire.ingestion.guardian_adapter import GuardianAdapter

_URL = "https://content.guardianapis.com/search"


def _response(status_code=200, **kwargs):
    return httpx.Response(status_code, request=httpx.Request("GET", _URL), **kwargs)


def _make_result(n):
    return {
        "id": f"world/2024/mar/16/story-{n}",
        "webTitle": f"Guardian story {n}",
        "webUrl": f"https://www.theguardian.com/world/story-{n}",
        "webPublicationDate": "2024-03-16T09:00:00Z",
        "fields": {
            "standfirst": f"Standfirst {n}",
            "body": f"<p>Body {n}</p>",
            "publication": "The Guardian",
            "byline": "John Smith",
            "thumbnail": f"https://media.guim.co.uk/{n}.jpg",
        },
    }


def _payload(results, current_page=1, pages=1):
    return {
        "response": {
            "status": "ok",
            "currentPage": current_page,
            "pages": pages,
            "results": results,
        }
    }


class TestGuardianAdapter:
    def test_normalizes_results(self):
        with patch(
            "newswire.ingestion.adapter.httpx.get",
            return_value=_response(json=_payload([_make_result(1)])),
        ):
            result = GuardianAdapter(api_key="key").fetch_page(1)

        record = result.records[0]
        assert record.title == "Guardian story 1"
        assert record.description == "Standfirst 1"
        assert record.content == "<p>Body 1</p>"
        assert record.source == "The Guardian"
        assert record.author == "John Smith"
        assert record.image_url == "https://media.guim.co.uk/1.jpg"
        assert record.article_url == "https://www.theguardian.com/world/story-1"
        assert record.published_at == "2024-03-16 09:00:00"
        assert record.api_source == "guardian"

    def test_missing_fields_become_empty_strings(self):
        raw = _make_result(1)
        del raw["fields"]
        with patch(
            "newswire.ingestion.adapter.httpx.get",
            return_value=_response(json=_payload([raw])),
        ):
            record = GuardianAdapter(api_key="key").fetch_page(1).records[0]

        assert record.description == ""
        assert record.author == ""
        assert record.source == ""

    def test_pages_reported_by_server(self):
        with patch(
            "newswire.ingestion.adapter.httpx.get",
            return_value=_response(json=_payload([_make_result(1)], current_page=2, pages=5)),
        ):
            result = GuardianAdapter(api_key="key").fetch_page(2)

        assert result.current_page == 2
        assert result.total_pages == 5
        assert not result.is_last_page

    def test_empty_results_is_empty_page(self):
        with patch(
            "newswire.ingestion.adapter.httpx.get",
            return_value=_response(json=_payload([], current_page=1, pages=0)),
        ):
            result = GuardianAdapter(api_key="key").fetch_page(1)

        assert result.records == []
        assert result.is_last_page

    def test_valid_window_is_used(self):
        with patch(
            "newswire.ingestion.adapter.httpx.get",
            return_value=_response(json=_payload([])),
        ) as mock_get:
            GuardianAdapter(api_key="key").fetch_page(
                3, "2024-11-24T13:45:00+00:00", "2024-11-24T14:45:00+00:00"
            )

        params = mock_get.call_args.kwargs["params"]
        assert params["from-date"] == "2024-11-24T13:45:00+00:00"
        assert params["to-date"] == "2024-11-24T14:45:00+00:00"
        assert params["page"] == 3
        assert params["page-size"] == 50
        assert params["api-key"] == "key"

    def test_invalid_window_falls_back_to_last_hour(self):
        with patch(
            "newswire.ingestion.adapter.httpx.get",
            return_value=_response(json=_payload([])),
        ) as mock_get:
            with patch("newswire.ingestion.guardian_adapter.logger") as mock_logger:
                GuardianAdapter(api_key="key").fetch_page(1, "2024-03-15", "")

        params = mock_get.call_args.kwargs["params"]
        assert params["from-date"] != "2024-03-15"
        assert "T" in params["from-date"]
        mock_logger.info.assert_called_once()

    def test_forbidden_raises_upstream_error(self):
        with patch(
            "newswire.ingestion.adapter.httpx.get",
            return_value=_response(403, json={"message": "Unauthorized"}),
        ):
            with pytest.raises(UpstreamError) as exc_info:
                GuardianAdapter(api_key="bad").fetch_page(1)

        assert exc_info.value.status_code == 403
        assert "Failed to fetch articles from guardian: HTTP 403" in str(exc_info.value)
