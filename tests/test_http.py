"""Tests for the shared HTTP session and JSON POST helper."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from plant_journal.errors import UpstreamError
from plant_journal.services.http import (
    ANALYZER_TIMEOUT,
    DEFAULT_TIMEOUT,
    JournalSession,
    create_session,
    error_message,
    post_json,
    session,
)


class TestSession:
    """Retry and timeout behaviour of the shared session."""

    @pytest.mark.parametrize("url", ["http://localhost:3000/api/plant", "https://plant.id/api"])
    def test_reads_retried_writes_not(self, url: str) -> None:
        retry = session.get_adapter(url).max_retries
        assert retry.is_retry("GET", 503)
        assert retry.is_retry("GET", 429)
        assert not retry.is_retry("POST", 503)
        assert not retry.is_retry("GET", 404)

    def test_identifies_itself(self) -> None:
        assert session.headers["User-Agent"].startswith("plant-journal/")

    @pytest.mark.parametrize(("passed", "sent"), [(None, 7.5), (99, 99)])
    def test_default_timeout(self, passed: float | None, sent: float) -> None:
        s = create_session(timeout=7.5)
        with patch.object(requests.Session, "request", return_value=requests.Response()) as mock_request:
            s.get("http://localhost:3000/api/plant", timeout=passed)
        assert mock_request.call_args.kwargs["timeout"] == sent

    def test_module_session(self) -> None:
        assert isinstance(session, JournalSession)
        assert session.timeout == DEFAULT_TIMEOUT

def fake_response(status: int, body: object = None, *, json_error: bool = False) -> MagicMock:
    resp = MagicMock()
    resp.ok = status < 400
    resp.status_code = status
    resp.reason = "OK" if status < 400 else "Service Unavailable"
    resp.text = "" if body is None else str(body)
    if json_error:
        resp.json.side_effect = ValueError("not json")
    else:
        resp.json.return_value = body
    return resp


class TestErrorMessage:
    """Extracting error text from responses."""

    def test_string_error(self) -> None:
        assert error_message(fake_response(400, {"error": "Plant name is required"})) == (
            "Plant name is required"
        )

    def test_nested_error(self) -> None:
        body = {"error": {"code": 429, "message": "Resource exhausted"}}
        assert error_message(fake_response(429, body)) == "Resource exhausted"

    def test_non_json_uses_reason(self) -> None:
        assert error_message(fake_response(503, json_error=True)) == "Service Unavailable"


class TestPostJson:
    """POST helper used by the analysis clients."""

    def test_returns_body(self) -> None:
        http = MagicMock()
        http.post.return_value = fake_response(200, {"candidates": []})
        body = post_json("https://api", {"a": 1}, service="gemini", headers={"k": "v"}, http=http)
        assert body == {"candidates": []}
        http.post.assert_called_once_with(
            "https://api", json={"a": 1}, headers={"k": "v"}, timeout=ANALYZER_TIMEOUT
        )

    def test_transport_error(self) -> None:
        http = MagicMock()
        http.post.side_effect = requests.ConnectionError("reset")
        with pytest.raises(UpstreamError, match="gemini request failed"):
            post_json("https://api", {}, service="gemini", http=http)

    def test_http_status(self) -> None:
        http = MagicMock()
        http.post.return_value = fake_response(503, {"error": {"message": "overloaded"}})
        with pytest.raises(UpstreamError, match="overloaded") as excinfo:
            post_json("https://api", {}, service="gemini", http=http)
        assert excinfo.value.status_code == 503

    def test_error_in_ok_body(self) -> None:
        http = MagicMock()
        http.post.return_value = fake_response(200, {"error": "quota"})
        with pytest.raises(UpstreamError, match="plant.id: quota"):
            post_json("https://api", {}, service="plant.id", http=http)

    def test_non_json(self) -> None:
        http = MagicMock()
        http.post.return_value = fake_response(200, "<html>", json_error=True)
        with pytest.raises(UpstreamError, match="non-JSON"):
            post_json("https://api", {}, service="gemini", http=http)

    def test_non_object(self) -> None:
        http = MagicMock()
        http.post.return_value = fake_response(200, ["a"])
        with pytest.raises(UpstreamError, match="unexpected JSON payload"):
            post_json("https://api", {}, service="gemini", http=http)

    def test_custom_timeout(self) -> None:
        http = MagicMock()
        http.post.return_value = fake_response(200, {})
        post_json("https://api", {}, service="gemini", http=http, timeout=5)
        assert http.post.call_args.kwargs["timeout"] == 5
