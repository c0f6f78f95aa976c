"""
HTTP plumbing shared by the journal control client and the analyzer clients.

Two kinds of traffic go through the one ``session``:
  - journal reads and archive weather fetches: GETs, retried on 429/5xx and
    connection errors with a growing backoff
  - analyzer calls (Gemini, Plant.id) and journal writes: POSTs, sent once;
    a failed analysis is reported, not repeated

Every request gets ``DEFAULT_TIMEOUT`` unless the caller passes one.
Analyzer calls pass the longer ``ANALYZER_TIMEOUT`` because image
generation and search-grounded prompts routinely take over a minute.

Usage::

    from plant_journal.services.http import post_json, session

    resp = session.get("http://localhost:3000/api/plant")
    resp.raise_for_status()

    body = post_json(GEMINI_URL, payload, service="gemini")
"""

from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from plant_journal import __version__
from plant_journal.errors import UpstreamError

USER_AGENT = f"plant-journal/{__version__}"

DEFAULT_TIMEOUT = 30.0  # seconds
ANALYZER_TIMEOUT = 120.0


def read_retry() -> Retry:
    """Retry policy for reads: GET/HEAD only, honouring ``Retry-After``."""
    return Retry(
        total=3,
        connect=3,
        read=2,
        backoff_factor=1.5,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset({"GET", "HEAD"}),
        respect_retry_after_header=True,
        raise_on_status=False,
    )


class JournalSession(requests.Session):
    """``requests.Session`` that fills in a timeout when the caller gives none."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        super().__init__()
        self.timeout = timeout

    def request(self, method: str | bytes, url: str | bytes, **kwargs: Any) -> requests.Response:  # type: ignore[override]
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().request(method, url, **kwargs)


def create_session(retry: Retry | None = None, timeout: float = DEFAULT_TIMEOUT) -> JournalSession:
    s = JournalSession(timeout)
    adapter = HTTPAdapter(max_retries=retry if retry is not None else read_retry())
    for prefix in ("http://", "https://"):
        s.mount(prefix, adapter)
    s.headers["User-Agent"] = USER_AGENT
    return s


session: JournalSession = create_session()


def error_message(resp: requests.Response) -> str:
    """Best-effort error text from a JSON error body (``{"error": ...}``)."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text.strip() or resp.reason or "Request failed"
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            return str(error.get("message") or error)
        if error:
            return str(error)
    return resp.reason or "Request failed"


def post_json(
    url: str,
    payload: dict[str, Any],
    *,
    service: str,
    headers: dict[str, str] | None = None,
    http: requests.Session | None = None,
    timeout: float = ANALYZER_TIMEOUT,
) -> dict[str, Any]:
    """
    POST ``payload`` and decode the JSON response.

    Raises:
        UpstreamError: Transport failure, non-2xx status, a non-JSON body,
            or a body carrying an ``error`` object.
    """
    client = http or session
    try:
        resp = client.post(url, json=payload, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        msg = f"{service} request failed: {exc}"
        raise UpstreamError(msg) from exc

    if not resp.ok:
        raise UpstreamError(f"{service}: {error_message(resp)}", status_code=resp.status_code)

    try:
        body = resp.json()
    except ValueError as exc:
        msg = f"{service} returned a non-JSON response"
        raise UpstreamError(msg, status_code=resp.status_code) from exc

    if isinstance(body, dict) and body.get("error"):
        raise UpstreamError(f"{service}: {error_message(resp)}", status_code=resp.status_code)
    if not isinstance(body, dict):
        msg = f"{service} returned an unexpected JSON payload"
        raise UpstreamError(msg, status_code=resp.status_code)
    return body
