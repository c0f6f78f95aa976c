"""Plant.id (Kindwise) identification API client.

API docs: https://plant.id/docs
"""

from __future__ import annotations

import base64
from typing import Any

import requests

from plant_journal.errors import UpstreamError
from plant_journal.services import http

PLANT_ID_API = "https://plant.id/api/v3/identification"


def identify(image: bytes, api_key: str, *, similar_images: bool = True) -> Any:
    """
    Submit one PNG photo for species identification.

    Any JSON reply is returned as-is, error bodies and non-2xx statuses
    included; suggestions live under ``result.classification.suggestions``
    when identification worked.

    Raises:
        UpstreamError: Transport failure, or a reply that is not JSON.
    """
    encoded = base64.b64encode(image).decode("ascii")
    payload = {
        "images": [f"data:image/png;base64,{encoded}"],
        "similar_images": similar_images,
    }
    try:
        resp = http.session.post(
            PLANT_ID_API, json=payload, headers={"Api-Key": api_key}, timeout=http.ANALYZER_TIMEOUT
        )
    except requests.RequestException as exc:
        msg = f"plant.id request failed: {exc}"
        raise UpstreamError(msg) from exc

    try:
        return resp.json()
    except ValueError as exc:
        msg = f"plant.id: {http.error_message(resp)}"
        raise UpstreamError(msg, status_code=resp.status_code) from exc
