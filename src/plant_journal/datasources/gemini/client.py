"""Gemini ``generateContent`` REST client.

API docs: https://ai.google.dev/api/generate-content

Requests are built from parts (text and inline images); responses are read
tolerantly because the model may omit candidates or parts entirely.
"""

from __future__ import annotations

import base64
from typing import Any

from plant_journal.errors import UpstreamError
from plant_journal.services.http import post_json

GEMINI_API = "https://generativelanguage.googleapis.com/v1beta/models"

#: Enables grounding with Google Search for prompts that need fresh facts.
GOOGLE_SEARCH_TOOL: dict[str, Any] = {"google_search": {}}

IMAGE_MIME_TYPE = "image/png"


def text_part(text: str) -> dict[str, Any]:
    return {"text": text}


def image_part(data: bytes, mime_type: str = IMAGE_MIME_TYPE) -> dict[str, Any]:
    return {
        "inline_data": {
            "mime_type": mime_type,
            "data": base64.b64encode(data).decode("ascii"),
        }
    }


def generate_content(
    model: str,
    parts: list[dict[str, Any]],
    api_key: str,
    *,
    tools: list[dict[str, Any]] | None = None,
    generation_config: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Call ``models/{model}:generateContent`` with a single user turn.

    Returns:
        Raw response dict (``candidates`` etc).

    Raises:
        UpstreamError: HTTP failure or an ``error`` object in the response.
    """
    payload: dict[str, Any] = {"contents": [{"parts": parts}]}
    if tools:
        payload["tools"] = tools
    if generation_config:
        payload["generationConfig"] = generation_config

    return post_json(
        f"{GEMINI_API}/{model}:generateContent",
        payload,
        service="gemini",
        headers={"x-goog-api-key": api_key},
    )


def _parts(response: dict[str, Any]) -> list[dict[str, Any]]:
    candidates = response.get("candidates") or []
    if not candidates:
        return []
    content = candidates[0].get("content") or {}
    return content.get("parts") or []


def response_text(response: dict[str, Any]) -> str:
    """Text of the first candidate's first text part."""
    for part in _parts(response):
        text = part.get("text")
        if isinstance(text, str):
            return text
    msg = "gemini: response has no text"
    raise UpstreamError(msg)


def response_image(response: dict[str, Any]) -> bytes | None:
    """Decoded bytes of the first inline image part, or None."""
    for part in _parts(response):
        inline = part.get("inlineData") or part.get("inline_data")
        if inline and inline.get("data"):
            return base64.b64decode(inline["data"])
    return None
