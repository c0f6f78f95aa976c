"""
Extraction of structured values from untrusted AI responses.

Analyzer responses are free text with no enforced schema, so every parser
returns either ``Parsed(value)`` when the expected structure was found or
``Fallback(raw)`` carrying the raw response when it was not. Callers decide
what a fallback means for them instead of sniffing exceptions.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from plant_journal.errors import ParseError
from plant_journal.schemas import SpeciesSuggestion

T = TypeVar("T")

MAX_SUGGESTIONS = 5
MAX_SIMILAR_IMAGES = 2

_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)
_HEX_COLOR_RE = re.compile(r"#[0-9a-fA-F]{6}\b")


@dataclass(frozen=True)
class Parsed(Generic[T]):
    """A response that matched the expected structure."""

    value: T

    @property
    def is_fallback(self) -> bool:
        return False


@dataclass(frozen=True)
class Fallback:
    """A response that did not match; ``raw`` is what the analyzer returned."""

    raw: Any

    @property
    def is_fallback(self) -> bool:
        return True


def extract_json_object(text: str) -> dict[str, Any]:
    """
    Locate and decode the outermost JSON object inside ``text``.

    Raises:
        ParseError: No object found, or the span is not valid JSON.
    """
    match = _JSON_OBJECT_RE.search(text)
    if match is None:
        msg = "No JSON object in response"
        raise ParseError(msg)
    try:
        value = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        msg = f"Malformed JSON object in response: {exc}"
        raise ParseError(msg) from exc
    if not isinstance(value, dict):
        msg = "JSON value in response is not an object"
        raise ParseError(msg)
    return value


def parse_growth_stage(text: str) -> Parsed[str] | Fallback:
    """``{"stage": "..."}`` somewhere in the text, else the raw text."""
    raw = text.strip()
    try:
        stage = extract_json_object(raw).get("stage")
    except ParseError:
        return Fallback(raw)
    if not isinstance(stage, str) or not stage.strip():
        return Fallback(raw)
    return Parsed(stage.strip())


def parse_hex_color(text: str) -> Parsed[str] | Fallback:
    """First ``#RRGGBB`` token in the text, else the raw text."""
    raw = text.strip()
    match = _HEX_COLOR_RE.search(raw)
    if match is None:
        return Fallback(raw)
    return Parsed(match.group(0).upper())


def parse_weather_lines(text: str) -> Parsed[tuple[str, str]] | Fallback:
    """
    Split a weather response into (today, tomorrow).

    Blank lines are ignored. Fewer than two lines is a fallback carrying the
    whole stripped response.
    """
    lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
    if len(lines) < 2:
        return Fallback(text.strip())
    return Parsed((lines[0], lines[1]))


def parse_identification(payload: Any) -> Parsed[list[SpeciesSuggestion]] | Fallback:
    """
    Reduce a Plant.id identification payload to the top suggestions.

    Expects ``result.classification.suggestions`` as a list of objects with
    ``name`` and a 0-1 ``probability``. Anything else is a fallback carrying
    the payload untouched.
    """
    try:
        suggestions = payload["result"]["classification"]["suggestions"]
    except (KeyError, TypeError):
        return Fallback(payload)
    if not isinstance(suggestions, list):
        return Fallback(payload)

    ranked: list[SpeciesSuggestion] = []
    try:
        for i, item in enumerate(suggestions[:MAX_SUGGESTIONS]):
            similar = item.get("similar_images") or []
            ranked.append(
                SpeciesSuggestion(
                    rank=i + 1,
                    name=item["name"],
                    probability=round(float(item["probability"]) * 100),
                    similar_images=list(similar[:MAX_SIMILAR_IMAGES]),
                )
            )
    except (AttributeError, KeyError, TypeError, ValueError, ValidationError):
        return Fallback(payload)
    return Parsed(ranked)
