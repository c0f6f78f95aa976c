"""
Analyzer capability.

The orchestrator only sees the abstract ``Analyzer``: plain text and image
bytes in, untrusted text (or image bytes) out. ``RemoteAnalyzer`` implements
it on top of Gemini and Plant.id. Every method raises ``UpstreamError`` when
the remote call fails; none of them interpret the response beyond pulling the
text or image out of the API envelope.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from plant_journal.datasources import gemini, plantid
from plant_journal.datasources.gemini import prompts

if TYPE_CHECKING:
    from plant_journal.config import Settings

logger = logging.getLogger(__name__)


class Analyzer(ABC):
    """External AI analysis operations consumed by the orchestrator."""

    @abstractmethod
    def describe(self, plant_name: str) -> str:
        """Free-text description and care notes for a plant."""

    @abstractmethod
    def weather(self, city: str) -> str:
        """Today's and tomorrow's weather, ideally one line each."""

    @abstractmethod
    def color(self, image: bytes) -> str:
        """Average plant color, ideally ``#RRGGBB``."""

    @abstractmethod
    def leaf_count(self, image: bytes) -> str:
        """Visible leaf count, ideally a bare number."""

    @abstractmethod
    def infection_check(self, image: bytes, plant_name: str, day: int, about: str | None) -> str:
        """Disease/pest findings, or a healthy sentinel."""

    @abstractmethod
    def growth_stage(
        self, image: bytes, plant_name: str, day: int, leaf_count: str, plant_color: str
    ) -> str:
        """Growth stage, ideally ``{"stage": "..."}`` somewhere in the text."""

    @abstractmethod
    def predict_next(self, image: bytes, plant_name: str, day: int) -> bytes | None:
        """Generated image of the plant one day later, or None if none came back."""

    @abstractmethod
    def identify(self, image: bytes) -> Any:
        """Raw identification reply, error bodies included; raises only on transport failure."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Free-form text generation."""


class RemoteAnalyzer(Analyzer):
    """Analyzer backed by the Gemini and Plant.id REST APIs."""

    def __init__(
        self,
        gemini_api_key: str,
        plantid_api_key: str = "",
        *,
        text_model: str = "gemini-2.0-flash-lite-001",
        vision_model: str = "gemini-2.5-pro",
        image_model: str = "gemini-3-pro-image-preview",
    ) -> None:
        self.gemini_api_key = gemini_api_key
        self.plantid_api_key = plantid_api_key
        self.text_model = text_model
        self.vision_model = vision_model
        self.image_model = image_model

    @classmethod
    def from_settings(cls, settings: Settings) -> RemoteAnalyzer:
        return cls(
            settings.gemini_api_key,
            settings.plantid_api_key,
            text_model=settings.gemini_text_model,
            vision_model=settings.gemini_vision_model,
            image_model=settings.gemini_image_model,
        )

    def _text(self, model: str, parts: list[dict[str, Any]], *, search: bool = False) -> str:
        response = gemini.generate_content(
            model,
            parts,
            self.gemini_api_key,
            tools=[gemini.GOOGLE_SEARCH_TOOL] if search else None,
        )
        return gemini.response_text(response)

    def _vision(self, prompt: str, image: bytes, *, search: bool = False) -> str:
        parts = [gemini.text_part(prompt), gemini.image_part(image)]
        return self._text(self.vision_model, parts, search=search)

    def describe(self, plant_name: str) -> str:
        return self._text(self.text_model, [gemini.text_part(prompts.describe(plant_name))], search=True)

    def weather(self, city: str) -> str:
        return self._text(self.text_model, [gemini.text_part(prompts.weather(city))], search=True)

    def color(self, image: bytes) -> str:
        return self._vision(prompts.COLOR, image)

    def leaf_count(self, image: bytes) -> str:
        return self._vision(prompts.LEAF_COUNT, image)

    def infection_check(self, image: bytes, plant_name: str, day: int, about: str | None) -> str:
        return self._vision(prompts.infections(plant_name, day, about), image)

    def growth_stage(
        self, image: bytes, plant_name: str, day: int, leaf_count: str, plant_color: str
    ) -> str:
        prompt = prompts.growth_stage(plant_name, day, leaf_count, plant_color)
        return self._vision(prompt, image, search=True)

    def predict_next(self, image: bytes, plant_name: str, day: int) -> bytes | None:
        response = gemini.generate_content(
            self.image_model,
            [gemini.text_part(prompts.predict_next(plant_name, day)), gemini.image_part(image)],
            self.gemini_api_key,
            generation_config={"responseModalities": ["image"], "temperature": 0.4},
        )
        logger.debug("Prediction response keys: %s", sorted(response))
        return gemini.response_image(response)

    def identify(self, image: bytes) -> Any:
        return plantid.identify(image, self.plantid_api_key)

    def generate(self, prompt: str) -> str:
        return self._text(self.text_model, [gemini.text_part(prompt)])
