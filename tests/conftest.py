"""Shared fixtures: a scripted analyzer and in-memory journals."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from plant_journal.analyzer import Analyzer
from plant_journal.orchestrator import AnalysisOrchestrator
from plant_journal.schemas import DayRecord, PlantIdentity
from plant_journal.store import ImageStore, InMemoryJournalStore

if TYPE_CHECKING:
    from pathlib import Path

PNG = b"\x89PNG\r\n\x1a\nfake-photo"
PREDICTED_PNG = b"\x89PNG\r\n\x1a\nfake-prediction"

IDENTITY = PlantIdentity(name="Sweet Basil", city="San Francisco", indoor_location="Kitchen window")


class FakeAnalyzer(Analyzer):
    """Analyzer returning canned responses and recording every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.responses: dict[str, Any] = {
            "describe": "Basil likes 21-27°C and 40-60% humidity.",
            "weather": "High 68°F, Low 52°F\nHigh 70°F, Low 54°F",
            "color": "#3A7D44",
            "leaf_count": " 12 \n",
            "infection_check": "Healthy - No infections detected",
            "growth_stage": 'Here you go: {"stage": "Vegetative"}',
            "predict_next": PREDICTED_PNG,
            "identify": {
                "result": {
                    "classification": {
                        "suggestions": [
                            {"name": "Ocimum basilicum", "probability": 0.9312},
                        ]
                    }
                }
            },
            "generate": "- Water lightly\n- Rotate the pot",
        }
        self.errors: dict[str, Exception] = {}

    def _answer(self, name: str, *args: Any) -> Any:
        self.calls.append((name, args))
        if name in self.errors:
            raise self.errors[name]
        return self.responses[name]

    @property
    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def describe(self, plant_name: str) -> str:
        return self._answer("describe", plant_name)

    def weather(self, city: str) -> str:
        return self._answer("weather", city)

    def color(self, image: bytes) -> str:
        return self._answer("color", image)

    def leaf_count(self, image: bytes) -> str:
        return self._answer("leaf_count", image)

    def infection_check(self, image: bytes, plant_name: str, day: int, about: str | None) -> str:
        return self._answer("infection_check", image, plant_name, day, about)

    def growth_stage(
        self, image: bytes, plant_name: str, day: int, leaf_count: str, plant_color: str
    ) -> str:
        return self._answer("growth_stage", image, plant_name, day, leaf_count, plant_color)

    def predict_next(self, image: bytes, plant_name: str, day: int) -> bytes | None:
        return self._answer("predict_next", image, plant_name, day)

    def identify(self, image: bytes) -> Any:
        return self._answer("identify", image)

    def generate(self, prompt: str) -> str:
        return self._answer("generate", prompt)


@pytest.fixture
def analyzer() -> FakeAnalyzer:
    return FakeAnalyzer()


@pytest.fixture
def store() -> InMemoryJournalStore:
    return InMemoryJournalStore()


@pytest.fixture
def images(tmp_path: Path) -> ImageStore:
    return ImageStore(tmp_path / "public")


@pytest.fixture
def orchestrator(
    store: InMemoryJournalStore, analyzer: FakeAnalyzer, images: ImageStore
) -> AnalysisOrchestrator:
    return AnalysisOrchestrator(store, analyzer, images)


@pytest.fixture
def journal(orchestrator: AnalysisOrchestrator) -> AnalysisOrchestrator:
    """Orchestrator over a journal on day 3, which has a photo."""
    orchestrator.save_day(IDENTITY, 3, feedback="New leaf today", image=PNG)
    return orchestrator


@pytest.fixture
def journal_no_photo(orchestrator: AnalysisOrchestrator) -> AnalysisOrchestrator:
    """Orchestrator over a journal on day 3 without a photo."""
    orchestrator.save_day(IDENTITY, 3)
    orchestrator.store.upsert_day(3, DayRecord(weather="old", leaf_count="7"))
    return orchestrator
