"""
Analysis orchestration.

``AnalysisOrchestrator`` exposes one operation per analysis kind. Each
operation reads the journal, fails fast on missing preconditions (no journal,
no photo for the current day) before any network call, asks the ``Analyzer``,
turns the untrusted response into a day patch and commits it through the
store in a single write.

Only two operations write outside the current day, and only through the
edges in ``propagation``: ``weather`` (tomorrow's forecast) and
``predict_image`` (the prediction back-reference).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from plant_journal import propagation
from plant_journal.analyzer import RemoteAnalyzer
from plant_journal.datasources.gemini import prompts
from plant_journal.errors import MissingImage, NoImageInResponse, NoPlant
from plant_journal.parsing import (
    Fallback,
    Parsed,
    parse_growth_stage,
    parse_hex_color,
    parse_identification,
    parse_weather_lines,
)
from plant_journal.propagation import JournalUpdate
from plant_journal.schemas import DayRecord, Plant, PlantIdentity, SpeciesSuggestion
from plant_journal.store import FileJournalStore, ImageStore, photo_ref, predicted_ref

if TYPE_CHECKING:
    from plant_journal.analyzer import Analyzer
    from plant_journal.config import Settings
    from plant_journal.store import JournalStore

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"

# Day fields included in the insights context, in display order.
INSIGHT_FIELDS = [
    ("Weather", "weather"),
    ("Leaf count", "leaf_count"),
    ("Plant color", "plant_color"),
    ("Growth stage", "growth_stage"),
    ("Infections", "infections"),
]


class AnalysisOrchestrator:
    """Runs analyses against the current day and merges results into the journal."""

    def __init__(self, store: JournalStore, analyzer: Analyzer, images: ImageStore) -> None:
        self.store = store
        self.analyzer = analyzer
        self.images = images

    @classmethod
    def from_settings(cls, settings: Settings) -> AnalysisOrchestrator:
        """Orchestrator over the JSON journal file and the remote analyzer."""
        return cls(
            FileJournalStore(Path(settings.data_file), initial_days=settings.initial_days),
            RemoteAnalyzer.from_settings(settings),
            ImageStore(Path(settings.media_dir)),
        )

    # -- helpers -------------------------------------------------------------

    def _plant(self) -> Plant:
        plant = self.store.get_plant()
        if plant is None:
            raise NoPlant
        return plant

    def _photo(self, plant: Plant) -> bytes:
        ref = plant.today.image
        if not ref:
            raise MissingImage(plant.current_day)
        return self.images.read(ref)

    def _commit(self, update: JournalUpdate) -> None:
        self.store.upsert_days(update.patches())

    # -- journal-level operations -------------------------------------------

    def save_day(
        self,
        identity: PlantIdentity,
        day: int,
        feedback: str | None = None,
        image: bytes | None = None,
    ) -> Plant:
        """
        Move the pointer to ``day`` and record the day's photo and feedback.

        Creates the journal on first use. ``None`` leaves the stored feedback
        or photo as it is.
        """
        self.store.set_current_day(day, identity)
        patch = DayRecord(feedback=feedback)
        if image is not None:
            patch.image = self.images.write(photo_ref(identity.name, day), image)
            logger.info("Stored photo for Day %d at %s", day, patch.image)
        self.store.upsert_day(day, patch)
        return self._plant()

    def reset(self) -> None:
        self.store.reset()
        logger.info("Journal cleared")

    def enhance_about(self) -> str:
        plant = self._plant()
        logger.info("Enhancing plant: %s", plant.name)
        about = self.analyzer.describe(plant.name)
        self.store.set_about(about)
        return about

    # -- current-day analyses -------------------------------------------------

    def weather(self) -> Parsed[tuple[str, str]] | Fallback:
        """
        Fetch today's and tomorrow's weather.

        Line 1 goes to the current day. Line 2, when present, overwrites the
        next day's weather whatever it held before.
        """
        plant = self._plant()
        day = plant.current_day
        logger.info("Getting weather for %s on Day %d", plant.city, day)
        outcome = parse_weather_lines(self.analyzer.weather(plant.city))

        update = JournalUpdate(day)
        if isinstance(outcome, Parsed):
            today, tomorrow = outcome.value
            update.patch = DayRecord(weather=today)
            update.add_edge(propagation.forward_weather(day, tomorrow))
        else:
            logger.warning("Weather for Day %d was not two lines; storing raw text", day)
            update.patch = DayRecord(weather=outcome.raw)
        self._commit(update)
        return outcome

    def color(self) -> Parsed[str] | Fallback:
        plant = self._plant()
        image = self._photo(plant)
        logger.info("Analyzing color for Day %d", plant.current_day)
        outcome = parse_hex_color(self.analyzer.color(image))
        value = outcome.value if isinstance(outcome, Parsed) else outcome.raw
        self._commit(JournalUpdate(plant.current_day, DayRecord(plant_color=value)))
        return outcome

    def leaf_count(self) -> str:
        plant = self._plant()
        image = self._photo(plant)
        logger.info("Counting leaves for Day %d", plant.current_day)
        count = self.analyzer.leaf_count(image).strip()
        self._commit(JournalUpdate(plant.current_day, DayRecord(leaf_count=count)))
        return count

    def infections(self) -> str:
        plant = self._plant()
        image = self._photo(plant)
        logger.info("Checking infections for %s on Day %d", plant.name, plant.current_day)
        text = self.analyzer.infection_check(image, plant.name, plant.current_day, plant.about)
        findings = text.strip() or prompts.HEALTHY
        self._commit(JournalUpdate(plant.current_day, DayRecord(infections=findings)))
        return findings

    def growth_stage(self) -> Parsed[str] | Fallback:
        plant = self._plant()
        image = self._photo(plant)
        today = plant.today
        logger.info("Analyzing growth stage for %s on Day %d", plant.name, plant.current_day)
        text = self.analyzer.growth_stage(
            image,
            plant.name,
            plant.current_day,
            today.leaf_count or UNKNOWN,
            today.plant_color or UNKNOWN,
        )
        outcome = parse_growth_stage(text)
        if isinstance(outcome, Parsed):
            stage = outcome.value
        else:
            logger.warning("Could not parse growth stage JSON, using raw text")
            stage = outcome.raw
        self._commit(JournalUpdate(plant.current_day, DayRecord(growth_stage=stage)))
        return outcome

    def predict_image(self) -> str:
        """
        Generate tomorrow's image from today's photo.

        Returns the stored artifact reference, which is written to today's
        ``predictedImage`` and tomorrow's ``predictedFromPrevious`` together.
        """
        plant = self._plant()
        image = self._photo(plant)
        day = plant.current_day
        logger.info("Generating predicted image for Day %d from Day %d", day + 1, day)
        generated = self.analyzer.predict_next(image, plant.name, day)
        if not generated:
            raise NoImageInResponse

        artifact = self.images.write(predicted_ref(plant.name, day + 1), generated)
        source_patch, edge = propagation.prediction(day, artifact)
        update = JournalUpdate(day, source_patch)
        update.add_edge(edge)
        self._commit(update)
        logger.info("Predicted image saved: %s", artifact)
        return artifact

    def identify(self) -> Parsed[list[SpeciesSuggestion]] | Fallback:
        """Ranked species guesses for today's photo. Nothing is persisted."""
        plant = self._plant()
        image = self._photo(plant)
        logger.info("Identifying plant on Day %d", plant.current_day)
        outcome = parse_identification(self.analyzer.identify(image))
        if isinstance(outcome, Fallback):
            logger.warning("Identification response had no suggestions")
        return outcome

    def insights(self) -> str:
        """Short care recommendations from today and yesterday. Nothing is persisted."""
        plant = self._plant()
        context = build_insight_context(plant)
        return self.analyzer.generate(context).strip()


def build_insight_context(plant: Plant) -> str:
    """Text summary of the current and previous day for the insights prompt."""
    day = plant.current_day
    lines = [f"Plant: {plant.name}"]
    if plant.indoor_location:
        lines.append(f"Location: {plant.indoor_location}, {plant.city}")
    for n in (day, day - 1):
        if n < 1:
            continue
        record = plant.day(n)
        lines.append("")
        lines.append(f"Day {n}:")
        for label, attr in INSIGHT_FIELDS:
            lines.append(f"- {label}: {getattr(record, attr) or UNKNOWN}")
    return prompts.insights("\n".join(lines))
