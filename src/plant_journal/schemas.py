"""
Domain models for the plant journal.

Pydantic models for the persisted journal document and the values handed
around by the orchestrator. The persisted layout uses camelCase keys and
``"day<N>"`` day keys::

    {"name": ..., "city": ..., "indoorLocation": ..., "about": ...,
     "currentDay": 3, "days": {"day1": {...}, "day2": {...}}}
"""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

DAY_KEY_PREFIX = "day"
_DAY_KEY_RE = re.compile(rf"^{DAY_KEY_PREFIX}(\d+)$")


def day_key(day: int) -> str:
    """Document key for a day number (``3`` -> ``"day3"``)."""
    if day < 1:
        msg = f"Day numbers start at 1, got {day}"
        raise ValueError(msg)
    return f"{DAY_KEY_PREFIX}{day}"


def parse_day_key(key: str) -> int:
    """Day number for a document key (``"day3"`` -> ``3``)."""
    match = _DAY_KEY_RE.match(key)
    if match is None or int(match.group(1)) < 1:
        msg = f"Not a day key: {key!r}"
        raise ValueError(msg)
    return int(match.group(1))


def parse_day_label(label: str | int) -> int:
    """
    Day number from a free-form label such as ``"Day 14"``.

    All digits in the label are joined; labels without a positive number
    fall back to day 1.
    """
    if isinstance(label, int):
        return label if label > 0 else 1
    digits = re.sub(r"\D", "", label)
    day = int(digits) if digits else 0
    return day if day > 0 else 1


# =============================================================================
# Enums
# =============================================================================


class Operation(StrEnum):
    """Analysis operations exposed by the orchestrator's control surface."""

    ENHANCE = "enhance"
    WEATHER = "weather"
    COLOR = "color"
    LEAF_COUNT = "leafcount"
    INFECTIONS = "infections"
    GROWTH = "growth"
    PREDICT = "predict"
    IDENTIFY = "identify"
    INSIGHTS = "insights"

    @property
    def requires_image(self) -> bool:
        """Whether the operation needs a photo on the current day."""
        return self not in (Operation.ENHANCE, Operation.WEATHER, Operation.INSIGHTS)


class GrowthStage(StrEnum):
    """Stages offered to the classifier. Stored values are not validated against these."""

    SEEDLING = "Seedling"
    EARLY_VEGETATIVE = "Early Vegetative"
    VEGETATIVE = "Vegetative"
    FLOWERING = "Flowering"
    FRUITING = "Fruiting"
    MATURE = "Mature"


# =============================================================================
# Journal document
# =============================================================================


class DayRecord(BaseModel):
    """Per-day bag of raw and derived fields. Every field is optional."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    image: str | None = None
    feedback: str | None = None
    weather: str | None = None
    plant_color: str | None = None
    leaf_count: str | None = None
    infections: str | None = None
    growth_stage: str | None = None
    predicted_image: str | None = None
    predicted_from_previous: str | None = None
    derives_into: int | None = None
    derived_from: int | None = None

    @field_validator("leaf_count", mode="before")
    @classmethod
    def _leaf_count_as_text(cls, value: Any) -> Any:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value

    def merged(self, patch: DayRecord) -> DayRecord:
        """Copy of this record with the non-null fields of ``patch`` applied."""
        return self.model_copy(update=patch.model_dump(exclude_none=True))

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class PlantIdentity(BaseModel):
    """Identity fields sent with every set-current-day call."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    city: str = ""
    indoor_location: str = ""


class Plant(BaseModel):
    """Singleton journal root. Unknown top-level keys are kept on round trip."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    name: str
    city: str = ""
    indoor_location: str = ""
    about: str | None = None
    current_day: int = Field(default=1, ge=1)
    days: dict[int, DayRecord] = Field(default_factory=dict)

    @field_validator("days", mode="before")
    @classmethod
    def _parse_day_keys(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {parse_day_key(k) if isinstance(k, str) else k: v for k, v in value.items()}

    @field_serializer("days")
    def _serialize_days(self, days: dict[int, DayRecord]) -> dict[str, Any]:
        return {day_key(n): record.to_document() for n, record in days.items()}

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Plant:
        return cls.model_validate(document)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    @property
    def identity(self) -> PlantIdentity:
        return PlantIdentity(name=self.name, city=self.city, indoor_location=self.indoor_location)

    def day(self, day: int) -> DayRecord:
        """Record for ``day``; an empty record when the day was never written."""
        return self.days.get(day, DayRecord())

    @property
    def today(self) -> DayRecord:
        return self.day(self.current_day)


# =============================================================================
# Analysis values
# =============================================================================


class SpeciesSuggestion(BaseModel):
    """One ranked species guess from identification."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    rank: int = Field(..., ge=1)
    name: str
    probability: int = Field(..., ge=0, le=100, description="Percent, rounded")
    similar_images: list[dict[str, Any]] = Field(default_factory=list, max_length=2)


class Result(BaseModel):
    """Generic result wrapper for control-surface operations."""

    success: bool
    message: str = ""
    data: dict[str, Any] | None = None
    error: str | None = None
