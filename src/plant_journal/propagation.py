"""
Cross-day propagation edges.

An operation running on day N may only touch day N, except through one of
the sanctioned edges below, both of which point from N to N+1:

  - forward-weather: tomorrow's forecast line lands in ``days[N+1].weather``
  - prediction: the image generated from day N's photo is referenced from
    ``days[N+1].predictedFromPrevious``

A ``JournalUpdate`` bundles the current-day patch with its edges so the store
writes every affected day in one read-modify-write.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from plant_journal.schemas import DayRecord


class EdgeKind(StrEnum):
    FORWARD_WEATHER = "forward-weather"
    PREDICTION = "prediction"


@dataclass(frozen=True)
class PropagationEdge:
    """A write from ``source_day`` into the next day's record."""

    kind: EdgeKind
    source_day: int
    target_day: int
    patch: DayRecord

    def __post_init__(self) -> None:
        if self.target_day != self.source_day + 1:
            msg = (
                f"{self.kind} edge must target the next day "
                f"(source {self.source_day}, target {self.target_day})"
            )
            raise ValueError(msg)


def forward_weather(day: int, tomorrow: str) -> PropagationEdge:
    """Edge carrying tomorrow's forecast from ``day`` into ``day + 1``."""
    return PropagationEdge(
        kind=EdgeKind.FORWARD_WEATHER,
        source_day=day,
        target_day=day + 1,
        patch=DayRecord(weather=tomorrow),
    )


def prediction(day: int, artifact: str) -> tuple[DayRecord, PropagationEdge]:
    """
    Both ends of a prediction derived from ``day``'s photo.

    Returns the patch for ``day`` itself and the edge into ``day + 1``; both
    reference the same ``artifact``.
    """
    source = DayRecord(predicted_image=artifact, derives_into=day + 1)
    edge = PropagationEdge(
        kind=EdgeKind.PREDICTION,
        source_day=day,
        target_day=day + 1,
        patch=DayRecord(predicted_from_previous=artifact, derived_from=day),
    )
    return source, edge


@dataclass
class JournalUpdate:
    """Patch for the current day plus any edges it emits."""

    day: int
    patch: DayRecord = field(default_factory=DayRecord)
    edges: list[PropagationEdge] = field(default_factory=list)

    def add_edge(self, edge: PropagationEdge) -> None:
        if edge.source_day != self.day:
            msg = f"Edge from day {edge.source_day} cannot be emitted by day {self.day}"
            raise ValueError(msg)
        self.edges.append(edge)

    def patches(self) -> dict[int, DayRecord]:
        """Per-day patches, edges merged over the current-day patch."""
        result: dict[int, DayRecord] = {self.day: self.patch}
        for edge in self.edges:
            result[edge.target_day] = result.get(edge.target_day, DayRecord()).merged(edge.patch)
        return result
