"""
Batch analysis over a range of days.

``BatchDriver`` walks ``[start, end]`` one day at a time through a
``ControlSurface``: move the pointer, re-read the day, then run either the
weather lookup alone (no photo) or the full photo pipeline. Calls are
strictly sequential and paced. A failed operation or day is recorded and
logged; the run always continues to the next operation and day.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import requests

from plant_journal.errors import JournalError
from plant_journal.schemas import Operation

if TYPE_CHECKING:
    from plant_journal.control import ControlSurface
    from plant_journal.pacing import Pacer

logger = logging.getLogger(__name__)

#: Operations for a day without a photo.
NO_IMAGE_OPERATIONS = [Operation.WEATHER]

#: Operations for a day with a photo, in run order.
IMAGE_OPERATIONS = [
    Operation.WEATHER,
    Operation.COLOR,
    Operation.LEAF_COUNT,
    Operation.GROWTH,
    Operation.INFECTIONS,
]


@dataclass
class OperationOutcome:
    operation: Operation
    success: bool
    error: str | None = None


@dataclass
class DayOutcome:
    day: int
    has_image: bool = False
    operations: list[OperationOutcome] = field(default_factory=list)
    error: str | None = None

    @property
    def failures(self) -> list[OperationOutcome]:
        return [op for op in self.operations if not op.success]

    @property
    def ok(self) -> bool:
        return self.error is None and not self.failures


@dataclass
class BatchReport:
    start: int
    end: int
    days: list[DayOutcome] = field(default_factory=list)

    @property
    def operations_run(self) -> int:
        return sum(len(d.operations) for d in self.days)

    @property
    def failures(self) -> int:
        return sum(len(d.failures) + (1 if d.error else 0) for d in self.days)

    def summary(self) -> dict[str, int]:
        return {
            "days": len(self.days),
            "operations": self.operations_run,
            "failures": self.failures,
        }


class BatchDriver:
    """Sequencing shell over a control surface. Holds no journal state."""

    def __init__(self, control: ControlSurface, pacer: Pacer) -> None:
        self.control = control
        self.pacer = pacer

    def run(self, start: int, end: int) -> BatchReport:
        if start < 1 or end < start:
            msg = f"Invalid day range [{start}, {end}]"
            raise ValueError(msg)

        logger.info("Starting batch analysis for days %d-%d", start, end)
        report = BatchReport(start, end)
        for day in range(start, end + 1):
            report.days.append(self.run_day(day))
            self.pacer.after_day()
        logger.info("Batch analysis complete: %s", report.summary())
        return report

    def run_day(self, day: int) -> DayOutcome:
        outcome = DayOutcome(day)
        logger.info("=== Analyzing Day %d ===", day)
        try:
            has_image = self._prepare_day(day)
        except (JournalError, requests.RequestException) as exc:
            outcome.error = str(exc)
            logger.warning("Day %d: could not set current day: %s", day, exc)
            return outcome
        except Exception as exc:
            outcome.error = f"{type(exc).__name__}: {exc}"
            logger.exception("Day %d: unexpected error while setting current day", day)
            return outcome

        if has_image is None:
            outcome.error = "No plant data found"
            logger.warning("Day %d: no plant data found", day)
            return outcome

        outcome.has_image = has_image
        if not has_image:
            logger.info("No image for Day %d - skipping image-based analysis", day)
        operations = IMAGE_OPERATIONS if has_image else NO_IMAGE_OPERATIONS
        for operation in operations:
            outcome.operations.append(self._run_operation(day, operation))
        return outcome

    def _prepare_day(self, day: int) -> bool | None:
        """Move the pointer to ``day``; True/False for photo present, None without a journal."""
        plant = self.control.get_journal()
        if plant is None:
            return None
        self.control.set_current_day(day, plant.identity, plant.day(day).feedback)
        logger.info("Set to Day %d", day)

        refreshed = self.control.get_journal()
        if refreshed is None:
            return None
        return bool(refreshed.day(day).image)

    def _run_operation(self, day: int, operation: Operation) -> OperationOutcome:
        self.pacer.before_operation()
        try:
            result = self.control.run_operation(operation)
        except (JournalError, requests.RequestException) as exc:
            logger.warning("Day %d %s: ERROR - %s", day, operation, exc)
            outcome = OperationOutcome(operation, success=False, error=str(exc))
        except Exception as exc:
            logger.exception("Day %d %s: unexpected error", day, operation)
            outcome = OperationOutcome(
                operation, success=False, error=f"{type(exc).__name__}: {exc}"
            )
        else:
            if result.success:
                logger.info("Day %d %s: OK", day, operation)
                outcome = OperationOutcome(operation, success=True)
            else:
                logger.warning("Day %d %s: FAILED - %s", day, operation, result.error)
                outcome = OperationOutcome(operation, success=False, error=result.error)
        self.pacer.after_operation()
        return outcome
