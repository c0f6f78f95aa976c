"""
Prefect flow for batch analysis over a day range.

Drives ``BatchDriver`` against either a running journal server (``--remote``)
or an in-process orchestrator over the local journal file.

Run locally:
    python -m plant_journal.flows.batch 20 25
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from prefect import flow

from plant_journal.batch import BatchDriver
from plant_journal.config import get_settings
from plant_journal.control import ControlSurface, HttpControlSurface, LocalControlSurface
from plant_journal.orchestrator import AnalysisOrchestrator
from plant_journal.pacing import Pacer, TokenBucket

if TYPE_CHECKING:
    from plant_journal.batch import BatchReport
    from plant_journal.config import Settings


def build_control(settings: Settings, control_url: str | None = None) -> ControlSurface:
    """Remote surface when a URL is given, otherwise the local journal."""
    if control_url:
        return HttpControlSurface(control_url)
    return LocalControlSurface(AnalysisOrchestrator.from_settings(settings))


def build_pacer(settings: Settings) -> Pacer:
    limiter = None
    if settings.rate_per_second:
        limiter = TokenBucket(settings.rate_per_second, capacity=settings.rate_burst)
    return Pacer(
        operation_delay=settings.operation_delay,
        day_delay=settings.day_delay,
        limiter=limiter,
    )


def print_report(report: BatchReport) -> None:
    for day in report.days:
        if day.error:
            print(f"Day {day.day}: FAILED - {day.error}")
            continue
        ops = ", ".join(
            f"{op.operation}: {'OK' if op.success else 'FAILED - ' + (op.error or '')}"
            for op in day.operations
        )
        print(f"Day {day.day} ({'photo' if day.has_image else 'no photo'}): {ops}")


@flow(name="batch-analyze", log_prints=True)
def analyze_range(start: int, end: int, control_url: str | None = None) -> dict[str, int]:
    """
    Analyze every day in ``[start, end]`` in order.

    Failures are reported per operation and never stop the run.
    """
    settings = get_settings()
    control = build_control(settings, control_url)
    driver = BatchDriver(control, build_pacer(settings))

    print(f"Starting batch analysis for days {start}-{end}...")
    report = driver.run(start, end)
    print_report(report)
    print("=== BATCH ANALYSIS COMPLETE ===")
    return report.summary()


if __name__ == "__main__":
    first, last = (int(arg) for arg in sys.argv[1:3])
    result = analyze_range(first, last)
    print(f"Flow complete: {result}")
