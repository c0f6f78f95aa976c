"""Tests for the weather backfill flow."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest
from conftest import IDENTITY

from plant_journal.flows import backfill
from plant_journal.schemas import DayRecord
from plant_journal.store import FileJournalStore, InMemoryJournalStore

if TYPE_CHECKING:
    from pathlib import Path

LINES = [
    ("2025-10-21", "line 1"),
    ("2025-10-22", "line 2"),
    ("2025-10-23", "line 3"),
]


class TestMapToDays:
    """Archive dates to journal days."""

    def test_start_date_is_day_one(self) -> None:
        assert backfill.map_to_days(LINES) == {1: "line 1", 2: "line 2", 3: "line 3"}

    def test_offset_shifts_days(self) -> None:
        assert backfill.map_to_days(LINES, day_offset=-1) == {1: "line 2", 2: "line 3"}
        assert backfill.map_to_days(LINES, day_offset=10) == {11: "line 1", 12: "line 2", 13: "line 3"}

    def test_max_day(self) -> None:
        assert backfill.map_to_days(LINES, max_day=2) == {1: "line 1", 2: "line 2"}


class TestSaveBackfill:
    """Writing weather lines."""

    def test_single_update_keeps_other_fields(self, monkeypatch: pytest.MonkeyPatch) -> None:
        store = InMemoryJournalStore()
        store.set_current_day(2, IDENTITY)
        store.upsert_day(1, DayRecord(weather="old", leaf_count="4"))
        monkeypatch.setattr(backfill, "store", store)

        assert backfill.save_backfill({1: "line 1", 2: "line 2"}) == 2

        plant = store.get_plant()
        assert plant is not None
        assert plant.day(1).weather == "line 1"
        assert plant.day(1).leaf_count == "4"
        assert plant.day(2).weather == "line 2"

    def test_nothing_to_write(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(backfill, "store", InMemoryJournalStore())
        assert backfill.save_backfill({}) == 0


class TestBackfillWeather:
    """End-to-end flow with a mocked archive."""

    @patch("plant_journal.datasources.weather.historical.session.get")
    def test_flow(self, mock_get: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        store = FileJournalStore(tmp_path / "plants.json")
        store.set_current_day(1, IDENTITY)
        monkeypatch.setattr(backfill, "store", store)

        mock_response = Mock()
        mock_response.json.return_value = {
            "daily": {
                "time": ["2025-10-21", "2025-10-22"],
                "temperature_2m_max": [68.0, 70.0],
                "temperature_2m_min": [52.0, 54.0],
                "sunrise": ["2025-10-21T07:15", "2025-10-22T07:16"],
                "sunset": ["2025-10-21T18:20", "2025-10-22T18:19"],
                "daylight_duration": [39900.0, 39780.0],
            },
            "hourly": {"time": [], "relative_humidity_2m": []},
        }
        mock_response.raise_for_status = Mock()
        mock_get.return_value = mock_response

        result = backfill.backfill_weather("2025-10-21", "2025-10-22", lat=45.5, lon=-122.6, day_offset=0)

        assert result == {"dates": 2, "days_updated": 2, "day_offset": 0}
        plant = store.get_plant()
        assert plant is not None
        assert plant.day(1).weather is not None
        assert plant.day(1).weather.startswith("High 68°F, Low 52°F")
        assert plant.day(2).weather is not None
        assert plant.day(2).weather.startswith("High 70°F")
        assert plant.day(3).weather is None
        assert mock_get.call_args.kwargs["params"]["latitude"] == 45.5
