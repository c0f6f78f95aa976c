"""
Tests for CLI functionality.

These tests verify the command-line interface logic.
"""

from __future__ import annotations

import argparse
import json
from io import StringIO
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from conftest import IDENTITY, PNG

from plant_journal.cli import (
    cmd_backfill,
    cmd_batch,
    cmd_info,
    cmd_reset,
    cmd_run,
    cmd_set_day,
    cmd_show,
    create_parser,
    main,
)
from plant_journal.errors import NoPlant
from plant_journal.schemas import Result

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from plant_journal.orchestrator import AnalysisOrchestrator


class TestCreateParser:
    """Tests for create_parser function."""

    def test_creates_parser(self) -> None:
        """Parser is created successfully."""
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.prog == "plant-journal"

    def test_parser_has_version(self) -> None:
        """Parser has version argument."""
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["--version"])

    def test_parser_has_debug_flag(self) -> None:
        """Parser accepts --debug flag."""
        parser = create_parser()
        args = parser.parse_args(["--debug", "info"])
        assert args.debug is True

    def test_parser_set_day_command(self) -> None:
        """Parser accepts set-day with a free-form label."""
        parser = create_parser()
        args = parser.parse_args(["set-day", "Day 14", "--name", "Basil", "--city", "SF"])
        assert args.command == "set-day"
        assert args.day == "Day 14"
        assert args.name == "Basil"
        assert args.feedback is None
        assert args.image is None

    def test_parser_set_day_requires_name(self) -> None:
        """set-day without --name is rejected."""
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["set-day", "3"])

    def test_parser_run_command(self) -> None:
        """Parser accepts run with an operation name."""
        parser = create_parser()
        args = parser.parse_args(["run", "leafcount"])
        assert args.operation == "leafcount"

    def test_parser_run_rejects_unknown_operation(self) -> None:
        """Unknown operations are rejected."""
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["run", "water"])

    def test_parser_batch_local(self) -> None:
        """Batch defaults to the local journal."""
        parser = create_parser()
        args = parser.parse_args(["batch", "--start", "20", "--end", "25"])
        assert (args.start, args.end) == (20, 25)
        assert args.remote is None

    def test_parser_batch_remote_default_url(self) -> None:
        """--remote without a URL uses the configured one."""
        parser = create_parser()
        args = parser.parse_args(["batch", "--start", "1", "--end", "2", "--remote"])
        assert args.remote == ""

    def test_parser_backfill_command(self) -> None:
        """Parser accepts backfill dates and offset."""
        parser = create_parser()
        args = parser.parse_args(
            ["backfill", "--start-date", "2025-10-21", "--end-date", "2025-12-06", "--offset", "-1"]
        )
        assert args.start_date == "2025-10-21"
        assert args.offset == -1
        assert args.max_day is None


@pytest.fixture
def local_journal(orchestrator: AnalysisOrchestrator) -> Iterator[AnalysisOrchestrator]:
    """Route CLI commands to the in-memory orchestrator."""
    with patch("plant_journal.cli._orchestrator", return_value=orchestrator):
        yield orchestrator


class TestCmdSetDay:
    """Tests for cmd_set_day function."""

    def test_creates_journal(self, local_journal: AnalysisOrchestrator, tmp_path: Path) -> None:
        """set-day stores identity, feedback and photo."""
        photo = tmp_path / "basil.png"
        photo.write_bytes(PNG)
        args = argparse.Namespace(
            day="Day 3",
            name="Sweet Basil",
            city="San Francisco",
            location="Kitchen window",
            feedback="First photo",
            image=photo,
        )

        assert cmd_set_day(args) == 0

        plant = local_journal.store.get_plant()
        assert plant is not None
        assert plant.current_day == 3
        assert plant.today.feedback == "First photo"
        assert plant.today.image == "uploads/sweet_basil_day3.png"


class TestCmdShow:
    """Tests for cmd_show function."""

    def test_no_journal_returns_one(self, local_journal: AnalysisOrchestrator) -> None:
        """Show returns 1 without a journal."""
        assert cmd_show(argparse.Namespace()) == 1

    def test_prints_document(self, local_journal: AnalysisOrchestrator) -> None:
        """Show prints the camelCase document."""
        local_journal.save_day(IDENTITY, 2)
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            assert cmd_show(argparse.Namespace()) == 0
            document = json.loads(mock_stdout.getvalue())
        assert document["currentDay"] == 2
        assert document["indoorLocation"] == "Kitchen window"


class TestCmdRun:
    """Tests for cmd_run function."""

    def test_success_returns_zero(self, local_journal: AnalysisOrchestrator) -> None:
        """Successful run prints the result data."""
        local_journal.save_day(IDENTITY, 3, image=PNG)
        args = argparse.Namespace(operation="color")

        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            assert cmd_run(args) == 0
            assert "#3A7D44" in mock_stdout.getvalue()

    def test_failure_returns_one(self) -> None:
        """Failed run returns exit code 1."""
        args = argparse.Namespace(operation="color")

        with (
            patch("plant_journal.cli._orchestrator"),
            patch("plant_journal.cli.LocalControlSurface") as mock_control,
        ):
            mock_control.return_value.run_operation.return_value = Result(
                success=False, error="No image for Day 3."
            )
            assert cmd_run(args) == 1


class TestCmdBatch:
    """Tests for cmd_batch function."""

    def test_local(self) -> None:
        """Batch without --remote runs against the local journal."""
        args = argparse.Namespace(start=20, end=21, remote=None)

        with patch("plant_journal.cli.analyze_range") as mock_flow:
            mock_flow.return_value = {"days": 2, "operations": 6, "failures": 0}
            assert cmd_batch(args) == 0
            mock_flow.assert_called_once_with(20, 21, control_url=None)

    def test_remote_uses_configured_url(self) -> None:
        """--remote with no URL falls back to control_url from settings."""
        args = argparse.Namespace(start=1, end=1, remote="")

        with (
            patch("plant_journal.cli.analyze_range") as mock_flow,
            patch("plant_journal.cli.get_settings") as mock_settings,
        ):
            mock_settings.return_value.control_url = "http://journal:3000"
            mock_flow.return_value = {"days": 1, "operations": 1, "failures": 0}
            cmd_batch(args)
            mock_flow.assert_called_once_with(1, 1, control_url="http://journal:3000")


class TestCmdBackfill:
    """Tests for cmd_backfill function."""

    def test_passes_arguments(self) -> None:
        """Backfill forwards dates, offset and max day to the flow."""
        args = argparse.Namespace(
            start_date="2025-10-21", end_date="2025-12-06", offset=0, max_day=45
        )

        with patch("plant_journal.cli.backfill_weather") as mock_flow:
            mock_flow.return_value = {"dates": 47, "days_updated": 45, "day_offset": 0}
            assert cmd_backfill(args) == 0
            mock_flow.assert_called_once_with(
                "2025-10-21", "2025-12-06", day_offset=0, max_day=45
            )


class TestCmdInfoAndReset:
    """Tests for cmd_info and cmd_reset."""

    def test_info_prints_app_info(self) -> None:
        """Info command prints application information."""
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            assert cmd_info(argparse.Namespace()) == 0
            assert "Application" in mock_stdout.getvalue()

    def test_reset_clears_journal(self, local_journal: AnalysisOrchestrator) -> None:
        """Reset deletes the journal."""
        local_journal.save_day(IDENTITY, 1)
        assert cmd_reset(argparse.Namespace()) == 0
        assert local_journal.store.get_plant() is None


class TestMain:
    """Tests for main function."""

    def test_no_command_shows_help(self) -> None:
        """No command shows help and exits 0."""
        with patch("sys.argv", ["plant-journal"]):
            assert main() == 0

    def test_info_command_executes(self) -> None:
        """Info command executes successfully."""
        with (
            patch("sys.argv", ["plant-journal", "info"]),
            patch("plant_journal.cli.cmd_info") as mock_cmd,
        ):
            mock_cmd.return_value = 0
            assert main() == 0
            mock_cmd.assert_called_once()

    def test_journal_error_returns_one(self) -> None:
        """Journal errors become exit code 1."""
        with (
            patch("sys.argv", ["plant-journal", "run", "insights"]),
            patch("plant_journal.cli.cmd_run", side_effect=NoPlant),
        ):
            assert main() == 1
