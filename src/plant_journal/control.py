"""
Control surface used by the batch driver.

Three calls are enough to sequence a run: read the journal, move the pointer
to a day, and run one named operation. ``LocalControlSurface`` drives an
in-process orchestrator; ``HttpControlSurface`` drives a journal server over
its JSON API::

    GET  /api/plant            -> {"plant": {...} | null}
    POST /api/plant            <- {name, city, indoorLocation, dayOfPlanting, feedback, image}
    POST /api/plant/<op>       -> {"success": true, ...} | {"error": "..."}
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import requests
from pydantic import ValidationError

from plant_journal.errors import JournalError, UpstreamError
from plant_journal.parsing import Fallback, Parsed
from plant_journal.schemas import Operation, Plant, PlantIdentity, Result
from plant_journal.services.http import error_message
from plant_journal.services.http import session as default_session

if TYPE_CHECKING:
    from plant_journal.orchestrator import AnalysisOrchestrator

logger = logging.getLogger(__name__)


class ControlSurface(ABC):
    """Remote-control view of the orchestrator."""

    @abstractmethod
    def get_journal(self) -> Plant | None:
        """Current journal, or None if none has been created."""

    @abstractmethod
    def set_current_day(self, day: int, identity: PlantIdentity, feedback: str | None) -> None:
        """Point the journal at ``day`` (creating it if needed)."""

    @abstractmethod
    def run_operation(self, operation: Operation) -> Result:
        """Run one analysis on the current day."""


class LocalControlSurface(ControlSurface):
    """Control surface over an in-process orchestrator."""

    def __init__(self, orchestrator: AnalysisOrchestrator) -> None:
        self.orchestrator = orchestrator

    def get_journal(self) -> Plant | None:
        return self.orchestrator.store.get_plant()

    def set_current_day(self, day: int, identity: PlantIdentity, feedback: str | None) -> None:
        self.orchestrator.save_day(identity, day, feedback=feedback)

    def run_operation(self, operation: Operation) -> Result:
        try:
            data = self._dispatch(Operation(operation))
        except JournalError as exc:
            return Result(success=False, message=f"{operation} failed", error=str(exc))
        return Result(success=True, message=f"{operation} complete", data=data)

    def _dispatch(self, operation: Operation) -> dict[str, Any]:  # noqa: PLR0911
        orch = self.orchestrator
        if operation is Operation.ENHANCE:
            return {"about": orch.enhance_about()}
        if operation is Operation.WEATHER:
            weather = orch.weather()
            if isinstance(weather, Parsed):
                today, tomorrow = weather.value
                return {"weather": today, "tomorrow": tomorrow}
            return {"weather": weather.raw, "tomorrow": None}
        if operation is Operation.COLOR:
            color = orch.color()
            return {"color": _value(color), "parsed": not color.is_fallback}
        if operation is Operation.LEAF_COUNT:
            return {"leafCount": orch.leaf_count()}
        if operation is Operation.INFECTIONS:
            return {"infections": orch.infections()}
        if operation is Operation.GROWTH:
            stage = orch.growth_stage()
            return {"stage": _value(stage), "parsed": not stage.is_fallback}
        if operation is Operation.PREDICT:
            return {"predictedImage": orch.predict_image()}
        if operation is Operation.IDENTIFY:
            found = orch.identify()
            if isinstance(found, Parsed):
                return {"suggestions": [s.model_dump(by_alias=True) for s in found.value]}
            return {"suggestions": [], "raw": found.raw}
        return {"insights": orch.insights()}


def _value(outcome: Parsed[Any] | Fallback) -> Any:
    return outcome.value if isinstance(outcome, Parsed) else outcome.raw


class HttpControlSurface(ControlSurface):
    """
    Control surface over a journal server's JSON API.

    Transport failures are raised as ``requests.RequestException`` and a
    journal reply that is not a valid document as ``UpstreamError``. An
    operation answered with an error or non-object body becomes an
    unsuccessful ``Result``.
    """

    def __init__(self, base_url: str, http: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.http = http or default_session

    def get_journal(self) -> Plant | None:
        resp = self.http.get(f"{self.base_url}/api/plant")
        resp.raise_for_status()
        body = resp.json()
        if not isinstance(body, dict):
            msg = "malformed journal response: expected a JSON object"
            raise UpstreamError(msg, status_code=resp.status_code)
        document = body.get("plant")
        if document is None:
            return None
        try:
            return Plant.from_document(document)
        except ValidationError as exc:
            msg = f"malformed journal: {exc.error_count()} invalid field(s)"
            raise UpstreamError(msg, status_code=resp.status_code) from exc

    def set_current_day(self, day: int, identity: PlantIdentity, feedback: str | None) -> None:
        payload = {
            **identity.model_dump(by_alias=True),
            "dayOfPlanting": f"Day {day}",
            "feedback": feedback or "",
            "image": None,
        }
        resp = self.http.post(f"{self.base_url}/api/plant", json=payload)
        if not resp.ok:
            raise UpstreamError(error_message(resp), status_code=resp.status_code)

    def run_operation(self, operation: Operation) -> Result:
        resp = self.http.post(f"{self.base_url}/api/plant/{Operation(operation)}")
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            return Result(
                success=False,
                message=f"{operation} failed",
                error="malformed response: expected a JSON object",
            )
        if not resp.ok or body.get("error") or not body.get("success", False):
            return Result(
                success=False,
                message=f"{operation} failed",
                error=error_message(resp),
            )
        data = {k: v for k, v in body.items() if k not in ("success", "message")}
        return Result(success=True, message=body.get("message", f"{operation} complete"), data=data)
