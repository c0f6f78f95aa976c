"""Journal document stores and the image content store.

The journal is one JSON document per plant. Every mutation reads the whole
document, applies the change and writes the whole document back; there is no
append log and no locking, so a store must only ever have one writer.

Two journal backends share the same read-modify-write logic:
  - ``FileJournalStore``: durable JSON file (``plants.json`` by default)
  - ``InMemoryJournalStore``: dict held in memory, for tests and dry runs

Images are opaque blobs addressed by a relative reference such as
``uploads/basil_day3.png`` and live under the ``ImageStore`` root.
"""

from __future__ import annotations

import copy
import json
import logging
import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from plant_journal.errors import JournalIOError, NoPlant
from plant_journal.schemas import DayRecord, Plant, PlantIdentity

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_DAYS = 45


class JournalStore(ABC):
    """Data access for the single Plant document. No network calls."""

    def __init__(self, initial_days: int = DEFAULT_INITIAL_DAYS) -> None:
        self.initial_days = initial_days

    # -- backend hooks -------------------------------------------------------

    @abstractmethod
    def _load(self) -> dict[str, Any] | None:
        """Return the persisted document, or None if there is none."""

    @abstractmethod
    def _save(self, document: dict[str, Any]) -> None:
        """Replace the persisted document."""

    @abstractmethod
    def _discard(self) -> None:
        """Remove the persisted document if present."""

    # -- operations ----------------------------------------------------------

    def get_plant(self) -> Plant | None:
        document = self._load()
        if document is None:
            return None
        return Plant.from_document(document)

    def upsert_day(self, day: int, patch: DayRecord) -> None:
        """Merge the non-null fields of ``patch`` into ``days[day]``."""
        self.upsert_days({day: patch})

    def upsert_days(self, patches: Mapping[int, DayRecord]) -> None:
        """Merge several day patches in a single read-modify-write."""
        bad = [day for day in patches if day < 1]
        if bad:
            msg = f"Day numbers start at 1, got {bad}"
            raise ValueError(msg)
        plant = self._require_plant()
        for day, patch in patches.items():
            plant.days[day] = plant.day(day).merged(patch)
        self._save(plant.to_document())

    def set_current_day(
        self,
        day: int,
        identity: PlantIdentity,
        initial_days: int | None = None,
    ) -> Plant:
        """
        Point the journal at ``day``, creating the journal if needed.

        A new journal gets empty records for days ``1..initial_days`` so that
        forward writes have somewhere to land. An existing journal has its
        identity fields and pointer replaced. ``days[day]`` always exists
        afterwards.
        """
        if day < 1:
            msg = f"Day numbers start at 1, got {day}"
            raise ValueError(msg)
        plant = self.get_plant()
        if plant is None:
            count = initial_days if initial_days is not None else self.initial_days
            plant = Plant(
                name=identity.name,
                city=identity.city,
                indoor_location=identity.indoor_location,
                current_day=day,
                days={n: DayRecord() for n in range(1, count + 1)},
            )
            logger.info("Created journal for %s with %d days", identity.name, count)
        else:
            plant = plant.model_copy(
                update={
                    "name": identity.name,
                    "city": identity.city,
                    "indoor_location": identity.indoor_location,
                    "current_day": day,
                }
            )
        plant.days.setdefault(day, DayRecord())
        self._save(plant.to_document())
        return plant

    def set_about(self, about: str) -> None:
        plant = self._require_plant()
        plant.about = about
        self._save(plant.to_document())

    def reset(self) -> None:
        """Discard the entire journal."""
        self._discard()

    def _require_plant(self) -> Plant:
        plant = self.get_plant()
        if plant is None:
            raise NoPlant
        return plant


class FileJournalStore(JournalStore):
    """Journal persisted as a single JSON file."""

    def __init__(self, path: Path, initial_days: int = DEFAULT_INITIAL_DAYS) -> None:
        super().__init__(initial_days)
        self.path = path

    def _load(self) -> dict[str, Any] | None:
        if not self.path.exists():
            return None
        try:
            with self.path.open(encoding="utf-8") as f:
                document: dict[str, Any] = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            msg = f"Could not read journal {self.path}: {exc}"
            raise JournalIOError(msg) from exc
        return document

    def _save(self, document: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
        except OSError as exc:
            msg = f"Could not write journal {self.path}: {exc}"
            raise JournalIOError(msg) from exc

    def _discard(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            msg = f"Could not remove journal {self.path}: {exc}"
            raise JournalIOError(msg) from exc


class InMemoryJournalStore(JournalStore):
    """Journal held in memory; documents are copied in and out."""

    def __init__(
        self,
        document: dict[str, Any] | None = None,
        initial_days: int = DEFAULT_INITIAL_DAYS,
    ) -> None:
        super().__init__(initial_days)
        self._document = copy.deepcopy(document)

    def _load(self) -> dict[str, Any] | None:
        return copy.deepcopy(self._document)

    def _save(self, document: dict[str, Any]) -> None:
        self._document = copy.deepcopy(document)

    def _discard(self) -> None:
        self._document = None


# =============================================================================
# Images
# =============================================================================

UPLOADS_PREFIX = "uploads"


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "_", name or "plant", flags=re.IGNORECASE).lower()


def photo_ref(plant_name: str, day: int) -> str:
    """Reference for the real photo of ``day``."""
    return f"{UPLOADS_PREFIX}/{_slug(plant_name)}_day{day}.png"


def predicted_ref(plant_name: str, target_day: int) -> str:
    """Reference for the generated image predicted for ``target_day``."""
    return f"{UPLOADS_PREFIX}/{_slug(plant_name)}_day{target_day}_predicted.png"


class ImageStore:
    """Binary image blobs stored under a root directory."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir

    def write(self, ref: str, data: bytes) -> str:
        full = self._resolve(ref)
        try:
            full.parent.mkdir(parents=True, exist_ok=True)
            full.write_bytes(data)
        except OSError as exc:
            msg = f"Could not store image {ref}: {exc}"
            raise JournalIOError(msg) from exc
        return ref

    def read(self, ref: str) -> bytes:
        full = self._resolve(ref)
        try:
            return full.read_bytes()
        except OSError as exc:
            msg = f"Could not read image {ref}: {exc}"
            raise JournalIOError(msg) from exc

    def exists(self, ref: str) -> bool:
        return self._resolve(ref).exists()

    def _resolve(self, ref: str) -> Path:
        full = self.base / ref
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes image store base directory: {ref}"
            raise ValueError(msg) from None
        return full
