"""Plant Journal - day-indexed growth journal with AI-assisted analysis.

Architecture::

    schemas.py        Plant / DayRecord models and day-key helpers
    store.py          Journal document stores (JSON file, in-memory) + image store
    parsing.py        Parsed/Fallback results for free-text AI responses
    propagation.py    Sanctioned cross-day writes (forward weather, prediction)
    datasources/      External APIs (Gemini, Plant.id, Open-Meteo archive)
    analyzer.py       Analyzer capability built on the datasources
    orchestrator.py   One operation per analysis kind, merges results into the journal
    control.py        Control surface (in-process or remote JSON API)
    batch.py          Day-range sequencing with pacing and failure isolation
    flows/            Prefect flows (batch analysis, weather backfill)
    services/         Shared utilities (HTTP client with retry)

Data flow: batch → control → orchestrator → analyzer → propagation → store
"""

__version__ = "0.1.0"

from plant_journal.config import Settings
from plant_journal.schemas import DayRecord, Plant, PlantIdentity

__all__ = ["DayRecord", "Plant", "PlantIdentity", "Settings", "__version__"]
