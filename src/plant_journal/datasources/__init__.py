"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, request helpers
    └── {feature}.py      # Fetch/format functions (one per concept)

Sources:
  - gemini/    Text, vision and image generation (analysis operations)
  - plantid/   Species identification
  - weather/   Open-Meteo archive (historical weather backfill)

Adding a new analysis backend
-----------------------------
1. Create ``datasources/{name}/`` with the files above. Call external APIs
   through ``plant_journal.services.http`` so errors become ``UpstreamError``.
2. Re-export the public API in ``__init__.py`` with ``__all__``.
3. Use it from an ``Analyzer`` implementation (see ``analyzer.py``).
4. Add tests in ``tests/test_{name}.py``.
"""
