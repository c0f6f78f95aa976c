"""Plant.id species identification data source."""

from plant_journal.datasources.plantid.client import PLANT_ID_API, identify

__all__ = ["PLANT_ID_API", "identify"]
