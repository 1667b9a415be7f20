import json
import logging
from functools import lru_cache
from typing import Dict, List, Optional

from config.settings import settings
from models.location import Location

logger = logging.getLogger(__name__)


class LocationService:
    """Read-only provinces/cities reference data, loaded once per process."""

    def __init__(self, locations: List[Location]):
        self._by_id: Dict[int, Location] = {loc.id: loc for loc in locations}

    @classmethod
    def from_file(cls, path: str) -> "LocationService":
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
        locations = [Location.model_validate(item) for item in raw]
        logger.info("Loaded %d locations from %s", len(locations), path)
        return cls(locations)

    def get(self, location_id: int) -> Optional[Location]:
        return self._by_id.get(location_id)

    def cities(self) -> List[Location]:
        """Only level-2 entries can be picked as origin or destination."""
        return sorted((loc for loc in self._by_id.values() if loc.selectable), key=lambda loc: loc.name)


@lru_cache()
def get_location_service() -> LocationService:
    return LocationService.from_file(settings.LOCATION_DATA_PATH)
