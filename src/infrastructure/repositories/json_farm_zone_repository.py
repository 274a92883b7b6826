"""JSON file farm zone repository implementation."""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, List, Optional
from ...domain.entities.farm_zone import FarmZone
from ...domain.entities.zone_type import ZoneType
from ...domain.repositories.farm_zone_repository import FarmZoneRepository

logger = logging.getLogger(__name__)


class JSONFarmZoneRepository(FarmZoneRepository):
    """
    Repository for saving/loading farm zones to/from a JSON file.

    Writes hold a lock across load, change and dump, and replace the file
    atomically, so readers never see a partially written document.
    """

    def __init__(self, data_file: str):
        """
        Initialize repository.

        Args:
            data_file: Path to JSON file; created on first save
        """
        self.data_file = Path(data_file)
        self._lock = threading.RLock()

    def _load(self) -> Dict[str, FarmZone]:
        if not self.data_file.exists():
            return {}
        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except Exception as e:
            logger.error(f"Error reading farm zone file: {e}")
            raise
        zones = [FarmZone.from_dict(item) for item in payload.get("zones", [])]
        return {zone.id: zone for zone in zones}

    def _dump(self, zones: Dict[str, FarmZone]) -> None:
        self.data_file.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.data_file.parent, prefix=f".{self.data_file.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump({"zones": [z.to_dict() for z in zones.values()]}, f, indent=2)
            os.replace(tmp_path, self.data_file)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def get(self, zone_id: str) -> Optional[FarmZone]:
        with self._lock:
            return self._load().get(zone_id)

    def get_by_farm_profile(self, farm_profile_id: str) -> Optional[FarmZone]:
        with self._lock:
            zones = self._load()
        for zone in zones.values():
            if zone.farm_profile_id == farm_profile_id:
                return zone
        return None

    def list_zones(self, zone_type: Optional[ZoneType] = None) -> List[FarmZone]:
        with self._lock:
            zones = list(self._load().values())
        if zone_type is not None:
            zones = [z for z in zones if z.zone_type == zone_type]
        logger.info(f"Loaded {len(zones)} farm zones from {self.data_file}")
        return zones

    def save(self, zone: FarmZone) -> FarmZone:
        with self._lock:
            zones = self._load()
            zones[zone.id] = zone
            self._dump(zones)
        logger.info(f"Farm zone saved: {zone.id} ({zone.zone_type.value})")
        return zone

    def delete(self, zone_id: str) -> None:
        with self._lock:
            zones = self._load()
            if zones.pop(zone_id, None) is None:
                return
            self._dump(zones)
        logger.info(f"Farm zone deleted: {zone_id}")
