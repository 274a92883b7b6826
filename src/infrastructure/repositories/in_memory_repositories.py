"""In-memory repository implementations."""

import copy
import logging
import threading
from typing import Dict, Iterable, List, Optional
from ...domain.entities.farm_profile import FarmProfile
from ...domain.entities.farm_zone import FarmZone
from ...domain.entities.zone_type import ZoneType
from ...domain.repositories.farm_profile_repository import FarmProfileRepository
from ...domain.repositories.farm_zone_repository import FarmZoneRepository

logger = logging.getLogger(__name__)


class InMemoryFarmProfileRepository(FarmProfileRepository):
    """Repository keeping farm profiles in a dictionary."""

    def __init__(self, profiles: Optional[Iterable[FarmProfile]] = None):
        self._profiles: Dict[str, FarmProfile] = {}
        for profile in profiles or []:
            self.save_profile(profile)

    def get_profile(self, farm_profile_id: str) -> Optional[FarmProfile]:
        return self._profiles.get(farm_profile_id)

    def list_profiles(self) -> List[FarmProfile]:
        return list(self._profiles.values())

    def save_profile(self, profile: FarmProfile) -> None:
        self._profiles[profile.id] = profile


class InMemoryFarmZoneRepository(FarmZoneRepository):
    """Repository keeping farm zones in a dictionary."""

    def __init__(self):
        self._zones: Dict[str, FarmZone] = {}
        self._lock = threading.RLock()

    def get(self, zone_id: str) -> Optional[FarmZone]:
        with self._lock:
            zone = self._zones.get(zone_id)
            return copy.deepcopy(zone) if zone else None

    def get_by_farm_profile(self, farm_profile_id: str) -> Optional[FarmZone]:
        with self._lock:
            for zone in self._zones.values():
                if zone.farm_profile_id == farm_profile_id:
                    return copy.deepcopy(zone)
        return None

    def list_zones(self, zone_type: Optional[ZoneType] = None) -> List[FarmZone]:
        with self._lock:
            return [
                copy.deepcopy(zone)
                for zone in self._zones.values()
                if zone_type is None or zone.zone_type == zone_type
            ]

    def save(self, zone: FarmZone) -> FarmZone:
        with self._lock:
            self._zones[zone.id] = copy.deepcopy(zone)
        logger.debug(f"Saved farm zone {zone.id} ({zone.zone_type.value})")
        return zone

    def delete(self, zone_id: str) -> None:
        with self._lock:
            self._zones.pop(zone_id, None)
