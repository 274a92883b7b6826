"""Farm zone repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional
from ..entities.farm_zone import FarmZone
from ..entities.zone_type import ZoneType


class FarmZoneRepository(ABC):
    """Abstract repository for stored zone classifications."""

    @abstractmethod
    def get(self, zone_id: str) -> Optional[FarmZone]:
        """
        Retrieve a farm zone by id.

        Args:
            zone_id: Farm zone identifier

        Returns:
            FarmZone, or None if unknown
        """
        pass

    @abstractmethod
    def get_by_farm_profile(self, farm_profile_id: str) -> Optional[FarmZone]:
        """
        Retrieve the farm zone of a farm profile.

        Args:
            farm_profile_id: Farm profile identifier

        Returns:
            FarmZone, or None if the farm has not been classified
        """
        pass

    @abstractmethod
    def list_zones(self, zone_type: Optional[ZoneType] = None) -> List[FarmZone]:
        """
        Retrieve farm zones.

        Args:
            zone_type: Filter by zone type (optional)

        Returns:
            List of FarmZone entities
        """
        pass

    @abstractmethod
    def save(self, zone: FarmZone) -> FarmZone:
        """
        Insert or replace a farm zone.

        Args:
            zone: FarmZone entity to save

        Returns:
            The saved FarmZone
        """
        pass

    @abstractmethod
    def delete(self, zone_id: str) -> None:
        """
        Delete a farm zone.

        Args:
            zone_id: Farm zone identifier
        """
        pass
