"""Farm profile repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional
from ..entities.farm_profile import FarmProfile
from ..entities.historical_record import HistoricalRecord


class FarmProfileRepository(ABC):
    """Abstract repository for farm profiles and their history."""

    @abstractmethod
    def get_profile(self, farm_profile_id: str) -> Optional[FarmProfile]:
        """
        Retrieve a farm profile.

        Args:
            farm_profile_id: Farm profile identifier

        Returns:
            FarmProfile, or None if unknown
        """
        pass

    @abstractmethod
    def list_profiles(self) -> List[FarmProfile]:
        """
        Retrieve all farm profiles.

        Returns:
            List of FarmProfile entities
        """
        pass

    @abstractmethod
    def save_profile(self, profile: FarmProfile) -> None:
        """
        Save a farm profile, replacing any profile with the same id.

        Args:
            profile: FarmProfile entity to save
        """
        pass

    def get_historical_record(self, farm_profile_id: str) -> Optional[HistoricalRecord]:
        """
        Retrieve the current historical record of a farm.

        Args:
            farm_profile_id: Farm profile identifier

        Returns:
            HistoricalRecord, or None if the farm or its history is unknown
        """
        profile = self.get_profile(farm_profile_id)
        return profile.historical_record if profile else None
