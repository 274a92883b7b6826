"""Concrete repository implementations."""

from .csv_farm_profile_repository import CSVFarmProfileRepository
from .json_farm_zone_repository import JSONFarmZoneRepository
from .in_memory_repositories import InMemoryFarmProfileRepository, InMemoryFarmZoneRepository

__all__ = [
    "CSVFarmProfileRepository",
    "JSONFarmZoneRepository",
    "InMemoryFarmProfileRepository",
    "InMemoryFarmZoneRepository",
]
