"""Repository interfaces."""

from .farm_profile_repository import FarmProfileRepository
from .farm_zone_repository import FarmZoneRepository

__all__ = [
    "FarmProfileRepository",
    "FarmZoneRepository",
]
