"""Farm profile entity."""

from dataclasses import dataclass
from typing import Optional

from .historical_record import HistoricalRecord


@dataclass
class FarmProfile:
    """Represents a registered farm and its recorded history."""

    id: str
    crop_type: Optional[str] = None  # e.g., 'Maize', 'Rice'
    region: Optional[str] = None  # e.g., 'Middle Belt'
    farm_size: Optional[float] = None  # in hectares
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    farmer_name: Optional[str] = None
    farmer_contact: Optional[str] = None
    historical_record: Optional[HistoricalRecord] = None

    def __str__(self) -> str:
        return self.id
