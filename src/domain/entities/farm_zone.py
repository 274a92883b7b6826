"""Farm zone entity."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict

from .historical_record import HistoricalRecord
from .zone_type import ZoneType


def _now() -> datetime:
    return datetime.now().replace(microsecond=0)


@dataclass
class FarmZone:
    """Stored zone classification of a single farm profile."""

    farm_profile_id: str
    zone_type: ZoneType
    historical_record: HistoricalRecord
    average_yield: float  # in tons/hectare
    productivity_score: float  # 0-100
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FarmZone":
        """Create FarmZone from its serialized form."""
        return cls(
            id=data["id"],
            farm_profile_id=data["farm_profile_id"],
            zone_type=ZoneType(data["zone_type"]),
            historical_record=HistoricalRecord.from_dict(data["historical_record"]),
            average_yield=float(data["average_yield"]),
            productivity_score=float(data["productivity_score"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "farm_profile_id": self.farm_profile_id,
            "zone_type": self.zone_type.value,
            "historical_record": self.historical_record.to_dict(),
            "average_yield": self.average_yield,
            "productivity_score": self.productivity_score,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    def touch(self) -> None:
        """Mark the zone as updated now."""
        self.updated_at = _now()

    def __str__(self) -> str:
        return f"{self.farm_profile_id}_{self.zone_type.value}"
