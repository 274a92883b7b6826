"""Historical farm record entity."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..exceptions import EmptyYieldData


@dataclass
class HistoricalRecord:
    """Per-season history of a farm, aligned by index."""

    yields: List[float]  # tons/hectare
    seasons: List[str] = field(default_factory=list)  # e.g., '2021-Wet'
    soil_quality_scores: List[float] = field(default_factory=list)  # 0-10
    moisture_levels: List[float] = field(default_factory=list)  # percentage

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoricalRecord":
        """Create HistoricalRecord from a snake_case or camelCase dictionary."""

        def pick(*keys: str) -> List[Any]:
            for key in keys:
                if data.get(key) is not None:
                    return list(data[key])
            return []

        return cls(
            yields=[float(y) for y in pick("yields")],
            seasons=[str(s) for s in pick("seasons")],
            soil_quality_scores=[
                float(s) for s in pick("soil_quality_scores", "soilQualityScores")
            ],
            moisture_levels=[float(m) for m in pick("moisture_levels", "moistureLevels")],
        )

    def to_dict(self) -> Dict[str, List[Any]]:
        return {
            "yields": list(self.yields),
            "seasons": list(self.seasons),
            "soil_quality_scores": list(self.soil_quality_scores),
            "moisture_levels": list(self.moisture_levels),
        }

    @property
    def average_yield(self) -> float:
        """Arithmetic mean of yields."""
        if not self.yields:
            raise EmptyYieldData("Cannot compute average yield without yield data")
        return sum(self.yields) / len(self.yields)

    @property
    def is_complete(self) -> bool:
        """Whether both soil and moisture series are present."""
        return bool(self.soil_quality_scores) and bool(self.moisture_levels)

    def __len__(self) -> int:
        return len(self.yields)
