"""Classification threshold and weight entities."""

from dataclasses import dataclass, replace
from typing import Any, Dict


@dataclass(frozen=True)
class ClassificationThresholds:
    """Cut-offs of the zone decision table."""

    high_min_score: float = 75.0
    high_min_yield: float = 3.5
    low_max_score: float = 50.0
    low_max_yield: float = 2.0

    @classmethod
    def from_dict(cls, definition: Dict[str, Any]) -> "ClassificationThresholds":
        """Create thresholds from dictionary definition."""
        defaults = cls()
        return cls(
            high_min_score=definition.get("high_min_score", defaults.high_min_score),
            high_min_yield=definition.get("high_min_yield", defaults.high_min_yield),
            low_max_score=definition.get("low_max_score", defaults.low_max_score),
            low_max_yield=definition.get("low_max_yield", defaults.low_max_yield),
        )


@dataclass(frozen=True)
class FactorWeights:
    """Weights of the four factors in the productivity score."""

    yield_consistency: float = 0.30
    soil_quality: float = 0.25
    moisture_adequacy: float = 0.25
    seasonal_performance: float = 0.20

    @classmethod
    def from_dict(cls, definition: Dict[str, float]) -> "FactorWeights":
        """Create weights from dictionary definition."""
        return cls(**definition)

    def with_moisture_weight(self, moisture_weight: float) -> "FactorWeights":
        """
        Return weights with a new moisture weight.

        The remaining weight is shared by the other three factors in their
        current proportions, so the total is unchanged.
        """
        if moisture_weight == self.moisture_adequacy:
            return self
        others = self.yield_consistency + self.soil_quality + self.seasonal_performance
        if others <= 0:
            return replace(self, moisture_adequacy=moisture_weight)
        scale = (self.total - moisture_weight) / others
        return FactorWeights(
            yield_consistency=self.yield_consistency * scale,
            soil_quality=self.soil_quality * scale,
            moisture_adequacy=moisture_weight,
            seasonal_performance=self.seasonal_performance * scale,
        )

    @property
    def total(self) -> float:
        return (
            self.yield_consistency
            + self.soil_quality
            + self.moisture_adequacy
            + self.seasonal_performance
        )
