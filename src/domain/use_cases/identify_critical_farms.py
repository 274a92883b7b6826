"""Use case for ranking low-yield farms by urgency."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import numpy as np

from ..entities.classification_thresholds import ClassificationThresholds
from ..entities.farm_zone import FarmZone
from ..entities.zone_type import ZoneType
from .classify_farm_zone import compute_factors

logger = logging.getLogger(__name__)


@dataclass
class CriticalFarm:
    """A low-yield farm with its urgency score (0-100) and the reasons for it."""

    farm_zone: FarmZone
    urgency_score: float
    critical_factors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "farm_zone": self.farm_zone.to_dict(),
            "urgency_score": self.urgency_score,
            "critical_factors": list(self.critical_factors),
        }


class IdentifyCriticalFarmsUseCase:
    """Use case to find farms that need immediate attention."""

    def __init__(
        self,
        thresholds: Optional[ClassificationThresholds] = None,
        base_multiplier: float = 2.0,
        critical_yield_threshold: float = 1.5,
        severe_yield_threshold: float = 2.0,
        critical_yield_penalty: float = 25.0,
        severe_yield_penalty: float = 15.0,
        declining_trend_penalty: float = 25.0,
    ):
        self.thresholds = thresholds or ClassificationThresholds()
        self.base_multiplier = base_multiplier
        self.critical_yield_threshold = critical_yield_threshold
        self.severe_yield_threshold = severe_yield_threshold
        self.critical_yield_penalty = critical_yield_penalty
        self.severe_yield_penalty = severe_yield_penalty
        self.declining_trend_penalty = declining_trend_penalty

    @staticmethod
    def is_declining(yields: List[float]) -> bool:
        """More season-to-season drops than rises."""
        if len(yields) < 2:
            return False
        diffs = np.diff(np.asarray(yields, dtype=float))
        return int((diffs < 0).sum()) > int((diffs > 0).sum())

    def score(self, zone: FarmZone) -> CriticalFarm:
        """Compute the urgency of one zone."""
        gap = self.thresholds.low_max_score - zone.productivity_score
        urgency = max(0.0, gap * self.base_multiplier)
        reasons = []

        if zone.average_yield < self.critical_yield_threshold:
            urgency += self.critical_yield_penalty
            reasons.append("Critically low average yield")
        elif zone.average_yield < self.severe_yield_threshold:
            urgency += self.severe_yield_penalty
            reasons.append("Severely low average yield")

        if self.is_declining(zone.historical_record.yields):
            urgency += self.declining_trend_penalty
            reasons.append("Declining yield trend")

        if zone.historical_record.yields:
            factors = compute_factors(zone.historical_record)
            if factors.soil_quality < 40:
                reasons.append("Poor soil quality")
            if factors.moisture_adequacy < 50:
                reasons.append("Inadequate moisture")

        return CriticalFarm(
            farm_zone=zone,
            urgency_score=round(min(100.0, urgency), 2),
            critical_factors=reasons,
        )

    def execute(self, zones: Iterable[FarmZone]) -> List[CriticalFarm]:
        """
        Rank low-yield zones by urgency, most urgent first.

        Args:
            zones: Stored farm zones

        Returns:
            List of CriticalFarm, sorted by descending urgency
        """
        critical = [
            self.score(zone) for zone in zones if zone.zone_type == ZoneType.LOW_YIELD
        ]
        critical.sort(key=lambda c: c.urgency_score, reverse=True)
        logger.info(f"Identified {len(critical)} critical farms")
        return critical
