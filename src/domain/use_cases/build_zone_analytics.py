"""Use case for building detailed analytics over stored zones."""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pandas as pd

from ..entities.farm_profile import FarmProfile
from ..entities.farm_zone import FarmZone
from ..entities.zone_type import ZoneType

logger = logging.getLogger(__name__)


class BuildZoneAnalyticsUseCase:
    """Use case to summarize zone distribution, scores and crop performance."""

    def __init__(
        self,
        high_performer_score: float = 85.0,
        improvement_band=(50.0, 75.0),
        expected_yield_ranges: Optional[Mapping[str, Tuple[float, float]]] = None,
    ):
        """
        Initialize use case.

        Args:
            high_performer_score: Minimum score of a high-performing farm
            improvement_band: Score range [low, high) of improvement candidates
            expected_yield_ranges: Typical (min, max) average yield per crop,
                used to count yield outliers in the crop breakdown
        """
        self.high_performer_score = high_performer_score
        self.improvement_band = improvement_band
        self.expected_yield_ranges = dict(expected_yield_ranges or {})

    def count_yield_outliers(self, crop_type: str, average_yields: pd.Series) -> int:
        """Farms whose average yield lies outside the crop's expected range."""
        if crop_type not in self.expected_yield_ranges:
            return 0
        low, high = self.expected_yield_ranges[crop_type]
        return int((~average_yields.between(low, high)).sum())

    def execute(
        self,
        zones: List[FarmZone],
        profiles: Optional[Mapping[str, FarmProfile]] = None,
    ) -> Dict[str, Any]:
        """
        Execute analytics.

        Args:
            zones: Stored farm zones
            profiles: Farm profiles by id, used for the crop breakdown

        Returns:
            Dictionary with zone_distribution, average_scores_by_zone,
            total_farms, performance_metrics and crop_type_analysis
        """
        profiles = profiles or {}
        empty_by_zone = {zone_type.value: 0 for zone_type in ZoneType}

        if not zones:
            return {
                "zone_distribution": dict(empty_by_zone),
                "average_scores_by_zone": {k: 0.0 for k in empty_by_zone},
                "total_farms": 0,
                "performance_metrics": {
                    "high_performing_farms": 0,
                    "improvement_candidates": 0,
                    "critical_farms": 0,
                },
                "crop_type_analysis": [],
            }

        df = pd.DataFrame(
            [
                {
                    "farm_profile_id": z.farm_profile_id,
                    "zone_type": z.zone_type.value,
                    "productivity_score": z.productivity_score,
                    "average_yield": z.average_yield,
                    "crop_type": (
                        profiles[z.farm_profile_id].crop_type
                        if z.farm_profile_id in profiles
                        and profiles[z.farm_profile_id].crop_type
                        else "Unknown"
                    ),
                }
                for z in zones
            ]
        )
        logger.info(f"Building analytics for {len(df)} farm zones")

        distribution = {**empty_by_zone, **df["zone_type"].value_counts().to_dict()}
        mean_scores = df.groupby("zone_type")["productivity_score"].mean().round(2)
        average_scores = {k: float(mean_scores.get(k, 0.0)) for k in empty_by_zone}

        low, high = self.improvement_band
        scores = df["productivity_score"]
        performance = {
            "high_performing_farms": int((scores >= self.high_performer_score).sum()),
            "improvement_candidates": int(((scores >= low) & (scores < high)).sum()),
            "critical_farms": int((df["zone_type"] == ZoneType.LOW_YIELD.value).sum()),
        }

        crop_analysis = []
        for crop_type, group in df.groupby("crop_type"):
            crop_analysis.append(
                {
                    "crop_type": crop_type,
                    "average_score": round(float(group["productivity_score"].mean()), 2),
                    "yield_outliers": self.count_yield_outliers(
                        crop_type, group["average_yield"]
                    ),
                    "zone_distribution": {
                        **empty_by_zone,
                        **{k: int(v) for k, v in group["zone_type"].value_counts().items()},
                    },
                }
            )

        return {
            "zone_distribution": {k: int(v) for k, v in distribution.items()},
            "average_scores_by_zone": average_scores,
            "total_farms": int(len(df)),
            "performance_metrics": performance,
            "crop_type_analysis": crop_analysis,
        }
