"""Use case for classifying a farm into a productivity zone."""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..entities.classification_result import ClassificationFactors, ClassificationResult
from ..entities.classification_thresholds import ClassificationThresholds, FactorWeights
from ..entities.historical_record import HistoricalRecord
from ..entities.zone_type import ZoneType
from ..exceptions import EmptyYieldData

# (inclusive range of mean moisture, score); first match wins
MOISTURE_BANDS: List[Tuple[Tuple[float, float], float]] = [
    ((40.0, 70.0), 100.0),
    ((30.0, 80.0), 75.0),
    ((20.0, 90.0), 50.0),
]
MOISTURE_FALLBACK_SCORE = 25.0

# Score used when a series is too short to say anything
NEUTRAL_SCORE = 50.0
DEFAULT_SOIL_QUALITY = 5.0

# Number of seasons needed for full confidence
OPTIMAL_DATA_POINTS = 5
INCOMPLETE_DATA_PENALTY = 0.8

RECOMMENDATIONS = {
    ZoneType.HIGH_YIELD: [
        "Maintain current farming practices",
        "Consider expanding cultivation area",
    ],
    ZoneType.MODERATE_YIELD: [
        "Implement soil improvement strategies",
        "Optimize irrigation scheduling",
    ],
    ZoneType.LOW_YIELD: [
        "Urgent intervention required",
        "Comprehensive soil analysis recommended",
        "Consider crop rotation or alternative crops",
        "Implement intensive soil rehabilitation",
    ],
}


def compute_yield_consistency(yields: Sequence[float]) -> float:
    """Score yield stability; a lower coefficient of variation scores higher."""
    if len(yields) < 2:
        return NEUTRAL_SCORE

    values = np.asarray(yields, dtype=float)
    mean = values.mean()
    cv = values.std() / mean if mean > 0 else 1.0
    return float(100.0 - min(100.0, cv * 100.0))


def compute_soil_quality(soil_quality_scores: Sequence[float]) -> float:
    """Rescale the mean 0-10 soil score to 0-100."""
    if len(soil_quality_scores) > 0:
        mean = float(np.mean(soil_quality_scores))
    else:
        mean = DEFAULT_SOIL_QUALITY
    return mean / 10.0 * 100.0


def compute_moisture_adequacy(
    moisture_levels: Sequence[float],
    bands: Sequence[Tuple[Tuple[float, float], float]] = MOISTURE_BANDS,
) -> float:
    """Score the mean moisture level against the moisture bands."""
    if len(moisture_levels) == 0:
        return NEUTRAL_SCORE

    mean = float(np.mean(moisture_levels))
    for (low, high), score in bands:
        if low <= mean <= high:
            return score
    return MOISTURE_FALLBACK_SCORE


def compute_seasonal_performance(yields: Sequence[float]) -> float:
    """Share of season-to-season transitions where yield strictly increased."""
    if len(yields) < 2:
        return NEUTRAL_SCORE

    improvements = int(np.sum(np.diff(np.asarray(yields, dtype=float)) > 0))
    return improvements / (len(yields) - 1) * 100.0


def compute_factors(record: HistoricalRecord) -> ClassificationFactors:
    """Compute all four productivity factors of a record."""
    return ClassificationFactors(
        yield_consistency=compute_yield_consistency(record.yields),
        soil_quality=compute_soil_quality(record.soil_quality_scores),
        moisture_adequacy=compute_moisture_adequacy(record.moisture_levels),
        seasonal_performance=compute_seasonal_performance(record.yields),
    )


def _weighted_score(factors: ClassificationFactors, weights: FactorWeights) -> float:
    score = (
        factors.yield_consistency * weights.yield_consistency
        + factors.soil_quality * weights.soil_quality
        + factors.moisture_adequacy * weights.moisture_adequacy
        + factors.seasonal_performance * weights.seasonal_performance
    )
    return min(100.0, max(0.0, score))


def compute_productivity_score(
    record: HistoricalRecord, weights: Optional[FactorWeights] = None
) -> float:
    """
    Compute the 0-100 productivity score of a record.

    Args:
        record: Historical record of the farm
        weights: Factor weights (default: 0.30/0.25/0.25/0.20)

    Returns:
        Weighted sum of the factors, clamped to [0, 100]

    Raises:
        EmptyYieldData: If the record has no yields
    """
    if not record.yields:
        raise EmptyYieldData("Cannot compute productivity score without yield data")
    return _weighted_score(compute_factors(record), weights or FactorWeights())


def classify_zone(
    productivity_score: float,
    average_yield: float,
    thresholds: Optional[ClassificationThresholds] = None,
) -> ZoneType:
    """
    Assign a productivity zone.

    Rules are checked in order and the first match wins, so a farm with a
    high score but a very low yield still lands in the low-yield zone.
    """
    thresholds = thresholds or ClassificationThresholds()

    if (
        productivity_score >= thresholds.high_min_score
        and average_yield >= thresholds.high_min_yield
    ):
        return ZoneType.HIGH_YIELD

    if (
        productivity_score < thresholds.low_max_score
        or average_yield < thresholds.low_max_yield
    ):
        return ZoneType.LOW_YIELD

    return ZoneType.MODERATE_YIELD


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (50.5 -> 51)."""
    return int(np.floor(value + 0.5))


def compute_confidence(record: HistoricalRecord) -> int:
    """Confidence in a classification from the amount and completeness of data."""
    confidence = min(100.0, len(record.yields) / OPTIMAL_DATA_POINTS * 100.0)
    if not record.is_complete:
        confidence *= INCOMPLETE_DATA_PENALTY
    return round_half_up(confidence)


def generate_recommendations(
    zone_type: ZoneType, factors: ClassificationFactors
) -> List[str]:
    """Build the recommendation list for a zone and its weak factors."""
    recommendations = list(RECOMMENDATIONS[zone_type])

    if zone_type == ZoneType.HIGH_YIELD:
        if factors.yield_consistency < 80:
            recommendations.append("Focus on yield consistency improvements")

    elif zone_type == ZoneType.MODERATE_YIELD:
        if factors.soil_quality < 60:
            recommendations.append("Consider soil testing and fertilization")
        if factors.moisture_adequacy < 70:
            recommendations.append("Improve water management systems")

    elif zone_type == ZoneType.LOW_YIELD:
        if factors.moisture_adequacy < 50:
            recommendations.append("Install proper irrigation systems")

    return recommendations


def classify_record(
    record: HistoricalRecord,
    thresholds: Optional[ClassificationThresholds] = None,
    weights: Optional[FactorWeights] = None,
    yield_adjustment: float = 1.0,
    farm_profile_id: Optional[str] = None,
) -> ClassificationResult:
    """
    Run the full classification pipeline on a record.

    Args:
        record: Historical record of the farm
        thresholds: Zone thresholds (default: 75 / 3.5 / 50 / 2.0)
        weights: Factor weights (default: 0.30/0.25/0.25/0.20)
        yield_adjustment: Regional multiplier applied to the average yield
            when comparing it with the thresholds
        farm_profile_id: Optional id carried into the result

    Returns:
        ClassificationResult

    Raises:
        EmptyYieldData: If the record has no yields
    """
    if not record.yields:
        raise EmptyYieldData("Cannot classify a record without yield data")

    factors = compute_factors(record)
    productivity_score = _weighted_score(factors, weights or FactorWeights())
    average_yield = record.average_yield
    zone_type = classify_zone(productivity_score, average_yield * yield_adjustment, thresholds)

    return ClassificationResult(
        zone_type=zone_type,
        productivity_score=productivity_score,
        average_yield=average_yield,
        confidence=compute_confidence(record),
        factors=factors,
        recommendations=tuple(generate_recommendations(zone_type, factors)),
        farm_profile_id=farm_profile_id,
    )


class ClassifyFarmZoneUseCase:
    """Use case to classify a historical record into a productivity zone."""

    def __init__(
        self,
        thresholds: Optional[ClassificationThresholds] = None,
        weights: Optional[FactorWeights] = None,
        yield_adjustment: float = 1.0,
    ):
        """
        Initialize use case.

        Args:
            thresholds: Zone thresholds (default: ClassificationThresholds())
            weights: Factor weights (default: FactorWeights())
            yield_adjustment: Regional yield multiplier (default: 1.0)
        """
        self.thresholds = thresholds or ClassificationThresholds()
        self.weights = weights or FactorWeights()
        self.yield_adjustment = yield_adjustment

    def execute(
        self, record: HistoricalRecord, farm_profile_id: Optional[str] = None
    ) -> ClassificationResult:
        """Classify a record."""
        return classify_record(
            record,
            thresholds=self.thresholds,
            weights=self.weights,
            yield_adjustment=self.yield_adjustment,
            farm_profile_id=farm_profile_id,
        )
