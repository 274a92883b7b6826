"""Use case for projecting a farm's zone from its historical trends."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from sklearn.linear_model import LinearRegression

from ..entities.historical_record import HistoricalRecord
from ..entities.zone_type import ZoneType
from ..exceptions import EmptyYieldData
from .classify_farm_zone import ClassifyFarmZoneUseCase, compute_confidence, round_half_up

logger = logging.getLogger(__name__)

IMPROVING = "improving"
STABLE = "stable"
DECLINING = "declining"


@dataclass(frozen=True)
class ZonePrediction:
    """Projected zone of a farm a few seasons ahead."""

    current_zone: ZoneType
    predicted_zone: ZoneType
    confidence: int
    timeframe: str
    trend_analysis: Dict[str, str] = field(default_factory=dict)
    projected_record: Optional[HistoricalRecord] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_zone": self.current_zone.value,
            "predicted_zone": self.predicted_zone.value,
            "confidence": self.confidence,
            "timeframe": self.timeframe,
            "trend_analysis": dict(self.trend_analysis),
        }


@dataclass(frozen=True)
class SeriesTrend:
    """Linear trend of one series against season index."""

    direction: str
    slope: float = 0.0
    r2: float = 0.0
    projection: Tuple[float, ...] = ()


class PredictFutureZoneUseCase:
    """Use case to extrapolate yield, soil and moisture trends and reclassify."""

    def __init__(
        self,
        classifier: Optional[ClassifyFarmZoneUseCase] = None,
        relative_slope_tolerance: float = 0.02,
        horizon: int = 2,
        min_points: int = 3,
    ):
        """
        Initialize use case.

        Args:
            classifier: Classifier used for the current and projected records
            relative_slope_tolerance: Slope per season, relative to the series
                mean, below which a series counts as stable
            horizon: Number of seasons to project
            min_points: Minimum series length for fitting a trend
        """
        self.classifier = classifier or ClassifyFarmZoneUseCase()
        self.relative_slope_tolerance = relative_slope_tolerance
        self.horizon = horizon
        self.min_points = min_points

    def fit_trend(
        self, values: List[float], lower: float = 0.0, upper: Optional[float] = None
    ) -> SeriesTrend:
        """
        Fit a least-squares line to a series and project it forward.

        Args:
            values: Series ordered by season
            lower: Lower bound of projected values
            upper: Upper bound of projected values (optional)

        Returns:
            SeriesTrend; too-short series are stable and projected at their mean
        """
        if not values:
            return SeriesTrend(direction=STABLE)

        y = np.asarray(values, dtype=float)
        if len(y) < self.min_points:
            flat = float(np.clip(y.mean(), lower, upper))
            return SeriesTrend(direction=STABLE, projection=(flat,) * self.horizon)

        X = np.arange(len(y)).reshape(-1, 1)
        model = LinearRegression()
        model.fit(X, y)

        fitted = model.predict(X)
        ss_res = float(np.sum((y - fitted) ** 2))
        ss_tot = float(np.sum((y - y.mean()) ** 2))
        r2 = 1.0 if ss_tot == 0 else max(0.0, 1.0 - ss_res / ss_tot)

        slope = float(model.coef_[0])
        mean = float(y.mean())
        relative_slope = slope / abs(mean) if mean != 0 else slope
        if relative_slope > self.relative_slope_tolerance:
            direction = IMPROVING
        elif relative_slope < -self.relative_slope_tolerance:
            direction = DECLINING
        else:
            direction = STABLE

        future = np.arange(len(y), len(y) + self.horizon).reshape(-1, 1)
        projection = np.clip(model.predict(future), lower, upper)

        return SeriesTrend(
            direction=direction,
            slope=slope,
            r2=r2,
            projection=tuple(float(v) for v in projection),
        )

    def execute(self, record: HistoricalRecord) -> ZonePrediction:
        """
        Predict the zone of a farm after the projection horizon.

        Args:
            record: Historical record of the farm

        Returns:
            ZonePrediction

        Raises:
            EmptyYieldData: If the record has no yields
        """
        if not record.yields:
            raise EmptyYieldData("Cannot predict a zone without yield data")

        current = self.classifier.execute(record)

        yield_trend = self.fit_trend(record.yields, lower=0.0)
        soil_trend = self.fit_trend(record.soil_quality_scores, lower=0.0, upper=10.0)
        moisture_trend = self.fit_trend(record.moisture_levels, lower=0.0, upper=100.0)

        projected = HistoricalRecord(
            yields=list(record.yields) + list(yield_trend.projection),
            seasons=list(record.seasons)
            + [f"projected-{i + 1}" for i in range(self.horizon)],
            soil_quality_scores=list(record.soil_quality_scores) + list(soil_trend.projection),
            moisture_levels=list(record.moisture_levels) + list(moisture_trend.projection),
        )
        predicted = self.classifier.execute(projected)

        confidence = round_half_up(compute_confidence(record) * (0.5 + 0.5 * yield_trend.r2))
        logger.info(
            f"Zone projection: {current.zone_type.value} -> {predicted.zone_type.value} "
            f"(yield trend {yield_trend.direction}, confidence {confidence})"
        )

        return ZonePrediction(
            current_zone=current.zone_type,
            predicted_zone=predicted.zone_type,
            confidence=confidence,
            timeframe=f"next {self.horizon} seasons",
            trend_analysis={
                "yield_trend": yield_trend.direction,
                "soil_trend": soil_trend.direction,
                "moisture_trend": moisture_trend.direction,
            },
            projected_record=projected,
        )
