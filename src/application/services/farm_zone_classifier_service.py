"""Service orchestrating farm zone classification, storage and analytics."""

import logging
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ...domain.entities.classification_result import (
    BulkClassificationResult,
    ClassificationResult,
)
from ...domain.entities.classification_thresholds import ClassificationThresholds, FactorWeights
from ...domain.entities.farm_profile import FarmProfile
from ...domain.entities.farm_zone import FarmZone
from ...domain.entities.historical_record import HistoricalRecord
from ...domain.entities.zone_type import ZoneType
from ...domain.exceptions import (
    EmptyYieldData,
    FarmProfileNotFound,
    FarmZoneAlreadyExists,
    FarmZoneNotFound,
)
from ...domain.repositories.farm_profile_repository import FarmProfileRepository
from ...domain.repositories.farm_zone_repository import FarmZoneRepository

# Use cases
from ...domain.use_cases.classify_farm_zone import (
    ClassifyFarmZoneUseCase,
    classify_zone,
    compute_confidence,
    compute_factors,
    compute_productivity_score,
    generate_recommendations,
)
from ...domain.use_cases.bulk_classify_farms import BulkClassifyFarmsUseCase
from ...domain.use_cases.compute_zone_statistics import ComputeZoneStatisticsUseCase
from ...domain.use_cases.build_zone_analytics import BuildZoneAnalyticsUseCase
from ...domain.use_cases.identify_critical_farms import (
    CriticalFarm,
    IdentifyCriticalFarmsUseCase,
)
from ...domain.use_cases.predict_future_zone import PredictFutureZoneUseCase, ZonePrediction

logger = logging.getLogger(__name__)


class FarmZoneClassifierService:
    """Orchestrates farm zone classification on top of the profile and zone stores."""

    def __init__(
        self,
        farm_profile_repo: FarmProfileRepository,
        farm_zone_repo: FarmZoneRepository,
        default_thresholds: Optional[Dict[str, float]] = None,
        factor_weights: Optional[Dict[str, float]] = None,
        crop_configs: Optional[Mapping[str, Dict[str, Any]]] = None,
        regional_adjustments: Optional[Mapping[str, Dict[str, float]]] = None,
        urgency_settings: Optional[Dict[str, float]] = None,
        trend_settings: Optional[Dict[str, Any]] = None,
        improvement_strategies: Optional[Mapping[str, Dict[str, Any]]] = None,
    ):
        self.farm_profile_repo = farm_profile_repo
        self.farm_zone_repo = farm_zone_repo
        # Serializes check-then-write on the zone store (one zone per farm)
        self._zone_lock = threading.RLock()

        # Convert definitions to domain entities
        self.default_thresholds = ClassificationThresholds.from_dict(default_thresholds or {})
        self.factor_weights = (
            FactorWeights.from_dict(factor_weights) if factor_weights else FactorWeights()
        )
        self.crop_thresholds = {
            crop: ClassificationThresholds.from_dict(config.get("thresholds", {}))
            for crop, config in (crop_configs or {}).items()
        }
        self.regional_adjustments = dict(regional_adjustments or {})
        self.improvement_strategies = dict(improvement_strategies or {})
        self.trend_settings = dict(trend_settings or {})

        # Use cases
        self.statistics_uc = ComputeZoneStatisticsUseCase()
        self.analytics_uc = BuildZoneAnalyticsUseCase(
            expected_yield_ranges={
                crop: tuple(config["expected_yield_range"])
                for crop, config in (crop_configs or {}).items()
                if "expected_yield_range" in config
            }
        )
        self.critical_farms_uc = IdentifyCriticalFarmsUseCase(
            thresholds=self.default_thresholds, **(urgency_settings or {})
        )

    # ------------------------------------------------------------------
    # Classification configuration
    # ------------------------------------------------------------------

    def classifier_for(
        self, crop_type: Optional[str] = None, region: Optional[str] = None
    ) -> ClassifyFarmZoneUseCase:
        """Build a classifier with crop thresholds and regional adjustments applied."""
        thresholds = self.crop_thresholds.get(crop_type or "", self.default_thresholds)
        weights = self.factor_weights
        yield_adjustment = 1.0

        adjustment = self.regional_adjustments.get(region or "")
        if adjustment:
            yield_adjustment = adjustment.get("yield_adjustment", 1.0)
            if "moisture_weight" in adjustment:
                weights = weights.with_moisture_weight(adjustment["moisture_weight"])

        return ClassifyFarmZoneUseCase(
            thresholds=thresholds, weights=weights, yield_adjustment=yield_adjustment
        )

    def _classifier_for_profile(self, farm_profile_id: str) -> ClassifyFarmZoneUseCase:
        profile = self.farm_profile_repo.get_profile(farm_profile_id)
        if profile is None:
            return self.classifier_for()
        return self.classifier_for(profile.crop_type, profile.region)

    def _require_profile(self, farm_profile_id: str) -> FarmProfile:
        profile = self.farm_profile_repo.get_profile(farm_profile_id)
        if profile is None:
            raise FarmProfileNotFound(f"Farm profile with ID {farm_profile_id} not found")
        return profile

    def _zone_type(
        self, classifier: ClassifyFarmZoneUseCase, productivity_score: float, average_yield: float
    ) -> ZoneType:
        return classify_zone(
            productivity_score,
            average_yield * classifier.yield_adjustment,
            classifier.thresholds,
        )

    def classify_record(
        self,
        record: HistoricalRecord,
        crop_type: Optional[str] = None,
        region: Optional[str] = None,
    ) -> ClassificationResult:
        """Classify a record without storing anything."""
        return self.classifier_for(crop_type, region).execute(record)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create(
        self,
        farm_profile_id: str,
        historical_record: HistoricalRecord,
        average_yield: Optional[float] = None,
        productivity_score: Optional[float] = None,
    ) -> FarmZone:
        """
        Create the zone classification of a farm profile.

        Args:
            farm_profile_id: Farm profile identifier
            historical_record: History to classify
            average_yield: Explicit average yield (computed when omitted)
            productivity_score: Explicit productivity score (computed when omitted)

        Returns:
            The stored FarmZone
        """
        profile = self._require_profile(farm_profile_id)

        classifier = self.classifier_for(profile.crop_type, profile.region)
        if average_yield is None:
            average_yield = historical_record.average_yield
        if productivity_score is None:
            productivity_score = compute_productivity_score(historical_record, classifier.weights)

        zone = FarmZone(
            farm_profile_id=farm_profile_id,
            zone_type=self._zone_type(classifier, productivity_score, average_yield),
            historical_record=historical_record,
            average_yield=average_yield,
            productivity_score=productivity_score,
        )

        with self._zone_lock:
            if self.farm_zone_repo.get_by_farm_profile(farm_profile_id) is not None:
                raise FarmZoneAlreadyExists(
                    f"Farm zone already exists for farm profile {farm_profile_id}"
                )
            self.farm_zone_repo.save(zone)
        logger.info(f"Created farm zone {zone.id} for {farm_profile_id}: {zone.zone_type.value}")
        return zone

    def find_all(self, zone_type: Optional[ZoneType] = None) -> List[FarmZone]:
        """Retrieve all farm zones, optionally filtered by zone type."""
        return self.farm_zone_repo.list_zones(zone_type)

    def find_one(self, zone_id: str) -> FarmZone:
        """Retrieve a farm zone by id."""
        zone = self.farm_zone_repo.get(zone_id)
        if zone is None:
            raise FarmZoneNotFound(f"Farm zone with ID {zone_id} not found")
        return zone

    def find_by_farm_profile(self, farm_profile_id: str) -> Optional[FarmZone]:
        """Retrieve the farm zone of a farm profile, if any."""
        return self.farm_zone_repo.get_by_farm_profile(farm_profile_id)

    def update(
        self,
        zone_id: str,
        historical_record: Optional[HistoricalRecord] = None,
        average_yield: Optional[float] = None,
        productivity_score: Optional[float] = None,
    ) -> FarmZone:
        """
        Update a farm zone and reclassify it.

        New history recomputes the metrics unless they are given explicitly;
        without new history only the explicit metrics change.
        """
        with self._zone_lock:
            zone = self.find_one(zone_id)
            classifier = self._classifier_for_profile(zone.farm_profile_id)

            if historical_record is not None:
                zone.historical_record = historical_record
                zone.average_yield = (
                    average_yield
                    if average_yield is not None
                    else historical_record.average_yield
                )
                zone.productivity_score = (
                    productivity_score
                    if productivity_score is not None
                    else compute_productivity_score(historical_record, classifier.weights)
                )
            else:
                if average_yield is not None:
                    zone.average_yield = average_yield
                if productivity_score is not None:
                    zone.productivity_score = productivity_score

            zone.zone_type = self._zone_type(
                classifier, zone.productivity_score, zone.average_yield
            )
            zone.touch()
            self.farm_zone_repo.save(zone)
        logger.info(f"Updated farm zone {zone.id}: {zone.zone_type.value}")
        return zone

    def remove(self, zone_id: str) -> None:
        """Delete a farm zone."""
        zone = self.find_one(zone_id)
        self.farm_zone_repo.delete(zone.id)
        logger.info(f"Removed farm zone {zone.id}")

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def to_classification_result(self, zone: FarmZone) -> ClassificationResult:
        """Describe a stored zone as a classification result."""
        record = zone.historical_record
        if record.yields:
            factors = compute_factors(record)
        else:
            factors = compute_factors(HistoricalRecord(yields=[zone.average_yield]))

        return ClassificationResult(
            zone_type=zone.zone_type,
            productivity_score=zone.productivity_score,
            average_yield=zone.average_yield,
            confidence=compute_confidence(record),
            factors=factors,
            recommendations=tuple(generate_recommendations(zone.zone_type, factors)),
            farm_profile_id=zone.farm_profile_id,
        )

    def classify_farm(
        self, farm_profile_id: str, force_recalculation: bool = False
    ) -> ClassificationResult:
        """
        Classify a farm from its current history and store the zone.

        Args:
            farm_profile_id: Farm profile identifier
            force_recalculation: Recompute even if a zone is already stored

        Returns:
            ClassificationResult
        """
        profile = self._require_profile(farm_profile_id)

        existing = self.farm_zone_repo.get_by_farm_profile(farm_profile_id)
        if existing is not None and not force_recalculation:
            return self.to_classification_result(existing)

        record = self.farm_profile_repo.get_historical_record(farm_profile_id)
        if record is None or not record.yields:
            raise EmptyYieldData(f"No historical yield data for farm profile {farm_profile_id}")

        result = self.classifier_for(profile.crop_type, profile.region).execute(
            record, farm_profile_id=farm_profile_id
        )

        self._upsert_zone(farm_profile_id, record, result)

        logger.info(
            f"Classified farm {farm_profile_id}: {result.zone_type.value} "
            f"(score {result.productivity_score:.2f}, confidence {result.confidence})"
        )
        return result

    def _upsert_zone(
        self, farm_profile_id: str, record: HistoricalRecord, result: ClassificationResult
    ) -> FarmZone:
        """Store a classification as the single zone of a farm profile."""
        with self._zone_lock:
            zone = self.farm_zone_repo.get_by_farm_profile(farm_profile_id)
            if zone is not None:
                zone.historical_record = record
                zone.average_yield = result.average_yield
                zone.productivity_score = result.productivity_score
                zone.zone_type = result.zone_type
                zone.touch()
            else:
                zone = FarmZone(
                    farm_profile_id=farm_profile_id,
                    zone_type=result.zone_type,
                    historical_record=record,
                    average_yield=result.average_yield,
                    productivity_score=result.productivity_score,
                )
            return self.farm_zone_repo.save(zone)

    def bulk_classify_farms(
        self, farm_profile_ids: Iterable[str], force_recalculation: bool = False
    ) -> BulkClassificationResult:
        """Classify several farms, continuing past individual failures."""
        use_case = BulkClassifyFarmsUseCase(
            lambda farm_profile_id: self.classify_farm(farm_profile_id, force_recalculation)
        )
        return use_case.execute(farm_profile_ids)

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------

    def get_zone_statistics(self) -> Dict[ZoneType, int]:
        """Count stored farms per zone."""
        return self.statistics_uc.execute(self.farm_zone_repo.list_zones())

    def get_detailed_analytics(self) -> Dict[str, Any]:
        """Zone distribution, scores, performance metrics and crop breakdown."""
        profiles = {p.id: p for p in self.farm_profile_repo.list_profiles()}
        return self.analytics_uc.execute(self.farm_zone_repo.list_zones(), profiles)

    def get_critical_farms(self) -> List[CriticalFarm]:
        """Low-yield farms ranked by urgency."""
        return self.critical_farms_uc.execute(
            self.farm_zone_repo.list_zones(ZoneType.LOW_YIELD)
        )

    def get_improvement_strategies(self, zone_type: ZoneType) -> Dict[str, Any]:
        """Improvement strategies and success metrics for a zone."""
        entry = self.improvement_strategies.get(zone_type.value, {})
        return {
            "strategies": list(entry.get("strategies", [])),
            "success_metrics": list(entry.get("success_metrics", [])),
        }

    def predict_future_classification(self, farm_profile_id: str) -> ZonePrediction:
        """
        Project the zone of a farm from the trends in its history.

        Uses the stored zone history when present, otherwise the profile's
        current history.
        """
        profile = self._require_profile(farm_profile_id)

        zone = self.farm_zone_repo.get_by_farm_profile(farm_profile_id)
        record = zone.historical_record if zone else profile.historical_record
        if record is None or not record.yields:
            raise EmptyYieldData(f"No historical yield data for farm profile {farm_profile_id}")

        use_case = PredictFutureZoneUseCase(
            classifier=self.classifier_for(profile.crop_type, profile.region),
            **self.trend_settings,
        )
        return use_case.execute(record)
