"""Tests for the farm zone classifier service."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from src.domain.entities.farm_profile import FarmProfile
from src.domain.entities.historical_record import HistoricalRecord
from src.domain.entities.zone_type import ZoneType
from src.domain.exceptions import (
    EmptyYieldData,
    FarmProfileNotFound,
    FarmZoneAlreadyExists,
    FarmZoneNotFound,
)


def test_classify_farm_stores_zone(service):
    """Test that classifying a farm stores its zone."""
    result = service.classify_farm("farm-high")

    assert result.zone_type == ZoneType.HIGH_YIELD
    assert result.farm_profile_id == "farm-high"

    zone = service.find_by_farm_profile("farm-high")
    assert zone is not None
    assert zone.zone_type == ZoneType.HIGH_YIELD
    assert zone.productivity_score == pytest.approx(result.productivity_score)


def test_classify_farm_returns_stored_result(service, profile_repo, low_yield_record):
    """Test that a stored zone is reused unless recalculation is forced."""
    first = service.classify_farm("farm-moderate")
    assert first.zone_type == ZoneType.MODERATE_YIELD

    profile_repo.save_profile(
        FarmProfile(id="farm-moderate", historical_record=low_yield_record)
    )

    cached = service.classify_farm("farm-moderate")
    assert cached.zone_type == ZoneType.MODERATE_YIELD

    forced = service.classify_farm("farm-moderate", force_recalculation=True)
    assert forced.zone_type == ZoneType.LOW_YIELD
    assert len(service.find_all()) == 1
    assert service.find_by_farm_profile("farm-moderate").zone_type == ZoneType.LOW_YIELD


def test_classify_farm_errors(service):
    """Test unknown profiles and profiles without history."""
    with pytest.raises(FarmProfileNotFound):
        service.classify_farm("missing")
    with pytest.raises(EmptyYieldData):
        service.classify_farm("farm-empty")


def test_crop_thresholds_apply(service, high_yield_record):
    """Test that crop thresholds change the zone of the same record."""
    assert service.classify_record(high_yield_record).zone_type == ZoneType.HIGH_YIELD
    assert (
        service.classify_record(high_yield_record, crop_type="Cassava").zone_type
        == ZoneType.LOW_YIELD
    )
    assert (
        service.classify_record(high_yield_record, crop_type="Unlisted").zone_type
        == ZoneType.HIGH_YIELD
    )


def test_regional_adjustment_applies(service):
    """Test regional weights and yield adjustment."""
    record = HistoricalRecord(
        yields=[3.6] * 5, soil_quality_scores=[9.0] * 5, moisture_levels=[55.0] * 5
    )
    middle_belt = service.classify_record(record, region="Middle Belt")
    northern = service.classify_record(record, region="Northern Nigeria")

    assert middle_belt.zone_type == ZoneType.HIGH_YIELD
    assert middle_belt.productivity_score == pytest.approx(77.5)
    assert northern.zone_type == ZoneType.MODERATE_YIELD
    assert northern.productivity_score == pytest.approx(80.5)


def test_create_and_duplicate(service, high_yield_record):
    """Test zone creation and the one-zone-per-farm rule."""
    zone = service.create("farm-high", high_yield_record)
    assert zone.zone_type == ZoneType.HIGH_YIELD
    assert zone.average_yield == pytest.approx(4.72)

    with pytest.raises(FarmZoneAlreadyExists):
        service.create("farm-high", high_yield_record)
    with pytest.raises(FarmProfileNotFound):
        service.create("missing", high_yield_record)


def test_create_with_explicit_metrics(service, high_yield_record):
    """Test that explicit metrics override the computed ones."""
    zone = service.create(
        "farm-moderate", high_yield_record, average_yield=1.5, productivity_score=80.0
    )
    assert zone.zone_type == ZoneType.LOW_YIELD
    assert zone.productivity_score == 80.0


def test_update_recomputes_from_history(service, high_yield_record, low_yield_record):
    """Test that new history reclassifies the zone."""
    zone = service.create("farm-moderate", high_yield_record)

    updated = service.update(zone.id, historical_record=low_yield_record)
    assert updated.zone_type == ZoneType.LOW_YIELD
    assert updated.average_yield == pytest.approx(1.7)
    assert updated.created_at == zone.created_at

    metrics_only = service.update(zone.id, average_yield=4.0, productivity_score=90.0)
    assert metrics_only.zone_type == ZoneType.HIGH_YIELD
    assert metrics_only.historical_record == low_yield_record


def test_find_and_remove(service, high_yield_record, low_yield_record):
    """Test lookups, filtering and deletion."""
    high = service.create("farm-high", high_yield_record)
    service.create("farm-low", low_yield_record)

    assert service.find_one(high.id).farm_profile_id == "farm-high"
    assert [z.farm_profile_id for z in service.find_all(ZoneType.LOW_YIELD)] == ["farm-low"]

    service.remove(high.id)
    with pytest.raises(FarmZoneNotFound):
        service.find_one(high.id)
    with pytest.raises(FarmZoneNotFound):
        service.remove(high.id)
    assert service.find_by_farm_profile("farm-high") is None


def test_bulk_classify(service):
    """Test bulk classification with failures."""
    summary = service.bulk_classify_farms(["farm-high", "farm-low", "farm-empty", "missing"])

    assert summary.total_processed == 4
    assert summary.successful == 2
    assert summary.failed == 2
    assert {e["farm_profile_id"] for e in summary.errors} == {"farm-empty", "missing"}
    assert len(service.find_all()) == 2


def test_statistics_and_analytics(service):
    """Test statistics and analytics over classified farms."""
    service.bulk_classify_farms(["farm-high", "farm-moderate", "farm-low"])

    stats = service.get_zone_statistics()
    assert stats == {
        ZoneType.HIGH_YIELD: 1,
        ZoneType.MODERATE_YIELD: 1,
        ZoneType.LOW_YIELD: 1,
    }
    assert sum(stats.values()) == len(service.find_all())

    analytics = service.get_detailed_analytics()
    assert analytics["total_farms"] == 3
    crops = {entry["crop_type"] for entry in analytics["crop_type_analysis"]}
    assert crops == {"Maize", "Rice", "Unknown"}


def test_critical_farms(service):
    """Test that only low-yield farms are reported as critical."""
    service.bulk_classify_farms(["farm-high", "farm-low"])

    critical = service.get_critical_farms()
    assert [c.farm_zone.farm_profile_id for c in critical] == ["farm-low"]
    # Score above 50, average yield 1.7 and no declining trend
    assert critical[0].urgency_score == pytest.approx(15.0)
    assert "Poor soil quality" in critical[0].critical_factors


def test_improvement_strategies(service):
    """Test strategies lookup per zone."""
    strategies = service.get_improvement_strategies(ZoneType.LOW_YIELD)
    assert strategies["strategies"]
    assert all("title" in s for s in strategies["strategies"])
    assert strategies["success_metrics"]


def test_predict_future_classification(service):
    """Test prediction from the profile history and its errors."""
    prediction = service.predict_future_classification("farm-high")
    assert prediction.current_zone == ZoneType.HIGH_YIELD
    assert prediction.timeframe == "next 2 seasons"

    with pytest.raises(FarmProfileNotFound):
        service.predict_future_classification("missing")
    with pytest.raises(EmptyYieldData):
        service.predict_future_classification("farm-empty")


def test_concurrent_create_keeps_one_zone(service, high_yield_record):
    """Test that concurrent creates for one farm store a single zone."""

    def create(_):
        try:
            service.create("farm-high", high_yield_record)
            return "created"
        except FarmZoneAlreadyExists:
            return "duplicate"

    with ThreadPoolExecutor(max_workers=8) as executor:
        outcomes = list(executor.map(create, range(16)))

    assert outcomes.count("created") == 1
    assert len(service.find_all()) == 1


def test_concurrent_classify_keeps_one_zone(service):
    """Test that concurrent forced classifications upsert a single zone."""
    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(
            executor.map(
                lambda _: service.classify_farm("farm-low", force_recalculation=True), range(16)
            )
        )

    assert {r.zone_type for r in results} == {ZoneType.LOW_YIELD}
    assert len(service.find_all()) == 1


def test_analytics_flags_crop_yield_outliers(service, high_yield_record, low_yield_record):
    """Test that analytics use the configured expected yield range per crop."""
    service.create("farm-high", high_yield_record, average_yield=7.5)
    service.create("farm-low", low_yield_record)

    crops = {
        entry["crop_type"]: entry
        for entry in service.get_detailed_analytics()["crop_type_analysis"]
    }
    # Maize expects 2.0-6.0 t/ha, Rice 1.5-5.0 t/ha
    assert crops["Maize"]["yield_outliers"] == 1
    assert crops["Rice"]["yield_outliers"] == 0
