"""Tests for future zone prediction."""

import pytest
from src.domain.entities.historical_record import HistoricalRecord
from src.domain.entities.zone_type import ZoneType
from src.domain.exceptions import EmptyYieldData
from src.domain.use_cases.predict_future_zone import (
    DECLINING,
    IMPROVING,
    STABLE,
    PredictFutureZoneUseCase,
)


def test_fit_trend_directions():
    """Test trend direction from the relative slope."""
    use_case = PredictFutureZoneUseCase()

    rising = use_case.fit_trend([2.0, 2.5, 3.0, 3.5, 4.0])
    assert rising.direction == IMPROVING
    assert rising.slope == pytest.approx(0.5)
    assert rising.r2 == pytest.approx(1.0)
    assert rising.projection == pytest.approx((4.5, 5.0))

    assert use_case.fit_trend([4.0, 3.5, 3.0, 2.5, 2.0]).direction == DECLINING
    assert use_case.fit_trend([3.0, 3.01, 3.0, 3.01, 3.0]).direction == STABLE


def test_fit_trend_flat_series():
    """Test that a constant series is stable with a perfect fit."""
    trend = PredictFutureZoneUseCase().fit_trend([55.0] * 5, upper=100.0)
    assert trend.direction == STABLE
    assert trend.r2 == 1.0
    assert trend.projection == pytest.approx((55.0, 55.0))


def test_fit_trend_short_and_empty_series():
    """Test that short series project their mean and empty ones nothing."""
    use_case = PredictFutureZoneUseCase()

    short = use_case.fit_trend([3.0, 3.4])
    assert short.direction == STABLE
    assert short.projection == pytest.approx((3.2, 3.2))

    empty = use_case.fit_trend([])
    assert empty.direction == STABLE
    assert empty.projection == ()


def test_fit_trend_clips_projection():
    """Test that projections respect the bounds."""
    trend = PredictFutureZoneUseCase().fit_trend([6.0, 8.0, 10.0], lower=0.0, upper=10.0)
    assert trend.projection == pytest.approx((10.0, 10.0))

    falling = PredictFutureZoneUseCase().fit_trend([1.0, 0.5, 0.1], lower=0.0)
    assert min(falling.projection) >= 0.0


def test_declining_farm_drops_to_low_yield():
    """Test a steadily declining farm projected four seasons ahead."""
    record = HistoricalRecord(
        yields=[3.0, 2.7, 2.4, 2.1, 1.8],
        seasons=["2021-Wet", "2021-Dry", "2022-Wet", "2022-Dry", "2023-Wet"],
        soil_quality_scores=[6.0] * 5,
        moisture_levels=[55.0] * 5,
    )
    prediction = PredictFutureZoneUseCase(horizon=4).execute(record)

    assert prediction.current_zone == ZoneType.MODERATE_YIELD
    assert prediction.predicted_zone == ZoneType.LOW_YIELD
    assert prediction.trend_analysis == {
        "yield_trend": DECLINING,
        "soil_trend": STABLE,
        "moisture_trend": STABLE,
    }
    assert prediction.confidence == 100
    assert prediction.timeframe == "next 4 seasons"
    assert len(prediction.projected_record) == 9
    assert prediction.projected_record.seasons[-1] == "projected-4"


def test_short_history_halves_confidence():
    """Test that a history too short for a trend keeps the zone and halves confidence."""
    record = HistoricalRecord(
        yields=[3.0, 3.2], soil_quality_scores=[6.0, 6.0], moisture_levels=[50.0, 50.0]
    )
    prediction = PredictFutureZoneUseCase().execute(record)

    assert prediction.predicted_zone == prediction.current_zone
    assert prediction.trend_analysis["yield_trend"] == STABLE
    assert prediction.confidence == 20


def test_prediction_to_dict(high_yield_record):
    """Test the serialized prediction."""
    data = PredictFutureZoneUseCase().execute(high_yield_record).to_dict()
    assert data["current_zone"] == "high-yield"
    assert set(data["trend_analysis"]) == {"yield_trend", "soil_trend", "moisture_trend"}
    assert 0 <= data["confidence"] <= 100


def test_prediction_requires_yields():
    """Test that an empty record cannot be projected."""
    with pytest.raises(EmptyYieldData):
        PredictFutureZoneUseCase().execute(HistoricalRecord(yields=[]))


def test_confidence_rounds_halves_up(monkeypatch):
    """Test that a confidence of exactly 50.5 rounds up to 51."""
    monkeypatch.setattr(
        "src.domain.use_cases.predict_future_zone.compute_confidence", lambda record: 101
    )
    record = HistoricalRecord(
        yields=[3.0, 3.2], soil_quality_scores=[6.0, 6.0], moisture_levels=[50.0, 50.0]
    )
    # Too short for a trend, so R² is 0 and confidence is 101 * 0.5
    assert PredictFutureZoneUseCase().execute(record).confidence == 51
