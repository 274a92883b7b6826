"""Shared fixtures."""

import pytest
from src.application.services.farm_zone_classifier_service import FarmZoneClassifierService
from src.domain.entities.farm_profile import FarmProfile
from src.domain.entities.historical_record import HistoricalRecord
from src.infrastructure.repositories.in_memory_repositories import (
    InMemoryFarmProfileRepository,
    InMemoryFarmZoneRepository,
)
from config.settings import (
    DEFAULT_THRESHOLDS,
    FACTOR_WEIGHTS,
    CROP_CONFIGS,
    REGIONAL_ADJUSTMENTS,
    URGENCY_SETTINGS,
    TREND_SETTINGS,
    IMPROVEMENT_STRATEGIES,
)

SEASONS = ["2021-Wet", "2021-Dry", "2022-Wet", "2022-Dry", "2023-Wet"]


@pytest.fixture
def high_yield_record():
    return HistoricalRecord(
        yields=[4.5, 4.8, 4.6, 5.0, 4.7],
        seasons=list(SEASONS),
        soil_quality_scores=[8.5, 9.0, 8.7, 9.2, 8.8],
        moisture_levels=[55, 60, 58, 62, 59],
    )


@pytest.fixture
def moderate_yield_record():
    return HistoricalRecord(
        yields=[2.8, 3.2, 2.9, 3.5, 3.1],
        seasons=list(SEASONS),
        soil_quality_scores=[6.0, 6.5, 6.2, 6.8, 6.3],
        moisture_levels=[45, 50, 48, 52, 49],
    )


@pytest.fixture
def low_yield_record():
    return HistoricalRecord(
        yields=[1.5, 1.8, 1.6, 1.9, 1.7],
        seasons=list(SEASONS),
        soil_quality_scores=[3.0, 3.5, 3.2, 3.8, 3.3],
        moisture_levels=[25, 30, 28, 32, 29],
    )


@pytest.fixture
def profile_repo(high_yield_record, moderate_yield_record, low_yield_record):
    return InMemoryFarmProfileRepository(
        [
            FarmProfile(id="farm-high", crop_type="Maize", historical_record=high_yield_record),
            FarmProfile(id="farm-moderate", historical_record=moderate_yield_record),
            FarmProfile(id="farm-low", crop_type="Rice", historical_record=low_yield_record),
            FarmProfile(id="farm-empty"),
        ]
    )


@pytest.fixture
def service(profile_repo):
    return FarmZoneClassifierService(
        farm_profile_repo=profile_repo,
        farm_zone_repo=InMemoryFarmZoneRepository(),
        default_thresholds=DEFAULT_THRESHOLDS,
        factor_weights=FACTOR_WEIGHTS,
        crop_configs=CROP_CONFIGS,
        regional_adjustments=REGIONAL_ADJUSTMENTS,
        urgency_settings=URGENCY_SETTINGS,
        trend_settings=TREND_SETTINGS,
        improvement_strategies=IMPROVEMENT_STRATEGIES,
    )
