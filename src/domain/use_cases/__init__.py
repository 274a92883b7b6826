"""Use cases - core business operations."""

from .classify_farm_zone import ClassifyFarmZoneUseCase
from .bulk_classify_farms import BulkClassifyFarmsUseCase
from .compute_zone_statistics import ComputeZoneStatisticsUseCase
from .build_zone_analytics import BuildZoneAnalyticsUseCase
from .identify_critical_farms import IdentifyCriticalFarmsUseCase
from .predict_future_zone import PredictFutureZoneUseCase
from .generate_demo_history import GenerateDemoHistoryUseCase

__all__ = [
    "ClassifyFarmZoneUseCase",
    "BulkClassifyFarmsUseCase",
    "ComputeZoneStatisticsUseCase",
    "BuildZoneAnalyticsUseCase",
    "IdentifyCriticalFarmsUseCase",
    "PredictFutureZoneUseCase",
    "GenerateDemoHistoryUseCase",
]
