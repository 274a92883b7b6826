"""Domain entities."""

from .zone_type import ZoneType
from .historical_record import HistoricalRecord
from .classification_result import (
    BulkClassificationResult,
    ClassificationFactors,
    ClassificationResult,
)
from .classification_thresholds import ClassificationThresholds, FactorWeights
from .farm_profile import FarmProfile
from .farm_zone import FarmZone

__all__ = [
    "ZoneType",
    "HistoricalRecord",
    "ClassificationFactors",
    "ClassificationResult",
    "BulkClassificationResult",
    "ClassificationThresholds",
    "FactorWeights",
    "FarmProfile",
    "FarmZone",
]
