"""Classification result entities."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .zone_type import ZoneType


@dataclass(frozen=True)
class ClassificationFactors:
    """The four sub-scores behind a productivity score, each on a 0-100 scale."""

    yield_consistency: float
    soil_quality: float
    moisture_adequacy: float
    seasonal_performance: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "yield_consistency": self.yield_consistency,
            "soil_quality": self.soil_quality,
            "moisture_adequacy": self.moisture_adequacy,
            "seasonal_performance": self.seasonal_performance,
        }


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of classifying one historical record."""

    zone_type: ZoneType
    productivity_score: float
    average_yield: float
    confidence: int
    factors: ClassificationFactors
    recommendations: Tuple[str, ...]
    farm_profile_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "farm_profile_id": self.farm_profile_id,
            "zone_type": self.zone_type.value,
            "productivity_score": self.productivity_score,
            "average_yield": self.average_yield,
            "confidence": self.confidence,
            "factors": self.factors.to_dict(),
            "recommendations": list(self.recommendations),
        }


@dataclass
class BulkClassificationResult:
    """Aggregate outcome of classifying several farms."""

    total_processed: int = 0
    successful: int = 0
    failed: int = 0
    results: List[ClassificationResult] = field(default_factory=list)
    errors: List[Dict[str, str]] = field(default_factory=list)  # farm_profile_id, error

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_processed": self.total_processed,
            "successful": self.successful,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
            "errors": [dict(e) for e in self.errors],
        }
