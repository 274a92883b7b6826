"""Application services."""

from .farm_zone_classifier_service import FarmZoneClassifierService

__all__ = ["FarmZoneClassifierService"]
