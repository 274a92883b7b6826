"""Productivity zone enumeration."""

from enum import Enum


class ZoneType(str, Enum):
    """Enumeration for farm productivity zones."""

    HIGH_YIELD = "high-yield"
    MODERATE_YIELD = "moderate-yield"
    LOW_YIELD = "low-yield"

    def to_label(self) -> str:
        """Convert to a human-readable label."""
        mapping = {
            ZoneType.HIGH_YIELD: "High Yield",
            ZoneType.MODERATE_YIELD: "Moderate Yield",
            ZoneType.LOW_YIELD: "Low Yield",
        }
        return mapping[self]
