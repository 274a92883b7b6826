"""Use case for counting farms per productivity zone."""

import logging
from collections import Counter
from typing import Dict, Iterable

from ..entities.farm_zone import FarmZone
from ..entities.zone_type import ZoneType

logger = logging.getLogger(__name__)


class ComputeZoneStatisticsUseCase:
    """Use case to tally stored zones by zone type."""

    def execute(self, zones: Iterable[FarmZone]) -> Dict[ZoneType, int]:
        """
        Count zones per zone type.

        Every zone type is present in the result, with 0 when unused.
        """
        counts = Counter(zone.zone_type for zone in zones)
        stats = {zone_type: counts.get(zone_type, 0) for zone_type in ZoneType}
        logger.info("Zone statistics: " + ", ".join(f"{z.value}={n}" for z, n in stats.items()))
        return stats
