"""Use case for classifying many farms in one request."""

import logging
from typing import Callable, Iterable

from ..entities.classification_result import BulkClassificationResult, ClassificationResult

logger = logging.getLogger(__name__)


class BulkClassifyFarmsUseCase:
    """Use case to classify farms one by one, continuing past failures."""

    def __init__(self, classify: Callable[[str], ClassificationResult]):
        """
        Initialize use case.

        Args:
            classify: Callable classifying a single farm profile id
        """
        self.classify = classify

    def execute(self, farm_profile_ids: Iterable[str]) -> BulkClassificationResult:
        """
        Execute bulk classification.

        Args:
            farm_profile_ids: Farm profile ids to classify

        Returns:
            BulkClassificationResult with per-farm results and errors
        """
        farm_profile_ids = list(farm_profile_ids)
        logger.info(f"Bulk classifying {len(farm_profile_ids)} farms")

        summary = BulkClassificationResult(total_processed=len(farm_profile_ids))
        for farm_profile_id in farm_profile_ids:
            try:
                result = self.classify(farm_profile_id)
            except Exception as e:
                logger.error(f"Failed to classify farm {farm_profile_id}: {e}")
                summary.errors.append(
                    {"farm_profile_id": farm_profile_id, "error": str(e) or type(e).__name__}
                )
                summary.failed += 1
                continue

            summary.results.append(result)
            summary.successful += 1

        logger.info(
            f"Bulk classification done: {summary.successful} succeeded, {summary.failed} failed"
        )
        return summary
