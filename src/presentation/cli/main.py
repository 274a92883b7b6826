"""CLI interface for farm zone classification."""

import argparse
import logging
import sys

from ...application.services.farm_zone_classifier_service import FarmZoneClassifierService
from ...domain.entities.classification_result import ClassificationResult
from ...domain.entities.historical_record import HistoricalRecord
from ...domain.use_cases.generate_demo_history import GenerateDemoHistoryUseCase
from ...infrastructure.repositories.csv_farm_profile_repository import CSVFarmProfileRepository
from ...infrastructure.repositories.in_memory_repositories import InMemoryFarmProfileRepository
from ...infrastructure.repositories.json_farm_zone_repository import JSONFarmZoneRepository

from config.settings import (
    FARM_PROFILE_FILE,
    FARM_ZONE_FILE,
    DEFAULT_THRESHOLDS,
    FACTOR_WEIGHTS,
    CROP_CONFIGS,
    REGIONAL_ADJUSTMENTS,
    URGENCY_SETTINGS,
    TREND_SETTINGS,
    IMPROVEMENT_STRATEGIES,
    LOG_SETTINGS,
)

logging.basicConfig(
    level=LOG_SETTINGS["level"],
    format=LOG_SETTINGS["format"],
    handlers=[logging.StreamHandler(sys.stderr)],
)
logger = logging.getLogger(__name__)


def build_service(profile_repo, zone_file: str) -> FarmZoneClassifierService:
    """Wire the service with settings."""
    return FarmZoneClassifierService(
        farm_profile_repo=profile_repo,
        farm_zone_repo=JSONFarmZoneRepository(zone_file),
        default_thresholds=DEFAULT_THRESHOLDS,
        factor_weights=FACTOR_WEIGHTS,
        crop_configs=CROP_CONFIGS,
        regional_adjustments=REGIONAL_ADJUSTMENTS,
        urgency_settings=URGENCY_SETTINGS,
        trend_settings=TREND_SETTINGS,
        improvement_strategies=IMPROVEMENT_STRATEGIES,
    )


def print_result(result: ClassificationResult) -> None:
    print("\n" + "=" * 50)
    print(" FARM ZONE CLASSIFICATION ")
    print("=" * 50)
    if result.farm_profile_id:
        print(f" Farm:          {result.farm_profile_id}")
    print(f" Zone:          {result.zone_type.to_label()}")
    print(f" Score:         {result.productivity_score:.2f}")
    print(f" Average yield: {result.average_yield:.2f} t/ha")
    print(f" Confidence:    {result.confidence}%")
    print("-" * 50)
    print("Factors:")
    for name, value in result.factors.to_dict().items():
        print(f"  • {name.replace('_', ' ')}: {value:.2f}")
    print("Recommendations:")
    for recommendation in result.recommendations:
        print(f"  • {recommendation}")
    print("=" * 50)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Farm Zone Classification System")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # === classify: one record from the command line ===
    classify_parser = subparsers.add_parser("classify", help="Classify a farm history given inline")
    classify_parser.add_argument(
        "--yields", type=float, nargs="+", required=True, help="Yield per season (t/ha)"
    )
    classify_parser.add_argument(
        "--soil", type=float, nargs="*", default=[], help="Soil quality per season (0-10)"
    )
    classify_parser.add_argument(
        "--moisture", type=float, nargs="*", default=[], help="Moisture per season (%%)"
    )
    classify_parser.add_argument("--crop-type", type=str, default=None, help="e.g. 'Maize'")
    classify_parser.add_argument("--region", type=str, default=None, help="e.g. 'Middle Belt'")

    # === classify-file: bulk over the profile CSV ===
    file_parser = subparsers.add_parser(
        "classify-file", help="Classify farm profiles from CSV and store their zones"
    )
    file_parser.add_argument("--profiles", type=str, default=str(FARM_PROFILE_FILE))
    file_parser.add_argument("--zones", type=str, default=str(FARM_ZONE_FILE))
    file_parser.add_argument(
        "--farm-id", type=str, nargs="*", default=None, help="Only these farm ids"
    )
    file_parser.add_argument("--force", action="store_true", help="Recalculate stored zones")

    # === stats: zone counts ===
    stats_parser = subparsers.add_parser("stats", help="Count stored farms per zone")
    stats_parser.add_argument("--zones", type=str, default=str(FARM_ZONE_FILE))

    # === seed: demo data ===
    seed_parser = subparsers.add_parser("seed", help="Write demo farm profiles to CSV")
    seed_parser.add_argument("--output", type=str, default=str(FARM_PROFILE_FILE))
    seed_parser.add_argument("--count", type=int, default=30)
    seed_parser.add_argument("--seed", type=int, default=42)

    args = parser.parse_args(argv)

    # === Command: classify ===
    if args.command == "classify":
        try:
            service = build_service(InMemoryFarmProfileRepository(), str(FARM_ZONE_FILE))
            record = HistoricalRecord(
                yields=args.yields,
                soil_quality_scores=args.soil,
                moisture_levels=args.moisture,
            )
            result = service.classify_record(record, crop_type=args.crop_type, region=args.region)
            print_result(result)
        except Exception as e:
            logger.error(f"Classification failed: {e}")
            sys.exit(1)

    # === Command: classify-file ===
    elif args.command == "classify-file":
        try:
            profile_repo = CSVFarmProfileRepository(args.profiles)
            service = build_service(profile_repo, args.zones)
            farm_ids = args.farm_id or [p.id for p in profile_repo.list_profiles()]

            summary = service.bulk_classify_farms(farm_ids, force_recalculation=args.force)

            print("\n" + "=" * 60)
            print(" BULK CLASSIFICATION ")
            print("=" * 60)
            print(f" Processed:  {summary.total_processed}")
            print(f" Successful: {summary.successful}")
            print(f" Failed:     {summary.failed}")
            print("-" * 60)
            for result in summary.results:
                print(
                    f"  {result.farm_profile_id}: {result.zone_type.to_label():<15} "
                    f"score {result.productivity_score:6.2f} | confidence {result.confidence}%"
                )
            for error in summary.errors:
                print(f"  {error['farm_profile_id']}: ERROR {error['error']}")
            print("=" * 60)
        except Exception as e:
            logger.error(f"Bulk classification failed: {e}", exc_info=True)
            sys.exit(1)

    # === Command: stats ===
    elif args.command == "stats":
        try:
            service = build_service(InMemoryFarmProfileRepository(), args.zones)
            stats = service.get_zone_statistics()
            print("\nFarms per zone:")
            for zone_type, count in stats.items():
                print(f"  {zone_type.to_label():<15} {count}")
        except Exception as e:
            logger.error(f"Statistics failed: {e}", exc_info=True)
            sys.exit(1)

    # === Command: seed ===
    elif args.command == "seed":
        try:
            profiles = GenerateDemoHistoryUseCase(seed=args.seed).execute(count=args.count)
            repo = CSVFarmProfileRepository(args.output, create_missing=True)
            repo.save_profiles(profiles)
            print(f"\nWrote {len(profiles)} demo farm profiles to {args.output}")
            print("Next: farm-zone-classify classify-file")
        except Exception as e:
            logger.error(f"Seeding failed: {e}", exc_info=True)
            sys.exit(1)


if __name__ == "__main__":
    main()
