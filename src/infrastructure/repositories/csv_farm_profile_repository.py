"""CSV farm profile repository implementation."""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional
import pandas as pd
from ...domain.entities.farm_profile import FarmProfile
from ...domain.entities.historical_record import HistoricalRecord
from ...domain.repositories.farm_profile_repository import FarmProfileRepository

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = [
    "farm_profile_id",
    "crop_type",
    "region",
    "farm_size",
    "latitude",
    "longitude",
    "farmer_name",
    "farmer_contact",
]
HISTORY_COLUMNS = ["season", "yield", "soil_quality", "moisture"]
TEXT_COLUMNS = ["farm_profile_id", "crop_type", "region", "farmer_name", "farmer_contact", "season"]


def _optional(value: Any) -> Any:
    """Map pandas missing values to None."""
    return None if pd.isna(value) else value


class CSVFarmProfileRepository(FarmProfileRepository):
    """
    Repository for farm profiles stored in a long-format CSV file.

    Each row holds one season of one farm; profile columns repeat on every
    row of the farm. Blank soil or moisture cells are left out of the
    record, and a row with a blank season and yield registers a farm
    without history.
    """

    def __init__(self, data_file: str, create_missing: bool = False):
        """
        Initialize repository.

        Args:
            data_file: Path to CSV file with farm profiles
            create_missing: Create an empty file instead of failing when absent
        """
        self.data_file = Path(data_file)
        if not self.data_file.exists():
            if not create_missing:
                raise FileNotFoundError(f"Farm profile data file not found: {data_file}")
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            pd.DataFrame(columns=PROFILE_COLUMNS + HISTORY_COLUMNS).to_csv(
                self.data_file, index=False
            )
            logger.info(f"Created empty farm profile file {self.data_file}")

    def _read(self) -> pd.DataFrame:
        try:
            return pd.read_csv(self.data_file, dtype={col: str for col in TEXT_COLUMNS})
        except Exception as e:
            logger.error(f"Error reading CSV file: {e}")
            raise

    def _to_profile(self, farm_profile_id: str, group: pd.DataFrame) -> FarmProfile:
        first = group.iloc[0]
        history = group.dropna(subset=["yield"])

        record = None
        if not history.empty:
            record = HistoricalRecord(
                yields=[float(v) for v in history["yield"]],
                seasons=[str(s) for s in history["season"].fillna("")],
                soil_quality_scores=[float(v) for v in history["soil_quality"].dropna()],
                moisture_levels=[float(v) for v in history["moisture"].dropna()],
            )

        farm_size = _optional(first["farm_size"])
        latitude = _optional(first["latitude"])
        longitude = _optional(first["longitude"])
        return FarmProfile(
            id=farm_profile_id,
            crop_type=_optional(first["crop_type"]),
            region=_optional(first["region"]),
            farm_size=float(farm_size) if farm_size is not None else None,
            latitude=float(latitude) if latitude is not None else None,
            longitude=float(longitude) if longitude is not None else None,
            farmer_name=_optional(first["farmer_name"]),
            farmer_contact=_optional(first["farmer_contact"]),
            historical_record=record,
        )

    def list_profiles(self) -> List[FarmProfile]:
        """Retrieve all farm profiles from CSV file."""
        logger.info(f"Loading farm profiles from {self.data_file}")
        df = self._read()

        profiles = [
            self._to_profile(farm_profile_id, group)
            for farm_profile_id, group in df.groupby("farm_profile_id", sort=False)
        ]
        logger.info(f"Loaded {len(profiles)} farm profiles")
        return profiles

    def get_profile(self, farm_profile_id: str) -> Optional[FarmProfile]:
        """Retrieve one farm profile from CSV file."""
        df = self._read()
        group = df[df["farm_profile_id"] == farm_profile_id]
        if group.empty:
            return None
        return self._to_profile(farm_profile_id, group)

    def save_profile(self, profile: FarmProfile) -> None:
        """Save one farm profile, replacing its existing rows."""
        self.save_profiles([profile])

    def save_profiles(self, profiles: Iterable[FarmProfile]) -> None:
        """Save farm profiles, replacing existing rows of the same ids."""
        profiles = list(profiles)
        logger.info(f"Saving {len(profiles)} farm profiles to {self.data_file}")

        df = self._read()
        ids = {p.id for p in profiles}
        df = df[~df["farm_profile_id"].isin(ids)]

        new_rows = pd.DataFrame(
            [row for p in profiles for row in self._to_rows(p)],
            columns=PROFILE_COLUMNS + HISTORY_COLUMNS,
        )
        frames = [frame for frame in (df, new_rows) if not frame.empty]
        result = pd.concat(frames, ignore_index=True) if frames else new_rows
        result.to_csv(self.data_file, index=False)
        logger.info("Farm profiles saved successfully")

    @staticmethod
    def _to_rows(profile: FarmProfile) -> List[dict]:
        base = {
            "farm_profile_id": profile.id,
            "crop_type": profile.crop_type,
            "region": profile.region,
            "farm_size": profile.farm_size,
            "latitude": profile.latitude,
            "longitude": profile.longitude,
            "farmer_name": profile.farmer_name,
            "farmer_contact": profile.farmer_contact,
        }
        record = profile.historical_record
        if record is None or not record.yields:
            return [{**base, "season": None, "yield": None, "soil_quality": None, "moisture": None}]

        def at(values: List[Any], i: int) -> Any:
            return values[i] if i < len(values) else None

        return [
            {
                **base,
                "season": at(record.seasons, i),
                "yield": y,
                "soil_quality": at(record.soil_quality_scores, i),
                "moisture": at(record.moisture_levels, i),
            }
            for i, y in enumerate(record.yields)
        ]
