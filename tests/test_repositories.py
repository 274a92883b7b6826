"""Tests for repository implementations."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from src.domain.entities.farm_profile import FarmProfile
from src.domain.entities.farm_zone import FarmZone
from src.domain.entities.historical_record import HistoricalRecord
from src.domain.entities.zone_type import ZoneType
from src.infrastructure.repositories.csv_farm_profile_repository import CSVFarmProfileRepository
from src.infrastructure.repositories.in_memory_repositories import InMemoryFarmZoneRepository
from src.infrastructure.repositories.json_farm_zone_repository import JSONFarmZoneRepository


def test_csv_repository_requires_file(tmp_path):
    """Test that a missing CSV file fails unless creation is requested."""
    with pytest.raises(FileNotFoundError):
        CSVFarmProfileRepository(str(tmp_path / "missing.csv"))

    repo = CSVFarmProfileRepository(str(tmp_path / "new" / "profiles.csv"), create_missing=True)
    assert repo.list_profiles() == []


def test_csv_repository_round_trip(tmp_path, high_yield_record):
    """Test saving and reloading profiles with and without history."""
    repo = CSVFarmProfileRepository(str(tmp_path / "profiles.csv"), create_missing=True)
    repo.save_profiles(
        [
            FarmProfile(
                id="farm-1",
                crop_type="Maize",
                region="Middle Belt",
                farm_size=5.5,
                farmer_contact="+2348012345678",
                historical_record=high_yield_record,
            ),
            FarmProfile(id="farm-2", crop_type="Rice"),
        ]
    )

    profiles = repo.list_profiles()
    assert [p.id for p in profiles] == ["farm-1", "farm-2"]

    farm = repo.get_profile("farm-1")
    assert farm.crop_type == "Maize"
    assert farm.farm_size == pytest.approx(5.5)
    assert farm.farmer_contact == "+2348012345678"
    assert farm.latitude is None
    assert farm.historical_record.yields == pytest.approx(high_yield_record.yields)
    assert farm.historical_record.seasons == high_yield_record.seasons
    assert farm.historical_record.moisture_levels == pytest.approx(
        high_yield_record.moisture_levels
    )

    assert repo.get_profile("farm-2").historical_record is None
    assert repo.get_historical_record("farm-2") is None
    assert repo.get_profile("farm-3") is None


def test_csv_repository_replaces_profile(tmp_path, high_yield_record, low_yield_record):
    """Test that saving a profile again replaces its rows."""
    repo = CSVFarmProfileRepository(str(tmp_path / "profiles.csv"), create_missing=True)
    repo.save_profile(FarmProfile(id="farm-1", historical_record=high_yield_record))
    repo.save_profile(
        FarmProfile(id="farm-1", historical_record=HistoricalRecord(yields=[1.0, 1.2]))
    )

    record = repo.get_historical_record("farm-1")
    assert record.yields == pytest.approx([1.0, 1.2])
    assert record.soil_quality_scores == []
    assert len(repo.list_profiles()) == 1


def make_zone(farm_id, zone_type=ZoneType.MODERATE_YIELD):
    return FarmZone(
        farm_profile_id=farm_id,
        zone_type=zone_type,
        historical_record=HistoricalRecord(yields=[3.0, 3.2], seasons=["2022-Wet", "2022-Dry"]),
        average_yield=3.1,
        productivity_score=65.0,
    )


@pytest.mark.parametrize("backend", ["json", "memory"])
def test_zone_repositories(tmp_path, backend):
    """Test zone storage operations on both backends."""
    if backend == "json":
        repo = JSONFarmZoneRepository(str(tmp_path / "zones.json"))
    else:
        repo = InMemoryFarmZoneRepository()

    assert repo.list_zones() == []
    moderate = repo.save(make_zone("farm-1"))
    low = repo.save(make_zone("farm-2", ZoneType.LOW_YIELD))

    assert repo.get(moderate.id) == moderate
    assert repo.get_by_farm_profile("farm-2") == low
    assert repo.get_by_farm_profile("farm-3") is None
    assert [z.id for z in repo.list_zones(ZoneType.LOW_YIELD)] == [low.id]

    repo.delete(moderate.id)
    assert repo.get(moderate.id) is None
    assert len(repo.list_zones()) == 1


def test_json_repository_persists(tmp_path):
    """Test that zones survive a new repository instance."""
    data_file = tmp_path / "zones.json"
    zone = JSONFarmZoneRepository(str(data_file)).save(make_zone("farm-1"))

    reloaded = JSONFarmZoneRepository(str(data_file)).get(zone.id)
    assert reloaded == zone
    assert reloaded.created_at == zone.created_at


def test_in_memory_repository_returns_copies():
    """Test that callers cannot mutate stored zones in place."""
    repo = InMemoryFarmZoneRepository()
    zone = repo.save(make_zone("farm-1"))

    fetched = repo.get(zone.id)
    fetched.productivity_score = 10.0
    assert repo.get(zone.id).productivity_score == 65.0


def test_json_repository_concurrent_saves(tmp_path):
    """Test that saves from many threads are all stored and readers never fail."""
    repo = JSONFarmZoneRepository(str(tmp_path / "zones.json"))

    def save_and_read(i):
        repo.save(make_zone(f"farm-{i}"))
        return len(repo.list_zones())

    with ThreadPoolExecutor(max_workers=8) as executor:
        counts = list(executor.map(save_and_read, range(40)))

    assert all(count >= 1 for count in counts)
    zones = JSONFarmZoneRepository(str(tmp_path / "zones.json")).list_zones()
    assert sorted(z.farm_profile_id for z in zones) == sorted(f"farm-{i}" for i in range(40))
    assert list(tmp_path.glob("*.tmp")) == []
