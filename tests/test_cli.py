"""Tests for the command-line interface."""

import json

import pytest
from src.presentation.cli.main import main


def test_classify_command(capsys):
    """Test classifying an inline history."""
    main(["classify", "--yields", "4.5", "4.8", "4.6", "5.0", "4.7",
          "--soil", "8.5", "9.0", "8.7", "9.2", "8.8",
          "--moisture", "55", "60", "58", "62", "59"])

    output = capsys.readouterr().out
    assert "High Yield" in output
    assert "Confidence:    100%" in output


def test_classify_command_partial_data(capsys):
    """Test classifying a single season without soil or moisture."""
    main(["classify", "--yields", "3.0"])
    output = capsys.readouterr().out
    assert "Moderate Yield" in output
    assert "Confidence:    16%" in output


def test_seed_classify_and_stats(tmp_path, capsys):
    """Test the seed, classify-file and stats commands together."""
    profiles = tmp_path / "profiles.csv"
    zones = tmp_path / "zones.json"

    main(["seed", "--output", str(profiles), "--count", "6", "--seed", "3"])
    main(["classify-file", "--profiles", str(profiles), "--zones", str(zones)])

    output = capsys.readouterr().out
    assert "Processed:  6" in output
    assert "Successful: 6" in output
    assert len(json.loads(zones.read_text())["zones"]) == 6

    main(["stats", "--zones", str(zones)])
    assert "Farms per zone" in capsys.readouterr().out


def test_classify_file_missing_profiles(tmp_path):
    """Test that a missing profile file exits with an error."""
    with pytest.raises(SystemExit) as exc_info:
        main(["classify-file", "--profiles", str(tmp_path / "missing.csv")])
    assert exc_info.value.code == 1
