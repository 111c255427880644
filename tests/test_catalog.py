"""Tests for catalog loading."""

import json
from datetime import date
from pathlib import Path

import pytest

from src.catalog import load_catalog, parse_device


class TestParseDevice:
    """Tests for parse_device."""

    def test_camel_case_payload(self) -> None:
        """Test that API-style camelCase keys are accepted."""
        device = parse_device(
            {
                "id": 7,
                "name": "Phone",
                "brand": {"name": "Acme", "logo": None},
                "launchPrice": "799",
                "currentPrice": 699.0,
                "currency": "npr",
                "averageRating": 4.4,
                "views": "1200",
                "releaseDate": "2024-03-01T00:00:00Z",
                "trendScore": 55,
                "previousRank": 3,
                "categories": [{"name": "Smartphones"}],
            }
        )

        assert device.id == "7"
        assert device.brand == "Acme"
        assert device.category == "Smartphones"
        assert device.launch_price == 799.0
        assert device.current_price == 699.0
        assert device.currency == "NPR"
        assert device.average_rating == 4.4
        assert device.views == 1200
        assert device.release_date == date(2024, 3, 1)
        assert device.trend_score == 55.0
        assert device.previous_rank == 3

    def test_specs_and_features_lists(self) -> None:
        """Test list-shaped specifications and features."""
        device = parse_device(
            {
                "id": "a",
                "name": "A",
                "specifications": [
                    {"category": "Battery", "name": "Battery", "value": "5000mAh"},
                    {"name": "Weight", "value": 190},
                    {"value": "orphan"},
                ],
                "features": [
                    {"name": "NFC", "available": True},
                    {"name": "5G"},
                    "Night Mode",
                ],
            }
        )

        assert [(s.name, s.value) for s in device.specifications] == [("Battery", "5000mAh"), ("Weight", "190")]
        assert [(f.name, f.available) for f in device.features] == [
            ("NFC", True),
            ("5G", False),
            ("Night Mode", True),
        ]

    def test_specs_and_features_mappings(self) -> None:
        """Test mapping-shaped specifications and features."""
        device = parse_device(
            {
                "id": "a",
                "name": "A",
                "specifications": {"RAM": "8GB"},
                "features": {"NFC": True, "5G Support": False},
            }
        )

        assert device.specifications[0].name == "RAM"
        assert device.specifications[0].value == "8GB"
        assert [f.available for f in device.features] == [True, False]

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("false", False),
            ("No", False),
            ("0", False),
            ("true", True),
            ("yes", True),
            ("1", True),
            (0, False),
            (1, True),
            ("maybe", False),
            (None, False),
        ],
    )
    def test_availability_strings(self, value: object, expected: bool) -> None:
        """Test that string availability flags are parsed, not truth-tested."""
        device = parse_device(
            {
                "id": "a",
                "name": "A",
                "features": [{"name": "NFC", "available": value}],
            }
        )
        mapped = parse_device({"id": "b", "name": "B", "features": {"NFC": value}})

        assert device.features[0].available is expected
        assert mapped.features[0].available is expected

    def test_bad_values_become_none(self) -> None:
        """Test that unparseable optional values are dropped."""
        device = parse_device({"id": "a", "name": "A", "currentPrice": "TBA", "releaseDate": "soon"})
        assert device.current_price is None
        assert device.release_date is None
        assert device.price is None

    def test_requires_id_and_name(self) -> None:
        """Test that identity is required."""
        with pytest.raises(ValueError):
            parse_device({"name": "No id"})
        with pytest.raises(ValueError):
            parse_device({"id": "x"})


class TestLoadCatalog:
    """Tests for load_catalog."""

    def test_load_yaml(self, catalog_file: Path) -> None:
        """Test loading the sample YAML catalog."""
        devices = load_catalog(catalog_file)

        assert [d.id for d in devices] == ["phone-a", "phone-b"]
        assert devices[0].release_date == date(2024, 10, 4)
        assert devices[0].previous_rank == 2
        assert devices[1].brand == "Zeta"
        assert len(devices[0].specifications) == 3

    def test_load_json_list(self, tmp_path: Path) -> None:
        """Test loading a top-level JSON list."""
        path = tmp_path / "devices.json"
        path.write_text(json.dumps([{"id": "j1", "name": "Json One", "currentPrice": 300}]))

        devices = load_catalog(path)

        assert len(devices) == 1
        assert devices[0].current_price == 300.0

    def test_skips_invalid_entries(self, tmp_path: Path) -> None:
        """Test that invalid entries are skipped, not fatal."""
        path = tmp_path / "devices.yaml"
        path.write_text("- {id: ok, name: Fine}\n- {name: Missing id}\n- just a string\n")

        devices = load_catalog(path)

        assert [d.id for d in devices] == ["ok"]

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing catalog raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "nope.yaml")

    def test_not_a_list(self, tmp_path: Path) -> None:
        """Test that a document without a device list is rejected."""
        path = tmp_path / "devices.yaml"
        path.write_text("name: not a catalog\n")
        with pytest.raises(ValueError):
            load_catalog(path)
