"""Pytest configuration and fixtures."""

from datetime import date
from pathlib import Path

import pytest

from src.models import DeviceRecord, Feature, Specification


@pytest.fixture
def flagship() -> DeviceRecord:
    """Fully specified high-end device."""
    return DeviceRecord(
        id="flagship",
        name="Flagship X",
        brand="Acme",
        category="Smartphones",
        current_price=1000,
        average_rating=4.8,
        views=20000,
        release_date=date(2024, 9, 1),
        specifications=[
            Specification("Performance", "Processor", "3.5GHz"),
            Specification("Performance", "RAM", "16GB"),
            Specification("Performance", "Storage", "512GB SSD"),
            Specification("Battery", "Battery Capacity", "5000mAh"),
            Specification("Camera", "Main Camera", "108MP"),
            Specification("Camera", "Ultrawide Camera", "12MP"),
            Specification("Display", "Screen Size", "7 inches"),
            Specification("Display", "Resolution", "4K"),
            Specification("Display", "Refresh Rate", "120Hz"),
            Specification("Design", "Build Material", "Glass and metal"),
        ],
        features=[
            Feature("Optical Image Stabilization", True),
            Feature("Night Mode", True),
            Feature("Water Resistance", True),
            Feature("Wireless Charging", True),
            Feature("Fast Charging", True),
            Feature("5G Support", True),
            Feature("Face Recognition", True),
            Feature("Fingerprint Scanner", True),
            Feature("NFC", True),
        ],
    )


@pytest.fixture
def budget_phone() -> DeviceRecord:
    """Sparse low-end device."""
    return DeviceRecord(
        id="budget",
        name="Budget Y",
        brand="Zeta",
        category="Smartphones",
        current_price=200,
        average_rating=3.9,
        views=5000,
        release_date=date(2023, 2, 1),
        specifications=[
            Specification("Performance", "Processor", "2.1GHz"),
            Specification("Battery", "Battery Capacity", "2800mAh"),
            Specification("Display", "Screen Size", "6.1 inches"),
            Specification("Display", "Resolution", "HD+"),
        ],
        features=[
            Feature("Fingerprint Scanner", True),
            Feature("NFC", False),
        ],
    )


@pytest.fixture
def bare_device() -> DeviceRecord:
    """Device with no specifications, features or price."""
    return DeviceRecord(id="bare", name="Bare Z")


@pytest.fixture
def priced_trio() -> list[DeviceRecord]:
    """Three otherwise identical devices priced 200, 500 and 800."""
    return [
        DeviceRecord(id="cheap", name="Cheap", brand="Acme", current_price=200),
        DeviceRecord(id="mid", name="Mid", brand="Zeta", current_price=500),
        DeviceRecord(id="dear", name="Dear", brand="Acme", current_price=800),
    ]


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Create a sample config file for testing."""
    config_path = tmp_path / "config.yaml"
    config_content = """
scoring:
  thresholds:
    strength: 75
    weakness: 35
  value_multiplier: 100

presets:
  camera_first:
    camera: 10
    price: 2

currency:
  base: USD
  rates:
    NPR: 130
    EUR: 0.5

ranking:
  default_limit: 10
  sort_by: popular
"""
    config_path.write_text(config_content)
    return config_path


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    """Create a sample YAML device catalog."""
    catalog_path = tmp_path / "devices.yaml"
    catalog_content = """
devices:
  - id: phone-a
    name: Phone A
    brand: Acme
    category: Smartphones
    currentPrice: 900
    averageRating: 4.5
    views: 12000
    releaseDate: 2024-10-04
    previousRank: 2
    specifications:
      - {category: Performance, name: Processor, value: "3.1GHz"}
      - {category: Battery, name: Battery Capacity, value: "5000mAh"}
      - {category: Camera, name: Main Camera, value: "50MP"}
    features:
      - {name: Night Mode, available: true}
      - {name: NFC, available: true}
  - id: phone-b
    name: Phone B
    brand: {name: Zeta}
    currentPrice: 400
    averageRating: 4.1
    views: 8000
    specifications:
      - {category: Battery, name: Battery, value: "3200mAh"}
    features:
      - {name: Fast Charging, available: true}
"""
    catalog_path.write_text(catalog_content)
    return catalog_path
