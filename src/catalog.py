"""Device catalog loading from YAML or JSON files."""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from src.extractor import parse_number
from src.models import DeviceRecord, Feature, Specification

logger = logging.getLogger(__name__)

# camelCase keys used by the web API payloads
KEY_ALIASES = {
    "launchPrice": "launch_price",
    "currentPrice": "current_price",
    "averageRating": "average_rating",
    "releaseDate": "release_date",
    "trendScore": "trend_score",
    "previousRank": "previous_rank",
}

TRUE_STRINGS = {"true", "yes", "y", "1", "on"}
FALSE_STRINGS = {"false", "no", "n", "0", "off", ""}


def _get(raw: dict[str, Any], key: str) -> Any:
    if key in raw:
        return raw[key]
    for alias, canonical in KEY_ALIASES.items():
        if canonical == key and alias in raw:
            return raw[alias]
    return None


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return parse_number(str(value))


def _to_int(value: Any) -> int | None:
    number = _to_float(value)
    return int(number) if number is not None else None


def _to_bool(value: Any) -> bool:
    """Availability flag; unrecognised values count as unavailable."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    if value is not None:
        logger.debug(f"Treating unrecognised availability value as False: {value!r}")
    return False


def _to_date(value: Any) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()
    except ValueError:
        logger.debug(f"Ignoring unparseable release date: {value!r}")
        return None


def _name_of(value: Any) -> str | None:
    """Brand/category may arrive as a plain string or as {'name': ...}."""
    if isinstance(value, dict):
        value = value.get("name")
    elif isinstance(value, list):
        value = _name_of(value[0]) if value else None
    return str(value) if value else None


def _parse_specifications(raw: Any) -> list[Specification]:
    if isinstance(raw, dict):
        return [Specification(category="", name=str(k), value=str(v)) for k, v in raw.items()]

    specs: list[Specification] = []
    for item in raw or []:
        if not isinstance(item, dict) or "name" not in item:
            logger.debug(f"Skipping malformed specification: {item!r}")
            continue
        specs.append(
            Specification(
                category=str(item.get("category") or ""),
                name=str(item["name"]),
                value=str(item.get("value") if item.get("value") is not None else ""),
            )
        )
    return specs


def _parse_features(raw: Any) -> list[Feature]:
    if isinstance(raw, dict):
        return [Feature(name=str(k), available=_to_bool(v)) for k, v in raw.items()]

    features: list[Feature] = []
    for item in raw or []:
        if isinstance(item, str):
            features.append(Feature(name=item, available=True))
        elif isinstance(item, dict) and "name" in item:
            features.append(Feature(name=str(item["name"]), available=_to_bool(item.get("available"))))
        else:
            logger.debug(f"Skipping malformed feature: {item!r}")
    return features


def parse_device(raw: dict[str, Any]) -> DeviceRecord:
    """Build a DeviceRecord from a catalog entry.

    Args:
        raw: Mapping with snake_case or camelCase keys.

    Returns:
        DeviceRecord. Unparseable optional fields are left as None.

    Raises:
        ValueError: If the entry has no id or name.
    """
    device_id = raw.get("id")
    name = raw.get("name")
    if device_id is None or not name:
        raise ValueError(f"Device entry needs 'id' and 'name': {raw!r}")

    return DeviceRecord(
        id=str(device_id),
        name=str(name),
        brand=_name_of(raw.get("brand")),
        model=raw.get("model"),
        category=_name_of(raw.get("category") or raw.get("categories")),
        launch_price=_to_float(_get(raw, "launch_price")),
        current_price=_to_float(_get(raw, "current_price")),
        currency=str(raw.get("currency") or "USD").upper(),
        specifications=_parse_specifications(raw.get("specifications")),
        features=_parse_features(raw.get("features")),
        average_rating=_to_float(_get(raw, "average_rating")),
        views=_to_int(raw.get("views")),
        release_date=_to_date(_get(raw, "release_date")),
        trend_score=_to_float(_get(raw, "trend_score")),
        previous_rank=_to_int(_get(raw, "previous_rank")),
    )


def load_catalog(catalog_path: Path) -> list[DeviceRecord]:
    """Load devices from a YAML or JSON catalog file.

    The document is either a list of device entries or a mapping with a
    ``devices`` list. Entries without id or name are skipped with a warning.

    Args:
        catalog_path: Path to the catalog file.

    Returns:
        Devices in file order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the document has no device list.
    """
    catalog_path = Path(catalog_path)
    if not catalog_path.exists():
        raise FileNotFoundError(f"Catalog file not found: {catalog_path}")

    with open(catalog_path) as f:
        if catalog_path.suffix.lower() == ".json":
            document = json.load(f)
        else:
            document = yaml.safe_load(f)

    entries = document.get("devices") if isinstance(document, dict) else document
    if not isinstance(entries, list):
        raise ValueError(f"Catalog {catalog_path} must contain a list of devices")

    devices: list[DeviceRecord] = []
    for entry in entries:
        if not isinstance(entry, dict):
            logger.warning(f"Skipping non-mapping catalog entry: {entry!r}")
            continue
        try:
            devices.append(parse_device(entry))
        except ValueError as e:
            logger.warning(f"Skipping catalog entry: {e}")

    logger.info(f"Loaded {len(devices)} devices from {catalog_path}")
    return devices
