"""Engine configuration loaded from config.yaml."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.models import CATEGORIES, WeightVector

logger = logging.getLogger(__name__)

DEFAULT_PRESETS: dict[str, WeightVector] = {
    "balanced": WeightVector(),
    "gaming": WeightVector(price=3, performance=9, battery=6, camera=3, display=7, design=2, features=4),
    "photography": WeightVector(price=2, performance=5, battery=4, camera=10, display=6, design=3, features=4),
    "budget": WeightVector(price=10, performance=5, battery=6, camera=4, display=4, design=2, features=4),
    "enterprise": WeightVector(price=4, performance=6, battery=8, camera=2, display=4, design=6, features=6),
}

SORT_KEYS = ("overall", "trending", "value", "popular", "newest")


@dataclass
class EngineConfig:
    """Parsed scoring, ranking and currency settings."""

    strength_threshold: int = 80
    weakness_threshold: int = 40
    value_multiplier: float = 1000.0
    base_currency: str = "USD"
    # Units of each currency per one unit of the base currency
    exchange_rates: dict[str, float] = field(default_factory=lambda: {"NPR": 130.0})
    presets: dict[str, WeightVector] = field(default_factory=lambda: dict(DEFAULT_PRESETS))
    default_limit: int = 50
    default_sort: str = "overall"

    def to_base_currency(self, amount: float, currency: str | None) -> float:
        """Convert an amount into the base currency.

        Args:
            amount: Price in ``currency``.
            currency: ISO-ish currency code. None means base currency.

        Returns:
            Amount in the base currency. Unknown currencies pass through unchanged.
        """
        code = (currency or self.base_currency).upper()
        if code == self.base_currency.upper():
            return amount
        rate = self.exchange_rates.get(code)
        if not rate:
            logger.warning(f"No exchange rate for {code}, using price as {self.base_currency}")
            return amount
        return amount / rate

    def resolve_weights(
        self,
        preset: str | None = None,
        overrides: dict[str, float] | None = None,
    ) -> WeightVector:
        """Pick a preset and apply per-category overrides.

        Args:
            preset: Preset name. Unknown names fall back to 'balanced'.
            overrides: Category weights replacing the preset's values.

        Returns:
            Resolved WeightVector.
        """
        name = preset or "balanced"
        base = self.presets.get(name)
        if base is None:
            logger.warning(f"Unknown preset '{name}', falling back to balanced")
            base = self.presets.get("balanced", WeightVector())
        if not overrides:
            return base
        return WeightVector.from_mapping(overrides, base=base)


def _parse_presets(raw: dict[str, Any]) -> dict[str, WeightVector]:
    presets = dict(DEFAULT_PRESETS)
    for name, values in raw.items():
        if not isinstance(values, dict):
            raise ValueError(f"Preset '{name}' must be a mapping of category weights")
        unknown = set(values) - set(CATEGORIES)
        if unknown:
            logger.warning(f"Preset '{name}' has unknown categories: {', '.join(sorted(unknown))}")
        presets[name] = WeightVector.from_mapping(values, base=WeightVector(**{c: 0.0 for c in CATEGORIES}))
    return presets


def load_config(config_path: Path | None = None) -> EngineConfig:
    """Load engine configuration from a YAML file.

    Args:
        config_path: Path to config.yaml. None returns built-in defaults.

    Returns:
        EngineConfig with file values layered over defaults.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If a section has the wrong shape.
    """
    if config_path is None:
        return EngineConfig()

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}

    config = EngineConfig()

    scoring = raw.get("scoring", {})
    thresholds = scoring.get("thresholds", {})
    config.strength_threshold = int(thresholds.get("strength", config.strength_threshold))
    config.weakness_threshold = int(thresholds.get("weakness", config.weakness_threshold))
    config.value_multiplier = float(scoring.get("value_multiplier", config.value_multiplier))

    currency = raw.get("currency", {})
    config.base_currency = str(currency.get("base", config.base_currency)).upper()
    rates = currency.get("rates")
    if rates is not None:
        config.exchange_rates = {str(code).upper(): float(rate) for code, rate in rates.items()}

    if "presets" in raw:
        config.presets = _parse_presets(raw["presets"] or {})

    ranking = raw.get("ranking", {})
    config.default_limit = int(ranking.get("default_limit", config.default_limit))
    sort_by = ranking.get("sort_by", config.default_sort)
    if sort_by not in SORT_KEYS:
        raise ValueError(f"Unknown sort key in config: {sort_by}")
    config.default_sort = sort_by

    logger.debug(f"Loaded config from {config_path} with presets: {', '.join(config.presets)}")
    return config
