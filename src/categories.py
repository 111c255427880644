"""Per-category scoring of device specifications."""

import logging
import re

from src.config import EngineConfig
from src.extractor import (
    count_features,
    enabled_features,
    find_spec,
    find_specs,
    has_feature,
    parse_number,
    round_half_up,
    spec_number,
)
from src.models import CategoryScores, DeviceRecord

logger = logging.getLogger(__name__)


class CategoryScorer:
    """Scores one device in each of the seven categories, 0-100.

    Price is relative to the candidate set; every other category is measured
    against fixed reference ceilings and tiers.
    """

    NEUTRAL = 50

    CPU_GHZ_CEILING = 3.5
    BENCHMARK_CEILING = 1_000_000
    RAM_GB_CEILING = 16
    CAMERA_MP_CEILING = 108
    SCREEN_INCH_CEILING = 7

    # (minimum mAh, score), checked top-down
    BATTERY_TIERS = [(4500, 100), (4000, 85), (3500, 70), (3000, 55), (2500, 40)]
    BATTERY_FLOOR = 25

    # (substrings, bonus), first match wins
    RESOLUTION_TIERS = [
        (("4k",), 30),
        (("2k", "1440"), 20),
        (("fhd", "1080"), 15),
        (("hd", "720"), 10),
    ]

    PREMIUM_MATERIALS = ("premium", "glass", "metal")
    PREMIUM_FEATURES = (
        "wireless charging",
        "fast charging",
        "5g support",
        "face recognition",
        "fingerprint",
        "nfc",
    )

    def __init__(self, config: EngineConfig | None = None):
        """Initialize scorer.

        Args:
            config: Engine configuration, used for currency conversion. Defaults if None.
        """
        self.config = config or EngineConfig()

    def score_all(
        self,
        device: DeviceRecord,
        candidates: list[DeviceRecord] | None = None,
        price_bounds: tuple[float, float] | None = None,
    ) -> CategoryScores:
        """Score a device in every category.

        Args:
            device: The device to score.
            candidates: Full candidate set, needed for price normalization.
            price_bounds: Precomputed ``price_range`` of the candidate set, used
                when ``candidates`` is None. None means no candidate is priced.

        Returns:
            CategoryScores for the device.
        """
        if candidates is not None:
            price_bounds = self.price_range(candidates)

        scores = CategoryScores(
            price=self.score_price_within(device, price_bounds),
            performance=self.score_performance(device),
            battery=self.score_battery(device),
            camera=self.score_camera(device),
            display=self.score_display(device),
            design=self.score_design(device),
            features=self.score_features(device),
        )
        logger.debug(f"Category scores for {device.id}: {scores.as_dict()}")
        return scores

    def base_price(self, device: DeviceRecord) -> float | None:
        """Device price converted to the base currency, or None if unknown."""
        price = device.price
        if price is None or price <= 0:
            return None
        return self.config.to_base_currency(price, device.currency)

    def price_range(self, candidates: list[DeviceRecord]) -> tuple[float, float] | None:
        """(lowest, highest) known base-currency price, or None if nothing is priced."""
        prices = [p for p in (self.base_price(c) for c in candidates) if p is not None]
        if not prices:
            return None
        return min(prices), max(prices)

    def score_price(self, device: DeviceRecord, candidates: list[DeviceRecord]) -> int:
        """Lower price scores higher, min-max normalized over the candidates' known prices."""
        return self.score_price_within(device, self.price_range(candidates))

    def score_price_within(self, device: DeviceRecord, bounds: tuple[float, float] | None) -> int:
        """Price score against an already computed candidate price range."""
        if bounds is None:
            return self.NEUTRAL

        price = self.base_price(device)
        if price is None:
            return 0

        low, high = bounds
        if low == high:
            return 100

        normalized = (price - low) / (high - low)
        return max(0, min(round_half_up((1 - normalized) * 100), 100))

    def score_performance(self, device: DeviceRecord) -> int:
        """Blend CPU (0.4), RAM (0.3) and storage type (0.3) over whichever are present."""
        score = 0.0
        factors = 0.0

        cpu_spec = find_spec(device, any_of=("processor", "cpu", "chipset"))
        if cpu_spec is not None:
            cpu = self._cpu_score(cpu_spec.value)
            if cpu is not None:
                score += cpu * 0.4
                factors += 0.4

        ram = spec_number(device, any_of=("ram", "memory"))
        if ram is not None:
            score += min(ram / self.RAM_GB_CEILING * 100, 100) * 0.3
            factors += 0.3

        storage_spec = find_spec(device, any_of=("storage",))
        if storage_spec is not None:
            score += (80 if "ssd" in storage_spec.value.lower() else 40) * 0.3
            factors += 0.3

        if factors == 0:
            return self.NEUTRAL
        return min(round_half_up(score / factors), 100)

    def _cpu_score(self, value: str) -> float | None:
        """Clock speed against 3.5 GHz, or a bare benchmark figure against 1M points."""
        text = value.lower()
        if "ghz" in text:
            freq = parse_number(text)
            if freq is None:
                return None
            return min(freq / self.CPU_GHZ_CEILING * 100, 100)

        match = re.search(r"\d+", text)
        if match:
            return min(int(match.group(0)) / self.BENCHMARK_CEILING * 100, 100)
        return None

    def score_battery(self, device: DeviceRecord) -> int:
        """Step function on capacity in mAh."""
        capacity = spec_number(device, any_of=("battery",))
        if not capacity:
            return self.NEUTRAL

        for minimum, tier_score in self.BATTERY_TIERS:
            if capacity >= minimum:
                return tier_score
        return self.BATTERY_FLOOR

    def score_camera(self, device: DeviceRecord) -> int:
        """Main sensor resolution, camera count and stabilization/night features."""
        score = 50.0

        megapixels = spec_number(device, all_of=("camera", "main"))
        if megapixels:
            score += min(megapixels / self.CAMERA_MP_CEILING * 40, 40)

        camera_count = len(find_specs(device, any_of=("camera",)))
        score += min(camera_count * 5, 20)

        if has_feature(device, "stabilization"):
            score += 15
        if has_feature(device, "night"):
            score += 10

        return min(round_half_up(score), 100)

    def score_display(self, device: DeviceRecord) -> int:
        """Screen size, resolution tier and refresh rate."""
        score = 50.0

        size = spec_number(device, all_of=("screen", "size"))
        if size:
            score += min(size / self.SCREEN_INCH_CEILING * 20, 20)

        resolution_spec = find_spec(device, any_of=("resolution",))
        if resolution_spec is not None:
            resolution = resolution_spec.value.lower()
            for terms, bonus in self.RESOLUTION_TIERS:
                if any(term in resolution for term in terms):
                    score += bonus
                    break

        refresh = spec_number(device, any_of=("refresh",)) or 60
        if refresh >= 120:
            score += 15
        elif refresh >= 90:
            score += 10

        return min(round_half_up(score), 100)

    def score_design(self, device: DeviceRecord) -> int:
        """Build materials, water resistance and colour/finish options."""
        score = 60

        build_spec = find_spec(device, any_of=("build", "material"))
        if build_spec is not None:
            build = build_spec.value.lower()
            if any(material in build for material in self.PREMIUM_MATERIALS):
                score += 20

        if has_feature(device, "water"):
            score += 15

        score += min(count_features(device, "color", "finish") * 5, 15)

        return min(score, 100)

    def score_features(self, device: DeviceRecord) -> int:
        """Share of enabled features plus a bonus for each premium feature."""
        enabled = enabled_features(device)
        total = len(device.features) or 1
        availability = len(enabled) / total * 60

        premium_bonus = sum(6 for feature in self.PREMIUM_FEATURES if has_feature(device, feature))

        return min(round_half_up(availability + premium_bonus), 100)
