"""Data models for device scoring and ranking."""

import math
from dataclasses import dataclass, field, fields
from datetime import date
from typing import Any, Literal

CATEGORIES: tuple[str, ...] = (
    "price",
    "performance",
    "battery",
    "camera",
    "display",
    "design",
    "features",
)

SortKey = Literal["overall", "trending", "value", "popular", "newest"]


@dataclass
class Specification:
    """Free-text specification entry, e.g. ('Battery', 'Capacity', '5000mAh')."""

    category: str
    name: str
    value: str


@dataclass
class Feature:
    """Named boolean feature."""

    name: str
    available: bool = False


@dataclass
class DeviceRecord:
    """Device as supplied by the catalog. Every attribute besides identity may be missing."""

    id: str
    name: str
    brand: str | None = None
    model: str | None = None
    category: str | None = None  # 'Smartphones', 'Tablets', ...
    launch_price: float | None = None
    current_price: float | None = None
    currency: str = "USD"
    specifications: list[Specification] = field(default_factory=list)
    features: list[Feature] = field(default_factory=list)
    average_rating: float | None = None  # 0-5
    views: int | None = None
    release_date: date | None = None
    trend_score: float | None = None
    previous_rank: int | None = None

    @property
    def price(self) -> float | None:
        """Current price, falling back to launch price. Zero counts as unknown."""
        return self.current_price or self.launch_price or None


@dataclass
class CategoryScores:
    """The seven category scores of one device, each 0-100."""

    price: int = 0
    performance: int = 0
    battery: int = 0
    camera: int = 0
    display: int = 0
    design: int = 0
    features: int = 0

    def get(self, category: str) -> int:
        """Return the score for a category name."""
        value: int = getattr(self, category)
        return value

    def as_dict(self) -> dict[str, int]:
        return {category: self.get(category) for category in CATEGORIES}


@dataclass
class WeightVector:
    """Caller-supplied category weights (UI sliders run 0-10)."""

    price: float = 5.0
    performance: float = 5.0
    battery: float = 5.0
    camera: float = 5.0
    display: float = 5.0
    design: float = 5.0
    features: float = 5.0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"Weight for {f.name} must be a finite non-negative number, got {value}")

    def get(self, category: str) -> float:
        value: float = getattr(self, category)
        return value

    def total(self) -> float:
        return sum(self.get(category) for category in CATEGORIES)

    def as_dict(self) -> dict[str, float]:
        return {category: self.get(category) for category in CATEGORIES}

    @classmethod
    def from_mapping(cls, values: dict[str, Any], base: "WeightVector | None" = None) -> "WeightVector":
        """Build weights from a mapping, taking missing categories from ``base``.

        Args:
            values: Category name to weight. Unknown keys are ignored.
            base: Weights used for categories absent from ``values``. Defaults if None.

        Returns:
            New WeightVector.
        """
        merged = (base or cls()).as_dict()
        for category in CATEGORIES:
            if values.get(category) is not None:
                merged[category] = float(values[category])
        return cls(**merged)


@dataclass
class DeviceScore:
    """Scored device. Rank is 0 until the ranking engine assigns it."""

    device_id: str
    device_name: str
    overall_score: int
    category_scores: CategoryScores
    rank: int = 0
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    rank_change: int | None = None
    trend: Literal["up", "down", "stable"] | None = None


@dataclass
class Recommendations:
    """Use-case picks derived from a scored collection."""

    gaming: DeviceScore
    photography: DeviceScore
    battery: DeviceScore
    budget: DeviceScore


@dataclass
class ComparisonAnalysis:
    """Cross-device analysis over a ranked collection."""

    winner: DeviceScore
    best_value: DeviceScore
    category_winners: dict[str, DeviceScore]
    recommendations: Recommendations
    summary: str
    rankings: list[DeviceScore] = field(default_factory=list)


@dataclass
class Insight:
    """Single observation about one device in a comparison."""

    type: Literal["strength", "weakness", "recommendation"]
    device_id: str
    title: str
    description: str
    impact: Literal["high", "medium"]


@dataclass
class RankingFilters:
    """Catalog filters applied before ranks are assigned."""

    brands: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    min_price: float | None = None
    max_price: float | None = None
    min_rating: float = 0.0
    release_window: Literal["all", "past-year", "past-month"] = "all"
    limit: int = 50
    offset: int = 0


@dataclass
class RankingPage:
    """A page of ranked devices plus pagination metadata."""

    rankings: list[DeviceScore]
    total: int
    limit: int
    offset: int
    sort_by: str = "overall"

    @property
    def has_more(self) -> bool:
        return self.offset + self.limit < self.total


@dataclass
class CatalogStats:
    """Aggregate figures for a scored catalog."""

    total_devices: int
    average_price: int
    average_rating: float
    average_score: float
    price_distribution: list[dict[str, Any]] = field(default_factory=list)
    brand_distribution: list[dict[str, Any]] = field(default_factory=list)
    top_performers: list[DeviceScore] = field(default_factory=list)
