"""Weighted combination of category scores into an overall device score."""

import logging

from src.categories import CategoryScorer
from src.config import EngineConfig
from src.extractor import round_half_up
from src.models import CATEGORIES, CategoryScores, DeviceRecord, DeviceScore, WeightVector

logger = logging.getLogger(__name__)


class WeightedAggregator:
    """Combines the seven category scores using caller weights."""

    MAX_STRENGTHS = 3
    MAX_WEAKNESSES = 2

    def __init__(
        self,
        weights: WeightVector | None = None,
        config: EngineConfig | None = None,
        scorer: CategoryScorer | None = None,
    ):
        """Initialize aggregator.

        Args:
            weights: Category weights. Uses defaults if None.
            config: Engine configuration. Uses defaults if None.
            scorer: Category scorer. Built from config if None.
        """
        self.weights = weights or WeightVector()
        self.config = config or EngineConfig()
        self.scorer = scorer or CategoryScorer(self.config)

    def overall(self, scores: CategoryScores) -> int:
        """Weighted mean of the category scores.

        An all-zero weight vector yields 0 rather than dividing by zero.
        """
        total_weight = self.weights.total()
        if total_weight == 0:
            return 0
        weighted = sum(scores.get(c) * self.weights.get(c) for c in CATEGORIES)
        return round_half_up(weighted / total_weight)

    def classify(self, scores: CategoryScores) -> tuple[list[str], list[str]]:
        """Split categories into strengths and weaknesses.

        Args:
            scores: Category scores of one device.

        Returns:
            (strengths, weaknesses), in category order and capped at 3 and 2.
        """
        strengths: list[str] = []
        weaknesses: list[str] = []

        for category in CATEGORIES:
            score = scores.get(category)
            if score >= self.config.strength_threshold:
                strengths.append(f"Excellent {category}")
            elif score <= self.config.weakness_threshold:
                weaknesses.append(f"Limited {category}")

        return strengths[: self.MAX_STRENGTHS], weaknesses[: self.MAX_WEAKNESSES]

    def score(self, device: DeviceRecord, candidates: list[DeviceRecord]) -> DeviceScore:
        """Score one device against the candidate set.

        Args:
            device: The device to score.
            candidates: Full candidate set (for price normalization).

        Returns:
            Unranked DeviceScore.
        """
        return self._build(device, self.scorer.score_all(device, candidates))

    def score_many(self, devices: list[DeviceRecord]) -> list[DeviceScore]:
        """Score every device against the whole collection, in input order.

        The collection's price range is computed once and shared by every device.
        """
        bounds = self.scorer.price_range(devices)
        return [self._build(device, self.scorer.score_all(device, price_bounds=bounds)) for device in devices]

    def _build(self, device: DeviceRecord, category_scores: CategoryScores) -> DeviceScore:
        strengths, weaknesses = self.classify(category_scores)

        return DeviceScore(
            device_id=device.id,
            device_name=device.name,
            overall_score=self.overall(category_scores),
            category_scores=category_scores,
            rank=0,
            strengths=strengths,
            weaknesses=weaknesses,
        )
