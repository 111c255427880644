"""Cross-device comparison analysis: winners, value picks, insights and catalog stats."""

import logging
from collections import Counter
from dataclasses import replace

from src.aggregator import WeightedAggregator
from src.config import EngineConfig
from src.extractor import round_half_up
from src.models import (
    CATEGORIES,
    CatalogStats,
    ComparisonAnalysis,
    DeviceRecord,
    DeviceScore,
    Insight,
    Recommendations,
    WeightVector,
)
from src.ranking import sort_by_overall

logger = logging.getLogger(__name__)


class ComparisonAnalyzer:
    """Derives winners, recommendations and a summary from a device collection."""

    CLOSE_RACE_MARGIN = 5
    MAX_INSIGHTS = 10
    TOP_PERFORMERS = 5
    TOP_BRANDS = 10

    PRICE_BANDS: list[tuple[str, float, float]] = [
        ("Under $200", 0, 200),
        ("$200-$500", 200, 500),
        ("$500-$800", 500, 800),
        ("$800-$1200", 800, 1200),
        ("Over $1200", 1200, float("inf")),
    ]

    def __init__(self, weights: WeightVector | None = None, config: EngineConfig | None = None):
        """Initialize analyzer.

        Args:
            weights: Category weights. Uses defaults if None.
            config: Engine configuration. Uses defaults if None.
        """
        self.config = config or EngineConfig()
        self.aggregator = WeightedAggregator(weights, self.config)

    def analyze(self, devices: list[DeviceRecord]) -> ComparisonAnalysis | None:
        """Run the full comparison over a device collection.

        Args:
            devices: Devices to compare, in input order.

        Returns:
            ComparisonAnalysis, or None for an empty collection.
        """
        if not devices:
            logger.info("No devices to compare")
            return None

        scores = self.aggregator.score_many(devices)
        priced = [(score, self.aggregator.scorer.base_price(device)) for device, score in zip(devices, scores)]
        ranked = sort_by_overall(list(scores))
        winner = ranked[0]

        best_value = self._best_value(priced) or winner
        category_winners = {c: max(scores, key=lambda s, c=c: s.category_scores.get(c)) for c in CATEGORIES}
        gaming = max(scores, key=lambda s: s.category_scores.performance + s.category_scores.display)

        recommendations = Recommendations(
            gaming=gaming,
            photography=category_winners["camera"],
            battery=category_winners["battery"],
            budget=best_value,
        )

        analysis = ComparisonAnalysis(
            winner=winner,
            best_value=best_value,
            category_winners=category_winners,
            recommendations=recommendations,
            summary=self.summarize(ranked),
            rankings=ranked,
        )
        logger.info(f"Compared {len(devices)} devices, winner: {winner.device_name} ({winner.overall_score})")
        return analysis

    def _best_value(self, priced: list[tuple[DeviceScore, float | None]]) -> DeviceScore | None:
        """Highest overall score per price unit among priced devices, first in rank order on ties.

        Args:
            priced: (score, base price) pairs in input order.
        """
        best: DeviceScore | None = None
        best_ratio = 0.0
        for score, price in sorted(priced, key=lambda pair: pair[0].overall_score, reverse=True):
            if price is None:
                continue
            ratio = score.overall_score / price * self.config.value_multiplier
            if best is None or ratio > best_ratio:
                best, best_ratio = score, ratio
        return best

    def summarize(self, ranked: list[DeviceScore]) -> str:
        """One-paragraph verdict on the winner and its margin over the runner-up.

        Args:
            ranked: Scores sorted by overall score. A lone device is compared against 0.

        Returns:
            Summary text.
        """
        winner = ranked[0]
        runner_up = ranked[1].overall_score if len(ranked) > 1 else 0
        gap = winner.overall_score - runner_up
        close = gap <= self.CLOSE_RACE_MARGIN

        margin = (
            f"It's a tight race with only {gap} points separating the top contenders."
            if close
            else f"It leads by a significant margin of {gap} points."
        )
        return (
            f"{winner.device_name} emerges as the {'narrow' if close else 'clear'} winner "
            f"with an overall score of {winner.overall_score}/100. {margin} "
            "The comparison reveals distinct strengths across different categories, "
            "making each device suitable for specific user needs."
        )

    def insights(self, scores: list[DeviceScore]) -> list[Insight]:
        """Strength, weakness and value observations, at most ten."""
        found: list[Insight] = []

        for score in scores:
            categories = score.category_scores.as_dict()

            for category, value in categories.items():
                if value > 80:
                    found.append(
                        Insight(
                            type="strength",
                            device_id=score.device_id,
                            title=f"Excellent {category.title()}",
                            description=f"{score.device_name} excels in {category} with a score of {value}/100",
                            impact="high" if value > 90 else "medium",
                        )
                    )

            for category, value in categories.items():
                if value < 40:
                    found.append(
                        Insight(
                            type="weakness",
                            device_id=score.device_id,
                            title=f"Limited {category.title()}",
                            description=f"{score.device_name} could improve in {category} (score: {value}/100)",
                            impact="high" if value < 25 else "medium",
                        )
                    )

            if categories["price"] > 70 and categories["performance"] > 70:
                found.append(
                    Insight(
                        type="recommendation",
                        device_id=score.device_id,
                        title="Great Value Choice",
                        description=f"{score.device_name} offers excellent price-to-performance ratio",
                        impact="high",
                    )
                )

        return found[: self.MAX_INSIGHTS]

    def catalog_stats(self, devices: list[DeviceRecord], scores: list[DeviceScore] | None = None) -> CatalogStats:
        """Catalog-wide averages, price bands, brand shares and top performers.

        Unpriced and unrated devices count as 0 in the averages. Pass ``scores``
        (aligned with ``devices``) to reuse an earlier scoring run.
        """
        total = len(devices)
        if total == 0:
            return CatalogStats(total_devices=0, average_price=0, average_rating=0.0, average_score=0.0)

        if scores is None:
            scores = self.aggregator.score_many(devices)
        ranked = sort_by_overall([replace(s) for s in scores])
        prices = [self.aggregator.scorer.base_price(d) or 0.0 for d in devices]

        price_distribution = []
        for label, low, high in self.PRICE_BANDS:
            count = sum(1 for p in prices if low <= p < high)
            price_distribution.append({"range": label, "count": count, "percentage": count / total * 100})

        brand_counts = Counter(d.brand or "Unknown" for d in devices)
        brand_distribution = [
            {"brand": brand, "count": count, "market_share": count / total * 100}
            for brand, count in brand_counts.most_common(self.TOP_BRANDS)
        ]

        return CatalogStats(
            total_devices=total,
            average_price=round_half_up(sum(prices) / total),
            average_rating=round(sum(d.average_rating or 0 for d in devices) / total, 1),
            average_score=round(sum(s.overall_score for s in scores) / total, 1),
            price_distribution=price_distribution,
            brand_distribution=brand_distribution,
            top_performers=ranked[: self.TOP_PERFORMERS],
        )
