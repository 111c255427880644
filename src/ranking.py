"""Ranking engine: filter, sort and assign ranks to scored devices."""

import logging
from collections.abc import Callable
from datetime import date, timedelta

from src.aggregator import WeightedAggregator
from src.config import SORT_KEYS, EngineConfig
from src.models import DeviceRecord, DeviceScore, RankingFilters, RankingPage, WeightVector

logger = logging.getLogger(__name__)

Scored = tuple[DeviceRecord, DeviceScore]


def assign_ranks(scores: list[DeviceScore]) -> list[DeviceScore]:
    """Number an already-sorted list 1..N.

    Equal scores get consecutive, distinct ranks in list order; ties are not shared.
    """
    for position, score in enumerate(scores, start=1):
        score.rank = position
    return scores


def sort_by_overall(scores: list[DeviceScore]) -> list[DeviceScore]:
    """Stable descending sort on overall score, then rank assignment."""
    return assign_ranks(sorted(scores, key=lambda s: s.overall_score, reverse=True))


class RankingEngine:
    """Ranks a device catalog under a weight vector."""

    RELEASE_WINDOWS = {"past-year": 365, "past-month": 30}

    def __init__(self, weights: WeightVector | None = None, config: EngineConfig | None = None):
        """Initialize ranking engine.

        Args:
            weights: Category weights. Uses defaults if None.
            config: Engine configuration. Uses defaults if None.
        """
        self.config = config or EngineConfig()
        self.aggregator = WeightedAggregator(weights, self.config)

    @property
    def weights(self) -> WeightVector:
        return self.aggregator.weights

    def rank(
        self,
        devices: list[DeviceRecord],
        sort_by: str | None = None,
        filters: RankingFilters | None = None,
        today: date | None = None,
    ) -> RankingPage:
        """Score, filter, sort and paginate a device collection.

        Scores are computed against the whole collection so that filtering
        does not move a device's price score.

        Args:
            devices: Devices to rank.
            sort_by: One of 'overall', 'trending', 'value', 'popular', 'newest'.
            filters: Optional filters and pagination.
            today: Reference date for release windows. Defaults to today.

        Returns:
            RankingPage with ranks assigned over the filtered set.

        Raises:
            ValueError: If sort_by is not a known sort key.
        """
        sort_by = sort_by or self.config.default_sort
        if sort_by not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {sort_by} (expected one of {', '.join(SORT_KEYS)})")
        filters = filters or RankingFilters(limit=self.config.default_limit)

        if not devices:
            return RankingPage(rankings=[], total=0, limit=filters.limit, offset=filters.offset, sort_by=sort_by)

        scored: list[Scored] = list(zip(devices, self.aggregator.score_many(devices)))
        kept = [pair for pair in scored if self._passes(pair[0], filters, today or date.today())]
        logger.debug(f"{len(kept)} of {len(scored)} devices passed filters")

        ordered = sorted(kept, key=self._sort_key(sort_by), reverse=True)
        ranked = assign_ranks([score for _, score in ordered])

        for device, score in ordered:
            self._apply_movement(device, score)

        page = ranked[filters.offset : filters.offset + filters.limit]
        logger.info(f"Ranked {len(ranked)} devices by {sort_by}, returning {len(page)}")
        return RankingPage(
            rankings=page,
            total=len(ranked),
            limit=filters.limit,
            offset=filters.offset,
            sort_by=sort_by,
        )

    def _sort_key(self, sort_by: str) -> Callable[[Scored], float]:
        if sort_by == "trending":
            return lambda pair: pair[0].trend_score or 0
        if sort_by == "value":
            return lambda pair: self.value_ratio(pair[0])
        if sort_by == "popular":
            return lambda pair: pair[0].views or 0
        if sort_by == "newest":
            return lambda pair: pair[0].release_date.toordinal() if pair[0].release_date else 0
        return lambda pair: pair[1].overall_score

    def value_ratio(self, device: DeviceRecord) -> float:
        """Rating per price unit, scaled by the value multiplier. 0 without rating or price."""
        price = self.aggregator.scorer.base_price(device)
        if not device.average_rating or price is None:
            return 0.0
        return device.average_rating * self.config.value_multiplier / price

    def select(
        self,
        devices: list[DeviceRecord],
        filters: RankingFilters,
        today: date | None = None,
    ) -> list[DeviceRecord]:
        """Devices passing the filters, in input order. Pagination is not applied."""
        today = today or date.today()
        return [device for device in devices if self._passes(device, filters, today)]

    def _passes(self, device: DeviceRecord, filters: RankingFilters, today: date) -> bool:
        if filters.brands:
            wanted = {b.lower() for b in filters.brands}
            if (device.brand or "").lower() not in wanted:
                return False

        if filters.categories:
            wanted = {c.lower() for c in filters.categories}
            if (device.category or "").lower() not in wanted:
                return False

        price = self.aggregator.scorer.base_price(device)
        if price is not None:
            if filters.min_price is not None and price < filters.min_price:
                return False
            if filters.max_price is not None and price > filters.max_price:
                return False

        if device.average_rating and device.average_rating < filters.min_rating:
            return False

        window = self.RELEASE_WINDOWS.get(filters.release_window)
        if window is not None:
            if device.release_date is None or device.release_date < today - timedelta(days=window):
                return False

        return True

    def _apply_movement(self, device: DeviceRecord, score: DeviceScore) -> None:
        if device.previous_rank is None:
            return
        score.rank_change = device.previous_rank - score.rank
        if score.rank_change > 0:
            score.trend = "up"
        elif score.rank_change < 0:
            score.trend = "down"
        else:
            score.trend = "stable"
