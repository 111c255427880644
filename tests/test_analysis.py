"""Tests for comparison analysis."""

import pytest

from src.analysis import ComparisonAnalyzer
from src.models import CATEGORIES, CategoryScores, DeviceRecord, DeviceScore, Specification


def make_score(device_id: str, overall: int) -> DeviceScore:
    return DeviceScore(
        device_id=device_id,
        device_name=device_id.title(),
        overall_score=overall,
        category_scores=CategoryScores(),
    )


@pytest.fixture
def analyzer() -> ComparisonAnalyzer:
    return ComparisonAnalyzer()


class TestAnalyze:
    """Tests for ComparisonAnalyzer.analyze."""

    def test_empty_collection(self, analyzer: ComparisonAnalyzer) -> None:
        """Test that no devices yields no analysis."""
        assert analyzer.analyze([]) is None

    def test_flagship_vs_budget(
        self,
        analyzer: ComparisonAnalyzer,
        flagship: DeviceRecord,
        budget_phone: DeviceRecord,
    ) -> None:
        """Test winner, value pick and recommendations for a two-device comparison."""
        analysis = analyzer.analyze([flagship, budget_phone])

        assert analysis is not None
        assert analysis.winner.device_id == "flagship"
        assert analysis.winner.overall_score == 84
        assert analysis.winner.rank == 1
        assert analysis.rankings[1].overall_score == 60
        assert analysis.best_value.device_id == "budget"
        assert analysis.recommendations.budget is analysis.best_value
        assert analysis.recommendations.gaming.device_id == "flagship"
        assert analysis.recommendations.photography is analysis.category_winners["camera"]
        assert analysis.recommendations.battery is analysis.category_winners["battery"]
        assert analysis.category_winners["price"].device_id == "budget"
        assert analysis.category_winners["display"].device_id == "flagship"

    def test_category_winners_cover_every_category(
        self,
        analyzer: ComparisonAnalyzer,
        priced_trio: list[DeviceRecord],
    ) -> None:
        """Test one winner per category, ties going to the first input device."""
        analysis = analyzer.analyze(priced_trio)

        assert analysis is not None
        assert set(analysis.category_winners) == set(CATEGORIES)
        for category in CATEGORIES:
            assert analysis.category_winners[category].device_id == "cheap"

    def test_best_value_is_score_per_price(self, analyzer: ComparisonAnalyzer, priced_trio: list[DeviceRecord]) -> None:
        """Test best value picks the highest score per price unit."""
        analysis = analyzer.analyze(priced_trio)
        assert analysis is not None
        assert analysis.best_value.device_id == "cheap"

    def test_best_value_skips_unpriced(
        self,
        analyzer: ComparisonAnalyzer,
        flagship: DeviceRecord,
        bare_device: DeviceRecord,
    ) -> None:
        """Test that devices without price never win best value."""
        analysis = analyzer.analyze([bare_device, flagship])
        assert analysis is not None
        assert analysis.best_value.device_id == "flagship"

    def test_best_value_with_duplicate_ids(
        self,
        analyzer: ComparisonAnalyzer,
        flagship: DeviceRecord,
        budget_phone: DeviceRecord,
    ) -> None:
        """Test that each device keeps its own price when ids collide."""
        flagship.id = budget_phone.id = "dup"

        analysis = analyzer.analyze([budget_phone, flagship])

        assert analysis is not None
        assert analysis.winner.device_name == "Flagship X"
        assert analysis.best_value.device_name == "Budget Y"

    def test_best_value_falls_back_to_winner(self, analyzer: ComparisonAnalyzer) -> None:
        """Test that with no prices anywhere best value is the winner."""
        devices = [
            DeviceRecord(id="u1", name="Unpriced One"),
            DeviceRecord(
                id="u2",
                name="Unpriced Two",
                specifications=[Specification("Battery", "Battery", "5000mAh")],
            ),
        ]
        analysis = analyzer.analyze(devices)

        assert analysis is not None
        assert analysis.winner.device_id == "u2"
        assert analysis.best_value is analysis.winner

    def test_single_device(self, analyzer: ComparisonAnalyzer, bare_device: DeviceRecord) -> None:
        """Test a lone device wins everything."""
        analysis = analyzer.analyze([bare_device])

        assert analysis is not None
        assert analysis.winner.device_id == "bare"
        assert analysis.best_value is analysis.winner
        assert "44 points" in analysis.summary


class TestSummary:
    """Tests for summary wording."""

    def test_clear_win(self, analyzer: ComparisonAnalyzer) -> None:
        """Test a margin above 5 points reads as a clear win."""
        summary = analyzer.summarize([make_score("alpha", 90), make_score("beta", 83)])

        assert "Alpha emerges as the clear winner" in summary
        assert "overall score of 90/100" in summary
        assert "significant margin of 7 points" in summary

    def test_narrow_win(self, analyzer: ComparisonAnalyzer) -> None:
        """Test a margin of 5 points or less reads as a narrow win."""
        summary = analyzer.summarize([make_score("alpha", 90), make_score("beta", 88)])

        assert "Alpha emerges as the narrow winner" in summary
        assert "only 2 points separating" in summary

    def test_margin_of_exactly_five_is_narrow(self, analyzer: ComparisonAnalyzer) -> None:
        """Test the boundary case."""
        summary = analyzer.summarize([make_score("alpha", 75), make_score("beta", 70)])
        assert "narrow winner" in summary
        assert "only 5 points" in summary


class TestInsights:
    """Tests for per-device insights."""

    def test_flagship_insights(self, analyzer: ComparisonAnalyzer, flagship: DeviceRecord) -> None:
        """Test strengths with high impact and a value recommendation."""
        analysis = analyzer.analyze([flagship])
        assert analysis is not None

        insights = analyzer.insights(analysis.rankings)

        assert len(insights) == 8
        assert all(i.impact == "high" for i in insights)
        assert insights[0].title == "Excellent Price"
        assert insights[-1].type == "recommendation"
        assert insights[-1].title == "Great Value Choice"

    def test_weakness_impact(self, analyzer: ComparisonAnalyzer) -> None:
        """Test weakness insights and their impact levels."""
        score = DeviceScore(
            device_id="w",
            device_name="Weak",
            overall_score=40,
            category_scores=CategoryScores(
                price=50, performance=50, battery=30, camera=20, display=50, design=60, features=50
            ),
        )
        insights = analyzer.insights([score])

        assert [(i.title, i.impact) for i in insights] == [
            ("Limited Battery", "medium"),
            ("Limited Camera", "high"),
        ]
        assert "could improve in camera (score: 20/100)" in insights[1].description

    def test_capped_at_ten(self, analyzer: ComparisonAnalyzer, flagship: DeviceRecord) -> None:
        """Test that insights are limited to ten."""
        analysis = analyzer.analyze([flagship, flagship])
        assert analysis is not None
        assert len(analyzer.insights(analysis.rankings)) == 10


class TestCatalogStats:
    """Tests for catalog-wide statistics."""

    def test_stats(self, analyzer: ComparisonAnalyzer, priced_trio: list[DeviceRecord]) -> None:
        """Test averages, bands, brands and top performers."""
        stats = analyzer.catalog_stats(priced_trio)

        assert stats.total_devices == 3
        assert stats.average_price == 500
        assert stats.average_rating == 0.0
        assert stats.average_score == 44.0
        assert [band["count"] for band in stats.price_distribution] == [0, 1, 1, 1, 0]
        assert stats.brand_distribution[0]["brand"] == "Acme"
        assert stats.brand_distribution[0]["count"] == 2
        assert stats.brand_distribution[0]["market_share"] == pytest.approx(200 / 3)
        assert [s.device_id for s in stats.top_performers] == ["cheap", "mid", "dear"]
        assert [s.rank for s in stats.top_performers] == [1, 2, 3]

    def test_empty_catalog(self, analyzer: ComparisonAnalyzer) -> None:
        """Test stats over nothing."""
        stats = analyzer.catalog_stats([])
        assert stats.total_devices == 0
        assert stats.top_performers == []
