"""Multi-format output for ranking runs."""

import json
import logging
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any

from src.models import CATEGORIES, ComparisonAnalysis, DeviceScore, RankingPage, WeightVector

logger = logging.getLogger(__name__)


class RankingReport:
    """Writes a ranking run as JSON and as a Markdown summary."""

    def __init__(self, reports_dir: Path):
        """Initialize report writer.

        Args:
            reports_dir: Directory for report files.
        """
        self.reports_dir = Path(reports_dir)
        self.reports_dir.mkdir(parents=True, exist_ok=True)

    def write(
        self,
        page: RankingPage,
        weights: WeightVector,
        analysis: ComparisonAnalysis | None = None,
    ) -> tuple[Path, Path]:
        """Write both report formats.

        Returns:
            (json_path, summary_path).
        """
        return self.write_json(page, weights, analysis), self.write_summary(page, weights, analysis)

    def write_json(
        self,
        page: RankingPage,
        weights: WeightVector,
        analysis: ComparisonAnalysis | None = None,
    ) -> Path:
        """Write the ranking page as JSON.

        Args:
            page: Ranked page to write.
            weights: Weights used for the run.
            analysis: Optional comparison analysis.

        Returns:
            Path to the JSON file.
        """
        date = datetime.now().strftime("%Y-%m-%d")
        json_path = self.reports_dir / f"rankings_{date}.json"

        document: dict[str, Any] = {
            "generated_at": datetime.now().isoformat(),
            "sort_by": page.sort_by,
            "weights": weights.as_dict(),
            "pagination": {
                "total": page.total,
                "limit": page.limit,
                "offset": page.offset,
                "has_more": page.has_more,
            },
            "rankings": [asdict(score) for score in page.rankings],
        }
        if analysis is not None:
            document["analysis"] = {
                "winner": analysis.winner.device_id,
                "best_value": analysis.best_value.device_id,
                "category_winners": {c: s.device_id for c, s in analysis.category_winners.items()},
                "recommendations": {
                    "gaming": analysis.recommendations.gaming.device_id,
                    "photography": analysis.recommendations.photography.device_id,
                    "battery": analysis.recommendations.battery.device_id,
                    "budget": analysis.recommendations.budget.device_id,
                },
                "summary": analysis.summary,
            }

        with open(json_path, "w") as f:
            json.dump(document, f, indent=2)

        logger.info(f"Ranking JSON written: {json_path}")
        return json_path

    def write_summary(
        self,
        page: RankingPage,
        weights: WeightVector,
        analysis: ComparisonAnalysis | None = None,
    ) -> Path:
        """Write a Markdown summary of the ranking page.

        Returns:
            Path to the summary file.
        """
        date = datetime.now().strftime("%Y-%m-%d")
        summary_path = self.reports_dir / f"ranking_summary_{date}.md"
        summary_path.write_text(self._render_summary(date, page, weights, analysis))

        logger.info(f"Ranking summary written: {summary_path}")
        return summary_path

    def _render_summary(
        self,
        date: str,
        page: RankingPage,
        weights: WeightVector,
        analysis: ComparisonAnalysis | None,
    ) -> str:
        lines = [
            f"# Device Rankings - {date}",
            "",
            "## Overview",
            "",
            f"- **Devices Ranked:** {page.total}",
            f"- **Sorted By:** {page.sort_by}",
            f"- **Showing:** {len(page.rankings)} (offset {page.offset})",
            "",
            "## Weights",
            "",
        ]
        for category, weight in weights.as_dict().items():
            lines.append(f"- **{category}:** {weight:g}")
        lines.append("")

        if analysis is not None:
            lines.extend(["## Verdict", "", analysis.summary, ""])
            lines.append(f"- **Best Value:** {analysis.best_value.device_name}")
            for category in CATEGORIES:
                lines.append(f"- **Best {category}:** {analysis.category_winners[category].device_name}")
            lines.append("")

        if page.rankings:
            lines.extend(["## Rankings", ""])
            for score in page.rankings:
                lines.extend(self._format_entry(score))
        else:
            lines.extend(["*No devices matched.*", ""])

        lines.extend(
            [
                "---",
                f"*Generated at {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}*",
            ]
        )
        return "\n".join(lines)

    def _format_entry(self, score: DeviceScore) -> list[str]:
        """Format a single ranked device for Markdown."""
        name = f"{score.device_name[:60]}..." if len(score.device_name) > 60 else score.device_name
        breakdown = ", ".join(f"{c} {v}" for c, v in score.category_scores.as_dict().items())

        lines = [
            f"### #{score.rank} {name}",
            "",
            f"- **Score:** {score.overall_score}/100",
            f"- **Breakdown:** {breakdown}",
        ]
        if score.strengths:
            lines.append(f"- **Strengths:** {', '.join(score.strengths)}")
        if score.weaknesses:
            lines.append(f"- **Weaknesses:** {', '.join(score.weaknesses)}")
        if score.trend is not None:
            lines.append(f"- **Movement:** {score.trend} ({score.rank_change:+d})")

        lines.append("")
        return lines
