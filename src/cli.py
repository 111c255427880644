"""Command-line interface for device scoring and ranking."""

import argparse
import logging
import math
import sys
from pathlib import Path

from src.analysis import ComparisonAnalyzer
from src.catalog import load_catalog
from src.config import SORT_KEYS, EngineConfig, load_config
from src.models import CATEGORIES, DeviceRecord, RankingFilters, WeightVector
from src.ranking import RankingEngine
from src.report import RankingReport


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for CLI.

    Args:
        verbose: Whether to enable verbose (DEBUG) logging.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_weight_overrides(values: list[str] | None) -> dict[str, float]:
    """Parse repeated ``CATEGORY=WEIGHT`` arguments.

    Raises:
        ValueError: On unknown categories, non-numeric or negative weights.
    """
    overrides: dict[str, float] = {}
    for item in values or []:
        category, sep, raw = item.partition("=")
        category = category.strip().lower()
        if not sep or category not in CATEGORIES:
            raise ValueError(f"Invalid weight '{item}', expected CATEGORY=N with CATEGORY in {', '.join(CATEGORIES)}")
        try:
            weight = float(raw)
        except ValueError:
            raise ValueError(f"Invalid weight value in '{item}'") from None
        if not math.isfinite(weight) or weight < 0:
            raise ValueError(f"Weight for {category} must be a finite non-negative number")
        overrides[category] = weight
    return overrides


def _load_inputs(args: argparse.Namespace) -> tuple[EngineConfig, list[DeviceRecord], WeightVector]:
    config = load_config(Path(args.config) if args.config else None)
    devices = load_catalog(Path(args.catalog))
    weights = config.resolve_weights(
        getattr(args, "preset", None),
        parse_weight_overrides(getattr(args, "weight", None)),
    )
    return config, devices, weights


def run_rank(args: argparse.Namespace) -> int:
    """Rank a catalog and print the table.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    try:
        config, devices, weights = _load_inputs(args)
        filters = RankingFilters(
            brands=args.brand or [],
            categories=args.category or [],
            min_price=args.min_price,
            max_price=args.max_price,
            min_rating=args.min_rating,
            release_window=args.released,
            limit=args.limit if args.limit is not None else config.default_limit,
            offset=args.offset,
        )
        engine = RankingEngine(weights, config)
        page = engine.rank(devices, sort_by=args.sort_by, filters=filters)

        print(f"\n{'Rank':<6}{'Device':<32}{'Score':>6}  Strengths")
        print("-" * 70)
        for score in page.rankings:
            movement = f" ({score.trend} {score.rank_change:+d})" if score.trend else ""
            print(
                f"{score.rank:<6}{score.device_name[:30]:<32}{score.overall_score:>6}  "
                f"{', '.join(score.strengths) or '-'}{movement}"
            )
        print(f"\nShowing {len(page.rankings)} of {page.total} devices (sorted by {page.sort_by})")

        if args.report:
            # Verdict covers only devices that passed the filters
            analysis = ComparisonAnalyzer(weights, config).analyze(engine.select(devices, filters))
            _, summary_path = RankingReport(Path(args.report)).write(page, weights, analysis)
            print(f"Report written: {summary_path}")

        return 0

    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Error during ranking")
        print(f"Error: {e}", file=sys.stderr)
        return 1


def run_compare(args: argparse.Namespace) -> int:
    """Compare devices in a catalog and print the analysis.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code.
    """
    try:
        config, devices, weights = _load_inputs(args)
        analyzer = ComparisonAnalyzer(weights, config)
        analysis = analyzer.analyze(devices)

        if analysis is None:
            print("No devices to compare")
            return 0

        print("\n" + "=" * 50)
        print("Comparison")
        print("=" * 50)
        print(analysis.summary)
        print(f"\nWinner:     {analysis.winner.device_name} ({analysis.winner.overall_score}/100)")
        print(f"Best value: {analysis.best_value.device_name}")

        print("\nCategory winners:")
        for category, score in analysis.category_winners.items():
            print(f"  {category:<12} {score.device_name} ({score.category_scores.get(category)})")

        recs = analysis.recommendations
        print("\nRecommendations:")
        print(f"  gaming       {recs.gaming.device_name}")
        print(f"  photography  {recs.photography.device_name}")
        print(f"  battery      {recs.battery.device_name}")
        print(f"  budget       {recs.budget.device_name}")

        insights = analyzer.insights(analysis.rankings)
        if insights:
            print("\nInsights:")
            for insight in insights:
                print(f"  [{insight.impact}] {insight.title}: {insight.description}")

        return 0

    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Error during comparison")
        print(f"Error: {e}", file=sys.stderr)
        return 1


def show_stats(args: argparse.Namespace) -> int:
    """Print catalog analytics.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code.
    """
    try:
        config, devices, weights = _load_inputs(args)
        stats = ComparisonAnalyzer(weights, config).catalog_stats(devices)

        print(f"Total devices:  {stats.total_devices}")
        print(f"Average price:  {stats.average_price} {config.base_currency}")
        print(f"Average rating: {stats.average_rating}")
        print(f"Average score:  {stats.average_score}")

        print("\nPrice distribution:")
        for band in stats.price_distribution:
            print(f"  {band['range']:<12} {band['count']:>4}  ({band['percentage']:.1f}%)")

        print("\nBrands:")
        for brand in stats.brand_distribution:
            print(f"  {brand['brand']:<12} {brand['count']:>4}  ({brand['market_share']:.1f}%)")

        print("\nTop performers:")
        for score in stats.top_performers:
            print(f"  {score.rank}. {score.device_name} ({score.overall_score})")

        return 0

    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Error computing catalog stats")
        print(f"Error: {e}", file=sys.stderr)
        return 1


def show_presets(args: argparse.Namespace) -> int:
    """List weight presets.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code.
    """
    try:
        config = load_config(Path(args.config) if args.config else None)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{'Preset':<14}" + "".join(f"{c[:6]:>8}" for c in CATEGORIES))
    for name, weights in config.presets.items():
        print(f"{name:<14}" + "".join(f"{weights.get(c):>8g}" for c in CATEGORIES))
    return 0


def _add_weight_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("catalog", help="Path to device catalog (YAML or JSON)")
    parser.add_argument(
        "--preset",
        default="balanced",
        help="Weight preset (default: balanced)",
    )
    parser.add_argument(
        "-w",
        "--weight",
        action="append",
        metavar="CATEGORY=N",
        help="Override one category weight (repeatable)",
    )


def main() -> int:
    """Main entry point for CLI.

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(
        description="Device Rank - Score, rank and compare devices by weighted specifications",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  device-rank rank devices.yaml --preset gaming --limit 10
  device-rank rank devices.yaml -w camera=10 -w price=2 --report reports/
  device-rank compare devices.yaml
  device-rank stats devices.json
  device-rank presets
        """,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to config file (default: built-in settings)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Rank command
    rank_parser = subparsers.add_parser("rank", help="Rank devices in a catalog")
    _add_weight_arguments(rank_parser)
    rank_parser.add_argument("--sort-by", choices=SORT_KEYS, default=None, help="Sort key (default: overall)")
    rank_parser.add_argument("--limit", type=int, default=None, help="Maximum devices to show")
    rank_parser.add_argument("--offset", type=int, default=0, help="Skip this many ranked devices")
    rank_parser.add_argument("--brand", action="append", help="Only include this brand (repeatable)")
    rank_parser.add_argument("--category", action="append", help="Only include this device category (repeatable)")
    rank_parser.add_argument("--min-price", type=float, default=None, help="Minimum price")
    rank_parser.add_argument("--max-price", type=float, default=None, help="Maximum price")
    rank_parser.add_argument("--min-rating", type=float, default=0.0, help="Minimum average rating")
    rank_parser.add_argument(
        "--released",
        choices=["all", "past-year", "past-month"],
        default="all",
        help="Release date window",
    )
    rank_parser.add_argument("--report", metavar="DIR", help="Write JSON and Markdown reports to DIR")
    rank_parser.set_defaults(func=run_rank)

    # Compare command
    compare_parser = subparsers.add_parser("compare", help="Compare devices and pick winners")
    _add_weight_arguments(compare_parser)
    compare_parser.set_defaults(func=run_compare)

    # Stats command
    stats_parser = subparsers.add_parser("stats", help="Show catalog analytics")
    _add_weight_arguments(stats_parser)
    stats_parser.set_defaults(func=show_stats)

    # Presets command
    presets_parser = subparsers.add_parser("presets", help="List weight presets")
    presets_parser.set_defaults(func=show_presets)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)
    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
