"""
SocialMediaCharts - Main Entry Point

This module provides the command line entry point for summarizing, exporting,
and serving social-media engagement charts.
"""

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from socialcharts.dashboard.data_provider import SocialMediaDataProvider
from socialcharts.loaders.csv_exporter import CSVExporter
from socialcharts.models.errors import SocialChartsError
from socialcharts.models.records import AggregationResult
from socialcharts.utils.config import Config
from socialcharts.utils.logging_config import DATA_PATH_LOGGERS, LogContext, setup_logging


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        description="SocialMediaCharts - Social-Media Engagement Statistics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Log quartiles and averages for the configured dataset
  python -m socialcharts.main --summary

  # Summarize a specific file
  python -m socialcharts.main --summary --file data/socialMedia.csv

  # Write aggregate CSVs
  python -m socialcharts.main --export data/exports

  # Serve the dashboard from a remote CSV
  python -m socialcharts.main --serve --url https://example.com/socialMedia.csv --port 8080
        """
    )

    # Operation modes (mutually exclusive)
    mode_group = parser.add_mutually_exclusive_group(required=True)
    mode_group.add_argument(
        "--summary",
        action="store_true",
        help="Log the derived aggregates"
    )
    mode_group.add_argument(
        "--export",
        metavar="DIR",
        nargs="?",
        const="",
        help="Write aggregate CSV files to DIR (default: EXPORT_DIR)"
    )
    mode_group.add_argument(
        "--serve",
        action="store_true",
        help="Start the dashboard web server"
    )

    # Data source options
    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument(
        "--file",
        type=str,
        help="Posts CSV file (overrides SOCIAL_DATA_FILE)"
    )
    source_group.add_argument(
        "--url",
        type=str,
        help="Posts CSV URL (overrides SOCIAL_DATA_URL)"
    )

    # Server options
    parser.add_argument("--host", type=str, help="Dashboard host (overrides DASH_HOST)")
    parser.add_argument("--port", type=int, help="Dashboard port (overrides DASH_PORT)")
    parser.add_argument("--debug", action="store_true", help="Enable Dash debug mode")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log DEBUG detail while loading and aggregating the dataset"
    )

    return parser.parse_args(argv)


def build_data_provider(config: Config, args: argparse.Namespace) -> SocialMediaDataProvider:
    """Create a data provider, applying --file/--url overrides to config."""
    if args.file:
        config.data.csv_path = Path(args.file)
        config.data.csv_url = None
    elif args.url:
        config.data.csv_url = args.url

    return SocialMediaDataProvider(
        data_config=config.data,
        operational_config=config.operational,
        palette=config.charts.palette
    )


def log_summary(result: AggregationResult) -> None:
    """Log each derived collection."""
    logger = logging.getLogger(__name__)

    first, last = result.date_range
    logger.info(
        f"[INFO] {result.record_count} posts, {len(result.platforms)} platforms, "
        f"{len(result.post_types)} post types, {first.isoformat()} to {last.isoformat()}"
    )

    logger.info("[INFO] Likes quartiles by platform:")
    for platform, quartiles in result.quartiles_by_platform.items():
        logger.info(
            f"  {platform:<12} min={quartiles.min:g} q1={quartiles.q1:g} "
            f"median={quartiles.median:g} q3={quartiles.q3:g} max={quartiles.max:g} "
            f"(n={result.platform_counts.get(platform, 0)})"
        )

    logger.info("[INFO] Average likes by platform and post type:")
    for average in result.platform_post_type_averages:
        logger.info(f"  {average.platform:<12} {average.post_type:<10} {average.avg_likes:.2f}")

    logger.info("[INFO] Average likes by date:")
    for average in result.date_averages:
        logger.info(f"  {average.date.isoformat()} {average.avg_likes:.2f}")


def load_dataset(provider: SocialMediaDataProvider, verbose: bool = False) -> AggregationResult:
    """Load and aggregate the dataset, with DEBUG output from the data path when verbose."""
    if not verbose:
        return provider.load()
    with LogContext(DATA_PATH_LOGGERS, logging.DEBUG):
        return provider.load()


def run_summary(provider: SocialMediaDataProvider, verbose: bool = False) -> bool:
    """Load the dataset and log its aggregates."""
    log_summary(load_dataset(provider, verbose))
    return True


def run_export(
    provider: SocialMediaDataProvider,
    export_dir: Union[str, Path],
    verbose: bool = False
) -> bool:
    """Load the dataset and write aggregate CSVs."""
    logger = logging.getLogger(__name__)
    written = CSVExporter().export(load_dataset(provider, verbose), export_dir)
    for path in written:
        logger.info(f"[OK] Wrote {path}")
    return True


def run_server(config: Config, provider: SocialMediaDataProvider, args: argparse.Namespace) -> bool:
    """Load the dataset and start the dashboard."""
    from socialcharts.dashboard.app import SocialMediaDashboard

    load_dataset(provider, args.verbose)
    dashboard = SocialMediaDashboard(
        app_name=config.dashboard.title,
        data_provider=provider,
        chart_config=config.charts
    )
    dashboard.run(
        host=args.host or config.dashboard.host,
        port=args.port or config.dashboard.port,
        debug=args.debug or config.dashboard.debug
    )
    return True


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for SocialMediaCharts.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = parse_arguments(argv)

    try:
        config = Config()
    except ValueError as error:
        logging.basicConfig(level=logging.ERROR)
        logging.getLogger(__name__).error(f"[ERROR] Failed to load configuration: {error}")
        return 1

    setup_logging(log_dir=config.log_dir, log_config=config.logs)
    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info("SocialMediaCharts - Starting")
    logger.info(f"Timestamp: {datetime.now(timezone.utc).isoformat()}")
    logger.info("=" * 60)

    provider = build_data_provider(config, args)
    success = False

    try:
        if args.summary:
            success = run_summary(provider, args.verbose)
        elif args.export is not None:
            success = run_export(provider, args.export or config.export_dir, args.verbose)
        elif args.serve:
            success = run_server(config, provider, args)

    except KeyboardInterrupt:
        logger.warning("[WARN] Operation interrupted by user")
        return 130

    except SocialChartsError as error:
        logger.error(f"[ERROR] {error}")
        return 1

    logger.info("=" * 60)
    if success:
        logger.info("[DONE] SocialMediaCharts - Complete")
    else:
        logger.error("[ERROR] SocialMediaCharts - Failed")
    logger.info("=" * 60)

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
