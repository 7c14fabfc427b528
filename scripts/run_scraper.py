"""
Run the development register scraper.

Searches the last month of the register plus one randomly chosen historical
month, normalizes addresses and stores new applications in the SQLite database.
"""

import argparse
import asyncio
import logging
import sys
from datetime import date
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from yorkescraper.config import settings
from yorkescraper.models.crawl import CrawlWindow
from yorkescraper.scrapers.yorke_scraper import scrape_register

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("RunScraper")


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='Scrape development applications from the Yorke Peninsula Council register.'
    )
    parser.add_argument(
        '--database',
        type=Path,
        default=None,
        help=f'SQLite database file (default: {settings.database_path})'
    )
    parser.add_argument(
        '--max-pages',
        type=int,
        default=None,
        help=f'Maximum result pages per date window (default: {settings.max_pages})'
    )
    parser.add_argument(
        '--no-random-window',
        action='store_true',
        help='Only search the most recent month'
    )
    parser.add_argument(
        '--date-from',
        type=date.fromisoformat,
        default=None,
        help='Start of an explicit search window (YYYY-MM-DD)'
    )
    parser.add_argument(
        '--date-to',
        type=date.fromisoformat,
        default=None,
        help='End of an explicit search window (YYYY-MM-DD)'
    )
    args = parser.parse_args(argv)
    if (args.date_from is None) != (args.date_to is None):
        parser.error('--date-from and --date-to must be given together')
    if args.date_from and args.date_from > args.date_to:
        parser.error('--date-from must not be after --date-to')
    return args


def build_config(args):
    overrides = {}
    if args.database is not None:
        overrides['database_path'] = args.database
    if args.max_pages is not None:
        overrides['max_pages'] = args.max_pages
    if args.no_random_window:
        overrides['random_window'] = False
    return settings.model_copy(update=overrides)


def main(argv=None):
    """Main entry point for running the scraper."""
    args = parse_args(argv)
    config = build_config(args)

    windows = None
    if args.date_from is not None:
        windows = [CrawlWindow(date_from=args.date_from, date_to=args.date_to)]

    logger.info("--- Starting Development Register Scraper ---")
    logger.info(f"Database: {config.database_path}")

    try:
        asyncio.run(scrape_register(config, windows=windows))
        logger.info("Complete.")
        return 0

    except Exception as e:
        logger.error(f"Scraper failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
