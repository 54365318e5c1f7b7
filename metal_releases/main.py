"""Scrape, reconcile and store the heavy metal release calendar."""

import logging
import sys
from datetime import date
from typing import Optional

from .config import Settings
from .filters import Reconciler
from .matching import BandcampMatcher
from .models import Calendar
from .scrapers import ArchiveScraper, ScraperError, SourceClient, WikiScraper
from .state import CalendarStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ],
)
logger = logging.getLogger(__name__)


def update_calendar(
    settings: Settings,
    client: Optional[SourceClient] = None,
    store: Optional[CalendarStore] = None,
) -> Optional[Calendar]:
    """
    Run one scrape cycle for the configured year.

    If a source cannot be scraped, or no release was found at all,
    nothing is stored: saving replaces the whole year, so a partial
    calendar would erase releases of the failed source.

    Returns:
        The stored calendar, or None if nothing was stored
    """
    year = settings.year or date.today().year
    client = client or SourceClient(timeout=settings.request_timeout)
    store = store or CalendarStore(settings.store_path)

    logger.info("=" * 60)
    logger.info(f"Updating heavy metal calendar for {year}")
    last_run = store.get_last_run()
    if last_run:
        logger.info(f"Previous calendar stored on {last_run:%Y-%m-%d %H:%M}")
    logger.info("=" * 60)

    # ========================================
    # Phase 1: Scrape both sources
    # ========================================
    logger.info("Phase 1: Scraping sources...")
    logger.info("-" * 40)

    calendars = []
    for scraper in (ArchiveScraper(client), WikiScraper(client)):
        try:
            calendar = scraper.scrape(year)
        except ScraperError as e:
            logger.error(f"Failed to scrape {scraper.SOURCE_NAME}: {e}")
            logger.error("Keeping the stored calendar until the next run.")
            return None
        logger.info(f"  {scraper.SOURCE_NAME}: {len(calendar)} releases")
        calendars.append(calendar)

    # ========================================
    # Phase 2: Reconcile
    # ========================================
    logger.info("Phase 2: Reconciling sources...")
    logger.info("-" * 40)

    archive, wiki = calendars
    merged = Reconciler().merge(archive, wiki)

    # ========================================
    # Phase 3: Store
    # ========================================
    logger.info("Phase 3: Storing calendar...")
    logger.info("-" * 40)

    if not len(merged):
        logger.error("No releases found in any source. Keeping the stored calendar.")
        return None

    store.save_calendar(merged)

    # ========================================
    # Phase 4: Bandcamp links
    # ========================================
    logger.info("Phase 4: Looking up Bandcamp pages...")
    logger.info("-" * 40)

    matcher = BandcampMatcher(client, settings)
    store.update_artist_links(matcher.match_artists(sorted(store.artists_without_links(merged))))
    store.save_state()

    log_releases_of_day(store, date.today())

    logger.info("=" * 60)
    logger.info(f"COMPLETE! {len(merged)} releases stored for {year}")
    logger.info("=" * 60)

    return merged


def log_releases_of_day(store: CalendarStore, day: date):
    """Log the stored releases of a day with their listening links."""
    releases = store.releases_on(day)
    logger.info(f"Releases on {day.isoformat()}: {len(releases)}")
    for release in releases:
        logger.info(f"  * {release.artist} - {release.album}")
        logger.info(f"    YouTube: {release.youtube_search_url}")
        bandcamp = store.get_artist_link(release.artist)
        if bandcamp:
            logger.info(f"    Bandcamp: {bandcamp}")


def main():
    """Main entry point for one scheduled run."""
    try:
        settings = Settings.from_env()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    return 0 if update_calendar(settings) is not None else 1


if __name__ == "__main__":
    sys.exit(main())
