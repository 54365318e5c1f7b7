"""Scraper for the yearly heavy metal releases page of the wiki."""

from dataclasses import dataclass
from typing import List

from bs4 import BeautifulSoup

from ..config import WIKI_HEADER_ARTIST, WIKI_TABLE_IDS
from ..models import Calendar, Release
from .base import BaseScraper


@dataclass
class _RowState:
    """Day and artist carried over from earlier rows.

    Rows of the wiki tables merge the day and artist cells vertically, so
    a short row inherits them from the row above.
    """

    day: int = 1
    artist: str = ""


class WikiScraper(BaseScraper):
    """Scraper for the per-month release tables of the wiki."""

    SOURCE_NAME = "Wikipedia"

    def scrape(self, year: int) -> Calendar:
        """
        Fetch the wiki page of a year and extract its calendar.

        Raises:
            ScraperError: if the page cannot be fetched
        """
        self.logger.info(f"Scraping {self.SOURCE_NAME} for {year}")
        html = self.client.fetch_wiki_page(year)
        calendar = self.extract_calendar(html, year)
        self._validate_results(calendar)
        return calendar

    def extract_calendar(self, html: str, year: int) -> Calendar:
        """Build a calendar from the HTML of a yearly page. Never raises."""
        calendar = Calendar(year)
        soup = BeautifulSoup(html, "lxml")

        # Shared by all tables: the day and artist of the last row of a
        # month carry into the first rows of the next one.
        state = _RowState()

        for table_id, month in WIKI_TABLE_IDS:
            tables = soup.select(f"#{table_id}")
            if len(tables) == 2 and month == 11:
                # Older pages give the October table the November id
                self._process_table(tables[0], calendar, 10, state)
                self._process_table(tables[1], calendar, month, state)
            elif len(tables) == 1:
                self._process_table(tables[0], calendar, month, state)
            elif tables:
                self.logger.debug(f"Skipping {len(tables)} tables with id {table_id}")

        self.logger.info(f"Calendar created with {len(calendar)} releases")
        return calendar

    def _process_table(self, table, calendar: Calendar, month: int, state: _RowState):
        for row in self._find_rows(table):
            cells = [cell.get_text().strip() for cell in row.find_all(recursive=False)]

            if len(cells) == 3:
                day, artist, album = cells
                try:
                    state.day = int(day)
                except ValueError:
                    pass
                state.artist = artist
                if artist != WIKI_HEADER_ARTIST:
                    calendar.add_release(month, state.day, Release(artist, album))
            elif len(cells) == 2:
                artist, album = cells
                state.artist = artist
                calendar.add_release(month, state.day, Release(artist, album))
            elif len(cells) == 1:
                calendar.add_release(month, state.day, Release(state.artist, cells[0]))

    def _find_rows(self, table) -> List:
        """Find the body rows of a table, whether or not it has a tbody."""
        return table.select("tbody tr") or table.select("tr")
