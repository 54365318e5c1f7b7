"""Scraper for the upcoming releases listing of the metal archives."""

import re
import time
from dataclasses import dataclass
from datetime import date
from typing import List

from ..config import ARCHIVE_PAGE_SIZE
from ..models import Calendar, Release
from .base import BaseScraper, RowParseError
from .fragments import extract_anchors

MONTH_NAMES = {
    "January": 1,
    "February": 2,
    "March": 3,
    "April": 4,
    "May": 5,
    "June": 6,
    "July": 7,
    "August": 8,
    "September": 9,
    "October": 10,
    "November": 11,
    "December": 12,
}

_DAY_PATTERN = re.compile(r"^(\d{1,2})(?:st|nd|rd|th)?$")


def parse_release_date(text: str) -> date:
    """
    Parse a listing date such as "October 9th, 2024".

    Raises:
        RowParseError: if the text is not a valid calendar date
    """
    tokens = text.replace(",", " ").split()
    if len(tokens) != 3:
        raise RowParseError(f"Unexpected date format: {text!r}")

    month_name, day_text, year_text = tokens
    month = MONTH_NAMES.get(month_name)
    day_match = _DAY_PATTERN.match(day_text)
    if month is None or day_match is None or not year_text.isdigit():
        raise RowParseError(f"Unexpected date format: {text!r}")

    try:
        return date(int(year_text), month, int(day_match.group(1)))
    except ValueError as e:
        raise RowParseError(f"Invalid date {text!r}: {e}") from e


@dataclass
class ArchiveRow:
    """A decoded row of the listing."""

    release: Release
    release_date: date

    @classmethod
    def from_cells(cls, cells: List[str]) -> "ArchiveRow":
        """
        Decode the cells [artist, album, type, genre, date, ...] of a row.

        Raises:
            RowParseError: if a cell is missing or holds no usable value
        """
        if not isinstance(cells, list):
            raise RowParseError(f"Expected a list of cells, got {cells!r}")
        if len(cells) < 5:
            raise RowParseError(f"Expected at least 5 cells, got {len(cells)}")
        for index, cell in enumerate(cells[:5]):
            if cell is not None and not isinstance(cell, str):
                raise RowParseError(f"Cell {index} is not text: {cell!r}")

        artists = extract_anchors(cells[0])
        if not artists:
            raise RowParseError(f"No artist link in {cells[0]!r}")

        albums = extract_anchors(cells[1])
        if not albums:
            raise RowParseError(f"No album link in {cells[1]!r}")

        release = Release(
            artist=" / ".join(anchor.text for anchor in artists),
            album=albums[0].text,
        ).with_metadata(
            artist_link=artists[0].href,
            album_link=albums[0].href,
            release_type=cells[2] or "",
            genre=cells[3] or "",
        )
        return cls(release=release, release_date=parse_release_date(cells[4] or ""))


class ArchiveScraper(BaseScraper):
    """Scraper for the paginated upcoming releases of the metal archives.

    Pages are walked in order until one comes back empty. The listing
    starts at today's date, so the walk goes on past the end of the
    requested year until the archive runs out of announcements.
    """

    SOURCE_NAME = "The Metal Archives"

    def scrape(self, year: int) -> Calendar:
        self.logger.info(f"Scraping {self.SOURCE_NAME} for {year}")
        calendar = Calendar(year)
        started = time.monotonic()
        page_index = 0
        kept = 0
        skipped = 0

        while True:
            start = page_index * ARCHIVE_PAGE_SIZE
            self.logger.info(f"Fetching entries {start} to {start + ARCHIVE_PAGE_SIZE}")

            page = self.client.fetch_archive_page(page_index)
            if page is None:
                break

            for cells in page.rows:
                try:
                    row = ArchiveRow.from_cells(cells)
                except RowParseError as e:
                    skipped += 1
                    self.logger.debug(f"Skipping row on page {page_index}: {e}")
                    continue

                if row.release_date.year != year:
                    continue

                if calendar.add_release(
                    row.release_date.month, row.release_date.day, row.release
                ):
                    kept += 1

            page_index += 1

        self.logger.info(
            f"Calendar created from {page_index} pages in "
            f"{time.monotonic() - started:.1f}s: {kept} releases kept, "
            f"{skipped} rows skipped"
        )
        self._validate_results(calendar)
        return calendar
