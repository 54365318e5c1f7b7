"""Base scraper class with common functionality."""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..models import Calendar

if TYPE_CHECKING:
    from .client import SourceClient


class ScraperError(Exception):
    """Base exception for scraper errors."""

    pass


class RowParseError(ScraperError):
    """Raised when a single listing row cannot be decoded."""

    pass


class BaseScraper(ABC):
    """Abstract base class for the release sources."""

    SOURCE_NAME: str = ""

    def __init__(self, client: "SourceClient"):
        self.client = client
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def scrape(self, year: int) -> Calendar:
        """Build the calendar of a year from the source. Must be implemented by subclasses."""
        pass

    def _validate_results(self, calendar: Calendar) -> bool:
        """Validate that scrape returned expected data."""
        if not len(calendar):
            self.logger.warning(
                f"{self.SOURCE_NAME}: No releases found for {calendar.year} - "
                f"site structure may have changed"
            )
            return False
        return True
