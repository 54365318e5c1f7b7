from .archive import ArchiveScraper
from .base import BaseScraper, RowParseError, ScraperError
from .client import ArchivePage, SourceClient
from .wiki import WikiScraper

__all__ = [
    "ArchivePage",
    "ArchiveScraper",
    "BaseScraper",
    "RowParseError",
    "ScraperError",
    "SourceClient",
    "WikiScraper",
]
