"""Configuration for the heavy metal release calendar."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

# Sources
WIKI_URL_TEMPLATE = "https://en.wikipedia.org/wiki/{year}_in_heavy_metal_music"
ARCHIVE_URL = "https://www.metal-archives.com/release/ajax-upcoming/json/1"
BANDCAMP_URL_TEMPLATE = "https://{slug}.bandcamp.com"

# Archive pagination
ARCHIVE_PAGE_SIZE = 100
ARCHIVE_SORT_COLUMN = 4

# Wiki table ids, in the order they are processed.
# "Febuary" is a misspelling found on some yearly pages.
WIKI_TABLE_IDS = [
    ("table_January", 1),
    ("table_February", 2),
    ("table_Febuary", 2),
    ("table_March", 3),
    ("table_April", 4),
    ("table_May", 5),
    ("table_June", 6),
    ("table_July", 7),
    ("table_August", 8),
    ("table_September", 9),
    ("table_October", 10),
    ("table_November", 11),
    ("table_December", 12),
]

# Header token found in the artist column of the wiki tables
WIKI_HEADER_ARTIST = "Artist"

# Rate limiting (seconds between requests)
RATE_LIMITS = {
    "wiki": 1.0,
    "archive": 1.0,
    "bandcamp": 0.2,
    "default": 1.0,
}

REQUEST_TIMEOUT = 30.0

# User agent for requests
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_STORE_PATH = Path("data") / "calendar.json"


@dataclass
class Settings:
    """Runtime settings passed explicitly to the job and enrichment step."""

    is_prod: bool = False
    store_path: Path = DEFAULT_STORE_PATH
    request_timeout: float = REQUEST_TIMEOUT
    year: Optional[int] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ValueError: if REQUEST_TIMEOUT or CALENDAR_YEAR is not a number.
        """
        env = os.environ if environ is None else environ

        year = env.get("CALENDAR_YEAR")
        return cls(
            is_prod=env.get("IS_PROD", "false") == "true",
            store_path=Path(env.get("CALENDAR_STORE", str(DEFAULT_STORE_PATH))),
            request_timeout=float(env.get("REQUEST_TIMEOUT", REQUEST_TIMEOUT)),
            year=int(year) if year else None,
        )
