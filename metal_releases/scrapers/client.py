"""HTTP client for the wiki, archive and Bandcamp sources."""

import logging
import time
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional
from urllib.parse import urlparse

import requests

from ..config import (
    ARCHIVE_PAGE_SIZE,
    ARCHIVE_SORT_COLUMN,
    ARCHIVE_URL,
    BANDCAMP_URL_TEMPLATE,
    RATE_LIMITS,
    REQUEST_TIMEOUT,
    USER_AGENT,
    WIKI_URL_TEMPLATE,
)
from .base import ScraperError

logger = logging.getLogger(__name__)


@dataclass
class ArchivePage:
    """One page of the archive's upcoming releases listing."""

    total_records: int = 0
    total_display_records: int = 0
    rows: List[List[str]] = field(default_factory=list)

    @classmethod
    def from_json(cls, payload: Dict) -> "ArchivePage":
        return cls(
            total_records=int(payload.get("iTotalRecords", 0)),
            total_display_records=int(payload.get("iTotalDisplayRecords", 0)),
            rows=list(payload["aaData"]),
        )


def archive_query(page_index: int, today: Optional[date] = None) -> Dict[str, str]:
    """Build the listing query for a page, sorted by release date from today on."""
    today = today or date.today()
    params = {
        "sEcho": "3",
        "iColumns": "6",
        "sColumns": "",
        "iDisplayStart": str(page_index * ARCHIVE_PAGE_SIZE),
        "iDisplayLength": str(ARCHIVE_PAGE_SIZE),
    }
    for column in range(6):
        params[f"mDataProp_{column}"] = str(column)
    params.update(
        {
            "iSortCol_0": str(ARCHIVE_SORT_COLUMN),
            "sSortDir_0": "asc",
            "iSortingCols": "1",
        }
    )
    for column in range(6):
        params[f"bSortable_{column}"] = "true"
    params.update(
        {
            "includeVersions": "0",
            "fromDate": f"{today.year}-{today.month}-{today.day}",
            "toDate": "0000-00-00",
        }
    )
    return params


def bandcamp_slug(artist: str) -> str:
    """Lower-case the artist name and keep only its alphanumeric characters."""
    return "".join(c for c in artist.lower() if c.isalnum())


class SourceClient:
    """Read-only access to the release sources.

    One session is shared by all requests; each source has its own
    rate limit and every request is bounded by the timeout.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})
        self.timeout = timeout
        self._last_request_times: Dict[str, float] = {}

    def _get_rate_limit(self, key: str) -> float:
        """Get rate limit for a source."""
        return RATE_LIMITS.get(key, RATE_LIMITS["default"])

    def _rate_limit(self, key: str):
        """Apply rate limiting between requests to the same source."""
        elapsed = time.time() - self._last_request_times.get(key, 0)
        delay = self._get_rate_limit(key)
        if elapsed < delay:
            time.sleep(delay - elapsed)
        self._last_request_times[key] = time.time()

    def _get(self, key: str, url: str, **kwargs) -> requests.Response:
        self._rate_limit(key)
        logger.debug(f"Fetching: {url}")
        return self.session.get(url, timeout=self.timeout, **kwargs)

    def fetch_wiki_page(self, year: int) -> str:
        """
        Fetch the wiki page listing the releases of a year.

        Raises:
            ScraperError: if the page cannot be fetched
        """
        url = WIKI_URL_TEMPLATE.format(year=year)
        try:
            response = self._get("wiki", url)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ScraperError(f"Failed to fetch {url}: {e}") from e
        return response.text

    def fetch_archive_page(self, page_index: int) -> Optional[ArchivePage]:
        """
        Fetch one page of the archive's upcoming releases.

        Returns None when the page holds no rows, when its body cannot be
        decoded, or when the request fails. Only the first case is a
        genuine end of data; the others are logged.
        """
        offset = page_index * ARCHIVE_PAGE_SIZE
        try:
            response = self._get("archive", ARCHIVE_URL, params=archive_query(page_index))
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(
                f"Failed to fetch archive releases: {e}; offset={offset}; url={ARCHIVE_URL}"
            )
            return None

        try:
            page = ArchivePage.from_json(response.json())
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(
                f"Failed to decode response: {e}; offset={offset}; url={response.url}"
            )
            return None

        if not page.rows:
            return None
        return page

    def check_artist_presence(self, artist: str) -> Optional[str]:
        """
        Check whether an artist has a Bandcamp page.

        Returns:
            The page URL, or None if Bandcamp redirects elsewhere or the
            request fails
        """
        slug = bandcamp_slug(artist)
        if not slug:
            return None

        url = BANDCAMP_URL_TEMPLATE.format(slug=slug)
        try:
            response = self._get("bandcamp", url)
        except requests.RequestException as e:
            logger.error(f"artist = {artist}; url = {url}; err = {e}")
            return None

        final = urlparse(response.url)
        if final.hostname == f"{slug}.bandcamp.com" and final.path != "/signup":
            return url
        return None
