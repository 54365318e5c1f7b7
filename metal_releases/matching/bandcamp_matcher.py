"""Match artists to their Bandcamp pages."""

import logging
from typing import Dict, Iterable, Optional

from ..config import Settings
from ..scrapers.client import SourceClient

logger = logging.getLogger(__name__)


class BandcampMatcher:
    """
    Look up the Bandcamp page of artists.

    Bandcamp serves every artist at <name>.bandcamp.com, so a request to that
    address tells whether the artist has a page. The lookup is slow and only
    enabled in production.
    """

    def __init__(self, client: SourceClient, settings: Settings):
        self.client = client
        self.settings = settings

    def match_artists(self, artists: Iterable[str]) -> Dict[str, Optional[str]]:
        """
        Look each artist up once.

        Returns:
            Mapping of artist name to page URL, or None when no page was
            found. Empty when the lookup is disabled.
        """
        if not self.settings.is_prod:
            logger.warning("Can only fetch Bandcamp links when in production.")
            return {}

        links: Dict[str, Optional[str]] = {}
        for artist in artists:
            if artist in links:
                continue
            links[artist] = self.client.check_artist_presence(artist)

        found = sum(1 for url in links.values() if url)
        logger.info(f"Matched {found} of {len(links)} artists to Bandcamp")
        return links
