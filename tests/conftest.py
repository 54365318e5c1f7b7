"""Shared fixtures for the calendar tests."""

import json
from pathlib import Path
from typing import List, Optional

import pytest

from metal_releases.scrapers import ScraperError
from metal_releases.scrapers.client import ArchivePage

TESTDATA = Path(__file__).parent / "testdata"


class FakeSourceClient:
    """Serve the sources from files under tests/testdata."""

    def __init__(self, testdata: Path = TESTDATA, bandcamp: Optional[dict] = None):
        self.testdata = testdata
        self.bandcamp = bandcamp or {}
        self.archive_requests: List[int] = []
        self.checked: List[str] = []

    def fetch_wiki_page(self, year: int) -> str:
        path = self.testdata / "wiki" / f"test_{year}.html"
        if not path.exists():
            raise ScraperError(f"No wiki page for {year}")
        return path.read_text(encoding="utf-8")

    def fetch_archive_page(self, page_index: int) -> Optional[ArchivePage]:
        self.archive_requests.append(page_index)
        path = self.testdata / "archive" / f"page_{page_index}.json"
        if not path.exists():
            return None
        page = ArchivePage.from_json(json.loads(path.read_text(encoding="utf-8")))
        return page if page.rows else None

    def check_artist_presence(self, artist: str) -> Optional[str]:
        self.checked.append(artist)
        return self.bandcamp.get(artist)


@pytest.fixture
def fake_client():
    return FakeSourceClient()
