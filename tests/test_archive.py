"""Tests for the metal archives scraper."""

from datetime import date

import pytest

from metal_releases.models import Calendar, Release
from metal_releases.scrapers import ArchivePage, ArchiveScraper, RowParseError
from metal_releases.scrapers.archive import ArchiveRow, parse_release_date
from metal_releases.scrapers.fragments import Anchor, extract_anchors

from tests.conftest import FakeSourceClient


def row(artist="A", album="P", date_text="May 5th, 2024"):
    return [
        f'<a href="https://ma/bands/{artist}">{artist}</a>',
        f'<a href="https://ma/albums/{album}">{album}</a>',
        "Full-length",
        "Death Metal",
        date_text,
        "",
    ]


class ScriptedClient(FakeSourceClient):
    """Return a fixed sequence of pages, then nothing."""

    def __init__(self, pages):
        super().__init__()
        self.pages = pages

    def fetch_archive_page(self, page_index):
        self.archive_requests.append(page_index)
        if page_index < len(self.pages):
            return self.pages[page_index]
        return None


class TestParseReleaseDate:
    """Test parsing of listing dates."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("October 9th, 2024", date(2024, 10, 9)),
            ("November 1st, 2024", date(2024, 11, 1)),
            ("December 22nd, 2024", date(2024, 12, 22)),
            ("March 23rd, 2025", date(2025, 3, 23)),
            ("August 31st, 2024", date(2024, 8, 31)),
            ("August 2, 2024", date(2024, 8, 2)),
        ],
    )
    def test_valid_dates(self, text, expected):
        assert parse_release_date(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["", "February 30th, 2024", "Octobre 9th, 2024", "October 9xx, 2024", "October 2024", "9 October 2024"],
    )
    def test_invalid_dates(self, text):
        with pytest.raises(RowParseError):
            parse_release_date(text)


class TestExtractAnchors:
    """Test parsing of embedded HTML fragments."""

    def test_all_links_in_order(self):
        fragment = '<a href="https://x/1">Darkthrone</a> / <a href="https://x/2">Satyricon</a>'

        assert extract_anchors(fragment) == [
            Anchor("Darkthrone", "https://x/1"),
            Anchor("Satyricon", "https://x/2"),
        ]

    def test_no_links(self):
        assert extract_anchors("plain text") == []
        assert extract_anchors("") == []

    def test_link_without_href(self):
        assert extract_anchors("<a>Nameless</a>") == [Anchor("Nameless", "")]


class TestArchiveRow:
    """Test decoding of a single row."""

    def test_split_release_joins_artists(self):
        cells = [
            '<a href="https://ma/bands/Darkthrone">Darkthrone</a> / '
            '<a href="https://ma/bands/Satyricon">Satyricon</a>',
            '<a href="https://ma/albums/split">Under the Northern Sky [split]</a>',
            "Split",
            "Black Metal",
            "October 9th, 2024",
            "",
        ]

        parsed = ArchiveRow.from_cells(cells)

        assert parsed.release_date == date(2024, 10, 9)
        assert parsed.release == Release("Darkthrone / Satyricon", "Under the Northern Sky").with_metadata(
            "https://ma/bands/Darkthrone", "https://ma/albums/split", "Split", "Black Metal"
        )

    @pytest.mark.parametrize(
        "cells",
        [
            ["no link", '<a href="x">P</a>', "EP", "Doom", "May 5th, 2024"],
            ['<a href="x">A</a>', "no link", "EP", "Doom", "May 5th, 2024"],
            ['<a href="x">A</a>', '<a href="x">P</a>', "EP"],
            ['<a href="x">A</a>', '<a href="x">P</a>', "EP", "Doom", "TBA"],
        ],
    )
    def test_bad_rows_raise(self, cells):
        with pytest.raises(RowParseError):
            ArchiveRow.from_cells(cells)


class TestArchiveScraper:
    """Test pagination and filtering."""

    def test_stops_at_first_empty_page(self):
        client = ScriptedClient(
            [
                ArchivePage(rows=[row("A", "P")]),
                ArchivePage(rows=[row("B", "Q")]),
                None,
                ArchivePage(rows=[row("C", "R")]),
            ]
        )

        calendar = ArchiveScraper(client).scrape(2024)

        assert client.archive_requests == [0, 1, 2]
        assert calendar.artists() == {"A", "B"}

    def test_pages_without_matching_year_do_not_stop_pagination(self):
        client = ScriptedClient(
            [
                ArchivePage(rows=[row("A", "P", "December 31st, 2024")]),
                ArchivePage(rows=[row("B", "Q", "January 1st, 2025")]),
                ArchivePage(rows=[row("C", "R", "February 2nd, 2025")]),
            ]
        )

        calendar = ArchiveScraper(client).scrape(2024)

        assert client.archive_requests == [0, 1, 2, 3]
        assert [r.artist for _, _, r in calendar.iter_releases()] == ["A"]

    def test_year_filter(self):
        client = ScriptedClient([ArchivePage(rows=[row("A", "P", "June 1st, 2025")])])

        assert len(ArchiveScraper(client).scrape(2024)) == 0

    def test_bad_row_does_not_abort_page(self):
        client = ScriptedClient(
            [ArchivePage(rows=[row("A", "P", "nonsense"), ["garbage"], row("B", "Q")])]
        )

        calendar = ArchiveScraper(client).scrape(2024)

        assert [r.artist for _, _, r in calendar.iter_releases()] == ["B"]

    @pytest.mark.parametrize(
        "bad_row",
        [
            None,
            "not a row",
            {"artist": "A"},
            row("A", "P")[:4] + [20240505, ""],
            [None, None, None, None, None],
            [42] + row("A", "P")[1:],
        ],
    )
    def test_malformed_row_types_are_skipped(self, bad_row):
        client = ScriptedClient([ArchivePage(rows=[bad_row, row("B", "Q")])])

        calendar = ArchiveScraper(client).scrape(2024)

        assert [r.artist for _, _, r in calendar.iter_releases()] == ["B"]

    def test_2024_fixture(self, fake_client):
        got = ArchiveScraper(fake_client).scrape(2024)

        want = Calendar(2024)
        want.add_release(
            8,
            30,
            Release("Wintersun", "Time II").with_metadata(
                "https://www.metal-archives.com/bands/Wintersun/1218",
                "https://www.metal-archives.com/albums/Wintersun/Time_II/1234567",
                "Full-length",
                "Symphonic Melodic Death Metal",
            ),
        )
        want.add_release(
            10,
            9,
            Release("Threshold", "Concert in London | London Astoria 2 | 1999").with_metadata(
                "https://www.metal-archives.com/bands/Threshold/1114",
                "https://www.metal-archives.com/albums/Threshold/Concert_in_London_%7C_London_Astoria_2_%7C_1999/1271070",
                "Live album",
                "Progressive Metal",
            ),
        )
        want.add_release(
            10,
            9,
            Release("Darkthrone / Satyricon", "Under the Northern Sky").with_metadata(
                "https://www.metal-archives.com/bands/Darkthrone/146",
                "https://www.metal-archives.com/albums/Darkthrone/Under_the_Northern_Sky/1280001",
                "Split",
                "Black Metal",
            ),
        )
        want.add_release(
            11,
            1,
            Release("Knightsune", "Fearless").with_metadata(
                "https://www.metal-archives.com/bands/Knightsune/3540481992",
                "https://www.metal-archives.com/albums/Knightsune/Fearless/1237973",
                "Full-length",
                "Heavy/Power/Speed Metal",
            ),
        )
        want.add_release(
            12,
            23,
            Release("Nightmare", "Waiting for the Power - The Early Years").with_metadata(
                "https://www.metal-archives.com/bands/Nightmare/2727",
                "https://www.metal-archives.com/albums/Nightmare/Waiting_for_the_Power_-_The_Early_Years/1261180",
                "Compilation",
                "Heavy/Power Metal",
            ),
        )

        assert fake_client.archive_requests == [0, 1, 2]
        assert got == want
