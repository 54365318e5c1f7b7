"""Data model for a year of releases indexed by month and day."""

from dataclasses import asdict
from typing import Dict, Iterator, List, Optional, Set, Tuple

from .release import Release, ReleaseMetadata

MONTHS = range(1, 13)


class Calendar:
    """All releases of one year, keyed by month (1-12) then day of month.

    Days are stored as given by the sources; no check is made that the
    (month, day) pair exists in the year.
    """

    def __init__(self, year: int):
        self.year = year
        self.days: Dict[int, Dict[int, List[Release]]] = {month: {} for month in MONTHS}

    def __eq__(self, other):
        if not isinstance(other, Calendar):
            return False
        return self.year == other.year and self.days == other.days

    def __repr__(self):
        return f"Calendar(year={self.year}, releases={len(self)})"

    def __len__(self):
        return sum(len(releases) for releases in self._day_lists())

    def add_release(self, month: int, day: int, release: Release) -> bool:
        """Store a release unless an equal one is already on that day.

        Returns:
            True if the release was stored, False if it was a duplicate
        """
        releases = self.days.setdefault(month, {}).setdefault(day, [])
        if release in releases:
            return False
        releases.append(release)
        return True

    def get_releases(self, month: int, day: int) -> Optional[List[Release]]:
        """Get the releases of a day, or None if nothing was added for it."""
        return self.days.get(month, {}).get(day)

    def merge(self, other: "Calendar") -> "Calendar":
        """
        Combine two calendars of the same year into a new one.

        Releases of this calendar come first, then those of `other`; equal
        releases on the same day are kept once. Neither input is modified.
        """
        if other.year != self.year:
            raise ValueError(
                f"Cannot merge calendars of different years: {self.year} and {other.year}"
            )

        merged = Calendar(self.year)
        for source in (self, other):
            for month, day, release in source.iter_releases():
                merged.add_release(month, day, release)
        return merged

    def iter_releases(self) -> Iterator[Tuple[int, int, Release]]:
        """Yield (month, day, release) in month, day, then insertion order."""
        for month in sorted(self.days):
            for day in sorted(self.days[month]):
                for release in self.days[month][day]:
                    yield month, day, release

    def artists(self) -> Set[str]:
        """Get the distinct artist names of the calendar."""
        return {release.artist for _, _, release in self.iter_releases()}

    def to_dict(self) -> Dict:
        """Convert to a JSON-ready dictionary."""
        months = {}
        for month, days in self.days.items():
            months[str(month)] = {
                str(day): [
                    dict(asdict(release), youtube_url=release.youtube_search_url)
                    for release in releases
                ]
                for day, releases in days.items()
            }
        return {"year": self.year, "months": months}

    @classmethod
    def from_dict(cls, data: Dict) -> "Calendar":
        """Rebuild a calendar produced by `to_dict`."""
        calendar = cls(int(data["year"]))
        for month, days in data.get("months", {}).items():
            for day, releases in days.items():
                for item in releases:
                    metadata = item.get("metadata")
                    calendar.add_release(
                        int(month),
                        int(day),
                        Release(
                            artist=item["artist"],
                            album=item["album"],
                            metadata=ReleaseMetadata(**metadata) if metadata else None,
                        ),
                    )
        return calendar

    def _day_lists(self) -> Iterator[List[Release]]:
        for days in self.days.values():
            yield from days.values()
