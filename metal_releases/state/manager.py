"""Storage of reconciled calendars and artist links."""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Optional, Set

from ..models import Calendar, Release

logger = logging.getLogger(__name__)


class CalendarStore:
    """Keep the latest calendar of each year in a JSON file."""

    def __init__(self, state_file: Path):
        self.state_file = state_file
        self.state = self._load_state()

    def _load_state(self) -> Dict:
        """Read the store file, starting empty when it is missing or unreadable."""
        if not self.state_file.exists():
            logger.info(f"No calendar store at {self.state_file}, starting empty")
            return self._empty_state()

        try:
            with open(self.state_file, "r", encoding="utf-8") as f:
                state = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Ignoring unreadable calendar store {self.state_file}: {e}")
            return self._empty_state()

        years = ", ".join(sorted(state.get("calendars", {}))) or "none"
        logger.info(f"Loaded calendar store (years: {years})")
        return state

    @staticmethod
    def _empty_state() -> Dict:
        return {
            "calendars": {},  # year -> Calendar.to_dict()
            "artist_links": {},  # artist -> bandcamp url or None
            "last_run": None,
        }

    def save_state(self):
        """Write calendars and artist links back to the store file."""
        self.state_file.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(self.state_file, "w", encoding="utf-8") as f:
                json.dump(self.state, f, indent=2, ensure_ascii=False)
        except IOError as e:
            logger.error(f"Failed to write calendar store {self.state_file}: {e}")
            return
        logger.info(
            f"Calendar store written to {self.state_file} "
            f"({len(self.state['artist_links'])} artist links)"
        )

    def save_calendar(self, calendar: Calendar):
        """Replace the stored calendar of the calendar's year."""
        self.state["calendars"][str(calendar.year)] = calendar.to_dict()
        self.state["last_run"] = datetime.now().isoformat()
        logger.info(f"Stored {len(calendar)} releases for {calendar.year}")

    def load_calendar(self, year: int) -> Optional[Calendar]:
        data = self.state["calendars"].get(str(year))
        if data is None:
            return None
        return Calendar.from_dict(data)

    def releases_on(self, day: date) -> List[Release]:
        """Get the stored releases of a date."""
        calendar = self.load_calendar(day.year)
        if calendar is None:
            return []
        return list(calendar.get_releases(day.month, day.day) or [])

    def artists_without_links(self, calendar: Calendar) -> Set[str]:
        """Get the artists of a calendar with no known Bandcamp page."""
        links = self.state["artist_links"]
        return {artist for artist in calendar.artists() if not links.get(artist)}

    def update_artist_links(self, links: Dict[str, Optional[str]]):
        self.state["artist_links"].update(links)

    def get_artist_link(self, artist: str) -> Optional[str]:
        return self.state["artist_links"].get(artist)

    def get_last_run(self) -> datetime | None:
        """Get the datetime of the last stored calendar."""
        last_run = self.state.get("last_run")
        if last_run:
            try:
                return datetime.fromisoformat(last_run)
            except ValueError:
                pass
        return None
