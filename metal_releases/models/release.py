"""Data model for announced releases."""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote_plus


def normalize_album(title: str) -> str:
    """Collapse whitespace and drop a bracketed qualifier such as "[remix album]"."""
    album = " ".join(title.split())
    if "[" in album:
        album = album.split("[", 1)[0].strip()
    return album


@dataclass(frozen=True)
class ReleaseMetadata:
    """Extra details only the archive source provides."""

    artist_link: str
    album_link: str
    release_type: str
    genre: str


@dataclass(frozen=True)
class Release:
    """Represents one album announcement by an artist.

    Equality is field by field, metadata included, so a release from the
    wiki and the same release from the archive are two distinct values.
    """

    artist: str
    album: str
    metadata: Optional[ReleaseMetadata] = None

    def __post_init__(self):
        object.__setattr__(self, "album", normalize_album(self.album))

    def with_metadata(
        self,
        artist_link: str,
        album_link: str,
        release_type: str,
        genre: str,
    ) -> "Release":
        """Return a copy of this release carrying archive metadata."""
        return Release(
            artist=self.artist,
            album=self.album,
            metadata=ReleaseMetadata(
                artist_link=artist_link,
                album_link=album_link,
                release_type=release_type,
                genre=genre,
            ),
        )

    @property
    def youtube_search_url(self) -> str:
        query = quote_plus(f"{self.artist} {self.album} full album")
        return f"https://www.youtube.com/results?search_query={query}"
