"""Helpers for HTML fragments embedded in JSON cells."""

from dataclasses import dataclass
from typing import List

from bs4 import BeautifulSoup


@dataclass(frozen=True)
class Anchor:
    text: str
    href: str


def extract_anchors(fragment: str) -> List[Anchor]:
    """Parse an HTML fragment and return its links in document order."""
    soup = BeautifulSoup(fragment or "", "lxml")
    return [
        Anchor(text=link.get_text(), href=link.get("href", ""))
        for link in soup.find_all("a")
    ]
