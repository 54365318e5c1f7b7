from .bandcamp_matcher import BandcampMatcher

__all__ = ["BandcampMatcher"]
