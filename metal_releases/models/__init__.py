from .calendar import Calendar
from .release import Release, ReleaseMetadata, normalize_album

__all__ = ["Calendar", "Release", "ReleaseMetadata", "normalize_album"]
