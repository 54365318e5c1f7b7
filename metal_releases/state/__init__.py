from .manager import CalendarStore

__all__ = ["CalendarStore"]
