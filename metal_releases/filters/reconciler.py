"""Reconciliation of the calendars built from each source."""

import logging

from ..models import Calendar

logger = logging.getLogger(__name__)


class Reconciler:
    """Merge the calendars of the wiki and the archive into one."""

    def merge(self, calendar_a: Calendar, calendar_b: Calendar) -> Calendar:
        """
        Combine two calendars of the same year.

        A release is dropped only when an identical one, metadata included,
        is already on the same day. The same album announced by both
        sources therefore appears twice, once with archive metadata.

        Args:
            calendar_a: Calendar whose releases come first on each day
            calendar_b: Calendar whose releases follow

        Returns:
            A new calendar; the inputs are left untouched
        """
        merged = calendar_a.merge(calendar_b)

        logger.info(
            f"Reconciliation: {len(calendar_a)} + {len(calendar_b)} releases -> "
            f"{len(merged)} in {merged.year}"
        )
        return merged


def reconcile(calendar_a: Calendar, calendar_b: Calendar) -> Calendar:
    return Reconciler().merge(calendar_a, calendar_b)
