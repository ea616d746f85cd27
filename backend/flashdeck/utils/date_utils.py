"""
Calendar-day helpers.

Every "which day is it" decision in the engine goes through this module so the
due-set selector, priority sorter and streak analyzer agree on one timezone
(settings.STUDY_TIMEZONE). Mixing UTC and local days would make a card due
"today" in one component and "tomorrow" in another.
"""

from datetime import date, datetime, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo

from flashdeck.config.settings import settings


@lru_cache()
def _zone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def study_timezone() -> tzinfo:
    """Timezone used for all calendar-day decisions."""
    return _zone(settings.STUDY_TIMEZONE)


def utc_now() -> datetime:
    """Current instant as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def study_date(moment: datetime) -> date:
    """Calendar date of an instant in the study timezone."""
    return moment.astimezone(study_timezone()).date()
