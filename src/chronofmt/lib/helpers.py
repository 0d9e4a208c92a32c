"""App-facing date labels built on a shared formatter cache."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Final

from chronofmt.lib.cache import FormatterCache
from chronofmt.lib.handle import localize

DOB_PATTERN: Final = "yyyy/MM/dd @ HH:mm"
DAY_MONTH_TIME_PATTERN: Final = "dd MMM @ HH:mm"
HOUR_MINUTE_PATTERN: Final = "HH:mm"
DAY_MONTH_YEAR_PATTERN: Final = "d MMM 'of' yyyy"


class DateFormattingHelper:
    """Render the dates shown on profiles, posts and comments.

    Every label goes through the injected cache, so each pattern is compiled
    once no matter how many helpers share that cache.
    """

    def __init__(self, cache: FormatterCache) -> None:
        self._cache = cache

    @property
    def cache(self) -> FormatterCache:
        return self._cache

    def format_dob_date(self, date: datetime) -> str:
        return f"Date of birth: {self._cache.format(DOB_PATTERN, date)}"

    def format_last_active_date(self, date: datetime, now: datetime | None = None) -> str:
        """Show only the time for activity within the last day.

        The comparison runs in the zone the handles render in, which is the
        cache zone unless a factory bound them elsewhere.
        """

        zone = self._cache.get(HOUR_MINUTE_PATTERN).zone
        current = datetime.now(zone) if now is None else localize(now, zone)
        yesterday = current - timedelta(days=1)

        pattern = DAY_MONTH_TIME_PATTERN
        if localize(date, zone) > yesterday:
            pattern = HOUR_MINUTE_PATTERN
        return f"Last active: {self._cache.format(pattern, date)}"

    def format_post_created_date(self, date: datetime) -> str:
        return self._cache.format(DAY_MONTH_YEAR_PATTERN, date)

    def format_commented_date(self, date: datetime) -> str:
        return f"Comment posted: {self._cache.format(DAY_MONTH_TIME_PATTERN, date)}"
