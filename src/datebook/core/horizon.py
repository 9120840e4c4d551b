"""Planning horizon - the calendar boundaries used for bucketing."""

from dataclasses import dataclass
from datetime import date

from . import dates
from .dates import Week


@dataclass(frozen=True)
class Horizon:
    """
    Calendar boundaries derived from a single "today".

    ``weeks_current_year`` and ``weeks_next_year`` together cover
    ``[first_full_week_start, horizon_end)`` week by week, split at the
    first week that is ISO week 1.
    """

    today: date
    first_full_week_start: date
    horizon_end: date
    weeks_current_year: tuple[Week, ...]
    weeks_next_year: tuple[Week, ...]

    @property
    def current_year(self) -> int:
        return self.today.year

    @property
    def next_year(self) -> int:
        return self.today.year + 1

    @classmethod
    def compute(cls, today: date) -> "Horizon":
        """Deterministic given ``today``."""
        first_full_week_start = dates.next_monday(today)
        horizon_end = dates.first_sunday_after_12_months(today)

        current: list[Week] = []
        following: list[Week] = []
        target = current
        week_start = first_full_week_start
        while week_start < horizon_end:
            target.append(dates.week_of_day(week_start))
            week_start = dates.add_weeks(week_start, 1)
            # The partition switches once: an ISO year has a single week 1.
            if target is current and dates.is_day_in_first_week_of_year(week_start):
                target = following

        return cls(
            today=today,
            first_full_week_start=first_full_week_start,
            horizon_end=horizon_end,
            weeks_current_year=tuple(current),
            weeks_next_year=tuple(following),
        )
