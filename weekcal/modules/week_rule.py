# weekcal/modules/week_rule.py

"""
Week-based years for an arbitrary week rule.

A rule is the pair (first day of the week, minimum number of January days that
must fall in week 1). ISO-8601 is (Monday, 4), the US convention is (Sunday, 1).

Week 1 of a week-based year is the first week holding at least
min_days_in_first_week days of January, so the first days of January can belong
to the last week of the previous week-based year, and the last days of December
to week 1 of the next one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import IntEnum
from typing import Tuple


logger = logging.getLogger(__name__)

DAYS_IN_WEEK = 7
MIN_DAYS_IN_FIRST_WEEK = 1
MAX_DAYS_IN_FIRST_WEEK = 7

ONE_WEEK = timedelta(weeks=1)


class Weekday(IntEnum):
    """Days of the week, numbered like date.weekday() (Monday = 0)."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class OutOfRangeError(ValueError):
    """A value fell outside its inclusive [min, max] bounds."""

    def __init__(self, value: int, min: int, max: int):
        self.value = value
        self.min = min
        self.max = max
        super().__init__(f"{value} value is out of range (min: {min} - max: {max})")


def _january_first_ordinal(year: int) -> int:
    y = year - 1
    return y * 365 + y // 4 - y // 100 + y // 400 + 1


def as_date(d: date) -> date:
    # datetime is a date subclass; comparing one with a plain date raises TypeError
    if isinstance(d, datetime):
        return d.date()
    return d


@dataclass(frozen=True)
class WeekRule:
    first_day_of_week: Weekday
    min_days_in_first_week: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "first_day_of_week", Weekday(self.first_day_of_week))

        min_days = self.min_days_in_first_week
        if isinstance(min_days, bool) or not isinstance(min_days, int):
            raise TypeError(f"min_days_in_first_week must be an int, got {min_days!r}")
        if min_days < MIN_DAYS_IN_FIRST_WEEK or min_days > MAX_DAYS_IN_FIRST_WEEK:
            raise OutOfRangeError(min_days, MIN_DAYS_IN_FIRST_WEEK, MAX_DAYS_IN_FIRST_WEEK)

        logger.debug("Week rule: weeks start on %s, %d day(s) of January in week 1",
                     self.first_day_of_week.name, min_days)

    @classmethod
    def new(cls, first_day_of_week: Weekday, min_days_in_first_week: int) -> "WeekRule":
        return cls(first_day_of_week, min_days_in_first_week)

    @classmethod
    def sunday_start(cls) -> "WeekRule":
        """Sunday start, week 1 holds January 1st (US convention)."""
        return cls(Weekday.SUNDAY, 1)

    @classmethod
    def iso_week(cls) -> "WeekRule":
        """ISO-8601: Monday start, week 1 holds at least 4 days of January."""
        return cls(Weekday.MONDAY, 4)

    @classmethod
    def french_theater_week(cls) -> "WeekRule":
        """Wednesday start (new shows open on Wednesday), at least 4 days of January."""
        return cls(Weekday.WEDNESDAY, 4)

    def _first_ordinal(self, year: int) -> int:
        # Proleptic Gregorian ordinal (date.toordinal()) of the first day of
        # week 1. Plain integers, so years 0 and 10000 work next to the
        # 1..9999 range of date.
        january_first = _january_first_ordinal(year)
        # Ordinal 1 (0001-01-01) is a Monday
        weekday = (january_first - 1) % DAYS_IN_WEEK
        delta = (DAYS_IN_WEEK - self.num_days_from_first_dow(weekday)) % DAYS_IN_WEEK
        week_ordinal = january_first + delta

        # Last day of January that must fall within week 1
        reference = january_first + self.min_days_in_first_week - 1
        if week_ordinal <= reference:
            return week_ordinal
        return week_ordinal - DAYS_IN_WEEK

    def first_day_of_week_based_year(self, year: int) -> date:
        """
        First day of week 1 of the given week-based year.

        Example: ISO 2019 starts on 2018-12-31, the French theater year 2019 on 2019-01-02.
        """
        return date.fromordinal(self._first_ordinal(year))

    def last_day_of_week_based_year(self, year: int) -> date:
        """
        Last day of the last week of the given week-based year.

        Example: ISO 2019 ends on 2019-12-29, the French theater year 2019 on 2019-12-31.
        """
        return date.fromordinal(self._first_ordinal(year + 1) - 1)

    def year_bounds(self, year: int) -> Tuple[date, date]:
        """Return (first_day, last_day) of the week-based year, both inclusive."""
        return self.first_day_of_week_based_year(year), self.last_day_of_week_based_year(year)

    def num_weeks(self, year: int) -> int:
        """Number of weeks in the week-based year (52 or 53)."""
        return (self._first_ordinal(year + 1) - self._first_ordinal(year)) // DAYS_IN_WEEK

    def num_days_from_first_dow(self, day: int) -> int:
        """
        Days elapsed since the start of the week on the given weekday (0..6).

        For the French theater week: Wednesday -> 0, Tuesday -> 6.
        """
        return (DAYS_IN_WEEK + int(day) - int(self.first_day_of_week)) % DAYS_IN_WEEK

    def number_from_first_dow(self, day: int) -> int:
        """Position of the weekday within the week (1..7)."""
        return 1 + self.num_days_from_first_dow(day)

    def week(self, d: date) -> "WeekValue":
        """
        Week holding the given date.

        The French theater week containing 2017-01-03 is week 53 of 2016,
        starting on 2016-12-28.
        """
        d = as_date(d)
        date_year = d.year
        ordinal = d.toordinal()
        first = self._first_ordinal(date_year)
        next_first = self._first_ordinal(date_year + 1)

        if ordinal < first:
            # Last week of the previous week-based year
            year, week = date_year - 1, self.num_weeks(date_year - 1)
        elif ordinal >= next_first:
            # First week of the next week-based year
            year, week = date_year + 1, 1
        else:
            year, week = date_year, 1 + (ordinal - first) // DAYS_IN_WEEK

        # OverflowError when the week starts before 0001-01-01
        week_start = d - timedelta(days=self.num_days_from_first_dow(d.weekday()))

        return WeekValue(week_year=year, week_number=week, week_start=week_start, rule=self)


@dataclass(frozen=True)
class WeekValue:
    """
    One week of a week-based year under a given rule.

    No ordering is defined: week numbers from different rules are not
    comparable. week_start could be derived from (week_year, week_number, rule);
    it is kept for succ, pred and contains.
    """
    week_year: int
    week_number: int
    week_start: date
    rule: WeekRule

    @property
    def week_end(self) -> date:
        return self.week_start + timedelta(days=DAYS_IN_WEEK - 1)

    def week0(self) -> int:
        """Week number in year, 0 based."""
        return self.week_number - 1

    def succ(self) -> "WeekValue":
        """The next week under the same rule."""
        return self.rule.week(self.week_start + ONE_WEEK)

    def pred(self) -> "WeekValue":
        """The previous week under the same rule."""
        return self.rule.week(self.week_start - ONE_WEEK)

    def contains(self, d: date) -> bool:
        d = as_date(d)
        return 0 <= (d - self.week_start).days < DAYS_IN_WEEK

    def format(self, fmt: str) -> str:
        """
        Naive week formatting, specifiers borrowed from strftime.

        | Spec. | Example | Description                                           |
        |-------|---------|-------------------------------------------------------|
        | `%Y`  | `2001`  | The week year, zero-padded to 4 digits.               |
        | `%C`  | `20`    | The week year divided by 100, zero-padded to 2 digits.|
        | `%y`  | `01`    | The week year modulo 100, zero-padded to 2 digits.    |
        | `%W`  | `27`    | Week number, zero-padded to 2 digits.                 |

        Any other `%` sequence is left as is.
        """
        full_year = f"{self.week_year:04d}"
        y_div_100 = f"{self.week_year // 100:02d}"
        y_mod_100 = f"{self.week_year % 100:02d}"
        week = f"{self.week_number:02d}"

        return (
            fmt
            .replace("%Y", full_year)
            .replace("%C", y_div_100)
            .replace("%y", y_mod_100)
            .replace("%W", week)
        )

    def __str__(self) -> str:
        return self.format("%Y-W%W")
