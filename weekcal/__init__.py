"""Week-based calendars: week numbers and week-years for any week rule."""

from weekcal.modules.week_rule import OutOfRangeError, Weekday, WeekRule, WeekValue

__all__ = ["OutOfRangeError", "Weekday", "WeekRule", "WeekValue"]
