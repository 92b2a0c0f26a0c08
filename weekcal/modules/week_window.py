# weekcal/modules/week_window.py

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Tuple

from weekcal.modules.week_rule import DAYS_IN_WEEK, OutOfRangeError, WeekRule, WeekValue, as_date


#: Label written next to each week in exported calendars.
DEFAULT_LABEL_FORMAT = "%Y-W%W"


def week_of(rule: WeekRule, week_year: int, week_number: int) -> WeekValue:
    """
    Return the week (week_year, week_number) under the given rule.

    Anchors on the first day of the week-based year, then lets the rule
    classify the shifted date, so the result is what rule.week() would return
    for any day of that week.
    """
    num_weeks = rule.num_weeks(week_year)
    if week_number < 1 or week_number > num_weeks:
        raise OutOfRangeError(week_number, 1, num_weeks)

    anchor = rule.first_day_of_week_based_year(week_year)
    return rule.week(anchor + timedelta(weeks=week_number - 1))


def add_weeks(week: WeekValue, weeks_delta: int) -> WeekValue:
    """
    Add weeks_delta weeks (may be negative) to a week.
    Uses the week start as anchor then converts back through the rule.
    """
    return week.rule.week(week.week_start + timedelta(weeks=weeks_delta))


def week_range(week: WeekValue) -> Tuple[date, date]:
    """Return (first_day, last_day) of the week, both inclusive."""
    return week.week_start, week.week_end


def week_key(week: WeekValue) -> int:
    """Sortable integer key; only meaningful between weeks of the same rule."""
    return int(week.week_year) * 100 + int(week.week_number)


def weeks_of_year(rule: WeekRule, week_year: int) -> Tuple[WeekValue, ...]:
    """All weeks of a week-based year, week 1 first."""
    anchor = rule.first_day_of_week_based_year(week_year)
    return tuple(
        rule.week(anchor + timedelta(weeks=n)) for n in range(rule.num_weeks(week_year))
    )


def weeks_between(rule: WeekRule, start: date, end: date) -> Tuple[WeekValue, ...]:
    """
    Every week touching the inclusive span [start, end].

    The first week may begin before start and the last one end after end.
    """
    start, end = as_date(start), as_date(end)
    if end < start:
        raise ValueError(f"end={end} is before start={start}")

    out: list[WeekValue] = []
    week = rule.week(start)
    out.append(week)
    # Stop on the week holding end; the one after it may lie past date.max
    while (end - week.week_start).days >= DAYS_IN_WEEK:
        week = week.succ()
        out.append(week)
    return tuple(out)


def calendar_rows(
    rule: WeekRule,
    first_year: int,
    last_year: int,
    rule_name: Optional[str] = None,
    label_format: str = DEFAULT_LABEL_FORMAT,
) -> List[Dict[str, Any]]:
    """
    Flatten the weeks of week-based years first_year..last_year (inclusive)
    into dict rows, one per week.

    Row keys:
      - rule_name, first_day_of_week, min_days_in_first_week
      - week_year, week_number, week_start, week_end
      - label (week formatted with label_format)
    """
    if last_year < first_year:
        raise ValueError(f"last_year={last_year} is before first_year={first_year}")

    rows: list[Dict[str, Any]] = []
    for year in range(first_year, last_year + 1):
        for week in weeks_of_year(rule, year):
            rows.append({
                "rule_name": rule_name or "custom",
                "first_day_of_week": rule.first_day_of_week.name.lower(),
                "min_days_in_first_week": rule.min_days_in_first_week,
                "week_year": week.week_year,
                "week_number": week.week_number,
                "week_start": week.week_start,
                "week_end": week.week_end,
                "label": week.format(label_format),
            })
    return rows
