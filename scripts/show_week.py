#!/usr/bin/env python3
"""
show_week.py

Print the week holding each given date.

Examples:
    show_week.py 2017-01-03 --rule french_theater
    show_week.py 2019-12-30 --first-day sunday --min-days 1 --format "S%y%W"
"""

from __future__ import annotations

import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import argparse
from datetime import date, datetime
from typing import List, Optional, Sequence

from weekcal.modules.rules_registry import LABEL_FORMAT, PRESET_RULES, resolve_rule, rule_name
from weekcal.modules.week_rule import WeekRule


def parse_iso_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from e


def add_rule_arguments(parser: argparse.ArgumentParser) -> None:
    """Rule selection options shared by the week calendar scripts."""
    parser.add_argument("--rule", default=None, choices=sorted(PRESET_RULES),
                        help="Preset week rule. Default: WEEKCAL_DEFAULT_RULE or 'iso'.")
    parser.add_argument("--first-day", default=None,
                        help="First day of the week for a custom rule (name, abbreviation or 0..6, Monday = 0).")
    parser.add_argument("--min-days", type=int, default=None,
                        help="Minimum number of January days in week 1 (1..7).")


def rule_from_args(args: argparse.Namespace) -> WeekRule:
    return resolve_rule(name=args.rule, first_day=args.first_day, min_days=args.min_days)


def describe_week(rule: WeekRule, d: date, fmt: str) -> str:
    week = rule.week(d)
    return (
        f"{d.isoformat()}  {week.format(fmt)}  "
        f"(week {week.week_number} of {week.week_year}, "
        f"{week.week_start.isoformat()} .. {week.week_end.isoformat()}, "
        f"{rule.num_weeks(week.week_year)} weeks in year)"
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Show the week-based year and week number of dates.")
    parser.add_argument("dates", nargs="*", type=parse_iso_date, help="Dates (YYYY-MM-DD). Default: today.")
    add_rule_arguments(parser)
    parser.add_argument("--format", default=LABEL_FORMAT, help="Week label format (%%Y, %%C, %%y, %%W).")
    args = parser.parse_args(argv)

    try:
        rule = rule_from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    dates: List[date] = args.dates or [date.today()]
    print(f"Rule: {rule_name(rule)} "
          f"(first day {rule.first_day_of_week.name.lower()}, "
          f"{rule.min_days_in_first_week} day(s) of January in week 1)")
    for d in dates:
        try:
            print(describe_week(rule, d, args.format))
        except (ValueError, OverflowError) as e:
            # Weeks reaching past 0001-01-01 or 9999-12-31 have no date
            print(f"Error: {d.isoformat()}: {e}", file=sys.stderr)
            return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
