#!/usr/bin/env python3
"""
load_week_calendar.py

Populate the WeekCalendar table (one row per week) for a rule and a span of
week-based years.

Safety:
- Creates WeekCalendar when missing, never alters an existing table.
- Without --overwrite, refuses to run when rows already exist for the rule/years.
- Everything happens in one transaction; any error rolls back.
"""

from __future__ import annotations

import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import argparse
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from weekcal.modules.db_connection import DatabaseConnection
from weekcal.modules.rules_registry import LABEL_FORMAT, rule_name
from weekcal.modules.week_rule import WeekRule
from weekcal.modules.week_window import calendar_rows
from scripts.show_week import add_rule_arguments, rule_from_args


CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS WeekCalendar (
    rule_name               VARCHAR(32) NOT NULL,
    first_day_of_week       VARCHAR(9)  NOT NULL,
    min_days_in_first_week  SMALLINT    NOT NULL,
    week_year               INTEGER     NOT NULL,
    week_number             SMALLINT    NOT NULL,
    week_start              DATE        NOT NULL,
    week_end                DATE        NOT NULL,
    label                   VARCHAR(32) NOT NULL,
    PRIMARY KEY (first_day_of_week, min_days_in_first_week, week_year, week_number)
)
"""

COUNT_SQL = """
SELECT COUNT(*) AS n
FROM WeekCalendar
WHERE first_day_of_week = %s AND min_days_in_first_week = %s
  AND week_year BETWEEN %s AND %s
"""

DELETE_SQL = """
DELETE FROM WeekCalendar
WHERE first_day_of_week = %s AND min_days_in_first_week = %s
  AND week_year BETWEEN %s AND %s
"""

INSERT_SQL = """
INSERT INTO WeekCalendar
(rule_name, first_day_of_week, min_days_in_first_week, week_year, week_number, week_start, week_end, label)
VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
"""


class CalendarLoadError(RuntimeError):
    pass


def _row_params(r: Dict[str, Any]) -> tuple:
    return (
        r["rule_name"],
        r["first_day_of_week"],
        r["min_days_in_first_week"],
        r["week_year"],
        r["week_number"],
        r["week_start"],
        r["week_end"],
        r["label"],
    )


def load_week_calendar(
    db: DatabaseConnection,
    rule: WeekRule,
    first_year: int,
    last_year: int,
    *,
    overwrite: bool = False,
    label_format: str = LABEL_FORMAT,
) -> Dict[str, int]:
    """
    Insert the weeks of first_year..last_year into WeekCalendar.

    Returns:
        {"deleted": n, "inserted": n}
    """
    rows: List[Dict[str, Any]] = calendar_rows(
        rule, first_year, last_year, rule_name=rule_name(rule), label_format=label_format
    )
    key = (rule.first_day_of_week.name.lower(), rule.min_days_in_first_week, first_year, last_year)

    try:
        db.execute(CREATE_TABLE_SQL)

        existing = int(db.query_params(COUNT_SQL, key)[0]["n"])
        deleted = 0
        if existing:
            if not overwrite:
                raise CalendarLoadError(
                    f"{existing} WeekCalendar rows already exist for years {first_year}..{last_year} "
                    f"(use --overwrite to replace them)."
                )
            deleted = db.execute(DELETE_SQL, key)

        db.execute_many(INSERT_SQL, (_row_params(r) for r in rows))
        db.commit()
    except CalendarLoadError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise CalendarLoadError(f"Loading WeekCalendar failed, rolled back: {e}") from e

    return {"deleted": deleted, "inserted": len(rows)}


def main(argv: Optional[Sequence[str]] = None) -> int:
    this_year = date.today().year
    parser = argparse.ArgumentParser(description="Load week calendars into the WeekCalendar table.")
    add_rule_arguments(parser)
    parser.add_argument("--from-year", type=int, default=this_year, help="First week-based year (inclusive).")
    parser.add_argument("--to-year", type=int, default=None, help="Last week-based year (inclusive). Default: --from-year.")
    parser.add_argument("--overwrite", action="store_true", help="Replace existing rows for the rule and years.")
    args = parser.parse_args(argv)

    to_year = args.to_year if args.to_year is not None else args.from_year
    try:
        rule = rule_from_args(args)
        if to_year < args.from_year:
            raise ValueError(f"--to-year={to_year} is before --from-year={args.from_year}")
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    db = DatabaseConnection()
    if not db.connect():
        print("✗ Database connection failed", file=sys.stderr)
        return 1

    print(f"Loading {rule_name(rule)} weeks for {args.from_year}..{to_year}...")
    try:
        result = load_week_calendar(db, rule, args.from_year, to_year, overwrite=args.overwrite)
    except CalendarLoadError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1
    except (ValueError, OverflowError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    finally:
        db.disconnect()

    if result["deleted"]:
        print(f"  Deleted {result['deleted']} old rows")
    print(f"  ✓ Inserted {result['inserted']} weeks")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
