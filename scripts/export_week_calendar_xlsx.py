#!/usr/bin/env python3
"""
export_week_calendar_xlsx.py

Export week calendars (one row per week) to an Excel workbook.

One sheet per rule. Default: every preset rule, current year only.
"""

from __future__ import annotations

import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import argparse
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from openpyxl import Workbook

from weekcal.modules.rules_registry import LABEL_FORMAT, PRESET_RULES, rule_name
from weekcal.modules.week_rule import WeekRule
from weekcal.modules.week_window import calendar_rows
from scripts.show_week import add_rule_arguments, rule_from_args

XLSX_OUT_DIR = Path(ROOT) / "data" / "extracts"

COLUMNS = [
    "rule_name",
    "first_day_of_week",
    "min_days_in_first_week",
    "week_year",
    "week_number",
    "week_start",
    "week_end",
    "label",
]


def write_sheet(wb: Workbook, sheet_name: str, rows: List[Dict[str, Any]]) -> int:
    ws = wb.create_sheet(title=sheet_name[:31])
    ws.append(COLUMNS)
    for r in rows:
        ws.append([r.get(c) for c in COLUMNS])
    return len(rows)


def export_calendars(
    out_path: Path,
    rules: Sequence[Tuple[str, WeekRule]],
    first_year: int,
    last_year: int,
    label_format: str = LABEL_FORMAT,
) -> Dict[str, int]:
    """
    Write one sheet per (name, rule) pair and save the workbook.

    Returns:
        Row count per sheet name
    """
    wb = Workbook()
    wb.remove(wb.active)
    counts: Dict[str, int] = {}
    for name, rule in rules:
        rows = calendar_rows(rule, first_year, last_year, rule_name=name, label_format=label_format)
        counts[name] = write_sheet(wb, name, rows)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(out_path)
    return counts


def main(argv: Optional[Sequence[str]] = None) -> int:
    this_year = date.today().year
    parser = argparse.ArgumentParser(description="Export week calendars to Excel.")
    add_rule_arguments(parser)
    parser.add_argument("--from-year", type=int, default=this_year, help="First week-based year (inclusive).")
    parser.add_argument("--to-year", type=int, default=None, help="Last week-based year (inclusive). Default: --from-year.")
    parser.add_argument("--out", type=Path, default=None, help="Output .xlsx path.")
    args = parser.parse_args(argv)

    to_year = args.to_year if args.to_year is not None else args.from_year

    try:
        if args.rule is None and args.first_day is None and args.min_days is None:
            rules = list(PRESET_RULES.items())
        else:
            rule = rule_from_args(args)
            rules = [(rule_name(rule), rule)]

        out_path = args.out or XLSX_OUT_DIR / f"week_calendar_{args.from_year}_{to_year}.xlsx"
        print("=== Exporting week calendars to Excel ===")
        counts = export_calendars(out_path, rules, args.from_year, to_year)
    except (ValueError, OverflowError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    for name, count in counts.items():
        print(f"  {name}: {count} weeks")
    print(f"\nExport complete -> {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
