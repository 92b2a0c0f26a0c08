"""
rules_registry.py

Single source of truth for the named week rules and their configuration.
CLI scripts and the web API resolve user input into a WeekRule through here;
none of them should build presets or parse weekday names on their own.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Union

from weekcal.modules.week_rule import Weekday, WeekRule
from weekcal.modules.week_window import DEFAULT_LABEL_FORMAT


# ============================================================
# PRESETS
# ============================================================

PRESET_RULES: Dict[str, WeekRule] = {
    "iso": WeekRule.iso_week(),
    "sunday": WeekRule.sunday_start(),
    "french_theater": WeekRule.french_theater_week(),
}


# ============================================================
# CONFIGURATION (environment)
# ============================================================

DEFAULT_RULE_NAME = os.environ.get("WEEKCAL_DEFAULT_RULE", "iso")
LABEL_FORMAT = os.environ.get("WEEKCAL_LABEL_FORMAT", DEFAULT_LABEL_FORMAT)

# Used for custom rules when only the first day of the week is given
DEFAULT_MIN_DAYS = 4


class RuleError(ValueError):
    pass


_WEEKDAY_NAMES: Dict[str, Weekday] = {d.name.lower(): d for d in Weekday}
_WEEKDAY_NAMES.update({name[:3]: d for name, d in list(_WEEKDAY_NAMES.items())})


def parse_weekday(value: Union[str, int, Weekday]) -> Weekday:
    """
    Accepts "monday", "Mon", "MON", 0..6 (Monday = 0) or a Weekday.
    """
    if isinstance(value, Weekday):
        return value

    text = str(value).strip().lower()
    if text in _WEEKDAY_NAMES:
        return _WEEKDAY_NAMES[text]

    if text.isdigit() and 0 <= int(text) <= 6:
        return Weekday(int(text))

    raise RuleError(f"Unknown weekday: {value!r}")


def rule_from_name(name: str) -> WeekRule:
    key = name.strip().lower().replace("-", "_")
    if key not in PRESET_RULES:
        known = ", ".join(sorted(PRESET_RULES))
        raise RuleError(f"Unknown week rule {name!r} (known: {known})")
    return PRESET_RULES[key]


def resolve_rule(
    name: Optional[str] = None,
    first_day: Optional[Union[str, int, Weekday]] = None,
    min_days: Optional[int] = None,
) -> WeekRule:
    """
    Build the rule described by user input.

    - first_day given: custom rule (min_days defaults to DEFAULT_MIN_DAYS)
    - otherwise: the named preset, DEFAULT_RULE_NAME when name is empty

    Raises RuleError for unknown names/weekdays and OutOfRangeError for min_days.
    """
    if first_day is not None:
        days = DEFAULT_MIN_DAYS if min_days is None else int(min_days)
        return WeekRule(parse_weekday(first_day), days)

    rule = rule_from_name(name or DEFAULT_RULE_NAME)
    if min_days is not None:
        return WeekRule(rule.first_day_of_week, int(min_days))
    return rule


def rule_name(rule: WeekRule) -> str:
    """Preset name of the rule, or "custom"."""
    for name, preset in PRESET_RULES.items():
        if preset == rule:
            return name
    return "custom"
