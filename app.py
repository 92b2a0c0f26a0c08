#!/usr/bin/env python3

from datetime import datetime, date
from flask import Flask, request, jsonify

from weekcal.modules.rules_registry import LABEL_FORMAT, PRESET_RULES, resolve_rule, rule_name
from weekcal.modules.week_rule import WeekRule, WeekValue
from weekcal.modules.week_window import weeks_of_year


app = Flask(__name__)


def _rule_json(rule: WeekRule) -> dict:
    return {
        "name": rule_name(rule),
        "first_day_of_week": rule.first_day_of_week.name.lower(),
        "min_days_in_first_week": rule.min_days_in_first_week,
    }


def _week_json(week: WeekValue, fmt: str) -> dict:
    return {
        "week_year": week.week_year,
        "week_number": week.week_number,
        "week_start": week.week_start.isoformat(),
        "week_end": week.week_end.isoformat(),
        "label": week.format(fmt),
    }


def _rule_from_request() -> WeekRule:
    min_days = request.args.get("min_days")
    return resolve_rule(
        name=request.args.get("rule"),
        first_day=request.args.get("first_day"),
        min_days=int(min_days) if min_days else None,
    )


@app.errorhandler(ValueError)
@app.errorhandler(OverflowError)
def bad_request(e):
    return {"error": str(e)}, 400


@app.get("/api/rules")
def api_rules():
    return jsonify([_rule_json(rule) for rule in PRESET_RULES.values()])


@app.get("/api/week")
def api_week():
    rule = _rule_from_request()
    raw = request.args.get("date")
    d = datetime.strptime(raw, "%Y-%m-%d").date() if raw else date.today()
    week = rule.week(d)

    payload = _week_json(week, request.args.get("format", LABEL_FORMAT))
    payload["date"] = d.isoformat()
    payload["num_weeks"] = rule.num_weeks(week.week_year)
    payload["rule"] = _rule_json(rule)
    return payload


@app.get("/api/year/<int:year>")
def api_year(year: int):
    rule = _rule_from_request()
    fmt = request.args.get("format", LABEL_FORMAT)
    first, last = rule.year_bounds(year)
    return {
        "week_year": year,
        "first_day": first.isoformat(),
        "last_day": last.isoformat(),
        "num_weeks": rule.num_weeks(year),
        "rule": _rule_json(rule),
        "weeks": [_week_json(w, fmt) for w in weeks_of_year(rule, year)],
    }


if __name__ == "__main__":
    app.run(debug=True)
