"""Tests for WeekRule: validation, presets and week-based year boundaries."""

from datetime import date, datetime, timedelta

import pytest

from weekcal.modules.week_rule import OutOfRangeError, Weekday, WeekRule


ALL_RULES = [WeekRule(day, min_days) for day in Weekday for min_days in range(1, 8)]

ISO = WeekRule.iso_week()
FRENCH_THEATER = WeekRule.french_theater_week()
SUNDAY = WeekRule.sunday_start()


def _dates(start: date, end: date, step: int = 1):
    d = start
    while d <= end:
        yield d
        d += timedelta(days=step)


class TestConstruction:
    """Rule validation and presets."""

    @pytest.mark.parametrize("min_days", [0, 8, -1, 100])
    def test_min_days_out_of_range(self, min_days):
        with pytest.raises(OutOfRangeError) as exc_info:
            WeekRule(Weekday.MONDAY, min_days)
        err = exc_info.value
        assert err.value == min_days
        assert (err.min, err.max) == (1, 7)
        assert str(err) == f"{min_days} value is out of range (min: 1 - max: 7)"

    @pytest.mark.parametrize("min_days", [4.0, "4", True, None])
    def test_min_days_must_be_an_int(self, min_days):
        with pytest.raises(TypeError):
            WeekRule(Weekday.MONDAY, min_days)

    def test_out_of_range_is_a_value_error(self):
        with pytest.raises(ValueError):
            WeekRule.new(Weekday.SUNDAY, 8)

    @pytest.mark.parametrize("min_days", range(1, 8))
    def test_min_days_in_range(self, min_days):
        rule = WeekRule.new(Weekday.FRIDAY, min_days)
        assert rule.first_day_of_week is Weekday.FRIDAY
        assert rule.min_days_in_first_week == min_days

    def test_first_day_coerced_to_weekday(self):
        rule = WeekRule(2, 4)
        assert rule.first_day_of_week is Weekday.WEDNESDAY
        assert rule == FRENCH_THEATER

    def test_presets(self):
        assert (SUNDAY.first_day_of_week, SUNDAY.min_days_in_first_week) == (Weekday.SUNDAY, 1)
        assert (ISO.first_day_of_week, ISO.min_days_in_first_week) == (Weekday.MONDAY, 4)
        assert (FRENCH_THEATER.first_day_of_week, FRENCH_THEATER.min_days_in_first_week) == (Weekday.WEDNESDAY, 4)

    def test_equality_and_hash_by_value(self):
        assert WeekRule(Weekday.MONDAY, 4) == ISO
        assert hash(WeekRule(Weekday.MONDAY, 4)) == hash(ISO)
        assert WeekRule(Weekday.MONDAY, 3) != ISO

    def test_rule_is_immutable(self):
        with pytest.raises(AttributeError):
            ISO.min_days_in_first_week = 1


class TestDayOffsets:
    """Weekday offsets relative to the rule's first day of the week."""

    def test_num_days_from_first_dow(self):
        assert FRENCH_THEATER.num_days_from_first_dow(Weekday.WEDNESDAY) == 0
        assert FRENCH_THEATER.num_days_from_first_dow(Weekday.TUESDAY) == 6
        assert SUNDAY.num_days_from_first_dow(Weekday.MONDAY) == 1
        assert ISO.num_days_from_first_dow(Weekday.SUNDAY) == 6

    def test_number_from_first_dow(self):
        assert FRENCH_THEATER.number_from_first_dow(Weekday.WEDNESDAY) == 1
        assert FRENCH_THEATER.number_from_first_dow(Weekday.TUESDAY) == 7

    def test_accepts_plain_weekday_ints(self):
        # date.weekday() returns a plain int
        assert ISO.num_days_from_first_dow(date(2019, 1, 3).weekday()) == 3

    @pytest.mark.parametrize("rule", ALL_RULES[::7])
    def test_offsets_cover_the_week(self, rule):
        assert sorted(rule.num_days_from_first_dow(d) for d in Weekday) == list(range(7))
        assert sorted(rule.number_from_first_dow(d) for d in Weekday) == list(range(1, 8))


class TestYearBoundaries:
    """First/last day and number of weeks of week-based years."""

    def test_first_day_of_week_based_year(self):
        assert ISO.first_day_of_week_based_year(2019) == date(2018, 12, 31)
        assert FRENCH_THEATER.first_day_of_week_based_year(2019) == date(2019, 1, 2)
        assert SUNDAY.first_day_of_week_based_year(2017) == date(2017, 1, 1)
        assert SUNDAY.first_day_of_week_based_year(2016) == date(2015, 12, 27)

    def test_last_day_of_week_based_year(self):
        assert ISO.last_day_of_week_based_year(2019) == date(2019, 12, 29)
        assert FRENCH_THEATER.last_day_of_week_based_year(2019) == date(2019, 12, 31)

    def test_year_bounds(self):
        assert ISO.year_bounds(2019) == (date(2018, 12, 31), date(2019, 12, 29))

    def test_num_weeks(self):
        assert ISO.num_weeks(2019) == 52
        assert ISO.num_weeks(2015) == 53
        assert ISO.num_weeks(2020) == 53
        assert FRENCH_THEATER.num_weeks(2019) == 52
        assert FRENCH_THEATER.num_weeks(2016) == 53
        assert SUNDAY.num_weeks(2016) == 53
        assert SUNDAY.num_weeks(2017) == 52

    def test_seven_day_minimum_starts_on_first_full_week(self):
        rule = WeekRule(Weekday.MONDAY, 7)
        assert rule.first_day_of_week_based_year(2019) == date(2019, 1, 7)
        assert rule.first_day_of_week_based_year(2018) == date(2018, 1, 1)
        assert rule.num_weeks(2018) == 53

    @pytest.mark.parametrize("rule", ALL_RULES)
    def test_first_day_is_rule_weekday(self, rule):
        for year in range(2000, 2031):
            assert rule.first_day_of_week_based_year(year).weekday() == rule.first_day_of_week

    @pytest.mark.parametrize("rule", ALL_RULES)
    def test_week_one_holds_min_days_of_january(self, rule):
        for year in range(2000, 2031):
            first = rule.first_day_of_week_based_year(year)
            january_days = sum(1 for i in range(7) if (first + timedelta(days=i)).year == year)
            assert january_days >= rule.min_days_in_first_week
            # The week before does not qualify
            previous_days = sum(1 for i in range(1, 8) if (first - timedelta(days=i)).year == year)
            assert previous_days < rule.min_days_in_first_week

    @pytest.mark.parametrize("rule", ALL_RULES)
    def test_num_weeks_is_52_or_53(self, rule):
        for year in range(1990, 2041):
            assert rule.num_weeks(year) in (52, 53)

    @pytest.mark.parametrize("rule", ALL_RULES)
    def test_years_are_contiguous(self, rule):
        for year in range(1990, 2041):
            assert (
                rule.last_day_of_week_based_year(year) + timedelta(days=1)
                == rule.first_day_of_week_based_year(year + 1)
            )


class TestWeek:
    """Mapping dates to (week_year, week_number, week_start)."""

    def test_french_theater_week_belongs_to_previous_year(self):
        week = FRENCH_THEATER.week(date(2017, 1, 3))
        assert week.week_year == 2016
        assert week.week_number == 53
        assert week.week0() == 52
        assert week.week_start == date(2016, 12, 28)
        assert week.rule == FRENCH_THEATER

    def test_iso_last_days_of_december_belong_to_next_year(self):
        week = ISO.week(date(2019, 12, 31))
        assert (week.week_year, week.week_number, week.week_start) == (2020, 1, date(2019, 12, 30))

    def test_iso_first_days_of_january_belong_to_previous_year(self):
        week = ISO.week(date(2021, 1, 2))
        assert (week.week_year, week.week_number, week.week_start) == (2020, 53, date(2020, 12, 28))

    def test_sunday_start_late_december(self):
        week = SUNDAY.week(date(2015, 12, 31))
        assert (week.week_year, week.week_number, week.week_start) == (2016, 1, date(2015, 12, 27))

    def test_seven_day_minimum_early_january(self):
        rule = WeekRule(Weekday.MONDAY, 7)
        week = rule.week(date(2019, 1, 6))
        assert (week.week_year, week.week_number, week.week_start) == (2018, 53, date(2018, 12, 31))

    def test_mid_year(self):
        week = ISO.week(date(2019, 7, 4))
        assert (week.week_year, week.week_number, week.week_start) == (2019, 27, date(2019, 7, 1))

    def test_datetime_is_reduced_to_date(self):
        assert ISO.week(datetime(2019, 7, 4, 23, 59)) == ISO.week(date(2019, 7, 4))

    def test_iso_rule_matches_isocalendar(self):
        for d in _dates(date(2010, 1, 1), date(2030, 12, 31), step=3):
            week = ISO.week(d)
            iso_year, iso_week, _ = d.isocalendar()
            assert (week.week_year, week.week_number) == (iso_year, iso_week), d

    @pytest.mark.parametrize("rule", ALL_RULES)
    def test_week_start_is_consistent_with_week_number(self, rule):
        for d in _dates(date(2014, 12, 1), date(2017, 2, 1), step=2):
            week = rule.week(d)
            first, last = rule.year_bounds(week.week_year)
            assert week.week_start.weekday() == rule.first_day_of_week
            assert first <= week.week_start <= last
            assert week.week_number == 1 + (week.week_start - first).days // 7
            assert 1 <= week.week_number <= rule.num_weeks(week.week_year)
            assert abs(week.week_year - d.year) <= 1


class TestDateRangeLimits:
    """Dates in years 1 and 9999, next to the limits of datetime.date."""

    def test_iso_rule_matches_isocalendar_in_year_9999(self):
        for d in list(_dates(date(9999, 1, 1), date(9999, 12, 31), step=5)) + [date.max]:
            week = ISO.week(d)
            iso_year, iso_week, _ = d.isocalendar()
            assert (week.week_year, week.week_number) == (iso_year, iso_week), d

    def test_iso_rule_matches_isocalendar_in_year_1(self):
        for d in _dates(date.min, date(1, 12, 31), step=5):
            week = ISO.week(d)
            iso_year, iso_week, _ = d.isocalendar()
            assert (week.week_year, week.week_number) == (iso_year, iso_week), d

    def test_last_day_of_date_range(self):
        week = ISO.week(date.max)
        assert (week.week_year, week.week_number) == (9999, 52)
        assert week.week_start == date(9999, 12, 27)
        assert week.contains(date.max)
        assert ISO.num_weeks(9999) == 52
        assert ISO.first_day_of_week_based_year(9999) == date(9999, 1, 4)

    def test_last_day_of_year_9999_is_past_date_max(self):
        # ISO 9999 ends on 10000-01-02
        with pytest.raises(ValueError):
            ISO.last_day_of_week_based_year(9999)

    @pytest.mark.parametrize("rule", ALL_RULES)
    def test_mid_year_dates_at_both_ends(self, rule):
        for d in (date(1, 6, 1), date(9999, 6, 1)):
            week = rule.week(d)
            assert week.week_year == d.year
            assert week.contains(d)
            assert 1 <= week.week_number <= rule.num_weeks(d.year)

    def test_sunday_rule_in_year_1(self):
        # Week 1 of year 1 starts on 0000-12-31
        assert SUNDAY.num_weeks(1) == 52
        week = SUNDAY.week(date(1, 6, 1))
        assert (week.week_year, week.week_number) == (1, 22)
        assert week.week_start == date(1, 5, 27)
        assert SUNDAY.week(date(1, 1, 7)).week_number == 2

    def test_week_starting_before_date_min(self):
        with pytest.raises(OverflowError):
            SUNDAY.week(date.min)

    def test_succ_past_date_max(self):
        with pytest.raises(OverflowError):
            ISO.week(date.max).succ()
