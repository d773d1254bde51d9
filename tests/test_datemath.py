import pytest

from daylog.datemath import (
    add_days,
    days_between,
    days_in_month,
    format_local_date,
    is_future,
    is_leap_year,
    is_valid_iso,
    parse_local_date,
    shift_month,
    today_local_string,
    weekday_of,
    weekday_of_iso,
)


@pytest.mark.parametrize(
    "year, expected",
    [(2000, True), (1900, False), (2024, True), (2023, False), (2100, False), (2400, True)],
)
def test_is_leap_year(year, expected):
    assert is_leap_year(year) is expected


@pytest.mark.parametrize("year", [1900, 2000, 2023, 2024, 2100])
def test_days_in_month_sum_to_year_length(year):
    total = sum(days_in_month(year, month0) for month0 in range(12))
    assert total == (366 if is_leap_year(year) else 365)


def test_days_in_month_february():
    assert days_in_month(2024, 1) == 29
    assert days_in_month(2023, 1) == 28
    assert days_in_month(2023, 3) == 30


def test_days_in_month_rejects_bad_index():
    with pytest.raises(ValueError):
        days_in_month(2024, 12)


def test_parse_and_format_local_date():
    assert parse_local_date("2024-03-05") == (2024, 2, 5)
    assert format_local_date(2024, 2, 5) == "2024-03-05"
    assert format_local_date(987, 0, 1) == "0987-01-01"


def test_round_trip_over_two_centuries():
    day = "1900-01-01"
    while day <= "2100-12-31":
        assert format_local_date(*parse_local_date(day)) == day
        day = add_days(day, 1)
    assert day == "2101-01-01"


@pytest.mark.parametrize("value", ["2024-02-30", "2024-13-01", "2024-03", "not-a-date", ""])
def test_parse_local_date_rejects_malformed(value):
    with pytest.raises(ValueError):
        parse_local_date(value)


def test_is_valid_iso_requires_canonical_form():
    assert is_valid_iso("2024-03-05")
    assert not is_valid_iso("2024-3-5")
    assert not is_valid_iso("2023-02-29")
    assert not is_valid_iso(None)


def test_add_days_crosses_boundaries():
    assert add_days("2024-02-28", 1) == "2024-02-29"
    assert add_days("2023-02-28", 1) == "2023-03-01"
    assert add_days("2024-12-31", 1) == "2025-01-01"
    assert add_days("2025-01-01", -1) == "2024-12-31"
    assert add_days("2025-03-15", -7) == "2025-03-08"


def test_days_between():
    assert days_between("2024-02-01", "2024-03-01") == 29
    assert days_between("2025-01-01", "2025-01-01") == 0


def test_weekday_is_sunday_based():
    assert weekday_of(2024, 1, 1) == 4
    assert weekday_of(2025, 5, 1) == 0
    assert weekday_of_iso("2025-01-04") == 6


def test_shift_month_rolls_years():
    assert shift_month(2025, 0, -1) == (2024, 11)
    assert shift_month(2024, 11, 1) == (2025, 0)
    assert shift_month(2025, 2, -15) == (2023, 11)
    assert shift_month(2025, 5, 0) == (2025, 5)


def test_is_future_uses_string_order():
    assert is_future("2025-06-11", "2025-06-10")
    assert not is_future("2025-06-10", "2025-06-10")
    assert not is_future("2024-12-31", "2025-01-01")


def test_today_local_string_shape():
    today = today_local_string()
    assert is_valid_iso(today)


def test_today_local_string_unknown_zone_falls_back():
    assert today_local_string("Not/A_Zone") == today_local_string()
