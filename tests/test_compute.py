import datetime

import pytest

from asciimoon.compute import (
    REF_JD,
    SYNODIC_MONTH,
    CalendarDateError,
    DateFieldError,
    DateFormatError,
    DateParseError,
    MonthRangeError,
    compute_phase,
    julian_day_noon_utc,
    parse_date,
    phase_from_julian_day,
    phase_label,
    run,
    utc_today,
)
from asciimoon.models import InvalidRenderArgument, MoonQuery


@pytest.mark.parametrize(
    "date, expected",
    [
        (datetime.date(2000, 1, 1), 2451545.0),
        (datetime.date(1999, 1, 1), 2451180.0),
        (datetime.date(1987, 1, 27), 2446823.0),
        (datetime.date(2024, 3, 1), 2460371.0),
    ],
)
def test_julian_day_noon_utc(date, expected):
    assert julian_day_noon_utc(date) == expected


def test_julian_day_advances_one_per_day_across_february():
    feb28 = julian_day_noon_utc(datetime.date(2024, 2, 28))
    feb29 = julian_day_noon_utc(datetime.date(2024, 2, 29))
    mar1 = julian_day_noon_utc(datetime.date(2024, 3, 1))
    assert feb29 - feb28 == 1.0
    assert mar1 - feb29 == 1.0


def test_reference_epoch_is_new_moon():
    assert phase_from_julian_day(REF_JD) == pytest.approx(0.0, abs=1e-9)


def test_phase_before_epoch_is_normalized():
    # 2000-01-06 noon is 0.1 days before the reference new moon
    phase = compute_phase(datetime.date(2000, 1, 6))
    assert 0.0 <= phase < 1.0
    assert phase == pytest.approx(1.0 - 0.1 / SYNODIC_MONTH)


def test_phase_quarter_month_before_epoch():
    assert phase_from_julian_day(REF_JD - SYNODIC_MONTH / 4) == pytest.approx(0.75)
    assert phase_from_julian_day(REF_JD - 1e-9) < 1.0


@pytest.mark.parametrize(
    "date",
    [
        datetime.date(1, 1, 1),
        datetime.date(1582, 10, 15),
        datetime.date(1900, 1, 1),
        datetime.date(1999, 12, 31),
        datetime.date(2024, 2, 29),
        datetime.date(9999, 12, 31),
    ],
)
def test_phase_in_half_open_unit_interval(date):
    assert 0.0 <= compute_phase(date) < 1.0


@pytest.mark.parametrize("jd", [2400000.5, 2451550.1, 2451565.0, 2460371.0])
def test_phase_repeats_every_synodic_month(jd):
    diff = abs(phase_from_julian_day(jd) - phase_from_julian_day(jd + SYNODIC_MONTH))
    assert min(diff, 1.0 - diff) < 1e-9


def test_known_full_moon_is_near_half():
    # Full moon of 2000-01-21, 04:40 UTC
    assert compute_phase(datetime.date(2000, 1, 21)) == pytest.approx(0.5, abs=0.02)


def test_compute_phase_defaults_to_injected_today(fixed_today):
    assert compute_phase(today=fixed_today) == compute_phase(datetime.date(2000, 1, 21))


def test_utc_today_returns_a_date():
    today = utc_today()
    assert type(today) is datetime.date


@pytest.mark.parametrize(
    "phase, label",
    [(0.0, "waxing"), (0.25, "waxing"), (0.5, "full"), (0.5000001, "waning"), (0.99, "waning")],
)
def test_phase_label(phase, label):
    assert phase_label(phase) == label


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2024-02-29", datetime.date(2024, 2, 29)),
        ("2024-1-1", datetime.date(2024, 1, 1)),
        ("1995-01-15", datetime.date(1995, 1, 15)),
        ("0001-01-01", datetime.date(1, 1, 1)),
    ],
)
def test_parse_date_accepts(text, expected):
    assert parse_date(text) == expected


@pytest.mark.parametrize(
    "text, error",
    [
        ("2024-02", DateFormatError),
        ("2024-02-01-01", DateFormatError),
        ("20240201", DateFormatError),
        ("", DateFormatError),
        ("2024-ab-01", DateFieldError),
        ("2024-02-", DateFieldError),
        ("2024-+2-01", DateFieldError),
        ("2024- 2-01", DateFieldError),
        ("2024-1_0-01", DateFieldError),
        ("2024-13-01", MonthRangeError),
        ("2024-00-01", MonthRangeError),
        ("2023-02-29", CalendarDateError),
        ("2024-02-30", CalendarDateError),
        ("2024-04-31", CalendarDateError),
        ("2024-01-00", CalendarDateError),
        ("0000-01-01", CalendarDateError),
        ("2024-01-" + "1" * 5000, DateParseError),
        ("9" * 5000 + "-01-01", DateParseError),
    ],
)
def test_parse_date_rejects(text, error):
    with pytest.raises(error):
        parse_date(text)


def test_parse_errors_share_a_base_class():
    for error in (DateFormatError, DateFieldError, MonthRangeError, CalendarDateError):
        assert issubclass(error, DateParseError)
        assert issubclass(error, ValueError)


def test_run_with_date():
    moon = run(MoonQuery(date="2000-01-01"))
    assert moon.date == datetime.date(2000, 1, 1)
    assert moon.julian_day == 2451545.0
    assert moon.phase == compute_phase(datetime.date(2000, 1, 1))


def test_run_defaults_to_today(fixed_today):
    moon = run(MoonQuery(), today=fixed_today)
    assert moon.date == datetime.date(2000, 1, 21)
    assert moon.label == "waning"


def test_run_phase_overrides_date():
    moon = run(MoonQuery(date="2000-01-01", phase=0.5))
    assert moon.phase == 0.5
    assert moon.date is None
    assert moon.julian_day is None
    assert moon.label == "full"


def test_run_rejects_bad_date_even_with_phase():
    with pytest.raises(CalendarDateError):
        run(MoonQuery(date="2023-02-29", phase=0.5))


@pytest.mark.parametrize("phase", [-0.01, 1.01, float("nan")])
def test_run_rejects_out_of_range_phase(phase):
    with pytest.raises(InvalidRenderArgument):
        run(MoonQuery(phase=phase))
