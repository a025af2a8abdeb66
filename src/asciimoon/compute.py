"""Astronomy computation layer: date parsing, Julian Day conversion, and lunar phase."""

import datetime
import logging
import math
from collections.abc import Callable

from pytz import utc

from asciimoon.models import InvalidRenderArgument, MoonPhase, MoonQuery

logger = logging.getLogger(__name__)

SYNODIC_MONTH = 29.530588853  # Mean synodic month (days)
REF_JD = 2451550.1  # Julian Day of a reference new moon (2000-01-06)


class DateParseError(ValueError):
    """Date text is malformed or names a day that does not exist."""


class DateFormatError(DateParseError):
    """Date text does not have exactly three '-'-separated fields."""


class DateFieldError(DateParseError):
    """A date field is not an unsigned integer."""


class MonthRangeError(DateParseError):
    """Month outside 1-12."""


class CalendarDateError(DateParseError):
    """Day does not exist in the given year and month."""


def utc_today() -> datetime.date:
    """Current calendar date in UTC."""
    return datetime.datetime.now(utc).date()


def parse_date(text: str) -> datetime.date:
    """Parse a ``YYYY-MM-DD`` string into a date.

    Fields need not be zero-padded ("2024-1-1" is accepted), but each must
    consist of ASCII digits only.

    Args:
        text: Date string.

    Returns:
        The calendar date.

    Raises:
        DateFormatError: Wrong number of fields.
        DateFieldError: A field is not an unsigned integer.
        MonthRangeError: Month outside 1-12.
        CalendarDateError: Day invalid for the year/month, or year unsupported.
    """
    parts = text.split("-")
    if len(parts) != 3:
        raise DateFormatError(f"expected YYYY-MM-DD, got {text!r}")

    fields: list[int] = []
    for name, part in zip(("year", "month", "day"), parts):
        if not (part.isascii() and part.isdigit()):
            raise DateFieldError(f"invalid {name}: {part!r}")
        try:
            fields.append(int(part))
        except ValueError as e:
            # Digit strings past the interpreter's int conversion limit
            raise DateFieldError(f"invalid {name}: {part[:16]!r}...") from e
    year, month, day = fields

    if not 1 <= month <= 12:
        raise MonthRangeError(f"month out of range: {month}")
    try:
        return datetime.date(year, month, day)
    except ValueError as e:
        raise CalendarDateError(f"invalid date {text!r}: {e}") from e


def julian_day_noon_utc(date: datetime.date) -> float:
    """Julian Day at noon UTC of a proleptic Gregorian date (Meeus).

    January and February count as months 13 and 14 of the previous year.
    """
    y, m = date.year, date.month
    if m <= 2:
        y -= 1
        m += 12
    a = y // 100
    b = 2 - a + a // 4
    return (
        math.floor(365.25 * (y + 4716))
        + math.floor(30.6001 * (m + 1))
        + (date.day + 0.5)
        + b
        - 1524.5
    )


def phase_from_julian_day(jd: float) -> float:
    """Map a Julian Day to a phase fraction in [0, 1). 0.0=new, 0.5=full."""
    p = math.fmod((jd - REF_JD) / SYNODIC_MONTH, 1.0)
    if p < 0.0:
        p += 1.0
    # A tiny negative remainder can round up to exactly 1.0
    if p >= 1.0:
        p = 0.0
    return p


def compute_phase(
    date: datetime.date | None = None,
    today: Callable[[], datetime.date] = utc_today,
) -> float:
    """Lunar phase fraction for a date.

    Args:
        date: Calendar date. None means ``today()``.
        today: Zero-argument callable returning the current date.

    Returns:
        Phase in [0, 1). 0.0=new, 0.5=full.
    """
    if date is None:
        date = today()
    jd = julian_day_noon_utc(date)
    phase = phase_from_julian_day(jd)
    logger.debug("date=%s jd=%.1f phase=%.6f", date, jd, phase)
    return phase


def phase_label(phase: float) -> str:
    """'full' at exactly 0.5, otherwise 'waxing' below it and 'waning' above."""
    return MoonPhase(phase=phase).label


def run(
    query: MoonQuery,
    today: Callable[[], datetime.date] = utc_today,
) -> MoonPhase:
    """Top-level entry point: takes a MoonQuery and returns a MoonPhase.

    The date is parsed even when an explicit phase is given, so a malformed
    date is always reported.

    Args:
        query: User input (date string, optional phase).
        today: Zero-argument callable returning the current date.

    Returns:
        Computed MoonPhase. ``date`` and ``julian_day`` are None when the
        phase was supplied directly.

    Raises:
        DateParseError: ``query.date`` is malformed or not a real date.
        InvalidRenderArgument: ``query.phase`` lies outside [0, 1].
    """
    date = parse_date(query.date) if query.date is not None else None

    if query.phase is not None:
        if not 0.0 <= query.phase <= 1.0:
            raise InvalidRenderArgument(
                f"phase must be between 0.0 and 1.0, got {query.phase}"
            )
        return MoonPhase(phase=query.phase)

    if date is None:
        date = today()
    jd = julian_day_noon_utc(date)
    return MoonPhase(phase=phase_from_julian_day(jd), date=date, julian_day=jd)
