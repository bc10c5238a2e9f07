"""Date validators and strict ISO date parsing."""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime
from typing import TYPE_CHECKING, NamedTuple

from kondition._core import Validator, describe
from kondition._errors import PreconditionError, check_not_none

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo


MAX_YEAR = 999_999_999

# YYYY-MM-DD, or +YYYYY-MM-DD (five or more year digits) for far-future years
_ISO_DATE = re.compile(
    r"(?:(?P<year>[0-9]{4})|\+(?P<long_year>[0-9]{5,10}))"
    r"-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
)

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


class IsoDate(NamedTuple):
    """A calendar date parsed from text; the year may exceed what datetime.date holds."""

    year: int
    month: int
    day: int


def days_in_month(year: int, month: int) -> int:
    if month == 2 and calendar.isleap(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def parse_iso_date(text: str) -> IsoDate | None:
    """
    Parse a strict ISO-8601 calendar date, returning None if it is not one.

    Accepted: "2015-11-10", "+12345-11-10"
    Rejected: "2015-1-15", "2015-13-15", "+2015-11-10", "12345-11-10",
              "-0001-01-01", "0000-01-01", "2015-02-29"
    """
    if not isinstance(text, str):
        return None
    match = _ISO_DATE.fullmatch(text)
    if match is None:
        return None

    year = int(match["year"] or match["long_year"])
    month = int(match["month"])
    day = int(match["day"])

    if not 1 <= year <= MAX_YEAR:
        return None
    if not 1 <= month <= 12:
        return None
    if not 1 <= day <= days_in_month(year, month):
        return None
    return IsoDate(year, month, day)


def _resolve_tz(tz: str | None) -> ZoneInfo | None:
    """Resolve a timezone name to a ZoneInfo object, or None."""
    if tz is None:
        return None
    from zoneinfo import ZoneInfo

    return ZoneInfo(tz)


def _today(tz: ZoneInfo | None) -> date:
    """Get the current date, optionally in a timezone."""
    if tz is not None:
        return datetime.now(tz).date()
    return date.today()


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _weekday_index(day: int | str) -> int:
    if isinstance(day, str):
        try:
            return WEEKDAY_NAMES.index(day.lower())
        except ValueError:
            raise PreconditionError(f"Unknown weekday: {day!r}") from None
    if not 0 <= day <= 6:
        raise PreconditionError("Weekdays must be 0-6 (Monday=0)")
    return day


class DateValidator(Validator[date]):
    """
    Validator for datetime.date (a datetime is compared by its date part).

    Example:
        # Promotion window, weekdays only
        in_promo = date_().is_between(date(2024, 12, 1), date(2024, 12, 31)).is_weekday()

        # Birthday must not be in the future, checked in a specific timezone
        birthday = date_().not_().is_in_future(tz="Europe/Vilnius")
    """

    def is_after(self, other: date):
        """Strictly after other."""
        check_not_none(other, "Date cannot be None")
        other = _as_date(other)
        return self.register_condition(
            lambda d: d is not None and _as_date(d) > other, describe("is_after", other)
        )

    def is_before(self, other: date):
        """Strictly before other."""
        check_not_none(other, "Date cannot be None")
        other = _as_date(other)
        return self.register_condition(
            lambda d: d is not None and _as_date(d) < other, describe("is_before", other)
        )

    def is_between(self, start: date, end: date):
        """Between start and end, both inclusive."""
        check_not_none(start, "Start date cannot be None")
        check_not_none(end, "End date cannot be None")
        start, end = _as_date(start), _as_date(end)
        return self.register_condition(
            lambda d: d is not None and start <= _as_date(d) <= end,
            describe("is_between", start, end),
        )

    def is_in_past(self, tz: str | None = None):
        """Before today (in tz, if given)."""
        tz_info = _resolve_tz(tz)
        return self.register_condition(
            lambda d: d is not None and _as_date(d) < _today(tz_info), "is_in_past"
        )

    def is_in_future(self, tz: str | None = None):
        """After today (in tz, if given)."""
        tz_info = _resolve_tz(tz)
        return self.register_condition(
            lambda d: d is not None and _as_date(d) > _today(tz_info), "is_in_future"
        )

    def is_today(self, tz: str | None = None):
        tz_info = _resolve_tz(tz)
        return self.register_condition(
            lambda d: d is not None and _as_date(d) == _today(tz_info), "is_today"
        )

    def is_weekday(self):
        """Monday to Friday."""
        return self.register_condition(
            lambda d: d is not None and d.weekday() < 5, "is_weekday"
        )

    def is_on_days(self, *days: int | str):
        """
        Falls on one of the given weekdays.

        Args:
            days: Weekday numbers (0=Monday, 6=Sunday) or names ("monday")

        Raises:
            PreconditionError: if no days are given or a day is unknown
        """
        if not days:
            raise PreconditionError("At least one weekday is required")
        indexes = frozenset(_weekday_index(day) for day in days)
        return self.register_condition(
            lambda d: d is not None and d.weekday() in indexes, describe("is_on_days", *days)
        )
