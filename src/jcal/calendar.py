"""Calendar implementations for jcal date handling."""

import copy
from abc import ABC, abstractmethod
from calendar import isleap, monthrange
from datetime import MAXYEAR, MINYEAR, date, timedelta
from enum import IntEnum
from typing import Literal

import jdatetime

CalendarKind = Literal["gregorian", "jalali"]

# jdatetime's supported years
JALALI_MIN_YEAR = 1
JALALI_MAX_YEAR = 9377

WEEKDAYS = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

GREGORIAN_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Widely used romanized names, keep as is.
JALALI_MONTHS = (
    "Farvardin",
    "Ordibehesht",
    "Khordad",
    "Tir",
    "Mordad",
    "Shahrivar",
    "Mehr",
    "Aban",
    "Azar",
    "Dey",
    "Bahman",
    "Esfand",
)


def abbreviate(names: tuple[str, ...]) -> tuple[str, ...]:
    """Abbreviate every name to its first 3 characters."""
    return tuple(name[:3] for name in names)


WEEKDAYS_ABB = abbreviate(WEEKDAYS)
GREGORIAN_MONTHS_ABB = abbreviate(GREGORIAN_MONTHS)
JALALI_MONTHS_ABB = abbreviate(JALALI_MONTHS)

_MONTH_NAMES: dict[str, tuple[str, ...]] = {
    "gregorian": GREGORIAN_MONTHS,
    "jalali": JALALI_MONTHS,
}


def month_name(kind: CalendarKind, month: int) -> str:
    """Name of the 1-based ``month`` in the given calendar."""
    return _MONTH_NAMES[kind][month - 1]


def month_abbr(kind: CalendarKind, month: int) -> str:
    return month_name(kind, month)[:3]


class Weekday(IntEnum):
    """Days of the week, Sunday based (``SUNDAY == 0``)."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def from_python(cls, weekday: int) -> "Weekday":
        """Convert from :meth:`datetime.date.weekday` (Monday == 0)."""
        return cls((weekday + 1) % 7)

    def forward(self, days: int) -> "Weekday":
        """The weekday ``days`` after this one."""
        return Weekday((self + days) % 7)

    def till(self, other: "Weekday") -> int:
        """How many steps forward from this weekday reach ``other`` (0..=6)."""
        return (other - self) % 7

    @property
    def iso(self) -> int:
        """ISO 8601 weekday number (Monday == 1 .. Sunday == 7)."""
        return 7 if self == Weekday.SUNDAY else int(self)

    @property
    def label(self) -> str:
        return WEEKDAYS[self]


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


class CommonDate(ABC):
    """Uniform queries and saturating mutations over one calendar's dates.

    Concrete calendars implement the primitives (year, month, day, ordinal,
    weekday and their setters). Week numbers and month arithmetic are derived
    here from those primitives only, so they behave the same on every
    calendar.

    No setter ever produces an invalid date: out of range values are clamped
    to the closest valid one.
    """

    MIN_YEAR: int
    MAX_YEAR: int

    @property
    @abstractmethod
    def year(self) -> int:
        pass

    @abstractmethod
    def set_saturating_year(self, year: int) -> None:
        pass

    @property
    @abstractmethod
    def month(self) -> int:
        """Month of the year (1..=12)."""
        pass

    @abstractmethod
    def set_saturating_month(self, month: int) -> None:
        pass

    @property
    @abstractmethod
    def day(self) -> int:
        """Day of the month (1..=31)."""
        pass

    @abstractmethod
    def set_saturating_day(self, day: int) -> None:
        pass

    @property
    @abstractmethod
    def ordinal(self) -> int:
        """Day of the year (1..=366)."""
        pass

    @abstractmethod
    def set_saturating_ordinal(self, ordinal: int) -> None:
        pass

    @property
    @abstractmethod
    def weekday(self) -> Weekday:
        pass

    @property
    @abstractmethod
    def month_end_day(self) -> int:
        """Last valid day of this month."""
        pass

    @property
    @abstractmethod
    def year_end_ordinal(self) -> int:
        """Last valid ordinal of this year."""
        pass

    def copy(self) -> "CommonDate":
        return copy.deepcopy(self)

    def _new_year_weekday(self) -> Weekday:
        new_year = self.copy()
        new_year.set_saturating_ordinal(1)
        return new_year.weekday

    def weeknum(self, base: Weekday) -> int:
        """Week number (0..=53) where weeks start on ``base``.

        Week 1 starts on the first ``base`` weekday of the year; days before
        it belong to week 0.
        """
        first_base = self._new_year_weekday().till(base)
        return (self.ordinal - 1 - first_base) // 7 + 1

    def iso_weeknum(self) -> int:
        """ISO 8601 week number counted within this year (0..=53).

        Days that ISO assigns to the last week of the previous year give 0,
        which keeps the count monotonic through the year.
        """
        first = self._new_year_weekday().iso
        weekday = (first - 1 + self.ordinal - 1) % 7 + 1
        return (self.ordinal - weekday + 10) // 7

    def set_saturating_weeknum(self, week: int, base: Weekday) -> None:
        """Move to the first day of ``week`` as counted by :meth:`weeknum`."""
        week = _clamp(week, 0, 53)
        if week == 0:
            self.set_saturating_ordinal(1)
            return
        first_base = self._new_year_weekday().till(base)
        self.set_saturating_ordinal(first_base + 1 + 7 * (week - 1))

    def set_saturating_iso_weeknum(self, week: int) -> None:
        """Move to the Monday of ``week`` as counted by :meth:`iso_weeknum`."""
        week = _clamp(week, 0, 53)
        if week == 0:
            self.set_saturating_ordinal(1)
            return
        # week 1 always holds the 4th day of the year
        fourth = self._new_year_weekday().forward(3).iso
        self.set_saturating_ordinal(5 - fourth + 7 * (week - 1))

    def set_saturating_months_offset(self, months: int) -> None:
        """Move by whole months to the 1st of the target month.

        Crossing year boundaries is fine; moving past the supported years
        stops at the first or last month of the calendar.
        """
        total = self.year * 12 + (self.month - 1) + months
        total = _clamp(total, self.MIN_YEAR * 12, self.MAX_YEAR * 12 + 11)
        year, month_index = divmod(total, 12)
        self.set_saturating_day(1)
        self.set_saturating_year(year)
        self.set_saturating_month(month_index + 1)


class GregorianDate(CommonDate):
    """Proleptic Gregorian date backed by :class:`datetime.date`."""

    MIN_YEAR = MINYEAR
    MAX_YEAR = MAXYEAR

    def __init__(self, value: date) -> None:
        self._date = value

    @classmethod
    def from_ymd(cls, year: int, month: int, day: int) -> "GregorianDate":
        return cls(date(year, month, day))

    def to_date(self) -> date:
        return self._date

    @property
    def year(self) -> int:
        return self._date.year

    def set_saturating_year(self, year: int) -> None:
        year = _clamp(year, self.MIN_YEAR, self.MAX_YEAR)
        day = min(self._date.day, monthrange(year, self._date.month)[1])
        self._date = date(year, self._date.month, day)

    @property
    def month(self) -> int:
        return self._date.month

    def set_saturating_month(self, month: int) -> None:
        month = _clamp(month, 1, 12)
        day = min(self._date.day, monthrange(self._date.year, month)[1])
        self._date = date(self._date.year, month, day)

    @property
    def day(self) -> int:
        return self._date.day

    def set_saturating_day(self, day: int) -> None:
        self._date = self._date.replace(day=_clamp(day, 1, self.month_end_day))

    @property
    def ordinal(self) -> int:
        return self._date.timetuple().tm_yday

    def set_saturating_ordinal(self, ordinal: int) -> None:
        ordinal = _clamp(ordinal, 1, self.year_end_ordinal)
        self._date = date(self._date.year, 1, 1) + timedelta(days=ordinal - 1)

    @property
    def weekday(self) -> Weekday:
        return Weekday.from_python(self._date.weekday())

    @property
    def month_end_day(self) -> int:
        return monthrange(self._date.year, self._date.month)[1]

    @property
    def year_end_ordinal(self) -> int:
        return 366 if isleap(self._date.year) else 365

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GregorianDate):
            return NotImplemented
        return self._date == other._date

    def __hash__(self) -> int:
        return hash(self._date)

    def __repr__(self) -> str:
        return f"GregorianDate({self._date.isoformat()})"


def _jalali_is_leap(year: int) -> bool:
    return jdatetime.date(year, 1, 1).isleap()


def _jalali_month_end(year: int, month: int) -> int:
    if month <= 6:
        return 31
    if month <= 11:
        return 30
    return 30 if _jalali_is_leap(year) else 29


class JalaliDate(CommonDate):
    """Jalali (Solar Hijri) date backed by :class:`jdatetime.date`.

    The first six months have 31 days, the next five 30 and Esfand has 29
    or 30 days depending on the leap year.
    """

    MIN_YEAR = JALALI_MIN_YEAR
    MAX_YEAR = JALALI_MAX_YEAR

    def __init__(self, value: jdatetime.date) -> None:
        self._date = value

    @classmethod
    def from_ymd(cls, year: int, month: int, day: int) -> "JalaliDate":
        return cls(jdatetime.date(year, month, day))

    @classmethod
    def from_gregorian(cls, value: date) -> "JalaliDate":
        """Convert a Gregorian day, clamping to the years jdatetime supports."""
        if value < _JALALI_FIRST_GREGORIAN:
            return cls(jdatetime.date(JALALI_MIN_YEAR, 1, 1))
        if value > _JALALI_LAST_GREGORIAN:
            return cls(_JALALI_LAST)
        return cls(jdatetime.date.fromgregorian(date=value))

    def to_date(self) -> date:
        """The same day in the Gregorian calendar."""
        return self._date.togregorian()

    def _set_ymd(self, year: int, month: int, day: int) -> None:
        self._date = jdatetime.date(year, month, _clamp(day, 1, _jalali_month_end(year, month)))

    @property
    def year(self) -> int:
        return self._date.year

    def set_saturating_year(self, year: int) -> None:
        year = _clamp(year, self.MIN_YEAR, self.MAX_YEAR)
        ordinal = self.ordinal
        self._set_ymd(year, 1, 1)
        self.set_saturating_ordinal(ordinal)

    @property
    def month(self) -> int:
        return self._date.month

    def set_saturating_month(self, month: int) -> None:
        self._set_ymd(self._date.year, _clamp(month, 1, 12), self._date.day)

    @property
    def day(self) -> int:
        return self._date.day

    def set_saturating_day(self, day: int) -> None:
        self._set_ymd(self._date.year, self._date.month, day)

    @property
    def ordinal(self) -> int:
        month, day = self._date.month, self._date.day
        if month <= 7:
            return (month - 1) * 31 + day
        return 186 + (month - 7) * 30 + day

    def set_saturating_ordinal(self, ordinal: int) -> None:
        index = _clamp(ordinal, 1, self.year_end_ordinal) - 1
        if index < 186:
            month, day = divmod(index, 31)
        else:
            month, day = divmod(index - 186, 30)
            month += 6
        self._date = jdatetime.date(self._date.year, month + 1, day + 1)

    @property
    def weekday(self) -> Weekday:
        return Weekday.from_python(self._date.togregorian().weekday())

    @property
    def month_end_day(self) -> int:
        return _jalali_month_end(self._date.year, self._date.month)

    @property
    def year_end_ordinal(self) -> int:
        return 366 if _jalali_is_leap(self._date.year) else 365

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JalaliDate):
            return NotImplemented
        return (self.year, self.month, self.day) == (other.year, other.month, other.day)

    def __hash__(self) -> int:
        return hash(self.to_date())

    def __repr__(self) -> str:
        return f"JalaliDate({self.year:04d}-{self.month:02d}-{self.day:02d})"


_JALALI_LAST = jdatetime.date(
    JALALI_MAX_YEAR, 12, _jalali_month_end(JALALI_MAX_YEAR, 12)
)
_JALALI_FIRST_GREGORIAN = jdatetime.date(JALALI_MIN_YEAR, 1, 1).togregorian()
_JALALI_LAST_GREGORIAN = _JALALI_LAST.togregorian()
