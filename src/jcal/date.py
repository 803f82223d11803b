"""A date in either supported calendar behind one interface."""

from datetime import date

from jcal.calendar import (
    CalendarKind,
    CommonDate,
    GregorianDate,
    JalaliDate,
    Weekday,
    month_abbr,
    month_name,
)


class Date(CommonDate):
    """Tagged union over :class:`GregorianDate` and :class:`JalaliDate`.

    Every calendar query and saturating mutation is forwarded to the wrapped
    date, so callers never need to know which calendar they hold.

    Two dates compare equal when they denote the same day, even across
    calendars::

        Date.gregorian(2025, 3, 21) == Date.jalali(1404, 1, 1)  # True
    """

    def __init__(self, inner: GregorianDate | JalaliDate) -> None:
        self._inner = inner

    @classmethod
    def gregorian(cls, year: int, month: int, day: int) -> "Date":
        """Build a Gregorian date, raising ValueError on invalid components."""
        return cls(GregorianDate.from_ymd(year, month, day))

    @classmethod
    def jalali(cls, year: int, month: int, day: int) -> "Date":
        """Build a Jalali date, raising ValueError on invalid components."""
        return cls(JalaliDate.from_ymd(year, month, day))

    @classmethod
    def from_date(cls, value: date, kind: CalendarKind = "gregorian") -> "Date":
        """Wrap a :class:`datetime.date`, converting it to ``kind``."""
        if kind == "jalali":
            return cls(JalaliDate.from_gregorian(value))
        return cls(GregorianDate(value))

    @classmethod
    def today(cls, kind: CalendarKind = "gregorian") -> "Date":
        return cls.from_date(date.today(), kind)

    @property
    def kind(self) -> CalendarKind:
        if isinstance(self._inner, JalaliDate):
            return "jalali"
        return "gregorian"

    def to_date(self) -> date:
        """The same day as a Gregorian :class:`datetime.date`."""
        return self._inner.to_date()

    def convert(self, kind: CalendarKind) -> "Date":
        """The same day in the ``kind`` calendar."""
        if kind == self.kind:
            return self.copy()
        return Date.from_date(self.to_date(), kind)

    def copy(self) -> "Date":
        return Date(self._inner.copy())

    def month_name(self) -> str:
        return month_name(self.kind, self.month)

    def month_abbr(self) -> str:
        return month_abbr(self.kind, self.month)

    @property
    def year(self) -> int:
        return self._inner.year

    def set_saturating_year(self, year: int) -> None:
        self._inner.set_saturating_year(year)

    @property
    def month(self) -> int:
        return self._inner.month

    def set_saturating_month(self, month: int) -> None:
        self._inner.set_saturating_month(month)

    @property
    def day(self) -> int:
        return self._inner.day

    def set_saturating_day(self, day: int) -> None:
        self._inner.set_saturating_day(day)

    @property
    def ordinal(self) -> int:
        return self._inner.ordinal

    def set_saturating_ordinal(self, ordinal: int) -> None:
        self._inner.set_saturating_ordinal(ordinal)

    def set_saturating_months_offset(self, months: int) -> None:
        self._inner.set_saturating_months_offset(months)

    @property
    def weekday(self) -> Weekday:
        return self._inner.weekday

    @property
    def month_end_day(self) -> int:
        return self._inner.month_end_day

    @property
    def year_end_ordinal(self) -> int:
        return self._inner.year_end_ordinal

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        if self.kind == other.kind:
            return self._inner == other._inner
        return self.to_date() == other.to_date()

    def __hash__(self) -> int:
        # same day, same hash, whatever the calendar
        return hash(self.to_date())

    def __repr__(self) -> str:
        return f"Date.{self.kind}({self.year}, {self.month}, {self.day})"
