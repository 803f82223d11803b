"""Calendar settings and their translation into a printable layout."""

import sys
from dataclasses import dataclass, field, replace
from typing import TextIO

from jcal.calendar import Weekday
from jcal.config import (
    ColorMode,
    WeekNumbering,
    get_default_color,
    get_default_columns,
    get_default_width,
)
from jcal.date import Date
from jcal.layout import Column, ColumnContent, Grid, Highlight, Layout, Row, WeekNumConfig
from jcal.logging import get_logger
from jcal.validation import validate_settings

_WEEKNUM_CONFIGS: dict[str, WeekNumConfig | None] = {
    "off": None,
    "based": WeekNumConfig.BASED,
    "iso": WeekNumConfig.ISO,
}

_log = get_logger(__name__)


@dataclass
class CalendarSettings:
    """Everything needed to lay out a calendar.

    Unset values (None) fall back to the module-level defaults in
    :mod:`jcal.config`.
    """

    # the reference day; highlighted unless a week is requested
    now: Date = field(default_factory=Date.today)
    # how many months to print
    months: int = 1
    # center ``now`` in the printed months instead of starting at it
    span: bool = False
    # all 12 months of ``now``'s year under a year title
    full_year: bool = False
    base_weekday: Weekday = Weekday.SUNDAY
    # day of year instead of day of month
    ordinal_mode: bool = False
    week_numbering: WeekNumbering = "off"
    weeknums_before_grid: bool = True
    # 1-based week to jump to and highlight
    week: int | None = None
    vertical: bool = False
    # with auto_columns this is the most columns per row, else the exact count
    columns: int | None = None
    auto_columns: bool = True
    # characters available for one row
    width: int | None = None
    color: ColorMode | None = None
    year_in_header: bool = False
    # shared weekday lane; None means only in vertical mode
    common_weekdays: bool | None = None

    def jalali(self) -> "CalendarSettings":
        """A copy showing the Jalali calendar with weeks starting on Saturday."""
        return replace(self, now=self.now.convert("jalali"), base_weekday=Weekday.SATURDAY)

    def month_count(self) -> int:
        return 12 if self.full_year else self.months

    def reference_day(self) -> Date:
        """``now``, moved to the requested week's first day if a week is set."""
        day = self.now.copy()
        if self.week is not None:
            if self.week_numbering == "iso":
                day.set_saturating_iso_weeknum(self.week)
            else:
                day.set_saturating_weeknum(self.week, Weekday(self.base_weekday))
        return day

    def start_month(self) -> Date:
        """The first month to print."""
        start = self.reference_day()
        start.set_saturating_day(1)
        if self.full_year:
            start.set_saturating_month(1)
            return start

        months = self.month_count()
        if not self.span or months == 1:
            return start

        # the odd month out goes before the reference month
        months_before = months // 2
        start.set_saturating_months_offset(-months_before)
        return start

    def resolved_color(self, stream: TextIO | None = None) -> bool:
        """Decide once whether highlights are styled."""
        mode = self.color or get_default_color()
        if mode == "always":
            return True
        if mode == "never":
            return False
        stream = stream or sys.stdout
        return hasattr(stream, "isatty") and stream.isatty()

    def suggested_columns(self, layout: Layout) -> int:
        """How many months go in one row of ``layout``."""
        columns = self.columns if self.columns is not None else get_default_columns()
        if not self.auto_columns:
            return columns
        width = self.width if self.width is not None else get_default_width()
        fitted = max(min(layout.columns_in_width(width), columns), 1)
        _log.debug("columns_fitted", width=width, columns=fitted)
        return fitted

    def highlight(self) -> Highlight:
        if self.week is not None:
            return Highlight.for_week(self.week)
        return Highlight.for_day(self.reference_day())

    def build_layout(self, stream: TextIO | None = None) -> Layout:
        """Validate and turn these settings into a ready to print layout.

        Raises:
            ValidationError: If the settings are malformed
        """
        validate_settings(self)

        weeknums = _WEEKNUM_CONFIGS[self.week_numbering]
        if self.week is not None and weeknums is None:
            weeknums = WeekNumConfig.BASED

        grid = Grid(
            date=self.start_month(),
            ordinal_mode=self.ordinal_mode,
            base_weekday=Weekday(self.base_weekday),
        )
        content = ColumnContent(
            grid=grid,
            weeknums=weeknums,
            # vertical columns carry week numbers as a footer line
            weeknums_before_grid=self.weeknums_before_grid and not self.vertical,
        )
        column = Column(
            content=content,
            year_in_header=self.year_in_header and not self.full_year,
            vertical=self.vertical,
        )
        layout = Layout(
            base_row=Row(column=column, more_columns=self.month_count() - 1),
            common_weekday=self.common_weekdays,
            highlight=self.highlight(),
            color=self.resolved_color(stream),
            year_title=self.full_year,
        )
        layout.next_row_after_column = self.suggested_columns(layout)

        _log.debug(
            "settings_resolved",
            calendar=grid.date.kind,
            start=repr(grid.date),
            months=self.month_count(),
            columns=layout.next_row_after_column,
            vertical=self.vertical,
        )
        return layout
