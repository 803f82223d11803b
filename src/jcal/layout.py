"""Lay out month calendars as lines of terminal text.

The structures nest from the outside in::

    Layout   rows of months until the requested month count is printed
    Row      months side by side, each one month after the previous
    Column   one month: a centered header line above its content
    ColumnContent
             the month grid plus optional weekday and week number lanes
    Grid     6 weeks x 7 days of day numbers

A Column's content looks like this (lanes may sit on either side)::

    .------------------------------------------.
    |            | weekday names (0..=1 line)  |
    |------------+-----------------------------|
    | week       |                             |
    | numbers    |   GRID (6 weeks x 7 days)   |
    | (0..=1     |                             |
    |  cell)     |                             |
    `------------------------------------------*

In vertical mode the content is read transposed: each week becomes a column
and each weekday a line.

Every cell is 2 characters wide, or 3 when days are shown as ordinals.
"""

import copy
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Iterator, TextIO

from jcal.calendar import WEEKDAYS, Weekday
from jcal.date import Date
from jcal.logging import get_logger, timed_block
from jcal.text import Aligner, ansi_width, highlight

_log = get_logger(__name__)

# Weeks in each grid
WEEK_COUNT = 6

# Days in each week
WEEK_DAYS = 7

DEFAULT_DELIMITER = " "


class WeekNumConfig(Enum):
    """How weeks are counted."""

    # ISO 8601 (Monday based, the week with the first Thursday is week 1)
    ISO = "iso"
    # Weeks start on the base weekday; the first full one is week 1
    BASED = "based"


@dataclass(frozen=True)
class Highlight:
    """What to highlight: either one day or one week number."""

    day: Date | None = None
    week: int | None = None

    @classmethod
    def for_day(cls, day: Date) -> "Highlight":
        return cls(day=day.copy())

    @classmethod
    def for_week(cls, week: int) -> "Highlight":
        return cls(week=week)


def weeknums(config: WeekNumConfig, date: Date, base_weekday: Weekday) -> list[int]:
    """Week numbers for the 6 grid rows of ``date``'s month.

    A 0 stands for the last week of the previous year.
    """
    start = date.copy()
    start.set_saturating_day(1)
    if config is WeekNumConfig.ISO:
        first = start.iso_weeknum()
    else:
        first = start.weeknum(base_weekday)
    return [first + i for i in range(WEEK_COUNT)]


def format_weeknums(
    date: Date,
    base_weekday: Weekday,
    config: WeekNumConfig,
    highlight_week: int | None = None,
    color: bool = True,
) -> list[str]:
    """Format the 6 week numbers of ``date``'s month, 2 characters each."""
    cells = []
    for weeknum in weeknums(config, date, base_weekday):
        if weeknum == 0:
            last_year = date.copy()
            last_year.set_saturating_year(last_year.year - 1)
            last_year.set_saturating_ordinal(last_year.year_end_ordinal)
            if config is WeekNumConfig.ISO:
                weeknum = last_year.iso_weeknum()
            else:
                weeknum = last_year.weeknum(base_weekday)
        cell = Aligner.SPACE.right(str(weeknum), 2)
        cells.append(highlight(cell, color) if weeknum == highlight_week else cell)
    return cells


def weekdays(base_weekday: Weekday) -> list[str]:
    """Weekday names of one week starting at ``base_weekday``."""
    return [WEEKDAYS[base_weekday.forward(offset)] for offset in range(WEEK_DAYS)]


@dataclass
class Grid:
    """A month as 6 weeks of 7 days."""

    # only the year and month are used
    date: Date = field(default_factory=Date.today)
    # day of year instead of day of month
    ordinal_mode: bool = False
    base_weekday: Weekday = Weekday.SUNDAY

    @property
    def day_cell_width(self) -> int:
        """Characters needed to write one day (up to 366 in ordinal mode)."""
        return 3 if self.ordinal_mode else 2

    def format_in_day_cell(self, s: str) -> str:
        return Aligner.SPACE.right(s, self.day_cell_width)

    def new_grid(self) -> list[list[int]]:
        """Day numbers placed by weekday, 0 for cells outside the month."""
        cells = [[0] * WEEK_DAYS for _ in range(WEEK_COUNT)]

        start = self.date.copy()
        start.set_saturating_day(1)
        offset = start.ordinal - 1 if self.ordinal_mode else 0

        # at most 6 blanks before the 1st
        position = self.base_weekday.till(start.weekday)
        for day in range(1, start.month_end_day + 1):
            row, column = divmod(position, WEEK_DAYS)
            cells[row][column] = day + offset
            position += 1

        return cells

    def _is_day(self, value: int, day: Date) -> bool:
        date = self.date.copy()
        if self.ordinal_mode:
            date.set_saturating_ordinal(value)
        else:
            date.set_saturating_day(value)
        return date == day

    def format(self, highlight_day: Date | None = None, color: bool = True) -> list[list[str]]:
        """Format every cell, optionally highlighting ``highlight_day``."""
        rows = []
        for week in self.new_grid():
            row = []
            for value in week:
                if value == 0:
                    row.append(self.format_in_day_cell(""))
                    continue
                cell = self.format_in_day_cell(str(value))
                if highlight_day is not None and self._is_day(value, highlight_day):
                    cell = highlight(cell, color)
                row.append(cell)
            rows.append(row)
        return rows


@dataclass
class ColumnContent:
    """A grid with optional week number and weekday name lanes."""

    grid: Grid = field(default_factory=Grid)
    weeknums: WeekNumConfig | None = None
    weeknums_before_grid: bool = True
    weekdays: bool = True
    weekdays_before_grid: bool = True

    WEEKNUM_EMPTY = "  "

    def format_weekdays_force(self) -> list[str]:
        """Weekday name cells, padded for the week number lane if present."""
        cells = [self.grid.format_in_day_cell(name) for name in weekdays(self.grid.base_weekday)]
        if self.weeknums is not None:
            if self.weeknums_before_grid:
                cells.insert(0, self.WEEKNUM_EMPTY)
            else:
                cells.append(self.WEEKNUM_EMPTY)
        return cells

    def row_cols(self) -> tuple[int, int]:
        """How many rows and columns :meth:`format` returns."""
        rows = WEEK_COUNT + (1 if self.weekdays else 0)
        cols = WEEK_DAYS + (1 if self.weeknums is not None else 0)
        return rows, cols

    def row_str_width(self) -> int:
        """Width of one row's cells placed back to back, delimiters excluded."""
        width = WEEK_DAYS * self.grid.day_cell_width
        if self.weeknums is not None:
            width += ansi_width(self.WEEKNUM_EMPTY)
        return width

    def format(
        self, highlight_section: Highlight | None = None, color: bool = True
    ) -> list[list[str]]:
        """Every row in the result has the same number of cells."""
        highlight_day = highlight_section.day if highlight_section else None
        highlight_week = highlight_section.week if highlight_section else None
        grid = self.grid.format(highlight_day, color)

        # lanes are always added when enabled; rows outside the month keep
        # their week number cell blank
        if self.weeknums is not None:
            cells = format_weeknums(
                self.grid.date, self.grid.base_weekday, self.weeknums, highlight_week, color
            )
            for row, cell in zip(grid, cells):
                if all(not c.strip() for c in row):
                    cell = self.WEEKNUM_EMPTY
                if self.weeknums_before_grid:
                    row.insert(0, cell)
                else:
                    row.append(cell)

        if self.weekdays:
            names = self.format_weekdays_force()
            if self.weekdays_before_grid:
                grid.insert(0, names)
            else:
                grid.append(names)

        return grid


@dataclass
class Column:
    """One month: a header line followed by the formatted content."""

    content: ColumnContent = field(default_factory=ColumnContent)
    # between cells
    delimiter: str = DEFAULT_DELIMITER
    year_in_header: bool = False
    # if true, each week is printed as a column
    vertical: bool = False

    @staticmethod
    def year_format(year: int) -> str:
        """Years are zero padded to at least 4 digits."""
        s = str(year)
        if ansi_width(s) < 4:
            return Aligner.ZERO.right(s, 4)
        return s

    def format_header(self) -> str:
        date = self.content.grid.date
        title = date.month_name()
        if self.year_in_header:
            title = f"{title} {self.year_format(date.year)}"
        return Aligner.SPACE.center(title, self.width())

    def join_cells(self, cells: Iterable[str]) -> str:
        return self.delimiter.join(cells)

    def width(self) -> int:
        delimiter_width = ansi_width(self.delimiter)
        rows, cols = self.content.row_cols()
        if self.vertical:
            # transposed cells are all re-padded to the day cell width
            return rows * self.content.grid.day_cell_width + (rows - 1) * delimiter_width
        return self.content.row_str_width() + (cols - 1) * delimiter_width

    def format(self, highlight_section: Highlight | None = None, color: bool = True) -> list[str]:
        """The header line followed by one line per content row."""
        content = self.content.format(highlight_section, color)
        rows, cols = self.content.row_cols()

        lines = [self.format_header()]
        if self.vertical:
            for j in range(cols):
                # weekday names and week numbers are narrower than day cells
                cells = (self.content.grid.format_in_day_cell(content[i][j]) for i in range(rows))
                lines.append(self.join_cells(cells))
        else:
            lines.extend(self.join_cells(row) for row in content)
        return lines


@dataclass
class Row:
    """Months side by side starting at the column's date."""

    column: Column = field(default_factory=Column)
    # months printed after the first one
    more_columns: int = 0
    # between columns
    delimiter: str = DEFAULT_DELIMITER * 3

    def join_columns(self, parts: Iterable[str]) -> str:
        return self.delimiter.join(parts)

    def width(self) -> int:
        column_width = self.column.width()
        delimiter_width = ansi_width(self.delimiter)
        return column_width * (self.more_columns + 1) + delimiter_width * self.more_columns

    def columns_in_width(self, maximum_width: int) -> int:
        """How many columns fit in ``maximum_width``, possibly 0."""
        column_width = self.column.width()
        if maximum_width < column_width:
            return 0
        # every column after the first brings a delimiter
        return 1 + (maximum_width - column_width) // (column_width + ansi_width(self.delimiter))

    def column_at(self, date: Date) -> Column:
        """A copy of the column showing ``date``'s month."""
        content = self.column.content
        grid = replace(content.grid, date=date)
        return replace(self.column, content=replace(content, grid=grid))

    def render(
        self,
        start: Date,
        highlight_section: Highlight | None = None,
        color: bool = True,
    ) -> tuple[list[str], Date]:
        """Render ``more_columns + 1`` months from ``start``.

        Returns the lines and the first month after the last rendered one.
        Neither ``start`` nor this row is modified.
        """
        date = start.copy()
        columns = []
        for _ in range(self.more_columns + 1):
            columns.append(self.column_at(date).format(highlight_section, color))
            date = date.copy()
            date.set_saturating_months_offset(1)
        lines = [self.join_columns(parts) for parts in zip(*columns)]
        return lines, date

    def format_mut(
        self, highlight_section: Highlight | None = None, color: bool = True
    ) -> list[str]:
        """Render like :meth:`render` and move this row past the printed months."""
        lines, next_date = self.render(self.column.content.grid.date, highlight_section, color)
        self.column.content.grid.date = next_date
        return lines


@dataclass
class Layout:
    """A whole calendar: rows of months and the lanes they share."""

    base_row: Row = field(default_factory=Row)
    # start a new row after this many months (0 and 1 behave the same)
    next_row_after_column: int = 1
    # one weekday lane for everything; None follows the vertical setting
    common_weekday: bool | None = None
    highlight: Highlight | None = None
    color: bool = True
    # a centered year line above everything (full year calendars)
    year_title: bool = False

    def common_weekdays_is_enabled(self) -> bool:
        if self.common_weekday is None:
            return self.base_row.column.vertical
        return self.common_weekday

    def common_weekdays_cell_width(self) -> int:
        return self.base_row.column.content.grid.day_cell_width

    def common_weekdays_delimiter(self) -> str:
        return self.base_row.column.delimiter

    def rows_left_offset(self) -> int:
        """How far rows are pushed right by a shared weekday column."""
        if self.base_row.column.vertical and self.common_weekdays_is_enabled():
            return self.common_weekdays_cell_width() + ansi_width(self.common_weekdays_delimiter())
        return 0

    def year_format(self, year: int) -> str:
        return Column.year_format(year)

    def months_requested(self) -> int:
        return self.base_row.more_columns + 1

    def columns_per_row(self) -> int:
        return min(self.months_requested(), max(self.next_row_after_column, 1))

    def _prepared(self) -> "Layout":
        """A private copy with per-column weekday lanes folded into the shared one."""
        layout = copy.deepcopy(self)
        if layout.common_weekdays_is_enabled():
            layout.base_row.column.content.weekdays = False
        return layout

    def columns_in_width(self, width: int) -> int:
        """How many columns a row fits in ``width`` characters, possibly 0."""
        layout = self._prepared()
        available = width - layout.rows_left_offset()
        if available < 0:
            return 0
        return layout.base_row.columns_in_width(available)

    def lines(self) -> Iterator[str]:
        """Yield every line of the calendar. The layout itself is not modified."""
        layout = self._prepared()
        row = layout.base_row
        column = row.column
        content = column.content
        months_requested = layout.months_requested()
        per_row = layout.columns_per_row()

        # the month span crosses a year boundary
        last = content.grid.date.copy()
        last.set_saturating_months_offset(months_requested - 1)
        if last.year != content.grid.date.year:
            column.year_in_header = True

        if layout.year_title:
            title_width = layout.rows_left_offset() + replace(row, more_columns=per_row - 1).width()
            yield Aligner.SPACE.center(layout.year_format(content.grid.date.year), title_width)

        prefixes: list[str] | None = None
        if layout.common_weekdays_is_enabled():
            cells = content.format_weekdays_force()
            if column.vertical:
                # one prefix per column line, the header line gets a blank one
                prefixes = [
                    content.grid.format_in_day_cell(s) + column.delimiter
                    for s in [""] + cells
                ]
            else:
                yield row.join_columns([column.join_cells(cells)] * per_row)

        printed = 0
        while printed < months_requested:
            row.more_columns = min(months_requested - printed, per_row) - 1
            printed += row.more_columns + 1
            lines = row.format_mut(layout.highlight, layout.color)
            if prefixes is None:
                yield from lines
            else:
                yield from (prefix + line for prefix, line in zip(prefixes, lines))

    def print(self, file: TextIO | None = None) -> None:
        """Write every line to ``file`` (stdout by default)."""
        with timed_block(
            _log,
            "layout_rendered",
            months=self.months_requested(),
            columns=self.columns_per_row(),
            vertical=self.base_row.column.vertical,
        ):
            for line in self.lines():
                print(line, file=file)
