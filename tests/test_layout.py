"""Tests for calendar layout."""

import io

import pytest

from jcal import (
    Column,
    ColumnContent,
    Date,
    Grid,
    Highlight,
    Layout,
    Row,
    Weekday,
    WeekNumConfig,
    format_weeknums,
)
from jcal.text import ansi_width, highlight

NOV_2025 = (2025, 11, 1)


def grid(*ymd, **kwargs) -> Grid:
    return Grid(date=Date.gregorian(*ymd), **kwargs)


def column(*ymd, vertical=False, year_in_header=False, **content_kwargs) -> Column:
    grid_kwargs = {
        key: content_kwargs.pop(key)
        for key in ("ordinal_mode", "base_weekday")
        if key in content_kwargs
    }
    content = ColumnContent(grid=grid(*ymd, **grid_kwargs), **content_kwargs)
    return Column(content=content, vertical=vertical, year_in_header=year_in_header)


class TestGrid:
    """Test Grid cell placement and formatting."""

    def test_sunday_based(self):
        cells = grid(*NOV_2025).new_grid()

        assert len(cells) == 6
        assert cells[0] == [0, 0, 0, 0, 0, 0, 1]
        assert cells[1] == [2, 3, 4, 5, 6, 7, 8]
        assert cells[5] == [30, 0, 0, 0, 0, 0, 0]

    def test_saturday_based(self):
        cells = grid(*NOV_2025, base_weekday=Weekday.SATURDAY).new_grid()

        assert cells[0] == [1, 2, 3, 4, 5, 6, 7]
        assert cells[4] == [29, 30, 0, 0, 0, 0, 0]
        assert cells[5] == [0] * 7

    def test_ordinal_mode(self):
        g = grid(*NOV_2025, ordinal_mode=True)
        cells = g.new_grid()

        assert g.day_cell_width == 3
        assert cells[0][6] == 305
        assert cells[5][0] == 334

    @pytest.mark.parametrize("kind, year", [("gregorian", 2025), ("jalali", 1403)])
    @pytest.mark.parametrize("base", list(Weekday))
    def test_every_month_places_days_on_their_weekday(self, kind, year, base):
        """Each day appears once, in order, under its own weekday."""
        make = Date.gregorian if kind == "gregorian" else Date.jalali
        for month in range(1, 13):
            date = make(year, month, 1)
            cells = Grid(date=date, base_weekday=base).new_grid()

            flat = [value for week in cells for value in week]
            lead = flat.index(1)
            end = date.month_end_day
            assert lead <= 6
            assert flat == [0] * lead + list(range(1, end + 1)) + [0] * (42 - lead - end)

            for week in cells:
                for offset, value in enumerate(week):
                    if value:
                        day = date.copy()
                        day.set_saturating_day(value)
                        assert day.weekday == base.forward(offset)

    def test_format_pads_cells(self):
        rows = grid(*NOV_2025).format(color=False)

        assert rows[0] == ["  "] * 6 + [" 1"]
        assert rows[2][0] == " 9"

    def test_format_highlights_day(self):
        rows = grid(*NOV_2025).format(Date.gregorian(2025, 11, 15))
        assert rows[2][6] == highlight("15")

    def test_highlight_without_color(self):
        rows = grid(*NOV_2025).format(Date.gregorian(2025, 11, 15), color=False)
        assert rows[2][6] == "15"

    def test_highlight_across_calendars(self):
        """A Jalali day highlights the same day in a Gregorian grid."""
        rows = grid(*NOV_2025).format(Date.jalali(1404, 8, 24))
        assert rows[2][6] == highlight("15")

    def test_highlight_in_ordinal_mode(self):
        rows = grid(*NOV_2025, ordinal_mode=True).format(Date.gregorian(2025, 11, 1))
        assert rows[0][6] == highlight("305")

    def test_highlight_outside_month(self):
        rows = grid(*NOV_2025).format(Date.gregorian(2025, 12, 15))
        assert all("\x1b" not in cell for row in rows for cell in row)


class TestHighlight:
    """Test Highlight values."""

    def test_hashable(self):
        """Day and week highlights can be hashed and compared."""
        day = Highlight.for_day(Date.gregorian(2025, 1, 1))

        assert hash(day) == hash(Highlight.for_day(Date.jalali(1403, 10, 12)))
        assert hash(Highlight.for_week(3)) == hash(Highlight.for_week(3))

    def test_for_day_copies(self):
        date = Date.gregorian(2025, 1, 1)
        section = Highlight.for_day(date)
        date.set_saturating_day(9)

        assert section.day == Date.gregorian(2025, 1, 1)


class TestFormatWeeknums:
    """Test week number lanes."""

    def test_based(self):
        """Week 0 is labeled with the previous year's last week."""
        cells = format_weeknums(Date.gregorian(2021, 1, 1), Weekday.SUNDAY, WeekNumConfig.BASED)
        assert cells == ["52", " 1", " 2", " 3", " 4", " 5"]

    def test_iso(self):
        cells = format_weeknums(Date.gregorian(2021, 1, 1), Weekday.SUNDAY, WeekNumConfig.ISO)
        assert cells == ["53", " 1", " 2", " 3", " 4", " 5"]

    def test_mid_year(self):
        cells = format_weeknums(Date.gregorian(2025, 11, 20), Weekday.SUNDAY, WeekNumConfig.BASED)
        assert cells == ["43", "44", "45", "46", "47", "48"]

    def test_highlight_week(self):
        cells = format_weeknums(
            Date.gregorian(2021, 1, 1), Weekday.SUNDAY, WeekNumConfig.BASED, highlight_week=3
        )
        assert cells[3] == highlight(" 3")
        assert cells[2] == " 2"

        plain = format_weeknums(
            Date.gregorian(2021, 1, 1), Weekday.SUNDAY, WeekNumConfig.BASED, 3, color=False
        )
        assert plain[3] == " 3"


class TestColumnContent:
    """Test ColumnContent lanes."""

    def test_grid_only(self):
        content = ColumnContent(grid=grid(*NOV_2025), weekdays=False)
        assert content.row_cols() == (6, 7)
        assert content.row_str_width() == 14
        assert content.format(color=False) == grid(*NOV_2025).format(color=False)

    def test_ordinal_with_weeknums(self):
        content = ColumnContent(
            grid=grid(*NOV_2025, ordinal_mode=True), weeknums=WeekNumConfig.BASED
        )
        rows = ["|".join(row) for row in content.format(color=False)]

        assert content.row_cols() == (7, 8)
        assert content.row_str_width() == 23
        assert rows[0] == "  |Sun|Mon|Tue|Wed|Thu|Fri|Sat"
        assert rows[1] == "43|   |   |   |   |   |   |305"
        assert rows[6] == "48|334|   |   |   |   |   |   "

    def test_weeknums_after_grid(self):
        content = ColumnContent(
            grid=grid(*NOV_2025), weeknums=WeekNumConfig.BASED, weeknums_before_grid=False
        )
        rows = content.format(color=False)

        assert rows[0][-1] == ColumnContent.WEEKNUM_EMPTY
        assert rows[1][-1] == "43"

    def test_weeknum_blank_for_empty_week(self):
        """Grid rows without days keep a blank week number."""
        content = ColumnContent(
            grid=grid(*NOV_2025, base_weekday=Weekday.SATURDAY), weeknums=WeekNumConfig.BASED
        )
        rows = content.format(color=False)

        assert rows[1][0] == "44"
        assert rows[6] == [ColumnContent.WEEKNUM_EMPTY] + ["  "] * 7

    def test_weekdays_after_grid(self):
        content = ColumnContent(grid=grid(*NOV_2025), weekdays_before_grid=False)
        rows = content.format(color=False)

        assert rows[-1] == ["Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"]

    def test_highlight_week_section(self):
        content = ColumnContent(grid=grid(2021, 1, 1), weeknums=WeekNumConfig.BASED)
        rows = content.format(Highlight.for_week(2))
        assert rows[3][0] == highlight(" 2")


class TestColumn:
    """Test Column formatting."""

    def test_default(self):
        col = column(*NOV_2025)
        lines = col.format(color=False)

        assert col.width() == 20
        assert lines[0] == "      November      "
        assert lines[1] == "Su Mo Tu We Th Fr Sa"
        assert lines[2] == " " * 18 + " 1"
        assert lines[3] == " 2  3  4  5  6  7  8"
        assert lines[-1] == "30" + " " * 18
        assert len(lines) == 8
        assert all(ansi_width(line) == 20 for line in lines)

    def test_year_in_header(self):
        lines = column(*NOV_2025, year_in_header=True).format(color=False)
        assert lines[0] == "   November 2025    "

    def test_year_format(self):
        assert Column.year_format(25) == "0025"
        assert Column.year_format(2025) == "2025"
        assert Column.year_format(12345) == "12345"

    def test_ordinal_with_weeknums(self):
        col = column(*NOV_2025, ordinal_mode=True, weeknums=WeekNumConfig.BASED)
        col.delimiter = "|"
        lines = col.format(color=False)

        assert col.width() == 30
        assert lines[1] == "  |Sun|Mon|Tue|Wed|Thu|Fri|Sat"
        assert lines[2] == "43|   |   |   |   |   |   |305"

    def test_vertical_ordinal(self):
        """Weeks become columns and weekdays become lines."""
        col = column(
            *NOV_2025,
            vertical=True,
            year_in_header=True,
            ordinal_mode=True,
            weeknums=WeekNumConfig.BASED,
        )
        col.delimiter = "|"
        lines = col.format(color=False)

        assert col.width() == 27
        assert lines[0] == "       November 2025       "
        assert lines[1] == "   | 43| 44| 45| 46| 47| 48"
        assert lines[2] == "Sun|   |306|313|320|327|334"
        assert lines[8] == "Sat|305|312|319|326|333|   "
        assert len(lines) == 9

    def test_vertical_lines_have_column_width(self):
        col = column(*NOV_2025, vertical=True, weeknums=WeekNumConfig.ISO)
        lines = col.format(color=False)

        assert all(ansi_width(line) == col.width() for line in lines)


class TestRow:
    """Test Row rendering."""

    def test_width(self):
        row = Row(column=column(*NOV_2025), more_columns=2)
        assert row.width() == 66

    @pytest.mark.parametrize("width, expected", [(19, 0), (20, 1), (42, 1), (43, 2), (66, 3)])
    def test_columns_in_width(self, width, expected):
        row = Row(column=column(*NOV_2025))
        assert row.columns_in_width(width) == expected

    def test_render_is_pure(self):
        """render leaves the row and the start date alone."""
        row = Row(column=column(*NOV_2025), more_columns=1)
        start = Date.gregorian(*NOV_2025)

        lines, next_date = row.render(start, color=False)

        assert lines[0] == "      November      " + "   " + "      December      "
        assert lines[2] == " " * 18 + " 1" + "   " + "    1  2  3  4  5  6"
        assert next_date == Date.gregorian(2026, 1, 1)
        assert start == Date.gregorian(*NOV_2025)
        assert row.column.content.grid.date == Date.gregorian(*NOV_2025)

    def test_format_mut_advances(self):
        row = Row(column=column(*NOV_2025), more_columns=1)

        first = row.format_mut(color=False)
        second = row.format_mut(color=False)

        assert "November" in first[0]
        assert "January" in second[0]
        assert row.column.content.grid.date == Date.gregorian(2026, 3, 1)

    def test_render_jalali(self):
        row = Row(column=Column(content=ColumnContent(grid=Grid(date=Date.jalali(1404, 12, 1)))))
        lines, next_date = row.render(row.column.content.grid.date, color=False)

        assert lines[0].strip() == "Esfand"
        assert next_date == Date.jalali(1405, 1, 1)


def layout(months=1, per_row=3, start=NOV_2025, **kwargs) -> Layout:
    row = Row(column=column(*start), more_columns=months - 1)
    return Layout(base_row=row, next_row_after_column=per_row, color=False, **kwargs)


class TestLayout:
    """Test Layout line generation."""

    def test_single_month(self):
        assert list(layout().lines()) == column(*NOV_2025).format(color=False)

    def test_rows_of_months(self):
        lines = list(layout(months=4, start=(2025, 1, 1)).lines())

        assert len(lines) == 16
        assert all(ansi_width(line) == 66 for line in lines[:8])
        assert lines[8] == "       April        "

    def test_year_boundary_adds_years(self):
        lines = list(layout(months=3, start=(2024, 12, 1)).lines())

        assert lines[0][0:20] == "   December 2024    "
        assert lines[0][23:43] == "    January 2025    "
        assert lines[0][46:66] == "   February 2025    "

    def test_no_years_within_one_year(self):
        lines = list(layout(months=2).lines())
        assert "2025" not in lines[0]

    def test_lines_do_not_modify_layout(self):
        """Rendering twice gives the same lines."""
        lay = layout(months=5, per_row=2, common_weekday=True)

        first = list(lay.lines())
        second = list(lay.lines())

        assert first == second
        assert lay.base_row.more_columns == 4
        assert lay.base_row.column.content.weekdays is True
        assert lay.base_row.column.year_in_header is False
        assert lay.base_row.column.content.grid.date == Date.gregorian(*NOV_2025)

    def test_common_weekdays_horizontal(self):
        lines = list(layout(months=2, common_weekday=True).lines())

        assert lines[0] == "Su Mo Tu We Th Fr Sa   Su Mo Tu We Th Fr Sa"
        assert lines[1] == "      November      " + "   " + "      December      "
        assert lines[2] == " " * 18 + " 1" + "   " + "    1  2  3  4  5  6"
        assert len(lines) == 8

    def test_common_weekdays_vertical(self):
        row = Row(column=column(*NOV_2025, vertical=True))
        lay = Layout(base_row=row, color=False)
        lines = list(lay.lines())

        assert lay.common_weekdays_is_enabled()
        assert lay.rows_left_offset() == 3
        assert lines[0] == "   " + "    November     "
        assert lines[1] == "Su " + "    2  9 16 23 30"
        assert lines[7] == "Sa " + " 1  8 15 22 29   "
        assert len(lines) == 8

    def test_vertical_without_common_weekdays(self):
        row = Row(column=column(*NOV_2025, vertical=True))
        lay = Layout(base_row=row, common_weekday=False, color=False)
        lines = list(lay.lines())

        assert lay.rows_left_offset() == 0
        assert lines[1] == "Su     2  9 16 23 30"

    def test_columns_in_width(self):
        assert layout().columns_in_width(66) == 3
        assert layout().columns_in_width(10) == 0

        vertical = Layout(base_row=Row(column=column(*NOV_2025, vertical=True)))
        # 3 characters go to the shared weekday lane
        assert vertical.columns_in_width(19) == 0
        assert vertical.columns_in_width(20) == 1

    def test_columns_per_row(self):
        assert layout(months=2, per_row=3).columns_per_row() == 2
        assert layout(months=5, per_row=0).columns_per_row() == 1

    def test_year_title(self):
        lines = list(layout(months=12, start=(2025, 1, 1), year_title=True).lines())

        assert lines[0] == " " * 31 + "2025" + " " * 31
        assert "January" in lines[1]
        assert "2025" not in lines[1]
        assert len(lines) == 1 + 4 * 8

    def test_highlight(self):
        lay = layout(highlight=Highlight.for_day(Date.gregorian(2025, 11, 15)))
        lay.color = True
        assert any(highlight("15") in line for line in lay.lines())

        lay.color = False
        assert not any("\x1b" in line for line in lay.lines())

    def test_print(self):
        lay = layout(months=2)
        out = io.StringIO()

        lay.print(file=out)

        assert out.getvalue() == "\n".join(lay.lines()) + "\n"
