"""jcal - Gregorian and Jalali month calendars for the terminal."""

from jcal.calendar import (
    GREGORIAN_MONTHS,
    GREGORIAN_MONTHS_ABB,
    JALALI_MONTHS,
    JALALI_MONTHS_ABB,
    WEEKDAYS,
    WEEKDAYS_ABB,
    CommonDate,
    GregorianDate,
    JalaliDate,
    Weekday,
    month_abbr,
    month_name,
)
from jcal.config import (
    configure_jcal,
    get_default_color,
    get_default_columns,
    get_default_width,
    reset_jcal_config,
)
from jcal.date import Date
from jcal.layout import (
    Column,
    ColumnContent,
    Grid,
    Highlight,
    Layout,
    Row,
    WeekNumConfig,
    format_weeknums,
)
from jcal.logging import configure_logging, get_logger
from jcal.settings import CalendarSettings
from jcal.text import Aligner, ansi_width, highlight
from jcal.validation import ValidationError, validate_settings

__all__ = [
    # Dates
    "Date",
    "CommonDate",
    "GregorianDate",
    "JalaliDate",
    "Weekday",
    # Names
    "WEEKDAYS",
    "WEEKDAYS_ABB",
    "GREGORIAN_MONTHS",
    "GREGORIAN_MONTHS_ABB",
    "JALALI_MONTHS",
    "JALALI_MONTHS_ABB",
    "month_name",
    "month_abbr",
    # Layout
    "Grid",
    "ColumnContent",
    "Column",
    "Row",
    "Layout",
    "Highlight",
    "WeekNumConfig",
    "format_weeknums",
    # Settings
    "CalendarSettings",
    "ValidationError",
    "validate_settings",
    # Config
    "configure_jcal",
    "get_default_color",
    "get_default_columns",
    "get_default_width",
    "reset_jcal_config",
    # Logging
    "configure_logging",
    "get_logger",
    # Text
    "Aligner",
    "ansi_width",
    "highlight",
]
__version__ = "0.1.0"
