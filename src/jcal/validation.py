"""Calendar settings validation."""

from typing import TYPE_CHECKING, get_args

from jcal.config import ColorMode, WeekNumbering

if TYPE_CHECKING:
    from jcal.settings import CalendarSettings

WEEK_MIN = 1
WEEK_MAX = 54


class ValidationError(Exception):
    """Raised when calendar settings cannot describe a calendar."""
    pass


def validate_settings(settings: "CalendarSettings") -> None:
    """Validate externally supplied settings before building a layout.

    Checks:
    1. At least one month is requested
    2. The base weekday is 0 (Sunday) to 6 (Saturday)
    3. A requested week is between 1 and 54
    4. A fixed column count is at least 1
    5. Week numbering and color modes are known names

    Widths are not checked: a width too small for one column still renders
    one column per row.

    Raises:
        ValidationError: If validation fails
    """
    if settings.months < 1:
        raise ValidationError(f"month count must be at least 1, got {settings.months}")
    weekday = settings.base_weekday
    if isinstance(weekday, bool) or not isinstance(weekday, int) or not 0 <= weekday <= 6:
        raise ValidationError(
            f"weekday must be between 0 (Sunday) and 6 (Saturday), got {settings.base_weekday}"
        )
    if settings.week is not None and not WEEK_MIN <= settings.week <= WEEK_MAX:
        raise ValidationError(f"week number must be between {WEEK_MIN} and {WEEK_MAX}")
    if settings.columns is not None and settings.columns < 1:
        raise ValidationError(f"column count must be at least 1, got {settings.columns}")
    if settings.week_numbering not in get_args(WeekNumbering):
        raise ValidationError(f"Unknown week numbering: {settings.week_numbering}")
    if settings.color is not None and settings.color not in get_args(ColorMode):
        raise ValidationError(f"Unknown color mode: {settings.color}")
