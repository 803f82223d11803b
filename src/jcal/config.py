"""Module-level configuration for jcal defaults."""

import shutil
import threading
from dataclasses import dataclass
from typing import Literal

ColorMode = Literal["auto", "always", "never"]
WeekNumbering = Literal["off", "based", "iso"]

FALLBACK_WIDTH = 80


@dataclass
class JcalConfig:
    """Defaults used when settings leave a value unset."""

    default_width: int | None = None  # None = ask the terminal
    default_columns: int = 3
    default_color: ColorMode = "auto"


# Module-level singleton
_jcal_config: JcalConfig | None = None
_config_lock = threading.Lock()


def get_jcal_config() -> JcalConfig:
    """Get the global jcal configuration singleton."""
    global _jcal_config
    if _jcal_config is None:
        with _config_lock:
            if _jcal_config is None:
                _jcal_config = JcalConfig()
    return _jcal_config


def configure_jcal(
    default_width: int | None = None,
    default_columns: int | None = None,
    default_color: ColorMode | None = None,
) -> None:
    """Configure default jcal settings.

    Args:
        default_width: Character width to fit columns into. Without it the
            terminal is asked, falling back to 80 characters.
        default_columns: Most months placed side by side in one row.
        default_color: Whether highlights use ANSI styling ("auto" follows
            whether the output stream is a terminal).

    Example:
        from jcal import configure_jcal

        # Lay calendars out for a 120 character wide pane, never colored
        configure_jcal(default_width=120, default_color="never")
    """
    config = get_jcal_config()
    with _config_lock:
        if default_width is not None:
            config.default_width = default_width
        if default_columns is not None:
            config.default_columns = default_columns
        if default_color is not None:
            config.default_color = default_color


def get_default_width() -> int:
    """Get the character width to fit a layout into."""
    config = get_jcal_config()
    if config.default_width is not None:
        return config.default_width
    return shutil.get_terminal_size((FALLBACK_WIDTH, 24)).columns


def get_default_columns() -> int:
    return get_jcal_config().default_columns


def get_default_color() -> ColorMode:
    return get_jcal_config().default_color


def reset_jcal_config() -> None:
    """Reset configuration to defaults. Useful for testing."""
    global _jcal_config
    with _config_lock:
        _jcal_config = JcalConfig()
