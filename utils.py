# utils.py
import logging
import os

from babel import Locale, UnknownLocaleError, default_locale
from dotenv import load_dotenv

# Load variables from a `.env` file next to this module so the field picks up
# the same defaults regardless of the current working directory.
load_dotenv(os.path.join(os.path.dirname(__file__), ".env"))

FALLBACK_LOCALE = "en_US"
DEFAULT_LOG_FILE = "calendar_text_field.log"


def _parse_locale(value: str | None) -> str | None:
    """Return a normalized locale identifier from *value* or ``None``."""
    if not value:
        return None
    value = value.strip().replace("-", "_")
    if not value:
        return None
    try:
        return str(Locale.parse(value))
    except (ValueError, UnknownLocaleError):
        raise ValueError(f"Invalid CALENDAR_LOCALE value: {value!r}") from None


def _parse_log_level(value: str | None) -> int:
    """Return the numeric logging level named by *value* (``INFO`` if unset)."""
    if not value or not value.strip():
        return logging.INFO
    name = value.strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Invalid CALENDAR_LOG_LEVEL value: {value!r}")
    return level


def get_default_locale() -> str:
    """Locale used for new fields and the shared default formats."""
    configured = _parse_locale(os.environ.get("CALENDAR_LOCALE"))
    if configured:
        return configured
    system = default_locale("LC_TIME")
    if system:
        try:
            return str(Locale.parse(system))
        except (ValueError, UnknownLocaleError):
            pass
    return FALLBACK_LOCALE


def get_log_settings() -> dict:
    """Return the logging parameters configured through the environment."""
    return {
        "level": _parse_log_level(os.environ.get("CALENDAR_LOG_LEVEL")),
        "log_file": os.environ.get("CALENDAR_LOG_FILE") or DEFAULT_LOG_FILE,
    }
