# date_formats.py
import calendar
import datetime
import re
from dataclasses import dataclass

from babel import Locale
from babel.dates import get_date_format, get_datetime_format, get_time_format

import utils

# CLDR field letters mapped to strftime directives, keyed by (letter, width).
# A width of 0 matches any width not listed explicitly.
_CLDR_DIRECTIVES = {
    ("d", 0): "%d",
    ("M", 1): "%m",
    ("M", 2): "%m",
    ("M", 3): "%b",
    ("M", 0): "%B",
    ("L", 1): "%m",
    ("L", 2): "%m",
    ("L", 3): "%b",
    ("L", 0): "%B",
    ("y", 0): "%Y",
    ("u", 0): "%Y",
    ("E", 4): "%A",
    ("E", 0): "%a",
    ("c", 4): "%A",
    ("c", 0): "%a",
    ("H", 0): "%H",
    ("k", 0): "%H",
    ("h", 0): "%I",
    ("K", 0): "%I",
    ("m", 0): "%M",
    ("s", 0): "%S",
    ("a", 0): "%p",
    ("b", 0): "%p",
    ("B", 0): "%p",
}
_TIME_DIRECTIVES = ("%H", "%I", "%M", "%S", "%p", "%X", "%c")
_SPACES = ("\u00a0", "\u202f", "\u2009")
_RELATIVE_RE = re.compile(r"^([+-])(\d+)\s*([dwmy]?)$", re.IGNORECASE)


class DateParseError(ValueError):
    """Raised when text matches none of the formats it was parsed with."""

    def __init__(self, text, errors=()):
        self.text = text
        self.errors = list(errors)
        detail = "; ".join(str(e) for e in self.errors)
        message = f"Unparseable date: {text!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


def _normalize_spaces(value: str) -> str:
    for char in _SPACES:
        value = value.replace(char, " ")
    return value


def cldr_to_strftime(pattern: str) -> str:
    """Translate a CLDR date pattern such as ``M/d/yy`` to strftime.

    Fields without a strftime counterpart (era, time zone, week numbers) are
    dropped. Years always use four digits so the result parses unambiguously.
    """
    out = []
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "'":
            # '' is an escaped quote, 'text' is literal text
            i += 1
            if i < n and pattern[i] == "'":
                out.append("'")
                i += 1
                continue
            while i < n:
                if pattern[i] == "'":
                    if i + 1 < n and pattern[i + 1] == "'":
                        out.append("'")
                        i += 2
                        continue
                    i += 1
                    break
                out.append("%%" if pattern[i] == "%" else pattern[i])
                i += 1
            continue
        if ch.isalpha():
            j = i
            while j < n and pattern[j] == ch:
                j += 1
            width = j - i
            directive = _CLDR_DIRECTIVES.get((ch, width), _CLDR_DIRECTIVES.get((ch, 0)))
            if directive is None:
                # drop the field together with the separator before it
                while out and out[-1] in (" ", ","):
                    out.pop()
            else:
                out.append(directive)
            i = j
            continue
        out.append("%%" if ch == "%" else ch)
        i += 1
    return _normalize_spaces("".join(out)).strip(" ,")


@dataclass(frozen=True, eq=False)
class DateFormat:
    """Formatter/parser converting between ``datetime`` values and text."""

    pattern: str

    @classmethod
    def for_locale(cls, locale=None, style: str = "short", with_time: bool = False) -> "DateFormat":
        """Build the format a locale uses for *style* dates (and times)."""
        locale = Locale.parse(locale or default_locale())
        date_pattern = cldr_to_strftime(get_date_format(style, locale=locale).pattern)
        if not with_time:
            return cls(date_pattern)
        time_pattern = cldr_to_strftime(get_time_format(style, locale=locale).pattern)
        combined = cldr_to_strftime(get_datetime_format(style, locale=locale))
        return cls(combined.replace("{1}", date_pattern).replace("{0}", time_pattern))

    @property
    def has_time(self) -> bool:
        return any(d in self.pattern for d in _TIME_DIRECTIVES)

    def format(self, value) -> str:
        return value.strftime(self.pattern)

    def parse(self, text: str) -> datetime.datetime:
        try:
            return datetime.datetime.strptime(_normalize_spaces(text.strip()), self.pattern)
        except ValueError as exc:
            raise DateParseError(text, [exc]) from exc


def default_locale() -> str:
    """Return the configured default locale identifier."""
    return utils.get_default_locale()


def parse_with_fallbacks(text: str, formats) -> datetime.datetime:
    """Parse *text* with each of *formats* in order and return the first hit."""
    errors = []
    for fmt in formats:
        try:
            return fmt.parse(text)
        except DateParseError as exc:
            errors.extend(exc.errors)
    raise DateParseError(text, errors)


def _add_months(value: datetime.datetime, delta: int) -> datetime.datetime:
    month_index = value.month - 1 + delta
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def _today() -> datetime.datetime:
    return datetime.datetime.combine(datetime.date.today(), datetime.time())


def _now() -> datetime.datetime:
    return datetime.datetime.now().replace(second=0, microsecond=0)


def parse_relative(text: str, base: datetime.datetime | None = None,
                   with_time: bool = False) -> datetime.datetime | None:
    """Resolve relative input like ``#``, ``-1``, ``+2w`` or ``-1m``.

    ``#`` is today (the current minute when *with_time*); a signed number
    shifts *base* (today when ``None``) by days, or by weeks, months or years
    with a ``w``, ``m`` or ``y`` suffix. Returns ``None`` when *text* is not a
    relative expression and raises :class:`DateParseError` when the shift
    leaves the supported date range.
    """
    text = (text or "").strip()
    today = _now() if with_time else _today()
    if text == "#":
        return today
    match = _RELATIVE_RE.match(text)
    if not match:
        return None
    sign, amount, unit = match.groups()
    amount = int(amount) * (-1 if sign == "-" else 1)
    base = base or today
    unit = unit.lower()
    try:
        if unit == "w":
            return base + datetime.timedelta(weeks=amount)
        if unit == "m":
            return _add_months(base, amount)
        if unit == "y":
            return _add_months(base, amount * 12)
        return base + datetime.timedelta(days=amount)
    except (ValueError, OverflowError) as exc:
        raise DateParseError(text, [exc]) from exc


DATE_FORMAT = DateFormat.for_locale(with_time=False)
DATE_TIME_FORMAT = DateFormat.for_locale(with_time=True)
