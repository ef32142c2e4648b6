import datetime
import enum

from babel import Locale, UnknownLocaleError
from traitlets import (
    Bool,
    Callable,
    HasTraits,
    Instance,
    List,
    TraitType,
    Unicode,
    UseEnum,
    default,
    observe,
)

import date_formats
from date_formats import DATE_FORMAT, DATE_TIME_FORMAT, DateFormat
import UI.utils as ui_utils


class LocaleTrait(TraitType):
    """A ``babel.Locale``; identifiers like ``"de_DE"`` or ``"en-US"`` are parsed."""

    info_text = "a babel Locale or a locale identifier"

    def validate(self, obj, value):
        if isinstance(value, Locale):
            return value
        if isinstance(value, str):
            try:
                return Locale.parse(value.strip().replace("-", "_"))
            except (ValueError, UnknownLocaleError):
                pass
        self.error(obj, value)


class FormatMode(enum.Enum):
    """Whether ``date_format`` follows one of the shared defaults."""

    DATE_DEFAULT = "date"
    DATE_TIME_DEFAULT = "datetime"
    USER_OVERRIDDEN = "user"

    @classmethod
    def for_format(cls, fmt):
        if fmt is DATE_FORMAT:
            return cls.DATE_DEFAULT
        if fmt is DATE_TIME_FORMAT:
            return cls.DATE_TIME_DEFAULT
        return cls.USER_OVERRIDDEN


class CalendarTextField(HasTraits):
    """A text field showing a date, with an icon to pop up a calendar.

    The value is treated as immutable: a change always assigns a new
    ``datetime``. Text typed into the field is parsed with ``date_format``,
    then with each of ``date_formats``; it also accepts relative input such
    as ``-1`` (yesterday), ``+1w``, ``-1m``, ``+2y`` and ``#`` (today).

    While ``date_format`` is one of the shared defaults it follows
    ``show_time``, switching between the date and the date-time format. Once
    another format is assigned, ``show_time`` no longer touches it.

    ``date_formats`` is a plain list: parsing reads it on every attempt, but
    observers of ``date_formats`` are only notified when a new list is
    assigned, so replace the list rather than appending to it.

    To change the icon, point the ``.icon`` rule of the stylesheet returned
    by :meth:`user_agent_stylesheet` at another image.
    """

    value = Instance(datetime.datetime, allow_none=True, help="The selected date")
    date_format = Instance(DateFormat, help="Format used to render and parse the text")
    locale = LocaleTrait(help="Locale of the calendar popup (first day of week, labels)")
    prompt_text = Unicode(None, allow_none=True, help="Shown while there is no value")
    show_time = Bool(False, help="Whether the field renders and accepts a time")
    date_formats = List(Instance(DateFormat), help="Alternate formats tried when parsing")
    parse_error_callback = Callable(None, allow_none=True, help="Called with a DateParseError")

    format_mode = UseEnum(FormatMode, default_value=FormatMode.DATE_DEFAULT, read_only=True)
    style_class = List(Unicode())
    focus_traversable = Bool(True)

    def __init__(self, **kwargs):
        # an explicit format must be in place before show_time reacts
        date_format = kwargs.pop("date_format", None)
        super().__init__()
        self.style_class = self.style_class + [type(self).__name__]
        # focus goes to the entry owned by the skin
        self.focus_traversable = False
        if "locale" not in kwargs:
            # fixed now, later configuration changes do not affect this field
            self.locale = date_formats.default_locale()
        if date_format is not None:
            self.date_format = date_format
        for name, val in kwargs.items():
            if not self.has_trait(name):
                raise TypeError(f"{type(self).__name__} has no property {name!r}")
            setattr(self, name, val)

    def user_agent_stylesheet(self) -> str:
        """Return the path of the stylesheet the skin reads its look from."""
        return ui_utils.get_stylesheet_path(type(self).__name__)

    def create_skin(self, master, **kwargs):
        from UI.calendar_text_field_skin import CalendarTextFieldSkin

        return CalendarTextFieldSkin(master, self, **kwargs)

    @default("date_format")
    def _default_date_format(self):
        return DATE_FORMAT

    @observe("date_format")
    def _date_format_changed(self, change):
        self.set_trait("format_mode", FormatMode.for_format(change["new"]))

    @observe("show_time")
    def _show_time_changed(self, change):
        if change["new"] and self.format_mode is FormatMode.DATE_DEFAULT:
            self.date_format = DATE_TIME_FORMAT
        elif not change["new"] and self.format_mode is FormatMode.DATE_TIME_DEFAULT:
            self.date_format = DATE_FORMAT

    def with_value(self, value):
        self.value = value
        return self

    def with_date_format(self, value):
        self.date_format = value
        return self

    def with_locale(self, value):
        self.locale = value
        return self

    def with_prompt_text(self, value):
        self.prompt_text = value
        return self

    def with_show_time(self, value):
        self.show_time = value
        return self

    def with_date_formats(self, value):
        self.date_formats = list(value)
        return self

    def with_parse_error_callback(self, value):
        self.parse_error_callback = value
        return self
