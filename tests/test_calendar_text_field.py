import datetime
import os

import pytest
from babel import Locale
from traitlets import TraitError

from date_formats import DATE_FORMAT, DATE_TIME_FORMAT, DateFormat
from UI.calendar_text_field import CalendarTextField, FormatMode


def test_defaults():
    field = CalendarTextField()
    assert field.value is None
    assert field.date_format is DATE_FORMAT
    assert field.show_time is False
    assert field.prompt_text is None
    assert field.date_formats == []
    assert field.parse_error_callback is None
    assert isinstance(field.locale, Locale)
    assert field.format_mode is FormatMode.DATE_DEFAULT


def test_construction_sets_style_class_and_focus():
    field = CalendarTextField()
    assert field.style_class == ["CalendarTextField"]
    assert field.focus_traversable is False


def test_date_formats_are_not_shared_between_instances():
    a = CalendarTextField()
    b = CalendarTextField()
    a.date_formats.append(DateFormat("%d.%m.%Y"))
    assert b.date_formats == []


def test_locale_default_follows_configuration(monkeypatch):
    monkeypatch.setenv("CALENDAR_LOCALE", "de-DE")
    assert str(CalendarTextField().locale) == "de_DE"


def test_locale_accepts_identifiers():
    field = CalendarTextField(locale="nl_NL")
    assert field.locale == Locale("nl", "NL")
    field.locale = Locale("fr", "FR")
    assert str(field.locale) == "fr_FR"


def test_invalid_locale_rejected():
    field = CalendarTextField()
    with pytest.raises(TraitError):
        field.locale = "not a locale"
    with pytest.raises(TraitError):
        field.locale = 42


def test_show_time_swaps_shared_defaults():
    field = CalendarTextField()
    field.show_time = True
    assert field.date_format is DATE_TIME_FORMAT
    assert field.format_mode is FormatMode.DATE_TIME_DEFAULT
    field.show_time = False
    assert field.date_format is DATE_FORMAT
    assert field.format_mode is FormatMode.DATE_DEFAULT


def test_override_sticks():
    custom = DateFormat("%d.%m.%Y")
    field = CalendarTextField()
    field.show_time = True
    assert field.date_format is DATE_TIME_FORMAT
    field.date_format = custom
    field.show_time = False
    assert field.date_format is custom
    field.show_time = True
    assert field.date_format is custom
    assert field.format_mode is FormatMode.USER_OVERRIDDEN


def test_equal_pattern_still_counts_as_override():
    lookalike = DateFormat(DATE_FORMAT.pattern)
    field = CalendarTextField(date_format=lookalike)
    field.show_time = True
    assert field.date_format is lookalike


def test_assigning_default_again_resumes_tracking():
    field = CalendarTextField(date_format=DateFormat("%Y"))
    field.date_format = DATE_FORMAT
    field.show_time = True
    assert field.date_format is DATE_TIME_FORMAT


def test_date_time_default_with_show_time_off():
    field = CalendarTextField(date_format=DATE_TIME_FORMAT)
    field.show_time = True
    assert field.date_format is DATE_TIME_FORMAT
    field.show_time = False
    assert field.date_format is DATE_FORMAT


def test_constructor_keeps_explicit_format_over_show_time():
    custom = DateFormat("%Y-%m-%d %H:%M")
    field = CalendarTextField(show_time=True, date_format=custom)
    assert field.show_time is True
    assert field.date_format is custom


def test_constructor_show_time_selects_date_time_default():
    assert CalendarTextField(show_time=True).date_format is DATE_TIME_FORMAT


def test_constructor_rejects_unknown_property():
    with pytest.raises(TypeError):
        CalendarTextField(colour="red")


def test_value_round_trip():
    field = CalendarTextField()
    x = datetime.datetime(2024, 2, 29, 13, 30)
    field.value = x
    assert field.value is x
    y = datetime.datetime(2025, 1, 1)
    field.value = y
    assert field.value is y
    assert x == datetime.datetime(2024, 2, 29, 13, 30)


def test_value_rejects_plain_strings():
    field = CalendarTextField()
    with pytest.raises(TraitError):
        field.value = "2024-01-01"


def test_with_setters_chain_and_match_plain_setters():
    value = datetime.datetime(2024, 5, 6)
    fmt = DateFormat("%d/%m/%Y")
    alternates = [DateFormat("%Y-%m-%d")]

    def callback(error):
        pass

    chained = CalendarTextField()
    result = (
        chained.with_value(value)
        .with_date_format(fmt)
        .with_locale("de_DE")
        .with_prompt_text("When?")
        .with_show_time(True)
        .with_date_formats(alternates)
        .with_parse_error_callback(callback)
    )
    assert result is chained

    plain = CalendarTextField()
    plain.value = value
    plain.date_format = fmt
    plain.locale = "de_DE"
    plain.prompt_text = "When?"
    plain.show_time = True
    plain.date_formats = alternates
    plain.parse_error_callback = callback

    for name in ("value", "date_format", "locale", "prompt_text", "show_time",
                 "date_formats", "parse_error_callback", "format_mode"):
        assert getattr(chained, name) == getattr(plain, name), name


def test_observers_see_format_switch():
    field = CalendarTextField()
    seen = []
    field.observe(lambda change: seen.append(change["new"]), names="date_format")
    field.show_time = True
    field.show_time = True
    field.show_time = False
    assert seen == [DATE_TIME_FORMAT, DATE_FORMAT]


def test_user_agent_stylesheet():
    path = CalendarTextField().user_agent_stylesheet()
    assert os.path.basename(path) == "CalendarTextField.css"
    assert os.path.exists(path)


def test_locale_fixed_at_construction(monkeypatch):
    monkeypatch.setenv("CALENDAR_LOCALE", "de_DE")
    field = CalendarTextField()
    monkeypatch.setenv("CALENDAR_LOCALE", "fr_FR")
    assert str(field.locale) == "de_DE"
    assert str(CalendarTextField().locale) == "fr_FR"


def test_explicit_locale_skips_configuration(monkeypatch):
    monkeypatch.setenv("CALENDAR_LOCALE", "not a locale")
    assert str(CalendarTextField(locale="nl_NL").locale) == "nl_NL"


def test_reassigned_date_formats_notify_observers():
    field = CalendarTextField()
    seen = []
    field.observe(lambda change: seen.append(change["new"]), names="date_formats")
    alternate = DateFormat("%Y%m%d")
    field.date_formats = field.date_formats + [alternate]
    assert seen == [[alternate]]
