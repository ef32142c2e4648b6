import datetime
import tkinter as tk
from tkinter import ttk

import date_formats
from date_formats import DateParseError
from logging_config import get_logger
import UI.utils as ui_utils

logger = get_logger(__name__)

PROMPT_STYLE = "Prompt.CalendarTextField.TEntry"
DEFAULT_PROMPT_COLOR = "#9ca3af"


def parse_text(control, text):
    """Parse *text* typed into the field and store the result on *control*.

    Empty text clears the value and relative input (``#``, ``-1``, ``+1w``...)
    is applied to the current value. Anything else is tried against
    ``date_format`` and then each of ``date_formats``. When nothing matches,
    ``parse_error_callback`` receives the :class:`DateParseError` (or it is
    logged) and the value stays as it was. Returns the resulting value.
    """
    text = (text or "").strip()
    if not text:
        control.value = None
        return None

    try:
        value = date_formats.parse_relative(text, control.value, with_time=control.show_time)
        if value is None:
            formats = [control.date_format, *control.date_formats]
            value = date_formats.parse_with_fallbacks(text, formats)
    except DateParseError as exc:
        if control.parse_error_callback is not None:
            control.parse_error_callback(exc)
        else:
            logger.warning("Could not parse date: %s", exc)
        return control.value

    if not control.show_time:
        value = datetime.datetime.combine(value.date(), datetime.time())
    control.value = value
    return value


class CalendarTextFieldSkin(ttk.Frame):
    """Entry plus calendar icon rendering a :class:`CalendarTextField`."""

    def __init__(self, master, control, width=16, **kwargs):
        kwargs.setdefault("takefocus", control.focus_traversable)
        super().__init__(master, **kwargs)
        self.control = control
        self._popup = None
        self._showing_prompt = False

        stylesheet = control.user_agent_stylesheet()
        style = ttk.Style(self)
        prompt_color = ui_utils.get_style_property(stylesheet, "prompt", "foreground")
        style.configure(PROMPT_STYLE, foreground=prompt_color or DEFAULT_PROMPT_COLOR)

        self._var = tk.StringVar(self)
        self.entry = ttk.Entry(self, textvariable=self._var, width=width)
        self.entry.pack(side="left", fill="x", expand=True)

        self._icon = ui_utils.make_icon(ui_utils.get_icon_path(stylesheet))
        if self._icon is not None:
            self.button = ttk.Button(self, image=self._icon, command=self._on_icon_click, takefocus=False)
        else:
            self.button = ttk.Button(self, text="📅", width=2, command=self._on_icon_click, takefocus=False)
        self.button.pack(side="left", padx=(2, 0))

        self.entry.bind("<FocusIn>", self._on_focus_in, add="+")
        self.entry.bind("<FocusOut>", self._on_focus_out, add="+")
        self.entry.bind("<Return>", self._on_return, add="+")
        self.bind("<Destroy>", self._on_destroy, add="+")

        control.observe(self._on_control_changed, names=["value", "date_format", "prompt_text"])
        self.refresh()

    # ------------------------------------------------------------------
    def refresh(self):
        """Render the control's value, or its prompt text when empty."""
        value = self.control.value
        prompt = self.control.prompt_text
        focused = self._has_focus()
        if value is None and prompt and not focused:
            self._showing_prompt = True
            self._var.set(prompt)
            self.entry.configure(style=PROMPT_STYLE)
            return
        self._showing_prompt = False
        self.entry.configure(style="TEntry")
        self._var.set("" if value is None else self.control.date_format.format(value))

    def commit(self):
        """Parse the entry text into the control."""
        if self._showing_prompt:
            return self.control.value
        value = parse_text(self.control, self._var.get())
        # re-render even if the value did not change, to normalize the text
        self.refresh()
        return value

    def get_text(self) -> str:
        return "" if self._showing_prompt else self._var.get()

    def _has_focus(self) -> bool:
        try:
            return self.focus_get() is self.entry
        except (KeyError, tk.TclError):
            return False

    # ------------------------------------------------------------------
    def _on_control_changed(self, change):
        self.refresh()

    def _on_focus_in(self, _event=None):
        if self._showing_prompt:
            self._showing_prompt = False
            self.entry.configure(style="TEntry")
            self._var.set("")

    def _on_focus_out(self, _event=None):
        self.commit()

    def _on_return(self, _event=None):
        self.commit()
        return "break"

    def _on_icon_click(self):
        from UI.date_picker import CalendarPicker

        self.commit()
        if self._popup is not None and self._popup.winfo_exists():
            self._popup.lift()
            return
        self._popup = CalendarPicker(self, self.control)

    def _on_destroy(self, event):
        if event.widget is not self:
            return
        self.control.unobserve(self._on_control_changed, names=["value", "date_format", "prompt_text"])
