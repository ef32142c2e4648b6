import datetime
import tkinter as tk
from tkinter import ttk

from tkcalendar import Calendar


def first_weekday(locale) -> str:
    """tkcalendar ``firstweekday`` for a babel *locale*."""
    return "sunday" if locale.first_week_day == 6 else "monday"


def combine(day: datetime.date, hour=0, minute=0) -> datetime.datetime:
    return datetime.datetime.combine(day, datetime.time(int(hour), int(minute)))


class CalendarPicker(tk.Toplevel):
    """Popup with a calendar for picking the value of a CalendarTextField."""

    def __init__(self, skin, control):
        super().__init__(skin)
        self.control = control
        self.transient(skin.winfo_toplevel())
        self.title("")
        self.resizable(False, False)

        current = control.value or datetime.datetime.now()
        self.calendar = Calendar(
            self,
            selectmode="day",
            locale=str(control.locale),
            firstweekday=first_weekday(control.locale),
            year=current.year,
            month=current.month,
            day=current.day,
            showweeknumbers=False,
        )
        self.calendar.pack(fill="both", expand=True)

        self._hour = tk.StringVar(self, f"{current.hour:02d}")
        self._minute = tk.StringVar(self, f"{current.minute:02d}")
        if control.show_time:
            row = ttk.Frame(self)
            row.pack(fill="x", padx=4, pady=4)
            ttk.Spinbox(row, from_=0, to=23, width=3, format="%02.0f", wrap=True,
                        textvariable=self._hour).pack(side="left")
            ttk.Label(row, text=":").pack(side="left")
            ttk.Spinbox(row, from_=0, to=59, width=3, format="%02.0f", wrap=True,
                        textvariable=self._minute).pack(side="left")
            ttk.Button(row, text="OK", command=self.apply).pack(side="right")
        else:
            self.calendar.bind("<<CalendarSelected>>", lambda _e: self.apply())

        self.bind("<Escape>", lambda _e: self.destroy())

        # place the popup right under the field
        self.update_idletasks()
        x = skin.winfo_rootx()
        y = skin.winfo_rooty() + skin.winfo_height()
        self.geometry(f"+{x}+{y}")
        self.focus_set()

    def apply(self):
        day = self.calendar.selection_get()
        if day is None:
            self.destroy()
            return
        if self.control.show_time:
            try:
                value = combine(day, self._hour.get(), self._minute.get())
            except ValueError:
                # out of range spinbox text keeps the previous time
                previous = self.control.value or datetime.datetime.min
                value = combine(day, previous.hour, previous.minute)
        else:
            value = combine(day)
        self.control.value = value
        self.destroy()
        self.master.event_generate("<<DateEntrySelected>>")
