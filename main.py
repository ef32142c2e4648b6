# main.py
import tkinter as tk
from tkinter import ttk

from logging_config import configure_logging, get_logger
from UI.calendar_text_field import CalendarTextField

logger = get_logger(__name__)


def build_demo(root):
    """Lay out a date field and a date-time field with a show-time toggle."""
    frame = ttk.Frame(root, padding=12)
    frame.pack(fill="both", expand=True)

    def report(error):
        status.set(str(error))

    date_field = CalendarTextField(prompt_text="Pick a date").with_parse_error_callback(report)
    timed_field = CalendarTextField(show_time=True).with_parse_error_callback(report)

    ttk.Label(frame, text="Date").grid(row=0, column=0, sticky="w", pady=2)
    date_field.create_skin(frame).grid(row=0, column=1, sticky="ew", pady=2)
    ttk.Label(frame, text="Date and time").grid(row=1, column=0, sticky="w", pady=2)
    timed_field.create_skin(frame).grid(row=1, column=1, sticky="ew", pady=2)

    show_time = tk.BooleanVar(root, value=timed_field.show_time)
    ttk.Checkbutton(
        frame,
        text="Show time",
        variable=show_time,
        command=lambda: setattr(timed_field, "show_time", show_time.get()),
    ).grid(row=2, column=1, sticky="w", pady=2)

    status = tk.StringVar(root)
    ttk.Label(frame, textvariable=status, foreground="#b91c1c").grid(row=3, column=0, columnspan=2, sticky="w")

    def log_change(change):
        logger.info("%s changed to %s", change["name"], change["new"])

    date_field.observe(log_change, names="value")
    timed_field.observe(log_change, names=["value", "show_time"])
    frame.columnconfigure(1, weight=1)
    return date_field, timed_field


if __name__ == "__main__":
    configure_logging()
    root = tk.Tk()
    root.title("CalendarTextField")
    build_demo(root)
    root.mainloop()
