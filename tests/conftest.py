"""Shared fixtures for the CalendarTextField tests."""

import os
import sys
import tkinter as tk

import pytest

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)


@pytest.fixture
def tk_root():
    """A hidden Tk root; the test is skipped when no display is available."""
    try:
        root = tk.Tk()
        root.withdraw()
    except tk.TclError:
        pytest.skip("Tkinter not available in the test environment")
    yield root
    root.destroy()
