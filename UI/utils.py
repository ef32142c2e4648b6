import os
import re
from functools import lru_cache

from PIL import Image, ImageTk

RESOURCE_FOLDER = os.path.join(os.path.dirname(__file__), "resources")

_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_URL = re.compile(r"url\(\s*[\"']?([^\"')]+?)[\"']?\s*\)")


def get_stylesheet_path(class_name: str) -> str:
    """Return the stylesheet shipped for the control class *class_name*."""
    return os.path.join(RESOURCE_FOLDER, f"{class_name}.css")


def get_style_property(stylesheet: str, rule: str, name: str) -> str | None:
    """Return the value of *name* inside the ``.rule { ... }`` block."""
    if not os.path.exists(stylesheet):
        return None
    with open(stylesheet, encoding="utf-8") as fh:
        text = _COMMENT.sub("", fh.read())
    for block in re.finditer(r"\." + re.escape(rule) + r"\s*\{([^}]*)\}", text):
        match = re.search(r"(?:^|[\s;])" + re.escape(name) + r"\s*:\s*([^;]+);", block.group(1))
        if match:
            return match.group(1).strip()
    return None


def get_icon_path(stylesheet: str) -> str | None:
    """Return the icon image named by the ``.icon`` rule of *stylesheet*.

    Relative URLs are resolved against the stylesheet folder. ``None`` is
    returned when the rule or the image file is missing.
    """
    value = get_style_property(stylesheet, "icon", "image")
    match = _URL.search(value or "")
    if not match:
        return None
    path = os.path.join(os.path.dirname(stylesheet), match.group(1).strip())
    return path if os.path.exists(path) else None


@lru_cache(maxsize=16)
def make_icon(path, max_w=16, max_h=16):
    if not path or not os.path.exists(path):
        return None
    img_raw = Image.open(path)
    w, h = img_raw.size
    ratio = min(max_w / w, max_h / h, 1.0)
    new_size = (max(1, int(w * ratio)), max(1, int(h * ratio)))
    img_resized = img_raw.resize(new_size, Image.Resampling.LANCZOS)
    return ImageTk.PhotoImage(img_resized)
