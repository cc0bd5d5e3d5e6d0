"""JSON-based settings persistence for the mini date picker."""

import json
import os
from datetime import date

from value_binding import DatePickerProps

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".mini-datepicker-settings.json")

# Used when props leave prevent_focus_style_for_touch_and_click unset.
PREVENT_FOCUS_STYLE_FOR_TOUCH_AND_CLICK = True

_DEFAULTS = {
    "locale": None,
    "show_other_month_date": True,
    "prevent_focus_style_for_touch_and_click": PREVENT_FOCUS_STYLE_FOR_TOUCH_AND_CLICK,
    "read_only": False,
    "min_date": None,
    "max_date": None,
    "copy_to_clipboard": True,
}


def _valid_iso_date(value) -> bool:
    if not isinstance(value, str):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def load_settings() -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(_SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
        if not isinstance(stored, dict):
            return settings
        for key in ("show_other_month_date", "prevent_focus_style_for_touch_and_click",
                    "read_only", "copy_to_clipboard"):
            if key in stored and isinstance(stored[key], bool):
                settings[key] = stored[key]
        if "locale" in stored and (stored["locale"] is None or isinstance(stored["locale"], str)):
            settings["locale"] = stored["locale"]
        for key in ("min_date", "max_date"):
            if key in stored and (stored[key] is None or _valid_iso_date(stored[key])):
                settings[key] = stored[key]
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        pass
    return settings


def save_settings(settings: dict) -> None:
    """Persist settings to disk."""
    with open(_SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def props_from_settings(settings: dict, **overrides) -> DatePickerProps:
    """Build picker props from loaded settings plus explicit overrides."""
    min_date = settings.get("min_date")
    max_date = settings.get("max_date")
    kwargs = {
        "locale": settings.get("locale"),
        "show_other_month_date": settings.get("show_other_month_date", True),
        "prevent_focus_style_for_touch_and_click": settings.get(
            "prevent_focus_style_for_touch_and_click"),
        "read_only": settings.get("read_only", False),
        "min_date": date.fromisoformat(min_date) if min_date else None,
        "max_date": date.fromisoformat(max_date) if max_date else None,
    }
    kwargs.update(overrides)
    return DatePickerProps(**kwargs)
