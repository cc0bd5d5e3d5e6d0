import json
from datetime import date

import pytest

import settings


@pytest.fixture
def settings_path(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setattr(settings, "_SETTINGS_PATH", str(path))
    return path


def test_missing_file_gives_defaults(settings_path) -> None:
    loaded = settings.load_settings()
    assert loaded["locale"] is None
    assert loaded["show_other_month_date"] is True
    assert loaded["prevent_focus_style_for_touch_and_click"] is True


def test_corrupt_file_gives_defaults(settings_path) -> None:
    settings_path.write_text("{not json", encoding="utf-8")
    assert settings.load_settings() == settings._DEFAULTS


def test_wrong_types_are_ignored(settings_path) -> None:
    settings_path.write_text(json.dumps({
        "locale": 5,
        "read_only": "yes",
        "min_date": "2024-02-30",
        "max_date": "2024-12-31",
        "show_other_month_date": False,
    }), encoding="utf-8")
    loaded = settings.load_settings()
    assert loaded["locale"] is None
    assert loaded["read_only"] is False
    assert loaded["min_date"] is None
    assert loaded["max_date"] == "2024-12-31"
    assert loaded["show_other_month_date"] is False


def test_save_then_load(settings_path) -> None:
    data = settings.load_settings()
    data["locale"] = "nl"
    data["min_date"] = "2024-01-01"
    settings.save_settings(data)
    assert settings.load_settings() == data


def test_props_from_settings() -> None:
    data = dict(settings._DEFAULTS, locale="ar", min_date="2024-03-10", read_only=True)
    calls = []
    props = settings.props_from_settings(data, on_update=calls.append)
    assert props.locale == "ar"
    assert props.min_date == date(2024, 3, 10)
    assert props.max_date is None
    assert props.read_only is True
    assert props.on_update is calls.append
    assert props.has_value() is False
