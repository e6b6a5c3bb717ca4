import json

import pytest

from territory_editor.core.models.settings import (
    EditorSettings, ExportConfig, LiveUpdateConfig, RedisConfig, load_settings, save_settings,
    settings_from_dict
)
from territory_editor.core.models.view_transform import ViewTransform


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(str(tmp_path / "missing.json"))
    assert settings == EditorSettings()
    assert settings.close_threshold == 10.0
    assert settings.live_update.transports == ["websocket", "polling"]


def test_empty_path_gives_defaults():
    assert load_settings("") == EditorSettings()


def test_nested_sections_loaded(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "grid_spacing": 25,
        "live_update": {"server_url": "http://game:3001", "initial_map_id": "map-9"},
        "export": {"url": "http://api/territories"},
        "redis": {"enabled": True, "port": 6380},
    }), encoding="utf-8")

    settings = load_settings(str(path))

    assert settings.grid_spacing == 25
    assert settings.live_update.server_url == "http://game:3001"
    assert settings.live_update.initial_map_id == "map-9"
    assert settings.live_update.socketio_path == "socket.io"
    assert settings.export.url == "http://api/territories"
    assert settings.redis.enabled is True
    assert settings.redis.port == 6380


def test_unknown_keys_ignored():
    settings = settings_from_dict({"bogus": 1, "live_update": {"nope": True, "enabled": False}})
    assert settings.live_update == LiveUpdateConfig(enabled=False)


def test_unreadable_file_gives_defaults(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")
    assert load_settings(str(path)) == EditorSettings()


def test_non_object_file_gives_defaults(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_settings(str(path)) == EditorSettings()


def test_save_then_load(tmp_path):
    path = str(tmp_path / "settings.json")
    settings = EditorSettings(default_color="#EF4444")
    settings.redis.host = "redis.local"
    save_settings(path, settings)
    assert load_settings(path) == settings


def test_non_object_section_falls_back_to_defaults():
    settings = settings_from_dict({"live_update": ["oops"], "export": "http://api", "redis": 3})
    assert settings.live_update == LiveUpdateConfig()
    assert settings.export == ExportConfig()
    assert settings.redis == RedisConfig()


def test_non_object_section_in_file_does_not_crash(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"live_update": ["oops"], "grid_spacing": 20}), encoding="utf-8")
    settings = load_settings(str(path))
    assert settings.live_update == LiveUpdateConfig()
    assert settings.grid_spacing == 20


def test_wrong_value_types_use_defaults():
    settings = settings_from_dict({
        "close_threshold": "far",
        "fill_alpha": True,
        "default_color": 123,
        "live_update": {"enabled": "yes", "transports": "websocket", "initial_map_id": 9},
        "redis": {"port": "6379", "password": "secret"},
    })
    defaults = EditorSettings()
    assert settings.close_threshold == defaults.close_threshold
    assert settings.fill_alpha == defaults.fill_alpha
    assert settings.default_color == defaults.default_color
    assert settings.live_update == LiveUpdateConfig()
    assert settings.redis.port == 6379
    assert settings.redis.password == "secret"


@pytest.mark.parametrize("zoom", [
    {"min_zoom": 0},
    {"min_zoom": -1.0},
    {"min_zoom": 3.0, "max_zoom": 2.0},
])
def test_invalid_zoom_range_reset(zoom):
    settings = settings_from_dict(zoom)
    assert (settings.min_zoom, settings.max_zoom) == (0.1, 5.0)


def test_zoom_never_reaches_zero_with_loaded_settings():
    settings = settings_from_dict({"min_zoom": 0, "zoom_out_factor": 0})
    view = ViewTransform(min_zoom=settings.min_zoom, max_zoom=settings.max_zoom)
    for _ in range(100):
        view.zoom_by(settings.zoom_out_factor)
    assert view.zoom > 0


def test_valid_zoom_range_kept():
    settings = settings_from_dict({"min_zoom": 0.5, "max_zoom": 2})
    assert (settings.min_zoom, settings.max_zoom) == (0.5, 2)
