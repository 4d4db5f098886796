"""Tests for canvas config and persisted settings."""

from __future__ import annotations

import pytest
from PySide6.QtCore import QSettings

from frcwiring.services.settings_service import CanvasConfig, SettingsService


@pytest.fixture
def service(qapp, tmp_path) -> SettingsService:
    settings = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    return SettingsService(settings)


def test_canvas_config_defaults():
    """Defaults should match the canvas constants."""
    config = CanvasConfig()

    assert config.grid_size == 20
    assert config.px_per_unit == 60
    assert (config.fallback_node_width, config.fallback_node_height) == (170, 72)
    assert (config.zoom_min, config.zoom_max) == (0.3, 2.5)
    assert config.default_bend_count == 2
    assert config.bend_handle_radius == 6.0
    assert config.wire_mode is False


def test_canvas_config_rejects_invalid_values():
    """Zoom bounds must be ordered and positive, bend counts non-negative."""
    with pytest.raises(ValueError):
        CanvasConfig(zoom_min=3.0, zoom_max=1.0)
    with pytest.raises(ValueError):
        CanvasConfig(zoom_min=0.0)
    with pytest.raises(ValueError):
        CanvasConfig(default_bend_count=-1)


def test_canvas_config_from_dict_ignores_unknown_keys():
    config = CanvasConfig.from_dict({"grid_size": 10, "theme": "dark"})

    assert config.grid_size == 10
    assert config.to_dict()["zoom_max"] == 2.5


def test_settings_defaults(service):
    """An empty store should yield the config defaults."""
    assert service.get_grid_size() == 20
    assert service.get_zoom_bounds() == (0.3, 2.5)
    assert service.get_default_bend_count() == 2
    assert service.get_wire_mode() is False


def test_settings_round_trip(service):
    service.set_grid_size(25)
    service.set_zoom_bounds(0.5, 4.0)
    service.set_default_bend_count(3)
    service.set_wire_mode(True)

    assert service.get_grid_size() == 25
    assert service.get_zoom_bounds() == (0.5, 4.0)
    assert service.get_default_bend_count() == 3
    assert service.get_wire_mode() is True


def test_settings_clamp_and_validate(service):
    """Negative bend counts are clamped; invalid zoom bounds are rejected."""
    service.set_default_bend_count(-4)
    assert service.get_default_bend_count() == 0

    with pytest.raises(ValueError):
        service.set_zoom_bounds(2.0, 1.0)
    assert service.get_zoom_bounds() == (0.3, 2.5)


def test_canvas_config_persists(qapp, tmp_path):
    """A saved config should load back from a fresh settings object."""
    path = str(tmp_path / "canvas.ini")
    SettingsService(QSettings(path, QSettings.Format.IniFormat)).save_canvas_config(
        CanvasConfig(grid_size=40, zoom_min=0.5, zoom_max=3.0, default_bend_count=4, wire_mode=True)
    )

    config = SettingsService(QSettings(path, QSettings.Format.IniFormat)).load_canvas_config()

    assert config.grid_size == 40
    assert (config.zoom_min, config.zoom_max) == (0.5, 3.0)
    assert config.default_bend_count == 4
    assert config.wire_mode is True
    assert config.wheel_sensitivity == CanvasConfig().wheel_sensitivity
