"""Application services for the wiring canvas."""

from frcwiring.services.settings_service import CanvasConfig, SettingsService

__all__ = ["CanvasConfig", "SettingsService"]
