"""Canvas configuration and persisted settings using QSettings."""

from dataclasses import asdict, dataclass, fields

from PySide6.QtCore import QSettings


@dataclass
class CanvasConfig:
    """Tunable constants of the canvas geometry and interaction."""

    grid_size: float = 20.0
    px_per_unit: float = 60.0  # pixels per physical inch of a footprint
    fallback_node_width: float = 170.0
    fallback_node_height: float = 72.0
    zoom_min: float = 0.3
    zoom_max: float = 2.5
    wheel_sensitivity: float = 0.0015
    default_bend_count: int = 2
    pan_click_threshold: float = 2.0  # screen px before a pan counts as a drag
    wire_hit_tolerance: float = 8.0  # screen px
    port_hit_radius: float = 10.0  # screen px
    bend_handle_radius: float = 6.0  # screen px
    wire_mode: bool = False  # interaction mode a new canvas starts in

    def __post_init__(self):
        if self.zoom_min <= 0 or self.zoom_max < self.zoom_min:
            raise ValueError(
                f"Invalid zoom bounds: min={self.zoom_min}, max={self.zoom_max}"
            )
        if self.default_bend_count < 0:
            raise ValueError("default_bend_count must not be negative")

    def to_dict(self) -> dict:
        """Serialize config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "CanvasConfig":
        """Deserialize config from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


class SettingsService:
    """Service for managing canvas settings."""

    def __init__(self, settings: QSettings | None = None):
        self._settings = settings if settings is not None else QSettings("FRCWiring", "FRCWiringCanvas")

    # Grid settings
    def get_grid_size(self) -> float:
        """Get grid size in world pixels."""
        return float(self._settings.value("grid_size", CanvasConfig.grid_size))

    def set_grid_size(self, size: float) -> None:
        """Set grid size."""
        self._settings.setValue("grid_size", size)

    # Zoom
    def get_zoom_bounds(self) -> tuple[float, float]:
        """Get (min, max) zoom levels."""
        return (
            float(self._settings.value("zoom/min", CanvasConfig.zoom_min)),
            float(self._settings.value("zoom/max", CanvasConfig.zoom_max)),
        )

    def set_zoom_bounds(self, zoom_min: float, zoom_max: float) -> None:
        """Set zoom bounds."""
        if zoom_min <= 0 or zoom_max < zoom_min:
            raise ValueError(f"Invalid zoom bounds: min={zoom_min}, max={zoom_max}")
        self._settings.setValue("zoom/min", zoom_min)
        self._settings.setValue("zoom/max", zoom_max)

    # Wires
    def get_default_bend_count(self) -> int:
        """Get the bend count used for derived routes."""
        return int(self._settings.value("wires/default_bend_count", CanvasConfig.default_bend_count))

    def set_default_bend_count(self, count: int) -> None:
        """Set the bend count used for derived routes."""
        self._settings.setValue("wires/default_bend_count", max(0, int(count)))

    def get_wire_mode(self) -> bool:
        """Get whether the canvas starts in wire mode."""
        return self._settings.value("wires/wire_mode", False, type=bool)

    def set_wire_mode(self, enabled: bool) -> None:
        """Set whether the canvas starts in wire mode."""
        self._settings.setValue("wires/wire_mode", enabled)

    # Full config
    def load_canvas_config(self) -> CanvasConfig:
        """Build a canvas config from stored settings and defaults."""
        zoom_min, zoom_max = self.get_zoom_bounds()
        return CanvasConfig(
            grid_size=self.get_grid_size(),
            zoom_min=zoom_min,
            zoom_max=zoom_max,
            default_bend_count=self.get_default_bend_count(),
            wire_mode=self.get_wire_mode(),
        )

    def save_canvas_config(self, config: CanvasConfig) -> None:
        """Persist the user-tunable parts of a canvas config."""
        self.set_grid_size(config.grid_size)
        self.set_zoom_bounds(config.zoom_min, config.zoom_max)
        self.set_default_bend_count(config.default_bend_count)
        self.set_wire_mode(config.wire_mode)
        self._settings.sync()
