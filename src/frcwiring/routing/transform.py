"""Screen/world coordinate mapping under pan and zoom."""

from __future__ import annotations

import math

from frcwiring.models.geometry import Bounds, Point, ScreenPoint

MAX_WHEEL_EXPONENT = 700.0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class ViewTransform:
    """Pan/zoom state of the canvas.

    ``screen = world * zoom + pan``.
    """

    ZOOM_MIN = 0.3
    ZOOM_MAX = 2.5
    WHEEL_SENSITIVITY = 0.0015

    def __init__(
        self,
        zoom_min: float = ZOOM_MIN,
        zoom_max: float = ZOOM_MAX,
        wheel_sensitivity: float = WHEEL_SENSITIVITY,
    ):
        if zoom_min <= 0 or zoom_max < zoom_min:
            raise ValueError(f"Invalid zoom bounds: min={zoom_min}, max={zoom_max}")
        self._zoom_min = zoom_min
        self._zoom_max = zoom_max
        self._wheel_sensitivity = wheel_sensitivity
        self._pan_x = 0.0
        self._pan_y = 0.0
        self._zoom = clamp(1.0, zoom_min, zoom_max)

    @property
    def zoom(self) -> float:
        """Current zoom level (1.0 = 100%)."""
        return self._zoom

    @property
    def zoom_percent(self) -> float:
        return self._zoom * 100

    @property
    def pan(self) -> tuple[float, float]:
        """Screen offset of the world origin."""
        return (self._pan_x, self._pan_y)

    @property
    def zoom_bounds(self) -> tuple[float, float]:
        return (self._zoom_min, self._zoom_max)

    def screen_to_world(self, sx: float, sy: float) -> Point:
        """Map a viewport point to world space."""
        return Point((sx - self._pan_x) / self._zoom, (sy - self._pan_y) / self._zoom)

    def world_to_screen(self, x: float, y: float) -> ScreenPoint:
        """Map a world point to viewport space."""
        return ScreenPoint(x * self._zoom + self._pan_x, y * self._zoom + self._pan_y)

    def pan_to(self, pan_x: float, pan_y: float) -> None:
        """Set the pan offset."""
        self._pan_x = pan_x
        self._pan_y = pan_y

    def set_zoom(self, level: float) -> None:
        """Set zoom level with bounds checking, keeping the pan offset."""
        self._zoom = clamp(level, self._zoom_min, self._zoom_max)

    def apply_wheel(self, delta_y: float, sx: float, sy: float) -> None:
        """Zoom by a wheel delta, keeping the world point under the cursor fixed."""
        before = self.screen_to_world(sx, sy)
        # exp() overflows past ~709.
        exponent = min(-delta_y * self._wheel_sensitivity, MAX_WHEEL_EXPONENT)
        factor = math.exp(exponent)
        next_zoom = clamp(self._zoom * factor, self._zoom_min, self._zoom_max)
        applied = next_zoom / self._zoom

        self._pan_x = sx - before.x * (self._zoom * applied)
        self._pan_y = sy - before.y * (self._zoom * applied)
        self._zoom = next_zoom

    def fit_to_bounds(
        self,
        bounds: Bounds,
        viewport_width: float,
        viewport_height: float,
        margin: float = 50.0,
    ) -> None:
        """Center ``bounds`` in the viewport, zooming to fit when possible."""
        width = bounds.width + 2 * margin
        height = bounds.height + 2 * margin
        if width > 0 and height > 0:
            self._zoom = clamp(
                min(viewport_width / width, viewport_height / height),
                self._zoom_min,
                self._zoom_max,
            )
        center = bounds.center
        self._pan_x = viewport_width / 2 - center.x * self._zoom
        self._pan_y = viewport_height / 2 - center.y * self._zoom

    def reset(self) -> None:
        """Reset to 100% zoom with the world origin at the viewport origin."""
        self._pan_x = 0.0
        self._pan_y = 0.0
        self._zoom = clamp(1.0, self._zoom_min, self._zoom_max)

    def grid_screen_size(self, grid: float) -> float:
        """On-screen spacing of the background grid."""
        return grid * self._zoom
