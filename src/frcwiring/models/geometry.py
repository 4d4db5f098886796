"""Geometry primitives shared by the routing engine."""

from dataclasses import dataclass
from enum import Enum


class RouteMode(Enum):
    """Axis of a wire segment.

    Used both as the route mode of a connection (axis of the first segment
    leaving the source port) and as the axis of an individual segment.
    """

    H = "H"
    V = "V"

    @classmethod
    def parse(cls, value: "RouteMode | str | None") -> "RouteMode":
        """Parse a stored route mode; anything other than ``"V"`` means H."""
        if isinstance(value, RouteMode):
            return value
        return cls.V if value == "V" else cls.H

    def flipped(self) -> "RouteMode":
        """Return the other axis."""
        return RouteMode.V if self is RouteMode.H else RouteMode.H


# Segment axes use the same two values.
Axis = RouteMode


def segment_axis(mode: RouteMode, index: int) -> RouteMode:
    """Axis of segment ``index`` (0-based) of a route starting with ``mode``."""
    if index % 2 == 0:
        return mode
    return mode.flipped()


@dataclass(frozen=True)
class Point:
    """A point in world space."""

    x: float
    y: float

    def with_x(self, x: float) -> "Point":
        return Point(x, self.y)

    def with_y(self, y: float) -> "Point":
        return Point(self.x, y)

    def to_dict(self) -> dict:
        """Serialize point to dictionary."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "Point":
        """Deserialize point from dictionary."""
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True)
class ScreenPoint:
    """A point in viewport pixel coordinates."""

    sx: float
    sy: float


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned world-space rectangle."""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> Point:
        return Point((self.left + self.right) / 2, (self.top + self.bottom) / 2)

    def contains(self, point: Point) -> bool:
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom

    def united(self, other: "Bounds") -> "Bounds":
        return Bounds(
            min(self.left, other.left),
            min(self.top, other.top),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )
