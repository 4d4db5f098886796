"""Device and placement models."""

import math
from dataclasses import dataclass


@dataclass
class Device:
    """A device instance on the canvas."""

    id: str
    type: str
    name: str = ""

    def to_dict(self) -> dict:
        """Serialize device to dictionary."""
        return {"id": self.id, "type": self.type, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict) -> "Device":
        """Deserialize device from dictionary."""
        return cls(id=data["id"], type=data["type"], name=data.get("name", ""))


@dataclass
class Placement:
    """Top-left world position of a device's bounding box."""

    device_id: str
    x: float
    y: float
    scale: float | None = None

    @property
    def effective_scale(self) -> float:
        """Scale factor, falling back to 1 for missing or invalid values."""
        s = self.scale
        if s is None or not math.isfinite(s) or s <= 0:
            return 1.0
        return s

    def to_dict(self) -> dict:
        """Serialize placement to dictionary."""
        data = {"deviceId": self.device_id, "x": self.x, "y": self.y}
        if self.scale is not None:
            data["scale"] = self.scale
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Placement":
        """Deserialize placement from dictionary."""
        scale = data.get("scale")
        return cls(
            device_id=data["deviceId"],
            x=float(data["x"]),
            y=float(data["y"]),
            scale=float(scale) if scale is not None else None,
        )
