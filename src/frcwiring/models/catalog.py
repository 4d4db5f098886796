"""Device catalog: footprints and port anchors per device type."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum


class PortCategory(Enum):
    """Physical kind of a port; wires only join ports of the same kind."""

    ETHERNET = "ethernet"
    GAUGE_4 = "4_gauge"
    GAUGE_12 = "12_gauge"
    GAUGE_18 = "18_gauge"
    USB = "usb"


@dataclass(frozen=True)
class PortAnchor:
    """A port position normalized to the device bounding box (0..1)."""

    port_id: str
    category: PortCategory
    offset_x: float
    offset_y: float

    def to_dict(self) -> dict:
        """Serialize anchor to the palette port shape."""
        return {
            "id": self.port_id,
            "type": self.category.value,
            "x": self.offset_x,
            "y": self.offset_y,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PortAnchor":
        """Deserialize anchor from the palette port shape."""
        return cls(
            port_id=data["id"],
            category=PortCategory(data["type"]),
            offset_x=_clamp01(float(data["x"])),
            offset_y=_clamp01(float(data["y"])),
        )


@dataclass(frozen=True)
class Footprint:
    """Physical size of a device, in physical units (inches)."""

    w: float
    h: float

    @property
    def is_valid(self) -> bool:
        return _positive(self.w) and _positive(self.h)


@dataclass
class CatalogItem:
    """One entry of the device palette."""

    id: str
    name: str
    ports: list[PortAnchor] = field(default_factory=list)
    footprint: Footprint | None = None
    category: str = ""

    def get_port(self, port_id: str) -> PortAnchor | None:
        """Get a port anchor by ID."""
        for port in self.ports:
            if port.port_id == port_id:
                return port
        return None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "ports": [p.to_dict() for p in self.ports],
        }
        if self.footprint is not None:
            data["physical_in"] = {"w": self.footprint.w, "h": self.footprint.h}
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CatalogItem":
        physical = data.get("physical_in") or {}
        footprint = None
        if "w" in physical and "h" in physical:
            footprint = Footprint(w=float(physical["w"]), h=float(physical["h"]))
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            ports=[PortAnchor.from_dict(p) for p in data.get("ports", [])],
            footprint=footprint,
            category=data.get("category", ""),
        )


class DeviceCatalog:
    """Lookup of catalog items keyed by device type."""

    def __init__(self, items: list[CatalogItem] | None = None):
        self._items: dict[str, CatalogItem] = {}
        for item in items or []:
            self.add(item)

    def add(self, item: CatalogItem) -> None:
        """Add an item to the catalog."""
        if item.id in self._items:
            raise ValueError(f"Duplicate catalog id: {item.id}")
        self._items[item.id] = item

    def get(self, device_type: str) -> CatalogItem | None:
        """Get the catalog item for a device type."""
        return self._items.get(device_type)

    def get_port_anchors(self, device_type: str) -> list[PortAnchor]:
        """Get all port anchors of a device type (empty if unknown)."""
        item = self._items.get(device_type)
        return list(item.ports) if item else []

    def get_footprint(self, device_type: str) -> Footprint | None:
        """Get the physical footprint of a device type, if it has a valid one."""
        item = self._items.get(device_type)
        if item is None or item.footprint is None or not item.footprint.is_valid:
            return None
        return item.footprint

    def __contains__(self, device_type: str) -> bool:
        return device_type in self._items

    def __iter__(self):
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    @classmethod
    def from_dict(cls, data: dict) -> "DeviceCatalog":
        """Build a catalog from the palette JSON shape (``{"components": [...]}``)."""
        return cls([CatalogItem.from_dict(c) for c in data.get("components", [])])

    def to_dict(self) -> dict:
        return {"components": [item.to_dict() for item in self._items.values()]}


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def _positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def _port(port_id: str, category: PortCategory, x: float, y: float) -> PortAnchor:
    return PortAnchor(port_id, category, x, y)


BUILTIN_CATALOG_ITEMS = [
    CatalogItem(
        id="roborio-2-0",
        name="roboRIO 2.0",
        category="Control",
        footprint=Footprint(5.75, 5.64),
        ports=[
            _port("eth", PortCategory.ETHERNET, 0.5, 0.0),
            _port("usb-a", PortCategory.USB, 0.25, 0.0),
            _port("power", PortCategory.GAUGE_18, 0.0, 0.5),
        ],
    ),
    CatalogItem(
        id="pdh-no-fuses",
        name="Power Distribution Hub",
        category="Power",
        footprint=Footprint(4.38, 8.88),
        ports=[
            _port("battery-in", PortCategory.GAUGE_4, 0.5, 1.0),
            _port("ch0", PortCategory.GAUGE_12, 0.0, 0.25),
            _port("ch1", PortCategory.GAUGE_12, 0.0, 0.5),
            _port("ch2", PortCategory.GAUGE_12, 1.0, 0.25),
            _port("ch3", PortCategory.GAUGE_12, 1.0, 0.5),
            _port("rio-power", PortCategory.GAUGE_18, 0.5, 0.0),
        ],
    ),
    CatalogItem(
        id="rev-pneumatic-hub",
        name="REV Pneumatic Hub",
        category="Pneumatics",
        footprint=Footprint(4.38, 1.88),
        ports=[
            _port("power", PortCategory.GAUGE_18, 0.0, 0.5),
        ],
    ),
    CatalogItem(
        id="vrm",
        name="Voltage Regulator Module",
        category="Power",
        footprint=Footprint(2.22, 2.03),
        ports=[
            _port("in", PortCategory.GAUGE_18, 0.0, 0.5),
            _port("out-12v", PortCategory.GAUGE_18, 1.0, 0.5),
        ],
    ),
    CatalogItem(
        id="radio",
        name="Robot Radio",
        category="Communication",
        ports=[
            _port("eth", PortCategory.ETHERNET, 0.5, 1.0),
            _port("power", PortCategory.GAUGE_18, 0.0, 0.5),
        ],
    ),
    CatalogItem(
        id="motor-controller",
        name="Motor Controller",
        category="Motion",
        ports=[
            _port("v-in", PortCategory.GAUGE_12, 0.0, 0.5),
            _port("can", PortCategory.GAUGE_18, 1.0, 0.5),
        ],
    ),
]


def builtin_catalog() -> DeviceCatalog:
    """Return a fresh catalog with the built-in FRC devices."""
    return DeviceCatalog(list(BUILTIN_CATALOG_ITEMS))
