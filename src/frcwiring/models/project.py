"""In-memory project store: devices, placements, nets and connections."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Sequence
from uuid import uuid4

from frcwiring.models.catalog import PortCategory
from frcwiring.models.connection import Connection, Endpoint
from frcwiring.models.device import Device, Placement
from frcwiring.models.geometry import Point, RouteMode

if TYPE_CHECKING:  # pragma: no cover
    from frcwiring.interaction.controller import InteractionController

logger = logging.getLogger(__name__)


NET_KIND_BY_CATEGORY = {
    PortCategory.ETHERNET: "ETH",
    PortCategory.USB: "USB",
    PortCategory.GAUGE_4: "POWER_12V",
    PortCategory.GAUGE_12: "POWER_12V",
}


def net_kind_for_category(category: PortCategory) -> str:
    """Map a port category to the kind of net its wires belong to."""
    # No generic signal kind exists, DIO is the closest bucket.
    return NET_KIND_BY_CATEGORY.get(category, "DIO")


def _uid(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex[:8]}"


@dataclass
class Net:
    """A logical group of connections sharing the same kind of signal."""

    id: str
    kind: str
    name: str = ""

    def to_dict(self) -> dict:
        return {"id": self.id, "kind": self.kind, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict) -> "Net":
        return cls(id=data["id"], kind=data["kind"], name=data.get("name", ""))


@dataclass
class Project:
    """A wiring project holding the canvas contents."""

    name: str = "Untitled Project"
    devices: dict[str, Device] = field(default_factory=dict)
    placements: dict[str, Placement] = field(default_factory=dict)
    nets: dict[str, Net] = field(default_factory=dict)
    connections: dict[str, Connection] = field(default_factory=dict)

    # Devices

    def add_device(
        self,
        device_type: str,
        x: float,
        y: float,
        device_id: str | None = None,
        name: str = "",
        scale: float | None = None,
    ) -> Device:
        """Add a device and its placement."""
        device_id = device_id or _uid("dev")
        if device_id in self.devices:
            raise ValueError(f"Device '{device_id}' already exists")
        device = Device(id=device_id, type=device_type, name=name or device_type)
        self.devices[device_id] = device
        self.placements[device_id] = Placement(device_id=device_id, x=x, y=y, scale=scale)
        return device

    def get_device(self, device_id: str) -> Device | None:
        """Get a device by ID."""
        return self.devices.get(device_id)

    def get_placement(self, device_id: str) -> Placement | None:
        """Get the placement of a device."""
        return self.placements.get(device_id)

    def iter_devices(self) -> Iterator[Device]:
        """Iterate over devices in placement order (bottom to top)."""
        yield from self.devices.values()

    def move_placement(self, device_id: str, x: float, y: float) -> None:
        """Move a device, keeping its scale."""
        if device_id not in self.devices:
            raise ValueError(f"Device '{device_id}' not found")
        current = self.placements.get(device_id)
        scale = current.scale if current else None
        self.placements[device_id] = Placement(device_id=device_id, x=x, y=y, scale=scale)

    def remove_device(self, device_id: str) -> Device | None:
        """Remove a device together with its placement and connections."""
        device = self.devices.pop(device_id, None)
        self.placements.pop(device_id, None)
        self.connections = {
            cid: c for cid, c in self.connections.items() if not c.touches_device(device_id)
        }
        return device

    # Connections

    def get_connection(self, connection_id: str) -> Connection | None:
        """Get a connection by ID."""
        return self.connections.get(connection_id)

    def iter_connections(self) -> Iterator[Connection]:
        """Iterate over all connections."""
        yield from self.connections.values()

    def add_wire(
        self,
        from_device_id: str,
        from_port: str,
        to_device_id: str,
        to_port: str,
        category: PortCategory | str,
    ) -> Connection | None:
        """Connect two ports, creating the net for their category if needed.

        Returns ``None`` when the same pair is already wired on that net.
        """
        category = PortCategory(category)
        kind = net_kind_for_category(category)
        net_id = f"net:{kind}:{category.value}"
        if net_id not in self.nets:
            self.nets[net_id] = Net(id=net_id, kind=kind, name=f"{kind} ({category.value})")

        a = Endpoint(from_device_id, from_port)
        b = Endpoint(to_device_id, to_port)
        for existing in self.connections.values():
            if existing.net_id == net_id and existing.connects(a, b):
                logger.debug("Ignoring duplicate wire %s -> %s", a, b)
                return None

        connection = Connection(id=_uid("conn"), from_endpoint=a, to_endpoint=b, net_id=net_id)
        self.connections[connection.id] = connection
        return connection

    def update_wire_route(self, connection_id: str, bends: Sequence[Point]) -> None:
        """Replace the stored bends of a connection."""
        connection = self.connections.get(connection_id)
        if connection is None:
            logger.debug("Route update for unknown connection %s", connection_id)
            return
        connection.route = [Point(p.x, p.y) for p in bends]

    def update_wire_meta(self, connection_id: str, patch: dict) -> None:
        """Apply metadata changes (currently ``routeMode``) to a connection."""
        connection = self.connections.get(connection_id)
        if connection is None:
            logger.debug("Meta update for unknown connection %s", connection_id)
            return
        if "routeMode" in patch:
            connection.route_mode = RouteMode.parse(patch["routeMode"])

    def remove_connection(self, connection_id: str) -> Connection | None:
        """Remove a connection."""
        return self.connections.pop(connection_id, None)

    def connect_controller(self, controller: "InteractionController") -> None:
        """Persist the edits requested by an interaction controller."""
        controller.wire_route_changed.connect(self.update_wire_route)
        controller.wire_meta_changed.connect(self.update_wire_meta)
        controller.placement_moved.connect(self.move_placement)
        controller.wire_create_requested.connect(self.add_wire)
        controller.device_drop_requested.connect(self._on_device_dropped)

    def _on_device_dropped(self, device_type: str, x: float, y: float) -> None:
        self.add_device(device_type, x, y)

    def clear(self) -> None:
        """Clear all project contents."""
        self.devices.clear()
        self.placements.clear()
        self.nets.clear()
        self.connections.clear()

    def to_dict(self) -> dict:
        """Serialize project to dictionary."""
        return {
            "name": self.name,
            "devices": [d.to_dict() for d in self.devices.values()],
            "placements": [p.to_dict() for p in self.placements.values()],
            "nets": [n.to_dict() for n in self.nets.values()],
            "connections": [c.to_dict() for c in self.connections.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        """Deserialize project from dictionary."""
        project = cls(name=data.get("name", "Untitled Project"))
        for device_data in data.get("devices", []):
            device = Device.from_dict(device_data)
            project.devices[device.id] = device
        for placement_data in data.get("placements", []):
            placement = Placement.from_dict(placement_data)
            if placement.device_id not in project.devices:
                raise ValueError(f"Placement for unknown device '{placement.device_id}'")
            project.placements[placement.device_id] = placement
        for net_data in data.get("nets", []):
            net = Net.from_dict(net_data)
            project.nets[net.id] = net
        for conn_data in data.get("connections", []):
            connection = Connection.from_dict(conn_data)
            project.connections[connection.id] = connection
        return project
