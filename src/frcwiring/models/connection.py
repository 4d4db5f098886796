"""Connection model for wires between device ports."""

from dataclasses import dataclass, field

from frcwiring.models.geometry import Point, RouteMode


@dataclass(frozen=True)
class Endpoint:
    """Port a wire terminates at."""

    device_id: str
    port: str

    def to_dict(self) -> dict:
        """Serialize endpoint to dictionary."""
        return {"deviceId": self.device_id, "port": self.port}

    @classmethod
    def from_dict(cls, data: dict) -> "Endpoint":
        """Deserialize endpoint from dictionary."""
        return cls(device_id=data["deviceId"], port=data["port"])


@dataclass
class Connection:
    """A wire connecting two device ports.

    ``route`` holds only the interior bend points. The two terminal points are
    always derived from the live port positions. An empty route means the
    displayed route is derived on demand (implicit); a non-empty route is owned
    by the caller (explicit).
    """

    id: str
    from_endpoint: Endpoint
    to_endpoint: Endpoint
    net_id: str = ""
    route: list[Point] = field(default_factory=list)
    route_mode: RouteMode = RouteMode.H

    @property
    def is_explicit(self) -> bool:
        """Check if the connection has a stored route."""
        return len(self.route) > 0

    def connects(self, a: Endpoint, b: Endpoint) -> bool:
        """Check if this connection joins ``a`` and ``b`` in either direction."""
        return (self.from_endpoint == a and self.to_endpoint == b) or (
            self.from_endpoint == b and self.to_endpoint == a
        )

    def touches_device(self, device_id: str) -> bool:
        return self.from_endpoint.device_id == device_id or self.to_endpoint.device_id == device_id

    def to_dict(self) -> dict:
        """Serialize connection to dictionary."""
        data = {
            "id": self.id,
            "netId": self.net_id,
            "from": self.from_endpoint.to_dict(),
            "to": self.to_endpoint.to_dict(),
            "routeMode": self.route_mode.value,
        }
        if self.route:
            data["route"] = [p.to_dict() for p in self.route]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Connection":
        """Deserialize connection from dictionary."""
        return cls(
            id=data["id"],
            net_id=data.get("netId", ""),
            from_endpoint=Endpoint.from_dict(data["from"]),
            to_endpoint=Endpoint.from_dict(data["to"]),
            route=[Point.from_dict(p) for p in data.get("route") or []],
            route_mode=RouteMode.parse(data.get("routeMode")),
        )
