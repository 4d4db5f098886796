"""Resolution of device ports to world-space anchor points."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from frcwiring.models.catalog import DeviceCatalog, PortCategory
from frcwiring.models.geometry import Bounds, Point
from frcwiring.models.project import Project
from frcwiring.services.settings_service import CanvasConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortWorld:
    """World position of a port, derived from the live placement."""

    x: float
    y: float
    category: PortCategory

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class PortHit:
    """A port found by a spatial query."""

    device_id: str
    port_id: str
    port: PortWorld
    distance: float


class PortResolver:
    """Maps device ports to world coordinates.

    Nothing is cached: every call reads the current placement so a device that
    was just moved never yields a stale anchor.
    """

    def __init__(self, catalog: DeviceCatalog, config: CanvasConfig | None = None):
        self._catalog = catalog
        self._config = config or CanvasConfig()

    @property
    def catalog(self) -> DeviceCatalog:
        return self._catalog

    def node_size(self, device_type: str, scale: float = 1.0) -> tuple[float, float]:
        """Pixel size of a device node: physical footprint if known, else fallback."""
        footprint = self._catalog.get_footprint(device_type)
        if footprint is not None:
            ppu = self._config.px_per_unit
            return (footprint.w * ppu * scale, footprint.h * ppu * scale)
        return (
            self._config.fallback_node_width * scale,
            self._config.fallback_node_height * scale,
        )

    def node_bounds(self, project: Project, device_id: str) -> Bounds | None:
        """World bounding box of a placed device."""
        device = project.get_device(device_id)
        placement = project.get_placement(device_id)
        if device is None or placement is None:
            return None
        w, h = self.node_size(device.type, placement.effective_scale)
        return Bounds(placement.x, placement.y, placement.x + w, placement.y + h)

    def resolve(self, project: Project, device_id: str, port_id: str) -> PortWorld | None:
        """Resolve a device port to its world position, or ``None`` if unresolvable."""
        device = project.get_device(device_id)
        placement = project.get_placement(device_id)
        if device is None or placement is None:
            return None

        item = self._catalog.get(device.type)
        if item is None:
            return None
        anchor = item.get_port(port_id)
        if anchor is None:
            return None

        node_w, node_h = self.node_size(device.type, placement.effective_scale)
        return PortWorld(
            x=placement.x + anchor.offset_x * node_w,
            y=placement.y + anchor.offset_y * node_h,
            category=anchor.category,
        )

    def iter_ports(self, project: Project):
        """Yield ``(device_id, port_id, PortWorld)`` for every resolvable port."""
        for device in project.iter_devices():
            for anchor in self._catalog.get_port_anchors(device.type):
                port = self.resolve(project, device.id, anchor.port_id)
                if port is not None:
                    yield device.id, anchor.port_id, port

    def hit_test_port(self, project: Project, point: Point, radius: float | None = None) -> PortHit | None:
        """Find the port nearest to ``point`` within ``radius`` world units."""
        if radius is None:
            radius = self._config.port_hit_radius
        ports = list(self.iter_ports(project))
        if not ports:
            return None

        coords = np.array([(p.x, p.y) for _, _, p in ports], dtype=float)
        distances = np.hypot(coords[:, 0] - point.x, coords[:, 1] - point.y)
        best = int(np.argmin(distances))
        if distances[best] > radius:
            return None

        device_id, port_id, port = ports[best]
        return PortHit(device_id=device_id, port_id=port_id, port=port, distance=float(distances[best]))

    def hit_test_node(self, project: Project, point: Point) -> str | None:
        """Return the topmost device whose body contains ``point``."""
        hit = None
        for device in project.iter_devices():
            bounds = self.node_bounds(project, device.id)
            if bounds is not None and bounds.contains(point):
                hit = device.id
        return hit

    def compatible_ports(
        self,
        project: Project,
        device_id: str,
        port_id: str,
        category: PortCategory,
    ) -> set[tuple[str, str]]:
        """All other ports a wire of ``category`` starting at the given port may end on."""
        result: set[tuple[str, str]] = set()
        for device in project.iter_devices():
            for anchor in self._catalog.get_port_anchors(device.type):
                if device.id == device_id and anchor.port_id == port_id:
                    continue
                if anchor.category == category:
                    result.add((device.id, anchor.port_id))
        return result

    def content_bounds(self, project: Project) -> Bounds | None:
        """Union of all placed device bounds."""
        bounds = None
        for device in project.iter_devices():
            node = self.node_bounds(project, device.id)
            if node is None:
                logger.debug("Device %s has no placement", device.id)
                continue
            bounds = node if bounds is None else bounds.united(node)
        return bounds
