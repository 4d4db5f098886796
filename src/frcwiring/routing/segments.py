"""Segment hit-testing and perpendicular segment dragging."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from frcwiring.models.connection import Connection
from frcwiring.models.geometry import Axis, Point, RouteMode, ScreenPoint
from frcwiring.models.project import Project
from frcwiring.routing.ports import PortResolver
from frcwiring.routing.route import generate_route, orthogonalize, single_bend, snap_point, snap_to_grid
from frcwiring.routing.transform import ViewTransform

logger = logging.getLogger(__name__)

DEFAULT_BEND_COUNT = 2


@dataclass(frozen=True)
class RoutedPolyline:
    """The displayed geometry of a connection."""

    a: Point
    b: Point
    mode: RouteMode
    bends: tuple[Point, ...]

    @property
    def points(self) -> list[Point]:
        """Full polyline: source port, bends, target port."""
        return [self.a, *self.bends, self.b]


@dataclass(frozen=True)
class SegmentPick:
    """Result of a nearest-segment query."""

    index: int
    axis: Axis
    distance_sq: float


def polyline_for_connection(
    connection: Connection,
    project: Project,
    resolver: PortResolver,
    grid: float,
    default_bend_count: int = DEFAULT_BEND_COUNT,
) -> RoutedPolyline | None:
    """Build the displayed polyline of a connection from live port positions.

    Explicit connections use their stored bends, implicit ones a freshly
    generated route. Either way the bends are re-aligned to the endpoints.
    Returns ``None`` if either endpoint cannot be resolved.
    """
    start = resolver.resolve(project, connection.from_endpoint.device_id, connection.from_endpoint.port)
    end = resolver.resolve(project, connection.to_endpoint.device_id, connection.to_endpoint.port)
    if start is None or end is None:
        logger.debug("Connection %s has an unresolved endpoint", connection.id)
        return None

    a = start.point
    b = end.point
    mode = connection.route_mode
    if connection.route:
        bends = connection.route
    else:
        bends = generate_route(a, b, grid, mode, default_bend_count)

    return RoutedPolyline(a=a, b=b, mode=mode, bends=tuple(orthogonalize(a, b, bends, mode)))


def point_segment_distance_sq(
    px: float, py: float, x0: float, y0: float, x1: float, y1: float
) -> float:
    """Squared distance from a point to a segment (projection clamped to the segment)."""
    vx = x1 - x0
    vy = y1 - y0
    vv = vx * vx + vy * vy
    t = max(0.0, min(1.0, ((px - x0) * vx + (py - y0) * vy) / vv)) if vv > 1e-6 else 0.0
    cx = x0 + t * vx
    cy = y0 + t * vy
    return (px - cx) ** 2 + (py - cy) ** 2


def pick_segment(
    points: Sequence[Point],
    cursor: ScreenPoint,
    transform: ViewTransform,
) -> SegmentPick | None:
    """Find the polyline segment closest to a screen-space cursor.

    Distances are measured in screen space. The first segment wins on exact
    ties. Returns ``None`` for polylines with fewer than two points.
    """
    if len(points) < 2:
        return None

    screen = [transform.world_to_screen(p.x, p.y) for p in points]
    best: SegmentPick | None = None
    for i, (p0, p1) in enumerate(zip(screen, screen[1:])):
        dx = p1.sx - p0.sx
        dy = p1.sy - p0.sy
        axis = Axis.H if abs(dx) >= abs(dy) else Axis.V
        d2 = point_segment_distance_sq(cursor.sx, cursor.sy, p0.sx, p0.sy, p1.sx, p1.sy)
        if best is None or d2 < best.distance_sq:
            best = SegmentPick(index=i, axis=axis, distance_sq=d2)
    return best


def _bend_index(point_index: int, bend_count: int) -> int | None:
    """Map a polyline point index to a bend index; endpoints map to ``None``."""
    if point_index <= 0 or point_index >= bend_count + 1:
        return None
    return point_index - 1


def move_segment(
    polyline: RoutedPolyline,
    seg_index: int,
    axis: Axis,
    world_delta: float,
    base_bends: Sequence[Point],
    grid: float,
) -> list[Point]:
    """Shift a segment perpendicular to itself and return the new bend list.

    A horizontal segment moves along y and a vertical one along x. The bends
    on either side of the segment receive the new snapped coordinate, then the
    route is re-orthogonalized against the live endpoints and re-snapped.
    ``base_bends`` is the route at drag start and is not modified.
    """
    a, b, mode = polyline.a, polyline.b, polyline.mode
    bends = list(base_bends)

    first = _bend_index(seg_index, len(bends))
    second = _bend_index(seg_index + 1, len(bends))
    if first is None and second is None:
        if bends:
            logger.debug("Segment %d is out of range for %d bends", seg_index, len(bends))
            return bends
        # A straight wire has no bend to carry the move; give it one.
        bends = [single_bend(a, b, grid, mode)]
        first = _bend_index(seg_index, len(bends))
        second = _bend_index(seg_index + 1, len(bends))

    adjacent = [i for i in (first, second) if i is not None]
    if axis is Axis.H:
        base = bends[adjacent[0]].y if adjacent else a.y
        new_y = snap_to_grid(base + world_delta, grid)
        for i in adjacent:
            bends[i] = bends[i].with_y(new_y)
    else:
        base = bends[adjacent[0]].x if adjacent else a.x
        new_x = snap_to_grid(base + world_delta, grid)
        for i in adjacent:
            bends[i] = bends[i].with_x(new_x)

    return [snap_point(p, grid) for p in orthogonalize(a, b, bends, mode)]


def pick_bend(
    bends: Sequence[Point],
    cursor: ScreenPoint,
    transform: ViewTransform,
    radius: float,
) -> int | None:
    """Index of the bend handle under a screen-space cursor.

    ``radius`` is in screen pixels. The nearest bend within it wins, the first
    one on exact ties.
    """
    best = None
    best_d2 = radius * radius
    for i, bend in enumerate(bends):
        s = transform.world_to_screen(bend.x, bend.y)
        d2 = (cursor.sx - s.sx) ** 2 + (cursor.sy - s.sy) ** 2
        if d2 <= best_d2 and (best is None or d2 < best[1]):
            best = (i, d2)
    return best[0] if best is not None else None


def move_bend(
    polyline: RoutedPolyline,
    bend_index: int,
    world_point: Point,
    base_bends: Sequence[Point],
    grid: float,
) -> list[Point]:
    """Place one bend at the snapped ``world_point`` and return the new bend list.

    The other bends follow as needed to keep the route orthogonal, so a bend
    whose both coordinates are fixed by its neighbours does not move.
    """
    bends = list(base_bends)
    if not 0 <= bend_index < len(bends):
        logger.debug("Bend %d is out of range for %d bends", bend_index, len(bends))
        return bends

    bends[bend_index] = snap_point(world_point, grid)
    return [snap_point(p, grid) for p in orthogonalize(polyline.a, polyline.b, bends, polyline.mode)]


def polyline_distance_sq(points: Sequence[Point], cursor: ScreenPoint, transform: ViewTransform) -> float | None:
    """Squared screen distance from the cursor to the closest segment."""
    pick = pick_segment(points, cursor, transform)
    return pick.distance_sq if pick is not None else None
