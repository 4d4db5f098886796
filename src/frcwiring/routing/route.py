"""Orthogonal route synthesis and enforcement.

A route is the list of interior bend points of a wire. Together with the two
live port positions it forms a polyline whose segments alternate between
horizontal and vertical, starting with the connection's route mode.
"""

from __future__ import annotations

import math
from typing import Sequence

from frcwiring.models.geometry import Point, RouteMode, segment_axis

ALIGN_TOLERANCE = 1e-6


def snap_to_grid(value: float, grid: float) -> float:
    """Snap a coordinate to the nearest grid multiple.

    A non-finite or non-positive grid disables snapping. Exact half-grid ties
    round up, towards +inf.
    """
    if not math.isfinite(grid) or grid <= 0 or not math.isfinite(value):
        return value
    return math.floor(value / grid + 0.5) * grid


def snap_point(point: Point, grid: float) -> Point:
    """Snap both coordinates of a point."""
    return Point(snap_to_grid(point.x, grid), snap_to_grid(point.y, grid))


def snap_center_to_top_left(center: float, size: float, grid: float) -> float:
    """Top-left coordinate of a node whose center is snapped to the grid."""
    return snap_to_grid(center, grid) - size / 2


def snap_top_left_by_center(top_left: float, size: float, grid: float) -> float:
    """Re-snap a node's top-left coordinate so its center sits on the grid."""
    return snap_center_to_top_left(top_left + size / 2, size, grid)


def is_aligned(a: Point, b: Point) -> bool:
    """Check if two points share an x or y coordinate."""
    return abs(a.x - b.x) < ALIGN_TOLERANCE or abs(a.y - b.y) < ALIGN_TOLERANCE


def single_bend(a: Point, b: Point, grid: float, mode: RouteMode) -> Point:
    """The one bend that joins ``a`` and ``b`` with an L-shape."""
    if mode is RouteMode.H:
        return Point(snap_to_grid(b.x, grid), snap_to_grid(a.y, grid))
    return Point(snap_to_grid(a.x, grid), snap_to_grid(b.y, grid))


def orthogonalize(a: Point, b: Point, bends: Sequence[Point], mode: RouteMode) -> list[Point]:
    """Force ``bends`` into an alternating-axis route from ``a`` to ``b``.

    Each bend is locked to its predecessor along the axis its incoming segment
    must have, then the last bend is pinned to ``b`` so the trailing segment is
    axis-aligned too. Bend count is never changed, and with no bends nothing
    is adjusted. Applying the function to its own output is a no-op.
    """
    points = list(bends)
    prev = a
    for i, bend in enumerate(points):
        if segment_axis(mode, i) is RouteMode.H:
            bend = bend.with_y(prev.y)
        else:
            bend = bend.with_x(prev.x)
        points[i] = bend
        prev = bend

    if points:
        last = points[-1]
        if segment_axis(mode, len(points)) is RouteMode.H:
            points[-1] = last.with_y(b.y)
        else:
            points[-1] = last.with_x(b.x)
    return points


def generate_route(
    a: Point,
    b: Point,
    grid: float,
    mode: RouteMode,
    bend_count: int,
) -> list[Point]:
    """Synthesize an orthogonal route with ``bend_count`` bends.

    With zero bends, aligned endpoints get a straight wire and anything else
    gets the single mandatory bend. Otherwise bends are seeded by interpolating
    along the axis of their incoming segment and then orthogonalized.
    """
    n = max(0, math.floor(bend_count))

    if n == 0:
        if is_aligned(a, b):
            return []
        return [single_bend(a, b, grid, mode)]

    dx = b.x - a.x
    dy = b.y - a.y
    seeded: list[Point] = []
    for i in range(1, n + 1):
        t = i / (n + 1)
        if segment_axis(mode, i - 1) is RouteMode.H:
            seeded.append(Point(snap_to_grid(a.x + t * dx, grid), snap_to_grid(a.y, grid)))
        else:
            seeded.append(Point(snap_to_grid(a.x, grid), snap_to_grid(a.y + t * dy, grid)))

    return [snap_point(p, grid) for p in orthogonalize(a, b, seeded, mode)]


def default_route(a: Point, b: Point, grid: float) -> list[Point]:
    """Two-bend preview route with the jog at the midpoint of the longer axis."""
    dx = b.x - a.x
    dy = b.y - a.y
    if abs(dx) < ALIGN_TOLERANCE or abs(dy) < ALIGN_TOLERANCE:
        return []

    if abs(dx) >= abs(dy):
        mx = snap_to_grid((a.x + b.x) / 2, grid)
        return [Point(mx, a.y), Point(mx, b.y)]
    my = snap_to_grid((a.y + b.y) / 2, grid)
    return [Point(a.x, my), Point(b.x, my)]


def is_orthogonal(points: Sequence[Point]) -> bool:
    """Check that every consecutive pair differs in at most one coordinate."""
    for p0, p1 in zip(points, points[1:]):
        if abs(p0.x - p1.x) >= ALIGN_TOLERANCE and abs(p0.y - p1.y) >= ALIGN_TOLERANCE:
            return False
    return True
