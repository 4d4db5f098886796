"""Turning derived routes into stored ones, and bend-count editing.

A connection without stored bends shows a route recomputed from its endpoints
on every read. Before any interactive edit the displayed route is persisted
so later edits mutate a caller-owned list. Once stored, a route is never
cleared back to the derived state by these operations; ``reset_route``
replaces it with a fresh two-bend route instead.
"""

from __future__ import annotations

import logging
from typing import Callable

from frcwiring.models.connection import Connection
from frcwiring.models.geometry import Point
from frcwiring.models.project import Project
from frcwiring.routing.ports import PortResolver
from frcwiring.routing.route import generate_route, snap_point
from frcwiring.routing.segments import DEFAULT_BEND_COUNT, polyline_for_connection

logger = logging.getLogger(__name__)

RouteCallback = Callable[[str, list[Point]], None]

RESET_BEND_COUNT = 2


def ensure_route_persisted(
    connection: Connection,
    project: Project,
    resolver: PortResolver,
    grid: float,
    on_update_wire_route: RouteCallback,
    default_bend_count: int = DEFAULT_BEND_COUNT,
) -> list[Point] | None:
    """Store the currently displayed route of an implicit connection.

    Returns the persisted bends, or ``None`` when nothing was stored (the route
    is already explicit or an endpoint cannot be resolved).
    """
    if connection.route:
        return None

    polyline = polyline_for_connection(connection, project, resolver, grid, default_bend_count)
    if polyline is None:
        return None

    bends = [snap_point(p, grid) for p in polyline.bends]
    on_update_wire_route(connection.id, bends)
    logger.debug("Persisted derived route of %s (%d bends)", connection.id, len(bends))
    return bends


def set_bend_count(
    connection: Connection,
    project: Project,
    resolver: PortResolver,
    grid: float,
    count: int,
    on_update_wire_route: RouteCallback,
) -> list[Point] | None:
    """Replace the route with a generated one of ``count`` bends."""
    polyline = polyline_for_connection(connection, project, resolver, grid)
    if polyline is None:
        return None

    bends = generate_route(polyline.a, polyline.b, grid, polyline.mode, count)
    on_update_wire_route(connection.id, bends)
    return bends


def add_bend(
    connection: Connection,
    project: Project,
    resolver: PortResolver,
    grid: float,
    on_update_wire_route: RouteCallback,
) -> list[Point] | None:
    """Regenerate the route with one more bend than is stored."""
    return set_bend_count(
        connection, project, resolver, grid, len(connection.route) + 1, on_update_wire_route
    )


def remove_bend(
    connection: Connection,
    project: Project,
    resolver: PortResolver,
    grid: float,
    on_update_wire_route: RouteCallback,
) -> list[Point] | None:
    """Regenerate the route with one bend fewer than is stored."""
    return set_bend_count(
        connection, project, resolver, grid, max(0, len(connection.route) - 1), on_update_wire_route
    )


def reset_route(
    connection: Connection,
    project: Project,
    resolver: PortResolver,
    grid: float,
    on_update_wire_route: RouteCallback,
) -> list[Point] | None:
    """Replace the route with a fresh two-bend route."""
    return set_bend_count(
        connection, project, resolver, grid, RESET_BEND_COUNT, on_update_wire_route
    )
