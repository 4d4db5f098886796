"""Orthogonal wire routing and canvas geometry."""

from frcwiring.routing.persistence import (
    add_bend,
    ensure_route_persisted,
    remove_bend,
    reset_route,
    set_bend_count,
)
from frcwiring.routing.ports import PortHit, PortResolver, PortWorld
from frcwiring.routing.route import (
    default_route,
    generate_route,
    is_orthogonal,
    orthogonalize,
    snap_to_grid,
)
from frcwiring.routing.segments import (
    RoutedPolyline,
    SegmentPick,
    move_bend,
    move_segment,
    pick_bend,
    pick_segment,
    polyline_for_connection,
)
from frcwiring.routing.transform import ViewTransform

__all__ = [
    "PortHit",
    "PortResolver",
    "PortWorld",
    "RoutedPolyline",
    "SegmentPick",
    "ViewTransform",
    "add_bend",
    "default_route",
    "ensure_route_persisted",
    "generate_route",
    "is_orthogonal",
    "move_bend",
    "move_segment",
    "orthogonalize",
    "pick_bend",
    "pick_segment",
    "polyline_for_connection",
    "remove_bend",
    "reset_route",
    "set_bend_count",
    "snap_to_grid",
]
