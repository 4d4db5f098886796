"""Interaction states of the canvas.

Exactly one state is active at a time, so two drag kinds can never overlap.
States are immutable and replaced wholesale on every transition.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union

from frcwiring.models.catalog import PortCategory
from frcwiring.models.geometry import Axis, Point


class PointerCapture(Protocol):
    """Routes all events of a pointer to the canvas while a drag is active."""

    def capture(self, pointer_id: int) -> None: ...

    def release(self, pointer_id: int) -> None: ...


@dataclass(frozen=True)
class Idle:
    """No drag in progress."""


@dataclass(frozen=True)
class Panning:
    pointer_id: int
    start_sx: float
    start_sy: float
    origin_pan_x: float
    origin_pan_y: float
    moved: bool = False


@dataclass(frozen=True)
class DraggingNode:
    pointer_id: int
    device_id: str
    start_sx: float
    start_sy: float
    origin_x: float
    origin_y: float
    node_w: float
    node_h: float


@dataclass(frozen=True)
class DraggingWireEndpoint:
    """A new wire being dragged out of a port."""

    pointer_id: int
    from_device_id: str
    from_port_id: str
    category: PortCategory
    pointer_sx: float
    pointer_sy: float


@dataclass(frozen=True)
class DraggingSegment:
    """A route segment being moved perpendicular to itself."""

    pointer_id: int
    connection_id: str
    seg_index: int
    axis: Axis
    start_world: Point
    base_bends: tuple[Point, ...]


@dataclass(frozen=True)
class DraggingBend:
    """A single bend handle following the pointer."""

    pointer_id: int
    connection_id: str
    bend_index: int
    base_bends: tuple[Point, ...]


InteractionState = Union[
    Idle, Panning, DraggingNode, DraggingWireEndpoint, DraggingSegment, DraggingBend
]

IDLE = Idle()
