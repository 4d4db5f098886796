"""Canvas interaction controller: pan, zoom, node drag, wire creation and rerouting."""

from __future__ import annotations

import logging
from dataclasses import replace

from PySide6.QtCore import QObject, Signal

from frcwiring.interaction.state import (
    IDLE,
    DraggingBend,
    DraggingNode,
    DraggingSegment,
    DraggingWireEndpoint,
    Idle,
    InteractionState,
    Panning,
    PointerCapture,
)
from frcwiring.models.catalog import DeviceCatalog
from frcwiring.models.connection import Connection
from frcwiring.models.geometry import Axis, Point, RouteMode, ScreenPoint
from frcwiring.models.project import Project
from frcwiring.routing import persistence
from frcwiring.routing.ports import PortResolver
from frcwiring.routing.route import (
    default_route,
    snap_center_to_top_left,
    snap_point,
    snap_top_left_by_center,
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
from frcwiring.services.settings_service import CanvasConfig

logger = logging.getLogger(__name__)

PRIMARY_BUTTON = 0


class InteractionController(QObject):
    """
    Owns the view transform and the single active interaction of a canvas.

    The controller reads the project but never writes it. Every edit is
    requested through a signal; ``Project.connect_controller`` applies them to
    an in-memory project.

    Signals:
        wire_route_changed: New bend list for a connection (id, list[Point])
        wire_meta_changed: Metadata patch for a connection (id, dict)
        placement_moved: Device moved to a new top-left (id, x, y)
        wire_create_requested: Wire between two ports
            (from_device, from_port, to_device, to_port, category)
        device_drop_requested: Device dropped from the palette (type, x, y)
        view_changed: Pan or zoom changed (pan_x, pan_y, zoom)
        selection_changed: Selected device / connection changed (id or None)
        state_changed: Interaction state changed (state class name)
    """

    wire_route_changed = Signal(str, object)
    wire_meta_changed = Signal(str, object)
    placement_moved = Signal(str, float, float)
    wire_create_requested = Signal(str, str, str, str, str)
    device_drop_requested = Signal(str, float, float)
    view_changed = Signal(float, float, float)
    selection_changed = Signal(object, object)
    state_changed = Signal(str)

    def __init__(
        self,
        project: Project,
        catalog: DeviceCatalog,
        config: CanvasConfig | None = None,
        capture: PointerCapture | None = None,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._project = project
        self._config = config or CanvasConfig()
        self._transform = ViewTransform(
            self._config.zoom_min,
            self._config.zoom_max,
            self._config.wheel_sensitivity,
        )
        self._resolver = PortResolver(catalog, self._config)
        self._capture = capture
        self._state: InteractionState = IDLE
        self._wire_mode = self._config.wire_mode
        self._selected_device_id: str | None = None
        self._selected_connection_id: str | None = None

    @property
    def project(self) -> Project:
        return self._project

    @project.setter
    def project(self, project: Project) -> None:
        """Switch to another project, dropping any drag and selection."""
        self.cancel()
        self._project = project
        self._set_selection(None, None)

    @property
    def config(self) -> CanvasConfig:
        return self._config

    @property
    def transform(self) -> ViewTransform:
        return self._transform

    @property
    def resolver(self) -> PortResolver:
        return self._resolver

    @property
    def grid(self) -> float:
        return self._config.grid_size

    @property
    def state(self) -> InteractionState:
        """The active interaction."""
        return self._state

    @property
    def is_dragging(self) -> bool:
        return not isinstance(self._state, Idle)

    @property
    def wire_mode(self) -> bool:
        """In wire mode, pointer-down on ports creates wires and on wires reroutes them."""
        return self._wire_mode

    @wire_mode.setter
    def wire_mode(self, enabled: bool) -> None:
        if self._wire_mode != enabled:
            self.cancel()
            self._wire_mode = enabled

    @property
    def selected_device_id(self) -> str | None:
        return self._selected_device_id

    @property
    def selected_connection_id(self) -> str | None:
        return self._selected_connection_id

    def set_pointer_capture(self, capture: PointerCapture | None) -> None:
        """Set the input layer's capture primitive."""
        self._capture = capture

    # Pointer input

    def pointer_down(self, sx: float, sy: float, pointer_id: int, button: int = PRIMARY_BUTTON) -> bool:
        """Arm a drag based on what lies under the pointer.

        Returns True if a drag was started.
        """
        if button != PRIMARY_BUTTON or self.is_dragging:
            return False

        world = self._transform.screen_to_world(sx, sy)

        if self._wire_mode:
            if self._begin_wire_drag(world, sx, sy, pointer_id):
                return True
            if self._begin_bend_drag(sx, sy, pointer_id):
                return True
            return self._begin_segment_drag(sx, sy, pointer_id)

        # Bend handles stay grabbable outside wire mode.
        if self._begin_bend_drag(sx, sy, pointer_id):
            return True

        device_id = self._resolver.hit_test_node(self._project, world)
        if device_id is not None:
            return self._begin_node_drag(device_id, sx, sy, pointer_id)

        pan_x, pan_y = self._transform.pan
        self._enter(Panning(pointer_id, sx, sy, pan_x, pan_y))
        return True

    def pointer_move(self, sx: float, sy: float, pointer_id: int) -> None:
        """Update the active drag."""
        state = self._state
        if isinstance(state, Idle) or state.pointer_id != pointer_id:
            return

        if isinstance(state, Panning):
            dx = sx - state.start_sx
            dy = sy - state.start_sy
            threshold = self._config.pan_click_threshold
            moved = state.moved or abs(dx) > threshold or abs(dy) > threshold
            self._transform.pan_to(state.origin_pan_x + dx, state.origin_pan_y + dy)
            self._state = replace(state, moved=moved)
            self._emit_view()
        elif isinstance(state, DraggingNode):
            zoom = self._transform.zoom
            raw_x = state.origin_x + (sx - state.start_sx) / zoom
            raw_y = state.origin_y + (sy - state.start_sy) / zoom
            x = snap_top_left_by_center(raw_x, state.node_w, self.grid)
            y = snap_top_left_by_center(raw_y, state.node_h, self.grid)
            self.placement_moved.emit(state.device_id, x, y)
        elif isinstance(state, DraggingWireEndpoint):
            self._state = replace(state, pointer_sx=sx, pointer_sy=sy)
        elif isinstance(state, DraggingSegment):
            self._drag_segment(state, sx, sy)
        elif isinstance(state, DraggingBend):
            self._drag_bend(state, sx, sy)

    def pointer_up(self, sx: float, sy: float, pointer_id: int) -> None:
        """Finish the active drag."""
        state = self._state
        if isinstance(state, Idle) or state.pointer_id != pointer_id:
            return

        if isinstance(state, DraggingWireEndpoint):
            self._finish_wire_drag(state, sx, sy)
        elif isinstance(state, Panning) and not state.moved:
            # Plain click on empty canvas.
            self._set_selection(None, self._selected_connection_id)

        self._leave()

    def capture_lost(self, pointer_id: int) -> None:
        """The input layer lost the pointer; abandon its drag."""
        if not isinstance(self._state, Idle) and self._state.pointer_id == pointer_id:
            self.cancel()

    def cancel(self) -> None:
        """Abandon the active drag without committing anything further."""
        if not isinstance(self._state, Idle):
            self._leave()

    def wheel(self, delta_y: float, sx: float, sy: float) -> None:
        """Zoom around the cursor."""
        self._transform.apply_wheel(delta_y, sx, sy)
        self._emit_view()

    def drop_device(self, device_type: str, sx: float, sy: float) -> None:
        """Request a device from the palette, centered on the drop point."""
        world = self._transform.screen_to_world(sx, sy)
        node_w, node_h = self._resolver.node_size(device_type)
        x = snap_center_to_top_left(world.x, node_w, self.grid)
        y = snap_center_to_top_left(world.y, node_h, self.grid)
        self.device_drop_requested.emit(device_type, x, y)

    def fit_to_content(self, viewport_width: float, viewport_height: float) -> None:
        """Center all placed devices in the viewport."""
        bounds = self._resolver.content_bounds(self._project)
        if bounds is None:
            self._transform.reset()
        else:
            self._transform.fit_to_bounds(bounds, viewport_width, viewport_height)
        self._emit_view()

    # Wire editing

    def select_connection(self, connection_id: str | None) -> None:
        self._set_selection(None if connection_id else self._selected_device_id, connection_id)

    def set_route_mode(self, connection_id: str, mode: RouteMode) -> None:
        """Change which axis the first segment of a wire takes."""
        if self._project.get_connection(connection_id) is None:
            return
        self.wire_meta_changed.emit(connection_id, {"routeMode": RouteMode.parse(mode).value})

    def set_bend_count(self, connection_id: str, count: int) -> list[Point] | None:
        connection = self._project.get_connection(connection_id)
        if connection is None:
            return None
        return persistence.set_bend_count(
            connection, self._project, self._resolver, self.grid, count, self._emit_route
        )

    def add_bend(self, connection_id: str) -> list[Point] | None:
        connection = self._project.get_connection(connection_id)
        if connection is None:
            return None
        return persistence.add_bend(connection, self._project, self._resolver, self.grid, self._emit_route)

    def remove_bend(self, connection_id: str) -> list[Point] | None:
        connection = self._project.get_connection(connection_id)
        if connection is None:
            return None
        return persistence.remove_bend(connection, self._project, self._resolver, self.grid, self._emit_route)

    def reset_route(self, connection_id: str) -> list[Point] | None:
        connection = self._project.get_connection(connection_id)
        if connection is None:
            return None
        return persistence.reset_route(connection, self._project, self._resolver, self.grid, self._emit_route)

    # Queries for the renderer

    def polyline(self, connection_id: str) -> RoutedPolyline | None:
        """Displayed geometry of a connection, or ``None`` if unresolvable."""
        connection = self._project.get_connection(connection_id)
        if connection is None:
            return None
        return self._polyline(connection)

    def wire_preview(self) -> list[Point] | None:
        """World polyline of the wire being dragged out of a port."""
        state = self._state
        if not isinstance(state, DraggingWireEndpoint):
            return None
        start = self._resolver.resolve(self._project, state.from_device_id, state.from_port_id)
        if start is None:
            return None
        end = self._transform.screen_to_world(state.pointer_sx, state.pointer_sy)
        return [start.point, *default_route(start.point, end, self.grid), end]

    def compatible_ports(self) -> set[tuple[str, str]]:
        """Ports the wire being dragged may end on."""
        state = self._state
        if not isinstance(state, DraggingWireEndpoint):
            return set()
        return self._resolver.compatible_ports(
            self._project, state.from_device_id, state.from_port_id, state.category
        )

    # Internals

    def _polyline(self, connection: Connection) -> RoutedPolyline | None:
        return polyline_for_connection(
            connection,
            self._project,
            self._resolver,
            self.grid,
            self._config.default_bend_count,
        )

    def _begin_wire_drag(self, world: Point, sx: float, sy: float, pointer_id: int) -> bool:
        radius = self._config.port_hit_radius / self._transform.zoom
        hit = self._resolver.hit_test_port(self._project, world, radius)
        if hit is None:
            return False
        self._enter(
            DraggingWireEndpoint(
                pointer_id=pointer_id,
                from_device_id=hit.device_id,
                from_port_id=hit.port_id,
                category=hit.port.category,
                pointer_sx=sx,
                pointer_sy=sy,
            )
        )
        self._set_selection(hit.device_id, self._selected_connection_id)
        return True

    def _finish_wire_drag(self, state: DraggingWireEndpoint, sx: float, sy: float) -> None:
        world = self._transform.screen_to_world(sx, sy)
        radius = self._config.port_hit_radius / self._transform.zoom
        hit = self._resolver.hit_test_port(self._project, world, radius)
        if hit is None or hit.port.category != state.category:
            return
        if hit.device_id == state.from_device_id and hit.port_id == state.from_port_id:
            return
        self.wire_create_requested.emit(
            state.from_device_id,
            state.from_port_id,
            hit.device_id,
            hit.port_id,
            state.category.value,
        )

    def _hit_test_wire(self, sx: float, sy: float) -> tuple[Connection, RoutedPolyline, SegmentPick] | None:
        cursor = ScreenPoint(sx, sy)
        tolerance_sq = self._config.wire_hit_tolerance ** 2
        best = None
        for connection in self._project.iter_connections():
            polyline = self._polyline(connection)
            if polyline is None:
                continue
            pick = pick_segment(polyline.points, cursor, self._transform)
            if pick is None or pick.distance_sq > tolerance_sq:
                continue
            if best is None or pick.distance_sq < best[2].distance_sq:
                best = (connection, polyline, pick)
        return best

    def _begin_segment_drag(self, sx: float, sy: float, pointer_id: int) -> bool:
        found = self._hit_test_wire(sx, sy)
        if found is None:
            return False
        connection, polyline, pick = found

        self._grab_route(connection)
        self._enter(
            DraggingSegment(
                pointer_id=pointer_id,
                connection_id=connection.id,
                seg_index=pick.index,
                axis=pick.axis,
                start_world=self._transform.screen_to_world(sx, sy),
                base_bends=tuple(snap_point(p, self.grid) for p in polyline.bends),
            )
        )
        return True

    def _hit_test_bend(self, sx: float, sy: float) -> tuple[Connection, RoutedPolyline, int] | None:
        cursor = ScreenPoint(sx, sy)
        radius = self._config.bend_handle_radius
        best = None
        best_d2 = None
        for connection in self._project.iter_connections():
            polyline = self._polyline(connection)
            if polyline is None:
                continue
            index = pick_bend(polyline.bends, cursor, self._transform, radius)
            if index is None:
                continue
            s = self._transform.world_to_screen(polyline.bends[index].x, polyline.bends[index].y)
            d2 = (sx - s.sx) ** 2 + (sy - s.sy) ** 2
            if best_d2 is None or d2 < best_d2:
                best = (connection, polyline, index)
                best_d2 = d2
        return best

    def _begin_bend_drag(self, sx: float, sy: float, pointer_id: int) -> bool:
        found = self._hit_test_bend(sx, sy)
        if found is None:
            return False
        connection, polyline, index = found

        self._grab_route(connection)
        self._enter(
            DraggingBend(
                pointer_id=pointer_id,
                connection_id=connection.id,
                bend_index=index,
                base_bends=tuple(snap_point(p, self.grid) for p in polyline.bends),
            )
        )
        return True

    def _drag_bend(self, state: DraggingBend, sx: float, sy: float) -> None:
        connection = self._project.get_connection(state.connection_id)
        if connection is None:
            return
        polyline = self._polyline(connection)
        if polyline is None:
            return

        world = self._transform.screen_to_world(sx, sy)
        bends = move_bend(polyline, state.bend_index, world, state.base_bends, self.grid)
        self._emit_route(connection.id, bends)

    def _grab_route(self, connection: Connection) -> None:
        """Select a wire and store its displayed route before editing it."""
        self._set_selection(None, connection.id)
        persistence.ensure_route_persisted(
            connection,
            self._project,
            self._resolver,
            self.grid,
            self._emit_route,
            self._config.default_bend_count,
        )

    def _drag_segment(self, state: DraggingSegment, sx: float, sy: float) -> None:
        connection = self._project.get_connection(state.connection_id)
        if connection is None:
            return
        polyline = self._polyline(connection)
        if polyline is None:
            return

        world = self._transform.screen_to_world(sx, sy)
        if state.axis is Axis.H:
            delta = world.y - state.start_world.y
        else:
            delta = world.x - state.start_world.x

        bends = move_segment(polyline, state.seg_index, state.axis, delta, state.base_bends, self.grid)
        self._emit_route(connection.id, bends)

    def _begin_node_drag(self, device_id: str, sx: float, sy: float, pointer_id: int) -> bool:
        device = self._project.get_device(device_id)
        placement = self._project.get_placement(device_id)
        if device is None or placement is None:
            return False
        node_w, node_h = self._resolver.node_size(device.type, placement.effective_scale)
        self._enter(
            DraggingNode(
                pointer_id=pointer_id,
                device_id=device_id,
                start_sx=sx,
                start_sy=sy,
                origin_x=placement.x,
                origin_y=placement.y,
                node_w=node_w,
                node_h=node_h,
            )
        )
        self._set_selection(device_id, self._selected_connection_id)
        return True

    def _enter(self, state: InteractionState) -> None:
        self._state = state
        if self._capture is not None:
            self._capture.capture(state.pointer_id)
        logger.debug("Interaction -> %s", type(state).__name__)
        self.state_changed.emit(type(state).__name__)

    def _leave(self) -> None:
        pointer_id = self._state.pointer_id
        self._state = IDLE
        if self._capture is not None:
            self._capture.release(pointer_id)
        logger.debug("Interaction -> Idle")
        self.state_changed.emit("Idle")

    def _set_selection(self, device_id: str | None, connection_id: str | None) -> None:
        if (device_id, connection_id) == (self._selected_device_id, self._selected_connection_id):
            return
        self._selected_device_id = device_id
        self._selected_connection_id = connection_id
        self.selection_changed.emit(device_id, connection_id)

    def _emit_route(self, connection_id: str, bends: list[Point]) -> None:
        self.wire_route_changed.emit(connection_id, list(bends))

    def _emit_view(self) -> None:
        pan_x, pan_y = self._transform.pan
        self.view_changed.emit(pan_x, pan_y, self._transform.zoom)
