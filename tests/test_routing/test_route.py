"""Tests for route generation and orthogonalization."""

import math

import pytest

from frcwiring.models.geometry import Point, RouteMode, segment_axis
from frcwiring.routing.route import (
    default_route,
    generate_route,
    is_orthogonal,
    orthogonalize,
    snap_center_to_top_left,
    snap_to_grid,
    snap_top_left_by_center,
)


def _axes(points):
    """Axis of every segment of a polyline (None for zero-length segments)."""
    axes = []
    for p0, p1 in zip(points, points[1:]):
        if p0 == p1:
            axes.append(None)
        elif p0.y == p1.y:
            axes.append(RouteMode.H)
        elif p0.x == p1.x:
            axes.append(RouteMode.V)
        else:
            axes.append("diagonal")
    return axes


class TestSnapToGrid:
    def test_rounds_to_nearest_multiple(self):
        assert snap_to_grid(29, 20) == 20
        assert snap_to_grid(31, 20) == 40
        assert snap_to_grid(-31, 20) == -40

    @pytest.mark.parametrize(
        "value, expected",
        [(10, 20), (30, 40), (50, 60), (70, 80), (-10, 0), (-30, -20)],
    )
    def test_half_grid_ties_round_up(self, value, expected):
        assert snap_to_grid(value, 20) == expected

    def test_non_finite_value_passes_through(self):
        assert snap_to_grid(math.inf, 20) == math.inf

    @pytest.mark.parametrize("grid", [0, -5, math.inf, math.nan])
    def test_degenerate_grid_is_identity(self, grid):
        assert snap_to_grid(13.7, grid) == 13.7

    def test_node_snapping_centers_on_grid(self):
        # 170 wide node: center at 100 -> top-left 15
        assert snap_center_to_top_left(95, 170, 20) == 15
        assert snap_top_left_by_center(12, 170, 20) == 15


class TestGenerateRoute:
    def test_aligned_zero_bends_is_straight(self):
        assert generate_route(Point(0, 40), Point(200, 40), 20, RouteMode.H, 0) == []

    def test_vertical_aligned_zero_bends_is_straight(self):
        assert generate_route(Point(60, 0), Point(60, 200), 20, RouteMode.V, 0) == []

    def test_zero_bends_gets_mandatory_bend_h(self):
        assert generate_route(Point(0, 0), Point(100, 40), 20, RouteMode.H, 0) == [Point(100, 0)]

    def test_zero_bends_gets_mandatory_bend_v(self):
        assert generate_route(Point(0, 0), Point(100, 40), 20, RouteMode.V, 0) == [Point(0, 40)]

    def test_two_bends(self):
        a, b = Point(0, 0), Point(100, 40)
        route = generate_route(a, b, 20, RouteMode.H, 2)

        assert len(route) == 2
        assert all(p.x % 20 == 0 and p.y % 20 == 0 for p in route)
        axes = _axes([a, *route, b])
        assert axes[0] is RouteMode.H
        # Three segments with H first: the last one is H again.
        assert axes[-1] in (RouteMode.H, None)
        assert is_orthogonal([a, *route, b])

    def test_two_bends_exact(self):
        route = generate_route(Point(160, 40), Point(400, 240), 20, RouteMode.H, 2)
        assert route == [Point(240, 40), Point(240, 240)]

    @pytest.mark.parametrize("mode", [RouteMode.H, RouteMode.V])
    @pytest.mark.parametrize("n", [1, 2, 3, 4, 7])
    def test_generated_routes_are_orthogonal(self, mode, n):
        a, b = Point(20, 60), Point(340, -180)
        route = generate_route(a, b, 20, mode, n)

        assert len(route) == n
        assert is_orthogonal([a, *route, b])
        for i, axis in enumerate(_axes([a, *route, b])):
            assert axis in (segment_axis(mode, i), None)

    def test_negative_and_fractional_counts(self):
        a, b = Point(0, 0), Point(100, 40)
        assert generate_route(a, b, 20, RouteMode.H, -3) == [Point(100, 0)]
        assert len(generate_route(a, b, 20, RouteMode.H, 2.9)) == 2


class TestOrthogonalize:
    def test_locks_diagonal_bends(self):
        a, b = Point(0, 0), Point(100, 100)
        bends = [Point(37, 12), Point(61, 88)]
        result = orthogonalize(a, b, bends, RouteMode.H)

        assert result == [Point(37, 0), Point(37, 100)]
        assert is_orthogonal([a, *result, b])

    def test_does_not_mutate_input(self):
        bends = [Point(37, 12), Point(61, 88)]
        orthogonalize(Point(0, 0), Point(100, 100), bends, RouteMode.V)
        assert bends == [Point(37, 12), Point(61, 88)]

    def test_zero_bends_untouched(self):
        assert orthogonalize(Point(0, 0), Point(100, 100), [], RouteMode.H) == []

    @pytest.mark.parametrize("mode", [RouteMode.H, RouteMode.V])
    def test_idempotent(self, mode):
        a, b = Point(13, -7), Point(251, 119)
        bends = [Point(40, 80), Point(-20, 33), Point(100, 5), Point(7, 300), Point(180, 180)]
        once = orthogonalize(a, b, bends, mode)
        assert orthogonalize(a, b, once, mode) == once

    @pytest.mark.parametrize("count", range(1, 6))
    def test_output_is_always_orthogonal(self, count):
        a, b = Point(0, 0), Point(230, 170)
        bends = [Point(17 * i + 3, 41 * i - 9) for i in range(count)]
        for mode in RouteMode:
            assert is_orthogonal([a, *orthogonalize(a, b, bends, mode), b])

    def test_keeps_mismatched_bend_count(self):
        # Imported routes are re-aligned, never re-counted.
        bends = [Point(i * 10, i * 10) for i in range(5)]
        assert len(orthogonalize(Point(0, 0), Point(60, 60), bends, RouteMode.H)) == 5


class TestDefaultRoute:
    def test_aligned_is_straight(self):
        assert default_route(Point(0, 0), Point(0, 100), 20) == []

    def test_wide_route_jogs_vertically_at_mid_x(self):
        assert default_route(Point(160, 40), Point(400, 240), 20) == [Point(280, 40), Point(280, 240)]

    def test_midpoint_on_half_grid_rounds_up(self):
        assert default_route(Point(0, 0), Point(100, 40), 20) == [Point(60, 0), Point(60, 40)]

    def test_tall_route_jogs_horizontally_at_mid_y(self):
        assert default_route(Point(0, 0), Point(40, 200), 20) == [Point(0, 100), Point(40, 100)]
