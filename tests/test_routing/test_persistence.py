"""Tests for route persistence and bend-count editing."""

import pytest

from frcwiring.models.connection import Connection, Endpoint
from frcwiring.models.geometry import Point
from frcwiring.routing.persistence import (
    add_bend,
    ensure_route_persisted,
    remove_bend,
    reset_route,
    set_bend_count,
)
from frcwiring.routing.route import is_orthogonal


class RouteRecorder:
    """Collects route callbacks."""

    def __init__(self):
        self.calls = []

    def __call__(self, connection_id, bends):
        self.calls.append((connection_id, list(bends)))


@pytest.fixture
def recorder():
    return RouteRecorder()


@pytest.fixture
def connection(project):
    return project.get_connection("c1")


class TestEnsureRoutePersisted:
    def test_persists_displayed_route_once(self, connection, project, resolver, recorder):
        bends = ensure_route_persisted(connection, project, resolver, 20, recorder)

        assert bends == [Point(240, 40), Point(240, 240)]
        assert recorder.calls == [("c1", bends)]

    def test_explicit_route_untouched(self, connection, project, resolver, recorder):
        connection.route = [Point(300, 40), Point(300, 240)]

        assert ensure_route_persisted(connection, project, resolver, 20, recorder) is None
        assert recorder.calls == []

    def test_unresolvable_connection(self, project, resolver, recorder):
        connection = Connection("x", Endpoint("A", "right"), Endpoint("B", "missing"))

        assert ensure_route_persisted(connection, project, resolver, 20, recorder) is None
        assert recorder.calls == []

    def test_second_call_is_noop_when_stored(self, connection, project, resolver):
        ensure_route_persisted(connection, project, resolver, 20, project.update_wire_route)
        assert connection.is_explicit

        recorder = RouteRecorder()
        assert ensure_route_persisted(connection, project, resolver, 20, recorder) is None
        assert recorder.calls == []


class TestBendCount:
    def test_set_bend_count(self, connection, project, resolver, recorder):
        bends = set_bend_count(connection, project, resolver, 20, 3, recorder)

        assert bends == [Point(220, 40), Point(220, 140), Point(400, 140)]
        assert recorder.calls == [("c1", bends)]
        assert is_orthogonal([Point(160, 40), *bends, Point(400, 240)])

    def test_add_bend_from_implicit(self, connection, project, resolver, recorder):
        assert add_bend(connection, project, resolver, 20, recorder) == [Point(400, 40)]

    def test_add_bend_from_stored(self, connection, project, resolver, recorder):
        connection.route = [Point(240, 40), Point(240, 240)]
        assert len(add_bend(connection, project, resolver, 20, recorder)) == 3

    def test_remove_bend(self, connection, project, resolver, recorder):
        connection.route = [Point(240, 40), Point(240, 240)]
        assert remove_bend(connection, project, resolver, 20, recorder) == [Point(400, 40)]

    def test_remove_bend_never_goes_below_mandatory(self, connection, project, resolver, recorder):
        # Unaligned endpoints always keep one bend.
        bends = remove_bend(connection, project, resolver, 20, recorder)
        assert bends == [Point(400, 40)]

    def test_remove_last_bend_of_aligned_wire(self, project, resolver, recorder):
        project.move_placement("B", 400, 0)
        connection = project.get_connection("c1")
        connection.route = [Point(280, 40)]

        assert remove_bend(connection, project, resolver, 20, recorder) == []
        assert recorder.calls == [("c1", [])]

    def test_reset_route(self, connection, project, resolver, recorder):
        connection.route = [Point(i * 20, 40) for i in range(6)]
        assert reset_route(connection, project, resolver, 20, recorder) == [
            Point(240, 40),
            Point(240, 240),
        ]

    def test_unresolvable(self, project, resolver, recorder):
        connection = Connection("x", Endpoint("ghost", "right"), Endpoint("B", "left"))
        assert set_bend_count(connection, project, resolver, 20, 2, recorder) is None
        assert recorder.calls == []
