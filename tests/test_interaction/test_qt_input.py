"""Tests for the Qt input adapter."""

from __future__ import annotations

import pytest
from PySide6.QtCore import QEvent, QPoint, QPointF, Qt
from PySide6.QtGui import QMouseEvent, QWheelEvent
from PySide6.QtWidgets import QWidget

from frcwiring.interaction.qt_input import QtCanvasInput
from frcwiring.interaction.state import DraggingNode, Idle, Panning


def _mouse(etype, x, y, button=Qt.MouseButton.LeftButton):
    buttons = Qt.MouseButton.NoButton if etype == QEvent.Type.MouseButtonRelease else button
    pos = QPointF(x, y)
    return QMouseEvent(etype, pos, pos, button, buttons, Qt.KeyboardModifier.NoModifier)


def _wheel(x, y, angle_y):
    pos = QPointF(x, y)
    return QWheelEvent(
        pos,
        pos,
        QPoint(0, 0),
        QPoint(0, angle_y),
        Qt.MouseButton.NoButton,
        Qt.KeyboardModifier.NoModifier,
        Qt.ScrollPhase.NoScrollPhase,
        False,
    )


@pytest.fixture
def widget(qtbot):
    w = QWidget()
    qtbot.addWidget(w)
    w.resize(800, 600)
    return w


@pytest.fixture
def canvas_input(controller, widget):
    return QtCanvasInput(controller, widget)


def test_press_move_release_drags_node(canvas_input, controller, widget, project):
    """Left-button drags should reach the controller as pointer events."""
    assert canvas_input.eventFilter(widget, _mouse(QEvent.Type.MouseButtonPress, 50, 50))
    assert isinstance(controller.state, DraggingNode)
    assert canvas_input.captured_pointer == QtCanvasInput.MOUSE_POINTER_ID

    assert canvas_input.eventFilter(widget, _mouse(QEvent.Type.MouseMove, 90, 50))
    assert project.get_placement("A").x == 40

    assert canvas_input.eventFilter(widget, _mouse(QEvent.Type.MouseButtonRelease, 90, 50))
    assert isinstance(controller.state, Idle)
    assert canvas_input.captured_pointer is None


def test_right_button_press_is_not_consumed(canvas_input, controller, widget):
    event = _mouse(QEvent.Type.MouseButtonPress, 50, 50, Qt.MouseButton.RightButton)

    assert not canvas_input.eventFilter(widget, event)
    assert isinstance(controller.state, Idle)


def test_hover_moves_pass_through(canvas_input, widget):
    """Moves without an active drag are left to the widget."""
    assert not canvas_input.eventFilter(widget, _mouse(QEvent.Type.MouseMove, 10, 10))


def test_wheel_forward_zooms_in(canvas_input, controller, widget):
    assert canvas_input.eventFilter(widget, _wheel(400, 300, 120))
    assert controller.transform.zoom > 1.0

    controller.transform.reset()
    canvas_input.eventFilter(widget, _wheel(400, 300, -120))
    assert controller.transform.zoom < 1.0


def test_ungrab_cancels_drag(canvas_input, controller, widget):
    """Losing the mouse grab mid-drag should drop back to idle."""
    canvas_input.eventFilter(widget, _mouse(QEvent.Type.MouseButtonPress, 1000, 1000))
    assert isinstance(controller.state, Panning)

    canvas_input.eventFilter(widget, QEvent(QEvent.Type.UngrabMouse))

    assert isinstance(controller.state, Idle)
    assert canvas_input.captured_pointer is None


def test_other_objects_ignored(canvas_input, qtbot):
    other = QWidget()
    qtbot.addWidget(other)
    assert not canvas_input.eventFilter(other, _mouse(QEvent.Type.MouseButtonPress, 50, 50))


def test_detach(canvas_input, controller, widget):
    canvas_input.eventFilter(widget, _mouse(QEvent.Type.MouseButtonPress, 50, 50))

    canvas_input.detach()

    assert isinstance(controller.state, Idle)
    assert canvas_input.captured_pointer is None
