"""Qt event filter feeding widget mouse and wheel events to the controller."""

from __future__ import annotations

from PySide6.QtCore import QEvent, QObject, Qt
from PySide6.QtGui import QMouseEvent, QWheelEvent
from PySide6.QtWidgets import QWidget

from frcwiring.interaction.controller import InteractionController

# DOM-style button numbers used by the controller.
BUTTON_NUMBERS = {
    Qt.MouseButton.LeftButton: 0,
    Qt.MouseButton.MiddleButton: 1,
    Qt.MouseButton.RightButton: 2,
}


class QtCanvasInput(QObject):
    """
    Input layer for a canvas widget.

    Translates mouse presses, moves and releases into pointer events and the
    vertical wheel angle into a zoom delta (wheel forward zooms in). Pointer
    capture is implemented with ``grabMouse`` so a drag keeps receiving events
    after the cursor leaves the widget.
    """

    MOUSE_POINTER_ID = 1

    def __init__(self, controller: InteractionController, widget: QWidget):
        super().__init__(widget)
        self._controller = controller
        self._widget = widget
        self._captured: int | None = None

        controller.set_pointer_capture(self)
        widget.setMouseTracking(True)
        widget.installEventFilter(self)

    @property
    def captured_pointer(self) -> int | None:
        return self._captured

    def capture(self, pointer_id: int) -> None:
        self._captured = pointer_id
        if self._widget.isVisible():
            self._widget.grabMouse()

    def release(self, pointer_id: int) -> None:
        if self._captured != pointer_id:
            return
        self._captured = None
        if self._widget.isVisible():
            self._widget.releaseMouse()

    def detach(self) -> None:
        """Stop forwarding events."""
        self._controller.cancel()
        self._widget.removeEventFilter(self)
        self._controller.set_pointer_capture(None)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is not self._widget:
            return False

        etype = event.type()
        if etype == QEvent.Type.MouseButtonPress:
            return self._on_press(event)
        if etype == QEvent.Type.MouseMove:
            return self._on_move(event)
        if etype == QEvent.Type.MouseButtonRelease:
            return self._on_release(event)
        if etype == QEvent.Type.Wheel:
            return self._on_wheel(event)
        if etype in (QEvent.Type.UngrabMouse, QEvent.Type.Hide) and self._captured is not None:
            pointer_id = self._captured
            self._captured = None
            self._controller.capture_lost(pointer_id)
        return False

    def _on_press(self, event: QMouseEvent) -> bool:
        button = BUTTON_NUMBERS.get(event.button(), -1)
        pos = event.position()
        return self._controller.pointer_down(pos.x(), pos.y(), self.MOUSE_POINTER_ID, button)

    def _on_move(self, event: QMouseEvent) -> bool:
        if not self._controller.is_dragging:
            return False
        pos = event.position()
        self._controller.pointer_move(pos.x(), pos.y(), self.MOUSE_POINTER_ID)
        return True

    def _on_release(self, event: QMouseEvent) -> bool:
        if not self._controller.is_dragging:
            return False
        pos = event.position()
        self._controller.pointer_up(pos.x(), pos.y(), self.MOUSE_POINTER_ID)
        return True

    def _on_wheel(self, event: QWheelEvent) -> bool:
        pos = event.position()
        self._controller.wheel(-event.angleDelta().y(), pos.x(), pos.y())
        event.accept()
        return True
