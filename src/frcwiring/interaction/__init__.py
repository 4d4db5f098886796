"""Pointer and wheel interaction for the wiring canvas."""

from frcwiring.interaction.controller import InteractionController
from frcwiring.interaction.qt_input import QtCanvasInput
from frcwiring.interaction.state import (
    DraggingBend,
    DraggingNode,
    DraggingSegment,
    DraggingWireEndpoint,
    Idle,
    InteractionState,
    Panning,
    PointerCapture,
)

__all__ = [
    "DraggingBend",
    "DraggingNode",
    "DraggingSegment",
    "DraggingWireEndpoint",
    "Idle",
    "InteractionController",
    "InteractionState",
    "Panning",
    "PointerCapture",
    "QtCanvasInput",
]
