"""FRC wiring canvas: orthogonal wire routing and interactive canvas geometry."""

__version__ = "0.2.0"
