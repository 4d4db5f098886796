"""Data models for the wiring canvas."""

from frcwiring.models.catalog import (
    CatalogItem,
    DeviceCatalog,
    Footprint,
    PortAnchor,
    PortCategory,
    builtin_catalog,
)
from frcwiring.models.connection import Connection, Endpoint
from frcwiring.models.device import Device, Placement
from frcwiring.models.geometry import Axis, Bounds, Point, RouteMode, ScreenPoint
from frcwiring.models.project import Net, Project

__all__ = [
    "Axis",
    "Bounds",
    "CatalogItem",
    "Connection",
    "Device",
    "DeviceCatalog",
    "Endpoint",
    "Footprint",
    "Net",
    "Placement",
    "Point",
    "PortAnchor",
    "PortCategory",
    "Project",
    "RouteMode",
    "ScreenPoint",
    "builtin_catalog",
]
