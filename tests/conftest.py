"""Pytest configuration and fixtures."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """Create a QApplication instance for the entire test session."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def config():
    """Canvas config whose fallback node size keeps ports on the 20px grid."""
    from frcwiring.services.settings_service import CanvasConfig

    return CanvasConfig(fallback_node_width=160, fallback_node_height=80)


@pytest.fixture
def catalog():
    """A small catalog with one fallback-sized and one footprint-sized device."""
    from frcwiring.models.catalog import (
        CatalogItem,
        DeviceCatalog,
        Footprint,
        PortAnchor,
        PortCategory,
    )

    return DeviceCatalog(
        [
            CatalogItem(
                id="box",
                name="Box",
                ports=[
                    PortAnchor("left", PortCategory.GAUGE_18, 0.0, 0.5),
                    PortAnchor("right", PortCategory.GAUGE_18, 1.0, 0.5),
                    PortAnchor("eth", PortCategory.ETHERNET, 0.5, 0.0),
                ],
            ),
            CatalogItem(
                id="sized",
                name="Sized",
                footprint=Footprint(2.0, 1.0),
                ports=[PortAnchor("p", PortCategory.GAUGE_18, 0.5, 1.0)],
            ),
        ]
    )


@pytest.fixture
def resolver(catalog, config):
    """Port resolver over the test catalog."""
    from frcwiring.routing.ports import PortResolver

    return PortResolver(catalog, config)


@pytest.fixture
def project():
    """Two boxes joined by an implicit wire.

    ``A.right`` is at (160, 40) and ``B.left`` at (400, 240).
    """
    from frcwiring.models.connection import Connection, Endpoint
    from frcwiring.models.project import Project

    project = Project(name="test_project")
    project.add_device("box", 0, 0, device_id="A")
    project.add_device("box", 400, 200, device_id="B")
    project.connections["c1"] = Connection(
        id="c1",
        from_endpoint=Endpoint("A", "right"),
        to_endpoint=Endpoint("B", "left"),
        net_id="net:DIO:18_gauge",
    )
    return project


@pytest.fixture
def controller(qapp, project, catalog, config):
    """Interaction controller persisting its edits into ``project``."""
    from frcwiring.interaction.controller import InteractionController

    controller = InteractionController(project, catalog, config)
    project.connect_controller(controller)
    return controller
