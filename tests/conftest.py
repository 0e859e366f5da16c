"""Shared geometry fixtures."""

import pytest
from loguru import logger

from geoformats.core.models import LinearRing, LineString, MultiPolygon, Point, Polygon
from geoformats.core.settings import settings


@pytest.fixture
def point():
    return Point(4.0, 9.5)


@pytest.fixture
def triangle():
    """Open ring (4,9.5) (2,9.5) (4,5.5); the closing point is implicit."""
    return LinearRing([Point(4.0, 9.5), Point(2.0, 9.5), Point(4.0, 5.5)])


@pytest.fixture
def line_string():
    return LineString([Point(4.0, 9.5), Point(2.0, 9.5), Point(4.0, 5.5)])


@pytest.fixture
def polygon(triangle):
    return Polygon([triangle])


@pytest.fixture
def polygon_with_hole():
    exterior = LinearRing([(0, 0), (10, 0), (10, 10), (0, 10)])
    hole = LinearRing([(2, 2), (4, 2), (4, 4), (2, 4)])
    return Polygon([exterior, hole])


@pytest.fixture
def multi_polygon():
    return MultiPolygon([
        Polygon([[(4, 9.5), (2, 9.5), (4, 5.5)]]),
        Polygon([[(8, 9.5), (6, 9.5), (8, 5.5)]]),
    ])


@pytest.fixture
def lenient_rings(monkeypatch):
    monkeypatch.setattr(settings, 'strict_ring_closure', False)


@pytest.fixture
def log_messages():
    """Collect geoformats log messages at WARNING and above."""
    messages = []
    logger.enable('geoformats')
    handler_id = logger.add(messages.append, level='WARNING', format='{message}')
    yield messages
    logger.remove(handler_id)
    logger.disable('geoformats')
