"""Tests for Polygon encodings, with and without holes."""

import struct

import pytest

from geoformats.core.errors import EmptyGeometryError, FormatMismatchError, RingNotClosedError, UnrecognizedTypeError
from geoformats.core.models import LinearRing, Point, Polygon


class TestPolygonValue:
    """Construction and accessors."""

    @pytest.mark.unit
    def test_rings_from_coordinates(self, polygon, triangle):
        assert Polygon([[(4, 9.5), (2, 9.5), (4, 5.5)]]) == polygon
        assert polygon.exterior == triangle
        assert polygon.interiors == ()

    @pytest.mark.unit
    def test_holes(self, polygon_with_hole):
        assert len(polygon_with_hole) == 2
        assert polygon_with_hole.interiors[0][0] == Point(2, 2)

    @pytest.mark.unit
    def test_needs_a_ring(self):
        with pytest.raises(EmptyGeometryError):
            Polygon([])

    @pytest.mark.unit
    def test_bounds(self, polygon_with_hole):
        assert polygon_with_hole.bounds == (0.0, 0.0, 10.0, 10.0)


class TestPolygonWKT:
    """Text form."""

    @pytest.mark.unit
    def test_to_wkt(self, polygon):
        assert polygon.to_wkt() == 'POLYGON ((4 9.5,2 9.5,4 5.5,4 9.5))'

    @pytest.mark.unit
    def test_to_wkt_with_hole(self, polygon_with_hole):
        assert polygon_with_hole.to_wkt() == 'POLYGON ((0 0,10 0,10 10,0 10,0 0),(2 2,4 2,4 4,2 4,2 2))'

    @pytest.mark.unit
    def test_round_trip(self, polygon, polygon_with_hole):
        assert Polygon.from_wkt(polygon.to_wkt()) == polygon
        assert Polygon.from_wkt(polygon_with_hole.to_wkt()) == polygon_with_hole

    @pytest.mark.unit
    def test_real_world_coordinates(self):
        text = (
            'POLYGON ((124.825741335906 -27.4770818851779,124.76778384003 -28.3670436543958,'
            '125.79920096678 -28.4138865451055,125.848920710608 -27.5235483019135,'
            '124.825741335906 -27.4770818851779))'
        )
        p = Polygon.from_wkt(text)
        assert len(p.exterior) == 4
        assert p.exterior[0] == Point(124.825741335906, -27.4770818851779)
        assert p.to_wkt() == text

    @pytest.mark.unit
    def test_irregular_whitespace(self, polygon_with_hole):
        text = 'POLYGON ( (0 0, 10 0, 10 10, 0 10, 0 0) ,\n (2 2, 4 2, 4 4, 2 4, 2 2) )'
        assert Polygon.from_wkt(text) == polygon_with_hole

    @pytest.mark.unit
    def test_unclosed_ring(self):
        with pytest.raises(RingNotClosedError):
            Polygon.from_wkt('POLYGON ((0 0,1 0,1 1,0 1))')


class TestPolygonWKB:
    """Binary form."""

    @pytest.mark.unit
    def test_layout(self, polygon):
        data = polygon.to_wkb(1)
        assert data[:5] == b'\x01\x03\x00\x00\x00'
        assert struct.unpack('<I', data[5:9])[0] == 1
        assert struct.unpack('<I', data[9:13])[0] == 4
        assert len(data) == 13 + 4 * 16

    @pytest.mark.unit
    def test_little_endian_round_trip(self, polygon):
        """Scenario: triangle polygon through little-endian WKB."""
        assert Polygon.from_wkb(polygon.to_wkb(1)) == polygon

    @pytest.mark.unit
    def test_big_endian_round_trip_with_hole(self, polygon_with_hole):
        data = polygon_with_hole.to_wkb(0)
        assert data[:5] == b'\x00\x00\x00\x00\x03'
        assert Polygon.from_wkb(data) == polygon_with_hole

    @pytest.mark.unit
    def test_unclosed_ring(self):
        data = struct.pack('<BIII', 1, 3, 1, 4) + struct.pack('<8d', 0, 0, 1, 0, 1, 1, 0, 1)
        with pytest.raises(RingNotClosedError):
            Polygon.from_wkb(data)

    @pytest.mark.unit
    def test_unclosed_ring_lenient(self, lenient_rings):
        data = struct.pack('<BIII', 1, 3, 1, 4) + struct.pack('<8d', 0, 0, 1, 0, 1, 1, 0, 1)
        assert Polygon.from_wkb(data) == Polygon([LinearRing([(0, 0), (1, 0), (1, 1)])])

    @pytest.mark.unit
    def test_unknown_type_code(self):
        with pytest.raises(UnrecognizedTypeError):
            Polygon.from_wkb(struct.pack('<BI', 1, 7))

    @pytest.mark.unit
    def test_no_rings(self):
        with pytest.raises(EmptyGeometryError):
            Polygon.from_wkb(struct.pack('<BII', 1, 3, 0))


class TestPolygonJSON:
    """GeoJSON form."""

    @pytest.mark.unit
    def test_to_json(self, polygon):
        assert polygon.to_json() == '{"type":"Polygon","coordinates":[[[4,9.5],[2,9.5],[4,5.5],[4,9.5]]]}'

    @pytest.mark.unit
    def test_round_trip(self, polygon_with_hole):
        assert Polygon.from_json(polygon_with_hole.to_json()) == polygon_with_hole

    @pytest.mark.unit
    def test_wrong_tag(self, point):
        with pytest.raises(FormatMismatchError):
            Polygon.from_json(point.to_json())

    @pytest.mark.unit
    def test_unknown_tag(self):
        with pytest.raises(UnrecognizedTypeError):
            Polygon.from_json('{"type":"Circle","coordinates":[]}')

    @pytest.mark.unit
    def test_unclosed_ring(self):
        with pytest.raises(RingNotClosedError):
            Polygon.from_json('{"type":"Polygon","coordinates":[[[0,0],[1,0],[1,1],[0,1]]]}')
