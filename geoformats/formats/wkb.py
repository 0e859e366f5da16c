"""Well-Known Binary reader and writer.

Every geometry starts with a 1-byte order flag (0 big-endian, 1 little-endian)
and a 4-byte type code in that order. Polygons inside a MultiPolygon carry
their own flag and type code.
"""

from geoformats.core.constants import MIN_CLOSED_RING_POINTS, MIN_POINTS
from geoformats.core.errors import (
    FormatMismatchError, ParseFailureError, TooFewPointsError, TruncatedInputError, UnrecognizedTypeError,
)
from geoformats.core.models import Geometry, LinearRing, LineString, MultiPolygon, Point, Polygon
from geoformats.enums.byte_order import ByteOrder
from geoformats.enums.geometry_type import GeometryType
from geoformats.formats.primitives import pack_count, pack_header, resolve_byte_order, unpack_coordinates
from loguru import logger
import struct

COORDINATE_SIZE = 16
COUNT_SIZE = 4


# ---------------------------
# Writer
# ---------------------------

def _write_polygon(polygon: Polygon, byte_order: ByteOrder) -> bytes:
    return pack_count(len(polygon.rings), byte_order) + b''.join(ring.to_binary(byte_order) for ring in polygon.rings)

def _write_multi_polygon(multi_polygon: MultiPolygon, byte_order: ByteOrder) -> bytes:
    return pack_count(len(multi_polygon.polygons), byte_order) + b''.join(
        _write_geometry(polygon, byte_order) for polygon in multi_polygon.polygons
    )

_WRITERS = {
    GeometryType.POINT: lambda point, byte_order: point.to_binary(byte_order),
    GeometryType.LINESTRING: lambda line_string, byte_order: line_string.to_binary(byte_order),
    GeometryType.POLYGON: _write_polygon,
    GeometryType.MULTIPOLYGON: _write_multi_polygon,
}

def _write_geometry(geometry: Geometry, byte_order: ByteOrder) -> bytes:
    geometry_type = geometry.geometry_type
    return pack_header(byte_order, geometry_type) + _WRITERS[geometry_type](geometry, byte_order)

def dumps(geometry: Geometry, byte_order: ByteOrder | int | None = None, hex: bool = False) -> bytes | str:
    """Encode a geometry as WKB, in the configured byte order unless one is given.

    With ``hex`` the result is an uppercase hex string instead of bytes.
    """
    data = _write_geometry(geometry, resolve_byte_order(byte_order))
    if hex:
        return data.hex().upper()
    return data


# ---------------------------
# Reader
# ---------------------------

class _Reader:
    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def read(self, size: int, what: str) -> bytes:
        if size > self.remaining:
            raise TruncatedInputError(
                f'{what} needs {size} bytes at offset {self.offset}, only {self.remaining} left', raw=self.data,
            )
        chunk = self.data[self.offset:self.offset + size]
        self.offset += size
        return chunk

    def read_byte_order(self) -> ByteOrder:
        flag = self.read(1, 'byte order flag')[0]
        try:
            return ByteOrder(flag)
        except ValueError:
            raise ParseFailureError(f'unknown byte order flag {flag} at offset {self.offset - 1}', raw=self.data) from None

    def read_count(self, byte_order: ByteOrder, what: str) -> int:
        return struct.unpack(f'{byte_order.prefix}I', self.read(COUNT_SIZE, what))[0]

    def read_points(self, count: int, byte_order: ByteOrder) -> list[Point]:
        chunk = self.read(count * COORDINATE_SIZE, f'{count} coordinates')
        return [Point(x, y) for x, y in unpack_coordinates(chunk, byte_order)]

    def read_header(self) -> tuple[ByteOrder, GeometryType]:
        byte_order = self.read_byte_order()
        code = self.read_count(byte_order, 'geometry type code')
        try:
            return byte_order, GeometryType(code)
        except ValueError:
            raise UnrecognizedTypeError(f'unsupported WKB geometry type code {code}', raw=self.data) from None


def _read_point(reader: _Reader, byte_order: ByteOrder) -> Point:
    return reader.read_points(1, byte_order)[0]

def _read_line_string(reader: _Reader, byte_order: ByteOrder) -> LineString:
    count = reader.read_count(byte_order, 'point count')
    if count < MIN_POINTS:
        raise TooFewPointsError(f'a LineString needs at least {MIN_POINTS} points, got {count}', raw=reader.data)
    return LineString(reader.read_points(count, byte_order))

def _read_ring(reader: _Reader, byte_order: ByteOrder) -> LinearRing:
    count = reader.read_count(byte_order, 'ring point count')
    if count < MIN_CLOSED_RING_POINTS:
        raise TooFewPointsError(
            f'a closed ring needs at least {MIN_CLOSED_RING_POINTS} points, got {count}', raw=reader.data,
        )
    return LinearRing.from_closed(reader.read_points(count, byte_order))

def _read_polygon(reader: _Reader, byte_order: ByteOrder) -> Polygon:
    count = reader.read_count(byte_order, 'ring count')
    return Polygon([_read_ring(reader, byte_order) for _ in range(count)])

def _read_multi_polygon(reader: _Reader, byte_order: ByteOrder) -> MultiPolygon:
    count = reader.read_count(byte_order, 'polygon count')
    polygons = []
    for _ in range(count):
        member_order, member_type = reader.read_header()
        if member_type is not GeometryType.POLYGON:
            raise FormatMismatchError(
                f'MultiPolygon member has type code {member_type.value}, expected {GeometryType.POLYGON.value}',
                raw=reader.data,
            )
        polygons.append(_read_polygon(reader, member_order))
    return MultiPolygon(polygons)

_READERS = {
    GeometryType.POINT: _read_point,
    GeometryType.LINESTRING: _read_line_string,
    GeometryType.POLYGON: _read_polygon,
    GeometryType.MULTIPOLYGON: _read_multi_polygon,
}

def loads(data: bytes | str, hex: bool = False, expected: type | None = None) -> Geometry:
    """Decode WKB bytes (or a hex string) into a geometry.

    When ``expected`` is a geometry class, a different type code raises
    :class:`FormatMismatchError` before any payload is read. Bytes left over
    after the geometry are rejected.
    """
    if hex or isinstance(data, str):
        try:
            data = bytes.fromhex(data.decode('ascii') if isinstance(data, bytes) else data)
        except (UnicodeDecodeError, ValueError):
            raise ParseFailureError('invalid hex WKB', raw=data) from None
    data = bytes(data)

    reader = _Reader(data)
    byte_order, geometry_type = reader.read_header()
    if expected is not None and expected.geometry_type is not geometry_type:
        raise FormatMismatchError(
            f'expected {expected.__name__} (type code {expected.geometry_type.value}), '
            f'found type code {geometry_type.value}',
            raw=data,
        )

    geometry = _READERS[geometry_type](reader, byte_order)
    if reader.remaining:
        raise ParseFailureError(f'{reader.remaining} trailing bytes after {type(geometry).__name__}', raw=data)
    logger.debug('Decoded WKB {} ({})', type(geometry).__name__, byte_order.name)
    return geometry
