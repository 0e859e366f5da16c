"""Geometry values: Point, LineString, LinearRing, Polygon, MultiPolygon and
the GeoJSON-only Feature / FeatureCollection wrappers.

Values are frozen dataclasses over tuples, so equality and hashing are exact
and structural. Rings are stored open; the closing point only exists in the
encoded forms.
"""

from dataclasses import dataclass, field
from geoformats.core.constants import MIN_CLOSED_RING_POINTS, MIN_POINTS
from geoformats.core.errors import (
    EmptyGeometryError, InvalidDimensionError, ParseFailureError, RingNotClosedError,
    TooFewPointsError, UnsupportedFeatureGeometryError,
)
from geoformats.core.settings import get_settings
from geoformats.enums.byte_order import ByteOrder
from geoformats.enums.geometry_type import GeometryType, GeoJSONType
from geoformats.formats.primitives import format_number, pack_coordinates, pack_count, resolve_byte_order
from loguru import logger
from numbers import Real
from typing import Any, ClassVar, Iterable, Iterator, Self, Sequence
import numpy as np


def _as_point(value: Any) -> 'Point':
    if isinstance(value, Point):
        return value
    return Point.from_coordinates(value)


class _Codec:
    geometry_type: ClassVar[GeometryType]
    geojson_type: ClassVar[GeoJSONType]

    def to_array(self) -> np.ndarray:
        return np.array([(p.x, p.y) for p in self.vertices()], dtype=np.float64).reshape(-1, 2)

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        array = self.to_array()
        if not len(array):
            raise EmptyGeometryError(f'{type(self).__name__} has no points')
        minx, miny = array.min(axis=0)
        maxx, maxy = array.max(axis=0)
        return float(minx), float(miny), float(maxx), float(maxy)

    def to_wkt(self) -> str:
        from geoformats.formats import wkt
        return wkt.dumps(self)

    def to_wkb(self, byte_order: ByteOrder | int | None = None) -> bytes:
        from geoformats.formats import wkb
        return wkb.dumps(self, byte_order)

    def to_wkb_hex(self, byte_order: ByteOrder | int | None = None) -> str:
        from geoformats.formats import wkb
        return wkb.dumps(self, byte_order, hex=True)

    def to_json(self) -> str:
        from geoformats.formats import geojson
        return geojson.dumps(self)

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        from geoformats.formats import geojson
        return geojson.mapping(self)

    @classmethod
    def from_wkt(cls, text: str) -> Self:
        from geoformats.formats import wkt
        return wkt.loads(text, expected=cls)

    @classmethod
    def from_wkb(cls, data: bytes | str, hex: bool = False) -> Self:
        from geoformats.formats import wkb
        return wkb.loads(data, hex=hex, expected=cls)

    @classmethod
    def from_json(cls, text: str | bytes) -> Self:
        from geoformats.formats import geojson
        return geojson.loads(text, expected=cls)


@dataclass(frozen=True)
class Point(_Codec):
    geometry_type: ClassVar[GeometryType] = GeometryType.POINT
    geojson_type: ClassVar[GeoJSONType] = GeoJSONType.POINT

    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))

    def vertices(self) -> Iterator['Point']:
        yield self

    def to_text(self) -> str:
        return f'{format_number(self.x)} {format_number(self.y)}'

    def to_binary(self, byte_order: ByteOrder | int | None = None) -> bytes:
        return pack_coordinates([(self.x, self.y)], resolve_byte_order(byte_order))

    def coordinates(self) -> list[float]:
        return [self.x, self.y]

    @classmethod
    def from_coordinates(cls, coordinates: Sequence[float]) -> 'Point':
        if isinstance(coordinates, (str, bytes)) or not isinstance(coordinates, Iterable):
            raise ParseFailureError('coordinates must be an array of numbers', raw=coordinates)
        values = list(coordinates)
        if len(values) != 2:
            raise InvalidDimensionError(f'a coordinate needs exactly 2 values, got {len(values)}', raw=coordinates)
        for value in values:
            if isinstance(value, bool) or not isinstance(value, Real):
                raise ParseFailureError('coordinate values must be numbers', raw=coordinates)
        return cls(values[0], values[1])


@dataclass(frozen=True)
class _PointSequence:
    points: tuple[Point, ...]

    def __post_init__(self):
        object.__setattr__(self, 'points', tuple(_as_point(p) for p in self.points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __getitem__(self, index):
        return self.points[index]

    def vertices(self) -> Iterator[Point]:
        return iter(self.points)

    def encoded_points(self) -> tuple[Point, ...]:
        return self.points

    def to_text(self) -> str:
        return '(' + ','.join(p.to_text() for p in self.encoded_points()) + ')'

    def to_binary(self, byte_order: ByteOrder | int | None = None) -> bytes:
        byte_order = resolve_byte_order(byte_order)
        points = self.encoded_points()
        return pack_count(len(points), byte_order) + pack_coordinates([(p.x, p.y) for p in points], byte_order)

    def coordinates(self) -> list[list[float]]:
        return [p.coordinates() for p in self.encoded_points()]


@dataclass(frozen=True)
class LineString(_PointSequence, _Codec):
    geometry_type: ClassVar[GeometryType] = GeometryType.LINESTRING
    geojson_type: ClassVar[GeoJSONType] = GeoJSONType.LINESTRING

    @classmethod
    def from_coordinates(cls, coordinates: Sequence[Sequence[float]]) -> 'LineString':
        points = [Point.from_coordinates(c) for c in coordinates]
        if len(points) < MIN_POINTS:
            raise TooFewPointsError(f'a LineString needs at least {MIN_POINTS} points, got {len(points)}', raw=coordinates)
        return cls(points)


@dataclass(frozen=True)
class LinearRing(_PointSequence):
    def __post_init__(self):
        super().__post_init__()
        if len(self.points) < MIN_POINTS:
            raise TooFewPointsError(f'a LinearRing needs at least {MIN_POINTS} points, got {len(self.points)}', raw=self.points)

    @property
    def closed_points(self) -> tuple[Point, ...]:
        return self.points + (self.points[0],)

    def encoded_points(self) -> tuple[Point, ...]:
        return self.closed_points

    @classmethod
    def from_closed(cls, points: Iterable[Any], strict: bool | None = None) -> 'LinearRing':
        """Build a ring from its closed form, dropping the repeated first point.

        With ``strict`` (default: the ``strict_ring_closure`` setting) a ring
        whose last point differs from its first is rejected; otherwise the
        mismatch is logged and the last point is dropped anyway.
        """
        points = [_as_point(p) for p in points]
        if len(points) < MIN_CLOSED_RING_POINTS:
            raise TooFewPointsError(
                f'a closed ring needs at least {MIN_CLOSED_RING_POINTS} points, got {len(points)}', raw=points,
            )
        if points[-1] != points[0]:
            if strict is None:
                strict = get_settings().strict_ring_closure
            if strict:
                raise RingNotClosedError(f'ring ends at {points[-1].to_text()} instead of {points[0].to_text()}', raw=points)
            logger.warning('Ring not closed, dropping last point {} (first point is {})', points[-1].to_text(), points[0].to_text())
        return cls(points[:-1])

    @classmethod
    def from_coordinates(cls, coordinates: Sequence[Sequence[float]]) -> 'LinearRing':
        return cls.from_closed(Point.from_coordinates(c) for c in coordinates)


@dataclass(frozen=True)
class Polygon(_Codec):
    geometry_type: ClassVar[GeometryType] = GeometryType.POLYGON
    geojson_type: ClassVar[GeoJSONType] = GeoJSONType.POLYGON

    rings: tuple[LinearRing, ...]

    def __post_init__(self):
        rings = tuple(r if isinstance(r, LinearRing) else LinearRing(r) for r in self.rings)
        if not rings:
            raise EmptyGeometryError('a Polygon needs an exterior ring')
        object.__setattr__(self, 'rings', rings)

    def __len__(self) -> int:
        return len(self.rings)

    def __iter__(self) -> Iterator[LinearRing]:
        return iter(self.rings)

    @property
    def exterior(self) -> LinearRing:
        return self.rings[0]

    @property
    def interiors(self) -> tuple[LinearRing, ...]:
        return self.rings[1:]

    def vertices(self) -> Iterator[Point]:
        for ring in self.rings:
            yield from ring

    def coordinates(self) -> list[list[list[float]]]:
        return [ring.coordinates() for ring in self.rings]

    @classmethod
    def from_coordinates(cls, coordinates: Sequence[Sequence[Sequence[float]]]) -> 'Polygon':
        return cls([LinearRing.from_coordinates(ring) for ring in coordinates])


@dataclass(frozen=True)
class MultiPolygon(_Codec):
    geometry_type: ClassVar[GeometryType] = GeometryType.MULTIPOLYGON
    geojson_type: ClassVar[GeoJSONType] = GeoJSONType.MULTIPOLYGON

    polygons: tuple[Polygon, ...]

    def __post_init__(self):
        polygons = tuple(p if isinstance(p, Polygon) else Polygon(p) for p in self.polygons)
        if not polygons:
            raise EmptyGeometryError('a MultiPolygon needs at least one Polygon')
        object.__setattr__(self, 'polygons', polygons)

    def __len__(self) -> int:
        return len(self.polygons)

    def __iter__(self) -> Iterator[Polygon]:
        return iter(self.polygons)

    def vertices(self) -> Iterator[Point]:
        for polygon in self.polygons:
            yield from polygon.vertices()

    def coordinates(self) -> list[list[list[list[float]]]]:
        return [polygon.coordinates() for polygon in self.polygons]

    @classmethod
    def from_coordinates(cls, coordinates: Sequence[Sequence[Sequence[Sequence[float]]]]) -> 'MultiPolygon':
        return cls([Polygon.from_coordinates(polygon) for polygon in coordinates])


Geometry = Point | LineString | Polygon | MultiPolygon
FeatureGeometry = Point | LineString | Polygon


@dataclass(frozen=True)
class Feature:
    geojson_type: ClassVar[GeoJSONType] = GeoJSONType.FEATURE

    geometry: FeatureGeometry
    properties: dict[str, Any] | None = field(default=None, hash=False)

    def __post_init__(self):
        if not isinstance(self.geometry, (Point, LineString, Polygon)):
            raise UnsupportedFeatureGeometryError(
                f'a Feature cannot hold a {type(self.geometry).__name__}', raw=self.geometry,
            )

    @property
    def type(self) -> GeoJSONType:
        return self.geojson_type

    def to_json(self) -> str:
        from geoformats.formats import geojson
        return geojson.dumps(self)

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        from geoformats.formats import geojson
        return geojson.mapping(self)

    @classmethod
    def from_json(cls, text: str | bytes) -> 'Feature':
        from geoformats.formats import geojson
        return geojson.loads(text, expected=cls)


@dataclass(frozen=True)
class FeatureCollection:
    geojson_type: ClassVar[GeoJSONType] = GeoJSONType.FEATURE_COLLECTION

    features: tuple[Feature, ...] = ()

    def __post_init__(self):
        features = tuple(self.features)
        for feature in features:
            if not isinstance(feature, Feature):
                raise TypeError(f'expected a Feature, got {type(feature).__name__}')
        object.__setattr__(self, 'features', features)

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)

    @property
    def type(self) -> GeoJSONType:
        return self.geojson_type

    def to_json(self) -> str:
        from geoformats.formats import geojson
        return geojson.dumps(self)

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        from geoformats.formats import geojson
        return geojson.mapping(self)

    @classmethod
    def from_json(cls, text: str | bytes) -> 'FeatureCollection':
        from geoformats.formats import geojson
        return geojson.loads(text, expected=cls)
