import enum
from enum import StrEnum


class GeometryType(enum.IntEnum):
    POINT = 1
    LINESTRING = 2
    POLYGON = 3
    MULTIPOLYGON = 6


class GeoJSONType(StrEnum):
    POINT = 'Point'
    LINESTRING = 'LineString'
    POLYGON = 'Polygon'
    MULTIPOLYGON = 'MultiPolygon'
    FEATURE = 'Feature'
    FEATURE_COLLECTION = 'FeatureCollection'
