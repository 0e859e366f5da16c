from geoformats.enums.geometry_type import GeometryType, GeoJSONType

MIN_POINTS = 3
# A closed ring repeats its first point
MIN_CLOSED_RING_POINTS = MIN_POINTS + 1

# Integral floats inside this range are written to JSON without a fraction
MAX_SAFE_INTEGER = 2 ** 53

WKT_KEYWORDS = {
    GeometryType.POINT: 'POINT',
    GeometryType.LINESTRING: 'LINESTRING',
    GeometryType.POLYGON: 'POLYGON',
    GeometryType.MULTIPOLYGON: 'MULTIPOLYGON',
}

FEATURE_GEOMETRY_TYPES = (
    GeoJSONType.POINT,
    GeoJSONType.LINESTRING,
    GeoJSONType.POLYGON,
)
