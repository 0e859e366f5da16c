from geoformats.core.errors import (
    EmptyGeometryError, FormatMismatchError, GeometryError, InvalidDimensionError, ParseFailureError,
    RingNotClosedError, TooFewPointsError, TruncatedInputError, UnrecognizedTypeError,
    UnsupportedFeatureGeometryError,
)
from geoformats.core.models import (
    Feature, FeatureCollection, Geometry, LinearRing, LineString, MultiPolygon, Point, Polygon,
)
from geoformats.enums.byte_order import ByteOrder
from geoformats.enums.geometry_type import GeometryType, GeoJSONType
from loguru import logger

# Library logging stays silent until the application calls logger.enable('geoformats')
logger.disable('geoformats')
