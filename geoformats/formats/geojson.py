"""GeoJSON reader and writer for geometries, Feature and FeatureCollection.

Decoding looks at the ``type`` tag once and hands the document to the
matching pydantic schema, which fixes the nesting depth and the 2-value
positions; the geometry classes then apply the point-count and ring-closure
rules. Output is compact (no spaces) with keys in ``type``, ``coordinates``
/ ``geometry`` / ``features`` order, so decoding and re-encoding a document
this module wrote reproduces it byte for byte.
"""

from geoformats.core.constants import FEATURE_GEOMETRY_TYPES
from geoformats.core.errors import (
    FormatMismatchError, InvalidDimensionError, ParseFailureError, UnrecognizedTypeError,
    UnsupportedFeatureGeometryError,
)
from geoformats.core.models import Feature, FeatureCollection, Geometry, LineString, MultiPolygon, Point, Polygon
from geoformats.enums.geometry_type import GeoJSONType
from geoformats.formats.primitives import json_number
from geoformats.schemas import geojson as schemas
from loguru import logger
from pydantic import BaseModel, ValidationError
from typing import Any
import json

GeoJSON = Geometry | Feature | FeatureCollection

_GEOMETRIES = {
    GeoJSONType.POINT: Point,
    GeoJSONType.LINESTRING: LineString,
    GeoJSONType.POLYGON: Polygon,
    GeoJSONType.MULTIPOLYGON: MultiPolygon,
}

_SCHEMAS = {
    GeoJSONType.POINT: schemas.Point,
    GeoJSONType.LINESTRING: schemas.LineString,
    GeoJSONType.POLYGON: schemas.Polygon,
    GeoJSONType.MULTIPOLYGON: schemas.MultiPolygon,
}


# ---------------------------
# Writer
# ---------------------------

def _json_coordinates(value):
    if isinstance(value, list):
        return [_json_coordinates(item) for item in value]
    return json_number(value)

def mapping(value: GeoJSON) -> dict[str, Any]:
    if isinstance(value, Feature):
        document = {'type': value.type.value, 'geometry': mapping(value.geometry)}
        if value.properties is not None:
            document['properties'] = value.properties
        return document
    if isinstance(value, FeatureCollection):
        return {'type': value.type.value, 'features': [mapping(feature) for feature in value.features]}
    return {'type': value.geojson_type.value, 'coordinates': _json_coordinates(value.coordinates())}

def dumps(value: GeoJSON) -> str:
    return json.dumps(mapping(value), separators=(',', ':'), ensure_ascii=False, allow_nan=False)


# ---------------------------
# Reader
# ---------------------------

def _location(detail: dict) -> str:
    return '.'.join(str(part) for part in detail['loc']) or '<root>'

def _validate(schema: type[BaseModel], document: dict) -> BaseModel:
    try:
        return schema.model_validate(document)
    except ValidationError as error:
        details = error.errors()
        for detail in details:
            # Only positions carry length constraints
            if detail['type'] in ('too_short', 'too_long'):
                raise InvalidDimensionError(
                    f'a position needs exactly 2 values at {_location(detail)}', raw=detail['input'],
                ) from error
        raise ParseFailureError(f'{details[0]["msg"]} at {_location(details[0])}', raw=document) from error

def _read_type(document: Any) -> GeoJSONType:
    if not isinstance(document, dict):
        raise ParseFailureError('a GeoJSON object must be a JSON object', raw=document)
    tag = document.get('type')
    try:
        return GeoJSONType(tag)
    except ValueError:
        raise UnrecognizedTypeError(f'unsupported GeoJSON type {tag!r}', raw=document) from None

def _read_geometry(document: dict, kind: GeoJSONType) -> Geometry:
    model = _validate(_SCHEMAS[kind], document)
    return _GEOMETRIES[kind].from_coordinates(model.coordinates)

def _read_feature(document: dict) -> Feature:
    # The geometry tag decides the decoder before the rest is validated
    geometry = document.get('geometry')
    tag = geometry.get('type') if isinstance(geometry, dict) else None
    if tag not in FEATURE_GEOMETRY_TYPES:
        raise UnsupportedFeatureGeometryError(
            'Feature geometry must be a Point, LineString or Polygon', raw=json.dumps(geometry, default=str),
        )
    model = _validate(schemas.Feature, document)
    return Feature(
        geometry=_GEOMETRIES[GeoJSONType(tag)].from_coordinates(model.geometry.coordinates),
        properties=model.properties,
    )

def _read_feature_collection(document: dict) -> FeatureCollection:
    members = document.get('features')
    if not isinstance(members, list):
        raise ParseFailureError('FeatureCollection "features" must be an array', raw=document)
    features = []
    for member in members:
        if _read_type(member) is not GeoJSONType.FEATURE:
            raise FormatMismatchError('FeatureCollection members must be Features', raw=member)
        features.append(_read_feature(member))
    return FeatureCollection(features)

def from_mapping(document: dict[str, Any], expected: type | None = None) -> GeoJSON:
    """Build a value from an already parsed GeoJSON object.

    ``expected`` (a geometry class, Feature or FeatureCollection) makes any
    other ``type`` tag a :class:`FormatMismatchError`.
    """
    kind = _read_type(document)
    if expected is not None and kind is not expected.geojson_type:
        raise FormatMismatchError(f'expected {expected.geojson_type.value}, found {kind.value}', raw=document)

    if kind is GeoJSONType.FEATURE:
        return _read_feature(document)
    if kind is GeoJSONType.FEATURE_COLLECTION:
        return _read_feature_collection(document)
    return _read_geometry(document, kind)

def _reject_constant(name: str):
    raise ParseFailureError(f'{name} is not a JSON number', raw=name)

def loads(text: str | bytes, expected: type | None = None) -> GeoJSON:
    try:
        document = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as error:
        raise ParseFailureError(f'invalid JSON: {error.msg}', raw=text) from error

    value = from_mapping(document, expected)
    logger.debug('Decoded GeoJSON {}', type(value).__name__)
    return value
