from geoformats.core.models import Geometry
from geoformats.formats import geojson
from shapely import Geometry as ShapelyGeometry
from shapely.geometry import mapping, shape


def to_shapely(geometry: Geometry) -> ShapelyGeometry:
    return shape(geojson.mapping(geometry))

def from_shapely(geometry: ShapelyGeometry) -> Geometry:
    if not isinstance(geometry, ShapelyGeometry):
        raise TypeError(f'expected a shapely geometry, got {type(geometry).__name__}')
    return geojson.from_mapping(mapping(geometry))
