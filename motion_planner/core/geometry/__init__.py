"""
Geometry 幾何運算模組
"""

from .coordinate import (
    KEY_PRECISION,
    CanvasBounds,
    Edge,
    Point,
    PointKey,
    PointLike,
    as_bounds,
    as_point,
    canonical_key,
    distance,
    edge_key,
    format_point
)

from .intersection import (
    ccw,
    line_intersection,
    segments_intersect,
    segments_intersect_many
)

from .polygon import (
    PolygonUtils,
    Winding
)

__all__ = [
    'KEY_PRECISION',
    'CanvasBounds',
    'Edge',
    'Point',
    'PointKey',
    'PointLike',
    'as_bounds',
    'as_point',
    'canonical_key',
    'distance',
    'edge_key',
    'format_point',
    'ccw',
    'line_intersection',
    'segments_intersect',
    'segments_intersect_many',
    'PolygonUtils',
    'Winding'
]
