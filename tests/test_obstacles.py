import numpy as np
import pytest

from motion_planner.core.collision import (
    PolygonObstacle,
    RectangleObstacle,
    normalize_obstacles,
)
from motion_planner.core.geometry import Point


def test_rectangle_corners_without_rotation():
    rect = RectangleObstacle(center=(50, 50), width=20, height=10)

    assert rect.to_polygon() == [Point(40, 45), Point(60, 45), Point(60, 55), Point(40, 55)]


def test_rectangle_corners_rotate_about_center():
    rect = RectangleObstacle(center=(50, 50), width=20, height=10, rotation=90)

    corners = rect.to_polygon()

    assert corners[0] == pytest.approx((55, 40))
    assert corners[1] == pytest.approx((55, 60))
    assert corners[2] == pytest.approx((45, 60))
    assert corners[3] == pytest.approx((45, 40))


def test_polygon_contains_point():
    square = PolygonObstacle(vertices=[(0, 0), (10, 0), (10, 10), (0, 10)])

    assert square.contains_point((5, 5))
    assert not square.contains_point((15, 5))
    assert not PolygonObstacle(vertices=[(0, 0), (1, 1)]).contains_point((0.5, 0.5))


def test_normalize_accepts_mixed_inputs():
    obstacles = [
        [(0, 0), (1, 0), (1, 1)],
        np.array([[5.0, 5.0], [6.0, 5.0], [6.0, 6.0]]),
        RectangleObstacle(center=(0, 0), width=2, height=2),
        PolygonObstacle(vertices=[(9, 9), (10, 9), (10, 10)]),
    ]

    polygons = normalize_obstacles(obstacles)

    assert len(polygons) == 4
    assert polygons[0] == [Point(0, 0), Point(1, 0), Point(1, 1)]
    assert polygons[1][2] == Point(6.0, 6.0)
    assert polygons[2][0] == Point(-1, -1)
    assert all(isinstance(p, Point) for polygon in polygons for p in polygon)


def test_normalize_none_is_empty():
    assert normalize_obstacles(None) == []


def test_normalize_keeps_degenerate_polygons():
    assert normalize_obstacles([[(1, 1)]]) == [[Point(1, 1)]]


@pytest.mark.parametrize('bad', [42, "square", None])
def test_normalize_rejects_unknown_obstacle_types(bad):
    with pytest.raises(ValueError):
        normalize_obstacles([bad])
