import random

import pytest

import motion_planner
from motion_planner.core import geometry
from motion_planner.core.geometry import (
    CanvasBounds,
    Point,
    PointLike,
    PolygonUtils,
    Winding,
    as_bounds,
    canonical_key,
    ccw,
    edge_key,
    format_point,
    line_intersection,
    segments_intersect,
    segments_intersect_many,
)


SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]


def _random_point(rng):
    return (rng.uniform(-100, 100), rng.uniform(-100, 100))


def test_ccw_orientation():
    assert ccw((0, 0), (1, 0), (0, 1))
    assert not ccw((0, 0), (0, 1), (1, 0))
    # 共線不算逆時針
    assert not ccw((0, 0), (1, 1), (2, 2))


def test_crossing_segments_intersect_at_midpoint():
    assert segments_intersect((0, 0), (10, 10), (0, 10), (10, 0))
    assert line_intersection((0, 0), (10, 10), (0, 10), (10, 0)) == Point(5.0, 5.0)


def test_parallel_segments_do_not_intersect():
    assert not segments_intersect((0, 0), (10, 0), (0, 5), (10, 5))
    assert line_intersection((0, 0), (10, 0), (0, 5), (10, 5)) is None


def test_collinear_segments_have_no_intersection_point():
    assert line_intersection((0, 0), (10, 0), (5, 0), (15, 0)) is None


def test_line_intersection_outside_segments_is_none():
    # 直線交於 (1.5, 1.5)，不在兩線段上
    assert line_intersection((0, 0), (1, 1), (3, 0), (2, 1)) is None


def test_segments_intersect_is_symmetric():
    rng = random.Random(7)
    for _ in range(200):
        a, b, c, d = (_random_point(rng) for _ in range(4))
        expected = segments_intersect(a, b, c, d)
        assert segments_intersect(c, d, a, b) == expected
        assert segments_intersect(b, a, d, c) == expected


def test_segments_intersect_many_matches_scalar_version():
    rng = random.Random(11)
    a, b = _random_point(rng), _random_point(rng)
    starts = [_random_point(rng) for _ in range(50)]
    ends = [_random_point(rng) for _ in range(50)]

    mask = segments_intersect_many(a, b, starts, ends)

    assert mask.shape == (50,)
    for i in range(50):
        assert bool(mask[i]) == segments_intersect(a, b, starts[i], ends[i])


def test_canonical_key_merges_points_within_precision():
    assert canonical_key((1.2345612, 2.0)) == canonical_key((1.2345612 + 5e-7, 2.0))
    assert canonical_key((1.234561, 2.0)) == canonical_key((1.234564, 2.0))
    assert canonical_key((1.23456, 2.0)) != canonical_key((1.23457, 2.0))


def test_canonical_key_treats_negative_zero_as_zero():
    assert canonical_key((-0.0, 5.0)) == canonical_key((0.0, 5.0))


def test_edge_key_ignores_direction():
    assert edge_key((0, 0), (3, 4)) == edge_key((3, 4), (0, 0))


def test_format_point():
    assert format_point((40.0, -20.0)) == "(40, -20)"
    assert format_point((1.0, 2.5), 2) == "(1.00, 2.50)"


def test_as_bounds_accepts_tuple_dict_and_instance():
    bounds = CanvasBounds(800, 600)
    assert as_bounds((800, 600)) == bounds
    assert as_bounds({'width': 800, 'height': 600}) == bounds
    assert as_bounds(bounds) is bounds


def test_canvas_boundary_check():
    bounds = CanvasBounds(100, 50)
    assert bounds.on_boundary((0, 10))
    assert bounds.on_boundary((100, 10))
    assert bounds.on_boundary((10, 60))
    assert not bounds.on_boundary((10, 10))
    assert bounds.contains((100, 50))
    assert not bounds.contains((101, 50))


def test_winding_and_area():
    assert PolygonUtils.winding(SQUARE) == Winding.CCW
    assert PolygonUtils.winding(list(reversed(SQUARE))) == Winding.CW
    assert PolygonUtils.calculate_area(SQUARE) == pytest.approx(100.0)


def test_iter_edges_closes_polygon():
    edges = list(PolygonUtils.iter_edges(SQUARE))

    assert len(edges) == 4
    assert edges[-1] == (Point(0, 10), Point(0, 0))
    assert list(PolygonUtils.iter_edges([(1, 1)])) == []


@pytest.mark.parametrize(
    'end, spacing, expected_count',
    [((10, 0), 5, 3), ((11, 0), 5, 4), ((3, 4), 20, 2), ((0, 0), 5, 2)],
)
def test_sample_edge_counts(end, spacing, expected_count):
    samples = PolygonUtils.sample_edge((0, 0), end, spacing)

    assert len(samples) == expected_count
    assert samples[0] == Point(0, 0)
    assert samples[-1] == Point(*end)


def test_bounding_box_and_centroid():
    box_min, box_max = PolygonUtils.calculate_bounding_box(SQUARE)

    assert list(box_min) == [0, 0]
    assert list(box_max) == [10, 10]
    assert PolygonUtils.calculate_centroid(SQUARE) == Point(5, 5)


def test_clip_to_rectangle_keeps_inside_part():
    square = [(-10, -10), (10, -10), (10, 10), (-10, 10)]

    clipped = PolygonUtils.clip_to_rectangle(square, 100, 100)

    assert {canonical_key(p) for p in clipped} == {(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)}
    assert len(clipped) == 4


def test_clip_to_rectangle_outside_polygon_is_empty():
    assert PolygonUtils.clip_to_rectangle([(200, 200), (210, 200), (210, 210)], 100, 100) == []


def test_sort_counter_clockwise_orders_by_angle():
    shuffled = [(10, 10), (0, 0), (0, 10), (10, 0)]

    ordered = PolygonUtils.sort_counter_clockwise(shuffled)

    assert ordered == [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]


def test_package_exports_point_like_alias():
    assert 'PointLike' in geometry.__all__
    assert geometry.PointLike is PointLike
    assert callable(motion_planner.compute_path)


def test_point_is_a_plain_named_tuple():
    point = Point(1.5, -2)

    assert tuple(point) == (1.5, -2)
    assert point._fields == ('x', 'y')
    assert not hasattr(point, 'to_tuple')
