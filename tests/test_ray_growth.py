import pytest

from motion_planner import PlannerStatus, PlannerType, compute_path, compute_trace
from motion_planner.config import PlannerSettings
from motion_planner.core.geometry import Point, Winding
from motion_planner.core.global_planner import RayGrowthPlanner, outward_normal


SQUARE = [(40, 40), (60, 40), (60, 60), (40, 60)]


def test_outward_normal_for_counter_clockwise_polygon():
    assert outward_normal((0, 0), (10, 0), Winding.CCW, (5, 5)) == pytest.approx((0, -1))
    assert outward_normal((10, 0), (10, 10), Winding.CCW, (5, 5)) == pytest.approx((1, 0))


def test_outward_normal_for_clockwise_polygon():
    assert outward_normal((0, 0), (0, 10), Winding.CW, (5, 5)) == pytest.approx((-1, 0))


def test_outward_normal_flips_when_winding_choice_points_inward():
    assert outward_normal((0, 0), (10, 0), Winding.CW, (5, 5)) == pytest.approx((0, -1))


def test_outward_normal_falls_back_to_winding_choice():
    # 重心在邊的延長線上，兩個法向都不指離重心
    assert outward_normal((0, 0), (10, 0), Winding.CCW, (5, 0)) == pytest.approx((0, -1))


def test_zero_length_edge_has_no_normal():
    assert outward_normal((3, 3), (3, 3), Winding.CCW, (0, 0)) is None


def test_cast_rays_skips_zero_length_edges():
    planner = RayGrowthPlanner(PlannerSettings())
    with_duplicate = [(40, 40), (60, 40), (60, 40), (60, 60), (40, 60)]

    assert len(planner.cast_rays([with_duplicate])) == len(planner.cast_rays([SQUARE]))
    # 每條 20 長的邊、間距 5：5 個取樣點
    assert len(planner.cast_rays([SQUARE])) == 20


def test_cast_rays_ignores_single_point_polygons():
    planner = RayGrowthPlanner(PlannerSettings())

    assert planner.cast_rays([[(5, 5)]]) == []


def test_rays_point_away_from_obstacle():
    planner = RayGrowthPlanner(PlannerSettings())

    for ray in planner.cast_rays([SQUARE]):
        probe = ray.point_at(1.0)
        assert not (40 < probe.x < 60 and 40 < probe.y < 60)


def test_growth_terminates_with_skeleton_points_only():
    result = compute_path(PlannerType.RAY_GROWTH, (0, 0), (100, 100), [SQUARE])

    assert result.status == PlannerStatus.INCOMPLETE
    assert result.path == []
    assert result.metadata['skeleton_points']
    assert 0 < result.metadata['rounds'] < PlannerSettings().ray_growth.max_rounds


def test_trace_reports_rounds_and_collection():
    steps = compute_trace("ray_growth", (0, 0), (100, 100), [SQUARE])
    messages = [step.message for step in steps]

    assert messages[0] == "Starting ray-growth skeleton computation..."
    assert messages[1] == "Cast 20 rays from obstacle boundaries"
    assert any(m.startswith("Ray reached boundary at") for m in messages)
    assert "Growth round 1: 20 rays active" in messages
    assert messages[-1].startswith("Collected ")
    assert all(step.path == () for step in steps)


def test_facing_obstacles_produce_ray_intersections():
    left = [(20, 40), (40, 40), (40, 60), (20, 60)]
    right = [(60, 45), (80, 55), (80, 65), (60, 60)]

    steps = compute_trace(PlannerType.RAY_GROWTH, (0, 0), (100, 100), [left, right])

    assert any(step.message.startswith("Ray intersection at") for step in steps)


def test_round_limit_stops_growth():
    settings = PlannerSettings()
    settings.ray_growth.max_rounds = 2

    result = compute_path(PlannerType.RAY_GROWTH, (0, 0), (100, 100), [SQUARE], settings=settings)

    assert result.metadata['rounds'] == 2
    assert result.status == PlannerStatus.INCOMPLETE


def test_no_obstacles_casts_no_rays():
    result = compute_path(PlannerType.RAY_GROWTH, (0, 0), (100, 100), [])

    assert result.metadata['rays'] == []
    assert result.metadata['skeleton_points'] == []
    assert result.metadata['rounds'] == 0


def test_skeleton_points_are_unique():
    result = compute_path(PlannerType.RAY_GROWTH, (0, 0), (100, 100), [SQUARE])
    points = result.metadata['skeleton_points']

    assert len(set((round(p.x, 5), round(p.y, 5)) for p in points)) == len(points)
    assert all(isinstance(p, Point) for p in points)
