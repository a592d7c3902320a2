import pytest

from motion_planner import (
    PlannerFactory,
    PlannerStatus,
    PlannerType,
    RayGrowthPlanner,
    VisibilityGraphPlanner,
    VoronoiPlanner,
    compute_path,
)
from motion_planner.config import PlannerSettings


@pytest.mark.parametrize(
    'name, expected',
    [
        ('visibility_graph', PlannerType.VISIBILITY_GRAPH),
        ('Voronoi', PlannerType.VORONOI),
        ('RAY_GROWTH', PlannerType.RAY_GROWTH),
        (PlannerType.VORONOI, PlannerType.VORONOI),
    ],
)
def test_resolve_type(name, expected):
    assert PlannerFactory.resolve_type(name) == expected


def test_all_planners_are_registered():
    assert set(PlannerFactory.get_available_types()) == set(PlannerType)


@pytest.mark.parametrize(
    'planner_type, planner_class',
    [
        (PlannerType.VISIBILITY_GRAPH, VisibilityGraphPlanner),
        (PlannerType.VORONOI, VoronoiPlanner),
        (PlannerType.RAY_GROWTH, RayGrowthPlanner),
    ],
)
def test_create_returns_registered_class(planner_type, planner_class):
    planner = PlannerFactory.create(planner_type)

    assert isinstance(planner, planner_class)
    assert planner.planner_type == planner_type


def test_create_passes_settings_through():
    settings = PlannerSettings()

    assert PlannerFactory.create('voronoi', settings).settings is settings


def test_unknown_planner_type_raises():
    with pytest.raises(ValueError):
        PlannerFactory.create('rrt')

    with pytest.raises(ValueError):
        compute_path('dijkstra', (0, 0), (1, 1))


def test_unknown_heuristic_in_settings_raises():
    settings = PlannerSettings()
    settings.search.heuristic = "octile"

    with pytest.raises(ValueError):
        compute_path(PlannerType.VISIBILITY_GRAPH, (0, 0), (100, 0), [], settings=settings)


def test_planner_instances_are_reusable():
    planner = PlannerFactory.create(PlannerType.VISIBILITY_GRAPH)
    rect = [(40, -20), (60, -20), (60, 20), (40, 20)]

    first = planner.plan((0, 0), (100, 0), [rect])
    second = planner.plan((0, 0), (100, 0), [rect])

    assert first.path == second.path
    assert first.trace == second.trace


def test_planner_status_members():
    assert [s.name for s in PlannerStatus] == ['IDLE', 'SUCCESS', 'FAILED', 'INCOMPLETE']
