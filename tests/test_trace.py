import dataclasses

import pytest

from motion_planner import PlannerFactory, PlannerType, compute_path, compute_trace
from motion_planner.core.base import TraceRecorder, TraceStep
from motion_planner.core.geometry import Point


RECT = [(40, -20), (60, -20), (60, 20), (40, 20)]


def test_trace_step_is_immutable():
    step = TraceStep("Done!", (Point(0, 0),))

    with pytest.raises(dataclasses.FrozenInstanceError):
        step.message = "changed"


def test_recorded_steps_do_not_follow_later_mutation():
    recorder = TraceRecorder()
    vertices = [Point(0, 0)]
    edges = []

    recorder.record("first", vertices, edges)
    vertices.append(Point(1, 1))
    edges.append((Point(0, 0), Point(1, 1)))
    recorder.record("second", vertices, edges)

    assert recorder[0].vertices == (Point(0, 0),)
    assert recorder[0].edges == ()
    assert len(recorder[1].vertices) == 2
    assert len(recorder[1].edges) == 1


def test_recorder_order_and_replay():
    recorder = TraceRecorder()
    for name in ("a", "b", "c"):
        recorder.record(name)

    assert [step.message for step in recorder.steps] == ["a", "b", "c"]
    assert [step.message for step in recorder.replay(2)] == ["a", "b"]
    assert recorder.replay(-1) == ()
    assert recorder.last.message == "c"


def test_disabled_recorder_keeps_nothing():
    seen = []
    recorder = TraceRecorder(enabled=False, on_step=seen.append)

    assert recorder.record("ignored") is None
    assert len(recorder) == 0
    assert recorder.last is None
    assert seen == []


def test_on_step_receives_every_step_in_order():
    seen = []

    steps = compute_trace(PlannerType.VISIBILITY_GRAPH, (0, 0), (100, 0), [RECT], on_step=seen.append)

    assert seen == steps


def test_final_step_path_matches_result():
    steps = compute_trace(PlannerType.VISIBILITY_GRAPH, (0, 0), (100, 0), [RECT])
    result = compute_path(PlannerType.VISIBILITY_GRAPH, (0, 0), (100, 0), [RECT])

    assert list(steps[-1].path) == result.path


def test_lightweight_mode_returns_edges_without_trace():
    result = compute_path(PlannerType.VISIBILITY_GRAPH, (0, 0), (100, 0), [RECT])

    assert result.trace == ()
    assert result.final_step is None
    assert result.graph_edges
    assert result.metadata['edge_count'] == len(result.graph_edges)


def test_full_mode_result_exposes_final_step():
    planner = PlannerFactory.create(PlannerType.VISIBILITY_GRAPH)
    result = planner.plan((0, 0), (100, 0), [RECT])

    assert result.final_step is result.trace[-1]
    assert result.final_step.message == result.message
    assert result.planning_time >= 0
