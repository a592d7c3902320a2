"""
Base 基礎類別模組
"""

from .trace import (
    TraceRecorder,
    TraceStep
)

from .planner_base import (
    BasePlanner,
    GraphPlanner,
    PlannerFactory,
    PlannerResult,
    PlannerStatus,
    PlannerType
)

__all__ = [
    # Trace
    'TraceRecorder',
    'TraceStep',

    # Planner
    'BasePlanner',
    'GraphPlanner',
    'PlannerFactory',
    'PlannerResult',
    'PlannerStatus',
    'PlannerType'
]
