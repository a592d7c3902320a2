"""
Core 核心演算法模組
"""

from .base.planner_base import PlannerFactory, PlannerType, PlannerResult, PlannerStatus
from .global_planner import compute_path, compute_trace

__all__ = [
    'PlannerFactory', 'PlannerType', 'PlannerResult', 'PlannerStatus',
    'compute_path', 'compute_trace'
]
