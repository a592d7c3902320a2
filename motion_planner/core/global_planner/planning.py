"""
規劃呼叫介面
提供逐步軌跡（完整模式）與最終結果（輕量模式）兩種呼叫方式
"""

from typing import Any, Callable, List, Optional, Sequence, Union

from ...config.settings import PlannerSettings
from ..base.planner_base import PlannerFactory, PlannerResult, PlannerType
from ..base.trace import TraceStep
from ..geometry import CanvasBounds


def compute_trace(planner_type: Union[PlannerType, str],
                  start: Sequence[float],
                  goal: Sequence[float],
                  obstacles: Optional[Sequence[Any]] = None,
                  canvas_bounds: Union[CanvasBounds, Sequence[float], None] = None,
                  settings: Optional[PlannerSettings] = None,
                  on_step: Optional[Callable[[TraceStep], None]] = None) -> List[TraceStep]:
    """
    執行規劃並返回完整步驟軌跡

    最後一步的 path 即為最終路徑。

    參數:
        planner_type: 規劃器類型（PlannerType 或名稱字串）
        start: 起點
        goal: 終點
        obstacles: 障礙物列表
        canvas_bounds: 畫布範圍（Voronoi 需要）
        settings: 規劃器配置（可選）
        on_step: 每步回調（可選）

    返回:
        依記錄順序的 TraceStep 列表
    """
    planner = PlannerFactory.create(planner_type, settings)
    result = planner.plan(start, goal, obstacles, canvas_bounds,
                          record_trace=True, on_step=on_step)
    return list(result.trace)


def compute_path(planner_type: Union[PlannerType, str],
                 start: Sequence[float],
                 goal: Sequence[float],
                 obstacles: Optional[Sequence[Any]] = None,
                 canvas_bounds: Union[CanvasBounds, Sequence[float], None] = None,
                 settings: Optional[PlannerSettings] = None) -> PlannerResult:
    """
    執行規劃並只返回建圖的邊與路徑（不記錄步驟）

    返回:
        PlannerResult，graph_edges 與 path 有值，trace 為空
    """
    planner = PlannerFactory.create(planner_type, settings)
    return planner.plan(start, goal, obstacles, canvas_bounds, record_trace=False)
