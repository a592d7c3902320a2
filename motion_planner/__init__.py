"""
Motion Planner
==============

平面多邊形障礙物間的最短路徑規劃引擎，並記錄可逐步回放的計算軌跡

主要功能：
- 可視圖（Visibility Graph）建圖
- Voronoi 骨架建圖（Delaunay 對偶）
- 射線生長中軸近似（實驗性）
- A* 圖搜索
- 逐步軌跡記錄

使用方式：
    from motion_planner import compute_trace, compute_path, PlannerType

    steps = compute_trace(PlannerType.VISIBILITY_GRAPH, (0, 0), (100, 0), obstacles)
    final_path = steps[-1].path
"""

__version__ = "1.0.0"
__author__ = "Motion Planner Team"

# 核心模組導出
from .core.geometry import (
    CanvasBounds,
    Point,
    PolygonUtils,
    Winding,
    canonical_key,
    ccw,
    line_intersection,
    segments_intersect
)

from .core.collision import (
    PolygonObstacle,
    RectangleObstacle
)

from .core.base import (
    BasePlanner,
    PlannerFactory,
    PlannerResult,
    PlannerStatus,
    PlannerType,
    TraceRecorder,
    TraceStep
)

from .core.global_planner import (
    AStarPlanner,
    Graph,
    HeuristicType,
    RayGrowthPlanner,
    VisibilityGraphPlanner,
    VoronoiPlanner,
    compute_path,
    compute_trace
)

from .config import (
    PlannerSettings,
    get_settings,
    init_settings
)

from .utils import (
    get_logger,
    setup_logger
)

__all__ = [
    # Geometry
    'CanvasBounds',
    'Point',
    'PolygonUtils',
    'Winding',
    'canonical_key',
    'ccw',
    'line_intersection',
    'segments_intersect',

    # Obstacles
    'PolygonObstacle',
    'RectangleObstacle',

    # Base
    'BasePlanner',
    'PlannerFactory',
    'PlannerResult',
    'PlannerStatus',
    'PlannerType',
    'TraceRecorder',
    'TraceStep',

    # Planners
    'AStarPlanner',
    'Graph',
    'HeuristicType',
    'RayGrowthPlanner',
    'VisibilityGraphPlanner',
    'VoronoiPlanner',
    'compute_path',
    'compute_trace',

    # Config
    'PlannerSettings',
    'get_settings',
    'init_settings',

    # Logging
    'get_logger',
    'setup_logger'
]
