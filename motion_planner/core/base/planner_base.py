"""
路徑規劃器基類模組
定義規劃器的統一介面、規劃結果與規劃器工廠
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from ...config.settings import PlannerSettings, get_settings
from ...utils.logger import get_logger, log_execution_time
from ..collision import normalize_obstacles
from ..geometry import CanvasBounds, Edge, Point, as_bounds, as_point
from .trace import TraceRecorder, TraceStep


logger = get_logger()


class PlannerType(Enum):
    """規劃器類型枚舉"""
    VISIBILITY_GRAPH = auto()   # 可視圖
    VORONOI = auto()            # Voronoi 骨架（Delaunay 對偶）
    RAY_GROWTH = auto()         # 射線生長中軸近似（實驗性）


class PlannerStatus(Enum):
    """規劃結果狀態"""
    IDLE = auto()
    SUCCESS = auto()
    FAILED = auto()        # 搜索結束但無路徑
    INCOMPLETE = auto()    # 策略本身不產生路徑


@dataclass
class PlannerResult:
    """規劃結果資料類"""
    status: PlannerStatus = PlannerStatus.IDLE
    path: List[Point] = field(default_factory=list)
    graph_edges: List[Edge] = field(default_factory=list)
    trace: Tuple[TraceStep, ...] = ()
    planning_time: float = 0.0
    message: str = ""

    # 額外資訊
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.status == PlannerStatus.SUCCESS

    @property
    def path_length(self) -> float:
        """計算路徑總長度（歐幾里得）"""
        if len(self.path) < 2:
            return 0.0

        points = np.array(self.path, dtype=float)
        return float(np.sum(np.linalg.norm(np.diff(points, axis=0), axis=1)))

    @property
    def final_step(self) -> Optional[TraceStep]:
        """軌跡最後一步；其 path 為權威結果"""
        return self.trace[-1] if self.trace else None


class BasePlanner(ABC):
    """
    路徑規劃器抽象基類

    每次 plan() 呼叫都建立自己的圖、節點集合與軌跡記錄器，
    規劃器實例本身不保存任何呼叫間的狀態。
    """

    def __init__(self, settings: Optional[PlannerSettings] = None):
        self.settings = settings or get_settings()

    @property
    @abstractmethod
    def planner_type(self) -> PlannerType:
        """獲取規劃器類型"""
        pass

    @log_execution_time()
    def plan(self,
             start: Sequence[float],
             goal: Sequence[float],
             obstacles: Optional[Sequence[Any]] = None,
             canvas_bounds: Union[CanvasBounds, Sequence[float], None] = None,
             record_trace: bool = True,
             on_step: Optional[Callable[[TraceStep], None]] = None) -> PlannerResult:
        """
        執行路徑規劃

        Args:
            start: 起點
            goal: 目標點
            obstacles: 障礙物列表（多邊形頂點序列或障礙物物件）
            canvas_bounds: 畫布範圍 (width, height)，Voronoi 規劃需要
            record_trace: False 時為輕量模式，不記錄步驟快照
            on_step: 每記錄一步時同步呼叫的回調

        Returns:
            規劃結果
        """
        start_time = time.perf_counter()

        recorder = TraceRecorder(enabled=record_trace, on_step=on_step)
        bounds = as_bounds(canvas_bounds) if canvas_bounds is not None else None

        result = self._plan(
            as_point(start),
            as_point(goal),
            normalize_obstacles(obstacles),
            bounds,
            recorder
        )

        result.trace = recorder.steps
        result.planning_time = time.perf_counter() - start_time
        return result

    @abstractmethod
    def _plan(self,
              start: Point,
              goal: Point,
              obstacles: List[List[Point]],
              canvas_bounds: Optional[CanvasBounds],
              recorder: TraceRecorder) -> PlannerResult:
        """子類實作的規劃主體"""
        pass


class GraphPlanner(BasePlanner):
    """
    建圖 + A* 搜索的規劃器基類

    子類只需實作 build_graph()；搜索步驟追加到同一個記錄器。
    """

    @abstractmethod
    def build_graph(self,
                    start: Point,
                    goal: Point,
                    obstacles: List[List[Point]],
                    canvas_bounds: Optional[CanvasBounds],
                    recorder: TraceRecorder):
        """
        建立鄰接圖

        Returns:
            (graph, vertices, edges)
        """
        pass

    def _plan(self, start, goal, obstacles, canvas_bounds, recorder) -> PlannerResult:
        # 延遲匯入，避免 global_planner 與 base 之間的循環匯入
        from ..global_planner.astar import AStarPlanner

        graph, vertices, edges = self.build_graph(start, goal, obstacles, canvas_bounds, recorder)

        searcher = AStarPlanner(heuristic=self.settings.search.heuristic)
        path = searcher.search(start, goal, graph, recorder, vertices, edges)

        result = PlannerResult(
            status=PlannerStatus.SUCCESS if path else PlannerStatus.FAILED,
            path=path,
            graph_edges=list(edges),
            metadata={
                'vertex_count': len(graph),
                'edge_count': len(edges)
            }
        )
        if path:
            result.message = f"Found path with {len(path)} points"
            logger.info(
                f"{self.planner_type.name} 規劃完成: 路徑 {len(path)} 點, "
                f"長度 {result.path_length:.2f}"
            )
        else:
            result.message = "No path found"
            logger.info(f"{self.planner_type.name} 規劃完成: 無法到達終點")
        return result


class PlannerFactory:
    """規劃器工廠類"""

    _registry: Dict[PlannerType, type] = {}

    @classmethod
    def register(cls, planner_type: PlannerType):
        """註冊規劃器類型"""
        def decorator(planner_class: type):
            cls._registry[planner_type] = planner_class
            return planner_class
        return decorator

    @classmethod
    def resolve_type(cls, planner_type: Union[PlannerType, str]) -> PlannerType:
        """將字串（不分大小寫）轉為 PlannerType"""
        if isinstance(planner_type, PlannerType):
            return planner_type
        try:
            return PlannerType[str(planner_type).upper()]
        except KeyError:
            raise ValueError(f"未知的規劃器類型: {planner_type}") from None

    @classmethod
    def create(cls, planner_type: Union[PlannerType, str],
               settings: Optional[PlannerSettings] = None) -> BasePlanner:
        """創建規劃器實例"""
        planner_type = cls.resolve_type(planner_type)
        planner_class = cls._registry.get(planner_type)
        if planner_class is None:
            raise ValueError(f"未註冊的規劃器類型: {planner_type}")
        return planner_class(settings)

    @classmethod
    def get_available_types(cls) -> List[PlannerType]:
        """獲取可用的規劃器類型"""
        return list(cls._registry.keys())
