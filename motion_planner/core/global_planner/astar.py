"""
A* 路徑搜索算法
在可視圖或 Voronoi 骨架等頂點鄰接圖上搜索起點到終點的路徑
"""

import heapq
import itertools
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from ..base.trace import TraceRecorder
from ..geometry import Edge, Point, PointKey, PointLike, as_point, format_point
from ...utils.logger import get_logger
from .graph import Graph


logger = get_logger()


@dataclass
class SearchNode:
    """A* 節點"""
    point: Point
    g: float                         # 起點到此的實際代價
    h: float                         # 到終點的啟發式代價
    parent: Optional[Point] = None   # 根節點為 None

    @property
    def f(self) -> float:
        """f = g + h"""
        return self.g + self.h

    @property
    def is_root(self) -> bool:
        return self.parent is None


class HeuristicType:
    """啟發式函數類型"""

    @staticmethod
    def euclidean(pos1: PointLike, pos2: PointLike) -> float:
        """歐幾里得距離"""
        return math.sqrt((pos1[0] - pos2[0])**2 + (pos1[1] - pos2[1])**2)

    @staticmethod
    def manhattan(pos1: PointLike, pos2: PointLike) -> float:
        """曼哈頓距離"""
        return abs(pos1[0] - pos2[0]) + abs(pos1[1] - pos2[1])

    @staticmethod
    def chebyshev(pos1: PointLike, pos2: PointLike) -> float:
        """切比雪夫距離"""
        return max(abs(pos1[0] - pos2[0]), abs(pos1[1] - pos2[1]))

    @classmethod
    def get(cls, name: str) -> Callable[[PointLike, PointLike], float]:
        """
        依名稱取得啟發式函數

        參數:
            name: "manhattan", "euclidean" 或 "chebyshev"

        返回:
            啟發式函數
        """
        heuristic_map = {
            "euclidean": cls.euclidean,
            "manhattan": cls.manhattan,
            "chebyshev": cls.chebyshev
        }
        if name not in heuristic_map:
            raise ValueError(f"未知的啟發式函數: {name}")
        return heuristic_map[name]


class AStarPlanner:
    """
    圖上的 A* 搜索器

    特點:
    - 啟發式函數同時作為邊的代價，兩者單位一致
    - 預設曼哈頓距離；對歐幾里得直線邊不保證可接受，可能得到次優路徑
    - f 值相同時依加入 open 的順序，先加入者優先
    - 遇到沒有鄰接項目的頂點時中止並返回空路徑
    """

    def __init__(self, heuristic: str = "manhattan"):
        """
        初始化 A* 搜索器

        參數:
            heuristic: 啟發式函數類型 ("manhattan", "euclidean", "chebyshev")
        """
        self.heuristic_name = heuristic
        self.heuristic_func = HeuristicType.get(heuristic)

    def set_heuristic_function(self, heuristic_type: str):
        """
        設置啟發式函數

        參數:
            heuristic_type: 函數類型
        """
        self.heuristic_func = HeuristicType.get(heuristic_type)
        self.heuristic_name = heuristic_type

    def search(self,
               start: PointLike,
               goal: PointLike,
               graph: Graph,
               recorder: Optional[TraceRecorder] = None,
               vertices: Sequence[Point] = (),
               edges: Sequence[Edge] = ()) -> List[Point]:
        """
        執行 A* 搜索

        參數:
            start: 起點
            goal: 終點
            graph: 鄰接圖
            recorder: 軌跡記錄器（可選），每確定一個節點記錄一步
            vertices: 建圖階段的頂點，用於軌跡快照
            edges: 建圖階段的邊，用於軌跡快照

        返回:
            起點到終點的路徑點列表；無法到達時為空列表
        """
        start = as_point(start)
        goal = as_point(goal)
        if recorder is None:
            recorder = TraceRecorder(enabled=False)

        start_key = graph.key(start)
        goal_key = graph.key(goal)

        # 圖中只有起點與終點，直接連線
        if len(graph) == 2 and start_key in graph and goal_key in graph and start_key != goal_key:
            path = [start, goal]
            recorder.record(f"Found path with {len(path)} points", vertices, edges, path)
            return path

        h_start = self.heuristic_func(start, goal)
        open_nodes: Dict[PointKey, SearchNode] = {
            start_key: SearchNode(point=start, g=0.0, h=h_start, parent=None)
        }
        closed_nodes: Dict[PointKey, SearchNode] = {}

        # (f, 加入順序, 鍵)；節點更新後舊項目以 f 值不符判定為過期
        counter = itertools.count()
        insertion_order: Dict[PointKey, int] = {start_key: next(counter)}
        open_heap = [(h_start, insertion_order[start_key], start_key)]

        while open_heap:
            f_cost, _, current_key = heapq.heappop(open_heap)
            current = open_nodes.get(current_key)
            if current is None or f_cost != current.f:
                continue

            if current_key == goal_key:
                path = self._reconstruct_path(current, closed_nodes, graph)
                recorder.record(f"Found path with {len(path)} points", vertices, edges, path)
                logger.debug(f"A* 找到路徑: {len(path)} 點, 已展開 {len(closed_nodes)} 節點")
                return path

            del open_nodes[current_key]
            closed_nodes[current_key] = current

            neighbors = graph.neighbors(current.point)
            if neighbors is None:
                logger.warning(f"頂點 {format_point(current.point)} 沒有鄰接項目，中止搜索")
                recorder.record(
                    f"Search aborted at {format_point(current.point)}: vertex not in graph",
                    vertices, edges
                )
                return []

            recorder.record(
                f"Expanding node at {format_point(current.point)}",
                vertices, edges,
                self._reconstruct_path(current, closed_nodes, graph)
            )

            for neighbor in neighbors:
                neighbor_key = graph.key(neighbor)
                if neighbor_key in closed_nodes:
                    continue

                tentative_g = current.g + self.heuristic_func(current.point, neighbor)
                existing = open_nodes.get(neighbor_key)

                if existing is None:
                    node = SearchNode(
                        point=neighbor,
                        g=tentative_g,
                        h=self.heuristic_func(neighbor, goal),
                        parent=current.point
                    )
                    open_nodes[neighbor_key] = node
                    insertion_order[neighbor_key] = next(counter)
                    heapq.heappush(open_heap, (node.f, insertion_order[neighbor_key], neighbor_key))
                elif tentative_g < existing.g:
                    existing.g = tentative_g
                    existing.parent = current.point
                    heapq.heappush(open_heap, (existing.f, insertion_order[neighbor_key], neighbor_key))

        recorder.record("No path found", vertices, edges)
        logger.debug(f"A* 未找到路徑, 已展開 {len(closed_nodes)} 節點")
        return []

    def _reconstruct_path(self,
                          node: SearchNode,
                          closed_nodes: Dict[PointKey, SearchNode],
                          graph: Graph) -> List[Point]:
        """
        沿父節點回溯重建路徑

        參數:
            node: 終止節點
            closed_nodes: 已確定節點（父節點必在其中）
            graph: 鄰接圖（用於計算鍵）

        返回:
            起點到 node 的路徑
        """
        path = [node.point]
        current = node

        while not current.is_root:
            current = closed_nodes[graph.key(current.parent)]
            path.append(current.point)

        path.reverse()
        return path
