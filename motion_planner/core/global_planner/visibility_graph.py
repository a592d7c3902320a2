"""
可視圖路徑規劃
以起點、終點與所有障礙物頂點為節點，連接彼此可見（不穿過障礙物）的頂點對
"""

from typing import List, Optional, Sequence

from ...utils.logger import get_logger
from ..base.planner_base import GraphPlanner, PlannerFactory, PlannerType
from ..base.trace import TraceRecorder
from ..geometry import (CanvasBounds, Edge, Point, PointLike, PolygonUtils,
                        format_point, segments_intersect)
from .graph import Graph


logger = get_logger()


def _shares_endpoint(a: Point, b: Point, p1: PointLike, p2: PointLike) -> bool:
    """多邊形邊 (a, b) 是否與 p1 或 p2 共用端點（座標完全相等）"""
    return a == p1 or b == p1 or a == p2 or b == p2


def is_visible(p1: PointLike,
               p2: PointLike,
               obstacles: Sequence[Sequence[PointLike]],
               touch_threshold: int = 3) -> bool:
    """
    判斷兩點之間的線段是否可見

    對每個多邊形的每條邊：
    - 與 p1 / p2 共用端點的邊不做相交判定，只累加接觸計數
    - 其餘邊若與線段真相交則不可見
    掃描完一個多邊形後，接觸計數超過 touch_threshold 時視為
    穿過該多邊形內部，同樣不可見。這是近似判定，例如矩形的
    對角線會接觸全部 4 條邊。

    參數:
        p1, p2: 線段端點
        obstacles: 障礙物多邊形列表
        touch_threshold: 接觸計數門檻

    返回:
        是否可見
    """
    for polygon in obstacles:
        touch_count = 0
        for a, b in PolygonUtils.iter_edges(polygon):
            if _shares_endpoint(a, b, p1, p2):
                touch_count += 1
                continue
            if segments_intersect(p1, p2, a, b):
                return False

        if touch_count > touch_threshold:
            return False

    return True


@PlannerFactory.register(PlannerType.VISIBILITY_GRAPH)
class VisibilityGraphPlanner(GraphPlanner):
    """
    可視圖規劃器

    頂點數 V 時檢查 O(V^2) 個頂點對，每對對所有障礙物邊做 O(E) 判定，
    適用於互動規模（數十個頂點）。
    """

    @property
    def planner_type(self) -> PlannerType:
        return PlannerType.VISIBILITY_GRAPH

    def build_graph(self,
                    start: Point,
                    goal: Point,
                    obstacles: List[List[Point]],
                    canvas_bounds: Optional[CanvasBounds],
                    recorder: TraceRecorder):
        """
        建立可視圖（canvas_bounds 不使用）

        返回:
            (graph, vertices, edges)
        """
        graph = Graph(self.settings.geometry.key_precision)
        touch_threshold = self.settings.visibility.touch_threshold
        vertices: List[Point] = []
        edges: List[Edge] = []

        recorder.record("Starting visibility graph computation...", vertices, edges)

        vertices.append(start)
        graph.add_vertex(start)
        recorder.record("Added vertex at start point", vertices, edges)

        vertices.append(goal)
        graph.add_vertex(goal)
        recorder.record("Added vertex at goal point", vertices, edges)

        for polygon in obstacles:
            # 少於 2 點的多邊形無效，略過
            if len(polygon) < 2:
                continue
            for vertex in polygon:
                vertices.append(vertex)
                graph.add_vertex(vertex)
                recorder.record(f"Added vertex at {format_point(vertex)}", vertices, edges)

        for i in range(len(vertices)):
            for j in range(i + 1, len(vertices)):
                v1 = vertices[i]
                v2 = vertices[j]
                # 同一個量化頂點不連自環
                if graph.key(v1) == graph.key(v2):
                    continue
                if is_visible(v1, v2, obstacles, touch_threshold):
                    edges.append((v1, v2))
                    graph.add_edge(v1, v2)
                    recorder.record(
                        f"Added edge between {format_point(v1)} and {format_point(v2)}",
                        vertices, edges
                    )

        recorder.record("Done!", vertices, edges)
        logger.info(f"可視圖建構完成: 頂點 {len(graph)}, 邊 {len(edges)}")

        return graph, vertices, edges
