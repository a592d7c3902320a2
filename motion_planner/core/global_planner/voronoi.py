"""
Voronoi 骨架路徑規劃

流程:
  1) 以起點、終點、障礙物邊界取樣點與畫布邊框取樣點作為站點
  2) 以 scipy.spatial.Voronoi（Qhull，Delaunay 對偶）計算 Voronoi 圖並裁切到畫布
  3) 收集所有胞元邊（去重），起點與終點連到各自胞元的頂點
  4) 移除端點在畫布邊界上的邊與穿過障礙物的邊
  5) 以剩下的邊建圖，交給 A* 搜索

起點與終點必須是前兩個站點，才能以胞元索引 0 與 1 找到它們的胞元。
"""

from collections import defaultdict
from typing import List, Optional, Sequence

import numpy as np
from scipy.spatial import QhullError, Voronoi

from ...utils.logger import get_logger
from ..base.planner_base import GraphPlanner, PlannerFactory, PlannerType
from ..base.trace import TraceRecorder
from ..geometry import (KEY_PRECISION, CanvasBounds, Edge, Point, PointLike,
                        PolygonUtils, canonical_key, edge_key, format_point,
                        segments_intersect)
from .graph import Graph


logger = get_logger()


# ==========================================
# Voronoi 胞元
# ==========================================
def _closed_regions(vor: Voronoi, far_radius: float) -> List[List[Point]]:
    """
    將每個站點的 Voronoi 區域轉為封閉多邊形

    無界區域的每條無限脊以遠點（沿脊的外法向延伸 far_radius）封閉。

    參數:
        vor: scipy Voronoi 結果
        far_radius: 遠點距離，須遠大於畫布尺寸

    返回:
        依站點順序的凸多邊形列表（逆時針排序）
    """
    center = vor.points.mean(axis=0)

    # 站點 → (相鄰站點, 脊頂點1, 脊頂點2)
    all_ridges = defaultdict(list)
    for (p1, p2), (v1, v2) in zip(vor.ridge_points, vor.ridge_vertices):
        all_ridges[p1].append((p2, v1, v2))
        all_ridges[p2].append((p1, v1, v2))

    regions: List[List[Point]] = []
    for p1, region_index in enumerate(vor.point_region):
        if region_index < 0:
            regions.append([])
            continue

        region = vor.regions[region_index]
        polygon = [vor.vertices[v] for v in region if v >= 0]

        if -1 in region or not region:
            for p2, v1, v2 in all_ridges[p1]:
                if v2 < 0:
                    v1, v2 = v2, v1
                if v1 >= 0 or v2 < 0:
                    # 有限脊已在區域中；兩端皆無限的脊無法封閉
                    continue

                tangent = vor.points[p2] - vor.points[p1]
                tangent = tangent / np.linalg.norm(tangent)
                normal = np.array([-tangent[1], tangent[0]])

                midpoint = vor.points[[p1, p2]].mean(axis=0)
                if np.dot(midpoint - center, normal) < 0:
                    normal = -normal
                polygon.append(vor.vertices[v2] + normal * far_radius)

        points = [Point(float(x), float(y)) for x, y in polygon]
        regions.append(PolygonUtils.sort_counter_clockwise(points) if points else [])

    return regions


def voronoi_cell_polygons(sites: Sequence[PointLike],
                          bounds: CanvasBounds,
                          precision: int = KEY_PRECISION) -> List[Optional[List[Point]]]:
    """
    計算每個站點裁切到畫布後的 Voronoi 胞元

    量化鍵與先前站點相同的站點沒有自己的胞元（返回 None）。
    不同站點少於 3 個或 Qhull 拒絕退化輸入（全部共線）時，
    所有胞元皆為 None。

    參數:
        sites: 站點列表
        bounds: 畫布範圍
        precision: 量化精度

    返回:
        與 sites 等長的列表，元素為胞元多邊形或 None
    """
    cells: List[Optional[List[Point]]] = [None] * len(sites)

    owners: List[int] = []
    unique_points = []
    seen = set()
    for index, site in enumerate(sites):
        key = canonical_key(site, precision)
        if key in seen:
            continue
        seen.add(key)
        owners.append(index)
        unique_points.append((site[0], site[1]))

    if len(unique_points) < 3:
        logger.warning(f"Voronoi 站點不足: {len(unique_points)} 個不同站點")
        return cells

    points = np.array(unique_points, dtype=float)
    try:
        vor = Voronoi(points)
    except QhullError as e:
        logger.warning(f"Voronoi 計算失敗（退化站點）: {e}")
        return cells

    extent = float(np.ptp(points, axis=0).max())
    far_radius = 10.0 * (extent + bounds.width + bounds.height + 1.0)

    for owner, region in zip(owners, _closed_regions(vor, far_radius)):
        clipped = PolygonUtils.clip_to_rectangle(region, bounds.width, bounds.height)
        cells[owner] = clipped if clipped else None

    return cells


# ==========================================
# 取樣與過濾
# ==========================================
def border_samples(bounds: CanvasBounds, spacing: float) -> List[Point]:
    """
    沿畫布四邊取樣

    上下兩邊取 x = 0, spacing, ... <= width；
    左右兩邊取 y = spacing, ... < height（角點不重複）。
    """
    points: List[Point] = []

    k = 0
    while k * spacing <= bounds.width:
        x = k * spacing
        points.append(Point(x, 0.0))
        points.append(Point(x, bounds.height))
        k += 1

    k = 1
    while k * spacing < bounds.height:
        y = k * spacing
        points.append(Point(0.0, y))
        points.append(Point(bounds.width, y))
        k += 1

    return points


def _crosses_polygon(p1: PointLike, p2: PointLike, polygon: Sequence[PointLike]) -> bool:
    """線段是否與多邊形任一邊真相交（完整掃描，不使用接觸計數）"""
    for a, b in PolygonUtils.iter_edges(polygon):
        if segments_intersect(p1, p2, a, b):
            return True
    return False


def filter_edges(edges: Sequence[Edge],
                 obstacles: Sequence[Sequence[PointLike]],
                 bounds: CanvasBounds) -> List[Edge]:
    """
    過濾 Voronoi 邊

    移除端點位於畫布邊界上的邊（裁切產生）與穿過任一障礙物邊的邊。
    對已過濾的結果再次過濾不會再移除任何邊。

    參數:
        edges: 邊列表
        obstacles: 障礙物多邊形
        bounds: 畫布範圍

    返回:
        保留的邊（維持原順序）
    """
    kept: List[Edge] = []
    for p1, p2 in edges:
        if bounds.on_boundary(p1) or bounds.on_boundary(p2):
            continue
        if any(_crosses_polygon(p1, p2, polygon) for polygon in obstacles):
            continue
        kept.append((p1, p2))
    return kept


# ==========================================
# 規劃器
# ==========================================
@PlannerFactory.register(PlannerType.VORONOI)
class VoronoiPlanner(GraphPlanner):
    """Voronoi 骨架規劃器（Delaunay 對偶，完整模式）"""

    @property
    def planner_type(self) -> PlannerType:
        return PlannerType.VORONOI

    def build_graph(self,
                    start: Point,
                    goal: Point,
                    obstacles: List[List[Point]],
                    canvas_bounds: Optional[CanvasBounds],
                    recorder: TraceRecorder):
        """
        建立 Voronoi 骨架圖

        返回:
            (graph, vertices, edges)
        """
        config = self.settings.voronoi
        precision = self.settings.geometry.key_precision
        spacing = config.sample_spacing

        if canvas_bounds is None:
            canvas_bounds = CanvasBounds(config.default_canvas_width, config.default_canvas_height)
            logger.warning(
                f"未提供畫布範圍，使用預設值 {canvas_bounds.width:g} x {canvas_bounds.height:g}"
            )

        vertices: List[Point] = []
        edges: List[Edge] = []

        recorder.record("Starting Voronoi path computation...", vertices, edges)

        vertices.extend([start, goal])
        recorder.record("Added start and goal vertices", vertices, edges)

        # 障礙物邊界取樣
        for polygon in obstacles:
            for a, b in PolygonUtils.iter_edges(polygon):
                for sample in PolygonUtils.sample_edge(a, b, spacing):
                    vertices.append(sample)
                    recorder.record(
                        f"Sampled obstacle point at {format_point(sample, 2)}", vertices, edges
                    )
        recorder.record(f"Sampled {len(vertices) - 2} obstacle points", vertices, edges)

        # 畫布邊框取樣
        borders = border_samples(canvas_bounds, spacing)
        for point in borders:
            vertices.append(point)
            recorder.record(f"Sampled border point at {format_point(point, 2)}", vertices, edges)
        recorder.record(f"Sampled {len(borders)} border points", vertices, edges)

        # Voronoi 胞元邊（無向去重）
        cells = voronoi_cell_polygons(vertices, canvas_bounds, precision)
        edge_keys = set()
        for cell in cells:
            if not cell:
                continue
            n = len(cell)
            for j in range(n):
                p1 = cell[j]
                p2 = cell[(j + 1) % n]
                key = edge_key(p1, p2, precision)
                if key[0] == key[1] or key in edge_keys:
                    continue
                edge_keys.add(key)
                edges.append((p1, p2))
                recorder.record(
                    f"Added Voronoi edge between {format_point(p1, 2)} and {format_point(p2, 2)}",
                    vertices, edges
                )
        recorder.record(f"Computed {len(edges)} unique Voronoi edges", vertices, edges)

        # 起點、終點連到各自胞元頂點
        for point, cell_index in ((start, 0), (goal, 1)):
            cell = cells[cell_index]
            if not cell:
                continue
            for vertex in cell:
                edges.append((point, vertex))
                recorder.record(
                    f"Connected {format_point(point, 2)} to Voronoi vertex at {format_point(vertex, 2)}",
                    vertices, edges
                )
        recorder.record("Connected start and goal to their Voronoi cell vertices", vertices, edges)

        edges = filter_edges(edges, obstacles, canvas_bounds)
        graph = Graph.from_edges(edges, precision)
        recorder.record(f"Filtered to {len(edges)} valid edges", vertices, edges)

        logger.info(
            f"Voronoi 骨架建構完成: 站點 {len(vertices)}, 保留邊 {len(edges)}, 圖頂點 {len(graph)}"
        )
        return graph, vertices, edges
