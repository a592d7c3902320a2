"""
射線生長中軸近似（實驗性）

從每條障礙物邊沿外法向發射射線並逐輪加長，射線離開生長邊界或
與其他射線相交時凍結，並記錄該點為骨架點。只收集骨架點，
不建立連通圖也不做路徑搜索。
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ...utils.logger import get_logger
from ..base.planner_base import (BasePlanner, PlannerFactory, PlannerResult,
                                 PlannerStatus, PlannerType)
from ..base.trace import TraceRecorder
from ..geometry import (CanvasBounds, Edge, Point, PointLike, PolygonUtils,
                        Winding, canonical_key, distance, format_point,
                        line_intersection, segments_intersect_many)


logger = get_logger()

Vector = Tuple[float, float]


@dataclass
class Ray:
    """由障礙物邊向外生長的射線"""
    origin: Point
    direction: Vector   # 單位向量
    length: float
    active: bool = True

    def point_at(self, length: float) -> Point:
        return Point(
            self.origin[0] + self.direction[0] * length,
            self.origin[1] + self.direction[1] * length
        )

    @property
    def end(self) -> Point:
        return self.point_at(self.length)

    @property
    def segment(self) -> Edge:
        return (self.origin, self.end)


def outward_normal(a: PointLike, b: PointLike,
                   winding: Winding, centroid: PointLike) -> Optional[Vector]:
    """
    選擇邊 a → b 的外法向

    逆時針多邊形取右手法向 (dy, -dx)，順時針取左手法向 (-dy, dx)。
    再以「法向指離重心」檢查：不符時改用另一個法向；兩者都不符
    （重心落在邊的延長線上）時保留依環繞方向的選擇。

    參數:
        a, b: 邊端點
        winding: 多邊形環繞方向
        centroid: 多邊形重心

    返回:
        單位法向；零長度邊返回 None
    """
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length = math.hypot(dx, dy)
    if length == 0:
        return None

    right = (dy / length, -dx / length)
    left = (-dy / length, dx / length)
    preferred, alternative = (right, left) if winding == Winding.CCW else (left, right)

    mid_x = (a[0] + b[0]) / 2 - centroid[0]
    mid_y = (a[1] + b[1]) / 2 - centroid[1]

    if preferred[0] * mid_x + preferred[1] * mid_y > 0:
        return preferred
    if alternative[0] * mid_x + alternative[1] * mid_y > 0:
        return alternative
    # TODO: 重心在邊延長線上時的外側判定尚未確定，暫用環繞方向的選擇
    return preferred


def _exit_length(ray: Ray, box_min: np.ndarray, box_max: np.ndarray) -> float:
    """射線從起點到離開邊界框的長度"""
    t = math.inf
    for axis in (0, 1):
        d = ray.direction[axis]
        if d > 0:
            t = min(t, (box_max[axis] - ray.origin[axis]) / d)
        elif d < 0:
            t = min(t, (box_min[axis] - ray.origin[axis]) / d)
    return t


@PlannerFactory.register(PlannerType.RAY_GROWTH)
class RayGrowthPlanner(BasePlanner):
    """
    射線生長骨架規劃器

    僅作為探索性策略保留：結果狀態固定為 INCOMPLETE，路徑為空，
    骨架點放在 metadata["skeleton_points"]。
    """

    @property
    def planner_type(self) -> PlannerType:
        return PlannerType.RAY_GROWTH

    def cast_rays(self, obstacles: List[List[Point]]) -> List[Ray]:
        """
        沿每條障礙物邊取樣並發射射線（零長度邊略過）

        參數:
            obstacles: 障礙物多邊形

        返回:
            射線列表
        """
        config = self.settings.ray_growth
        rays: List[Ray] = []

        for polygon in obstacles:
            if len(polygon) < 2:
                continue
            winding = PolygonUtils.winding(polygon)
            centroid = PolygonUtils.calculate_centroid(polygon)

            for a, b in PolygonUtils.iter_edges(polygon):
                normal = outward_normal(a, b, winding, centroid)
                if normal is None:
                    continue
                for sample in PolygonUtils.sample_edge(a, b, config.sample_spacing):
                    rays.append(Ray(origin=sample, direction=normal, length=config.initial_length))

        return rays

    def _plan(self,
              start: Point,
              goal: Point,
              obstacles: List[List[Point]],
              canvas_bounds: Optional[CanvasBounds],
              recorder: TraceRecorder) -> PlannerResult:
        config = self.settings.ray_growth
        precision = self.settings.geometry.key_precision

        skeleton: List[Point] = []
        skeleton_keys = set()

        recorder.record("Starting ray-growth skeleton computation...")

        all_points = [start, goal] + [p for polygon in obstacles for p in polygon]
        box_min, box_max = PolygonUtils.calculate_bounding_box(all_points)
        box_min = box_min - config.boundary_margin
        box_max = box_max + config.boundary_margin

        rays = self.cast_rays(obstacles)
        origin_keys = [canonical_key(r.origin, precision) for r in rays]
        recorder.record(
            f"Cast {len(rays)} rays from obstacle boundaries",
            skeleton, [r.segment for r in rays]
        )

        rounds = 0
        while any(r.active for r in rays):
            if rounds >= config.max_rounds:
                logger.warning(f"射線生長達到輪數上限 {config.max_rounds}，停止生長")
                break
            rounds += 1

            for ray in rays:
                if ray.active:
                    ray.length += config.step

            starts = np.array([r.origin for r in rays], dtype=float)
            ends = np.array([r.end for r in rays], dtype=float)

            # 先依本輪生長後的狀態判定，再一次套用
            decisions = []
            for i, ray in enumerate(rays):
                if not ray.active:
                    continue

                exit_length = _exit_length(ray, box_min, box_max)
                if ray.length >= exit_length:
                    decisions.append((ray, exit_length, ray.point_at(exit_length), "boundary"))
                    continue

                mask = segments_intersect_many(ray.origin, ends[i], starts, ends)
                mask[i] = False

                nearest = None
                for j in np.nonzero(mask)[0]:
                    if origin_keys[j] == origin_keys[i]:
                        continue
                    point = line_intersection(ray.origin, ends[i], starts[j], ends[j])
                    if point is None:
                        continue
                    d = distance(ray.origin, point)
                    if nearest is None or d < nearest[0]:
                        nearest = (d, point)

                if nearest is not None:
                    decisions.append((ray, nearest[0], nearest[1], "intersection"))

            for ray, length, point, kind in decisions:
                ray.length = length
                ray.active = False

                key = canonical_key(point, precision)
                if key not in skeleton_keys:
                    skeleton_keys.add(key)
                    skeleton.append(point)

                if kind == "boundary":
                    message = f"Ray reached boundary at {format_point(point, 2)}"
                else:
                    message = f"Ray intersection at {format_point(point, 2)}"
                recorder.record(message, skeleton, [r.segment for r in rays])

            active_count = sum(1 for r in rays if r.active)
            recorder.record(
                f"Growth round {rounds}: {active_count} rays active",
                skeleton, [r.segment for r in rays]
            )

        recorder.record(
            f"Collected {len(skeleton)} skeleton points",
            skeleton, [r.segment for r in rays]
        )
        logger.info(f"射線生長完成: 射線 {len(rays)}, 輪數 {rounds}, 骨架點 {len(skeleton)}")

        return PlannerResult(
            status=PlannerStatus.INCOMPLETE,
            message="Ray-growth mode collects skeleton points only",
            metadata={
                'skeleton_points': skeleton,
                'rays': [r.segment for r in rays],
                'rounds': rounds
            }
        )
