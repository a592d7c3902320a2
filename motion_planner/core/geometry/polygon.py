"""
多邊形運算工具模組
提供多邊形的各種幾何運算
"""

import math
from enum import Enum
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from .coordinate import Edge, Point, PointLike, as_point


class Winding(Enum):
    """多邊形頂點環繞方向"""
    CW = "cw"
    CCW = "ccw"


class PolygonUtils:
    """
    多邊形運算工具類

    提供：
    - 有向面積與環繞方向
    - 邊列舉與沿邊取樣
    - 重心與邊界框計算
    - 凸多邊形裁切到矩形
    """

    @staticmethod
    def shoelace_sum(polygon: Sequence[PointLike]) -> float:
        """
        計算 Shoelace 和 Σ(a.x * b.y - b.x * a.y)

        Args:
            polygon: 頂點列表（隱式閉合）

        Returns:
            有向面積的兩倍
        """
        n = len(polygon)
        total = 0.0
        for i in range(n):
            a = polygon[i]
            b = polygon[(i + 1) % n]
            total += a[0] * b[1] - b[0] * a[1]
        return total

    @staticmethod
    def calculate_area(polygon: Sequence[PointLike]) -> float:
        """計算多邊形面積（絕對值）"""
        if len(polygon) < 3:
            return 0.0
        return abs(PolygonUtils.shoelace_sum(polygon)) / 2.0

    @staticmethod
    def winding(polygon: Sequence[PointLike]) -> Winding:
        """
        判斷環繞方向：Shoelace 和為正則為逆時針，否則為順時針

        Args:
            polygon: 頂點列表

        Returns:
            Winding.CCW 或 Winding.CW
        """
        if PolygonUtils.shoelace_sum(polygon) > 0:
            return Winding.CCW
        return Winding.CW

    @staticmethod
    def iter_edges(polygon: Sequence[PointLike]) -> Iterator[Edge]:
        """
        列舉多邊形的邊（最後一點連回第一點）

        少於 2 個頂點的多邊形沒有邊。
        """
        n = len(polygon)
        if n < 2:
            return
        for i in range(n):
            yield as_point(polygon[i]), as_point(polygon[(i + 1) % n])

    @staticmethod
    def calculate_centroid(polygon: Sequence[PointLike]) -> Point:
        """
        計算頂點平均位置

        Args:
            polygon: 頂點列表

        Returns:
            重心座標
        """
        n = len(polygon)
        if n == 0:
            return Point(0.0, 0.0)
        cx = sum(p[0] for p in polygon) / n
        cy = sum(p[1] for p in polygon) / n
        return Point(cx, cy)

    @staticmethod
    def calculate_bounding_box(points: Sequence[PointLike]) -> Tuple[np.ndarray, np.ndarray]:
        """
        計算邊界框

        Args:
            points: 點列表

        Returns:
            (min_point, max_point) 即 ([xmin, ymin], [xmax, ymax])
        """
        if len(points) == 0:
            return (np.zeros(2), np.zeros(2))

        arr = np.array([[p[0], p[1]] for p in points], dtype=float)
        return (np.min(arr, axis=0), np.max(arr, axis=0))

    @staticmethod
    def sample_edge(a: PointLike, b: PointLike, spacing: float) -> List[Point]:
        """
        沿線段等距取樣（含兩端點）

        取樣步數為 max(1, ceil(長度 / spacing))，以線性插值產生
        t = s / n (s = 0..n) 的點。零長度邊會產生兩個相同的點。

        Args:
            a, b: 線段端點
            spacing: 取樣間距

        Returns:
            取樣點列表
        """
        dx = b[0] - a[0]
        dy = b[1] - a[1]
        length = math.hypot(dx, dy)
        steps = max(1, math.ceil(length / spacing))

        return [
            Point(a[0] + (s / steps) * dx, a[1] + (s / steps) * dy)
            for s in range(steps + 1)
        ]

    @staticmethod
    def clip_to_rectangle(polygon: Sequence[PointLike],
                          width: float, height: float) -> List[Point]:
        """
        將凸多邊形裁切到矩形 [0, width] x [0, height]（Sutherland-Hodgman）

        位於矩形內的頂點原樣保留，只有與矩形邊的交點是新計算的。

        Args:
            polygon: 凸多邊形頂點（依序排列）
            width, height: 矩形尺寸

        Returns:
            裁切後的頂點列表，可能為空
        """
        # (座標軸, 界線值, 是否保留 >= 界線的一側)
        clip_planes = [
            (0, 0.0, True),
            (0, width, False),
            (1, 0.0, True),
            (1, height, False),
        ]

        output = [as_point(p) for p in polygon]
        for axis, limit, keep_greater in clip_planes:
            if not output:
                break
            source = output
            output = []

            def inside(p: Point) -> bool:
                return p[axis] >= limit if keep_greater else p[axis] <= limit

            for i, current in enumerate(source):
                previous = source[i - 1]
                current_in = inside(current)
                previous_in = inside(previous)

                if current_in:
                    if not previous_in:
                        output.append(_cross_plane(previous, current, axis, limit))
                    output.append(current)
                elif previous_in:
                    output.append(_cross_plane(previous, current, axis, limit))

        # 去除連續重複點
        cleaned: List[Point] = []
        for p in output:
            if not cleaned or cleaned[-1] != p:
                cleaned.append(p)
        if len(cleaned) > 1 and cleaned[0] == cleaned[-1]:
            cleaned.pop()
        return cleaned

    @staticmethod
    def sort_counter_clockwise(points: Sequence[PointLike]) -> List[Point]:
        """依相對重心的極角排序（適用於凸多邊形頂點）"""
        center = PolygonUtils.calculate_centroid(points)
        return sorted(
            (as_point(p) for p in points),
            key=lambda p: math.atan2(p[1] - center[1], p[0] - center[0])
        )


def _cross_plane(p1: Point, p2: Point, axis: int, limit: float) -> Point:
    """計算線段與軸向界線的交點"""
    t = (limit - p1[axis]) / (p2[axis] - p1[axis])
    x = p1[0] + t * (p2[0] - p1[0])
    y = p1[1] + t * (p2[1] - p1[1])
    if axis == 0:
        x = limit
    else:
        y = limit
    return Point(x, y)
