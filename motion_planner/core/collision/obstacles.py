"""
障礙物模組
定義規劃器接受的障礙物型別，並統一轉換為頂點列表
"""

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Sequence

import numpy as np

from ..geometry import Point, PointLike, as_point


@dataclass
class ObstacleBase:
    """障礙物基類"""
    obstacle_id: str = ""
    metadata: dict = field(default_factory=dict)

    def to_polygon(self) -> List[Point]:
        """
        轉換為多邊形頂點列表

        返回:
            依序排列的頂點（隱式閉合）
        """
        raise NotImplementedError


@dataclass
class PolygonObstacle(ObstacleBase):
    """多邊形障礙物"""
    vertices: List[PointLike] = field(default_factory=list)

    def to_polygon(self) -> List[Point]:
        return [as_point(v) for v in self.vertices]

    def contains_point(self, point: PointLike) -> bool:
        """檢查點是否在多邊形內（射線法）"""
        vertices = self.to_polygon()
        n = len(vertices)
        if n < 3:
            return False

        x, y = point[0], point[1]
        inside = False

        j = n - 1
        for i in range(n):
            xi, yi = vertices[i]
            xj, yj = vertices[j]

            if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
                inside = not inside

            j = i

        return inside


@dataclass
class RectangleObstacle(ObstacleBase):
    """
    可旋轉矩形障礙物

    以中心、寬高與旋轉角（度）描述，繞中心旋轉。
    """
    center: PointLike = (0.0, 0.0)
    width: float = 0.0
    height: float = 0.0
    rotation: float = 0.0  # 角度（度）

    def to_polygon(self) -> List[Point]:
        """
        計算四個角點

        本地座標依序為 (-w/2, -h/2), (w/2, -h/2), (w/2, h/2), (-w/2, h/2)，
        旋轉後平移到中心。
        """
        cx, cy = self.center[0], self.center[1]
        half_w = self.width / 2
        half_h = self.height / 2
        angle = math.radians(self.rotation)
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)

        corners = [
            (-half_w, -half_h),
            (half_w, -half_h),
            (half_w, half_h),
            (-half_w, half_h),
        ]

        return [
            Point(cx + lx * cos_a - ly * sin_a, cy + lx * sin_a + ly * cos_a)
            for lx, ly in corners
        ]


def normalize_obstacles(obstacles: Iterable[Any]) -> List[List[Point]]:
    """
    將障礙物輸入統一轉為多邊形頂點列表

    接受 ObstacleBase 子類或點序列；保持輸入順序，
    退化多邊形（少於 3 點）原樣保留，由各規劃器自行處理。

    參數:
        obstacles: 障礙物列表（可為 None）

    返回:
        多邊形列表
    """
    polygons: List[List[Point]] = []
    if obstacles is None:
        return polygons

    for obstacle in obstacles:
        if isinstance(obstacle, ObstacleBase):
            polygons.append(obstacle.to_polygon())
        elif isinstance(obstacle, (Sequence, np.ndarray)) and not isinstance(obstacle, (str, bytes)):
            polygons.append([as_point(v) for v in obstacle])
        else:
            raise ValueError(f"不支援的障礙物型別: {type(obstacle).__name__}")

    return polygons
