"""
座標與點模組
提供平面點、畫布範圍與頂點量化鍵（canonical key）
"""

import math
from dataclasses import dataclass
from typing import NamedTuple, Sequence, Tuple, Union


# 預設量化精度（小數點後 5 位）
KEY_PRECISION = 5

PointKey = Tuple[float, float]


class Point(NamedTuple):
    """平面座標點（畫布座標系）"""
    x: float
    y: float


PointLike = Union[Point, Sequence[float]]
Edge = Tuple[Point, Point]


@dataclass(frozen=True)
class CanvasBounds:
    """畫布範圍，原點在左上角 (0, 0)"""
    width: float
    height: float

    def contains(self, point: PointLike) -> bool:
        """判斷點是否落在畫布內（含邊界）"""
        x, y = point[0], point[1]
        return 0 <= x <= self.width and 0 <= y <= self.height

    def on_boundary(self, point: PointLike) -> bool:
        """判斷點是否位於畫布邊界上或之外"""
        x, y = point[0], point[1]
        return x <= 0 or y <= 0 or x >= self.width or y >= self.height


def as_point(value: PointLike) -> Point:
    """將 tuple / list / Point 轉為 Point"""
    if isinstance(value, Point):
        return value
    return Point(float(value[0]), float(value[1]))


def as_bounds(value) -> CanvasBounds:
    """將 (width, height) 或 CanvasBounds 轉為 CanvasBounds"""
    if isinstance(value, CanvasBounds):
        return value
    if isinstance(value, dict):
        return CanvasBounds(float(value['width']), float(value['height']))
    width, height = value
    return CanvasBounds(float(width), float(height))


def canonical_key(point: PointLike, precision: int = KEY_PRECISION) -> PointKey:
    """
    計算頂點的量化鍵

    兩點在指定精度內相同時得到相同的鍵，視為同一個圖頂點。
    使用 tuple 而非字串，-0.0 與 0.0 會得到相等的鍵。

    參數:
        point: 點座標
        precision: 小數位數

    返回:
        (round(x), round(y))
    """
    return (round(point[0], precision) + 0.0, round(point[1], precision) + 0.0)


def edge_key(p1: PointLike, p2: PointLike,
             precision: int = KEY_PRECISION) -> Tuple[PointKey, PointKey]:
    """無向邊的鍵（與端點順序無關）"""
    k1 = canonical_key(p1, precision)
    k2 = canonical_key(p2, precision)
    return (k1, k2) if k1 <= k2 else (k2, k1)


def distance(p1: PointLike, p2: PointLike) -> float:
    """歐幾里得距離"""
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def format_point(point: PointLike, digits: int = None) -> str:
    """
    格式化點座標，用於軌跡訊息

    參數:
        point: 點座標
        digits: 固定小數位數；None 時使用最短表示

    返回:
        "(x, y)" 字串
    """
    if digits is None:
        return f"({point[0]:g}, {point[1]:g})"
    return f"({point[0]:.{digits}f}, {point[1]:.{digits}f})"
