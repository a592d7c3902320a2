"""
交點計算模組
提供方向判定、線段相交判定與線段交點計算
"""

from typing import Optional

import numpy as np

from .coordinate import Point, PointLike


# ==========================================
# 方向判定
# ==========================================
def ccw(a: PointLike, b: PointLike, c: PointLike) -> bool:
    """
    判斷 A → B → C 是否為逆時針方向（外積符號）

    參數:
        a, b, c: 三個點

    返回:
        (C.y - A.y)(B.x - A.x) > (B.y - A.y)(C.x - A.x)
    """
    return (c[1] - a[1]) * (b[0] - a[0]) > (b[1] - a[1]) * (c[0] - a[0])


# ==========================================
# 線段相交判定
# ==========================================
def segments_intersect(a: PointLike, b: PointLike,
                       c: PointLike, d: PointLike) -> bool:
    """
    判斷線段 AB 與 CD 是否真相交

    僅相接或共線且兩組方向判定結果相同時返回 False。

    參數:
        a, b: 第一條線段的端點
        c, d: 第二條線段的端點

    返回:
        是否相交
    """
    return ccw(a, c, d) != ccw(b, c, d) and ccw(a, b, c) != ccw(a, b, d)


def segments_intersect_many(a: PointLike, b: PointLike,
                            starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
    """
    一條線段對多條線段的相交判定（向量化版本）

    參數:
        a, b: 查詢線段端點
        starts: (N, 2) 其他線段起點
        ends: (N, 2) 其他線段終點

    返回:
        長度 N 的布林陣列
    """
    starts = np.asarray(starts, dtype=float).reshape(-1, 2)
    ends = np.asarray(ends, dtype=float).reshape(-1, 2)
    ax, ay = a[0], a[1]
    bx, by = b[0], b[1]
    cx, cy = starts[:, 0], starts[:, 1]
    dx, dy = ends[:, 0], ends[:, 1]

    acd = (dy - ay) * (cx - ax) > (cy - ay) * (dx - ax)
    bcd = (dy - by) * (cx - bx) > (cy - by) * (dx - bx)
    abc = (cy - ay) * (bx - ax) > (by - ay) * (cx - ax)
    abd = (dy - ay) * (bx - ax) > (by - ay) * (dx - ax)

    return (acd != bcd) & (abc != abd)


# ==========================================
# 線段-線段交點
# ==========================================
def line_intersection(a: PointLike, b: PointLike,
                      c: PointLike, d: PointLike) -> Optional[Point]:
    """
    計算兩條線段的交點

    以 r = B - A、s = D - C 的行列式求解；行列式為零（平行或共線）時
    返回 None，不做除法。

    參數:
        a, b: 第一條線段的端點
        c, d: 第二條線段的端點

    返回:
        交點座標，如果沒有交點則返回 None
    """
    rx = b[0] - a[0]
    ry = b[1] - a[1]
    sx = d[0] - c[0]
    sy = d[1] - c[1]

    denom = rx * sy - ry * sx
    if denom == 0:
        # 平行或共線
        return None

    qx = c[0] - a[0]
    qy = c[1] - a[1]
    t = (qx * sy - qy * sx) / denom
    u = (qx * ry - qy * rx) / denom

    if not (0 <= t <= 1 and 0 <= u <= 1):
        return None

    return Point(a[0] + t * rx, a[1] + t * ry)
