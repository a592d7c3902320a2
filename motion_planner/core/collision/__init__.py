"""
障礙物模組
提供障礙物型別與輸入正規化
"""

from .obstacles import (
    ObstacleBase,
    PolygonObstacle,
    RectangleObstacle,
    normalize_obstacles
)

__all__ = [
    'ObstacleBase',
    'PolygonObstacle',
    'RectangleObstacle',
    'normalize_obstacles'
]
