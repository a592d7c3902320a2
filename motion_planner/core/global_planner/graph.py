"""
無向鄰接圖
以量化鍵為頂點識別，供可視圖與 Voronoi 骨架共用
"""

from typing import Dict, List, Optional

from ..geometry import KEY_PRECISION, Edge, Point, PointKey, PointLike, as_point, canonical_key


class Graph:
    """
    頂點鍵 → 鄰居點列表的無向圖

    加入邊 (a, b) 時，b 列在 a 的鍵下，a 也列在 b 的鍵下。
    """

    def __init__(self, precision: int = KEY_PRECISION):
        self.precision = precision
        self._adjacency: Dict[PointKey, List[Point]] = {}

    def key(self, point: PointLike) -> PointKey:
        """計算點的量化鍵"""
        return canonical_key(point, self.precision)

    def add_vertex(self, point: PointLike) -> PointKey:
        """加入頂點（已存在則不變），返回其鍵"""
        k = self.key(point)
        if k not in self._adjacency:
            self._adjacency[k] = []
        return k

    def add_edge(self, p1: PointLike, p2: PointLike):
        """加入無向邊"""
        p1 = as_point(p1)
        p2 = as_point(p2)
        k1 = self.add_vertex(p1)
        k2 = self.add_vertex(p2)
        self._adjacency[k1].append(p2)
        self._adjacency[k2].append(p1)

    @classmethod
    def from_edges(cls, edges: List[Edge], precision: int = KEY_PRECISION) -> 'Graph':
        """由邊列表重建圖"""
        graph = cls(precision)
        for p1, p2 in edges:
            graph.add_edge(p1, p2)
        return graph

    def neighbors(self, point: PointLike) -> Optional[List[Point]]:
        """
        查詢鄰居

        返回:
            鄰居列表；頂點不在圖中時返回 None
        """
        return self._adjacency.get(self.key(point))

    @property
    def edge_count(self) -> int:
        """無向邊數（自環計一次）"""
        return sum(len(v) for v in self._adjacency.values()) // 2

    def __contains__(self, point: PointLike) -> bool:
        return self.key(point) in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)
