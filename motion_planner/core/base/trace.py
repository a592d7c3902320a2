"""
計算軌跡記錄模組
記錄建圖與搜索過程中的每一步快照，供逐步回放
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from ..geometry import Edge, Point


@dataclass(frozen=True)
class TraceStep:
    """單一步驟快照（不可變）"""
    message: str
    vertices: Tuple[Point, ...] = ()
    edges: Tuple[Edge, ...] = ()
    path: Tuple[Point, ...] = ()


class TraceRecorder:
    """
    只可追加的步驟記錄器

    每次 record() 都會複製當前的頂點、邊與路徑，之後對原始
    列表的修改不會影響已記錄的步驟。停用時不做任何快照，
    用於只需要最終結果的輕量模式。
    """

    def __init__(self, enabled: bool = True,
                 on_step: Optional[Callable[[TraceStep], None]] = None):
        """
        參數:
            enabled: 是否記錄步驟
            on_step: 每新增一步時同步呼叫的回調（可選）
        """
        self.enabled = enabled
        self.on_step = on_step
        self._steps: List[TraceStep] = []

    def record(self, message: str,
               vertices: Iterable[Point] = (),
               edges: Iterable[Edge] = (),
               path: Iterable[Point] = ()) -> Optional[TraceStep]:
        """
        追加一步快照

        參數:
            message: 步驟說明
            vertices: 目前已發現的頂點
            edges: 目前已發現的邊
            path: 目前的路徑

        返回:
            新增的 TraceStep；停用時返回 None
        """
        if not self.enabled:
            return None

        step = TraceStep(
            message=message,
            vertices=tuple(vertices),
            edges=tuple((e[0], e[1]) for e in edges),
            path=tuple(path)
        )
        self._steps.append(step)

        if self.on_step is not None:
            self.on_step(step)
        return step

    @property
    def steps(self) -> Tuple[TraceStep, ...]:
        """所有已記錄步驟（依記錄順序）"""
        return tuple(self._steps)

    @property
    def last(self) -> Optional[TraceStep]:
        """最後一步，沒有步驟時為 None"""
        return self._steps[-1] if self._steps else None

    def replay(self, count: int) -> Tuple[TraceStep, ...]:
        """返回前 count 步"""
        return tuple(self._steps[:max(0, count)])

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[TraceStep]:
        return iter(tuple(self._steps))

    def __getitem__(self, index):
        return self._steps[index]
