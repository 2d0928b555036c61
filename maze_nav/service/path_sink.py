#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径输出模块

PathMessage 对应按行展开的二维浮点数组：
  dim[0] = ("rows", N, 2N), dim[1] = ("cols", 2, 2), data = [r0, c0, r1, c1, ...]
无路径时 data 与 layout 均为空。
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

import numpy as np
from loguru import logger

from maze_nav.path_planner.map_model import GridCoord


@dataclass(frozen=True)
class ArrayDimension:
    label: str
    size: int
    stride: int


@dataclass(frozen=True)
class PathMessage:
    layout: List[ArrayDimension] = field(default_factory=list)
    data: List[float] = field(default_factory=list)

    @classmethod
    def from_path(cls, path: Sequence[GridCoord]) -> "PathMessage":
        """把路径展开为扁平数组，空路径得到空消息"""
        if not path:
            return cls()
        n = len(path)
        flat = np.asarray(path, dtype=np.float64).reshape(n * 2)
        layout = [
            ArrayDimension(label="rows", size=n, stride=n * 2),
            ArrayDimension(label="cols", size=2, stride=2),
        ]
        return cls(layout=layout, data=flat.tolist())

    @property
    def is_empty(self) -> bool:
        return not self.data

    def to_path(self) -> List[GridCoord]:
        """
        按 layout 还原路径

        Raises:
            ValueError: layout 与 data 长度不匹配
        """
        if self.is_empty:
            return []
        if len(self.layout) != 2:
            raise ValueError(f"layout 必须包含2个维度: {self.layout}")
        rows_dim, cols_dim = self.layout
        if rows_dim.size * cols_dim.size != len(self.data) or rows_dim.stride != len(self.data):
            raise ValueError(
                f"layout 与数据长度不匹配: rows={rows_dim}, cols={cols_dim}, len(data)={len(self.data)}"
            )
        arr = np.asarray(self.data, dtype=np.float64).reshape(rows_dim.size, cols_dim.size)
        return [(int(r), int(c)) for r, c in arr]


class PathSink(ABC):
    """路径接收方接口"""

    @abstractmethod
    def publish(self, message: PathMessage) -> None:
        """
        接收一个周期的输出

        Args:
            message: 展开后的路径消息，无路径时为空消息
        """
        pass


class CallbackPathSink(PathSink):
    """把消息转交给回调函数"""

    def __init__(self, callback: Callable[[PathMessage], None]):
        self.callback_ = callback

    def publish(self, message: PathMessage) -> None:
        self.callback_(message)


class LatestPathSink(PathSink):
    """保存最近一次输出（线程安全）"""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._message: Optional[PathMessage] = None
        self._count = 0

    def publish(self, message: PathMessage) -> None:
        with self._lock:
            self._message = message
            self._count += 1

    def get_latest(self) -> Optional[PathMessage]:
        with self._lock:
            return self._message

    @property
    def publish_count(self) -> int:
        with self._lock:
            return self._count


class LoggingPathSink(PathSink):
    """只把输出写到日志"""

    def publish(self, message: PathMessage) -> None:
        if message.is_empty:
            logger.info("发布空路径")
            return
        path = message.to_path()
        logger.info(f"发布路径: 长度={len(path)}, 起点={path[0]}, 终点={path[-1]}")
