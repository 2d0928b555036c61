#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import threading
import time
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from loguru import logger

from maze_nav.path_planner.map_model import GridGeometry


@dataclass(frozen=True)
class InputSnapshot:
    geometry: Optional[GridGeometry]     # 最新栅格几何（未收到时为 None）
    obstacles_x: Tuple[float, ...]       # 障碍点行坐标
    obstacles_y: Tuple[float, ...]       # 障碍点列坐标
    version: int                         # 每次写入递增
    timestamp: float                     # 最近一次写入时间 (perf_counter)


class DataHub:
    """
    DataHub：规划输入的数据总线
    - 保存最新的栅格几何与障碍点
    - 线程安全读写，锁只在拷贝期间持有
    - get_snapshot 返回一次一致的快照，供一个规划周期使用
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._geometry: Optional[GridGeometry] = None
        self._obs_x: Tuple[float, ...] = ()
        self._obs_y: Tuple[float, ...] = ()
        self._version = 0
        self._ts = 0.0

    # --------------------------------------------------------
    # 写入（由外部数据源调用）
    # --------------------------------------------------------
    def set_geometry(self, geometry: GridGeometry) -> None:
        """写入最新栅格几何"""
        if geometry is None:
            return
        now = time.perf_counter()
        with self._lock:
            self._geometry = geometry
            self._touch(now)

    def set_geometry_array(self, values: Sequence[float]) -> None:
        """
        按原始消息格式写入几何：[cols, rows, start_row, start_col, goal_row, goal_col]

        Raises:
            InvalidGeometry: 数组格式无效
        """
        self.set_geometry(GridGeometry.from_flat(values))

    def set_obstacles(self, xs: Sequence[float], ys: Sequence[float]) -> None:
        """同时写入两个障碍坐标序列（一次原子更新）"""
        xs, ys = tuple(xs), tuple(ys)
        now = time.perf_counter()
        with self._lock:
            self._obs_x = xs
            self._obs_y = ys
            self._touch(now)

    def set_obstacles_x(self, xs: Sequence[float]) -> None:
        """单独写入障碍行坐标（对应独立的 x 通道）"""
        xs = tuple(xs)
        now = time.perf_counter()
        with self._lock:
            self._obs_x = xs
            self._touch(now)

    def set_obstacles_y(self, ys: Sequence[float]) -> None:
        """单独写入障碍列坐标（对应独立的 y 通道）"""
        ys = tuple(ys)
        now = time.perf_counter()
        with self._lock:
            self._obs_y = ys
            self._touch(now)

    def _touch(self, now: float) -> None:
        # 调用方已持有锁
        self._version += 1
        self._ts = now

    # --------------------------------------------------------
    # 读取（由规划周期调用）
    # --------------------------------------------------------
    def get_snapshot(self) -> InputSnapshot:
        with self._lock:
            snap = InputSnapshot(
                geometry=self._geometry,
                obstacles_x=self._obs_x,
                obstacles_y=self._obs_y,
                version=self._version,
                timestamp=self._ts,
            )
        return snap

    def reset(self) -> None:
        with self._lock:
            self._geometry = None
            self._obs_x = ()
            self._obs_y = ()
            self._touch(time.perf_counter())
        logger.debug("DataHub: 输入已清空")
