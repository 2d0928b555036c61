#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径规划服务模块

封装一个规划周期的完整流程：快照输入 → 建栅格 → 障碍膨胀 → A* → 输出。
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol, Sequence, Tuple

from loguru import logger

from maze_nav.config.models import PlannerConfig
from maze_nav.path_planner.astar_planner import AStarPlanner, SearchResult
from maze_nav.path_planner.errors import (
    InvalidGeometry,
    InvalidObstacles,
    PersistenceWriteFailure,
    PlanningError,
)
from maze_nav.path_planner.footprint import inflate
from maze_nav.path_planner.map_model import Grid, GridCoord, GridGeometry
from maze_nav.service.data_hub import InputSnapshot
from maze_nav.service.path_persistence import PathFileWriter
from maze_nav.service.path_sink import PathMessage, PathSink


class SnapshotSource(Protocol):
    """几何 + 障碍输入源"""

    def get_snapshot(self) -> InputSnapshot:
        ...


class CycleStatus(Enum):
    PATH_FOUND = "path_found"   # 成功，找到路径
    NOT_FOUND = "not_found"     # 成功，无可达路径
    FAILED = "failed"           # 周期失败（输入无效），不发布


@dataclass
class CycleResult:
    status: CycleStatus
    path: List[GridCoord] = field(default_factory=list)
    reason: str = ""
    error: Optional[PlanningError] = None
    cycle_index: int = 0
    duration_s: float = 0.0
    # 本周期实际使用的几何与膨胀后的栅格，FAILED 时为 None
    geometry: Optional[GridGeometry] = None
    grid: Optional[Grid] = None

    @property
    def ok(self) -> bool:
        return self.status != CycleStatus.FAILED

    @property
    def found(self) -> bool:
        return self.status == CycleStatus.PATH_FOUND


def _to_int_coords(values: Sequence[float], axis: str) -> Tuple[int, ...]:
    try:
        return tuple(int(v) for v in values)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidObstacles(f"障碍物{axis}坐标包含非数值: {e}") from e


class PlanningCycle:
    """规划周期：每次调用 run() 独立完成一次重规划，不在周期之间保留状态"""

    def __init__(
        self,
        config: PlannerConfig,
        source: SnapshotSource,
        sink: PathSink,
        persistence: Optional[PathFileWriter] = None,
    ):
        """
        初始化规划周期

        Args:
            config: PlannerConfig配置对象
            source: 输入源（通常为 DataHub）
            sink: 路径接收方
            persistence: 路径文件导出（可选）
        """
        self.config_ = config
        self.source_ = source
        self.sink_ = sink
        self.persistence_ = persistence
        self.footprint_ = config.vehicle.to_footprint()
        self.planner_ = AStarPlanner(
            connectivity=config.path_planning.connectivity,
            max_expansions=config.path_planning.max_expansions,
            time_limit_s=config.path_planning.time_limit_s,
        )
        self._cycle_count = 0

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    def run(self) -> CycleResult:
        """读取最新输入快照并执行一个周期"""
        return self.run_snapshot(self.source_.get_snapshot())

    def run_snapshot(self, snapshot: InputSnapshot) -> CycleResult:
        """
        在给定快照上执行一个周期

        Returns:
            CycleResult；输入无效时 status=FAILED 且不发布
        """
        self._cycle_count += 1
        index = self._cycle_count
        t0 = time.perf_counter()

        try:
            grid, result = self._plan(snapshot)
        except PlanningError as e:
            logger.error(f"规划周期 #{index} 失败: {type(e).__name__}: {e}")
            return CycleResult(status=CycleStatus.FAILED, reason=str(e), error=e,
                               cycle_index=index, duration_s=time.perf_counter() - t0)

        path, reason = result.path, result.reason
        if path:
            status = CycleStatus.PATH_FOUND
            logger.info(f"规划周期 #{index}: 找到路径，长度={len(path)}")
            for r, c in path:
                logger.debug(f"({r}, {c})")
        else:
            status = CycleStatus.NOT_FOUND
            logger.warning(f"规划周期 #{index}: 未找到路径（{reason}）")

        self._deliver(PathMessage.from_path(path), index)

        if path and self.persistence_ is not None:
            try:
                written = self.persistence_.write(path)
                logger.info(f"路径已写入 {written}")
            except PersistenceWriteFailure as e:
                logger.error(f"{e}")

        return CycleResult(status=status, path=path, reason=reason,
                           cycle_index=index, duration_s=time.perf_counter() - t0,
                           geometry=snapshot.geometry, grid=grid)

    def _plan(self, snapshot: InputSnapshot) -> Tuple[Grid, SearchResult]:
        geometry = snapshot.geometry
        if geometry is None:
            raise InvalidGeometry("尚未收到栅格几何信息")
        geometry.validate()

        xs = _to_int_coords(snapshot.obstacles_x, "x")
        ys = _to_int_coords(snapshot.obstacles_y, "y")
        if len(xs) != len(ys):
            raise InvalidObstacles(f"障碍物坐标序列长度不一致: len(x)={len(xs)}, len(y)={len(ys)}")

        grid = Grid.build(geometry.rows, geometry.cols)
        inflate(grid, xs, ys, self.footprint_)

        return grid, self.planner_.find_path(grid, geometry.start, geometry.goal)

    def _deliver(self, message: PathMessage, index: int) -> None:
        try:
            self.sink_.publish(message)
        except Exception as e:
            logger.error(f"规划周期 #{index}: 路径发布失败: {e}")
