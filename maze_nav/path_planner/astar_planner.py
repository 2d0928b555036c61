#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径规划模块：实现 A* 算法进行路径规划
"""

# 标准库导入
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import heapq
import itertools
import math
import time

# 第三方库导入
import numpy as np
from loguru import logger

from maze_nav.path_planner.errors import OutOfBounds
from maze_nav.path_planner.map_model import Grid, GridCoord

SQRT2 = math.sqrt(2.0)

# 4 邻接: (drow, dcol, step_cost)
NEIGHBORS_4 = [
    (-1,  0, 1.0),   # 上
    ( 1,  0, 1.0),   # 下
    ( 0, -1, 1.0),   # 左
    ( 0,  1, 1.0),   # 右
]

# 8 邻接
NEIGHBORS_8 = NEIGHBORS_4 + [
    (-1, -1, SQRT2),  # 左上
    (-1,  1, SQRT2),  # 右上
    ( 1, -1, SQRT2),  # 左下
    ( 1,  1, SQRT2),  # 右下
]


@dataclass
class SearchResult:
    """A* 搜索结果，found=False 表示无路径（正常结果，不是异常）"""
    found: bool
    path: List[GridCoord] = field(default_factory=list)
    cost: float = math.inf
    nodes_explored: int = 0
    reason: str = ""


class AStarPlanner:
    """
    A* 算法路径规划器

    开放集按 f 升序排列，f 相同按 h 升序，再按入队顺序，保证结果可复现。
    闭合后的单元格不会再次进入开放集。

    示例:
        ```python
        planner = AStarPlanner(connectivity=8)
        result = planner.find_path(grid, start=(0, 0), goal=(4, 4))
        ```
    """

    def __init__(self, connectivity: int = 8, max_expansions: Optional[int] = None,
                 time_limit_s: Optional[float] = None):
        """
        初始化 A* 规划器

        Args:
            connectivity: 邻接方式，4 或 8
            max_expansions: 最大扩展节点数，None 表示不限制
            time_limit_s: 搜索时间上限（秒），None 表示不限制

        Raises:
            ValueError: 输入参数无效
        """
        if connectivity not in (4, 8):
            raise ValueError(f"connectivity必须是4或8: {connectivity}")
        if max_expansions is not None and max_expansions <= 0:
            raise ValueError(f"max_expansions必须大于0: {max_expansions}")
        if time_limit_s is not None and time_limit_s <= 0:
            raise ValueError(f"time_limit_s必须大于0: {time_limit_s}")

        self.connectivity_ = connectivity
        self.max_expansions_ = max_expansions
        self.time_limit_s_ = time_limit_s
        self.directions_ = NEIGHBORS_8 if connectivity == 8 else NEIGHBORS_4

    def heuristic(self, a: GridCoord, b: GridCoord) -> float:
        """
        启发式函数：8 邻接用欧氏距离，4 邻接用曼哈顿距离
        """
        dr = a[0] - b[0]
        dc = a[1] - b[1]
        if self.connectivity_ == 8:
            return math.hypot(dr, dc)
        return float(abs(dr) + abs(dc))

    def find_path(self, grid: Grid, start: GridCoord, goal: GridCoord) -> SearchResult:
        """
        A* 算法核心实现

        Args:
            grid: 占用栅格
            start: 起点 (row, col)
            goal: 终点 (row, col)

        Returns:
            SearchResult，找不到路径时 found=False

        Raises:
            OutOfBounds: 起点或终点超出栅格范围
        """
        start = (int(start[0]), int(start[1]))
        goal = (int(goal[0]), int(goal[1]))
        for name, pos in (("起点", start), ("终点", goal)):
            if not grid.in_bounds(*pos):
                raise OutOfBounds(f"{name}超出地图范围: {pos}, grid_size={grid.shape}")

        rows, cols = grid.shape
        blocked = grid.blocked_mask

        logger.debug(f"[A*] 开始路径规划: grid_size=({rows}, {cols}), start={start}, goal={goal}")

        # 起点和终点相同
        if start == goal:
            logger.debug("[A*] 起点和终点相同，返回单点路径")
            return SearchResult(found=True, path=[start], cost=0.0, nodes_explored=1, reason="ok")

        if blocked[goal]:
            logger.warning(f"[A*] 终点位于障碍物上: {goal}")
            return SearchResult(found=False, reason="终点位于障碍物上")

        # 本次搜索的临时数据
        g_score = np.full((rows, cols), np.inf, dtype=np.float64)
        closed = np.zeros((rows, cols), dtype=bool)
        came_from = {}

        counter = itertools.count()
        h_start = self.heuristic(start, goal)
        g_score[start] = 0.0
        # 优先队列：(f, h, 入队序号, cell)
        open_heap: List[Tuple[float, float, int, GridCoord]] = [(h_start, h_start, next(counter), start)]

        nodes_explored = 0
        t0 = time.perf_counter()

        while open_heap:
            _, _, _, current = heapq.heappop(open_heap)

            # 已闭合的过期条目
            if closed[current]:
                continue
            closed[current] = True
            nodes_explored += 1

            # 到达终点
            if current == goal:
                path = self._reconstruct(came_from, goal)
                cost = float(g_score[goal])
                logger.info(
                    f"[A*] 路径规划成功: 路径长度={len(path)}, 代价={cost:.3f}, 探索节点数={nodes_explored}"
                )
                return SearchResult(found=True, path=path, cost=cost,
                                    nodes_explored=nodes_explored, reason="ok")

            if self.max_expansions_ is not None and nodes_explored >= self.max_expansions_:
                logger.warning(f"[A*] 超过最大扩展节点数 {self.max_expansions_}，放弃搜索")
                return SearchResult(found=False, nodes_explored=nodes_explored,
                                    reason="超过最大扩展节点数")
            if self.time_limit_s_ is not None and time.perf_counter() - t0 > self.time_limit_s_:
                logger.warning(f"[A*] 搜索超时 {self.time_limit_s_}s，放弃搜索")
                return SearchResult(found=False, nodes_explored=nodes_explored, reason="搜索超时")

            cr, cc = current
            current_g = g_score[current]

            # 探索邻居
            for dr, dc, step_cost in self.directions_:
                nr, nc = cr + dr, cc + dc

                # 检查边界
                if nr < 0 or nr >= rows or nc < 0 or nc >= cols:
                    continue

                # 检查障碍物与闭合集
                if blocked[nr, nc] or closed[nr, nc]:
                    continue

                new_g = current_g + step_cost
                if new_g < g_score[nr, nc]:
                    g_score[nr, nc] = new_g
                    neighbor = (nr, nc)
                    came_from[neighbor] = current
                    h = self.heuristic(neighbor, goal)
                    heapq.heappush(open_heap, (new_g + h, h, next(counter), neighbor))

        # 无法到达终点
        logger.warning(f"[A*] 无法找到从起点到终点的路径: start={start}, goal={goal}, 探索节点数={nodes_explored}")
        return SearchResult(found=False, nodes_explored=nodes_explored, reason="无可达路径")

    @staticmethod
    def _reconstruct(came_from: dict, goal: GridCoord) -> List[GridCoord]:
        path = [goal]
        pos = goal
        while pos in came_from:
            pos = came_from[pos]
            path.append(pos)
        path.reverse()
        return path
