#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
栅格地图模型

Grid 使用一块连续的 numpy 布尔数组存储占用状态（True=障碍），
每个周期新建一份，周期结束随引用释放。
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from maze_nav.path_planner.errors import InvalidDimension, InvalidGeometry, OutOfBounds

GridCoord = Tuple[int, int]  # (row, col)


@dataclass(frozen=True)
class Cell:
    """单元格视图（由 Grid.at 返回）"""
    row: int
    col: int
    blocked: bool


@dataclass(frozen=True)
class VehicleFootprint:
    """车辆尺寸：half_width 沿行方向，half_length 沿列方向（栅格单位）"""
    half_width: int
    half_length: int

    def __post_init__(self) -> None:
        if self.half_width < 0 or self.half_length < 0:
            raise ValueError(f"车辆尺寸不能为负数: ({self.half_width}, {self.half_length})")


@dataclass(frozen=True)
class GridGeometry:
    """栅格几何：尺寸 + 起点 + 终点（均为栅格索引）"""
    rows: int
    cols: int
    start_row: int
    start_col: int
    goal_row: int
    goal_col: int

    # 原始消息顺序: [cols, rows, start_row, start_col, goal_row, goal_col]
    FLAT_LENGTH = 6

    @property
    def start(self) -> GridCoord:
        return (self.start_row, self.start_col)

    @property
    def goal(self) -> GridCoord:
        return (self.goal_row, self.goal_col)

    @classmethod
    def from_flat(cls, values: Sequence[float]) -> "GridGeometry":
        """
        从扁平数组解析几何信息

        Args:
            values: [cols, rows, start_row, start_col, goal_row, goal_col]，浮点值向零截断

        Raises:
            InvalidGeometry: 数值个数不足或包含非数值
        """
        if isinstance(values, (str, bytes)) or not hasattr(values, "__len__") \
                or len(values) < cls.FLAT_LENGTH:
            raise InvalidGeometry(f"几何数组至少需要 {cls.FLAT_LENGTH} 个值: {values}")
        try:
            cols, rows, sr, sc, gr, gc = (int(v) for v in list(values)[:cls.FLAT_LENGTH])
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidGeometry(f"几何数组包含非数值: {values}") from e
        return cls(rows=rows, cols=cols, start_row=sr, start_col=sc, goal_row=gr, goal_col=gc)

    def to_flat(self) -> List[float]:
        return [float(self.cols), float(self.rows),
                float(self.start_row), float(self.start_col),
                float(self.goal_row), float(self.goal_col)]

    def validate(self) -> None:
        """
        校验尺寸与起点/终点范围

        Raises:
            InvalidGeometry: 尺寸不大于0，或起点/终点不在 [0,rows)×[0,cols)
        """
        if self.rows <= 0 or self.cols <= 0:
            raise InvalidGeometry(f"栅格尺寸必须大于0: rows={self.rows}, cols={self.cols}")
        for name, (r, c) in (("起点", self.start), ("终点", self.goal)):
            if not (0 <= r < self.rows and 0 <= c < self.cols):
                raise InvalidGeometry(
                    f"{name}超出栅格范围: {(r, c)}, grid_size=({self.rows}, {self.cols})"
                )


class Grid:
    """
    占用栅格

    只提供存储与带边界检查的访问；障碍只能被标记，不能被清除。

    示例:
        ```python
        grid = Grid.build(5, 5)
        grid.mark_blocked(2, 2)
        grid.at(2, 2).blocked  # True
        ```
    """

    def __init__(self, blocked: np.ndarray):
        self._blocked = blocked

    @classmethod
    def build(cls, rows: int, cols: int) -> "Grid":
        """
        分配 rows×cols 栅格，所有单元格初始为可通行

        Raises:
            InvalidDimension: rows <= 0 或 cols <= 0
        """
        if rows <= 0 or cols <= 0:
            raise InvalidDimension(f"栅格尺寸必须大于0: rows={rows}, cols={cols}")
        return cls(np.zeros((rows, cols), dtype=bool))

    @property
    def rows(self) -> int:
        return self._blocked.shape[0]

    @property
    def cols(self) -> int:
        return self._blocked.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    @property
    def blocked_mask(self) -> np.ndarray:
        """只读的占用数组视图"""
        view = self._blocked.view()
        view.flags.writeable = False
        return view

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBounds(f"单元格越界: {(row, col)}, grid_size={self.shape}")

    def at(self, row: int, col: int) -> Cell:
        self._check(row, col)
        return Cell(row=row, col=col, blocked=bool(self._blocked[row, col]))

    def is_blocked(self, row: int, col: int) -> bool:
        self._check(row, col)
        return bool(self._blocked[row, col])

    def mark_blocked(self, row: int, col: int) -> bool:
        """标记障碍，返回该单元格此前是否为可通行"""
        self._check(row, col)
        was_free = not self._blocked[row, col]
        self._blocked[row, col] = True
        return bool(was_free)

    def stamp(self, mask: np.ndarray, row: int, col: int) -> int:
        """
        以 (row, col) 为中心把布尔模板叠加到栅格上，超出范围部分被裁剪

        Args:
            mask: 形状为 (2h+1, 2w+1) 的布尔模板
            row: 模板中心所在行
            col: 模板中心所在列

        Returns:
            新增障碍单元格数
        """
        half_r = mask.shape[0] // 2
        half_c = mask.shape[1] // 2
        r0, r1 = row - half_r, row + half_r + 1
        c0, c1 = col - half_c, col + half_c + 1

        # 裁剪到栅格范围
        gr0, gr1 = max(r0, 0), min(r1, self.rows)
        gc0, gc1 = max(c0, 0), min(c1, self.cols)
        if gr0 >= gr1 or gc0 >= gc1:
            return 0

        sub_mask = mask[gr0 - r0:gr1 - r0, gc0 - c0:gc1 - c0]
        region = self._blocked[gr0:gr1, gc0:gc1]
        added = int(np.count_nonzero(sub_mask & ~region))
        region |= sub_mask
        return added

    def blocked_count(self) -> int:
        return int(np.count_nonzero(self._blocked))

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols}, blocked={self.blocked_count()})"


def render_ascii(grid: Grid, path: Optional[List[GridCoord]] = None,
                 start: Optional[GridCoord] = None, goal: Optional[GridCoord] = None) -> str:
    """
    用 ASCII 可视化栅格：
      '#' = 障碍, '.' = 空地, '*' = 路径, 'S' = 起点, 'G' = 终点
    """
    vis = np.where(grid.blocked_mask, '#', '.').astype('<U1')

    for r, c in path or []:
        vis[r, c] = '*'

    if start is None and path:
        start = path[0]
    if goal is None and path:
        goal = path[-1]
    if start is not None:
        vis[start] = 'S'
    if goal is not None:
        vis[goal] = 'G'

    return "\n".join("".join(row) for row in vis)
