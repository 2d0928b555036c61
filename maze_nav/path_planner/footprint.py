#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
障碍膨胀模块：按车辆尺寸把障碍点扩展为占用区域

判定规则沿用线段栅格化的判定方式：对每个偏移量 (dx, dy)，
在障碍点与候选单元格构成的包围盒内扫描，同时按 Bresenham 步进移动
游标，扫描坐标与游标重合时判定候选单元格在线段上。
该规则得到的并不是标准的 Bresenham 直线形状，这里保持原样。
"""

from functools import lru_cache
from typing import Sequence

import numpy as np
from loguru import logger

from maze_nav.path_planner.errors import InvalidObstacles
from maze_nav.path_planner.map_model import Grid, VehicleFootprint


def is_cell_on_line(x1: int, y1: int, x2: int, y2: int) -> bool:
    """
    判断候选单元格 (x2, y2) 是否在以 (x1, y1) 为起点的线段上

    Args:
        x1, y1: 线段起点（障碍点）
        x2, y2: 候选单元格

    Returns:
        扫描过程中出现扫描坐标与步进游标重合时返回 True
    """
    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    # 只在包围盒内扫描
    for x in range(min(x1, x2), max(x1, x2) + 1):
        for y in range(min(y1, y2), max(y1, y2) + 1):
            if x == x1 and y == y1:
                return True

            e2 = 2 * err
            if e2 > -dy:
                err -= dy
                x1 += sx
            if e2 < dx:
                err += dx
                y1 += sy

    return False


@lru_cache(maxsize=32)
def _stencil(half_width: int, half_length: int) -> np.ndarray:
    mask = np.zeros((2 * half_width + 1, 2 * half_length + 1), dtype=bool)
    for dx in range(-half_width, half_width + 1):
        for dy in range(-half_length, half_length + 1):
            mask[dx + half_width, dy + half_length] = is_cell_on_line(0, 0, dx, dy)
    mask.flags.writeable = False
    return mask


def footprint_stencil(footprint: VehicleFootprint) -> np.ndarray:
    """
    计算车辆尺寸对应的偏移模板

    判定只与偏移量有关，与障碍点位置无关，因此每种尺寸只计算一次。

    Returns:
        形状为 (2*half_width+1, 2*half_length+1) 的只读布尔数组，
        mask[dx + half_width, dy + half_length] 表示偏移 (dx, dy) 是否被占用
    """
    return _stencil(footprint.half_width, footprint.half_length)


def inflate(
    grid: Grid,
    obstacles_x: Sequence[int],
    obstacles_y: Sequence[int],
    footprint: VehicleFootprint,
) -> int:
    """
    把障碍点按车辆尺寸膨胀到栅格上

    Args:
        grid: 当前周期的栅格（原地修改）
        obstacles_x: 障碍点行坐标序列
        obstacles_y: 障碍点列坐标序列
        footprint: 车辆尺寸

    Returns:
        新增障碍单元格数

    Raises:
        InvalidObstacles: 两个序列长度不一致
    """
    if len(obstacles_x) != len(obstacles_y):
        raise InvalidObstacles(
            f"障碍物坐标序列长度不一致: len(x)={len(obstacles_x)}, len(y)={len(obstacles_y)}"
        )

    mask = footprint_stencil(footprint)
    added = 0
    # 越界部分直接跳过，不视为错误
    for ox, oy in zip(obstacles_x, obstacles_y):
        added += grid.stamp(mask, int(ox), int(oy))

    logger.debug(
        f"障碍膨胀完成: 障碍点={len(obstacles_x)}, 新增障碍格={added}, "
        f"footprint=({footprint.half_width}, {footprint.half_length})"
    )
    return added
