#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
场景文件输入源

从 YAML 文件读取栅格几何与障碍点并写入 DataHub，文件修改后重新加载。

文件格式:
    geometry:
      rows: 5
      cols: 5
      start_row: 0
      start_col: 0
      goal_row: 4
      goal_col: 4
      # 或者使用原始消息顺序: flat: [cols, rows, start_row, start_col, goal_row, goal_col]
    obstacles:
      x: [2]
      y: [2]
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml
from loguru import logger

from maze_nav.path_planner.errors import InvalidGeometry, InvalidObstacles
from maze_nav.path_planner.map_model import GridGeometry
from maze_nav.service.data_hub import DataHub

_GEOMETRY_KEYS = ("rows", "cols", "start_row", "start_col", "goal_row", "goal_col")


@dataclass(frozen=True)
class Scenario:
    geometry: GridGeometry
    obstacles_x: Tuple[float, ...]
    obstacles_y: Tuple[float, ...]


def _parse_geometry(raw: Any) -> GridGeometry:
    if not isinstance(raw, dict):
        raise InvalidGeometry(f"geometry 必须是字典: {raw!r}")
    if "flat" in raw:
        if not isinstance(raw["flat"], list):
            raise InvalidGeometry(f"geometry.flat 必须是列表: {raw['flat']!r}")
        return GridGeometry.from_flat(raw["flat"])
    missing = [k for k in _GEOMETRY_KEYS if k not in raw]
    if missing:
        raise InvalidGeometry(f"geometry 缺少字段: {missing}")
    try:
        return GridGeometry(**{k: int(raw[k]) for k in _GEOMETRY_KEYS})
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidGeometry(f"geometry 包含非数值: {raw!r}") from e


def _parse_axis(obstacles: Dict[str, Any], axis: str) -> Tuple[float, ...]:
    values = obstacles.get(axis)
    if values is None:
        return ()
    if not isinstance(values, list):
        raise InvalidObstacles(f"obstacles.{axis} 必须是列表: {values!r}")
    return tuple(values)


def load_scenario(path: Union[str, Path]) -> Scenario:
    """
    读取场景文件

    Raises:
        FileNotFoundError: 文件不存在
        yaml.YAMLError: YAML格式错误
        InvalidGeometry: geometry 段无效
        InvalidObstacles: obstacles 段无效
        ValueError: 顶层结构无效
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"场景文件不存在: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"场景文件顶层必须是字典: {path}")

    geometry = _parse_geometry(data.get("geometry"))

    obstacles: Dict[str, Any] = data.get("obstacles") or {}
    if not isinstance(obstacles, dict):
        raise ValueError(f"obstacles 必须是字典: {obstacles!r}")
    xs = _parse_axis(obstacles, "x")
    ys = _parse_axis(obstacles, "y")

    return Scenario(geometry=geometry, obstacles_x=xs, obstacles_y=ys)


class ScenarioFileSource:
    """监视场景文件并把内容推送到 DataHub"""

    def __init__(self, path: Union[str, Path], hub: DataHub):
        self.path_ = Path(path)
        self.hub_ = hub
        self._last_mtime: Optional[float] = None

    def poll(self) -> bool:
        """
        文件有变化时重新加载并推送

        Returns:
            是否推送了新数据
        """
        try:
            mtime = self.path_.stat().st_mtime
        except OSError as e:
            logger.warning(f"无法读取场景文件状态: {self.path_}: {e}")
            return False

        if self._last_mtime is not None and mtime == self._last_mtime:
            return False

        try:
            scenario = load_scenario(self.path_)
        except (yaml.YAMLError, OSError, TypeError, ValueError) as e:
            # 保留上一次有效输入
            logger.error(f"场景文件加载失败: {self.path_}: {e}")
            self._last_mtime = mtime
            return False

        self._last_mtime = mtime
        self.hub_.set_geometry(scenario.geometry)
        self.hub_.set_obstacles(scenario.obstacles_x, scenario.obstacles_y)
        logger.info(
            f"场景已加载: {self.path_.name}, grid=({scenario.geometry.rows}, {scenario.geometry.cols}), "
            f"障碍点={len(scenario.obstacles_x)}"
        )
        return True
