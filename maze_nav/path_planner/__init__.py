#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径规划模块

提供占用栅格、障碍膨胀与 A* 搜索。
"""

from .errors import (
    PlanningError,
    InvalidDimension,
    OutOfBounds,
    InvalidGeometry,
    InvalidObstacles,
    PersistenceWriteFailure,
)
from .map_model import Cell, Grid, GridCoord, GridGeometry, VehicleFootprint, render_ascii
from .footprint import footprint_stencil, inflate, is_cell_on_line
from .astar_planner import AStarPlanner, SearchResult

__all__ = [
    'PlanningError',
    'InvalidDimension',
    'OutOfBounds',
    'InvalidGeometry',
    'InvalidObstacles',
    'PersistenceWriteFailure',
    'Cell',
    'Grid',
    'GridCoord',
    'GridGeometry',
    'VehicleFootprint',
    'render_ascii',
    'footprint_stencil',
    'inflate',
    'is_cell_on_line',
    'AStarPlanner',
    'SearchResult',
]
