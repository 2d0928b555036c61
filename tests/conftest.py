#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import pytest

from maze_nav.config.models import PlannerConfig, VehicleConfig
from maze_nav.path_planner.map_model import GridGeometry
from maze_nav.service.data_hub import DataHub
from maze_nav.service.path_sink import LatestPathSink


@pytest.fixture
def point_config() -> PlannerConfig:
    """车辆尺寸为 0：每个障碍点只占一个格子"""
    return PlannerConfig(vehicle=VehicleConfig(half_width=0, half_length=0))


@pytest.fixture
def sink() -> LatestPathSink:
    return LatestPathSink()


@pytest.fixture
def make_hub():
    def _make(rows, cols, start, goal, xs=(), ys=()):
        hub = DataHub()
        hub.set_geometry(GridGeometry(rows=rows, cols=cols,
                                      start_row=start[0], start_col=start[1],
                                      goal_row=goal[0], goal_col=goal[1]))
        hub.set_obstacles(xs, ys)
        return hub
    return _make
