#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
服务模块

输入数据总线、规划周期与路径输出。
"""

from .data_hub import DataHub, InputSnapshot
from .path_sink import (
    ArrayDimension,
    PathMessage,
    PathSink,
    CallbackPathSink,
    LatestPathSink,
    LoggingPathSink,
)
from .path_persistence import PathFileWriter
from .path_planning_service import CycleResult, CycleStatus, PlanningCycle, SnapshotSource
from .scenario_source import Scenario, ScenarioFileSource, load_scenario

__all__ = [
    'DataHub',
    'InputSnapshot',
    'ArrayDimension',
    'PathMessage',
    'PathSink',
    'CallbackPathSink',
    'LatestPathSink',
    'LoggingPathSink',
    'PathFileWriter',
    'CycleResult',
    'CycleStatus',
    'PlanningCycle',
    'SnapshotSource',
    'Scenario',
    'ScenarioFileSource',
    'load_scenario',
]
