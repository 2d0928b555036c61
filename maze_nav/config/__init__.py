#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
规划配置模块

提供类型安全的配置管理和验证。
"""

from .models import (
    PlannerConfig,
    VehicleConfig,
    PathPlanningConfig,
    ScheduleConfig,
    PersistenceConfig,
    LogConfig,
)
from .loader import load_config

__all__ = [
    'PlannerConfig',
    'VehicleConfig',
    'PathPlanningConfig',
    'ScheduleConfig',
    'PersistenceConfig',
    'LogConfig',
    'load_config'
]
