#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
运行时模块

周期触发与单工作线程调度。
"""

from .planning_runtime import PlanningRuntime

__all__ = ['PlanningRuntime']
