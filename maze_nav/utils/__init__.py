#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
工具模块
提供日志初始化与程序路径管理
"""

from .logger import SetupLogger
from .global_path import (
    GetProgramDir,
    GetConfigPath,
    GetGlobalConfig,
)

__all__ = [
    'SetupLogger',
    'GetProgramDir',
    'GetConfigPath',
    'GetGlobalConfig',
]
