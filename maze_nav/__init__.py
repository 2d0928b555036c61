#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
maze_nav

障碍感知的栅格路径规划：占用栅格、车辆尺寸膨胀、A* 搜索与周期重规划。
"""

__version__ = "0.1.0"
