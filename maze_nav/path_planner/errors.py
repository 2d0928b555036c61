#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
规划错误类型

所有单周期错误都继承 PlanningError（ValueError 子类），
由 PlanningCycle 捕获并转换为 FAILED 结果，不会影响下一个周期。
"""


class PlanningError(ValueError):
    """规划相关错误基类"""


class InvalidDimension(PlanningError):
    """栅格行数或列数不大于0"""


class OutOfBounds(PlanningError, IndexError):
    """访问栅格范围之外的单元格"""


class InvalidGeometry(PlanningError):
    """栅格几何无效：尺寸非法、起点/终点越界或尚未收到几何信息"""


class InvalidObstacles(PlanningError):
    """障碍物坐标序列无效（长度不一致或包含非数值）"""


class PersistenceWriteFailure(PlanningError, OSError):
    """路径文件写入失败（非致命）"""
