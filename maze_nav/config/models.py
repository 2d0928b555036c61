#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
规划配置模型

使用Pydantic定义类型安全的配置模型。
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from maze_nav.path_planner.map_model import VehicleFootprint


class VehicleConfig(BaseModel):
    """车辆尺寸配置（栅格单位）"""
    half_width: int = Field(10, description="沿行方向的半宽")
    half_length: int = Field(12, description="沿列方向的半长")

    @field_validator('half_width', 'half_length')
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """验证尺寸非负"""
        if v < 0:
            raise ValueError(f"车辆尺寸不能为负数: {v}")
        return v

    def to_footprint(self) -> VehicleFootprint:
        return VehicleFootprint(half_width=self.half_width, half_length=self.half_length)


class PathPlanningConfig(BaseModel):
    """路径规划配置"""
    connectivity: int = Field(8, description="邻接方式: 4 或 8")
    max_expansions: Optional[int] = Field(None, description="最大扩展节点数（可选）")
    time_limit_s: Optional[float] = Field(None, description="单次搜索时间上限（秒，可选）")

    @field_validator('connectivity')
    @classmethod
    def validate_connectivity(cls, v: int) -> int:
        """验证邻接方式"""
        if v not in (4, 8):
            raise ValueError(f"邻接方式必须是 4 或 8: {v}")
        return v

    @field_validator('max_expansions')
    @classmethod
    def validate_max_expansions(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError(f"最大扩展节点数必须大于0: {v}")
        return v

    @field_validator('time_limit_s')
    @classmethod
    def validate_time_limit(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError(f"搜索时间上限必须大于0: {v}")
        return v


class ScheduleConfig(BaseModel):
    """周期调度配置"""
    interval_s: float = Field(1.0, description="重规划间隔（秒）")
    overlap_policy: str = Field("drop", description="周期重叠策略: 'drop' 或 'queue'")

    @field_validator('interval_s')
    @classmethod
    def validate_interval_s(cls, v: float) -> float:
        """验证重规划间隔"""
        if v <= 0:
            raise ValueError(f"重规划间隔必须大于0: {v}")
        return v

    @field_validator('overlap_policy')
    @classmethod
    def validate_overlap_policy(cls, v: str) -> str:
        """验证重叠策略"""
        if v not in ['drop', 'queue']:
            raise ValueError(f"重叠策略必须是 'drop' 或 'queue': {v}")
        return v


class PersistenceConfig(BaseModel):
    """路径文件导出配置"""
    enable: bool = Field(False, description="是否导出路径文件")
    path: str = Field("path.txt", description="路径文件位置")


class LogConfig(BaseModel):
    """日志配置"""
    level: str = Field("INFO", description="日志级别")
    directory: str = Field("Logs", description="日志目录")
    file_enable: bool = Field(True, description="是否写日志文件")
    rotation: str = Field("00:00", description="日志文件轮转时机（loguru rotation）")
    retention: str = Field("7 days", description="日志文件保留时长（loguru retention）")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ['TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL']:
            raise ValueError(f"未知日志级别: {v}")
        return v


class PlannerConfig(BaseModel):
    """规划主配置"""
    vehicle: VehicleConfig = Field(default_factory=VehicleConfig, description="车辆尺寸配置")
    path_planning: PathPlanningConfig = Field(default_factory=PathPlanningConfig, description="路径规划配置")
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig, description="周期调度配置")
    persistence: PersistenceConfig = Field(default_factory=PersistenceConfig, description="路径文件导出配置")
    log: LogConfig = Field(default_factory=LogConfig, description="日志配置")
