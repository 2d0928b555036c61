#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
规划主程序

加载配置与日志，把场景文件接入 DataHub，执行单次规划或启动周期重规划。
"""

import argparse
import signal
import threading
from pathlib import Path
from typing import List, Optional

from loguru import logger

from maze_nav.config.loader import load_config
from maze_nav.config.models import PlannerConfig
from maze_nav.nav_runtime.planning_runtime import PlanningRuntime
from maze_nav.path_planner.map_model import render_ascii
from maze_nav.service.data_hub import DataHub
from maze_nav.service.path_persistence import PathFileWriter
from maze_nav.service.path_planning_service import CycleResult, PlanningCycle
from maze_nav.service.path_sink import LoggingPathSink
from maze_nav.service.scenario_source import ScenarioFileSource
from maze_nav.utils.global_path import GetConfigPath, GetGlobalConfig
from maze_nav.utils.logger import SetupLogger


class NavigationInstance:
    """规划实例：持有数据总线、规划周期与运行时"""

    def __init__(self, config: PlannerConfig, scenario_path: Path, show_map: bool = False):
        """
        Args:
            config: PlannerConfig配置对象
            scenario_path: 场景文件路径
            show_map: 每个周期后是否输出 ASCII 地图
        """
        self.config_ = config
        self.show_map_ = show_map
        self.running_ = False
        self._stop_event = threading.Event()

        self.hub_ = DataHub()
        self.scenario_source_ = ScenarioFileSource(scenario_path, self.hub_)
        persistence = PathFileWriter(config.persistence.path) if config.persistence.enable else None
        self.cycle_ = PlanningCycle(config, self.hub_, LoggingPathSink(), persistence)
        self.runtime_ = PlanningRuntime(self.cycle_, config.schedule)

    def RunOnce(self) -> CycleResult:
        """加载场景并同步执行一次规划"""
        self.scenario_source_.poll()
        result = self.runtime_.runOnce()
        self._ShowResult(result)
        return result

    def Run(self, poll_interval_s: float = 0.5) -> None:
        """启动周期重规划，直到收到停止信号"""
        self.scenario_source_.poll()
        self.running_ = True
        self.runtime_.start()

        signal.signal(signal.SIGINT, self._SignalHandler_)
        signal.signal(signal.SIGTERM, self._SignalHandler_)

        last_seen = None
        try:
            while not self._stop_event.wait(poll_interval_s):
                self.scenario_source_.poll()
                result = self.runtime_.last_result
                if result is not None and result is not last_seen:
                    last_seen = result
                    self._ShowResult(result)
        finally:
            self.Stop()

    def Stop(self) -> None:
        if not self.running_:
            return
        self.running_ = False
        self._stop_event.set()
        self.runtime_.stop()
        logger.info(f"规划已停止: {self.runtime_.getStats()}")

    def _SignalHandler_(self, signum, frame) -> None:
        logger.info(f"收到信号 {signum}，准备退出")
        self._stop_event.set()

    def _ShowResult(self, result: CycleResult) -> None:
        if not self.show_map_ or not result.ok:
            return
        # 使用该周期实际规划的栅格，场景文件可能已被修改
        geometry = result.geometry
        if result.grid is None or geometry is None:
            return
        logger.info("\n" + render_ascii(result.grid, result.path, geometry.start, geometry.goal))


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="栅格路径规划（A* + 车辆尺寸障碍膨胀）")
    parser.add_argument("scenario", type=str, help="场景文件（YAML）")
    parser.add_argument("--config", type=str, default=None, help="配置文件路径，默认 config/config.yaml")
    parser.add_argument("--once", action="store_true", help="只执行一次规划")
    parser.add_argument("--show", action="store_true", help="输出 ASCII 地图")
    parser.add_argument("--log-level", type=str, default=None, help="覆盖配置中的日志级别")
    args = parser.parse_args(argv)

    if args.config:
        config = load_config(Path(args.config))
    else:
        logger.debug(f"使用默认配置路径: {GetConfigPath()}")
        config = GetGlobalConfig()

    SetupLogger(config.log, args.log_level)

    instance = NavigationInstance(config, Path(args.scenario), show_map=args.show)
    if args.once:
        result = instance.RunOnce()
        return 0 if result.ok else 1

    instance.Run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
