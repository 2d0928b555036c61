import os
import sys
from pathlib import Path
from typing import Optional
from loguru import logger
from maze_nav.config.models import PlannerConfig
from maze_nav.config.loader import load_config

_global_config: Optional[PlannerConfig] = None


def GetGlobalConfig() -> PlannerConfig:
    """加载并缓存全局配置；配置文件不存在时使用默认值"""
    global _global_config
    if _global_config is None:
        config_path = GetConfigPath()
        if config_path.exists():
            _global_config = load_config(config_path)
        else:
            logger.warning(f"配置文件不存在，使用默认配置: {config_path}")
            _global_config = PlannerConfig()
    return _global_config


def GetProgramDir() -> Path:
    """
    获取程序根目录路径。

    优先使用环境变量 MAZE_NAV_HOME；
    在打包后的环境中，返回可执行文件所在目录；
    在开发环境中，返回项目根目录。
    """
    env_home = os.environ.get("MAZE_NAV_HOME")
    if env_home:
        return Path(env_home)
    if getattr(sys, 'frozen', False):
        # PyInstaller 打包后的环境
        return Path(sys.executable).parent
    else:
        # 开发环境：返回项目根目录（当前文件所在目录的父目录的父目录）
        return Path(__file__).resolve().parent.parent.parent


def GetConfigPath() -> Path:
    return GetProgramDir() / "config" / "config.yaml"


if __name__ == "__main__":
    logger.info(GetProgramDir())
    logger.info(GetConfigPath())
