#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
配置加载器

从YAML文件加载配置并使用Pydantic验证。
"""

import yaml
from pathlib import Path
from typing import Optional, Any, Dict
from loguru import logger
from pydantic import ValidationError

from maze_nav.config.models import PlannerConfig


def load_config(config_path: Path, base_dir: Optional[Path] = None) -> PlannerConfig:
    """
    从YAML文件加载配置

    Args:
        config_path: 配置文件路径
        base_dir: 用于解析相对路径的程序目录（默认为配置文件所在目录，config 目录取其上级）

    Returns:
        验证后的PlannerConfig对象

    Raises:
        FileNotFoundError: 配置文件不存在
        yaml.YAMLError: YAML格式错误
        ValidationError: 配置验证失败
    """
    config_path = Path(config_path)
    if base_dir is None:
        default_base = config_path.resolve().parent
        if default_base.name.lower() == "config":
            default_base = default_base.parent
        base_dir = default_base
    else:
        base_dir = Path(base_dir).resolve()

    # 检查文件是否存在
    if not config_path.exists():
        error_msg = f"配置文件不存在: {config_path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    # 加载YAML文件
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        error_msg = f"YAML格式错误: {e}"
        logger.error(error_msg)
        raise yaml.YAMLError(error_msg) from e

    # 空文件使用全部默认值
    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        error_msg = f"配置文件顶层必须是字典: {type(raw_config).__name__}"
        logger.error(error_msg)
        raise ValueError(error_msg)

    _apply_relative_paths(raw_config, base_dir)

    # 使用Pydantic验证配置
    try:
        config = PlannerConfig(**raw_config)
    except ValidationError as e:
        logger.error(f"配置验证失败: {config_path}")
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error['loc'])
            logger.error(f"  {field_path}: {error['msg']}")
        raise

    logger.info(f"配置加载成功: {config_path}")
    return config


def _resolve_path(value: Optional[str], base_dir: Path) -> Optional[str]:
    """解析相对路径为绝对路径"""
    if value is None:
        return None
    path = Path(value)
    if not path.is_absolute():
        path = base_dir / path
    return str(path.resolve())


def _apply_relative_paths(raw_config: Dict[str, Any], base_dir: Path) -> None:
    """将配置中的相对路径字段转换为绝对路径"""
    persistence_cfg = raw_config.get('persistence')
    if isinstance(persistence_cfg, dict) and persistence_cfg.get('path'):
        persistence_cfg['path'] = _resolve_path(persistence_cfg['path'], base_dir)

    log_cfg = raw_config.get('log')
    if isinstance(log_cfg, dict) and log_cfg.get('directory'):
        log_cfg['directory'] = _resolve_path(log_cfg['directory'], base_dir)
