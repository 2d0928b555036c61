"""
Logging utilities
"""

import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from maze_nav.config.models import LogConfig

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{thread.name}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {thread.name} | {name}:{line} - {message}"


def SetupLogger(config: Optional[LogConfig] = None, level: Optional[str] = None) -> List[int]:
    """
    Configure loguru sinks from the log section of the config.

    The planner logs from the timer and worker threads, so both sinks carry
    the thread name and the file sink is enqueued.

    Args:
        config: log settings, defaults to LogConfig()
        level: overrides config.level (e.g. from the command line)

    Returns:
        Handler ids of the sinks that were added
    """
    config = config or LogConfig()
    level = (level or config.level).upper()

    logger.remove()
    handler_ids = [logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)]

    if not config.file_enable:
        return handler_ids

    log_path = Path(config.directory)
    log_path.mkdir(parents=True, exist_ok=True)
    handler_ids.append(logger.add(
        str(log_path / "maze_nav_{time:YYYY-MM-DD}.log"),
        rotation=config.rotation,
        retention=config.retention,
        level=level,
        encoding="utf-8",
        enqueue=True,
        format=FILE_FORMAT,
    ))

    logger.info(f"Log initialized at {level}, saving to: {log_path}")
    return handler_ids
