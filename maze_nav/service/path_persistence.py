#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径文件导出：每个路径点一行 "x,y"
"""

from pathlib import Path
from typing import Sequence, Union

from loguru import logger

from maze_nav.path_planner.errors import PersistenceWriteFailure
from maze_nav.path_planner.map_model import GridCoord


class PathFileWriter:
    """把路径覆盖写入文本文件"""

    def __init__(self, path: Union[str, Path] = "path.txt"):
        self.path_ = Path(path)

    def write(self, path: Sequence[GridCoord]) -> Path:
        """
        写入路径

        Args:
            path: 路径点列表

        Returns:
            写入的文件路径

        Raises:
            PersistenceWriteFailure: 文件无法写入
        """
        lines = "".join(f"{x},{y}\n" for x, y in path)
        try:
            self.path_.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path_, 'w', encoding='utf-8') as f:
                f.write(lines)
        except OSError as e:
            raise PersistenceWriteFailure(f"路径写入失败: {self.path_}: {e}") from e

        logger.debug(f"路径已写入 {self.path_}")
        return self.path_
