from pathlib import Path

from loguru import logger

from maze_nav.config.models import LogConfig
from maze_nav.utils import global_path
from maze_nav.utils.logger import SetupLogger


def test_global_config_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.setenv("MAZE_NAV_HOME", str(tmp_path))
    monkeypatch.setattr(global_path, "_global_config", None)
    assert global_path.GetConfigPath() == tmp_path / "config" / "config.yaml"
    config = global_path.GetGlobalConfig()
    assert config.vehicle.half_width == 10
    # 缓存
    assert global_path.GetGlobalConfig() is config


def test_global_config_reads_program_dir(tmp_path, monkeypatch):
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "config.yaml").write_text(
        "path_planning:\n  connectivity: 4\n", encoding="utf-8")
    monkeypatch.setenv("MAZE_NAV_HOME", str(tmp_path))
    monkeypatch.setattr(global_path, "_global_config", None)
    assert global_path.GetProgramDir() == Path(str(tmp_path))
    assert global_path.GetGlobalConfig().path_planning.connectivity == 4


def test_setup_logger_writes_file(tmp_path):
    log_dir = tmp_path / "logs"
    handler_ids = SetupLogger(LogConfig(directory=str(log_dir), level="debug"))
    try:
        assert len(handler_ids) == 2
        logger.debug("规划日志测试")
    finally:
        logger.remove()
    files = list(log_dir.glob("maze_nav_*.log"))
    assert len(files) == 1
    text = files[0].read_text(encoding="utf-8")
    assert "规划日志测试" in text
    assert "MainThread" in text


def test_setup_logger_console_only(tmp_path):
    try:
        handler_ids = SetupLogger(LogConfig(directory=str(tmp_path / "logs"), file_enable=False), "warning")
        assert len(handler_ids) == 1
    finally:
        logger.remove()
    assert not (tmp_path / "logs").exists()
