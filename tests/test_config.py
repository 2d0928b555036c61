from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from maze_nav.config.loader import load_config
from maze_nav.config.models import PlannerConfig, ScheduleConfig, VehicleConfig

REPO_CONFIG = Path(__file__).resolve().parent.parent / "config" / "config.yaml"


def test_defaults():
    config = PlannerConfig()
    assert config.vehicle.to_footprint().half_width == 10
    assert config.vehicle.to_footprint().half_length == 12
    assert config.path_planning.connectivity == 8
    assert config.schedule.interval_s == 1.0
    assert config.schedule.overlap_policy == "drop"
    assert config.persistence.enable is False


def test_repo_config_loads():
    config = load_config(REPO_CONFIG)
    assert config.path_planning.connectivity in (4, 8)
    # 相对路径按程序目录解析
    assert Path(config.persistence.path).is_absolute()
    assert Path(config.log.directory).parent == REPO_CONFIG.parent.parent


def test_load_config_resolves_relative_paths(tmp_path):
    cfg_dir = tmp_path / "config"
    cfg_dir.mkdir()
    cfg_file = cfg_dir / "config.yaml"
    cfg_file.write_text(yaml.safe_dump({
        "vehicle": {"half_width": 3, "half_length": 10},
        "persistence": {"enable": True, "path": "out/path.txt"},
    }), encoding="utf-8")
    config = load_config(cfg_file)
    assert config.vehicle.half_width == 3
    assert Path(config.persistence.path) == (tmp_path / "out" / "path.txt").resolve()


def test_empty_config_uses_defaults(tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("", encoding="utf-8")
    assert load_config(cfg_file).vehicle.half_length == 12


def test_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_invalid_config_raises_validation_error(tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("path_planning:\n  connectivity: 6\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(cfg_file)


@pytest.mark.parametrize("factory", [
    lambda: VehicleConfig(half_width=-1),
    lambda: ScheduleConfig(interval_s=0),
    lambda: ScheduleConfig(overlap_policy="skip"),
])
def test_model_validation(factory):
    with pytest.raises(ValidationError):
        factory()
