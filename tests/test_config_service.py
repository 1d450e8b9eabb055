import json

from aix_storage_gui.services.config_service import AppConfig, ConfigPaths, ConfigService
from aix_storage_gui.services.metrics import Thresholds


def _service(tmp_path):
    return ConfigService(ConfigPaths(path=tmp_path / "config.json"))


def test_missing_file_gives_defaults(tmp_path):
    svc = _service(tmp_path)
    assert svc.load() == {}
    cfg = svc.load_app_config()
    assert cfg.thresholds == Thresholds(warn=85, crit=90)
    assert cfg.refresh_interval_s == 60
    assert cfg.surface_command_errors is False
    assert cfg.log_level == "WARNING"


def test_save_then_load(tmp_path):
    svc = _service(tmp_path)
    svc.save({"warn_threshold": 70, "crit_threshold": 80, "refresh_interval_s": 0, "log_level": "debug"})
    cfg = svc.load_app_config()
    assert cfg.thresholds == Thresholds(warn=70, crit=80)
    assert cfg.refresh_interval_s == 0
    assert cfg.log_level == "DEBUG"
    assert not (tmp_path / "config.json.tmp").exists()


def test_inverted_thresholds_fall_back_to_defaults(tmp_path):
    cfg = AppConfig.from_dict({"warn_threshold": 95, "crit_threshold": 90})
    assert cfg.thresholds == Thresholds()


def test_out_of_range_values_fall_back(tmp_path):
    cfg = AppConfig.from_dict({"warn_threshold": "abc", "crit_threshold": 150, "refresh_interval_s": -5})
    assert cfg.thresholds == Thresholds()
    assert cfg.refresh_interval_s == 60


def test_unreadable_config_is_ignored(tmp_path):
    (tmp_path / "config.json").write_text("{not json", encoding="utf-8")
    assert _service(tmp_path).load() == {}


def test_non_object_config_is_ignored(tmp_path):
    (tmp_path / "config.json").write_text(json.dumps([1, 2]), encoding="utf-8")
    assert _service(tmp_path).load() == {}


def test_to_dict_round_trips(tmp_path):
    cfg = AppConfig(thresholds=Thresholds(warn=60, crit=75), export_dir=str(tmp_path), surface_command_errors=True)
    again = AppConfig.from_dict(cfg.to_dict())
    assert again == cfg


def test_default_path_follows_xdg(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert ConfigService.default_path() == tmp_path / "aix_storage_gui" / "config.json"
