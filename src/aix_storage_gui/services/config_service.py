from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from aix_storage_gui.services.metrics import (
    DEFAULT_CRIT_PERCENT,
    DEFAULT_WARN_PERCENT,
    Thresholds,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigPaths:
    path: Path


@dataclass(frozen=True)
class AppConfig:
    thresholds: Thresholds = field(default_factory=Thresholds)
    refresh_interval_s: int = 60
    export_dir: str = field(default_factory=tempfile.gettempdir)
    surface_command_errors: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, cfg: dict[str, Any]) -> "AppConfig":
        default = cls()
        return cls(
            thresholds=_thresholds(cfg),
            refresh_interval_s=_int(cfg.get("refresh_interval_s"), default.refresh_interval_s, 0, 86400),
            export_dir=str(cfg.get("export_dir") or default.export_dir),
            surface_command_errors=bool(cfg.get("surface_command_errors", False)),
            log_level=str(cfg.get("log_level") or default.log_level).upper(),
        )

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        th = d.pop("thresholds")
        d["warn_threshold"] = th["warn"]
        d["crit_threshold"] = th["crit"]
        return d


def _int(value: Any, default: int, lo: int, hi: int) -> int:
    try:
        v = int(value)
    except (TypeError, ValueError):
        return default
    return v if lo <= v <= hi else default


def _thresholds(cfg: dict[str, Any]) -> Thresholds:
    warn = _int(cfg.get("warn_threshold"), DEFAULT_WARN_PERCENT, 0, 100)
    crit = _int(cfg.get("crit_threshold"), DEFAULT_CRIT_PERCENT, 0, 100)
    if warn > crit:
        logger.warning("warn_threshold %d > crit_threshold %d, using defaults", warn, crit)
        return Thresholds()
    return Thresholds(warn=warn, crit=crit)


class ConfigService:
    def __init__(self, paths: ConfigPaths | None = None) -> None:
        self.paths = paths or ConfigPaths(path=self.default_path())

    @staticmethod
    def default_path() -> Path:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        if xdg:
            base = Path(xdg)
        else:
            base = Path.home() / ".config"
        return base / "aix_storage_gui" / "config.json"

    def load(self) -> dict[str, Any]:
        p = self.paths.path
        if not p.exists():
            return {}
        try:
            with open(p, "r", encoding="utf-8") as f:
                obj = json.load(f)
            return obj if isinstance(obj, dict) else {}
        except (OSError, ValueError) as e:
            logger.warning("ignoring unreadable config %s: %s", p, e)
            return {}

    def load_app_config(self) -> AppConfig:
        return AppConfig.from_dict(self.load())

    def save(self, cfg: dict[str, Any]) -> None:
        p = self.paths.path
        p.parent.mkdir(parents=True, exist_ok=True)
        tmp = p.with_suffix(p.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(cfg, f, ensure_ascii=False, indent=2, sort_keys=True)
        tmp.replace(p)
