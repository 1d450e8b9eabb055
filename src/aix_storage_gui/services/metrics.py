from __future__ import annotations

from dataclasses import dataclass

LEVEL_OK = "ok"
LEVEL_WARNING = "warning"
LEVEL_CRITICAL = "critical"

DEFAULT_WARN_PERCENT = 85
DEFAULT_CRIT_PERCENT = 90


def used_percent(used: int | float, total: int | float) -> int:
    if total <= 0:
        return 0
    pct = int(used * 100 // total)
    return min(max(pct, 0), 100)


def classify(percent: int | float, warn: int, crit: int) -> str:
    if percent >= crit:
        return LEVEL_CRITICAL
    if percent >= warn:
        return LEVEL_WARNING
    return LEVEL_OK


def human_size(mb: int | float) -> str:
    if mb >= 1024:
        return f"{mb / 1024:.1f}G"
    return f"{mb:.0f}M"


def mirror_copies(allocated: int, logical: int) -> int:
    if logical <= 0:
        return 1
    return allocated // logical


def mirror_label(copies: int) -> str:
    if copies >= 3:
        return f"{copies}-way"
    if copies == 2:
        return "2-way"
    return "single"


def parse_percent(s: str) -> int:
    try:
        return int(s.strip().rstrip("%"))
    except ValueError:
        return 0


@dataclass(frozen=True)
class Thresholds:
    warn: int = DEFAULT_WARN_PERCENT
    crit: int = DEFAULT_CRIT_PERCENT

    def classify(self, percent: int | float) -> str:
        return classify(percent, self.warn, self.crit)
