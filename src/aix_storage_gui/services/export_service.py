from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path

from aix_storage_gui.views.markup import strip_colors

logger = logging.getLogger(__name__)


class ExportService:
    def __init__(self, export_dir: str | os.PathLike[str]) -> None:
        self.export_dir = Path(export_dir)

    def report_path(self, now: datetime | None = None) -> Path:
        ts = (now or datetime.now()).strftime("%Y%m%d-%H%M%S")
        return self.export_dir / f"aix-storage-report-{ts}.txt"

    def export(self, markup: str, now: datetime | None = None) -> str:
        p = self.report_path(now)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(strip_colors(markup), encoding="utf-8")
        logger.info("exported report to %s", p)
        return str(p)
