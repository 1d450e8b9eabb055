from __future__ import annotations

from dataclasses import dataclass

from aix_storage_gui.collectors.aix_inventory import AixInventory
from aix_storage_gui.models.snapshot import StorageSnapshot
from aix_storage_gui.services.metrics import Thresholds
from aix_storage_gui.views import dashboard, details, health
from aix_storage_gui.views import search as search_view
from aix_storage_gui.views.mapping import StorageMapper
from aix_storage_gui.views.markup import level_color, truncate

PAGE_DASHBOARD = "dashboard"
PAGE_VG = "vg"
PAGE_HEALTH = "health"
PAGE_LV = "lv"
PAGE_PV = "pv"
PAGE_FS = "fs"
PAGE_MIRROR = "mirror"

SNAPSHOT_PAGES = (PAGE_DASHBOARD, PAGE_VG, PAGE_HEALTH, PAGE_LV, PAGE_PV, PAGE_FS, PAGE_MIRROR)


@dataclass(frozen=True)
class SelectorRow:
    key: str
    label: str


class ViewComposer:
    def __init__(self, inventory: AixInventory, thresholds: Thresholds) -> None:
        self.inventory = inventory
        self.thresholds = thresholds
        self._mapper = StorageMapper(inventory, thresholds)

    def dashboard(self, snap: StorageSnapshot) -> str:
        return dashboard.render_dashboard(snap, self.thresholds)

    def vg_details(self, snap: StorageSnapshot) -> str:
        return details.render_vg_details(snap)

    def lv_status(self, snap: StorageSnapshot) -> str:
        return details.render_lv_status(snap)

    def pv_table(self, snap: StorageSnapshot) -> str:
        return details.render_pv_table(snap)

    def fs_table(self, snap: StorageSnapshot) -> str:
        return details.render_fs_table(snap, self.thresholds)

    def mirror_status(self, snap: StorageSnapshot) -> str:
        return details.render_mirror_status(snap)

    def health_check(self, snap: StorageSnapshot) -> str:
        return health.render_health(snap, self.thresholds)

    def io_stats(self) -> str:
        return details.render_io_stats(self.inventory.io_stats())

    def search(self, snap: StorageSnapshot, query: str) -> str:
        return search_view.render_search(query, search_view.search(snap, query))

    def map_filesystem(self, snap: StorageSnapshot, mount: str) -> str:
        return self._mapper.map_filesystem(snap.filesystems, mount)

    def map_disk(self, disk: str) -> str:
        return self._mapper.map_disk(disk)

    def compose_all(self, snap: StorageSnapshot) -> dict[str, str]:
        """Every page that is a pure function of the snapshot, built in one pass."""
        return {
            PAGE_DASHBOARD: self.dashboard(snap),
            PAGE_VG: self.vg_details(snap),
            PAGE_HEALTH: self.health_check(snap),
            PAGE_LV: self.lv_status(snap),
            PAGE_PV: self.pv_table(snap),
            PAGE_FS: self.fs_table(snap),
            PAGE_MIRROR: self.mirror_status(snap),
        }

    def disk_rows(self, snap: StorageSnapshot) -> list[SelectorRow]:
        rows: list[SelectorRow] = []
        # unused disks first, then disks in a VG
        for pv in snap.unused_disks:
            icon = "◐" if pv.has_remnants else "○"
            lun = truncate(pv.lun_info or "(virtual)", 16)
            rows.append(SelectorRow(pv.name, f"{icon} {pv.name:<10} {'(unused)':<12} {lun}"))
        for pv in snap.physical_volumes:
            if pv.unused:
                continue
            lun = truncate(pv.lun_info or "(virtual)", 16)
            rows.append(SelectorRow(pv.name, f"● {pv.name:<10} {pv.vg_name:<12} {lun}"))
        return rows

    def filesystem_rows(self, snap: StorageSnapshot) -> list[SelectorRow]:
        rows: list[SelectorRow] = []
        for fs in snap.filesystems:
            color = level_color(self.thresholds.classify(fs.used_percent))
            label = f"{fs.mount:<24} {fs.kind:<4} {color}{fs.used_percent:3d}%[white]"
            rows.append(SelectorRow(fs.mount, label))
        return rows
