"""Cross-reference pages: filesystem -> LV -> VG -> disks, and the reverse.

Both walks re-query the inventory for the objects on the chain, so they show
the current state of that one chain rather than the last full refresh.
"""

from __future__ import annotations

from dataclasses import replace

from aix_storage_gui.collectors.aix_inventory import AixInventory
from aix_storage_gui.models.filesystem import FilesystemRecord
from aix_storage_gui.models.lvm import VolumeGroupRecord
from aix_storage_gui.services.metrics import Thresholds, human_size, used_percent
from aix_storage_gui.views.markup import (
    progress_bar,
    state_color,
    strip_colors,
    truncate,
    usage_bar,
    vg_state_color,
)

CARD_WIDTH = 49
VALUE_WIDTH = 35

ARROW = "           │\n           ▼\n"


def _card(rows: list[tuple[str, str]], highlight_first: bool = True) -> str:
    """Box with one ``Label: value`` row per entry; values may carry markup."""
    text = "  ┌" + "─" * CARD_WIDTH + "┐\n"
    for i, (label, value) in enumerate(rows):
        # pad on the visible width so the right border lines up under markup
        value += " " * max(VALUE_WIDTH - len(strip_colors(value)), 0)
        if highlight_first and i == 0:
            value = f"[cyan]{value}[white]"
        text += f"  │  {label + ':':<10}{value}  │\n"
    text += "  └" + "─" * CARD_WIDTH + "┘\n"
    return text


def _error(msg: str) -> str:
    return f"[red]{msg}[white]\n"


class StorageMapper:
    def __init__(self, inventory: AixInventory, thresholds: Thresholds) -> None:
        self.inventory = inventory
        self.thresholds = thresholds

    def map_filesystem(self, filesystems: list[FilesystemRecord], mount: str) -> str:
        fs = next((f for f in filesystems if f.mount == mount), None)
        if fs is None:
            return _error(f"Cannot find device for {mount}")
        if fs.is_network:
            return self._nfs_card(fs)

        th = self.thresholds
        text = "[yellow::b]═══ FILESYSTEM → STORAGE MAPPING ═══[white]\n\n"
        text += "[green]▼ FILESYSTEM[white]\n"
        text += _card(
            [
                ("Mount", fs.mount),
                ("Device", fs.device),
                ("Type", fs.kind),
                ("Size", f"{human_size(fs.size_mb):<12} Free: {human_size(fs.free_mb):<12}"),
                ("Usage", progress_bar(fs.used_percent, 30, th)),
            ]
        )

        lv = self.inventory.lv_detail(fs.lv_name)
        if lv is None:
            return text + ARROW + _error(f"Cannot resolve logical volume {fs.lv_name} for {mount}")

        text += ARROW + "[green]▼ LOGICAL VOLUME[white]\n"
        text += _card(
            [
                ("LV Name", lv.name),
                ("Type", lv.lv_type),
                ("State", state_color(not lv.stale) + lv.state + "[white]"),
                ("LPs", f"{lv.lps} ({lv.mirror_label}, {lv.pps} PPs)"),
            ]
        )

        vg = self.inventory.volume_group(lv.vg_name)
        text += ARROW + self._vg_section(vg)

        disks = self.inventory.lv_disks(lv.name)
        text += ARROW + f"[green]▼ PHYSICAL VOLUMES ({len(disks)} disk(s))[white]\n"
        for disk in disks:
            lun = self.inventory.lun_info(disk)
            text += _card(
                [
                    ("Disk", disk),
                    ("PVID", lun.pvid),
                    ("LUN ID", truncate(lun.display or "(virtual disk)", VALUE_WIDTH)),
                ]
            )
        if not disks:
            text += _error(f"  No disk mapping reported for {lv.name}")
        return text

    def map_disk(self, disk: str) -> str:
        lun = self.inventory.lun_info(disk)
        pv = self.inventory.pv_detail(disk)
        if pv.unused:
            # lspv <disk> said nothing; the lspv listing still knows the VG
            listed = next((p for p in self.inventory.physical_volumes() if p.name == disk), None)
            if listed is not None and not listed.unused:
                pv = replace(pv, vg_name=listed.vg_name, pvid=pv.pvid or listed.pvid)
        pvid = lun.pvid or pv.pvid

        paths = self.inventory.paths(disk)
        if paths:
            path_info = " ".join(state_color(p.enabled) + p.status + "[white]" for p in paths)
        else:
            path_info = "[gray]single path[white]"

        text = "[yellow::b]═══ STORAGE → FILESYSTEM MAPPING ═══[white]\n\n"
        text += "[green]▼ PHYSICAL VOLUME (LUN)[white]\n"
        text += _card(
            [
                ("Disk", disk),
                ("PVID", pvid),
                ("LUN ID", truncate(lun.display or "(virtual disk)", VALUE_WIDTH)),
                ("PPs", f"{pv.total_pps} total, {pv.used_pps} used, {pv.free_pps} free"),
                ("Paths", path_info),
                ("PP Alloc", usage_bar(pv.used_percent, 30)),
            ]
        )
        text += ARROW

        if pv.unused:
            if pvid.lower() not in ("", "none"):
                text += "  [magenta]◐ Disk has VGDA remnants but not assigned to any VG[white]\n"
                text += f"  [gray]  Use 'chpv -C {disk}' to clear VGDA[white]\n"
            else:
                text += "  [green]○ Disk is clean and ready to use[white]\n"
                text += f"  [gray]  Use 'mkvg -y newvg {disk}' to create a VG[white]\n"
            return text

        vg = self.inventory.volume_group(pv.vg_name)
        text += self._vg_section(vg) + ARROW
        text += "[green]▼ LVs & FILESYSTEMS on this disk[white]\n"
        text += f"  {'LV':<15} {'TYPE':<8} {'LPs':>6}  {'STATE':<12} MOUNT\n"
        text += "  " + "─" * 60 + "\n"
        for placement in self.inventory.pv_placements(disk):
            lv = self.inventory.lv_detail(placement.lv_name)
            if lv is None:
                text += f"  [cyan]{placement.lv_name:<15}[white] " + _error("cannot resolve LV details")
                continue
            mount = lv.mount or placement.mount or "[gray]N/A[white]"
            state = state_color(not lv.stale) + f"{lv.state:<12}[white]"
            text += f"  [cyan]{lv.name:<15}[white] {lv.lv_type:<8} {placement.lps:>6}  {state} {mount}\n"
        return text

    def _vg_section(self, vg: VolumeGroupRecord) -> str:
        pct = used_percent(vg.used_pps, vg.total_pps)
        return "[green]▼ VOLUME GROUP[white]\n" + _card(
            [
                ("VG Name", vg.name),
                ("State", vg_state_color(vg.state) + vg.state_label + "[white]"),
                ("PP Size", f"{vg.pp_size_mb} megabyte(s)"),
                ("PP Alloc", usage_bar(pct, 30)),
            ]
        )

    def _nfs_card(self, fs: FilesystemRecord) -> str:
        text = "[yellow::b]═══ NFS MOUNT ═══[white]\n\n"
        text += "[green]▼ FILESYSTEM[white]\n"
        text += _card(
            [
                ("Mount", fs.mount),
                ("Type", "NFS"),
                ("Server", fs.server),
                ("Path", fs.remote_path),
                ("Size", f"{human_size(fs.size_mb):<12} Free: {human_size(fs.free_mb):<12}"),
                ("Usage", progress_bar(fs.used_percent, 30, self.thresholds)),
            ]
        )
        return text
