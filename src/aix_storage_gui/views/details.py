from __future__ import annotations

from datetime import datetime

from aix_storage_gui.models.devices import DiskIOStat
from aix_storage_gui.models.snapshot import StorageSnapshot
from aix_storage_gui.services.metrics import Thresholds, human_size
from aix_storage_gui.views.markup import (
    heading,
    level_color,
    rule,
    state_color,
    truncate,
    usage_bar,
    vg_state_color,
)


def _lv_state(state: str) -> str:
    if "stale" in state.lower():
        return f"[red]{state}[white]"
    if "syncd" in state:
        return f"[green]{state}[white]"
    return state


def render_vg_details(snap: StorageSnapshot) -> str:
    text = heading("VOLUME GROUP DETAILS") + "\n"
    for vg in snap.volume_groups:
        if vg.quorum_enabled is None:
            quorum = "[gray]unknown[white]"
        elif vg.quorum_enabled:
            quorum = "Enabled"
        else:
            quorum = "[yellow]Disabled[white]"
        text += (
            f"[cyan::b]{vg.name}[white]  {vg_state_color(vg.state)}{vg.state_label}[white]  "
            f"PP: {vg.pp_size_mb}MB  Quorum: {quorum}\n"
        )
        text += f"  PPs: {vg.total_pps} total, {vg.used_pps} used, {vg.free_pps} free"
        text += f"  ({human_size(vg.total_mb)} / {human_size(vg.free_mb)} free)\n"
        text += f"  LVs: {vg.lv_count} ({vg.open_lv_count} open)  PVs: {vg.pv_count}"
        if vg.stale_pps:
            text += f"  [red]Stale PPs: {vg.stale_pps}[white]"
        text += "\n"
        text += f"  {usage_bar(vg.used_percent, 40)}\n\n"

        text += "  [gray]Physical Volumes:[white]\n"
        disks = snap.vg_disks.get(vg.name, [])
        for pv in disks:
            icon = state_color(pv.state == "active") + "●[white]"
            text += (
                f"    {icon} {pv.name:<10} {pv.used_pps:4d}/{pv.total_pps:4d} PPs "
                f"{usage_bar(pv.used_percent, 15)}\n"
            )
        if not disks:
            text += "    [gray]- none reported[white]\n"
        text += "\n"
    if not snap.volume_groups:
        text += "[gray]No volume groups found[white]\n"
    return text


def render_lv_status(snap: StorageSnapshot) -> str:
    text = heading("LOGICAL VOLUME STATUS") + "\n"
    text += f"  {'LV':<15} {'VG':<10} {'TYPE':<8} {'LPs':>5} {'SIZE':>7}  {'STATE':<12} MOUNT\n"
    text += rule(78)
    for lv in snap.logical_volumes:
        icon = state_color(not lv.stale) + "●[white]"
        mount = lv.mount or "[gray]N/A[white]"
        size = human_size(lv.size_mb) if lv.pp_size_mb else "-"
        text += (
            f"  {icon} {lv.name:<13} {lv.vg_name:<10} {lv.lv_type:<8} {lv.lps:>5} {size:>7}  "
            f"{_lv_state(lv.state):<12} {mount}\n"
        )
    if not snap.logical_volumes:
        text += "  [gray]- No logical volumes found[white]\n"
    return text


def render_pv_table(snap: StorageSnapshot) -> str:
    text = heading("PHYSICAL VOLUMES (DISKS)")
    text += f"  {'DISK':<10} {'PVID':<20} {'VG':<12} {'STATE':<10} {'PATHS':<8} LUN/VENDOR\n"
    text += rule(88)
    for pv in snap.physical_volumes:
        vg = "[gray]None[white]" if pv.unused else pv.vg_name
        state = state_color(pv.state == "active", "[yellow]") + pv.state + "[white]"
        if not pv.path_states:
            paths = "[gray]-[white]"
        elif pv.paths_failed:
            paths = f"[red]{len(pv.path_states) - pv.paths_failed}/{len(pv.path_states)}[white]"
        else:
            paths = f"[green]{len(pv.path_states)}/{len(pv.path_states)}[white]"
        lun = truncate(pv.lun_info, 20) if pv.lun_info else "[gray]N/A[white]"
        text += f"  {pv.name:<10} {pv.pvid:<20} {vg:<12} {state:<10} {paths:<8} {lun}\n"
    if not snap.physical_volumes:
        text += "  [gray]- No disks found[white]\n"
    return text


def render_fs_table(snap: StorageSnapshot, th: Thresholds) -> str:
    text = heading("FILESYSTEMS")
    text += f"  {'MOUNT':<20} {'DEVICE':<22} {'SIZE':>8} {'FREE':>8} {'USE%':>6} TYPE\n"
    text += rule(76)
    for fs in snap.filesystems:
        color = level_color(th.classify(fs.used_percent))
        text += (
            f"  {fs.mount:<20} {truncate(fs.device, 22):<22} {human_size(fs.size_mb):>8} "
            f"{human_size(fs.free_mb):>8} {color}{fs.pct:>6}[white] {fs.kind}\n"
        )
    if not snap.filesystems:
        text += "  [gray]- No filesystems found[white]\n"
    return text


def render_mirror_status(snap: StorageSnapshot) -> str:
    text = heading("MIRROR STATUS") + "\n"
    for vg in snap.volume_groups:
        text += f"[cyan::b]{vg.name}[white]\n"
        for lv in snap.lvs_in(vg.name):
            if lv.copies >= 3:
                icon = "[green]●[white]"
            elif lv.copies == 2:
                icon = "[green]◐[white]"
            else:
                icon = "[gray]○[white]"
            state = state_color(not lv.stale) + lv.state + "[white]"
            text += f"  {icon} {lv.name:<15} {lv.mirror_label:<6} {state}\n"
        text += "\n"
    text += "[gray]Legend: ○=single ◐=2-way mirror ●=3-way mirror[white]\n"
    return text


def render_io_stats(stats: list[DiskIOStat], ts: datetime | None = None) -> str:
    ts = ts or datetime.now()
    text = heading("DISK I/O STATISTICS")
    text += f"[gray]Updated: {ts:%H:%M:%S}[white]\n\n"
    text += f"  {'DISK':<10} {'%TM_ACT':>8} {'KBPS':>10} {'TPS':>8} {'KB_READ':>12} {'KB_WRTN':>12}\n"
    text += rule(66)
    for s in stats:
        if s.tm_act >= 80:
            color = "[red]"
        elif s.tm_act >= 50:
            color = "[yellow]"
        else:
            color = "[green]"
        text += (
            f"  {s.disk:<10} {color}{s.tm_act:7.1f}%[white] {s.kbps:>10.1f} {s.tps:>8.1f} "
            f"{s.kb_read:>12} {s.kb_wrtn:>12}\n"
        )
    if not stats:
        text += "  [gray]- No disk statistics reported[white]\n"
    text += "\n[gray]Press 'r' to refresh[white]\n"
    return text
