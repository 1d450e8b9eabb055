from __future__ import annotations

from aix_storage_gui.models.snapshot import StorageSnapshot
from aix_storage_gui.services.metrics import LEVEL_OK, Thresholds, human_size
from aix_storage_gui.views.markup import (
    heading,
    level_color,
    progress_bar,
    rule,
    truncate,
    truncate_left,
    vg_state_color,
)

BANNER = """[yellow::b]
  ███████╗████████╗ ██████╗ ████████╗██╗   ██╗██╗
  ██╔════╝╚══██╔══╝██╔════╝ ╚══██╔══╝██║   ██║██║
  ███████╗   ██║   ██║  ███╗   ██║   ██║   ██║██║
  ╚════██║   ██║   ██║   ██║   ██║   ██║   ██║██║
  ███████║   ██║   ╚██████╔╝   ██║   ╚██████╔╝██║
  ╚══════╝   ╚═╝    ╚═════╝    ╚═╝    ╚═════╝ ╚═╝
[white]       [gray]AIX Storage Explorer[white]
"""


def count_alerts(snap: StorageSnapshot, th: Thresholds) -> int:
    percents = [fs.used_percent for fs in snap.filesystems]
    percents += [vg.used_percent for vg in snap.volume_groups]
    percents += [ps.used_percent for ps in snap.paging_spaces]
    return sum(1 for p in percents if th.classify(p) != LEVEL_OK)


def render_dashboard(snap: StorageSnapshot, th: Thresholds) -> str:
    text = BANNER
    text += f"[gray]       Thresholds: warn={th.warn}% crit={th.crit}%[white]\n\n"

    alerts = count_alerts(snap, th)
    health = "[green]● HEALTHY[white]" if alerts == 0 else f"[red]● {alerts} ALERT(S)[white]"
    text += f"  Status: {health}    [gray]Press 3 for details[white]\n"
    text += (
        f"  [green]Summary:[white] {len(snap.volume_groups)} VGs | "
        f"{len(snap.physical_volumes)} Disks | {len(snap.filesystems)} Filesystems\n\n"
    )

    text += heading("VOLUME GROUPS")
    text += f"  {'VG':<12} {'STATE':<7} {'SIZE':>8} {'FREE':>8} PP USAGE\n"
    text += rule(60)
    for vg in snap.volume_groups:
        icon = vg_state_color(vg.state) + "●[white]"
        bar = progress_bar(vg.used_percent, 18, th)
        text += (
            f"  {icon} {vg.name:<10} {vg.state_label:<7} {human_size(vg.total_mb):>8} "
            f"{human_size(vg.free_mb):>8} {bar}\n"
        )
    if not snap.volume_groups:
        text += "  [gray]- No volume groups found[white]\n"

    unused = snap.unused_disks
    if unused:
        text += "\n" + heading("UNUSED DISKS")
        text += f"  {'DISK':<10} {'STATUS':<8} {'SIZE':>8}  LUN INFO\n"
        text += rule(55)
        for pv in unused:
            if pv.has_remnants:
                icon, status = "[magenta]◐[white]", "vgda"
            else:
                icon, status = "[green]○[white]", "clean"
            size = human_size(pv.size_mb) if pv.size_mb else ""
            lun = truncate(pv.lun_info or "(virtual)", 25)
            text += f"  {icon} {pv.name:<8} [yellow]{status:<6}[white] {size:>8}  {lun}\n"
        text += "  [gray]○ clean (ready to use)  ◐ vgda remnants (needs recreatevg/chpv -C)[white]\n"

    text += "\n" + heading("PAGING SPACE")
    for ps in snap.paging_spaces:
        text += f"  {ps.name:<12} {ps.vg_name:<10} {ps.size:>8} {progress_bar(ps.used_percent, 18, th)}\n"
    if not snap.paging_spaces:
        text += "  [gray]- No paging space found[white]\n"

    text += "\n" + heading("FILESYSTEMS")
    text += f"  {'MOUNT':<20} {'TYPE':<4} {'SIZE':>8} {'FREE':>8} USAGE\n"
    text += rule(62)
    for fs in snap.filesystems:
        color = level_color(th.classify(fs.used_percent))
        text += (
            f"  {color}{truncate_left(fs.mount, 20):<20}[white] {fs.kind:<4} "
            f"{human_size(fs.size_mb):>8} {human_size(fs.free_mb):>8} "
            f"{progress_bar(fs.used_percent, 16, th)}\n"
        )
    if not snap.filesystems:
        text += "  [gray]- No filesystems found[white]\n"

    return text
