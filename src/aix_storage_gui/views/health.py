from __future__ import annotations

from aix_storage_gui.models.devices import DiskErrorEntry
from aix_storage_gui.models.health import (
    CATEGORY_CAPACITY,
    CATEGORY_DISK_ERROR,
    CATEGORY_PAGING,
    CATEGORY_PATH,
    CATEGORY_QUORUM,
    CATEGORY_STALE,
    HealthIssue,
    HealthReport,
)
from aix_storage_gui.models.snapshot import StorageSnapshot
from aix_storage_gui.services.metrics import (
    LEVEL_CRITICAL,
    LEVEL_OK,
    LEVEL_WARNING,
    Thresholds,
)

MAX_DISK_ERRORS_SHOWN = 3


def _errors_by_disk(entries: list[DiskErrorEntry]) -> dict[str, list[DiskErrorEntry]]:
    grouped: dict[str, list[DiskErrorEntry]] = {}
    for e in entries:
        grouped.setdefault(e.resource, []).append(e)
    return grouped


def evaluate_health(snap: StorageSnapshot, th: Thresholds) -> HealthReport:
    issues: list[HealthIssue] = []

    for lv in snap.logical_volumes:
        if lv.stale:
            issues.append(HealthIssue(CATEGORY_STALE, LEVEL_CRITICAL, f"{lv.vg_name}/{lv.name} {lv.state}"))

    for vg in snap.volume_groups:
        # no QUORUM line means lsvg <vg> failed; nothing to judge
        if vg.quorum_enabled is False:
            issues.append(HealthIssue(CATEGORY_QUORUM, LEVEL_WARNING, f"{vg.name}: Quorum Disabled"))

    for p in snap.paths:
        if not p.enabled:
            issues.append(HealthIssue(CATEGORY_PATH, LEVEL_CRITICAL, f"{p.device} {p.parent}: {p.status}"))

    for ps in snap.paging_spaces:
        level = th.classify(ps.used_percent)
        if level != LEVEL_OK:
            issues.append(HealthIssue(CATEGORY_PAGING, level, f"{ps.name}: {ps.used_percent}% used"))

    for vg in snap.volume_groups:
        level = th.classify(vg.used_percent)
        if level != LEVEL_OK:
            issues.append(HealthIssue(CATEGORY_CAPACITY, level, f"VG {vg.name}: {vg.used_percent}% of PPs allocated"))

    for fs in snap.filesystems:
        level = th.classify(fs.used_percent)
        if level != LEVEL_OK:
            issues.append(HealthIssue(CATEGORY_CAPACITY, level, f"{fs.mount}: {fs.used_percent}% full"))

    # one issue per failing disk, however many errpt lines it logged
    for disk, entries in _errors_by_disk(snap.disk_errors).items():
        level = LEVEL_CRITICAL if any(e.permanent for e in entries) else LEVEL_WARNING
        issues.append(HealthIssue(CATEGORY_DISK_ERROR, level, f"{disk}: {len(entries)} error(s) in errpt"))

    return HealthReport(issues=issues)


def _issue_line(issue: HealthIssue) -> str:
    if issue.severity == LEVEL_CRITICAL:
        return f"  [red]✖ {issue.description}[white]\n"
    return f"  [yellow]⚠ {issue.description}[white]\n"


def render_health(snap: StorageSnapshot, th: Thresholds) -> str:
    report = evaluate_health(snap, th)
    text = "[yellow::b]═══ STORAGE HEALTH CHECK ═══[white]\n\n"

    text += "[cyan]● Stale Physical Partitions[white]\n"
    stale = report.by_category(CATEGORY_STALE)
    for issue in stale:
        text += f"  [red]✖ STALE: {issue.description}[white]\n"
    if not stale:
        text += "  [green]✓ No stale partitions[white]\n"

    text += "\n[cyan]● Volume Group Quorum[white]\n"
    for vg in snap.volume_groups:
        if vg.quorum_enabled is None:
            continue
        if vg.quorum_enabled:
            text += f"  [green]✓ {vg.name}: Quorum Enabled[white]\n"
        else:
            text += f"  [yellow]⚠ {vg.name}: Quorum Disabled[white]\n"
    if not snap.volume_groups:
        text += "  [gray]- No volume groups[white]\n"

    text += "\n[cyan]● Multipath Status[white]\n"
    failed = report.by_category(CATEGORY_PATH)
    for issue in failed:
        text += _issue_line(issue)
    if not snap.paths:
        text += "  [gray]- No multipath configured[white]\n"
    elif not failed:
        text += f"  [green]✓ All {len(snap.paths)} paths healthy[white]\n"

    text += "\n[cyan]● Paging Space[white]\n"
    for ps in snap.paging_spaces:
        level = th.classify(ps.used_percent)
        if level == LEVEL_OK:
            text += f"  [green]✓ {ps.name}: {ps.used_percent}% used[white]\n"
        else:
            text += _issue_line(HealthIssue(CATEGORY_PAGING, level, f"{ps.name}: {ps.used_percent}% used"))

    text += "\n[cyan]● Recent Disk Errors (errpt)[white]\n"
    for e in snap.disk_errors[:MAX_DISK_ERRORS_SHOWN]:
        text += f"  [red]✖ {e.identifier} {e.resource} {e.description}[white]\n"
    if len(snap.disk_errors) > MAX_DISK_ERRORS_SHOWN:
        text += f"  [red]  ... and {len(snap.disk_errors) - MAX_DISK_ERRORS_SHOWN} more disk errors[white]\n"
    if not snap.disk_errors:
        text += "  [green]✓ No disk errors in errpt[white]\n"

    text += "\n[cyan]● Unused Disks[white]\n"
    unused = snap.unused_disks
    remnants = [pv for pv in unused if pv.has_remnants]
    for pv in remnants:
        text += f"  [yellow]⚠ {pv.name} has VGDA remnants (chpv -C to clear)[white]\n"
    if not unused:
        text += "  [gray]- No unused disks[white]\n"
    elif not remnants:
        text += f"  [green]✓ {len(unused)} unused disk(s), all clean[white]\n"

    text += "\n[cyan]● Capacity[white]\n"
    capacity = report.by_category(CATEGORY_CAPACITY)
    for issue in capacity:
        text += _issue_line(issue)
    if not capacity:
        text += f"  [green]✓ All volume groups and filesystems below {th.warn}%[white]\n"

    text += "\n" + "─" * 50 + "\n"
    if report.passed:
        text += "[green::b]✓ SYSTEM HEALTHY - No issues detected[white]\n"
    else:
        text += f"[red::b]✖ {report.issue_count} ISSUE(S) REQUIRE ATTENTION[white]\n"
    text += f"\n[gray]Thresholds: warn={th.warn}% crit={th.crit}%[white]\n"
    return text
