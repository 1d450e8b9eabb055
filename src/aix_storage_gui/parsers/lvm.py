from __future__ import annotations

from aix_storage_gui.models.lvm import (
    NO_VG,
    LogicalVolumeRecord,
    LvPlacement,
    PhysicalVolumeRecord,
    VolumeGroupRecord,
)
from aix_storage_gui.parsers.labels import (
    FieldRule,
    LabelMatcher,
    apply_rules,
    data_lines,
    first_token,
    text,
    to_int,
)

DISK_PREFIX = "hdisk"


def _quorum_enabled(value: str) -> bool:
    return "Enabled" in value


def _mount(value: str) -> str | None:
    value = value.strip()
    return None if value in ("", "N/A") else value


# lsvg <vg>
_VG_LABELS = (
    "VOLUME GROUP:", "VG IDENTIFIER:", "VG STATE:", "PP SIZE:", "VG PERMISSION:",
    "TOTAL PPs:", "MAX LVs:", "FREE PPs:", "LVs:", "USED PPs:", "OPEN LVs:",
    "QUORUM:", "TOTAL PVs:", "VG DESCRIPTORS:", "STALE PVs:", "STALE PPs:",
    "ACTIVE PVs:", "AUTO ON:", "MAX PPs per VG:", "MAX PPs per PV:", "MAX PVs:",
    "LTG size (Dynamic):", "LTG size:", "AUTO SYNC:", "HOT SPARE:", "BB POLICY:",
    "PV RESTRICTION:", "INFINITE RETRY:", "DISK BLOCK SIZE:", "CRITICAL VG:",
    "FS SYNC OPTION:", "CRITICAL PVs:", "ENCRYPTION:",
)
_VG_RULES = {
    "VG STATE:": FieldRule("state", first_token),
    "PP SIZE:": FieldRule("pp_size_mb", to_int),
    "TOTAL PPs:": FieldRule("total_pps", to_int),
    "USED PPs:": FieldRule("used_pps", to_int),
    "FREE PPs:": FieldRule("free_pps", to_int),
    "QUORUM:": FieldRule("quorum_enabled", _quorum_enabled),
    "LVs:": FieldRule("lv_count", to_int),
    "OPEN LVs:": FieldRule("open_lv_count", to_int),
    "TOTAL PVs:": FieldRule("pv_count", to_int),
    "STALE PVs:": FieldRule("stale_pvs", to_int),
    "STALE PPs:": FieldRule("stale_pps", to_int),
}
_VG_MATCHER = LabelMatcher(_VG_LABELS)

# lspv <pv>
_PV_LABELS = (
    "PHYSICAL VOLUME:", "VOLUME GROUP:", "PV IDENTIFIER:", "VG IDENTIFIER",
    "PV STATE:", "STALE PARTITIONS:", "ALLOCATABLE:", "PP SIZE:",
    "LOGICAL VOLUMES:", "TOTAL PPs:", "VG DESCRIPTORS:", "FREE PPs:",
    "HOT SPARE:", "USED PPs:", "MAX REQUEST:", "FREE DISTRIBUTION:",
    "USED DISTRIBUTION:", "MIRROR POOL:",
)
_PV_RULES = {
    "VOLUME GROUP:": FieldRule("vg_name", first_token),
    "PV IDENTIFIER:": FieldRule("pvid", first_token),
    "PV STATE:": FieldRule("state", first_token),
    "PP SIZE:": FieldRule("pp_size_mb", to_int),
    "TOTAL PPs:": FieldRule("total_pps", to_int),
    "FREE PPs:": FieldRule("free_pps", to_int),
}
_PV_MATCHER = LabelMatcher(_PV_LABELS)

# lslv <lv>
_LV_LABELS = (
    "LOGICAL VOLUME:", "VOLUME GROUP:", "LV IDENTIFIER:", "PERMISSION:",
    "VG STATE:", "LV STATE:", "TYPE:", "WRITE VERIFY:", "MAX LPs:", "PP SIZE:",
    "COPIES:", "SCHED POLICY:", "LPs:", "PPs:", "STALE PPs:", "BB POLICY:",
    "INTER-POLICY:", "RELOCATABLE:", "INTRA-POLICY:", "UPPER BOUND:",
    "MOUNT POINT:", "LABEL:", "DEVICE UID:", "DEVICE GID:", "DEVICE PERMISSIONS:",
    "MIRROR WRITE CONSISTENCY:", "EACH LP COPY ON A SEPARATE PV ?:",
    "Serialize IO ?:", "INFINITE RETRY:", "PREFERRED READ:", "DEVICESUBTYPE:",
    "COPY 1 MIRROR POOL:", "COPY 2 MIRROR POOL:", "COPY 3 MIRROR POOL:",
    "ENCRYPTION:",
)
_LV_RULES = {
    "VOLUME GROUP:": FieldRule("vg_name", first_token),
    "LV STATE:": FieldRule("state", text),
    "TYPE:": FieldRule("lv_type", first_token),
    "PP SIZE:": FieldRule("pp_size_mb", to_int),
    "LPs:": FieldRule("lps", to_int),
    "PPs:": FieldRule("pps", to_int),
    "STALE PPs:": FieldRule("stale_pps", to_int),
    "MOUNT POINT:": FieldRule("mount", _mount),
}
_LV_MATCHER = LabelMatcher(_LV_LABELS)


def parse_vg_names(output: str) -> list[str]:
    return [fields[0] for fields in data_lines(output)]


def parse_volume_group(name: str, output: str) -> VolumeGroupRecord:
    fields = apply_rules(_VG_MATCHER.scan(output), _VG_RULES)
    return VolumeGroupRecord(name=name, **fields)


def parse_vg_logical_volumes(vg_name: str, output: str, pp_size_mb: int = 0) -> list[LogicalVolumeRecord]:
    """Parse ``lsvg -l <vg>``: a ``<vg>:`` line and a column header, then one LV per line."""
    rows: list[LogicalVolumeRecord] = []
    for fields in data_lines(output, skip=2):
        if len(fields) < 6:
            continue
        rows.append(
            LogicalVolumeRecord(
                name=fields[0],
                vg_name=vg_name,
                lv_type=fields[1],
                lps=to_int(fields[2]),
                pps=to_int(fields[3]),
                pv_count=to_int(fields[4]),
                state=fields[5],
                mount=_mount(" ".join(fields[6:])),
                pp_size_mb=pp_size_mb,
            )
        )
    return rows


def parse_vg_disks(vg_name: str, output: str, pp_size_mb: int = 0) -> list[PhysicalVolumeRecord]:
    """Parse ``lsvg -p <vg>`` (PV_NAME, PV STATE, TOTAL PPs, FREE PPs, FREE DISTRIBUTION)."""
    rows: list[PhysicalVolumeRecord] = []
    for fields in data_lines(output, skip=2):
        if len(fields) < 4 or not fields[0].startswith(DISK_PREFIX):
            continue
        rows.append(
            PhysicalVolumeRecord(
                name=fields[0],
                vg_name=vg_name,
                state=fields[1],
                total_pps=to_int(fields[2]),
                free_pps=to_int(fields[3]),
                pp_size_mb=pp_size_mb,
            )
        )
    return rows


def parse_pv_list(output: str) -> list[PhysicalVolumeRecord]:
    rows: list[PhysicalVolumeRecord] = []
    for fields in data_lines(output):
        if len(fields) < 3 or not fields[0].startswith(DISK_PREFIX):
            continue
        rows.append(
            PhysicalVolumeRecord(
                name=fields[0],
                pvid=fields[1],
                vg_name=fields[2],
                state=fields[3] if len(fields) > 3 else "active",
            )
        )
    return rows


def parse_pv_detail(name: str, output: str) -> PhysicalVolumeRecord:
    fields = apply_rules(_PV_MATCHER.scan(output), _PV_RULES)
    fields.setdefault("vg_name", NO_VG)
    if not fields["vg_name"]:
        fields["vg_name"] = NO_VG
    return PhysicalVolumeRecord(name=name, **fields)


def parse_pv_placements(output: str) -> list[LvPlacement]:
    """Parse ``lspv -l <pv>`` (LV NAME, LPs, PPs, DISTRIBUTION, MOUNT POINT)."""
    rows: list[LvPlacement] = []
    for fields in data_lines(output, skip=2):
        if len(fields) < 2:
            continue
        rows.append(
            LvPlacement(
                lv_name=fields[0],
                lps=to_int(fields[1]),
                pps=to_int(fields[2]) if len(fields) > 2 else 0,
                distribution=fields[3] if len(fields) > 3 else "",
                mount=_mount(" ".join(fields[4:])),
            )
        )
    return rows


def parse_lv_detail(name: str, output: str) -> LogicalVolumeRecord | None:
    values = _LV_MATCHER.scan(output)
    if "VOLUME GROUP:" not in values:
        return None
    return LogicalVolumeRecord(name=name, **apply_rules(values, _LV_RULES))


def parse_lv_disks(output: str) -> list[str]:
    """Disks backing an LV from ``lslv -m``, in first-seen order across all copies."""
    disks: list[str] = []
    for fields in data_lines(output, skip=2):
        # LP, then (PP, PV) pairs for each mirror copy
        for pv in fields[2::2]:
            if pv.startswith(DISK_PREFIX) and pv not in disks:
                disks.append(pv)
    return disks
