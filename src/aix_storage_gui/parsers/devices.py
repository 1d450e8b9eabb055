from __future__ import annotations

from aix_storage_gui.models.devices import (
    DiskErrorEntry,
    DiskIOStat,
    LunInfo,
    PagingSpaceRecord,
    PathRecord,
)
from aix_storage_gui.parsers.labels import data_lines, to_float, to_int
from aix_storage_gui.parsers.lvm import DISK_PREFIX


def parse_paging_spaces(output: str) -> list[PagingSpaceRecord]:
    """Parse ``lsps -a``: Page Space, Physical Volume, Volume Group, Size, %Used, ..."""
    rows: list[PagingSpaceRecord] = []
    for fields in data_lines(output):
        if len(fields) < 5 or fields[0] == "Page":
            continue
        rows.append(
            PagingSpaceRecord(
                name=fields[0],
                pv_name=fields[1],
                vg_name=fields[2],
                size=fields[3],
                used_percent=min(max(to_int(fields[4]), 0), 100),
            )
        )
    return rows


def parse_paths(output: str) -> list[PathRecord]:
    rows: list[PathRecord] = []
    for fields in data_lines(output):
        if len(fields) < 2:
            continue
        rows.append(
            PathRecord(
                status=fields[0],
                device=fields[1],
                parent=fields[2] if len(fields) > 2 else "",
            )
        )
    return rows


def parse_lun_attrs(output: str) -> tuple[str, str]:
    """Return (pvid, unique_id) from ``lsattr -El <disk>``."""
    pvid = ""
    unique_id = ""
    for fields in data_lines(output):
        if len(fields) < 2:
            continue
        if fields[0] == "pvid":
            pvid = fields[1]
        elif fields[0] == "unique_id":
            unique_id = fields[1]
    return pvid, unique_id


def parse_mpio_ids(output: str) -> tuple[str, str]:
    """Return (vendor, product) from ``lsmpio -ql <disk>``."""
    vendor = ""
    product = ""
    for line in output.splitlines():
        line = line.strip()
        if line.startswith("Vendor Id:"):
            vendor = line.removeprefix("Vendor Id:").strip()
        elif line.startswith("Product Id:"):
            product = line.removeprefix("Product Id:").strip()
    return vendor, product


def lun_info(lsattr_output: str, lsmpio_output: str) -> LunInfo:
    pvid, unique_id = parse_lun_attrs(lsattr_output)
    vendor, product = parse_mpio_ids(lsmpio_output)
    return LunInfo(pvid=pvid, unique_id=unique_id, vendor=vendor, product=product)


def parse_disk_size(output: str) -> int:
    """``bootinfo -s <disk>`` prints the size in MB on its first non-empty line."""
    for line in output.splitlines():
        if line.strip():
            return to_int(line)
    return 0


def parse_io_stats(output: str) -> list[DiskIOStat]:
    """Parse the disk rows of ``iostat -d``: disk, %tm_act, Kbps, tps, Kb_read, Kb_wrtn."""
    rows: list[DiskIOStat] = []
    for fields in data_lines(output):
        if len(fields) < 6 or not fields[0].startswith(DISK_PREFIX):
            continue
        rows.append(
            DiskIOStat(
                disk=fields[0],
                tm_act=to_float(fields[1]),
                kbps=to_float(fields[2]),
                tps=to_float(fields[3]),
                kb_read=to_int(fields[4]),
                kb_wrtn=to_int(fields[5]),
            )
        )
    return rows


def parse_disk_errors(output: str) -> list[DiskErrorEntry]:
    """Disk entries of ``errpt``: IDENTIFIER TIMESTAMP T C RESOURCE_NAME DESCRIPTION."""
    rows: list[DiskErrorEntry] = []
    for fields in data_lines(output):
        if len(fields) < 6 or fields[0] == "IDENTIFIER":
            continue
        # adapters (fscsi, sissas) may mention a disk only in the description
        if not fields[4].startswith(DISK_PREFIX):
            continue
        rows.append(
            DiskErrorEntry(
                identifier=fields[0],
                timestamp=fields[1],
                err_type=fields[2],
                err_class=fields[3],
                resource=fields[4],
                description=" ".join(fields[5:]),
            )
        )
    return rows
