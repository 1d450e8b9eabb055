from __future__ import annotations

from aix_storage_gui.models.devices import (
    DiskErrorEntry,
    DiskIOStat,
    LunInfo,
    PagingSpaceRecord,
    PathRecord,
)
from aix_storage_gui.models.filesystem import FilesystemRecord
from aix_storage_gui.models.lvm import (
    LogicalVolumeRecord,
    LvPlacement,
    PhysicalVolumeRecord,
    VolumeGroupRecord,
)
from aix_storage_gui.parsers import devices, filesystem, lvm
from aix_storage_gui.services.runner import CommandRunner


class AixInventory:
    """One method per AIX query; each runs the command and returns parsed records."""

    def __init__(self, runner: CommandRunner) -> None:
        self.runner = runner

    def vg_names(self) -> list[str]:
        return lvm.parse_vg_names(self.runner(["lsvg"]))

    def volume_group(self, name: str) -> VolumeGroupRecord:
        return lvm.parse_volume_group(name, self.runner(["lsvg", name]))

    def vg_logical_volumes(self, name: str, pp_size_mb: int = 0) -> list[LogicalVolumeRecord]:
        return lvm.parse_vg_logical_volumes(name, self.runner(["lsvg", "-l", name]), pp_size_mb)

    def vg_disks(self, name: str, pp_size_mb: int = 0) -> list[PhysicalVolumeRecord]:
        return lvm.parse_vg_disks(name, self.runner(["lsvg", "-p", name]), pp_size_mb)

    def physical_volumes(self) -> list[PhysicalVolumeRecord]:
        return lvm.parse_pv_list(self.runner(["lspv"]))

    def pv_detail(self, name: str) -> PhysicalVolumeRecord:
        return lvm.parse_pv_detail(name, self.runner(["lspv", name]))

    def pv_placements(self, name: str) -> list[LvPlacement]:
        return lvm.parse_pv_placements(self.runner(["lspv", "-l", name]))

    def lv_detail(self, name: str) -> LogicalVolumeRecord | None:
        return lvm.parse_lv_detail(name, self.runner(["lslv", name]))

    def lv_disks(self, name: str) -> list[str]:
        return lvm.parse_lv_disks(self.runner(["lslv", "-m", name]))

    def paths(self, disk: str | None = None) -> list[PathRecord]:
        cmd = ["lspath"] if disk is None else ["lspath", "-l", disk]
        return devices.parse_paths(self.runner(cmd))

    def lun_info(self, disk: str) -> LunInfo:
        return devices.lun_info(
            self.runner(["lsattr", "-El", disk]),
            self.runner(["lsmpio", "-ql", disk]),
        )

    def disk_size_mb(self, disk: str) -> int:
        return devices.parse_disk_size(self.runner(["bootinfo", "-s", disk]))

    def filesystems(self, include_network: bool = True) -> list[FilesystemRecord]:
        types = filesystem.parse_fs_types(self.runner(["lsfs", "-c"]))
        return filesystem.parse_filesystems(self.runner(["df", "-m"]), include_network, types)

    def paging_spaces(self) -> list[PagingSpaceRecord]:
        return devices.parse_paging_spaces(self.runner(["lsps", "-a"]))

    def io_stats(self) -> list[DiskIOStat]:
        return devices.parse_io_stats(self.runner(["iostat", "-d", "1", "1"]))

    def disk_errors(self) -> list[DiskErrorEntry]:
        return devices.parse_disk_errors(self.runner(["errpt", "-d", "H"]))
