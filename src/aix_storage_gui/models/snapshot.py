from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from aix_storage_gui.models.devices import DiskErrorEntry, PagingSpaceRecord, PathRecord
from aix_storage_gui.models.filesystem import FilesystemRecord
from aix_storage_gui.models.lvm import LogicalVolumeRecord, PhysicalVolumeRecord, VolumeGroupRecord


@dataclass(frozen=True)
class StorageSnapshot:
    ts: datetime
    volume_groups: list[VolumeGroupRecord] = field(default_factory=list)
    vg_disks: dict[str, list[PhysicalVolumeRecord]] = field(default_factory=dict)
    logical_volumes: list[LogicalVolumeRecord] = field(default_factory=list)
    physical_volumes: list[PhysicalVolumeRecord] = field(default_factory=list)
    filesystems: list[FilesystemRecord] = field(default_factory=list)
    paging_spaces: list[PagingSpaceRecord] = field(default_factory=list)
    paths: list[PathRecord] = field(default_factory=list)
    disk_errors: list[DiskErrorEntry] = field(default_factory=list)

    @property
    def unused_disks(self) -> list[PhysicalVolumeRecord]:
        return [pv for pv in self.physical_volumes if pv.unused]

    def lvs_in(self, vg_name: str) -> list[LogicalVolumeRecord]:
        return [lv for lv in self.logical_volumes if lv.vg_name == vg_name]
