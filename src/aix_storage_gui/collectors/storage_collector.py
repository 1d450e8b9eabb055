from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime

from aix_storage_gui.collectors.aix_inventory import AixInventory
from aix_storage_gui.models.common import CollectorResult
from aix_storage_gui.models.devices import PathRecord
from aix_storage_gui.models.lvm import LogicalVolumeRecord, PhysicalVolumeRecord, VolumeGroupRecord
from aix_storage_gui.models.snapshot import StorageSnapshot
from aix_storage_gui.services.metrics import LEVEL_OK, Thresholds

logger = logging.getLogger(__name__)


class StorageCollector:
    def __init__(
        self,
        inventory: AixInventory,
        thresholds: Thresholds | None = None,
        surface_errors: bool = False,
    ) -> None:
        self.inventory = inventory
        self.thresholds = thresholds or Thresholds()
        self.surface_errors = bool(surface_errors)

    def collect(self) -> CollectorResult[StorageSnapshot]:
        ts = datetime.now()
        inv = self.inventory

        volume_groups: list[VolumeGroupRecord] = []
        vg_disks: dict[str, list[PhysicalVolumeRecord]] = {}
        logical_volumes: list[LogicalVolumeRecord] = []
        for name in inv.vg_names():
            vg = inv.volume_group(name)
            volume_groups.append(vg)
            vg_disks[name] = inv.vg_disks(name, vg.pp_size_mb)
            logical_volumes.extend(inv.vg_logical_volumes(name, vg.pp_size_mb))

        paths = inv.paths()
        physical_volumes = self._physical_volumes(vg_disks, paths)

        snapshot = StorageSnapshot(
            ts=ts,
            volume_groups=volume_groups,
            vg_disks=vg_disks,
            logical_volumes=logical_volumes,
            physical_volumes=physical_volumes,
            filesystems=inv.filesystems(include_network=True),
            paging_spaces=inv.paging_spaces(),
            paths=paths,
            disk_errors=inv.disk_errors(),
        )

        warnings = self._warnings(snapshot)
        failures = self._command_failures()
        if self.surface_errors:
            warnings.extend(f"Command failed: {f}" for f in failures)

        logger.debug(
            "collected %d VGs, %d LVs, %d PVs, %d filesystems",
            len(volume_groups),
            len(logical_volumes),
            len(physical_volumes),
            len(snapshot.filesystems),
        )
        status = "OK" if not warnings else "WARN"
        return CollectorResult(
            ts=ts,
            status=status,
            warning_count=len(warnings),
            warnings=warnings,
            data=snapshot,
            command_failures=failures,
        )

    def _physical_volumes(
        self,
        vg_disks: dict[str, list[PhysicalVolumeRecord]],
        paths: list[PathRecord],
    ) -> list[PhysicalVolumeRecord]:
        members = {pv.name: pv for disks in vg_disks.values() for pv in disks}
        rows: list[PhysicalVolumeRecord] = []
        for pv in self.inventory.physical_volumes():
            lun = self.inventory.lun_info(pv.name)
            member = members.get(pv.name)
            pv = replace(
                pv,
                path_states=tuple(p.status for p in paths if p.device == pv.name),
                lun_info=lun.vendor_product or lun.unique_id,
                total_pps=member.total_pps if member else pv.total_pps,
                free_pps=member.free_pps if member else pv.free_pps,
                pp_size_mb=member.pp_size_mb if member else pv.pp_size_mb,
                state=member.state if member else pv.state,
            )
            if pv.unused:
                pv = replace(pv, size_mb=self.inventory.disk_size_mb(pv.name))
            rows.append(pv)
        return rows

    def _warnings(self, snap: StorageSnapshot) -> list[str]:
        th = self.thresholds
        warnings: list[str] = []
        for vg in snap.volume_groups:
            if th.classify(vg.used_percent) != LEVEL_OK:
                warnings.append(f"VG usage high: {vg.name} {vg.used_percent}% (>= {th.warn}%)")
        for fs in snap.filesystems:
            if th.classify(fs.used_percent) != LEVEL_OK:
                warnings.append(f"Filesystem usage high: {fs.mount} {fs.used_percent}% (>= {th.warn}%)")
        for ps in snap.paging_spaces:
            if th.classify(ps.used_percent) != LEVEL_OK:
                warnings.append(f"Paging space usage high: {ps.name} {ps.used_percent}% (>= {th.warn}%)")
        for lv in snap.logical_volumes:
            if lv.stale:
                warnings.append(f"Stale partitions: {lv.vg_name}/{lv.name}")
        for p in snap.paths:
            if not p.enabled:
                warnings.append(f"Path {p.status}: {p.device} via {p.parent}")
        return warnings

    def _command_failures(self) -> list[str]:
        take = getattr(self.inventory.runner, "take_failures", None)
        return list(take()) if callable(take) else []
