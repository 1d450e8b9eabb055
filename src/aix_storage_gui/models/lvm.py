from __future__ import annotations

from dataclasses import dataclass, field

from aix_storage_gui.services.metrics import mirror_copies, mirror_label, used_percent

NO_VG = "None"


@dataclass(frozen=True)
class VolumeGroupRecord:
    name: str
    state: str = ""
    pp_size_mb: int = 0
    total_pps: int = 0
    used_pps: int = 0
    free_pps: int = 0
    quorum_enabled: bool | None = None
    lv_count: int = 0
    pv_count: int = 0
    open_lv_count: int = 0
    stale_pvs: int = 0
    stale_pps: int = 0

    @property
    def active(self) -> bool:
        return self.state == "active"

    @property
    def state_label(self) -> str:
        return self.state or "unknown"

    @property
    def used_percent(self) -> int:
        return used_percent(self.used_pps, self.total_pps)

    @property
    def total_mb(self) -> int:
        return self.total_pps * self.pp_size_mb

    @property
    def used_mb(self) -> int:
        return self.used_pps * self.pp_size_mb

    @property
    def free_mb(self) -> int:
        return self.free_pps * self.pp_size_mb


@dataclass(frozen=True)
class PhysicalVolumeRecord:
    name: str
    pvid: str = ""
    vg_name: str = NO_VG
    state: str = ""
    total_pps: int = 0
    free_pps: int = 0
    pp_size_mb: int = 0
    path_states: tuple[str, ...] = field(default_factory=tuple)
    lun_info: str = ""
    size_mb: int = 0

    @property
    def unused(self) -> bool:
        return self.vg_name.lower() in ("", "none")

    @property
    def has_remnants(self) -> bool:
        """A PVID left on a disk outside any VG means stale VGDA data."""
        return self.unused and self.pvid.lower() not in ("", "none")

    @property
    def used_pps(self) -> int:
        return max(self.total_pps - self.free_pps, 0)

    @property
    def used_percent(self) -> int:
        return used_percent(self.used_pps, self.total_pps)

    @property
    def paths_failed(self) -> int:
        return sum(1 for s in self.path_states if s != "Enabled")


@dataclass(frozen=True)
class LogicalVolumeRecord:
    name: str
    vg_name: str = ""
    lv_type: str = ""
    lps: int = 0
    pps: int = 0
    pv_count: int = 0
    state: str = ""
    mount: str | None = None
    pp_size_mb: int = 0
    stale_pps: int = 0

    @property
    def copies(self) -> int:
        return mirror_copies(self.pps, self.lps)

    @property
    def mirror_label(self) -> str:
        return mirror_label(self.copies)

    @property
    def stale(self) -> bool:
        return "stale" in self.state.lower() or self.stale_pps > 0

    @property
    def size_mb(self) -> int:
        return self.lps * self.pp_size_mb


@dataclass(frozen=True)
class LvPlacement:
    lv_name: str
    lps: int
    pps: int
    distribution: str
    mount: str | None
