from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PagingSpaceRecord:
    name: str
    pv_name: str
    vg_name: str
    size: str
    used_percent: int


@dataclass(frozen=True)
class PathRecord:
    status: str
    device: str
    parent: str

    @property
    def enabled(self) -> bool:
        return self.status == "Enabled"


@dataclass(frozen=True)
class LunInfo:
    pvid: str = ""
    unique_id: str = ""
    vendor: str = ""
    product: str = ""

    @property
    def vendor_product(self) -> str:
        return " ".join(p for p in (self.vendor, self.product) if p)

    @property
    def display(self) -> str:
        # unique_id identifies the LUN on the array; vendor/product is a fallback
        return self.unique_id or self.vendor_product


@dataclass(frozen=True)
class DiskIOStat:
    disk: str
    tm_act: float
    kbps: float
    tps: float
    kb_read: int
    kb_wrtn: int


@dataclass(frozen=True)
class DiskErrorEntry:
    identifier: str
    timestamp: str
    err_type: str
    err_class: str
    resource: str
    description: str

    @property
    def permanent(self) -> bool:
        return self.err_type == "P"
