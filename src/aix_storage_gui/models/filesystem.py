from __future__ import annotations

from dataclasses import dataclass

from aix_storage_gui.services.metrics import parse_percent

KIND_NFS = "nfs"
KIND_DEFAULT_LOCAL = "jfs2"


@dataclass(frozen=True)
class FilesystemRecord:
    mount: str
    device: str
    size_mb: float
    free_mb: float
    pct: str
    kind: str

    @property
    def used_percent(self) -> int:
        return min(max(parse_percent(self.pct), 0), 100)

    @property
    def is_network(self) -> bool:
        return ":" in self.device

    @property
    def server(self) -> str:
        return self.device.split(":", 1)[0] if self.is_network else ""

    @property
    def remote_path(self) -> str:
        return self.device.split(":", 1)[1] if self.is_network else ""

    @property
    def lv_name(self) -> str:
        if self.is_network:
            return ""
        return self.device.removeprefix("/dev/")
