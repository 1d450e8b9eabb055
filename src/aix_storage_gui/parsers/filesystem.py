from __future__ import annotations

from aix_storage_gui.models.filesystem import KIND_DEFAULT_LOCAL, KIND_NFS, FilesystemRecord
from aix_storage_gui.parsers.labels import to_float

DIALECT_NATIVE = "native"
DIALECT_GNU = "gnu"

# header word that only the GNU df prints
_GNU_HEADER_MARK = "Available"


def detect_df_dialect(output: str) -> str:
    lines = output.splitlines()
    if lines and _GNU_HEADER_MARK in lines[0]:
        return DIALECT_GNU
    return DIALECT_NATIVE


def parse_filesystems(
    output: str,
    include_network: bool = True,
    types: dict[str, str] | None = None,
) -> list[FilesystemRecord]:
    """Parse ``df -m`` in either the AIX (7 columns) or GNU (6 columns) layout.

    AIX:  Filesystem MB-blocks Free %Used Iused %Iused Mounted-on
    GNU:  Filesystem 1M-blocks Used Available Use% Mounted-on
    """
    dialect = detect_df_dialect(output)
    types = types or {}
    rows: list[FilesystemRecord] = []

    for line in output.splitlines():
        fields = line.split()
        if not fields:
            continue

        device = fields[0]
        is_local = device.startswith("/dev/")
        is_network = ":" in device
        if not is_local and not (include_network and is_network):
            continue

        if dialect == DIALECT_GNU:
            if len(fields) < 6:
                continue
            size_mb = to_float(fields[1])
            free_mb = size_mb - to_float(fields[2])
            pct = fields[4]
            mount = fields[5]
        else:
            if len(fields) < 7:
                continue
            size_mb = to_float(fields[1])
            free_mb = to_float(fields[2])
            pct = fields[3]
            mount = fields[6]

        kind = types.get(mount) or (KIND_NFS if is_network else KIND_DEFAULT_LOCAL)
        rows.append(
            FilesystemRecord(
                mount=mount,
                device=device,
                size_mb=size_mb,
                free_mb=free_mb,
                pct=pct,
                kind=kind,
            )
        )
    return rows


def parse_fs_types(output: str) -> dict[str, str]:
    """Map mount point -> vfs type from colon-separated ``lsfs -c``."""
    types: dict[str, str] = {}
    for line in output.splitlines():
        if line.startswith("#") or not line.strip():
            continue
        parts = line.split(":")
        if len(parts) < 3 or not parts[0]:
            continue
        types[parts[0]] = parts[2]
    return types
