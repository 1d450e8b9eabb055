from __future__ import annotations

from aix_storage_gui.models.health import SearchHit
from aix_storage_gui.models.snapshot import StorageSnapshot


def search(snap: StorageSnapshot, query: str) -> list[SearchHit]:
    q = query.strip().lower()
    if not q:
        return []

    hits: list[SearchHit] = []
    for vg in snap.volume_groups:
        if q in vg.name.lower():
            hits.append(SearchHit("VG", vg.name))
    for lv in snap.logical_volumes:
        if q in lv.name.lower() or (lv.mount and q in lv.mount.lower()):
            hits.append(SearchHit("LV", f"{lv.name} (VG: {lv.vg_name})"))
    for fs in snap.filesystems:
        if q in fs.mount.lower() or q in fs.device.lower():
            hits.append(SearchHit("FS", f"{fs.mount} -> {fs.device}"))
    for pv in snap.physical_volumes:
        if q in pv.name.lower() or q in pv.pvid.lower():
            hits.append(SearchHit("PV", f"{pv.name} ({pv.vg_name})"))
    for ps in snap.paging_spaces:
        if q in ps.name.lower():
            hits.append(SearchHit("PS", f"{ps.name} (VG: {ps.vg_name})"))
    return hits


def render_search(query: str, hits: list[SearchHit]) -> str:
    text = "[yellow::b]═══ SEARCH RESULTS ═══[white]\n\n"
    text += f"Query: [cyan]{query}[white]\n\n"
    for hit in hits:
        text += f"[green]{hit.category}:[white] {hit.label}\n"
    if not hits:
        text += "[gray]No results found[white]\n"
    else:
        text += f"\n[gray]Found {len(hits)} result(s)[white]\n"
    return text
