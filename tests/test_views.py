from datetime import datetime

import pytest
from conftest import FixtureRunner

from aix_storage_gui.collectors.aix_inventory import AixInventory
from aix_storage_gui.collectors.storage_collector import StorageCollector
from aix_storage_gui.models.devices import DiskErrorEntry, DiskIOStat
from aix_storage_gui.models.health import CATEGORY_CAPACITY, CATEGORY_DISK_ERROR, CATEGORY_QUORUM
from aix_storage_gui.models.lvm import VolumeGroupRecord
from aix_storage_gui.models.snapshot import StorageSnapshot
from aix_storage_gui.services.metrics import LEVEL_CRITICAL, LEVEL_WARNING, Thresholds
from aix_storage_gui.views import composer as pages
from aix_storage_gui.views.composer import ViewComposer
from aix_storage_gui.views.dashboard import count_alerts, render_dashboard
from aix_storage_gui.views.details import render_io_stats
from aix_storage_gui.views.health import evaluate_health, render_health
from aix_storage_gui.views.mapping import CARD_WIDTH
from aix_storage_gui.views.markup import COLORS, markup_to_html, progress_bar, strip_colors
from aix_storage_gui.views.search import render_search, search

TS = datetime(2025, 10, 19, 9, 30, 0)


def _vg(name: str, used: int, total: int = 100, quorum: bool = True) -> VolumeGroupRecord:
    return VolumeGroupRecord(
        name=name,
        state="active",
        pp_size_mb=64,
        total_pps=total,
        used_pps=used,
        free_pps=total - used,
        quorum_enabled=quorum,
    )


def _error(resource: str, err_type: str = "T") -> DiskErrorEntry:
    return DiskErrorEntry("DCB47997", "1019093025", err_type, "H", resource, "DISK OPERATION ERROR")


@pytest.mark.parametrize("color", COLORS)
def test_strip_colors_recovers_plain_values(color):
    for bold in ("", "::b"):
        assert strip_colors(f"[{color}{bold}]hdisk0 95%[white] rootvg") == "hdisk0 95% rootvg"


def test_strip_colors_keeps_unknown_brackets():
    assert strip_colors("[0516-306] [red]x[white]") == "[0516-306] x"


def test_markup_to_html_escapes_and_colors():
    out = markup_to_html("[red::b]<fail>[white] ok")
    assert "&lt;fail&gt;" in out
    assert "font-weight:bold" in out
    assert out.endswith(" ok")


def test_progress_bar_color_follows_thresholds(thresholds):
    assert progress_bar(95, 10, thresholds).startswith("[red]")
    assert progress_bar(86, 10, thresholds).startswith("[yellow]")
    assert progress_bar(10, 10, thresholds).startswith("[green]")
    assert strip_colors(progress_bar(50, 10, thresholds)).endswith(" 50%")


def test_health_flags_full_vg_as_critical(thresholds):
    snap = StorageSnapshot(ts=TS, volume_groups=[_vg("datavg", 95)])
    report = evaluate_health(snap, thresholds)
    capacity = report.by_category(CATEGORY_CAPACITY)
    assert report.issue_count >= 1
    assert capacity[0].severity == LEVEL_CRITICAL

    text = strip_colors(render_health(snap, thresholds))
    assert "1 ISSUE(S) REQUIRE ATTENTION" in text
    assert "VG datavg: 95% of PPs allocated" in text


def test_health_passes_on_quiet_system(thresholds):
    snap = StorageSnapshot(ts=TS, volume_groups=[_vg("rootvg", 10)])
    report = evaluate_health(snap, thresholds)
    assert report.passed
    assert "SYSTEM HEALTHY - No issues detected" in render_health(snap, thresholds)


def test_health_counts_disk_errors_once_per_disk(thresholds):
    errors = [_error("hdisk1") for _ in range(5)] + [_error("hdisk2", "P")]
    snap = StorageSnapshot(ts=TS, volume_groups=[_vg("rootvg", 10)], disk_errors=errors)
    issues = evaluate_health(snap, thresholds).by_category(CATEGORY_DISK_ERROR)
    assert [(i.description.split(":")[0], i.severity) for i in issues] == [
        ("hdisk1", LEVEL_WARNING),
        ("hdisk2", LEVEL_CRITICAL),
    ]

    text = render_health(snap, thresholds)
    assert text.count("DISK OPERATION ERROR") == 3
    assert "... and 3 more disk errors" in text


def test_health_on_fixture_system(snapshot, thresholds):
    report = evaluate_health(snapshot, thresholds)
    # stale hd9var, datavg quorum, failed path, datavg + /var capacity, hdisk1 + hdisk2 errors
    assert report.issue_count == 7
    assert len(report.by_category(CATEGORY_QUORUM)) == 1

    text = strip_colors(render_health(snapshot, thresholds))
    assert "STALE: rootvg/hd9var open/stale" in text
    assert "hdisk4 has VGDA remnants" in text
    assert "7 ISSUE(S) REQUIRE ATTENTION" in text


def test_dashboard(snapshot, thresholds):
    assert count_alerts(snapshot, thresholds) == 2
    text = strip_colors(render_dashboard(snapshot, thresholds))
    assert "● 2 ALERT(S)" in text
    assert "2 VGs | 5 Disks | 5 Filesystems" in text
    assert "Thresholds: warn=85% crit=90%" in text
    assert "UNUSED DISKS" in text
    assert "hdisk3" in text and "clean" in text
    assert "20.0G" in text
    assert " 95%" in text


def test_dashboard_empty_snapshot(thresholds):
    text = strip_colors(render_dashboard(StorageSnapshot(ts=TS), thresholds))
    assert "● HEALTHY" in text
    assert "No volume groups found" in text
    assert "UNUSED DISKS" not in text


def test_search_is_case_insensitive(snapshot):
    hits = search(snapshot, "DATA")
    assert ("VG", "datavg") in [(h.category, h.label) for h in hits]
    assert any(h.category == "FS" and h.label.startswith("/data") for h in hits)
    assert search(snapshot, "   ") == []

    text = strip_colors(render_search("DATA", hits))
    assert f"Found {len(hits)} result(s)" in text


def test_search_without_hits(snapshot):
    assert "No results found" in render_search("zzz", search(snapshot, "zzz"))


def test_io_stats_page():
    stats = [DiskIOStat("hdisk2", 85.5, 2048.0, 120.0, 1024, 1024)]
    text = render_io_stats(stats, ts=TS)
    assert "Updated: 09:30:00" in text
    assert "[red]" in text
    assert "No disk statistics" in render_io_stats([], ts=TS)


class TestComposer:
    def test_compose_all_covers_snapshot_pages(self, inventory, snapshot, thresholds):
        composed = ViewComposer(inventory, thresholds).compose_all(snapshot)
        assert set(composed) == set(pages.SNAPSHOT_PAGES)
        assert "2-way" in composed[pages.PAGE_MIRROR]
        assert "fslv00" in composed[pages.PAGE_LV]
        assert "IBM 2145" in composed[pages.PAGE_PV]
        assert "nfssrv01:/export/share" in composed[pages.PAGE_FS]
        assert "Quorum: [yellow]Disabled" in composed[pages.PAGE_VG]

    def test_disk_rows_list_unused_first(self, inventory, snapshot, thresholds):
        rows = ViewComposer(inventory, thresholds).disk_rows(snapshot)
        assert [r.key for r in rows] == ["hdisk3", "hdisk4", "hdisk0", "hdisk1", "hdisk2"]
        assert rows[1].label.startswith("◐")

    def test_filesystem_rows(self, inventory, snapshot, thresholds):
        rows = ViewComposer(inventory, thresholds).filesystem_rows(snapshot)
        assert [r.key for r in rows] == ["/", "/usr", "/var", "/data", "/mnt/share"]
        assert "[red]" in rows[2].label

    def test_io_stats_requery(self, runner, inventory, thresholds):
        text = ViewComposer(inventory, thresholds).io_stats()
        assert ["iostat", "-d", "1", "1"] in runner.calls
        assert "hdisk2" in text


class TestMapping:
    def test_filesystem_chain(self, inventory, snapshot, thresholds):
        text = strip_colors(ViewComposer(inventory, thresholds).map_filesystem(snapshot, "/"))
        assert "FILESYSTEM → STORAGE MAPPING" in text
        assert "hd4" in text
        assert "2-way, 8 PPs" in text
        assert "rootvg" in text
        assert "PHYSICAL VOLUMES (2 disk(s))" in text
        assert "hdisk0" in text and "hdisk1" in text
        assert "00c8b12c4e5f12340000000000000000" in text

    def test_unknown_mount_is_inline_error(self, inventory, snapshot, thresholds):
        text = ViewComposer(inventory, thresholds).map_filesystem(snapshot, "/nope")
        assert text == "[red]Cannot find device for /nope[white]\n"

    def test_unresolved_lv_keeps_partial_page(self, inventory, snapshot, thresholds):
        text = strip_colors(ViewComposer(inventory, thresholds).map_filesystem(snapshot, "/var"))
        assert "/dev/hd9var" in text
        assert "Cannot resolve logical volume hd9var for /var" in text

    def test_nfs_mount(self, inventory, snapshot, thresholds):
        text = strip_colors(ViewComposer(inventory, thresholds).map_filesystem(snapshot, "/mnt/share"))
        assert "NFS MOUNT" in text
        assert "nfssrv01" in text
        assert "/export/share" in text

    def test_disk_in_vg(self, inventory, thresholds):
        text = strip_colors(ViewComposer(inventory, thresholds).map_disk("hdisk0"))
        assert "STORAGE → FILESYSTEM MAPPING" in text
        assert "511 total, 256 used, 255 free" in text
        assert "Enabled Enabled" in text
        assert "VOLUME GROUP" in text
        assert "hd4" in text
        # no lslv capture for hd2
        assert "cannot resolve LV details" in text

    def test_clean_unused_disk(self, inventory, thresholds):
        text = strip_colors(ViewComposer(inventory, thresholds).map_disk("hdisk3"))
        assert "Disk is clean and ready to use" in text
        assert "mkvg -y newvg hdisk3" in text
        assert "single path" in text

    def test_unused_disk_with_remnants(self, inventory, thresholds):
        text = strip_colors(ViewComposer(inventory, thresholds).map_disk("hdisk4"))
        assert "VGDA remnants" in text
        assert "chpv -C hdisk4" in text


class TestFailedCommands:
    def test_silent_lsvg_does_not_invent_quorum_issue(self, thresholds):
        inventory = AixInventory(FixtureRunner(overrides={"lsvg rootvg": ""}))
        snap = StorageCollector(inventory, thresholds).collect().data
        rootvg = snap.volume_groups[0]
        assert rootvg.quorum_enabled is None

        quorum = evaluate_health(snap, thresholds).by_category(CATEGORY_QUORUM)
        assert [i.description for i in quorum] == ["datavg: Quorum Disabled"]

        text = strip_colors(render_health(snap, thresholds))
        assert "rootvg: Quorum" not in text
        assert "datavg: Quorum Disabled" in text

        composer = ViewComposer(inventory, thresholds)
        assert "[gray]●[white] rootvg     unknown" in composer.dashboard(snap)
        assert "Quorum: [gray]unknown" in composer.vg_details(snap)

    def test_silent_lspv_keeps_disk_in_its_vg(self, thresholds):
        inventory = AixInventory(FixtureRunner(overrides={"lspv hdisk0": ""}))
        text = strip_colors(ViewComposer(inventory, thresholds).map_disk("hdisk0"))
        assert "ready to use" not in text
        assert "mkvg" not in text
        assert "VOLUME GROUP" in text
        assert "rootvg" in text
        assert "hd4" in text


def _card_lines(text: str) -> list[str]:
    return [line for line in strip_colors(text).splitlines() if line.startswith(("  ┌", "  │", "  └"))]


@pytest.mark.parametrize("target", ["/", "/mnt/share", "hdisk0", "hdisk3"])
def test_card_borders_line_up(inventory, snapshot, thresholds, target):
    composer = ViewComposer(inventory, thresholds)
    if target.startswith("/"):
        text = composer.map_filesystem(snapshot, target)
    else:
        text = composer.map_disk(target)
    lines = _card_lines(text)
    assert lines
    assert {len(line) for line in lines} == {CARD_WIDTH + 4}
