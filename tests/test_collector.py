from conftest import FixtureRunner

from aix_storage_gui.collectors.aix_inventory import AixInventory
from aix_storage_gui.collectors.storage_collector import StorageCollector
from aix_storage_gui.services.metrics import Thresholds


def test_collect_builds_snapshot(inventory):
    result = StorageCollector(inventory).collect()
    snap = result.data

    assert [vg.name for vg in snap.volume_groups] == ["rootvg", "datavg"]
    assert [pv.name for pv in snap.vg_disks["rootvg"]] == ["hdisk0", "hdisk1"]
    assert len(snap.logical_volumes) == 8
    assert {lv.vg_name for lv in snap.lvs_in("datavg")} == {"datavg"}
    assert [fs.mount for fs in snap.filesystems] == ["/", "/usr", "/var", "/data", "/mnt/share"]
    assert len(snap.paging_spaces) == 1
    assert len(snap.paths) == 6
    assert len(snap.disk_errors) == 4


def test_physical_volumes_merge_vg_paths_and_lun(inventory):
    snap = StorageCollector(inventory).collect().data
    pvs = {pv.name: pv for pv in snap.physical_volumes}

    hdisk0 = pvs["hdisk0"]
    assert (hdisk0.total_pps, hdisk0.free_pps, hdisk0.pp_size_mb) == (511, 255, 64)
    assert hdisk0.path_states == ("Enabled", "Enabled")
    assert hdisk0.lun_info == "IBM 2145"

    assert pvs["hdisk1"].paths_failed == 1

    assert [pv.name for pv in snap.unused_disks] == ["hdisk3", "hdisk4"]
    assert pvs["hdisk3"].size_mb == 20480
    assert pvs["hdisk4"].has_remnants
    assert pvs["hdisk0"].size_mb == 0


def test_lv_pp_size_comes_from_vg(inventory):
    snap = StorageCollector(inventory).collect().data
    fslv00 = next(lv for lv in snap.logical_volumes if lv.name == "fslv00")
    assert fslv00.pp_size_mb == 128
    assert fslv00.mount == "/data"


def test_warnings_and_status(inventory):
    result = StorageCollector(inventory, Thresholds(warn=85, crit=90)).collect()
    assert result.status == "WARN"
    assert result.warning_count == len(result.warnings) == 4
    joined = "\n".join(result.warnings)
    assert "datavg 95%" in joined
    assert "/var 90%" in joined
    assert "rootvg/hd9var" in joined
    assert "hdisk1 via fscsi1" in joined


def test_command_failures_are_collected_not_surfaced(inventory):
    result = StorageCollector(inventory).collect()
    # hdisk1 has no lsattr/lsmpio capture, so those calls failed quietly
    assert any(f.startswith("lsattr -El hdisk1") for f in result.command_failures)
    assert not any(w.startswith("Command failed") for w in result.warnings)


def test_surface_errors_turns_failures_into_warnings(inventory):
    result = StorageCollector(inventory, surface_errors=True).collect()
    assert result.command_failures
    surfaced = [w for w in result.warnings if w.startswith("Command failed: ")]
    assert len(surfaced) == len(result.command_failures)
    assert result.warning_count == 4 + len(surfaced)


def test_collect_with_nothing_installed_is_empty_but_ok():
    runner = FixtureRunner(overrides={k: "" for k in ("lsvg", "lspv", "lspath", "lsfs -c", "df -m", "lsps -a", "errpt -d H")})
    result = StorageCollector(AixInventory(runner)).collect()
    snap = result.data
    assert result.status == "OK"
    assert snap.volume_groups == []
    assert snap.physical_volumes == []
    assert snap.filesystems == []


def test_inventory_issues_expected_commands(runner, inventory):
    inventory.filesystems()
    inventory.paths("hdisk0")
    inventory.io_stats()
    assert runner.calls == [
        ["lsfs", "-c"],
        ["df", "-m"],
        ["lspath", "-l", "hdisk0"],
        ["iostat", "-d", "1", "1"],
    ]
