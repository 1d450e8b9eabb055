from __future__ import annotations

from pathlib import Path

import pytest

from aix_storage_gui.collectors.aix_inventory import AixInventory
from aix_storage_gui.collectors.storage_collector import StorageCollector
from aix_storage_gui.models.snapshot import StorageSnapshot
from aix_storage_gui.services.metrics import Thresholds

FIXTURES = Path(__file__).parent / "fixtures"


def fixture_name(cmd: list[str]) -> str:
    """``lsvg -l rootvg`` -> ``lsvg_l_rootvg.txt``."""
    return "_".join(part.lstrip("-") for part in cmd) + ".txt"


class FixtureRunner:
    """Command runner that answers from tests/fixtures; unknown commands fail like a missing tool."""

    def __init__(self, overrides: dict[str, str] | None = None) -> None:
        self.overrides = overrides or {}
        self.calls: list[list[str]] = []
        self.failures: list[str] = []

    def __call__(self, cmd: list[str]) -> str:
        self.calls.append(list(cmd))
        key = " ".join(cmd)
        if key in self.overrides:
            return self.overrides[key]
        p = FIXTURES / fixture_name(cmd)
        if not p.exists():
            self.failures.append(f"{key}: rc=1")
            return ""
        return p.read_text(encoding="utf-8")

    def take_failures(self) -> list[str]:
        out, self.failures = self.failures, []
        return out


def read_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture
def runner() -> FixtureRunner:
    return FixtureRunner()


@pytest.fixture
def inventory(runner: FixtureRunner) -> AixInventory:
    return AixInventory(runner)


@pytest.fixture
def thresholds() -> Thresholds:
    return Thresholds(warn=85, crit=90)


@pytest.fixture
def snapshot(inventory: AixInventory, thresholds: Thresholds) -> StorageSnapshot:
    return StorageCollector(inventory, thresholds).collect().data
