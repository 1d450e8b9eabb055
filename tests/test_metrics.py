import pytest

from aix_storage_gui.services.metrics import (
    LEVEL_CRITICAL,
    LEVEL_OK,
    LEVEL_WARNING,
    Thresholds,
    classify,
    human_size,
    mirror_copies,
    mirror_label,
    parse_percent,
    used_percent,
)

_RANK = {LEVEL_OK: 0, LEVEL_WARNING: 1, LEVEL_CRITICAL: 2}


def test_used_percent_bounds():
    for total in (1, 7, 100, 1022):
        assert used_percent(0, total) == 0
        assert used_percent(total, total) == 100
        for used in range(0, total + 1, max(total // 10, 1)):
            assert 0 <= used_percent(used, total) <= 100


@pytest.mark.parametrize("used", [0, 5, 1000, -3])
def test_used_percent_zero_total_guard(used):
    assert used_percent(used, 0) == 0


def test_used_percent_clamps_out_of_range_input():
    assert used_percent(150, 100) == 100
    assert used_percent(-5, 100) == 0
    assert used_percent(10, -1) == 0


def test_used_percent_floors():
    assert used_percent(380, 400) == 95
    assert used_percent(511, 1022) == 50
    assert used_percent(2, 3) == 66


def test_classify_boundaries():
    assert classify(84, 85, 90) == LEVEL_OK
    assert classify(85, 85, 90) == LEVEL_WARNING
    assert classify(89, 85, 90) == LEVEL_WARNING
    assert classify(90, 85, 90) == LEVEL_CRITICAL
    assert classify(100, 85, 90) == LEVEL_CRITICAL


def test_classify_is_monotonic():
    levels = [_RANK[classify(p, 80, 90)] for p in range(0, 101)]
    assert levels == sorted(levels)


def test_thresholds_classify_uses_its_own_levels():
    th = Thresholds(warn=50, crit=60)
    assert th.classify(55) == LEVEL_WARNING
    assert Thresholds().classify(55) == LEVEL_OK


def test_human_size():
    assert human_size(1023) == "1023M"
    assert human_size(1024) == "1.0G"
    assert human_size(2560) == "2.5G"
    assert human_size(51.2) == "51M"
    assert human_size(1023.6) == "1024M"


def test_mirror_copies():
    assert mirror_copies(allocated=200, logical=100) == 2
    assert mirror_copies(allocated=100, logical=0) == 1
    assert mirror_copies(allocated=300, logical=100) == 3


def test_mirror_label():
    assert mirror_label(1) == "single"
    assert mirror_label(2) == "2-way"
    assert mirror_label(3) == "3-way"


def test_parse_percent():
    assert parse_percent("50%") == 50
    assert parse_percent(" 7% ") == 7
    assert parse_percent("-") == 0
