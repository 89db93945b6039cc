import math

import pytest

from calcextract.diskmap import build_disk_map
from calcextract.exceptions import InvalidConfigurationError, MissingDataError


def test_exact_division():
    assert build_disk_map(["DB1", "DB2", "DB3", "DB4"], 2, {}) == ["DB1,DB2", "DB3,DB4"]


def test_short_final_group_is_kept():
    assert build_disk_map(["DB1", "DB2", "DB3"], 2, {}) == ["DB1,DB2", "DB3"]


def test_replacement_rules_applied():
    assert build_disk_map(["PROD-DB1"], 1, {"PROD-": "PRD_"}) == ["PRD_DB1"]


def test_per_volume_larger_than_list():
    assert build_disk_map(["DB1", "DB2"], 5) == ["DB1,DB2"]


@pytest.mark.parametrize("count,per_volume", [(1, 1), (7, 3), (9, 3), (10, 4), (12, 12)])
def test_disk_count_and_order(count, per_volume):
    names = [f"DB{i}" for i in range(count)]
    disks = build_disk_map(names, per_volume, {})

    assert len(disks) == math.ceil(count / per_volume)
    flattened = [name for disk in disks for name in disk.split(",")]
    assert flattened == names


def test_duplicates_and_order_preserved():
    names = ["DB3", "DB1", "DB3", "DB2"]
    assert build_disk_map(names, 3) == ["DB3,DB1,DB3", "DB2"]


@pytest.mark.parametrize("per_volume", [0, -1, True, "2", 1.5])
def test_invalid_per_volume(per_volume):
    with pytest.raises(InvalidConfigurationError) as exc_info:
        build_disk_map(["DB1", "DB2"], per_volume)
    assert exc_info.value.field == "DbPerVolume"


def test_empty_database_list():
    with pytest.raises(MissingDataError):
        build_disk_map([], 2)
