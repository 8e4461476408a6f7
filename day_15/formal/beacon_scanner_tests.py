"""
End-to-end tests for the beacon scanner on the example sensors.
"""

import os

import pytest

from software_reference.beacon_scanner import (
    BeaconScanner,
    NoGapFoundError,
    count_covered_positions,
    find_distress_gap,
    main,
    tuning_frequency,
)
from software_reference.range_merger import Range
from software_reference.sensors import Coord, Sensor, read_input


EXAMPLE_INPUT = os.path.join(os.path.dirname(__file__), "..", "testcases", "example_input.txt")


@pytest.fixture
def sensors():
    return read_input(EXAMPLE_INPUT)


def test_example_loads(sensors):
    assert len(sensors) == 14
    assert sensors[6] == Sensor(Coord(8, 7), Coord(2, 10))


def test_covered_positions_example(sensors):
    assert count_covered_positions(sensors, 10) == 26


def test_shared_beacon_subtracted_once():
    # Two sensors report (0, 0); a third one covers it
    sensors = [
        Sensor(Coord(-2, 0), Coord(0, 0)),
        Sensor(Coord(2, 0), Coord(0, 0)),
        Sensor(Coord(0, 3), Coord(0, 6)),
    ]
    # Row 0 covers [-4, 4]; the single beacon leaves 8 positions
    assert count_covered_positions(sensors, 0) == 8


def test_beacon_inside_other_sensor_reach():
    sensors = [
        Sensor(Coord(0, 0), Coord(3, 0)),
        Sensor(Coord(10, 0), Coord(12, 0)),
        Sensor(Coord(6, 0), Coord(6, 5)),
    ]
    # Full reach spans [-3, 12], minus the beacons at 3 and 12
    assert count_covered_positions(sensors, 0) == 14


def test_row_outside_every_reach(sensors):
    assert count_covered_positions(sensors, 1000) == 0


def test_distress_gap_example(sensors):
    gap = find_distress_gap(sensors, 20)
    assert gap == Coord(14, 11)
    assert tuning_frequency(gap) == 56000011


def test_gap_row_has_exactly_two_ranges(sensors):
    scanner = BeaconScanner(sensors)
    ranges = scanner.clamped_row(11, 20)

    assert len(ranges) == 2
    first, second = ranges
    assert second.first - first.last == 2
    assert first.last + 1 == 14


def test_rows_before_gap_are_fully_covered(sensors):
    scanner = BeaconScanner(sensors)
    for y in range(11):
        assert scanner.clamped_row(y, 20) == [Range(0, 20)]


def test_beacon_cells_do_not_count_as_gaps(sensors):
    # Trimming beacon (2, 10) splits row 10, yet the cell is occupied
    scanner = BeaconScanner(sensors)
    assert scanner.merged_row(10) == [Range(-2, 1), Range(3, 24)]
    assert len(scanner.clamped_row(10, 20)) == 1


def test_no_gap_found():
    sensors = [Sensor(Coord(5, 5), Coord(5, 25))]
    with pytest.raises(NoGapFoundError) as exc_info:
        find_distress_gap(sensors, 10)
    assert exc_info.value.limit == 10


def test_statistics(sensors):
    scanner = BeaconScanner(sensors)
    scanner.find_distress_gap(20)

    stats = scanner.get_statistics()
    assert stats['sensors'] == 14
    assert stats['beacons'] == 6
    assert stats['rows_scanned'] == 12
    assert stats['ranges_merged'] >= stats['rows_scanned']
    assert stats['ranges_generated'] >= stats['ranges_merged']


def test_tuning_frequency():
    assert tuning_frequency(Coord(0, 0)) == 0
    assert tuning_frequency(Coord(4_000_000, 4_000_000)) == 16_000_004_000_000


class TestMain:
    def test_example(self, capsys):
        assert main([EXAMPLE_INPUT, "--example"]) == 0
        assert capsys.readouterr().out.split() == ["26", "56000011"]

    def test_single_part(self, capsys):
        assert main([EXAMPLE_INPUT, "--row", "10", "--part", "1"]) == 0
        assert capsys.readouterr().out.split() == ["26"]

    def test_verbose_statistics(self, capsys):
        assert main([EXAMPLE_INPUT, "-e", "-v"]) == 0
        err = capsys.readouterr().err
        assert "Loaded 14 sensors" in err
        assert "gap at x=14, y=11" in err
        assert "Rows scanned: 13" in err

    def test_parse_error(self, tmp_path, capsys):
        bad = tmp_path / "bad.txt"
        bad.write_text("Sensor at x=1, y=2: closest beacon is at x=oops, y=3\n")

        assert main([str(bad), "-e"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("Error:")

    def test_no_gap_keeps_part_one(self, tmp_path, capsys):
        covered = tmp_path / "covered.txt"
        covered.write_text("Sensor at x=5, y=5: closest beacon is at x=5, y=25\n")

        assert main([str(covered), "--row", "5", "--limit", "10"]) == 1
        captured = capsys.readouterr()
        assert captured.out.split() == ["41"]
        assert "No uncovered position" in captured.err
