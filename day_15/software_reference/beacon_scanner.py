#!/usr/bin/env python3
"""
Beacon Scanner - Row coverage count and distress beacon search

Part One: count the positions of one row where a beacon cannot be, i.e.
covered by some sensor and not already holding a known beacon.

Part Two: find the only position inside [0, limit] x [0, limit] that no
sensor covers and report its tuning frequency x * 4000000 + y.

Algorithm:
1. For every row of interest, build each sensor's covered interval
2. Sort the intervals (start ascending, end descending)
3. Merge overlapping or adjacent intervals in one linear sweep
4. Part One: sum merged lengths minus distinct beacons inside them
5. Part Two: clamp merged intervals to the search square; the first row
   left with more than one interval has its gap right after the first one
"""

import sys
import time
from typing import Iterable, List, Optional

from software_reference.range_merger import (
    Range,
    calculate_total_coverage,
    join_all,
    range_order,
)
from software_reference.sensors import Coord, Sensor, SensorParseError, read_sensors


EXAMPLE_ROW = 10
FULL_ROW = 2_000_000
EXAMPLE_LIMIT = 20
FULL_LIMIT = 4_000_000
TUNING_MULTIPLIER = 4_000_000


class NoGapFoundError(Exception):
    """The search square has no uncovered position."""

    def __init__(self, limit):
        super().__init__(f"No uncovered position in [0, {limit}] x [0, {limit}]")
        self.limit = limit


def tuning_frequency(position: Coord) -> int:
    return position.x * TUNING_MULTIPLIER + position.y


class BeaconScanner:
    """Coverage queries over a fixed set of sensors."""

    def __init__(self, sensors: Iterable[Sensor]):
        self.sensors = tuple(sensors)
        self.beacons = frozenset(s.nearest_beacon for s in self.sensors)

        # Per-row work buffer, reused across rows
        self._row_ranges: List[Range] = []

        self.rows_scanned = 0
        self.ranges_generated = 0
        self.ranges_merged = 0

    def merged_row(self, row: int, trim_beacons: bool = True) -> List[Range]:
        """
        Merged coverage of one row.

        Args:
            row: Row to inspect
            trim_beacons: Exclude each sensor's own beacon from its interval

        Returns:
            list: Maximal covered ranges of the row, ascending
        """
        buf = self._row_ranges
        buf.clear()

        for sensor in self.sensors:
            r = sensor.row_range(row) if trim_beacons else sensor.reach_range(row)
            if r is not None:
                buf.append(r)

        buf.sort(key=range_order)
        merged = list(join_all(buf))

        self.rows_scanned += 1
        self.ranges_generated += len(buf)
        self.ranges_merged += len(merged)

        return merged

    def covered_positions(self, row: int) -> int:
        """
        Count positions of row where no undetected beacon can be.

        Returns:
            int: Merged coverage minus the distinct known beacons in it
        """
        merged = self.merged_row(row)
        total = calculate_total_coverage(merged)

        for beacon in self.beacons:
            if beacon.y == row and any(r.contains(beacon.x) for r in merged):
                total -= 1

        return total

    def clamped_row(self, row: int, limit: int) -> List[Range]:
        """Merged full-reach coverage of row cut down to [0, limit]."""
        clamped = []
        for r in self.merged_row(row, trim_beacons=False):
            r = r.clamp(0, limit)
            if r is not None:
                clamped.append(r)
        return clamped

    def find_distress_gap(self, limit: int) -> Coord:
        """
        Find the uncovered position inside [0, limit] x [0, limit].

        Known beacons are occupied cells, so every sensor's full reach is
        used here; only a column no sensor reaches can split a row.

        Returns:
            Coord: The gap on the first row with more than one interval

        Raises:
            NoGapFoundError: Every row of the square is fully covered
        """
        for y in range(limit + 1):
            ranges = self.clamped_row(y, limit)
            if len(ranges) > 1:
                return Coord(ranges[0].last + 1, y)

        raise NoGapFoundError(limit)

    def get_statistics(self) -> dict:
        """Return scan statistics."""
        return {
            'sensors': len(self.sensors),
            'beacons': len(self.beacons),
            'rows_scanned': self.rows_scanned,
            'ranges_generated': self.ranges_generated,
            'ranges_merged': self.ranges_merged,
        }


def count_covered_positions(sensors: Iterable[Sensor], row: int) -> int:
    return BeaconScanner(sensors).covered_positions(row)


def find_distress_gap(sensors: Iterable[Sensor], limit: int) -> Coord:
    return BeaconScanner(sensors).find_distress_gap(limit)


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line interface for the beacon scanner."""
    import argparse

    parser = argparse.ArgumentParser(
        description='Count covered positions on a row and locate the distress beacon'
    )
    parser.add_argument('input_file', nargs='?', type=argparse.FileType('r'),
                        default=sys.stdin,
                        help='Input file with one sensor per line (default: stdin)')
    parser.add_argument('--example', '-e', action='store_true',
                        help=f'Use the example row ({EXAMPLE_ROW}) and limit ({EXAMPLE_LIMIT})')
    parser.add_argument('--row', type=int, default=None,
                        help=f'Row for part one (default: {FULL_ROW})')
    parser.add_argument('--limit', type=int, default=None,
                        help=f'Search square bound for part two (default: {FULL_LIMIT})')
    parser.add_argument('--part', type=int, choices=(1, 2), default=None,
                        help='Only run one part')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Print scan statistics')
    args = parser.parse_args(argv)

    row = args.row if args.row is not None else (EXAMPLE_ROW if args.example else FULL_ROW)
    limit = args.limit if args.limit is not None else (EXAMPLE_LIMIT if args.example else FULL_LIMIT)

    try:
        sensors = read_sensors(args.input_file)
    except SensorParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Loaded {len(sensors)} sensors", file=sys.stderr)

    scanner = BeaconScanner(sensors)
    status = 0

    if args.part in (None, 1):
        start_time = time.time()
        print(scanner.covered_positions(row))
        if args.verbose:
            print(f"  Part one (row {row}): {time.time() - start_time:.3f}s", file=sys.stderr)

    if args.part in (None, 2):
        start_time = time.time()
        try:
            gap = scanner.find_distress_gap(limit)
        except NoGapFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            status = 1
        else:
            print(tuning_frequency(gap))
            if args.verbose:
                print(f"  Part two: gap at x={gap.x}, y={gap.y} "
                      f"({time.time() - start_time:.3f}s)", file=sys.stderr)

    if args.verbose:
        stats = scanner.get_statistics()
        print(f"\nStatistics:", file=sys.stderr)
        print(f"  Sensors: {stats['sensors']}", file=sys.stderr)
        print(f"  Beacons: {stats['beacons']}", file=sys.stderr)
        print(f"  Rows scanned: {stats['rows_scanned']}", file=sys.stderr)
        print(f"  Ranges generated: {stats['ranges_generated']}", file=sys.stderr)
        print(f"  Ranges merged: {stats['ranges_merged']}", file=sys.stderr)

    return status


if __name__ == '__main__':
    sys.exit(main())
