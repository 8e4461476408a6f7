"""
Sensors - Coordinates, Manhattan reach and per-row coverage

Each sensor knows the closest beacon to it; nothing inside that Manhattan
distance can be another beacon. On a given row the covered area of one
sensor is a single contiguous interval of columns.

Input format, one sensor per line:
    Sensor at x=<int>, y=<int>: closest beacon is at x=<int>, y=<int>
"""

from dataclasses import dataclass
from functools import cached_property
from typing import Iterable, List, Optional

from software_reference.range_merger import Range


SENSOR_PREFIX = "Sensor at "
BEACON_PREFIX = "closest beacon is at "


class SensorParseError(ValueError):
    """Base class for malformed sensor input."""


class BadInputLineError(SensorParseError):
    def __init__(self, line):
        super().__init__(f"Bad input line {line!r}")
        self.line = line


class BadCoordError(SensorParseError):
    def __init__(self, text):
        super().__init__(f"Bad coordinate format {text!r}")
        self.text = text


class BadNumberError(SensorParseError):
    def __init__(self, text, reason):
        super().__init__(f"{reason}: bad number on coordinate {text!r}")
        self.text = text


@dataclass(frozen=True, order=True)
class Coord:
    x: int
    y: int

    def distance_to(self, other: "Coord") -> int:
        return manhattan_distance(self, other)


def manhattan_distance(a: Coord, b: Coord) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


@dataclass(frozen=True)
class Sensor:
    """A sensor and the beacon closest to it."""

    position: Coord
    nearest_beacon: Coord

    @cached_property
    def reach(self) -> int:
        """Manhattan distance to the closest beacon."""
        return manhattan_distance(self.position, self.nearest_beacon)

    def reach_range(self, row: int) -> Optional[Range]:
        """
        Columns of row within reach of this sensor, beacon included.

        Returns:
            Range centered on the sensor column, or None if the row is
            farther away than the reach
        """
        half_width = self.reach - abs(row - self.position.y)
        if half_width < 0:
            return None
        return Range(self.position.x - half_width, self.position.x + half_width)

    def row_range(self, row: int) -> Optional[Range]:
        """
        Columns of row covered by this sensor, its own beacon excluded.

        The beacon always sits on the border of the sensor's reach, so when
        it lies on this row it is one of the two interval ends and is
        trimmed off that end.

        Returns:
            Range, or None if the row is out of reach or the only covered
            cell was the beacon itself
        """
        reach = self.reach_range(row)
        if reach is None or self.nearest_beacon.y != row:
            return reach

        first, last = reach.first, reach.last
        if self.nearest_beacon.x == first:
            first += 1
        if self.nearest_beacon.x == last:
            last -= 1

        return Range.between(first, last)


def parse_number(text, field):
    try:
        return int(field)
    except ValueError as e:
        raise BadNumberError(text, e) from e


def parse_coord(text: str) -> Coord:
    """Parse 'x=<int>, y=<int>'."""
    x, sep, y = text.partition(", ")
    if not sep or not x.startswith("x=") or not y.startswith("y="):
        raise BadCoordError(text)

    return Coord(parse_number(text, x[2:]), parse_number(text, y[2:]))


def parse_sensor(line: str) -> Sensor:
    """
    Parse one sensor line.

    Raises:
        BadInputLineError: Literal prefixes or ': ' separator missing
        BadCoordError: Coordinate not shaped as 'x=.., y=..'
        BadNumberError: Coordinate value is not an integer
    """
    sensor, sep, beacon = line.partition(": ")
    if not sep or not sensor.startswith(SENSOR_PREFIX) or not beacon.startswith(BEACON_PREFIX):
        raise BadInputLineError(line)

    return Sensor(
        position=parse_coord(sensor[len(SENSOR_PREFIX):]),
        nearest_beacon=parse_coord(beacon[len(BEACON_PREFIX):]),
    )


def read_sensors(lines: Iterable[str]) -> List[Sensor]:
    """Parse every non-blank line into a Sensor."""
    sensors = []
    for line in lines:
        line = line.strip()
        if line:
            sensors.append(parse_sensor(line))
    return sensors


def read_input(filename):
    """
    Read input file containing one sensor per line.

    Args:
        filename: Path to input file

    Returns:
        list: Sensor records in file order
    """
    with open(filename) as f:
        return read_sensors(f)
