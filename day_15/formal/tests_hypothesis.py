"""
Property-based tests for the sensor coverage engine using Hypothesis.

Checks the invariants of the range merger (gap-aware gluing, ordering,
idempotence) and of the per-sensor row geometry against brute force.
"""

import pytest
from hypothesis import given, strategies as st, assume, settings, HealthCheck
from hypothesis.strategies import lists, integers

from software_reference.range_merger import (
    Range,
    calculate_total_coverage,
    merge_all_ranges,
    range_order,
    touches,
)
from software_reference.sensors import Coord, Sensor, manhattan_distance
from software_reference.beacon_scanner import BeaconScanner


@st.composite
def valid_range(draw):
    """Generate a valid range where first <= last."""
    first = draw(integers(min_value=-1000, max_value=1000))
    last = draw(integers(min_value=first, max_value=first + 200))
    return Range(first, last)


coords = st.builds(Coord, integers(min_value=-50, max_value=50), integers(min_value=-50, max_value=50))
ranges_strategy = lists(valid_range(), min_size=0, max_size=60)


@st.composite
def sensor(draw):
    position = draw(coords)
    beacon = draw(coords)
    assume(position != beacon)
    return Sensor(position, beacon)


def ranges_to_set(ranges):
    """Convert ranges to the set of all integers covered."""
    result = set()
    for r in ranges:
        result.update(range(r.first, r.last + 1))
    return result


# Property 1: Distance symmetry
@given(coords, coords)
def test_distance_symmetry(a, b):
    assert manhattan_distance(a, b) == manhattan_distance(b, a)
    assert a.distance_to(b) == manhattan_distance(a, b)


# Property 2: Merged ranges cover exactly the original integers
@given(ranges_strategy)
@settings(max_examples=500)
def test_coverage_preservation(ranges):
    merged = merge_all_ranges(ranges)
    assert ranges_to_set(merged) == ranges_to_set(ranges)
    assert calculate_total_coverage(merged) == len(ranges_to_set(ranges))


# Property 3: Output sorted, each pair separated by at least one missing integer
@given(ranges_strategy)
def test_output_separated(ranges):
    merged = merge_all_ranges(ranges)
    for current, nxt in zip(merged, merged[1:]):
        assert current.last + 1 < nxt.first, f"Touching output: {merged}"


# Property 4: Idempotence
@given(ranges_strategy)
def test_idempotence(ranges):
    merged_once = merge_all_ranges(ranges)
    assert merge_all_ranges(merged_once) == merged_once


# Property 5: Order independence
@given(st.data(), ranges_strategy)
def test_order_independence(data, ranges):
    shuffled = data.draw(st.permutations(ranges))
    assert merge_all_ranges(shuffled) == merge_all_ranges(ranges)


# Property 6: Ordering matches the sort key
@given(valid_range(), valid_range())
def test_ordering_matches_key(a, b):
    assert (a < b) == (range_order(a) < range_order(b))
    assert (a == b) == (range_order(a) == range_order(b))


# Property 7: Contained range sorts after its container on a shared start
@given(integers(min_value=-1000, max_value=1000), integers(min_value=0, max_value=100),
       integers(min_value=1, max_value=100))
def test_longer_range_first_on_tie(first, length, extra):
    short = Range(first, first + length)
    long = Range(first, first + length + extra)
    assert long < short
    assert sorted([short, long]) == [long, short]


# Property 8: Glue predicate boundary
@given(valid_range(), integers(min_value=0, max_value=50), integers(min_value=0, max_value=50))
def test_glue_boundary(r, gap, length):
    nxt = Range(r.last + 1 + gap, r.last + 1 + gap + length)
    merged = merge_all_ranges([r, nxt])
    if gap == 0:
        assert touches(r, nxt)
        assert merged == [Range(r.first, nxt.last)]
    else:
        assert not touches(r, nxt)
        assert merged == [r, nxt]


# Property 9: Row range agrees with brute-force Manhattan coverage
@given(sensor(), integers(min_value=-120, max_value=120))
@settings(max_examples=500)
def test_row_range_matches_brute_force(s, row):
    reach = s.reach
    expected = {
        x for x in range(s.position.x - reach, s.position.x + reach + 1)
        if manhattan_distance(s.position, Coord(x, row)) <= reach
    }
    expected.discard(s.nearest_beacon.x if s.nearest_beacon.y == row else None)

    r = s.row_range(row)
    if r is None:
        assert not expected
    else:
        assert set(range(r.first, r.last + 1)) == expected


# Property 10: Row range is None beyond reach and 2r+1 wide on the sensor row
@given(sensor(), integers(min_value=1, max_value=50))
def test_row_range_extent(s, beyond):
    assert s.row_range(s.position.y + s.reach + beyond) is None
    assert s.row_range(s.position.y - s.reach - beyond) is None

    full = s.reach_range(s.position.y)
    assert len(full) == 2 * s.reach + 1
    if s.nearest_beacon.y != s.position.y:
        assert s.row_range(s.position.y) == full
    else:
        assert len(s.row_range(s.position.y)) == 2 * s.reach


# Property 11: Covered count equals brute force over the row
@given(lists(sensor(), min_size=1, max_size=6), integers(min_value=-60, max_value=60))
@settings(max_examples=200, suppress_health_check=[HealthCheck.filter_too_much])
def test_covered_positions_brute_force(sensors, row):
    beacons = {s.nearest_beacon for s in sensors}
    covered = set()
    for s in sensors:
        for x in range(s.position.x - s.reach, s.position.x + s.reach + 1):
            if manhattan_distance(s.position, Coord(x, row)) <= s.reach:
                covered.add(x)
    covered -= {b.x for b in beacons if b.y == row}

    assert BeaconScanner(sensors).covered_positions(row) == len(covered)


# Concrete cases
def test_empty_input():
    assert merge_all_ranges([]) == []


def test_adjacent_ranges_merge():
    assert merge_all_ranges([Range(1, 20), Range(21, 30)]) == [Range(1, 30)]


def test_one_cell_gap_stays_open():
    assert merge_all_ranges([Range(1, 19), Range(21, 30)]) == [Range(1, 19), Range(21, 30)]


def test_empty_range_rejected():
    with pytest.raises(ValueError):
        Range(5, 4)
    assert Range.between(5, 4) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
