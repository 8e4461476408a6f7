"""
Gap Detector Hardware Implementation using Amaranth HDL

Watches the merged range stream of one row, clamps every range to the
search window [0, limit] and counts how many non-empty ranges remain. A
row that keeps two or more ranges inside the window holds the uncovered
column right after the first one.

Timing:
    done pulses one cycle after the range flagged with last_in; found and
    gap_x hold their value until the next row completes.
"""

from amaranth import *


class GapDetector(Elaboratable):
    """
    Clamp merged ranges to [0, limit] and flag rows with a gap.

    Ports:
        Input:
            - start_in / end_in: Merged range (signed)
            - valid_in: Input data valid signal
            - last_in: Range is the last one of the row

        Output:
            - done: Row finished (one cycle pulse)
            - found: Row had more than one range inside the window
            - gap_x: Column right after the first clamped range
    """

    def __init__(self, width=32, limit=20):
        self.width = width
        self.limit = limit

        # Input interface
        self.start_in = Signal(signed(width))
        self.end_in = Signal(signed(width))
        self.valid_in = Signal()
        self.last_in = Signal()

        # Output interface
        self.done = Signal()
        self.found = Signal()
        self.gap_x = Signal(signed(width))

    def elaborate(self, platform):
        m = Module()

        clamped_start = Signal(signed(self.width))
        clamped_end = Signal(signed(self.width))
        non_empty = Signal()

        m.d.comb += [
            clamped_start.eq(Mux(self.start_in < 0, 0, self.start_in)),
            clamped_end.eq(Mux(self.end_in > self.limit, self.limit, self.end_in)),
            non_empty.eq(clamped_start <= clamped_end),
        ]

        # Saturating count of in-window ranges seen on this row
        count = Signal(range(3))
        next_count = Signal(range(3))
        first_end = Signal(signed(self.width))

        m.d.comb += next_count.eq(count)
        with m.If(self.valid_in & non_empty & (count < 2)):
            m.d.comb += next_count.eq(count + 1)

        m.d.sync += self.done.eq(0)

        with m.If(self.valid_in):
            m.d.sync += count.eq(next_count)

            with m.If(non_empty & (count == 0)):
                m.d.sync += first_end.eq(clamped_end)

            with m.If(self.last_in):
                m.d.sync += [
                    self.done.eq(1),
                    self.found.eq(next_count > 1),
                    self.gap_x.eq(first_end + 1),
                    count.eq(0),
                ]

        return m
