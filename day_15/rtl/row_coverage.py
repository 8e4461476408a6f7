"""
Row Coverage - Hardware RTL pipeline for one sensor row

System Architecture:
    Sorted row ranges -> RangeMerger -> GapDetector -> done / found / gap_x
                                   \\-> total_coverage

Sorting stays on the host: the software reference sorts each row's ranges
with range_order and streams them in, one pair per cycle. The pipeline
returns to idle after every row, so a whole search square is processed by
streaming its rows back to back.
"""

from amaranth import *
from rtl.gap_detector import GapDetector
from rtl.range_merger import RangeMerger


class RowCoverage(Elaboratable):
    """
    Merger and gap detector chained for one row at a time
    """

    def __init__(self, width=32, limit=20):
        self.width = width
        self.limit = limit

        # Input interface
        self.start_in = Signal(signed(width))
        self.end_in = Signal(signed(width))
        self.valid_in = Signal()
        self.last_in = Signal()
        self.ready = Signal()

        # Merged stream (observable for benches)
        self.start_out = Signal(signed(width))
        self.end_out = Signal(signed(width))
        self.valid_out = Signal()

        # Row results
        self.total_coverage = Signal(width + 1)
        self.done = Signal()
        self.found = Signal()
        self.gap_x = Signal(signed(width))

    def elaborate(self, platform):
        m = Module()

        merger = RangeMerger(width=self.width, compute_coverage=True)
        detector = GapDetector(width=self.width, limit=self.limit)

        m.submodules.merger = merger
        m.submodules.detector = detector

        # Input to merger
        m.d.comb += [
            merger.start_in.eq(self.start_in),
            merger.end_in.eq(self.end_in),
            merger.valid_in.eq(self.valid_in),
            merger.last_in.eq(self.last_in),
            self.ready.eq(merger.ready),
        ]

        # Merger to detector
        m.d.comb += [
            detector.start_in.eq(merger.start_out),
            detector.end_in.eq(merger.end_out),
            detector.valid_in.eq(merger.valid_out),
            detector.last_in.eq(merger.last_out),
        ]

        # Outputs
        m.d.comb += [
            self.start_out.eq(merger.start_out),
            self.end_out.eq(merger.end_out),
            self.valid_out.eq(merger.valid_out),
            self.total_coverage.eq(merger.total_coverage),
            self.done.eq(detector.done),
            self.found.eq(detector.found),
            self.gap_x.eq(detector.gap_x),
        ]

        return m
